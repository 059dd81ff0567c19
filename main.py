#===============================================================================
#  HYMetaLab_Launcher  |  Desktop Application Launcher
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-02-10
#  Last Update : 2026-10-17
#
#  Summary
#  -------
#  A small launcher that keeps a list of registered applications (macOS .app
#  bundles) and presents them as reorderable tiles.
#  Supports:
#    - Registering apps by path or from a scan of /Applications, ~/Applications
#    - Launching apps and showing which ones are currently running
#    - App icons read from the bundles (letter glyph fallback)
#    - A persistent, user-chosen tile order that survives adds/removes
#    - Tray icon; --autostart starts hidden
#
#  Files
#  -----
#    ~/.hymetalab/config/apps.json      -> registered apps
#    ~/.hymetalab/config/global.json    -> profile (name, AI mode, theme)
#    ~/.hymetalab/launcher_state.json   -> tile order + visual settings
#
#  Copyright & License Notes
#  -------------------------
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#
#  This source code is provided "AS IS", without warranty of any kind, express
#  or implied, including but not limited to the warranties of merchantability,
#  fitness for a particular purpose, and noninfringement.
#
#  Permission Notice (Personal/Internal Use)
#  -----------------------------------------
#  You may use, copy, and modify this software for personal or internal use.
#  Redistribution or public release should include this header and credit the
#  author. If you plan to open-source this project, consider replacing this
#  section with an OSI-approved license (e.g., MIT) for clarity.
#
#  Third-Party Components
#  ----------------------
#  This project may use third-party libraries (e.g., PySide6, psutil, Pillow)
#  which are licensed separately by their respective authors. Ensure compliance
#  with their license terms when distributing this software.
#===============================================================================

import sys

from hylauncher.app import main


if __name__ == "__main__":
    sys.exit(main())
