#===============================================================================
#  HYMetaLab_Launcher | launcher.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-02-10
#  Last Update : 2026-10-17
#
#  Summary
#  -------
#  Opens registered app bundles with the platform opener. The launcher does not
#  keep track of the started process; running state comes from process_monitor.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import os
import subprocess
import sys
from typing import List

from .errors import RegistryError
from .fs_discovery import normalize_app_path


def opener_command(path: str) -> List[str]:
    if sys.platform == "darwin":
        return ["open", path]
    return ["xdg-open", path]


def launch_bundle(raw_path: str) -> None:
    """Launch an app bundle. Raises RegistryError with the opener's stderr on failure."""
    path = normalize_app_path(raw_path)

    if sys.platform.startswith("win"):
        try:
            os.startfile(path)  # type: ignore[attr-defined]
        except OSError as e:
            raise RegistryError(f"Failed to launch app at {path}: {e}") from e
        return

    try:
        proc = subprocess.run(opener_command(path), capture_output=True, text=True)
    except OSError as e:
        raise RegistryError(f"Failed to execute open command: {e}") from e

    if proc.returncode != 0:
        stderr = (proc.stderr or "").strip()
        if stderr:
            raise RegistryError(f"Failed to launch app at {path}: {stderr}")
        raise RegistryError(f"Failed to launch app at {path}")
