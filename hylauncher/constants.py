#===============================================================================
#  HYMetaLab_Launcher | constants.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-02-10
#  Last Update : 2026-10-17
#
#  Summary
#  -------
#  Central place for UI sizing, theme, intervals, and file/folder naming conventions.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import os
from pathlib import Path

from PySide6.QtCore import QSize

APP_TITLE = "HYMetaLab Launcher"

# Everything the launcher persists lives under ~/.hymetalab (override with HYLAUNCHER_HOME)
HOME_ENV_VAR = "HYLAUNCHER_HOME"
DATA_DIR_NAME = ".hymetalab"
CONFIG_DIR_NAME = "config"
APPS_FILE_NAME = "apps.json"
CONFIG_FILE_NAME = "global.json"
STATE_FILE_NAME = "launcher_state.json"

# Keys inside launcher_state.json
APP_ORDER_KEY = "registered_app_order"
VISUAL_SETTINGS_KEY = "visual_settings"

# Registered apps are macOS bundles; the identity must end with this suffix
APP_BUNDLE_SUFFIX = ".app"
SIDECAR_PROCESS_MARKER = "/backend-sidecar"
ICON_PNG_SIZE = 128

STATUS_REFRESH_INTERVAL_S = 5.0

AUTOSTART_FLAG = "--autostart"
LOG_LEVEL_ENV_VAR = "HYLAUNCHER_LOG_LEVEL"


def data_dir() -> Path:
    override = os.environ.get(HOME_ENV_VAR, "").strip()
    if override:
        return Path(override)
    return Path.home() / DATA_DIR_NAME


def config_dir() -> Path:
    return data_dir() / CONFIG_DIR_NAME


def install_dirs() -> list[Path]:
    """Folders scanned (one level deep) when discovering installed apps."""
    return [Path("/Applications"), Path.home() / "Applications"]


# --- Metro / Windows Phone style theme ---
METRO_BG = "#101010"
METRO_BG_LIGHT = "#f3f3f3"

METRO_TILE_COLORS = [
    "#0078D7",  # blue
    "#00B294",  # teal
    "#E81123",  # red
    "#FFB900",  # yellow
    "#8764B8",  # purple
    "#2D7D9A",  # steel
    "#107C10",  # green
    "#5C2D91",  # deep purple
]

RUNNING_DOT = "#3ddc84"
ASSUMED_DOT = "#FFB900"
STOPPED_DOT = "#5a5a5a"

TILE_SIZE = QSize(150, 120)
TILE_ICON_PX = 40
GRID_SIZE = QSize(162, 132)
