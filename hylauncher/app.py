#===============================================================================
#  HYMetaLab_Launcher | app.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-17
#  Last Update : 2026-10-17
#
#  Summary
#  -------
#  Application bootstrap: logging, settings, registry, synchronizer, window.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import List, Optional

from PySide6.QtWidgets import QApplication

from .async_runner import AsyncRunner
from .constants import APP_TITLE, AUTOSTART_FLAG, LOG_LEVEL_ENV_VAR, STATE_FILE_NAME, data_dir
from .main_window import MainWindow
from .order_ledger import OrderLedger
from .registry import LocalRegistry
from .settings import load_config, load_visual_settings
from .state import StateStore
from .synchronizer import RegistrySynchronizer

logger = logging.getLogger("hylauncher")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="hylauncher", description=APP_TITLE)
    parser.add_argument(AUTOSTART_FLAG, action="store_true", help="start hidden in the system tray")
    parser.add_argument(
        "--log-level",
        default=os.environ.get(LOG_LEVEL_ENV_VAR, "INFO"),
        help="DEBUG, INFO, WARNING, ... (default: $%s or INFO)" % LOG_LEVEL_ENV_VAR,
    )
    # Qt consumes its own argv; ignore anything we don't know
    args, _unknown = parser.parse_known_args(argv)
    return args


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv if argv is not None else sys.argv[1:])
    configure_logging(args.log_level)

    app = QApplication(sys.argv)
    app.setApplicationName(APP_TITLE)

    store = StateStore(data_dir() / STATE_FILE_NAME)
    config = load_config()
    visual = load_visual_settings(store)

    sync = RegistrySynchronizer(LocalRegistry(), OrderLedger(store), icons_enabled=visual.app_icons)
    runner = AsyncRunner()
    runner.start()

    w = MainWindow(runner, sync, store, config, visual)
    app.setQuitOnLastWindowClosed(w.tray is None)
    w.resize(1000, 720)
    if not (args.autostart and w.tray is not None):
        w.show()

    runner.submit(sync.start())
    logger.info("%s started", APP_TITLE)
    return app.exec()
