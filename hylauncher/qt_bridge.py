#===============================================================================
#  HYMetaLab_Launcher | qt_bridge.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-17
#  Last Update : 2026-10-17
#
#  Summary
#  -------
#  Moves synchronizer events and finished futures from the sync loop thread
#  onto the Qt GUI thread (queued signal delivery).
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import concurrent.futures
from typing import Callable

from PySide6.QtCore import QObject, Signal, Slot

from .synchronizer import RegistrySynchronizer


class SyncBridge(QObject):
    # event name, SyncSnapshot
    changed = Signal(str, object)
    # callback, finished future
    _done = Signal(object, object)

    def __init__(self, sync: RegistrySynchronizer, parent=None):
        super().__init__(parent)
        self.sync = sync
        self._done.connect(self._deliver)
        sync.add_listener(self._on_sync_event)

    def _on_sync_event(self, event: str) -> None:
        # runs on the loop thread: take the snapshot there, then hop threads
        self.changed.emit(event, self.sync.snapshot())

    def watch(self, future: concurrent.futures.Future, callback: Callable[[concurrent.futures.Future], None]) -> None:
        """Call `callback(future)` on the GUI thread once `future` is done."""
        future.add_done_callback(lambda f: self._done.emit(callback, f))

    @Slot(object, object)
    def _deliver(self, callback, future) -> None:
        callback(future)

    def detach(self) -> None:
        self.sync.remove_listener(self._on_sync_event)
