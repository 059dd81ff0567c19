#===============================================================================
#  HYMetaLab_Launcher | discover_dialog.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-17
#  Last Update : 2026-10-17
#
#  Summary
#  -------
#  "Discover Apps" dialog: add an app by path, or scan the install folders and
#  register any of the apps that are not registered yet.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

from typing import List

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QDialog,
    QFileDialog,
    QFormLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QListWidget,
    QListWidgetItem,
    QPushButton,
    QVBoxLayout,
)

from .async_runner import AsyncRunner
from .constants import APP_BUNDLE_SUFFIX
from .errors import LauncherError
from .models import RegisteredApp
from .qt_bridge import SyncBridge
from .synchronizer import SyncSnapshot


def filter_candidates(candidates: List[RegisteredApp], registered_keys: set, query: str) -> List[RegisteredApp]:
    q = query.strip().lower()
    out = []
    for c in candidates:
        if c.key in registered_keys:
            continue
        if q and q not in c.name.lower() and q not in c.path.lower():
            continue
        out.append(c)
    return out


class DiscoverDialog(QDialog):
    def __init__(self, runner: AsyncRunner, bridge: SyncBridge, snapshot: SyncSnapshot, parent=None):
        super().__init__(parent)
        self.setWindowTitle("Discover Apps")
        self.resize(560, 520)
        self.runner = runner
        self.bridge = bridge
        self.sync = bridge.sync
        self._candidates: List[RegisteredApp] = []
        self._registered_keys = {a.key for a in snapshot.apps}

        layout = QVBoxLayout(self)

        # Manual add
        form = QFormLayout()
        path_row = QHBoxLayout()
        self.path_edit = QLineEdit()
        self.path_edit.setPlaceholderText(f"/Applications/Example{APP_BUNDLE_SUFFIX}")
        browse = QPushButton("Browse…")
        browse.clicked.connect(self.browse)
        path_row.addWidget(self.path_edit)
        path_row.addWidget(browse)
        form.addRow("App path", path_row)
        self.name_edit = QLineEdit()
        self.name_edit.setPlaceholderText("Optional display name")
        form.addRow("Name", self.name_edit)
        layout.addLayout(form)

        self.btn_add_manual = QPushButton("Add App")
        self.btn_add_manual.clicked.connect(self.add_manual)
        layout.addWidget(self.btn_add_manual, 0, Qt.AlignRight)

        # Scan
        scan_row = QHBoxLayout()
        self.search_edit = QLineEdit()
        self.search_edit.setPlaceholderText("Search installed apps…")
        self.search_edit.textChanged.connect(self.rebuild_list)
        self.btn_scan = QPushButton("Scan Installed Apps")
        self.btn_scan.clicked.connect(self.scan)
        scan_row.addWidget(self.search_edit)
        scan_row.addWidget(self.btn_scan)
        layout.addLayout(scan_row)

        self.results = QListWidget()
        layout.addWidget(self.results, 1)

        bottom = QHBoxLayout()
        self.message = QLabel("")
        self.message.setWordWrap(True)
        bottom.addWidget(self.message, 1)
        self.btn_add_selected = QPushButton("Add selected")
        self.btn_add_selected.clicked.connect(self.add_selected)
        bottom.addWidget(self.btn_add_selected)
        close = QPushButton("Close")
        close.clicked.connect(self.accept)
        bottom.addWidget(close)
        layout.addLayout(bottom)

        self.bridge.changed.connect(self._on_sync_changed)

    def _on_sync_changed(self, event: str, snapshot) -> None:
        if event == "registry":
            self._registered_keys = {a.key for a in snapshot.apps}
            self.rebuild_list()

    def done(self, result: int) -> None:
        self.bridge.changed.disconnect(self._on_sync_changed)
        super().done(result)

    # ----------------------------
    # Manual add
    # ----------------------------
    def browse(self):
        folder = QFileDialog.getExistingDirectory(self, "Choose application", "/Applications")
        if folder:
            self.path_edit.setText(folder)

    def add_manual(self):
        path = self.path_edit.text().strip()
        name = self.name_edit.text().strip() or None
        self.message.setText("")
        self.btn_add_manual.setEnabled(False)
        future = self.runner.submit(self.sync.register(path, name))

        def finished(f):
            self.btn_add_manual.setEnabled(True)
            try:
                f.result()
            except LauncherError as e:
                self.message.setText(str(e))
                return
            self.path_edit.clear()
            self.name_edit.clear()
            self.message.setText("App added.")

        self.bridge.watch(future, finished)

    # ----------------------------
    # Scan
    # ----------------------------
    def scan(self):
        self.btn_scan.setEnabled(False)
        self.message.setText("Scanning…")
        future = self.runner.submit(self.sync.discover())

        def finished(f):
            self.btn_scan.setEnabled(True)
            try:
                self._candidates = f.result()
            except LauncherError as e:
                self.message.setText(str(e))
                return
            self.message.setText(f"Found {len(self._candidates)} installed apps.")
            self.rebuild_list()

        self.bridge.watch(future, finished)

    def rebuild_list(self, *_):
        self.results.clear()
        for c in filter_candidates(self._candidates, self._registered_keys, self.search_edit.text()):
            item = QListWidgetItem(f"{c.name}    {c.path}")
            item.setData(Qt.UserRole, c)
            item.setFlags(item.flags() | Qt.ItemIsUserCheckable)
            item.setCheckState(Qt.Unchecked)
            self.results.addItem(item)

    def add_selected(self):
        chosen = [
            self.results.item(i).data(Qt.UserRole)
            for i in range(self.results.count())
            if self.results.item(i).checkState() == Qt.Checked
        ]
        if not chosen:
            self.message.setText("Nothing selected.")
            return

        async def register_all():
            added, failed = [], []
            for app in chosen:
                # registered one by one; a failure does not stop the rest
                if self.sync.is_registered(app.path):
                    continue
                try:
                    await self.sync.register(app.path, app.name)
                    added.append(app.name)
                except LauncherError as e:
                    failed.append(f"{app.name} ({e})")
            return added, failed

        self.btn_add_selected.setEnabled(False)

        def finished(f):
            self.btn_add_selected.setEnabled(True)
            added, failed = f.result()
            msg = [f"Added {len(added)} app(s)."]
            if failed:
                msg.append("Failed: " + "; ".join(failed))
            self.message.setText(" ".join(msg))

        self.bridge.watch(self.runner.submit(register_all()), finished)
