#===============================================================================
#  HYMetaLab_Launcher | main_window.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Created     : 2026-02-10
#  Last Update : 2026-10-17
#
#  Summary
#  -------
#  Main Metro-style UI for the launcher:
#    - Tile grid of registered apps in the user's order (persisted)
#    - Running indicator per tile (polled every few seconds)
#    - Reorder mode: drag & drop or Ctrl+Arrow keys
#    - Add app / Discover apps / Settings dialogs
#    - Right-click actions: launch, move to start/end, remove
#    - Tray icon (Open Launcher / Quit); closing the window hides it to the tray
#===============================================================================

from __future__ import annotations

import hashlib
import logging
from typing import Optional

from PySide6.QtCore import Qt
from PySide6.QtGui import QAction
from PySide6.QtWidgets import (
    QApplication,
    QFileDialog,
    QHBoxLayout,
    QInputDialog,
    QLabel,
    QListWidgetItem,
    QMainWindow,
    QMenu,
    QMessageBox,
    QPushButton,
    QStyle,
    QSystemTrayIcon,
    QVBoxLayout,
    QWidget,
)

from .async_runner import AsyncRunner
from .constants import APP_TITLE, METRO_BG, METRO_BG_LIGHT, METRO_TILE_COLORS, TILE_SIZE
from .discover_dialog import DiscoverDialog
from .errors import LauncherError, ValidationError
from .fs_discovery import bundle_name
from .qt_bridge import SyncBridge
from .settings import AppConfig, VisualSettings, save_config, save_visual_settings
from .settings_dialog import SettingsDialog
from .state import StateStore
from .synchronizer import RegistrySynchronizer, SyncSnapshot
from .tile_widget import TileVisual, TileWidget
from .ui_widgets import TileList

logger = logging.getLogger("hylauncher.ui")


def tile_color_for_path(path: str) -> str:
    h = hashlib.sha1(path.lower().encode("utf-8")).hexdigest()
    idx = int(h[:2], 16) % len(METRO_TILE_COLORS)
    return METRO_TILE_COLORS[idx]


def header_text(user_name: str) -> str:
    return f"<b>{APP_TITLE}</b> | Welcome back, {user_name}"


def window_style(theme: str) -> str:
    bg = METRO_BG_LIGHT if theme == "light" else METRO_BG
    fg = "#111111" if theme == "light" else "white"
    button_bg = "#e4e4e4" if theme == "light" else "#1a1a1a"
    border = "#c8c8c8" if theme == "light" else "#2a2a2a"
    return f"""
    QMainWindow {{ background: {bg}; }}
    QLabel {{ color: {fg}; font-family: "Segoe UI"; }}
    QListWidget {{ background: {bg}; border: none; }}
    QPushButton {{
        font-family: "Segoe UI";
        color: {fg};
        background: {button_bg};
        border: 1px solid {border};
        padding: 6px 10px;
    }}
    QPushButton:checked {{ background: #0078D7; color: white; }}
    QLabel#ErrorLabel {{ color: #ff6b6b; }}
    """


class MainWindow(QMainWindow):
    def __init__(
        self,
        runner: AsyncRunner,
        sync: RegistrySynchronizer,
        store: StateStore,
        config: AppConfig,
        visual: VisualSettings,
    ):
        super().__init__()
        self.setWindowTitle(APP_TITLE)

        self.runner = runner
        self.sync = sync
        self.store = store
        self.config = config
        self.visual = visual
        self.snapshot: Optional[SyncSnapshot] = None
        self._quitting = False
        self._action_error: Optional[str] = None

        self.bridge = SyncBridge(sync, self)
        self.bridge.changed.connect(self.on_sync_changed)

        root = QWidget()
        self.setCentralWidget(root)
        layout = QVBoxLayout(root)
        layout.setContentsMargins(14, 14, 14, 14)
        layout.setSpacing(10)

        header = QHBoxLayout()
        self.title = QLabel()
        header.addWidget(self.title)
        header.addStretch(1)

        self.btn_add = QPushButton("Add App…")
        self.btn_add.clicked.connect(self.add_app)
        header.addWidget(self.btn_add)

        self.btn_discover = QPushButton("Discover…")
        self.btn_discover.clicked.connect(self.open_discover)
        header.addWidget(self.btn_discover)

        self.btn_reorder = QPushButton("Reorder")
        self.btn_reorder.setCheckable(True)
        self.btn_reorder.toggled.connect(self.toggle_reorder)
        header.addWidget(self.btn_reorder)

        self.btn_settings = QPushButton("Settings…")
        self.btn_settings.clicked.connect(self.open_settings)
        header.addWidget(self.btn_settings)

        layout.addLayout(header)

        self.hint = QLabel("Drag app tiles or use Ctrl+Arrow keys to reorder.")
        self.hint.setVisible(False)
        layout.addWidget(self.hint)

        self.error_label = QLabel("")
        self.error_label.setObjectName("ErrorLabel")
        self.error_label.setWordWrap(True)
        self.error_label.setVisible(False)
        layout.addWidget(self.error_label)

        self.empty_label = QLabel("Loading apps…")
        self.empty_label.setAlignment(Qt.AlignCenter)
        layout.addWidget(self.empty_label)

        self.tiles = TileList()
        self.tiles.itemDoubleClicked.connect(self.launch_item)
        self.tiles.setContextMenuPolicy(Qt.CustomContextMenu)
        self.tiles.customContextMenuRequested.connect(self.open_context_menu)
        self.tiles.tileMoved.connect(self.move_tile_to)
        self.tiles.tileNudged.connect(self.nudge_tile)
        layout.addWidget(self.tiles, 1)

        self.tray: Optional[QSystemTrayIcon] = None
        self.setup_tray()
        self.apply_config()

    # ----------------------------
    # Tray
    # ----------------------------
    def setup_tray(self):
        if not QSystemTrayIcon.isSystemTrayAvailable():
            return
        self.tray = QSystemTrayIcon(self.style().standardIcon(QStyle.SP_ComputerIcon), self)
        self.tray.setToolTip(APP_TITLE)
        menu = QMenu(self)
        act_open = QAction("Open Launcher", self)
        act_open.triggered.connect(self.show_from_tray)
        act_quit = QAction("Quit", self)
        act_quit.triggered.connect(self.quit_app)
        menu.addAction(act_open)
        menu.addAction(act_quit)
        self.tray.setContextMenu(menu)
        self.tray.activated.connect(self.on_tray_activated)
        self.tray.show()

    def on_tray_activated(self, reason):
        if reason == QSystemTrayIcon.Trigger:
            if self.isVisible():
                self.hide()
            else:
                self.show_from_tray()

    def show_from_tray(self):
        self.showNormal()
        self.raise_()
        self.activateWindow()

    def quit_app(self):
        self._quitting = True
        self.close()

    def closeEvent(self, event):
        if self.tray is not None and not self._quitting:
            self.hide()
            event.ignore()
            return
        self.shutdown()
        event.accept()
        QApplication.quit()

    def shutdown(self):
        self.bridge.detach()
        if self.tray is not None:
            self.tray.hide()
        try:
            self.runner.submit(self.sync.close()).result(timeout=5)
        except Exception as e:
            logger.warning("Synchronizer did not close cleanly: %s", e)
        self.runner.stop()

    # ----------------------------
    # Rendering
    # ----------------------------
    def apply_config(self):
        self.setStyleSheet(window_style(self.config.theme))
        self.title.setText(header_text(self.config.user_name))

    def on_sync_changed(self, _event: str, snapshot: SyncSnapshot):
        self.snapshot = snapshot
        self.rebuild_tiles()

    def show_error(self):
        message = self._action_error or (self.snapshot.last_error if self.snapshot else None)
        self.error_label.setText(message or "")
        self.error_label.setVisible(bool(message))

    def rebuild_tiles(self):
        snap = self.snapshot
        current = self.tiles.currentItem()
        current_path = current.data(Qt.UserRole) if current else None

        self.tiles.clear()
        self.show_error()
        if snap is None:
            return

        if not snap.apps:
            self.empty_label.setText("No apps registered yet. Use Add App… or Discover… to get started."
                                     if snap.loaded else "Loading apps…")
        self.empty_label.setVisible(not snap.apps)

        for app in snap.apps:
            item = QListWidgetItem()
            item.setData(Qt.UserRole, app.path)
            item.setSizeHint(TILE_SIZE)
            item.setToolTip(f"Reorder {app.name}" if self.tiles.reorder_mode else f"Launch {app.name}")
            self.tiles.addItem(item)

            visual = TileVisual(
                bg_color=tile_color_for_path(app.path),
                title=app.name,
                glyph=app.initial,
                running=snap.running.get(app.path, False),
                assumed=app.path in snap.assumed,
                icon=snap.icons.get(app.path) if self.visual.app_icons else None,
            )
            self.tiles.setItemWidget(item, TileWidget(visual, size=TILE_SIZE))
            if app.path == current_path:
                self.tiles.setCurrentItem(item)

    # ----------------------------
    # Actions
    # ----------------------------
    def _run(self, coro, error_title: str, on_success=None):
        self._action_error = None
        self.show_error()

        def finished(f):
            try:
                f.result()
            except ValidationError as e:
                QMessageBox.warning(self, error_title, str(e))
                return
            except LauncherError as e:
                self._action_error = str(e)
                self.show_error()
                QMessageBox.critical(self, error_title, str(e))
                return
            if on_success:
                on_success()

        self.bridge.watch(self.runner.submit(coro), finished)

    def launch_item(self, item: QListWidgetItem):
        if self.tiles.reorder_mode:
            return
        path = item.data(Qt.UserRole)
        self._run(self.sync.launch(path), "Launch failed")

    def remove_app(self, path: str):
        app = next((a for a in (self.snapshot.apps if self.snapshot else ()) if a.path == path), None)
        label = app.name if app else path
        res = QMessageBox.question(
            self,
            "Remove app",
            f"Remove '{label}' from the launcher?\n\nThe application itself is not uninstalled.",
            QMessageBox.Yes | QMessageBox.No,
        )
        if res != QMessageBox.Yes:
            return
        self._run(self.sync.unregister(path), "Remove failed")

    def add_app(self):
        folder = QFileDialog.getExistingDirectory(self, "Choose application", "/Applications")
        if not folder:
            return
        default_name = bundle_name(folder) or ""
        name, ok = QInputDialog.getText(self, "Add app", "Display name:", text=default_name)
        if not ok:
            return
        self._run(self.sync.register(folder, name.strip() or None), "Add app failed")

    def open_discover(self):
        snapshot = self.snapshot or SyncSnapshot.empty()
        DiscoverDialog(self.runner, self.bridge, snapshot, self).exec()

    def open_settings(self):
        dlg = SettingsDialog(self.config, self.visual, self)
        if dlg.exec() != SettingsDialog.Accepted:
            return
        self.config = dlg.config()
        save_config(self.config)
        visual = dlg.visual_settings()
        if visual != self.visual:
            self.visual = visual
            save_visual_settings(self.store, visual)
            self.runner.call(self.sync.set_icons_enabled, visual.app_icons)
        self.apply_config()
        self.rebuild_tiles()

    # ----------------------------
    # Reordering
    # ----------------------------
    def toggle_reorder(self, checked: bool):
        self.tiles.set_reorder_mode(checked)
        self.btn_reorder.setText("Done" if checked else "Reorder")
        self.hint.setVisible(checked)
        self.rebuild_tiles()

    def move_tile_to(self, path: str, index: int):
        self.runner.call(self.sync.move_app_to, path, index)

    def nudge_tile(self, path: str, delta: int):
        self.runner.call(self.sync.nudge_app, path, delta)

    # ----------------------------
    # Context menu
    # ----------------------------
    def open_context_menu(self, pos):
        item = self.tiles.itemAt(pos)
        if not item:
            return
        path = item.data(Qt.UserRole)

        menu = QMenu(self)
        act_launch = QAction("Launch", self)
        act_first = QAction("Move to start", self)
        act_last = QAction("Move to end", self)
        act_remove = QAction("Remove…", self)

        menu.addAction(act_launch)
        menu.addSeparator()
        menu.addAction(act_first)
        menu.addAction(act_last)
        menu.addSeparator()
        menu.addAction(act_remove)

        chosen = menu.exec(self.tiles.mapToGlobal(pos))
        if not chosen:
            return

        if chosen == act_launch:
            self._run(self.sync.launch(path), "Launch failed")
        elif chosen == act_first:
            self.runner.call(self.sync.move_app_to, path, 0)
        elif chosen == act_last:
            self.runner.call(self.sync.move_app_to, path, self.tiles.count() - 1)
        elif chosen == act_remove:
            self.remove_app(path)
