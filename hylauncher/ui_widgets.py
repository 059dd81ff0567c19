#===============================================================================
#  HYMetaLab_Launcher | ui_widgets.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-02-10
#  Last Update : 2026-10-17
#
#  Summary
#  -------
#  Reusable UI widgets (tile list). Keeps the main window/controller smaller.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import QAbstractItemView, QListView, QListWidget

from .constants import GRID_SIZE


class TileList(QListWidget):
    """Wrapping tile grid. Drag/drop and Ctrl+Arrow reordering only in reorder mode."""

    # app path, new index
    tileMoved = Signal(str, int)
    # app path, index delta (-1 / +1)
    tileNudged = Signal(str, int)

    def __init__(self, parent=None):
        super().__init__(parent)
        # ListMode + wrapping keeps a real row order (IconMode only moves pixels)
        self.setViewMode(QListView.ListMode)
        self.setFlow(QListView.LeftToRight)
        self.setWrapping(True)
        self.setResizeMode(QListView.Adjust)
        self.setUniformItemSizes(True)
        self.setGridSize(GRID_SIZE)
        self.setSpacing(6)
        self.setSelectionMode(QAbstractItemView.SingleSelection)
        self.model().rowsMoved.connect(self._on_rows_moved)
        self.set_reorder_mode(False)

    def set_reorder_mode(self, enabled: bool) -> None:
        self.reorder_mode = enabled
        self.setDragEnabled(enabled)
        self.setAcceptDrops(enabled)
        self.setDropIndicatorShown(enabled)
        self.setDragDropMode(QAbstractItemView.InternalMove if enabled else QAbstractItemView.NoDragDrop)

    def item_path(self, row: int) -> str:
        return self.item(row).data(Qt.UserRole)

    def _on_rows_moved(self, _parent, start, _end, _destination, row):
        new_index = row if row < start else row - 1
        if 0 <= new_index < self.count():
            self.tileMoved.emit(self.item_path(new_index), new_index)

    def keyPressEvent(self, event):
        item = self.currentItem()
        if self.reorder_mode and item is not None and event.modifiers() & Qt.ControlModifier:
            if event.key() in (Qt.Key_Left, Qt.Key_Up):
                self.tileNudged.emit(item.data(Qt.UserRole), -1)
                return
            if event.key() in (Qt.Key_Right, Qt.Key_Down):
                self.tileNudged.emit(item.data(Qt.UserRole), 1)
                return
        super().keyPressEvent(event)
