#===============================================================================
#  HYMetaLab_Launcher | tile_widget.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-02-10
#  Last Update : 2026-10-17
#
#  Summary
#  -------
#  Metro-style app tile: icon (or letter glyph), name, running indicator.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from PySide6.QtCore import Qt, QSize
from PySide6.QtGui import QFont, QPixmap
from PySide6.QtWidgets import QFrame, QHBoxLayout, QLabel, QVBoxLayout

from .constants import ASSUMED_DOT, RUNNING_DOT, STOPPED_DOT, TILE_ICON_PX


@dataclass
class TileVisual:
    bg_color: str
    title: str
    glyph: str
    running: bool = False
    assumed: bool = False
    icon: Optional[bytes] = None

    @property
    def subtitle(self) -> str:
        if self.running and self.assumed:
            return "Starting…"
        return "Running" if self.running else "Not running"

    @property
    def dot_color(self) -> str:
        if self.running:
            return ASSUMED_DOT if self.assumed else RUNNING_DOT
        return STOPPED_DOT


def icon_pixmap(data: Optional[bytes], px: int = TILE_ICON_PX) -> Optional[QPixmap]:
    if not data:
        return None
    pm = QPixmap()
    if not pm.loadFromData(data):
        return None
    return pm.scaled(px, px, Qt.KeepAspectRatio, Qt.SmoothTransformation)


class TileWidget(QFrame):
    """A flat, Metro-style tile used inside a QListWidget item."""

    def __init__(self, visual: TileVisual, size: QSize, parent=None):
        super().__init__(parent)
        self.setObjectName("MetroTile")
        self.setFixedSize(size)

        self.setStyleSheet(f"""
        QFrame#MetroTile {{
            background: {visual.bg_color};
        }}
        """)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(10, 10, 10, 10)
        layout.setSpacing(6)

        top = QHBoxLayout()
        icon_label = QLabel()
        icon_label.setAlignment(Qt.AlignCenter)
        icon_label.setFixedSize(TILE_ICON_PX, TILE_ICON_PX)
        pm = icon_pixmap(visual.icon)
        if pm is not None:
            icon_label.setPixmap(pm)
        else:
            glyph_font = QFont("Segoe UI", 16)
            glyph_font.setBold(True)
            icon_label.setFont(glyph_font)
            icon_label.setText(visual.glyph)
            icon_label.setStyleSheet("color: white; background: rgba(0,0,0,0.25); border-radius: 10px;")
        top.addWidget(icon_label)
        top.addStretch(1)

        dot = QLabel()
        dot.setFixedSize(10, 10)
        dot.setStyleSheet(f"background: {visual.dot_color}; border-radius: 5px;")
        dot.setToolTip(visual.subtitle)
        top.addWidget(dot, 0, Qt.AlignTop)
        layout.addLayout(top)

        layout.addStretch(1)

        title_label = QLabel(visual.title)
        title_label.setAlignment(Qt.AlignLeft | Qt.AlignBottom)
        title_font = QFont("Segoe UI", 11)
        title_font.setBold(True)
        title_label.setFont(title_font)
        title_label.setStyleSheet("color: white;")
        title_label.setWordWrap(True)
        layout.addWidget(title_label)

        subtitle_label = QLabel(visual.subtitle)
        subtitle_label.setAlignment(Qt.AlignLeft | Qt.AlignBottom)
        subtitle_label.setFont(QFont("Segoe UI", 9))
        subtitle_label.setStyleSheet("color: rgba(255,255,255,0.85);")
        layout.addWidget(subtitle_label)
