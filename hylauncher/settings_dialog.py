#===============================================================================
#  HYMetaLab_Launcher | settings_dialog.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-17
#  Last Update : 2026-10-17
#
#  Summary
#  -------
#  Settings dialog: profile (name, AI mode, theme) and visual toggles.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

from PySide6.QtWidgets import (
    QCheckBox,
    QComboBox,
    QDialog,
    QDialogButtonBox,
    QFormLayout,
    QGroupBox,
    QLineEdit,
    QVBoxLayout,
)

from .settings import AI_MODES, THEMES, AppConfig, VisualSettings


class SettingsDialog(QDialog):
    def __init__(self, config: AppConfig, visual: VisualSettings, parent=None):
        super().__init__(parent)
        self.setWindowTitle("Settings")

        layout = QVBoxLayout(self)

        profile = QGroupBox("Profile")
        form = QFormLayout(profile)
        self.name_edit = QLineEdit(config.user_name)
        form.addRow("Name", self.name_edit)
        self.mode_combo = QComboBox()
        self.mode_combo.addItems(list(AI_MODES))
        self.mode_combo.setCurrentText(config.ai_mode)
        form.addRow("AI mode", self.mode_combo)
        self.theme_combo = QComboBox()
        self.theme_combo.addItems(list(THEMES))
        self.theme_combo.setCurrentText(config.theme)
        form.addRow("Theme", self.theme_combo)
        layout.addWidget(profile)

        visuals = QGroupBox("Visual features")
        vbox = QVBoxLayout(visuals)
        self.chk_glass = QCheckBox("Glassmorphism")
        self.chk_glass.setChecked(visual.glassmorphism)
        self.chk_background = QCheckBox("Dynamic background")
        self.chk_background.setChecked(visual.dynamic_background)
        self.chk_animations = QCheckBox("Micro animations")
        self.chk_animations.setChecked(visual.micro_animations)
        self.chk_icons = QCheckBox("App icons")
        self.chk_icons.setChecked(visual.app_icons)
        for chk in (self.chk_glass, self.chk_background, self.chk_animations, self.chk_icons):
            vbox.addWidget(chk)
        layout.addWidget(visuals)

        buttons = QDialogButtonBox(QDialogButtonBox.Save | QDialogButtonBox.Cancel)
        buttons.accepted.connect(self.accept)
        buttons.rejected.connect(self.reject)
        layout.addWidget(buttons)

    def config(self) -> AppConfig:
        return AppConfig(
            user_name=self.name_edit.text().strip() or "User",
            ai_mode=self.mode_combo.currentText(),
            theme=self.theme_combo.currentText(),
        )

    def visual_settings(self) -> VisualSettings:
        return VisualSettings(
            glassmorphism=self.chk_glass.isChecked(),
            dynamic_background=self.chk_background.isChecked(),
            micro_animations=self.chk_animations.isChecked(),
            app_icons=self.chk_icons.isChecked(),
        )
