#===============================================================================
#  HYMetaLab_Launcher | settings.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-17
#  Last Update : 2026-10-17
#
#  Summary
#  -------
#  User-facing settings:
#    - AppConfig      : name / AI mode / theme, in ~/.hymetalab/config/global.json
#    - VisualSettings : UI toggles (icons, animations, ...), in launcher_state.json
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional

from .constants import CONFIG_FILE_NAME, VISUAL_SETTINGS_KEY, config_dir
from .state import StateStore

logger = logging.getLogger("hylauncher.settings")

AI_MODES = ("local", "cloud")
THEMES = ("dark", "light")


@dataclass(frozen=True)
class VisualSettings:
    glassmorphism: bool = True
    dynamic_background: bool = True
    micro_animations: bool = True
    app_icons: bool = True


@dataclass(frozen=True)
class AppConfig:
    user_name: str = "User"
    ai_mode: str = "local"
    theme: str = "dark"

    def to_json(self) -> Dict[str, Any]:
        # camelCase on disk, shared with the other HYMetaLab tools
        return {"userName": self.user_name, "aiMode": self.ai_mode, "theme": self.theme}

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "AppConfig":
        d = cls()
        user_name = str(data.get("userName", d.user_name)).strip() or d.user_name
        ai_mode = data.get("aiMode", d.ai_mode)
        theme = data.get("theme", d.theme)
        return cls(
            user_name=user_name,
            ai_mode=ai_mode if ai_mode in AI_MODES else d.ai_mode,
            theme=theme if theme in THEMES else d.theme,
        )


def load_visual_settings(store: StateStore) -> VisualSettings:
    raw = store.get(VISUAL_SETTINGS_KEY)
    if not isinstance(raw, dict):
        return VisualSettings()
    known = {f.name for f in fields(VisualSettings)}
    values = {k: bool(v) for k, v in raw.items() if k in known}
    return replace(VisualSettings(), **values)


def save_visual_settings(store: StateStore, settings: VisualSettings) -> None:
    store.set(VISUAL_SETTINGS_KEY, asdict(settings))


def config_path() -> Path:
    return config_dir() / CONFIG_FILE_NAME


def load_config(path: Optional[Path] = None) -> AppConfig:
    path = path or config_path()
    if not path.exists():
        return AppConfig()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        logger.error("Failed to load config: %s", e)
        return AppConfig()
    if not isinstance(data, dict):
        return AppConfig()
    return AppConfig.from_json(data)


def save_config(config: AppConfig, path: Optional[Path] = None) -> None:
    path = path or config_path()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(config.to_json(), indent=2), encoding="utf-8")
    except OSError as e:
        logger.error("Failed to save config: %s", e)
