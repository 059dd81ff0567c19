#===============================================================================
#  HYMetaLab_Launcher | models.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-02-10
#  Last Update : 2026-10-17
#
#  Summary
#  -------
#  Shared data models used across the launcher (registry rows, status rows).
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List


def identity_key(path: str) -> str:
    """Key used to compare app identities (paths compare case-insensitively)."""
    return path.casefold()


@dataclass(frozen=True)
class RegisteredApp:
    """An application known to the registry. `path` is its identity."""
    name: str   # display name
    path: str   # bundle path, original casing

    @property
    def key(self) -> str:
        return identity_key(self.path)

    @property
    def initial(self) -> str:
        # fallback glyph when no icon is available
        text = self.name.strip()
        return text[0].upper() if text else "?"

    def to_dict(self) -> Dict[str, str]:
        return {"name": self.name, "path": self.path}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RegisteredApp":
        return cls(name=str(data["name"]), path=str(data["path"]))


@dataclass(frozen=True)
class RunningStatus:
    path: str
    running: bool


def sort_and_dedupe_apps(apps: Iterable[RegisteredApp]) -> List[RegisteredApp]:
    """De-duplicate by case-insensitive path (later entries win), then sort by name, path."""
    deduped: Dict[str, RegisteredApp] = {}
    for app in apps:
        deduped[app.key] = app
    return sorted(deduped.values(), key=lambda a: (a.name.lower(), a.path.lower()))
