#===============================================================================
#  HYMetaLab_Launcher | state.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-02-10
#  Last Update : 2026-10-17
#
#  Summary
#  -------
#  Load/save of local launcher preferences (tile order, visual settings).
#  A missing or corrupt file is treated as "no preferences"; write failures are
#  logged and otherwise ignored, since nothing in here is critical.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import copy
import json
import logging
import threading
from pathlib import Path
from typing import Any, Dict

from .errors import PersistenceError

logger = logging.getLogger("hylauncher.state")


def load_state(state_path: Path) -> Dict[str, Any]:
    """Read state from disk. Missing file -> {}; unreadable/corrupt -> PersistenceError."""
    if not state_path.exists():
        return {}
    try:
        data = json.loads(state_path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise PersistenceError(f"Failed to read {state_path}: {e}") from e
    if not isinstance(data, dict):
        raise PersistenceError(f"Unexpected state format in {state_path}")
    return data


def save_state(state_path: Path, state: Dict[str, Any]) -> None:
    """Persist state to disk (full rewrite)."""
    try:
        state_path.parent.mkdir(parents=True, exist_ok=True)
        state_path.write_text(json.dumps(state, indent=2), encoding="utf-8")
    except (OSError, TypeError, ValueError) as e:
        raise PersistenceError(f"Failed to write {state_path}: {e}") from e


class StateStore:
    """Small key -> JSON value store backed by one file.

    Values are loaded once at construction and every `set` rewrites the whole file.
    Used from both the GUI thread and the sync loop thread, hence the lock.
    """

    def __init__(self, state_path: Path):
        self.state_path = Path(state_path)
        self._lock = threading.Lock()
        try:
            self._data = load_state(self.state_path)
        except PersistenceError as e:
            logger.warning("Ignoring unreadable launcher state: %s", e)
            self._data = {}

    def get(self, key: str, default: Any = None) -> Any:
        with self._lock:
            if key not in self._data:
                return default
            return copy.deepcopy(self._data[key])

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            self._data[key] = copy.deepcopy(value)
            snapshot = dict(self._data)
        try:
            save_state(self.state_path, snapshot)
        except PersistenceError as e:
            logger.warning("Launcher state not saved: %s", e)
