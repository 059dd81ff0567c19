#===============================================================================
#  HYMetaLab_Launcher | order_ledger.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-02-10
#  Last Update : 2026-10-17
#
#  Summary
#  -------
#  User-chosen tile order. The order is kept as a list of app paths in the
#  local state file and reconciled against the registry whenever it changes:
#    - apps still registered keep their relative order
#    - newly registered apps are appended in registry order
#    - apps no longer registered are dropped
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from .constants import APP_ORDER_KEY
from .models import identity_key
from .state import StateStore

logger = logging.getLogger("hylauncher.order")


def reconcile(canonical: Iterable[str], previous: Iterable[str]) -> List[str]:
    """Merge a stored order with the current registry paths.

    Paths match case-insensitively and the registry's casing wins. Duplicates
    (on either side) are collapsed to their first occurrence.
    """
    by_key = {}
    for path in canonical:
        by_key.setdefault(identity_key(path), path)

    ordered: List[str] = []
    seen = set()
    for path in previous:
        k = identity_key(path)
        if k in by_key and k not in seen:
            ordered.append(by_key[k])
            seen.add(k)

    for k, path in by_key.items():
        if k not in seen:
            ordered.append(path)
            seen.add(k)
    return ordered


def _index_of(order: List[str], path: str) -> int:
    k = identity_key(path)
    for i, p in enumerate(order):
        if identity_key(p) == k:
            return i
    return -1


def move_by_identity(order: List[str], source: str, target: str) -> List[str]:
    """Move `source` to where `target` currently sits. Returns the same list object on no-op."""
    from_index = _index_of(order, source)
    to_index = _index_of(order, target)
    if from_index < 0 or to_index < 0 or from_index == to_index:
        return order
    reordered = list(order)
    moved = reordered.pop(from_index)
    reordered.insert(to_index, moved)
    return reordered


def move_by_index(order: List[str], source: str, target_index: int) -> List[str]:
    """Move `source` to `target_index` (clamped). Returns the same list object on no-op."""
    from_index = _index_of(order, source)
    if from_index < 0 or not order:
        return order
    clamped = max(0, min(target_index, len(order) - 1))
    if clamped == from_index:
        return order
    reordered = list(order)
    moved = reordered.pop(from_index)
    reordered.insert(clamped, moved)
    return reordered


def _clean_stored_order(raw) -> List[str]:
    if not isinstance(raw, list):
        if raw is not None:
            logger.debug("Stored app order is not a list; starting empty")
        return []
    return [v for v in raw if isinstance(v, str) and v]


class OrderLedger:
    """Persisted display order of registered apps."""

    def __init__(self, store: StateStore, key: str = APP_ORDER_KEY):
        self.store = store
        self.key = key
        self._order: List[str] = _clean_stored_order(store.get(key))

    @property
    def order(self) -> List[str]:
        return list(self._order)

    def _commit(self, next_order: List[str]) -> bool:
        if next_order == self._order:
            return False
        self._order = list(next_order)
        self.store.set(self.key, self._order)
        return True

    def reconcile(self, canonical: Iterable[str]) -> bool:
        """Reconcile with the registry; writes only when the order actually changed."""
        changed = self._commit(reconcile(canonical, self._order))
        if changed:
            logger.debug("App order reconciled (%d entries)", len(self._order))
        return changed

    def move(self, source: str, target: str) -> bool:
        return self._commit(move_by_identity(self._order, source, target))

    def move_to(self, source: str, target_index: int) -> bool:
        return self._commit(move_by_index(self._order, source, target_index))

    def index_of(self, path: str) -> Optional[int]:
        i = _index_of(self._order, path)
        return i if i >= 0 else None
