"""Tests for tile order reconciliation and persistence."""

from __future__ import annotations

import itertools
import json
from pathlib import Path

from hylauncher.constants import APP_ORDER_KEY
from hylauncher.order_ledger import OrderLedger, move_by_identity, move_by_index, reconcile
from hylauncher.state import StateStore


class CountingStore(StateStore):
    def __init__(self, state_path):
        super().__init__(state_path)
        self.writes = 0

    def set(self, key, value):
        self.writes += 1
        super().set(key, value)


def test_survivors_keep_order_and_new_apps_are_appended() -> None:
    assert reconcile(["A", "B", "C"], ["C", "A"]) == ["C", "A", "B"]


def test_removed_apps_are_dropped() -> None:
    assert reconcile(["B"], ["C", "A", "B"]) == ["B"]


def test_reconcile_is_idempotent_and_keeps_exactly_the_registry() -> None:
    ids = ["A", "B", "C", "D"]
    previous_orders = [[], ["X"], ["D", "X", "A"]] + [list(p) for p in itertools.permutations(["A", "B", "C"])]
    for previous in previous_orders:
        once = reconcile(ids, previous)
        assert reconcile(ids, once) == once
        assert set(once) == set(ids)
        assert len(once) == len(ids)


def test_reconcile_matches_case_insensitively_and_adopts_registry_casing() -> None:
    canonical = ["/Applications/Alpha.app", "/Applications/Bravo.app"]
    previous = ["/applications/bravo.app", "/APPLICATIONS/ALPHA.APP"]
    assert reconcile(canonical, previous) == ["/Applications/Bravo.app", "/Applications/Alpha.app"]


def test_reconcile_collapses_duplicates() -> None:
    assert reconcile(["A", "B"], ["B", "B", "A", "B"]) == ["B", "A"]


def test_move_by_identity() -> None:
    order = ["A", "B", "C", "D"]
    assert move_by_identity(order, "D", "B") == ["A", "D", "B", "C"]
    assert move_by_identity(order, "A", "C") == ["B", "C", "A", "D"]
    assert move_by_identity(order, "A", "A") is order
    assert move_by_identity(order, "Z", "A") is order
    assert move_by_identity(order, "A", "Z") is order


def test_move_by_index_clamps() -> None:
    order = ["A", "B", "C"]
    assert move_by_index(order, "A", 99) == ["B", "C", "A"]
    assert move_by_index(order, "C", -5) == ["C", "A", "B"]
    assert move_by_index(order, "B", 1) is order
    assert move_by_index(order, "Z", 0) is order


def test_ledger_persists_and_skips_unchanged_writes(tmp_path: Path) -> None:
    state_path = tmp_path / "state.json"
    store = CountingStore(state_path)
    ledger = OrderLedger(store)

    assert ledger.reconcile(["A", "B"]) is True
    assert store.writes == 1
    assert ledger.reconcile(["A", "B"]) is False
    assert store.writes == 1

    assert ledger.move("B", "A") is True
    assert store.writes == 2
    assert json.loads(state_path.read_text())[APP_ORDER_KEY] == ["B", "A"]

    # a fresh process sees the same order, and a new app lands at the end
    reloaded = OrderLedger(StateStore(state_path))
    assert reloaded.order == ["B", "A"]
    reloaded.reconcile(["A", "B", "C"])
    assert reloaded.order == ["B", "A", "C"]


def test_ledger_move_to_no_op_does_not_write(tmp_path: Path) -> None:
    store = CountingStore(tmp_path / "state.json")
    ledger = OrderLedger(store)
    ledger.reconcile(["A", "B", "C"])
    writes = store.writes
    assert ledger.move_to("A", 0) is False
    assert ledger.move_to("A", -3) is False
    assert store.writes == writes
    assert ledger.move_to("A", 2) is True
    assert ledger.order == ["B", "C", "A"]
    assert ledger.index_of("c") == 1


def test_corrupt_or_non_list_order_starts_empty(tmp_path: Path) -> None:
    state_path = tmp_path / "state.json"

    state_path.write_text("{not json", encoding="utf-8")
    assert OrderLedger(StateStore(state_path)).order == []

    state_path.write_text(json.dumps({APP_ORDER_KEY: {"A": 1}}), encoding="utf-8")
    assert OrderLedger(StateStore(state_path)).order == []

    state_path.write_text(json.dumps({APP_ORDER_KEY: ["A", 3, "", None, "B"]}), encoding="utf-8")
    assert OrderLedger(StateStore(state_path)).order == ["A", "B"]
