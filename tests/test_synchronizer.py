"""Tests for the registry synchronizer (FakeBackend stands in for the registry)."""

from __future__ import annotations

import asyncio
import json

import pytest

from hylauncher.constants import APP_ORDER_KEY
from hylauncher.errors import ExternalCallError, ValidationError
from hylauncher.order_ledger import OrderLedger
from hylauncher.state import StateStore
from hylauncher.synchronizer import RegistrySynchronizer, validate_identity

from conftest import A, B, C, app


def test_load_refreshes_status_and_warms_icons(backend, make_sync) -> None:
    backend.apps = [app(A), app(B)]
    backend.running = {B}
    backend.icons = {A: b"imgA"}
    sync = make_sync()
    events = []
    sync.add_listener(events.append)

    async def scenario():
        await sync.load_registry()
        await sync.drain()

    asyncio.run(scenario())
    assert sync.paths == [A, B]
    assert sync.status.statuses == {A: False, B: True}
    assert sync.icons.icons == {A: b"imgA"}
    assert backend.ops()[:2] == ["list", "query"]
    assert backend.count("icon") == 2
    assert "registry" in events and "status" in events and "icons" in events


def test_load_without_icons_enabled_fetches_no_icons(backend, make_sync) -> None:
    backend.apps = [app(A)]
    sync = make_sync(icons_enabled=False)

    async def scenario():
        await sync.load_registry()
        await sync.drain()

    asyncio.run(scenario())
    assert backend.count("icon") == 0


def test_failed_load_keeps_previous_state(backend, make_sync) -> None:
    backend.apps = [app(A)]
    sync = make_sync()
    asyncio.run(sync.load_registry())

    backend.apps = [app(B)]
    backend.fail.add("list")
    with pytest.raises(ExternalCallError):
        asyncio.run(sync.load_registry())
    assert sync.paths == [A]
    assert sync.last_error is not None


def test_load_with_empty_registry_skips_status_query(backend, make_sync) -> None:
    sync = make_sync()
    asyncio.run(sync.load_registry())
    assert sync.loaded
    assert backend.ops() == ["list"]


@pytest.mark.parametrize("bad", ["", "   ", "not-an-app-path", "/Applications/Notes", ".app"])
def test_register_rejects_non_bundle_paths_without_calls(backend, make_sync, bad) -> None:
    sync = make_sync()
    with pytest.raises(ValidationError):
        asyncio.run(sync.register(bad))
    assert backend.calls == []


def test_validate_identity_accepts_bundle_paths() -> None:
    assert validate_identity("  /Applications/Safari.APP/ ") == "/Applications/Safari.APP/"


def test_register_replaces_list_refreshes_then_fetches_new_icon(backend, make_sync) -> None:
    backend.apps = [app(A)]
    backend.icons = {A: b"imgA", B: b"imgB"}
    sync = make_sync()

    async def scenario():
        await sync.load_registry()
        await sync.drain()
        backend.calls.clear()
        await sync.register(B, "Bravo Beta")
        await sync.drain()

    asyncio.run(scenario())
    assert [a.path for a in sync.apps] == [A, B]
    assert sync.apps[1].name == "Bravo Beta"
    assert backend.ops() == ["add", "query", "icon"]
    assert backend.calls[-1] == ("icon", B)


def test_failed_register_keeps_state(backend, make_sync) -> None:
    backend.apps = [app(A)]
    sync = make_sync()
    asyncio.run(sync.load_registry())

    backend.fail.add("add")
    with pytest.raises(ExternalCallError) as info:
        asyncio.run(sync.register(B))
    assert info.value.operation == "register app"
    assert sync.paths == [A]


def test_unregister_keeps_icon_cached(backend, make_sync) -> None:
    backend.apps = [app(A), app(B)]
    backend.icons = {A: b"imgA"}
    sync = make_sync()

    async def scenario():
        await sync.load_registry()
        await sync.drain()
        await sync.unregister(A)

    asyncio.run(scenario())
    assert sync.paths == [B]
    assert sync.icons.get(A) == b"imgA"
    assert backend.ops()[-2:] == ["remove", "query"]


def test_unregister_last_app_clears_status_without_query(backend, make_sync) -> None:
    backend.apps = [app(A)]
    backend.running = {A}
    sync = make_sync(icons_enabled=False)

    async def scenario():
        await sync.load_registry()
        backend.calls.clear()
        await sync.unregister(A)

    asyncio.run(scenario())
    assert backend.ops() == ["remove"]
    assert sync.status.statuses == {}


def test_discover_does_not_register(backend, make_sync) -> None:
    backend.apps = [app(A)]
    backend.installed = [app("/applications/alpha.app", "Alpha"), app(C)]
    sync = make_sync()

    async def scenario():
        await sync.load_registry()
        return await sync.discover()

    found = asyncio.run(scenario())
    assert len(found) == 2
    assert sync.paths == [A]
    assert backend.count("add") == 0
    assert [c.path for c in sync.unregistered(found)] == [C]


def test_launch_marks_running_before_next_poll(backend, make_sync) -> None:
    backend.apps = [app(A)]
    sync = make_sync()
    asyncio.run(sync.load_registry())
    assert not sync.status.is_running(A)

    asyncio.run(sync.launch(A))
    assert sync.status.is_running(A)
    assert sync.snapshot().assumed == frozenset({A})


def test_failed_launch_does_not_mark_running(backend, make_sync) -> None:
    backend.apps = [app(A)]
    backend.fail.add("launch")
    sync = make_sync()
    asyncio.run(sync.load_registry())

    with pytest.raises(ExternalCallError):
        asyncio.run(sync.launch(A))
    assert not sync.status.is_running(A)


def test_refresh_failure_sets_and_clears_last_error(backend, make_sync) -> None:
    backend.apps = [app(A)]
    sync = make_sync()
    asyncio.run(sync.load_registry())

    backend.fail.add("query")
    with pytest.raises(ExternalCallError):
        asyncio.run(sync.refresh_status())
    assert "query running apps" in sync.last_error

    backend.fail.clear()
    asyncio.run(sync.refresh_status())
    assert sync.last_error is None


def test_order_follows_registry_changes(backend, store, state_path) -> None:
    backend.apps = [app(A), app(B), app(C)]
    store.set(APP_ORDER_KEY, [C, A])
    sync = RegistrySynchronizer(backend, OrderLedger(store), icons_enabled=False)

    asyncio.run(sync.load_registry())
    assert [a.path for a in sync.ordered_apps()] == [C, A, B]

    assert sync.move_app(B, C) is True
    assert [a.path for a in sync.ordered_apps()] == [B, C, A]

    asyncio.run(sync.unregister(C))
    assert [a.path for a in sync.ordered_apps()] == [B, A]
    assert json.loads(state_path.read_text())[APP_ORDER_KEY] == [B, A]

    asyncio.run(sync.register(C))
    assert [a.path for a in sync.ordered_apps()] == [B, A, C]
    assert sync.move_app_to(C, 0) is True
    assert json.loads(state_path.read_text())[APP_ORDER_KEY] == [C, B, A]


def test_stored_order_survives_until_first_load(backend, store) -> None:
    store.set(APP_ORDER_KEY, [B, A])
    sync = RegistrySynchronizer(backend, OrderLedger(store), icons_enabled=False)
    backend.fail.add("list")
    with pytest.raises(ExternalCallError):
        asyncio.run(sync.load_registry())
    assert StateStore(store.state_path).get(APP_ORDER_KEY) == [B, A]


def test_start_polls_and_close_stops_everything(backend, make_sync) -> None:
    backend.apps = [app(A)]
    sync = make_sync(icons_enabled=False, refresh_interval=0.01)

    async def scenario():
        async with sync:
            await asyncio.sleep(0.08)
        polls = backend.count("query")
        await asyncio.sleep(0.05)
        return polls

    polls = asyncio.run(scenario())
    assert polls >= 3  # one after load, then the poller
    assert backend.count("query") == polls
    assert sync.closed


def test_start_survives_failed_initial_load(backend, make_sync) -> None:
    backend.fail.add("list")
    sync = make_sync(refresh_interval=10)

    async def scenario():
        await sync.start()
        polling = sync._poller.running
        await sync.close()
        return polling

    assert asyncio.run(scenario()) is True
    assert "load registered apps" in sync.last_error
    assert not sync.loaded


def test_no_state_changes_after_close(backend, make_sync) -> None:
    backend.apps = [app(A)]
    sync = make_sync(icons_enabled=False)
    events = []
    sync.add_listener(events.append)

    async def scenario():
        await sync.load_registry()
        await sync.close()
        events.clear()
        await sync.launch(A)
        await sync.register(B)

    asyncio.run(scenario())
    assert not sync.status.is_running(A)
    assert sync.paths == [A]
    assert events == []


def test_enabling_icons_warms_the_cache(backend, make_sync) -> None:
    backend.apps = [app(A)]
    backend.icons = {A: b"imgA"}
    sync = make_sync(icons_enabled=False)

    async def scenario():
        await sync.load_registry()
        sync.set_icons_enabled(True)
        await sync.drain()

    asyncio.run(scenario())
    assert sync.icons.get(A) == b"imgA"


def test_failing_listener_does_not_break_sync(backend, make_sync) -> None:
    backend.apps = [app(A)]
    sync = make_sync(icons_enabled=False)

    def bad_listener(_event):
        raise RuntimeError("widget is gone")

    sync.add_listener(bad_listener)
    asyncio.run(sync.load_registry())
    assert sync.paths == [A]


def test_failed_initial_load_error_survives_polling(backend, make_sync) -> None:
    backend.fail.add("list")
    sync = make_sync(refresh_interval=0.01)

    async def scenario():
        await sync.start()
        await asyncio.sleep(0.05)
        await sync.close()

    asyncio.run(scenario())
    assert not sync.loaded
    assert "load registered apps" in sync.last_error


def test_launch_during_a_slow_poll_stays_running(backend, make_sync) -> None:
    backend.apps = [app(A)]
    sync = make_sync(icons_enabled=False)
    gates = []
    real_query = backend.query_running

    async def slow_query(paths):
        answer = await real_query(paths)
        await gates[0].wait()
        return answer

    async def scenario():
        gates.append(asyncio.Event())
        await sync.load_registry()
        sync.status._query_running = slow_query
        poll = asyncio.ensure_future(sync.refresh_status())
        await asyncio.sleep(0)
        await sync.launch(A)
        gates[0].set()
        await poll

    asyncio.run(scenario())
    assert sync.status.is_running(A)
    assert sync.snapshot().assumed == frozenset({A})


def test_nudge_moves_relative_to_the_stored_order(backend, store) -> None:
    backend.apps = [app(A), app(B), app(C)]
    sync = RegistrySynchronizer(backend, OrderLedger(store), icons_enabled=False)
    asyncio.run(sync.load_registry())

    assert sync.nudge_app(C, -1) is True
    assert [a.path for a in sync.ordered_apps()] == [A, C, B]
    assert sync.nudge_app(A, -1) is False
    assert sync.nudge_app(B, 5) is False
    assert sync.nudge_app("/Applications/Ghost.app", 1) is False
    assert store.get(APP_ORDER_KEY) == [A, C, B]
