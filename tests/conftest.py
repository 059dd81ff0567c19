"""Shared fixtures: an in-memory registry backend that records every call."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import pytest

from hylauncher.errors import RegistryError
from hylauncher.fs_discovery import bundle_name
from hylauncher.models import RegisteredApp, RunningStatus, identity_key, sort_and_dedupe_apps
from hylauncher.order_ledger import OrderLedger
from hylauncher.registry import RegistryBackend
from hylauncher.state import StateStore
from hylauncher.synchronizer import RegistrySynchronizer

A = "/Applications/Alpha.app"
B = "/Applications/Bravo.app"
C = "/Applications/Charlie.app"


def app(path: str, name: Optional[str] = None) -> RegisteredApp:
    return RegisteredApp(name=name or bundle_name(path), path=path)


class FakeBackend(RegistryBackend):
    def __init__(self, apps: Optional[List[RegisteredApp]] = None):
        self.apps = sort_and_dedupe_apps(apps or [])
        self.installed: List[RegisteredApp] = []
        self.running = set()
        self.icons = {}
        self.fail = set()
        self.calls = []

    def _record(self, op: str, *args) -> None:
        self.calls.append((op,) + args)
        if op in self.fail:
            raise RegistryError(f"{op} exploded")

    def count(self, op: str) -> int:
        return sum(1 for c in self.calls if c[0] == op)

    def ops(self) -> List[str]:
        return [c[0] for c in self.calls]

    async def list_registered(self):
        self._record("list")
        return list(self.apps)

    async def add_registered(self, path, name=None):
        self._record("add", path, name)
        self.apps = sort_and_dedupe_apps(self.apps + [app(path, name)])
        return list(self.apps)

    async def remove_registered(self, path):
        self._record("remove", path)
        self.apps = [a for a in self.apps if a.key != identity_key(path)]
        return list(self.apps)

    async def discover_installed(self):
        self._record("discover")
        return list(self.installed)

    async def launch(self, path):
        self._record("launch", path)

    async def query_running(self, paths):
        self._record("query", list(paths))
        return [RunningStatus(path=p, running=p in self.running) for p in paths]

    async def fetch_icon(self, path):
        self._record("icon", path)
        if path not in self.icons:
            raise RegistryError(f"no icon for {path}")
        return self.icons[path]


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def state_path(tmp_path: Path) -> Path:
    return tmp_path / "launcher_state.json"


@pytest.fixture
def store(state_path: Path) -> StateStore:
    return StateStore(state_path)


@pytest.fixture
def make_sync(backend: FakeBackend, store: StateStore):
    def _make(**kwargs) -> RegistrySynchronizer:
        return RegistrySynchronizer(backend, OrderLedger(store), **kwargs)
    return _make
