#===============================================================================
#  HYMetaLab_Launcher | synchronizer.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-17
#  Last Update : 2026-10-17
#
#  Summary
#  -------
#  Keeps the launcher's view of registered apps coherent with the registry:
#    - the canonical app list (always replaced wholesale by registry responses)
#    - running state (StatusCache, polled every few seconds)
#    - icons (IconCache, fetched lazily, kept for the process lifetime)
#    - the user's tile order (OrderLedger, reconciled on every list change)
#
#  Everything in here runs on one asyncio loop. Widgets subscribe with
#  add_listener() and receive short event names ("registry", "status", "icons",
#  "order", "error") on that loop's thread.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Dict, FrozenSet, Iterable, List, Optional, Set, Tuple, TypeVar

from .constants import APP_BUNDLE_SUFFIX, STATUS_REFRESH_INTERVAL_S
from .errors import ExternalCallError, ValidationError
from .fs_discovery import has_bundle_suffix
from .icon_cache import IconCache
from .models import RegisteredApp, identity_key
from .order_ledger import OrderLedger
from .registry import RegistryBackend
from .status_cache import StatusCache, StatusPoller

logger = logging.getLogger("hylauncher.sync")

T = TypeVar("T")
Listener = Callable[[str], None]

REGISTRY_CHANGED = "registry"
STATUS_CHANGED = "status"
ICONS_CHANGED = "icons"
ORDER_CHANGED = "order"
ERROR_CHANGED = "error"


def validate_identity(path: str) -> str:
    """Return the trimmed path, or raise ValidationError."""
    trimmed = (path or "").strip()
    if not trimmed:
        raise ValidationError("App path is required.")
    if not has_bundle_suffix(trimmed):
        raise ValidationError(f"Not an application bundle: {trimmed} (expected a {APP_BUNDLE_SUFFIX} path)")
    return trimmed


@dataclass(frozen=True)
class SyncSnapshot:
    """Immutable copy of the read model, safe to hand to another thread."""
    apps: Tuple[RegisteredApp, ...]  # display order
    running: Dict[str, bool]
    assumed: FrozenSet[str]
    icons: Dict[str, bytes]
    last_error: Optional[str]
    loaded: bool

    @classmethod
    def empty(cls) -> "SyncSnapshot":
        return cls(apps=(), running={}, assumed=frozenset(), icons={}, last_error=None, loaded=False)


class RegistrySynchronizer:
    def __init__(
        self,
        backend: RegistryBackend,
        ledger: OrderLedger,
        icons_enabled: bool = True,
        refresh_interval: float = STATUS_REFRESH_INTERVAL_S,
    ):
        self.backend = backend
        self.ledger = ledger
        self.status = StatusCache(backend.query_running)
        self.icons = IconCache(backend.fetch_icon, on_update=lambda _path: self._notify(ICONS_CHANGED))
        self._poller = StatusPoller(self.refresh_status, refresh_interval)

        self._apps: List[RegisteredApp] = []
        self._loaded = False
        self._icons_enabled = icons_enabled
        self._listeners: List[Listener] = []
        self._background: Set[asyncio.Task] = set()
        self._closed = False
        self.last_error: Optional[str] = None

    # ----------------------------
    # Read model
    # ----------------------------
    @property
    def apps(self) -> List[RegisteredApp]:
        return list(self._apps)

    @property
    def paths(self) -> List[str]:
        return [a.path for a in self._apps]

    @property
    def loaded(self) -> bool:
        return self._loaded

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def icons_enabled(self) -> bool:
        return self._icons_enabled

    def ordered_apps(self) -> List[RegisteredApp]:
        """Registered apps in the user's order; anything the ledger lacks goes last."""
        by_key = {a.key: a for a in self._apps}
        ordered: List[RegisteredApp] = []
        for path in self.ledger.order:
            app = by_key.pop(identity_key(path), None)
            if app is not None:
                ordered.append(app)
        ordered.extend(a for a in self._apps if a.key in by_key)
        return ordered

    def snapshot(self) -> SyncSnapshot:
        apps = tuple(self.ordered_apps())
        return SyncSnapshot(
            apps=apps,
            running=self.status.statuses,
            assumed=frozenset(a.path for a in apps if self.status.is_assumed(a.path)),
            icons=self.icons.icons,
            last_error=self.last_error,
            loaded=self._loaded,
        )

    def is_registered(self, path: str) -> bool:
        k = identity_key(path)
        return any(a.key == k for a in self._apps)

    # ----------------------------
    # Listeners
    # ----------------------------
    def add_listener(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self, event: str) -> None:
        if self._closed:
            return
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                logger.exception("Listener failed handling %r", event)

    def _set_error(self, error: Optional[BaseException]) -> None:
        message = str(error) if error is not None else None
        if message == self.last_error:
            return
        self.last_error = message
        self._notify(ERROR_CHANGED)

    # ----------------------------
    # Lifecycle
    # ----------------------------
    async def start(self) -> None:
        """Load the registry and start polling running state."""
        try:
            await self.load_registry()
        except ExternalCallError as e:
            logger.error("Initial registry load failed: %s", e)
        if not self._closed:
            self._poller.start()

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        await self._poller.stop()
        self.status.close()
        self.icons.close()
        logger.debug("Synchronizer closed (%d background tasks still in flight)", len(self._background))

    async def __aenter__(self) -> "RegistrySynchronizer":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    def _spawn(self, coro: Awaitable[None]) -> None:
        if self._closed:
            coro.close()  # type: ignore[attr-defined]
            return
        task = asyncio.get_running_loop().create_task(coro)  # type: ignore[arg-type]
        self._background.add(task)
        task.add_done_callback(self._background.discard)

    async def drain(self) -> None:
        """Wait for background work (icon fetches) started so far."""
        while self._background:
            await asyncio.gather(*list(self._background), return_exceptions=True)

    async def _call(self, operation: str, call: Awaitable[T]) -> T:
        try:
            return await call
        except Exception as e:
            raise ExternalCallError(operation, e) from e

    def _replace_apps(self, apps: Iterable[RegisteredApp]) -> None:
        self._apps = list(apps)
        self._loaded = True
        self._notify(REGISTRY_CHANGED)
        if self.ledger.reconcile(self.paths):
            self._notify(ORDER_CHANGED)

    # ----------------------------
    # Registry operations
    # ----------------------------
    async def load_registry(self) -> None:
        try:
            apps = await self._call("load registered apps", self.backend.list_registered())
        except ExternalCallError as e:
            self._set_error(e)
            raise
        if self._closed:
            return

        self._replace_apps(apps)
        self._set_error(None)
        logger.info("Loaded %d registered apps", len(self._apps))

        await self._refresh_quietly()
        if self._icons_enabled:
            self._spawn(self.icons.fetch_all(self.paths))

    async def register(self, path: str, display_name: Optional[str] = None) -> None:
        path = validate_identity(path)
        known = {a.key for a in self._apps}

        apps = await self._call("register app", self.backend.add_registered(path, display_name))
        if self._closed:
            return
        self._replace_apps(apps)
        self._set_error(None)

        await self._refresh_quietly()
        if self._icons_enabled:
            added = [a.path for a in self._apps if a.key not in known]
            if not added:
                k = identity_key(path)
                added = [a.path for a in self._apps if a.key == k]
            for p in added:
                self._spawn(self.icons.fetch_one(p))

    async def unregister(self, path: str) -> None:
        trimmed = (path or "").strip()
        if not trimmed:
            raise ValidationError("App path is required.")

        apps = await self._call("remove app", self.backend.remove_registered(trimmed))
        if self._closed:
            return
        self._replace_apps(apps)
        self._set_error(None)
        await self._refresh_quietly()

    async def discover(self) -> List[RegisteredApp]:
        """Installed apps on this machine. Does not register anything."""
        return await self._call("discover installed apps", self.backend.discover_installed())

    def unregistered(self, candidates: Iterable[RegisteredApp]) -> List[RegisteredApp]:
        known = {a.key for a in self._apps}
        return [c for c in candidates if c.key not in known]

    async def launch(self, path: str) -> None:
        await self._call("launch app", self.backend.launch(path))
        if self._closed:
            return
        # show it as running right away; the next poll confirms or corrects it
        self.status.mark_running(path)
        self._notify(STATUS_CHANGED)

    # ----------------------------
    # Running state
    # ----------------------------
    async def refresh_status(self) -> None:
        try:
            await self.status.refresh(self.paths)
        except ExternalCallError as e:
            self._set_error(e)
            raise
        # before the first successful load the refresh checked nothing
        if self._loaded:
            self._set_error(None)
        self._notify(STATUS_CHANGED)

    async def _refresh_quietly(self) -> None:
        try:
            await self.refresh_status()
        except ExternalCallError as e:
            logger.warning("Status refresh failed: %s", e)

    # ----------------------------
    # Icons
    # ----------------------------
    def set_icons_enabled(self, enabled: bool) -> None:
        was_enabled, self._icons_enabled = self._icons_enabled, bool(enabled)
        if self._icons_enabled and not was_enabled and self._loaded:
            self._spawn(self.icons.fetch_all(self.paths))

    # ----------------------------
    # Order
    # ----------------------------
    def move_app(self, source: str, target: str) -> bool:
        changed = self.ledger.move(source, target)
        if changed:
            self._notify(ORDER_CHANGED)
        return changed

    def move_app_to(self, source: str, index: int) -> bool:
        changed = self.ledger.move_to(source, index)
        if changed:
            self._notify(ORDER_CHANGED)
        return changed

    def nudge_app(self, source: str, delta: int) -> bool:
        """Move `source` by `delta` places from where the ledger has it."""
        index = self.ledger.index_of(source)
        if index is None:
            return False
        return self.move_app_to(source, max(0, index + delta))
