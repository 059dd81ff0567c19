#===============================================================================
#  HYMetaLab_Launcher | status_cache.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-17
#  Last Update : 2026-10-17
#
#  Summary
#  -------
#  Last known running / not-running state per registered app, plus the
#  fixed-interval poller that keeps it fresh.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Dict, Iterable, List, Optional

from .constants import STATUS_REFRESH_INTERVAL_S
from .errors import ExternalCallError, LauncherError
from .models import RunningStatus

logger = logging.getLogger("hylauncher.status")

QueryRunning = Callable[[List[str]], Awaitable[List[RunningStatus]]]


class StatusCache:
    """Running flags keyed by app path.

    Entries written by `mark_running` are "assumed" until a poll sent after the
    mark confirms or corrects them. Each query gets a ticket; a response older
    than the last applied one is dropped.
    """

    def __init__(self, query_running: QueryRunning):
        self._query_running = query_running
        self._running: Dict[str, bool] = {}
        # path -> last ticket issued when it was marked
        self._assumed: Dict[str, int] = {}
        self._sent = 0
        self._applied = 0
        self._live = True

    @property
    def statuses(self) -> Dict[str, bool]:
        return dict(self._running)

    def is_running(self, path: str) -> bool:
        return self._running.get(path, False)

    def is_assumed(self, path: str) -> bool:
        return path in self._assumed

    def clear(self) -> None:
        self._sent += 1
        self._applied = self._sent
        self._running = {}
        self._assumed = {}

    async def refresh(self, paths: Iterable[str]) -> None:
        paths = list(paths)
        if not paths:
            self.clear()
            return

        self._sent += 1
        ticket = self._sent
        try:
            rows = await self._query_running(paths)
        except Exception as e:
            raise ExternalCallError("query running apps", e) from e

        if not self._live or ticket < self._applied:
            return
        self._applied = ticket
        running = {row.path: bool(row.running) for row in rows}
        # marks made while this query was in flight outrank its answer
        assumed = {p: t for p, t in self._assumed.items() if t >= ticket}
        for p in assumed:
            running[p] = True
        self._running = running
        self._assumed = assumed

    def mark_running(self, path: str) -> None:
        if not self._live:
            return
        running = dict(self._running)
        running[path] = True
        self._running = running
        self._assumed = {**self._assumed, path: self._sent}

    def close(self) -> None:
        self._live = False


class StatusPoller:
    """Calls `refresh()` every `interval` seconds until stopped.

    A failing refresh is logged and the poller keeps going.
    """

    def __init__(self, refresh: Callable[[], Awaitable[None]], interval: float = STATUS_REFRESH_INTERVAL_S):
        self._refresh = refresh
        self.interval = interval
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.get_running_loop().create_task(self._run(), name="status-poller")

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.interval)
            try:
                await self._refresh()
            except LauncherError as e:
                logger.warning("Status refresh failed: %s", e)

    async def __aenter__(self) -> "StatusPoller":
        self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.stop()
