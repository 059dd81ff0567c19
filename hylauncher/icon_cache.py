#===============================================================================
#  HYMetaLab_Launcher | icon_cache.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-17
#  Last Update : 2026-10-17
#
#  Summary
#  -------
#  Process-lifetime cache of app icons (PNG bytes keyed by app path).
#  Icons are fetched lazily; a failed fetch just leaves the entry empty and the
#  tile shows its letter glyph instead.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Dict, Iterable, List, Optional

logger = logging.getLogger("hylauncher.icons")

FetchIcon = Callable[[str], Awaitable[bytes]]


@dataclass(frozen=True)
class IconResult:
    path: str
    image: Optional[bytes] = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None and bool(self.image)


class IconCache:
    def __init__(self, fetch_icon: FetchIcon, on_update: Optional[Callable[[str], None]] = None):
        self._fetch_icon = fetch_icon
        self._on_update = on_update
        self._icons: Dict[str, bytes] = {}
        self._pending: Dict[str, asyncio.Task] = {}
        self._live = True

    def get(self, path: str) -> Optional[bytes]:
        return self._icons.get(path)

    def __contains__(self, path: str) -> bool:
        return path in self._icons

    @property
    def icons(self) -> Dict[str, bytes]:
        return dict(self._icons)

    async def _load(self, path: str) -> IconResult:
        try:
            image = await self._fetch_icon(path)
        except Exception as e:
            return IconResult(path, error=e)
        if not image:
            return IconResult(path, error=ValueError("empty icon data"))
        return IconResult(path, image=image)

    async def _fetch_and_store(self, path: str) -> None:
        try:
            result = await self._load(path)
        finally:
            self._pending.pop(path, None)

        if not result.ok:
            logger.debug("No icon for %s: %s", path, result.error)
            return
        if not self._live:
            return
        self._icons[path] = result.image  # type: ignore[assignment]
        if self._on_update:
            self._on_update(path)

    async def fetch_one(self, path: str) -> None:
        if path in self._icons:
            return
        task = self._pending.get(path)
        if task is None:
            task = asyncio.get_running_loop().create_task(self._fetch_and_store(path))
            self._pending[path] = task
        # shield: one caller being cancelled must not cancel the shared fetch
        await asyncio.shield(task)

    async def fetch_all(self, paths: Iterable[str]) -> None:
        uncached: List[str] = []
        for p in paths:
            if p not in self._icons and p not in uncached:
                uncached.append(p)
        if not uncached:
            return
        outcomes = await asyncio.gather(*(self.fetch_one(p) for p in uncached), return_exceptions=True)
        for p, outcome in zip(uncached, outcomes):
            if isinstance(outcome, BaseException):
                logger.debug("Icon warm-up for %s ended with %r", p, outcome)

    def close(self) -> None:
        self._live = False
