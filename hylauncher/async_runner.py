#===============================================================================
#  HYMetaLab_Launcher | async_runner.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-17
#  Last Update : 2026-10-17
#
#  Summary
#  -------
#  Runs the synchronizer's asyncio loop on one background thread so the Qt
#  event loop stays responsive. The window hands work over with submit()/call()
#  and gets concurrent.futures.Future objects back.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import asyncio
import concurrent.futures
import logging
import threading
from typing import Any, Callable, Coroutine, Optional

logger = logging.getLogger("hylauncher.loop")


class AsyncRunner:
    def __init__(self, name: str = "hylauncher-sync"):
        self.name = name
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._thread: Optional[threading.Thread] = None
        self._ready = threading.Event()
        self._stopping = False

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            raise RuntimeError("AsyncRunner is not started")
        return self._loop

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.running:
            return
        self._ready.clear()
        self._thread = threading.Thread(target=self._run, name=self.name, daemon=True)
        self._thread.start()
        self._ready.wait()

    def _run(self) -> None:
        loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)
        self._loop = loop
        self._ready.set()
        try:
            loop.run_forever()
        finally:
            pending = [t for t in asyncio.all_tasks(loop) if not t.done()]
            for t in pending:
                t.cancel()
            if pending:
                loop.run_until_complete(asyncio.gather(*pending, return_exceptions=True))
            loop.run_until_complete(loop.shutdown_asyncgens())
            loop.close()
            logger.debug("Event loop thread finished")

    def submit(self, coro: Coroutine[Any, Any, Any]) -> concurrent.futures.Future:
        return asyncio.run_coroutine_threadsafe(coro, self.loop)

    def call(self, fn: Callable[..., Any], *args: Any) -> concurrent.futures.Future:
        """Run a plain function on the loop thread."""
        future: concurrent.futures.Future = concurrent.futures.Future()

        def _invoke() -> None:
            if not future.set_running_or_notify_cancel():
                return
            try:
                future.set_result(fn(*args))
            except Exception as e:
                future.set_exception(e)

        self.loop.call_soon_threadsafe(_invoke)
        return future

    def stop(self, timeout: float = 5.0) -> None:
        if self._thread is None:
            return
        if not self._stopping:
            self._stopping = True
            self.loop.call_soon_threadsafe(self.loop.stop)
        self._thread.join(timeout)
        if self._thread.is_alive():
            # keep the handles so a later stop() can join it again
            logger.warning("Event loop thread %s still busy after %.1fs; not stopped yet", self.name, timeout)
            return
        self._thread = None
        self._loop = None
        self._stopping = False
