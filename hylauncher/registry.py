#===============================================================================
#  HYMetaLab_Launcher | registry.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-17
#  Last Update : 2026-10-17
#
#  Summary
#  -------
#  The app registry: the authoritative list of registered apps plus the
#  operations around it (discover, launch, running state, icons).
#
#  RegistryBackend is the async interface the synchronizer talks to.
#  LocalRegistry implements it on this machine: apps.json under
#  ~/.hymetalab/config, filesystem discovery, psutil and Pillow. Blocking work
#  runs in worker threads so the event loop never stalls.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import asyncio
import json
import logging
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterable, List, Optional

from .constants import APPS_FILE_NAME, config_dir, install_dirs
from .errors import RegistryError
from .fs_discovery import bundle_name, normalize_app_path, scan_installed_apps
from .icon_loader import load_icon_png
from .launcher import launch_bundle
from .models import RegisteredApp, RunningStatus, identity_key, sort_and_dedupe_apps
from .process_monitor import query_running

logger = logging.getLogger("hylauncher.registry")


class RegistryBackend(ABC):
    """Async operations the synchronizer relies on."""

    @abstractmethod
    async def list_registered(self) -> List[RegisteredApp]:
        ...

    @abstractmethod
    async def add_registered(self, path: str, name: Optional[str] = None) -> List[RegisteredApp]:
        """Add (or replace) an app; returns the full updated list."""

    @abstractmethod
    async def remove_registered(self, path: str) -> List[RegisteredApp]:
        """Remove an app; returns the full updated list."""

    @abstractmethod
    async def discover_installed(self) -> List[RegisteredApp]:
        """Installed apps found on this machine. Never modifies the registry."""

    @abstractmethod
    async def launch(self, path: str) -> None:
        ...

    @abstractmethod
    async def query_running(self, paths: List[str]) -> List[RunningStatus]:
        ...

    @abstractmethod
    async def fetch_icon(self, path: str) -> bytes:
        ...


# ----------------------------
# apps.json
# ----------------------------
def apps_file_path() -> Path:
    return config_dir() / APPS_FILE_NAME


def read_registered_apps(apps_file: Path) -> List[RegisteredApp]:
    if not apps_file.exists():
        return []
    try:
        raw = json.loads(apps_file.read_text(encoding="utf-8"))
    except OSError as e:
        raise RegistryError(f"Failed to read app registry: {e}") from e
    except ValueError as e:
        raise RegistryError(f"Failed to parse app registry: {e}") from e

    if not isinstance(raw, list):
        raise RegistryError("Failed to parse app registry: expected a list")
    try:
        apps = [RegisteredApp.from_dict(item) for item in raw]
    except (KeyError, TypeError) as e:
        raise RegistryError(f"Failed to parse app registry: {e}") from e
    return sort_and_dedupe_apps(apps)


def write_registered_apps(apps_file: Path, apps: Iterable[RegisteredApp]) -> None:
    try:
        apps_file.parent.mkdir(parents=True, exist_ok=True)
        apps_file.write_text(json.dumps([a.to_dict() for a in apps], indent=2), encoding="utf-8")
    except OSError as e:
        raise RegistryError(f"Failed to write app registry: {e}") from e


class LocalRegistry(RegistryBackend):
    def __init__(self, apps_file: Optional[Path] = None, search_dirs: Optional[List[Path]] = None):
        self.apps_file = Path(apps_file) if apps_file else apps_file_path()
        self.search_dirs = list(search_dirs) if search_dirs is not None else install_dirs()
        # read-modify-write of apps.json happens in worker threads
        self._file_lock = threading.Lock()

    # --- blocking implementations ---
    def _list(self) -> List[RegisteredApp]:
        with self._file_lock:
            return read_registered_apps(self.apps_file)

    def _add(self, path: str, name: Optional[str]) -> List[RegisteredApp]:
        normalized = normalize_app_path(path)
        fallback = bundle_name(normalized)
        if not fallback:
            raise RegistryError("Failed to derive app name from path.")
        display = (name if name is not None else fallback).strip()
        if not display:
            raise RegistryError("App name cannot be empty.")

        with self._file_lock:
            apps = read_registered_apps(self.apps_file)
            new_app = RegisteredApp(name=display, path=normalized)
            apps = [a for a in apps if a.key != new_app.key] + [new_app]
            apps = sort_and_dedupe_apps(apps)
            write_registered_apps(self.apps_file, apps)
        logger.info("Registered %s (%s)", display, normalized)
        return apps

    def _remove(self, path: str) -> List[RegisteredApp]:
        trimmed = (path or "").strip()
        if not trimmed:
            raise RegistryError("App path is required.")
        k = identity_key(trimmed)
        with self._file_lock:
            apps = [a for a in read_registered_apps(self.apps_file) if a.key != k]
            apps = sort_and_dedupe_apps(apps)
            write_registered_apps(self.apps_file, apps)
        logger.info("Unregistered %s", trimmed)
        return apps

    # --- RegistryBackend ---
    async def list_registered(self) -> List[RegisteredApp]:
        return await asyncio.to_thread(self._list)

    async def add_registered(self, path: str, name: Optional[str] = None) -> List[RegisteredApp]:
        return await asyncio.to_thread(self._add, path, name)

    async def remove_registered(self, path: str) -> List[RegisteredApp]:
        return await asyncio.to_thread(self._remove, path)

    async def discover_installed(self) -> List[RegisteredApp]:
        return await asyncio.to_thread(scan_installed_apps, self.search_dirs)

    async def launch(self, path: str) -> None:
        await asyncio.to_thread(launch_bundle, path)

    async def query_running(self, paths: List[str]) -> List[RunningStatus]:
        return await asyncio.to_thread(query_running, list(paths))

    async def fetch_icon(self, path: str) -> bytes:
        return await asyncio.to_thread(load_icon_png, path)
