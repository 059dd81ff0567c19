#===============================================================================
#  HYMetaLab_Launcher | fs_discovery.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-02-10
#  Last Update : 2026-10-17
#
#  Summary
#  -------
#  Filesystem helpers for application bundles (*.app folders): validation,
#  path normalization and discovery of installed apps.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Optional

from .constants import APP_BUNDLE_SUFFIX
from .errors import RegistryError
from .models import RegisteredApp, sort_and_dedupe_apps


def has_bundle_suffix(path: str) -> bool:
    """Structural check only (no filesystem access)."""
    cleaned = path.strip().rstrip("/\\")
    return len(cleaned) > len(APP_BUNDLE_SUFFIX) and cleaned.lower().endswith(APP_BUNDLE_SUFFIX)


def is_app_bundle(p: Path) -> bool:
    return p.suffix.lower() == APP_BUNDLE_SUFFIX and p.is_dir()


def bundle_name(path: str) -> Optional[str]:
    """'/Applications/Companion.app' -> 'Companion'."""
    stem = Path(path.rstrip("/\\")).stem
    return stem or None


def safe_path(p: Path) -> str:
    """Canonical string for a bundle path (resolved when possible, original casing)."""
    try:
        return str(p.resolve())
    except Exception:
        return str(p.absolute())


def normalize_app_path(raw: str) -> str:
    """Validate an existing .app directory and return its canonical path."""
    trimmed = (raw or "").strip()
    if not trimmed:
        raise RegistryError("App path is required.")
    p = Path(trimmed)
    if not is_app_bundle(p):
        raise RegistryError(f"Invalid app bundle path: {trimmed}. Expected an existing {APP_BUNDLE_SUFFIX} directory.")
    return safe_path(p)


def scan_install_dir(folder: Path) -> List[RegisteredApp]:
    """Scan one folder level for app bundles (no recursion)."""
    apps: List[RegisteredApp] = []
    if not folder.is_dir():
        return apps
    try:
        items = sorted(folder.iterdir(), key=lambda p: p.name.lower())
    except OSError:
        return apps

    for item in items:
        if not is_app_bundle(item):
            continue
        path = safe_path(item)
        name = bundle_name(path)
        if not name:
            continue
        apps.append(RegisteredApp(name=name, path=path))
    return apps


def scan_installed_apps(folders: Iterable[Path]) -> List[RegisteredApp]:
    found: List[RegisteredApp] = []
    for folder in folders:
        found.extend(scan_install_dir(folder))
    return sort_and_dedupe_apps(found)
