#===============================================================================
#  HYMetaLab_Launcher | errors.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-17
#  Last Update : 2026-10-17
#
#  Summary
#  -------
#  Exception types raised by the registry, the synchronizer and the state store.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

from typing import Optional


class LauncherError(Exception):
    """Base class for launcher errors."""


class ValidationError(LauncherError):
    """Malformed input, rejected before any registry call."""


class RegistryError(LauncherError):
    """Raised by the local registry backend (bad bundle path, unreadable apps.json, ...)."""


class ExternalCallError(LauncherError):
    """A registry / launch / status / icon call failed. Prior state is kept."""

    def __init__(self, operation: str, cause: Optional[BaseException] = None):
        self.operation = operation
        self.cause = cause
        detail = str(cause) if cause is not None and str(cause) else "unknown error"
        super().__init__(f"{operation} failed: {detail}")


class PersistenceError(LauncherError):
    """Local preference file could not be read or written. Never shown to the user."""
