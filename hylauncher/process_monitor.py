#===============================================================================
#  HYMetaLab_Launcher | process_monitor.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-17
#  Last Update : 2026-10-17
#
#  Summary
#  -------
#  Detects whether registered app bundles are running by matching the command
#  lines of live processes against "/<Bundle>.app/Contents/MacOS/".
#  Helper processes shipped inside a bundle (backend-sidecar) do not count.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

from typing import Iterable, List

import psutil

from .constants import APP_BUNDLE_SUFFIX, SIDECAR_PROCESS_MARKER
from .fs_discovery import bundle_name
from .models import RunningStatus


def process_command_lines() -> List[str]:
    """One snapshot of every visible process command line."""
    lines: List[str] = []
    for p in psutil.process_iter(attrs=["cmdline", "exe"]):
        cmdline = p.info.get("cmdline") or []
        if cmdline:
            lines.append(" ".join(cmdline))
        elif p.info.get("exe"):
            lines.append(p.info["exe"])
    return lines


def is_launchable_app_process_line(command_line: str, bundle: str) -> bool:
    line = command_line.strip().lower()
    if not line:
        return False
    segment = f"/{bundle}{APP_BUNDLE_SUFFIX}/contents/macos/".lower()
    if segment not in line:
        return False
    return SIDECAR_PROCESS_MARKER not in line


def is_app_running_in_commands(bundle: str, command_lines: Iterable[str]) -> bool:
    return any(is_launchable_app_process_line(line, bundle) for line in command_lines)


def running_statuses(paths: Iterable[str], command_lines: Iterable[str]) -> List[RunningStatus]:
    lines = list(command_lines)
    out: List[RunningStatus] = []
    for path in paths:
        name = bundle_name(path)
        running = bool(name) and is_app_running_in_commands(name, lines)
        out.append(RunningStatus(path=path, running=running))
    return out


def query_running(paths: Iterable[str]) -> List[RunningStatus]:
    return running_statuses(paths, process_command_lines())
