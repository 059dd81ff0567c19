#===============================================================================
#  HYMetaLab_Launcher | icon_loader.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-17
#  Last Update : 2026-10-17
#
#  Summary
#  -------
#  Reads an app bundle's icon (Contents/Resources/*.icns named by Info.plist)
#  and converts it to PNG bytes that Qt can display anywhere.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import io
import plistlib
from pathlib import Path
from typing import Optional

from PIL import Image

from .constants import ICON_PNG_SIZE
from .errors import RegistryError


def _plist_icon_name(contents: Path) -> Optional[str]:
    info = contents / "Info.plist"
    if not info.exists():
        return None
    try:
        with open(info, "rb") as f:
            data = plistlib.load(f)
    except Exception:
        return None
    name = data.get("CFBundleIconFile") or data.get("CFBundleIconName")
    return str(name) if name else None


def find_icon_file(bundle: Path) -> Optional[Path]:
    """Icon named by Info.plist, else the first .icns in Resources."""
    resources = bundle / "Contents" / "Resources"
    name = _plist_icon_name(bundle / "Contents")
    if name:
        candidate = resources / name
        if not candidate.suffix:
            candidate = candidate.with_suffix(".icns")
        if candidate.is_file():
            return candidate

    if resources.is_dir():
        icns = sorted(p for p in resources.iterdir() if p.is_file() and p.suffix.lower() == ".icns")
        if icns:
            return icns[0]
    return None


def load_icon_png(bundle_path: str, size: int = ICON_PNG_SIZE) -> bytes:
    icon_file = find_icon_file(Path(bundle_path))
    if icon_file is None:
        raise RegistryError(f"No icon found for {bundle_path}")

    try:
        with Image.open(icon_file) as img:
            img = img.convert("RGBA")
            img.thumbnail((size, size))
            buf = io.BytesIO()
            img.save(buf, format="PNG")
    except Exception as e:
        raise RegistryError(f"Unreadable icon {icon_file}: {e}") from e
    return buf.getvalue()
