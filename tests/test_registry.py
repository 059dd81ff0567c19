"""Tests for the file-backed registry (apps.json + bundle discovery)."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path

import pytest

from hylauncher.errors import RegistryError
from hylauncher.fs_discovery import bundle_name, has_bundle_suffix, normalize_app_path, scan_installed_apps
from hylauncher.models import RegisteredApp, sort_and_dedupe_apps
from hylauncher.registry import LocalRegistry, read_registered_apps


def make_bundle(folder: Path, name: str) -> Path:
    bundle = folder / f"{name}.app"
    (bundle / "Contents" / "MacOS").mkdir(parents=True)
    return bundle


@pytest.fixture
def apps_dir(tmp_path: Path) -> Path:
    d = tmp_path / "Applications"
    d.mkdir()
    return d


@pytest.fixture
def registry(tmp_path: Path, apps_dir: Path) -> LocalRegistry:
    return LocalRegistry(apps_file=tmp_path / "config" / "apps.json", search_dirs=[apps_dir])


def test_sort_and_dedupe_by_path_case_insensitively() -> None:
    apps = [
        RegisteredApp(name="Zed", path="/Applications/Zed.app"),
        RegisteredApp(name="alpha", path="/Applications/Alpha.app"),
        RegisteredApp(name="Alpha Renamed", path="/applications/alpha.app"),
    ]
    result = sort_and_dedupe_apps(apps)
    assert [a.name for a in result] == ["Alpha Renamed", "Zed"]


def test_bundle_helpers() -> None:
    assert bundle_name("/Applications/Companion.app") == "Companion"
    assert bundle_name("/Applications/Companion.app/") == "Companion"
    assert has_bundle_suffix("/Applications/Safari.APP")
    assert not has_bundle_suffix("/Applications/Safari")
    assert not has_bundle_suffix(".app")


def test_missing_registry_file_is_empty(registry: LocalRegistry) -> None:
    assert asyncio.run(registry.list_registered()) == []


def test_add_uses_bundle_name_and_persists(registry: LocalRegistry, apps_dir: Path) -> None:
    bundle = make_bundle(apps_dir, "Companion")
    apps = asyncio.run(registry.add_registered(str(bundle)))

    assert [a.name for a in apps] == ["Companion"]
    assert apps[0].path == str(bundle.resolve())
    on_disk = json.loads(registry.apps_file.read_text(encoding="utf-8"))
    assert on_disk == [{"name": "Companion", "path": str(bundle.resolve())}]


def test_add_with_display_name_replaces_existing_entry(registry: LocalRegistry, apps_dir: Path) -> None:
    bundle = make_bundle(apps_dir, "Companion")
    asyncio.run(registry.add_registered(str(bundle)))
    apps = asyncio.run(registry.add_registered(str(bundle), "  My Companion "))
    assert [a.name for a in apps] == ["My Companion"]


def test_add_rejects_blank_name(registry: LocalRegistry, apps_dir: Path) -> None:
    bundle = make_bundle(apps_dir, "Companion")
    with pytest.raises(RegistryError, match="name cannot be empty"):
        asyncio.run(registry.add_registered(str(bundle), "   "))
    assert not registry.apps_file.exists()


@pytest.mark.parametrize("raw", ["", "   "])
def test_add_requires_a_path(registry: LocalRegistry, raw: str) -> None:
    with pytest.raises(RegistryError, match="App path is required"):
        asyncio.run(registry.add_registered(raw))


def test_add_rejects_missing_or_non_bundle_paths(registry: LocalRegistry, apps_dir: Path) -> None:
    with pytest.raises(RegistryError, match="Invalid app bundle path"):
        asyncio.run(registry.add_registered(str(apps_dir / "Ghost.app")))

    plain = apps_dir / "notes"
    plain.mkdir()
    with pytest.raises(RegistryError, match="Invalid app bundle path"):
        normalize_app_path(str(plain))


def test_remove_matches_case_insensitively(registry: LocalRegistry, apps_dir: Path) -> None:
    a = make_bundle(apps_dir, "Alpha")
    b = make_bundle(apps_dir, "Bravo")
    asyncio.run(registry.add_registered(str(a)))
    asyncio.run(registry.add_registered(str(b)))

    apps = asyncio.run(registry.remove_registered(str(a.resolve()).upper()))
    assert [x.name for x in apps] == ["Bravo"]
    assert [x.name for x in read_registered_apps(registry.apps_file)] == ["Bravo"]


def test_remove_requires_a_path(registry: LocalRegistry) -> None:
    with pytest.raises(RegistryError):
        asyncio.run(registry.remove_registered("  "))


def test_corrupt_registry_file_raises(registry: LocalRegistry) -> None:
    registry.apps_file.parent.mkdir(parents=True)
    registry.apps_file.write_text("[{oops", encoding="utf-8")
    with pytest.raises(RegistryError, match="Failed to parse app registry"):
        asyncio.run(registry.list_registered())

    registry.apps_file.write_text(json.dumps({"name": "x"}), encoding="utf-8")
    with pytest.raises(RegistryError):
        asyncio.run(registry.list_registered())


def test_discovery_scans_one_level_and_skips_non_bundles(registry: LocalRegistry, apps_dir: Path) -> None:
    make_bundle(apps_dir, "Bravo")
    make_bundle(apps_dir, "alpha")
    (apps_dir / "README.txt").write_text("hi", encoding="utf-8")
    (apps_dir / "Utilities").mkdir()
    make_bundle(apps_dir / "Utilities", "Nested")

    found = asyncio.run(registry.discover_installed())
    assert [a.name for a in found] == ["alpha", "Bravo"]
    assert not registry.apps_file.exists()


def test_discovery_ignores_missing_folders(tmp_path: Path, apps_dir: Path) -> None:
    make_bundle(apps_dir, "Alpha")
    found = scan_installed_apps([tmp_path / "nope", apps_dir, apps_dir])
    assert [a.name for a in found] == ["Alpha"]
