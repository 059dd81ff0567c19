"""Tests for the window's pure helpers (no QApplication needed)."""

from __future__ import annotations

from hylauncher.constants import APP_TITLE, METRO_TILE_COLORS
from hylauncher.main_window import header_text, tile_color_for_path, window_style


def test_header_text_uses_plain_separator() -> None:
    text = header_text("Ada")
    assert text == f"<b>{APP_TITLE}</b> | Welcome back, Ada"
    assert "—" not in text


def test_tile_color_is_stable_and_case_insensitive() -> None:
    a = tile_color_for_path("/Applications/Alpha.app")
    assert a in METRO_TILE_COLORS
    assert tile_color_for_path("/applications/alpha.app") == a


def test_window_style_follows_theme() -> None:
    assert "#111111" in window_style("light")
    assert "#111111" not in window_style("dark")
