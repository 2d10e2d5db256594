"""Shared fixtures for reclaim_details tests.

The fixtures build throwaway plugin directories under ``tmp_path`` so tests can
exercise readme parsing, asset discovery, and record assembly against real
files without touching a WordPress install.
"""

from __future__ import annotations

import typing as typ
from textwrap import dedent

import pytest

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

SAMPLE_PLUGIN_PHP = dedent(
    """\
    <?php
    /**
     * Plugin Name: Sample Plugin
     * Plugin URI: https://example.org/sample-plugin
     * Description: Local details for the sample plugin.
     * Version: 1.4.2
     * Author: Jane Doe
     * Author URI: https://example.org/jane
     * Requires PHP: 8.1
     */
    """
)

SAMPLE_README = dedent(
    """\
    === Sample Plugin ===
    Contributors: jane, joe
    Tags: details, readme
    Requires at least: 6.0
    Tested up to: 6.5
    Requires PHP: 8.1
    Stable tag: 1.4.2
    License: GPLv2 or later

    Shows plugin details from local files.

    == Description ==
    Sample Plugin renders **details**.

    == Installation ==
    1. Upload the plugin.
    2. Activate it.

    == Credits ==
    Thanks to everyone.

    == FAQ ==
    = Does it work? =
    Yes.

    == Screenshots ==
    1. Dashboard view
    2. Settings page

    == Changelog ==
    = 1.4.2 =
    * Fixed things.
    """
)


@pytest.fixture
def sample_readme() -> str:
    """Return a readme exercising headers, custom sections, and screenshots."""
    return SAMPLE_README


@pytest.fixture
def make_plugin(tmp_path: Path) -> cabc.Callable[..., Path]:
    """Return a factory that writes a plugin directory and returns its root."""

    def _make(
        slug: str = "sample-plugin",
        *,
        readme: str | None = SAMPLE_README,
        php: str | None = SAMPLE_PLUGIN_PHP,
        assets: cabc.Iterable[str] = (),
    ) -> Path:
        root = tmp_path / slug
        root.mkdir()
        if php is not None:
            (root / f"{slug}.php").write_text(php, encoding="utf-8")
        if readme is not None:
            (root / "readme.txt").write_text(readme, encoding="utf-8")
        asset_names = list(assets)
        if asset_names:
            assets_dir = root / "assets"
            assets_dir.mkdir()
            for name in asset_names:
                (assets_dir / name).write_bytes(b"\x89PNG")
        return root

    return _make
