"""Discover screenshots, banners, and icons in a plugin's ``assets`` folder.

Files are found purely by WordPress.org naming convention
(``screenshot-<N>.png``, ``banner-772x250.jpg``, ``icon.svg`` ...) and turned
into public URLs below a configurable base. Discovery never raises: a missing
or unreadable directory yields an empty :class:`AssetInventory`.

Example
-------
>>> from pathlib import Path
>>> from reclaim_details.assets import discover_assets
>>> inventory = discover_assets(Path("my-plugin"), "https://example.org/p")  # doctest: +SKIP
>>> inventory.screenshots[1].src  # doctest: +SKIP
'https://example.org/p/assets/screenshot-1.png'
"""

from __future__ import annotations

import dataclasses as dc
import logging
import re
import typing as typ

from ._constants import (
    ASSETS_DIRNAME,
    BANNER_STEMS,
    ICON_STEMS,
    ICON_SVG_FILENAME,
    RASTER_EXTENSIONS,
    SCREENSHOT_EXTENSIONS,
)

if typ.TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

SCREENSHOT_PATTERN = re.compile(
    r"^screenshot-(\d+)\.(?:" + "|".join(SCREENSHOT_EXTENSIONS) + r")$"
)


@dc.dataclass(frozen=True, slots=True)
class ScreenshotAsset:
    """A screenshot file discovered under ``assets/``.

    Attributes
    ----------
    number : int
        1-based number taken from the ``screenshot-<N>`` filename.
    filename : str
        Basename of the file on disk.
    src : str
        Public URL of the file.
    """

    number: int
    filename: str
    src: str


@dc.dataclass(frozen=True, slots=True)
class AssetInventory:
    """Screenshots, banners, and icons available for one plugin."""

    screenshots: dict[int, ScreenshotAsset] = dc.field(default_factory=dict)
    banners: dict[str, str] = dc.field(default_factory=dict)
    icons: dict[str, str] = dc.field(default_factory=dict)

    @property
    def ordered_screenshots(self) -> list[ScreenshotAsset]:
        """Return screenshots sorted by number, ignoring gaps."""
        return [self.screenshots[number] for number in sorted(self.screenshots)]

    @property
    def icon_url(self) -> str | None:
        """Return the preferred icon: SVG first, then 2x, then 1x."""
        for key in ("svg", "2x", "1x"):
            if key in self.icons:
                return self.icons[key]
        return None


def asset_url(base_url: str, filename: str) -> str:
    """Join ``base_url`` with ``assets/<filename>``."""
    base = base_url.rstrip("/")
    relative = f"{ASSETS_DIRNAME}/{filename}"
    return f"{base}/{relative}" if base else relative


def _list_files(assets_dir: Path) -> list[str]:
    """Return sorted file names in ``assets_dir``; empty when unreadable."""
    try:
        return sorted(entry.name for entry in assets_dir.iterdir() if entry.is_file())
    except OSError as exc:
        logger.warning("Unable to list assets in %s: %s", assets_dir, exc)
        return []


def _discover_screenshots(
    filenames: list[str], base_url: str
) -> dict[int, ScreenshotAsset]:
    # Lexicographic order makes the last match per number deterministic:
    # png beats jpg, jpg beats jpeg, jpeg beats gif.
    found: dict[int, ScreenshotAsset] = {}
    for filename in filenames:
        match = SCREENSHOT_PATTERN.match(filename)
        if not match:
            continue
        number = int(match.group(1))
        if number in found:
            logger.debug(
                "Screenshot %s replaces %s", filename, found[number].filename
            )
        found[number] = ScreenshotAsset(
            number=number, filename=filename, src=asset_url(base_url, filename)
        )
    return {number: found[number] for number in sorted(found)}


def _probe(
    filenames: set[str], stems: dict[str, str], base_url: str
) -> dict[str, str]:
    """Resolve each stem to the first existing raster file, PNG before JPG."""
    resolved: dict[str, str] = {}
    for key, stem in stems.items():
        for extension in RASTER_EXTENSIONS:
            candidate = f"{stem}.{extension}"
            if candidate in filenames:
                resolved[key] = asset_url(base_url, candidate)
                break
    return resolved


def discover_assets(plugin_root: Path, base_url: str = "") -> AssetInventory:
    """Build the :class:`AssetInventory` for the plugin at ``plugin_root``.

    Parameters
    ----------
    plugin_root : Path
        Plugin directory containing the ``assets`` folder.
    base_url : str, optional
        Public URL of the plugin directory; asset URLs are formed as
        ``<base_url>/assets/<filename>``. Defaults to relative URLs.

    Returns
    -------
    AssetInventory
        Discovered assets; empty when the folder does not exist.
    """
    assets_dir = plugin_root / ASSETS_DIRNAME
    if not assets_dir.is_dir():
        logger.debug("No assets directory at %s", assets_dir)
        return AssetInventory()

    filenames = _list_files(assets_dir)
    available = set(filenames)
    icons = _probe(available, ICON_STEMS, base_url)
    if ICON_SVG_FILENAME in available:
        icons["svg"] = asset_url(base_url, ICON_SVG_FILENAME)

    return AssetInventory(
        screenshots=_discover_screenshots(filenames, base_url),
        banners=_probe(available, BANNER_STEMS, base_url),
        icons=icons,
    )


__all__ = ["AssetInventory", "ScreenshotAsset", "asset_url", "discover_assets"]
