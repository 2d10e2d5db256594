"""Read the WordPress header comment block of a plugin's main PHP file.

WordPress identifies a plugin by ``Plugin Name:``-style lines in the first
few kilobytes of its main file. This module reads those lines into a
:class:`PluginHeader` and locates the main file inside an explicitly supplied
plugin root directory.
"""

from __future__ import annotations

import dataclasses as dc
import logging
import re
import typing as typ

if typ.TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

HEADER_READ_BYTES = 8192
PLUGIN_NAME_MARKER = "Plugin Name:"
HEADER_NAMES: dict[str, str] = {
    "name": "Plugin Name",
    "plugin_uri": "Plugin URI",
    "version": "Version",
    "description": "Description",
    "author": "Author",
    "author_uri": "Author URI",
    "text_domain": "Text Domain",
    "requires_wp": "Requires at least",
    "requires_php": "Requires PHP",
}
COMMENT_CLOSE_PATTERN = re.compile(r"\s*(?:\*/|\?>).*$")


@dc.dataclass(frozen=True, slots=True)
class PluginHeader:
    """Fields from a plugin's header comment; empty strings when absent."""

    name: str = ""
    plugin_uri: str = ""
    version: str = ""
    description: str = ""
    author: str = ""
    author_uri: str = ""
    text_domain: str = ""
    requires_wp: str = ""
    requires_php: str = ""

    @classmethod
    def from_mapping(cls, payload: typ.Mapping[str, typ.Any]) -> PluginHeader:
        """Build a header from a mapping, ignoring unknown keys."""
        known = {field.name for field in dc.fields(cls)}
        values = {
            key: str(value).strip()
            for key, value in payload.items()
            if key in known and value is not None
        }
        return cls(**values)


def _header_pattern(label: str) -> re.Pattern[str]:
    return re.compile(
        rf"^(?:[ \t]*<\?php)?[ \t/*#@]*{re.escape(label)}:(.*)$",
        re.IGNORECASE | re.MULTILINE,
    )


HEADER_PATTERNS: dict[str, re.Pattern[str]] = {
    field: _header_pattern(label) for field, label in HEADER_NAMES.items()
}


def _read_head(path: Path) -> str:
    """Return the first :data:`HEADER_READ_BYTES` of ``path`` as text."""
    with path.open("rb") as handle:
        chunk = handle.read(HEADER_READ_BYTES)
    return chunk.decode("utf-8", errors="replace").replace("\r", "\n")


def parse_plugin_header(text: str) -> PluginHeader:
    """Extract the known header fields from PHP source text."""
    values: dict[str, str] = {}
    for field, pattern in HEADER_PATTERNS.items():
        match = pattern.search(text)
        if match:
            values[field] = COMMENT_CLOSE_PATTERN.sub("", match.group(1)).strip()
    return PluginHeader(**values)


def read_plugin_header(path: Path) -> PluginHeader:
    """Read the header block of ``path``; an unreadable file gives an empty header."""
    try:
        text = _read_head(path)
    except OSError as exc:
        logger.debug("Unable to read plugin header from %s: %s", path, exc)
        return PluginHeader()
    return parse_plugin_header(text)


def is_main_plugin_file(path: Path) -> bool:
    """Return True when ``path`` carries a ``Plugin Name:`` header."""
    if not path.is_file():
        return False
    try:
        return PLUGIN_NAME_MARKER in _read_head(path)
    except OSError:
        return False


def find_main_plugin_file(plugin_root: Path) -> Path:
    """Locate the main plugin file inside ``plugin_root``.

    Parameters
    ----------
    plugin_root : Path
        Directory of a single plugin, e.g. ``wp-content/plugins/my-plugin``.

    Returns
    -------
    Path
        ``<slug>/<slug>.php`` when it carries a plugin header, otherwise the
        first top-level ``*.php`` file (sorted by name) that does. Falls back
        to ``<slug>/<slug>.php`` even when that file does not exist.
    """
    conventional = plugin_root / f"{plugin_root.name}.php"
    if is_main_plugin_file(conventional):
        return conventional
    try:
        candidates = sorted(plugin_root.glob("*.php"))
    except OSError:
        candidates = []
    for candidate in candidates:
        if is_main_plugin_file(candidate):
            return candidate
    logger.debug("No plugin header found in %s; assuming %s", plugin_root, conventional)
    return conventional


__all__ = [
    "HEADER_NAMES",
    "PluginHeader",
    "find_main_plugin_file",
    "is_main_plugin_file",
    "parse_plugin_header",
    "read_plugin_header",
]
