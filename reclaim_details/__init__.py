"""Build WordPress "View details" popup data from a plugin's local files.

This package parses a plugin's ``readme.txt``, discovers its screenshots,
banners, and icons under ``assets/``, and assembles them with the plugin
header into the record the details popup renders, without contacting the
WordPress.org directory.

Exports
-------
- ``parse_readme``: Parse readme text into a ``ParsedReadme``.
- ``assemble``: Merge readme, header, and assets into a ``PluginInfoRecord``.
- ``PluginDetails``: Per-plugin facade for host integrations.
- ``app`` / ``main``: Cyclopts application for the ``reclaim-details`` command.

Examples
--------
>>> from reclaim_details import parse_readme
>>> parse_readme("=== Foo ===\\nRequires at least: 5.5").headers
{'requires_at_least': '5.5'}
"""

from __future__ import annotations

from .assembler import AssemblyOptions, PluginInfoRecord, assemble
from .assets import AssetInventory, discover_assets
from .cli import app, main
from .details import PluginDetails, build_details_url
from .plugin_header import PluginHeader, read_plugin_header
from .readme_parser import ParsedReadme, Section, load_readme, parse_readme

__all__ = [
    "AssemblyOptions",
    "AssetInventory",
    "ParsedReadme",
    "PluginDetails",
    "PluginHeader",
    "PluginInfoRecord",
    "Section",
    "app",
    "assemble",
    "build_details_url",
    "discover_assets",
    "load_readme",
    "main",
    "parse_readme",
    "read_plugin_header",
]
