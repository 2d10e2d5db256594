"""Utilities for turning a parsed readme into the details-popup record."""

from .builder import assemble, render_sections
from .models import AssemblyOptions, PluginInfoRecord, Screenshot
from .renderer import ReadmeRenderer
from .screenshots import resolve_screenshot_caption, substitute_screenshots
from .tabs import TAB_KEYS, assemble_tabs

__all__ = [
    "TAB_KEYS",
    "AssemblyOptions",
    "PluginInfoRecord",
    "ReadmeRenderer",
    "Screenshot",
    "assemble",
    "assemble_tabs",
    "render_sections",
    "resolve_screenshot_caption",
    "substitute_screenshots",
]
