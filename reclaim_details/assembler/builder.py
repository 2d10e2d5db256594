"""Assemble the plugin details record from readme, header, and assets.

:func:`assemble` merges a :class:`~reclaim_details.readme_parser.ParsedReadme`
with the plugin's own header fields and an
:class:`~reclaim_details.assets.AssetInventory` into a
:class:`PluginInfoRecord`. Identity fields come from the plugin header;
compatibility fields come from the readme with fixed fallbacks. The function
is total: every field has a defined value whatever the inputs contain.

Example
-------
>>> from reclaim_details.assembler import AssemblyOptions, assemble
>>> from reclaim_details.assets import AssetInventory
>>> from reclaim_details.plugin_header import PluginHeader
>>> from reclaim_details.readme_parser import parse_readme
>>> record = assemble(
...     parse_readme("=== Foo ===\\n== Description ==\\nHello"),
...     PluginHeader(name="Foo", version="1.2.0"),
...     AssetInventory(),
...     "foo",
... )
>>> record.requires, record.stable_tag, list(record.sections)
('5.0', '1.2.0', ['description'])
"""

from __future__ import annotations

import datetime as dt
import typing as typ
from html import escape

from reclaim_details._constants import DEFAULT_REQUIRES, DEFAULT_REQUIRES_PHP
from reclaim_details.readme_parser import Section

from .models import AssemblyOptions, PluginInfoRecord, Screenshot
from .renderer import ReadmeRenderer
from .screenshots import resolve_screenshot_caption
from .tabs import SCREENSHOTS_TAB, assemble_tabs

if typ.TYPE_CHECKING:
    from reclaim_details.assets import AssetInventory
    from reclaim_details.plugin_header import PluginHeader
    from reclaim_details.readme_parser import ParsedReadme

RELEASES_PATH = "/releases/latest"


def render_sections(
    readme: ParsedReadme, renderer: ReadmeRenderer | None
) -> dict[str, Section]:
    """Return the readme sections with bodies formatted for display.

    Passing ``None`` for ``renderer`` keeps the raw bodies.
    """
    if renderer is None:
        return dict(readme.sections)
    return {
        key: Section(title=section.title, body=renderer.markdown(section.body))
        for key, section in readme.sections.items()
    }


def format_author(name: str, uri: str) -> str:
    """Return author markup: a link when ``uri`` is set, else escaped text."""
    if not uri:
        return escape(name)
    return f'<a href="{escape(uri, quote=True)}">{escape(name)}</a>'


def _download_link(homepage: str) -> str:
    if not homepage:
        return ""
    return f"{homepage.rstrip('/')}{RELEASES_PATH}"


def _collect_screenshots(
    assets: AssetInventory, caption_source: str
) -> dict[int, Screenshot]:
    return {
        number: Screenshot(
            src=asset.src,
            caption=resolve_screenshot_caption(caption_source, number),
        )
        for number, asset in assets.screenshots.items()
    }


def assemble(
    readme: ParsedReadme,
    plugin_header: PluginHeader,
    assets: AssetInventory,
    slug: str,
    *,
    options: AssemblyOptions | None = None,
) -> PluginInfoRecord:
    """Merge readme, plugin header, and assets into a :class:`PluginInfoRecord`.

    Parameters
    ----------
    readme : ParsedReadme
        Parsed ``readme.txt``; an empty instance when the plugin has none.
    plugin_header : PluginHeader
        Fields from the plugin's main file header comment.
    assets : AssetInventory
        Screenshots, banners, and icons discovered under ``assets/``.
    slug : str
        Plugin directory name.
    options : AssemblyOptions, optional
        Fallbacks and formatting switches; defaults to ``AssemblyOptions()``.

    Returns
    -------
    PluginInfoRecord
        Record ready for the details popup.
    """
    opts = options or AssemblyOptions()
    renderer = ReadmeRenderer(opts.pygments_style) if opts.render_markdown else None
    sections = render_sections(readme, renderer)

    today = opts.today or dt.datetime.now(dt.UTC).date()
    last_updated = today.isoformat()
    version = plugin_header.version or readme.header("stable_tag")
    homepage = plugin_header.plugin_uri

    screenshots_section = sections.get(SCREENSHOTS_TAB)
    caption_source = screenshots_section.body if screenshots_section else ""

    return PluginInfoRecord(
        name=plugin_header.name or readme.name,
        slug=slug,
        version=version,
        author=format_author(plugin_header.author, plugin_header.author_uri),
        homepage=homepage,
        short_description=plugin_header.description or readme.short_description,
        requires=readme.header("requires_at_least", DEFAULT_REQUIRES),
        tested=readme.header("tested_up_to", opts.tested_fallback),
        requires_php=readme.header("requires_php", DEFAULT_REQUIRES_PHP),
        stable_tag=readme.header("stable_tag", plugin_header.version),
        contributors=readme.contributors,
        tags=readme.tags,
        last_updated=last_updated,
        added=opts.added or last_updated,
        download_link=_download_link(homepage),
        banners=dict(assets.banners),
        icons=dict(assets.icons),
        sections=assemble_tabs(sections, assets.ordered_screenshots),
        screenshots=_collect_screenshots(assets, caption_source),
    )


__all__ = ["assemble", "format_author", "render_sections"]
