"""Unit tests for assembling the plugin details record.

These tests drive :func:`reclaim_details.assembler.assemble` with parsed
readmes, plugin headers, and asset inventories to check field precedence,
fallback constants, tab assembly, and screenshot captions.
"""

from __future__ import annotations

import dataclasses as dc
import datetime as dt

import pytest
from bs4 import BeautifulSoup

from reclaim_details.assembler import (
    AssemblyOptions,
    PluginInfoRecord,
    Screenshot,
    assemble,
)
from reclaim_details.assets import AssetInventory, ScreenshotAsset
from reclaim_details.plugin_header import PluginHeader
from reclaim_details.readme_parser import ParsedReadme, parse_readme

TODAY = dt.date(2025, 9, 1)
OPTIONS = AssemblyOptions(today=TODAY)
HEADER = PluginHeader(
    name="Sample Plugin",
    plugin_uri="https://example.org/sample-plugin/",
    version="1.4.2",
    description="Header summary.",
    author="Jane & Co",
    author_uri="https://example.org/?a=1&b=2",
)


def _shot(number: int) -> ScreenshotAsset:
    filename = f"screenshot-{number}.png"
    return ScreenshotAsset(number=number, filename=filename, src=f"u/{filename}")


def test_missing_readme_uses_fallback_constants() -> None:
    """With no readme every compatibility field takes its documented default."""
    record = assemble(ParsedReadme(), HEADER, AssetInventory(), "sample", options=OPTIONS)

    assert (record.requires, record.tested, record.requires_php, record.stable_tag) == (
        "5.0",
        "6.8",
        "7.4",
        "1.4.2",
    ), "compatibility fields should fall back to the default constants"
    assert record.sections == {}, "no readme means no tabs"
    assert record.screenshots == {}, "no assets means no screenshots"


def test_identity_from_header_and_compatibility_from_readme(
    sample_readme: str,
) -> None:
    """Header fields win for identity, readme fields win for compatibility."""
    record = assemble(
        parse_readme(sample_readme), HEADER, AssetInventory(), "sample", options=OPTIONS
    )

    assert isinstance(record, PluginInfoRecord), "expected a PluginInfoRecord"
    assert (record.name, record.slug, record.version) == (
        "Sample Plugin",
        "sample",
        "1.4.2",
    )
    assert record.short_description == "Header summary.", (
        "header description should beat the readme summary"
    )
    assert (record.requires, record.tested, record.requires_php) == (
        "6.0",
        "6.5",
        "8.1",
    ), "readme compatibility values should be used when present"
    assert record.contributors == ["jane", "joe"]
    assert record.tags == ["details", "readme"]
    assert record.homepage == "https://example.org/sample-plugin/"
    assert record.download_link == (
        "https://example.org/sample-plugin/releases/latest"
    ), f"unexpected download link {record.download_link!r}"


def test_author_markup_is_escaped() -> None:
    """Author text and URI are escaped inside the link markup."""
    record = assemble(ParsedReadme(), HEADER, AssetInventory(), "s", options=OPTIONS)
    assert record.author == (
        '<a href="https://example.org/?a=1&amp;b=2">Jane &amp; Co</a>'
    ), f"unexpected author markup {record.author!r}"

    plain = assemble(
        ParsedReadme(), PluginHeader(author="Solo"), AssetInventory(), "s", options=OPTIONS
    )
    assert plain.author == "Solo", "without a URI the author is plain text"


def test_readme_fills_missing_identity_fields() -> None:
    """An empty header falls back to the readme name, summary, and stable tag."""
    readme = parse_readme("=== Foo ===\nStable tag: 2.0\n\nFoo does things.\n")
    record = assemble(readme, PluginHeader(), AssetInventory(), "foo", options=OPTIONS)

    assert (record.name, record.version, record.short_description) == (
        "Foo",
        "2.0",
        "Foo does things.",
    ), "readme values should fill the gaps left by the header"
    assert record.download_link == "", "no homepage means no download link"


def test_dates_and_tested_fallback_follow_options() -> None:
    """``last_updated``, ``added``, and ``tested`` come from the options."""
    record = assemble(
        ParsedReadme(),
        HEADER,
        AssetInventory(),
        "s",
        options=AssemblyOptions(today=TODAY, added="2025-08-28", tested_fallback="6.9"),
    )
    assert (record.last_updated, record.added, record.tested) == (
        "2025-09-01",
        "2025-08-28",
        "6.9",
    )

    defaulted = assemble(ParsedReadme(), HEADER, AssetInventory(), "s", options=OPTIONS)
    assert defaulted.added == "2025-09-01", "added should default to last_updated"


def test_tabs_are_rendered_and_merged(sample_readme: str) -> None:
    """Sections render to HTML and custom sections merge into the description."""
    record = assemble(
        parse_readme(sample_readme), HEADER, AssetInventory(), "s", options=OPTIONS
    )

    assert list(record.sections) == [
        "description",
        "installation",
        "faq",
        "screenshots",
        "changelog",
    ], f"unexpected tabs {list(record.sections)!r}"
    description = BeautifulSoup(record.sections["description"], "html.parser")
    assert description.find("strong").get_text() == "details"
    assert [h4.get_text() for h4 in description.find_all("h4")] == ["Credits"], (
        "the Credits section should appear under its own heading"
    )
    changelog = BeautifulSoup(record.sections["changelog"], "html.parser")
    assert changelog.find("h4").get_text() == "1.4.2"
    assert changelog.find("li").get_text() == "Fixed things."


def test_screenshots_pair_positionally_and_carry_captions(sample_readme: str) -> None:
    """Caption items pair with files by position; captions come from the readme."""
    assets = AssetInventory(screenshots={1: _shot(1), 3: _shot(3)})
    record = assemble(parse_readme(sample_readme), HEADER, assets, "s", options=OPTIONS)

    images = BeautifulSoup(record.sections["screenshots"], "html.parser").find_all(
        "img"
    )
    assert [img["src"] for img in images] == [
        "u/screenshot-1.png",
        "u/screenshot-3.png",
    ], "second caption should pair with the second discovered file"
    assert record.screenshots == {
        1: Screenshot(src="u/screenshot-1.png", caption="Dashboard view"),
        3: Screenshot(src="u/screenshot-3.png", caption="Screenshot 3"),
    }, f"unexpected screenshots {record.screenshots!r}"


def test_raw_sections_when_markdown_disabled() -> None:
    """Disabling Markdown keeps bodies raw and captions use numbered lines."""
    readme = parse_readme(
        "== Description ==\nHello\n== Screenshots ==\n1. One\n2. Two\n"
    )
    assets = AssetInventory(screenshots={2: _shot(2)})
    record = assemble(
        readme,
        HEADER,
        assets,
        "s",
        options=AssemblyOptions(today=TODAY, render_markdown=False),
    )

    assert record.sections["description"] == "Hello\n", "body should stay raw"
    assert record.sections["screenshots"] == "1. One\n2. Two\n", (
        "raw caption lines have no list markup to substitute"
    )
    assert record.screenshots[2].caption == "Two"


def test_missing_screenshot_caption_falls_back() -> None:
    """A lone ``screenshot-2`` without caption text gets the default caption."""
    assets = AssetInventory(screenshots={2: _shot(2)})
    record = assemble(ParsedReadme(), HEADER, assets, "s", options=OPTIONS)
    assert record.screenshots[2].caption == "Screenshot 2"


def test_record_converts_to_dict(sample_readme: str) -> None:
    """``to_dict`` exposes the compatibility field names."""
    record = assemble(
        parse_readme(sample_readme), HEADER, AssetInventory(), "s", options=OPTIONS
    )
    payload = record.to_dict()
    assert {"requires", "tested", "requires_php", "stable_tag", "sections"} <= set(
        payload
    ), "record dict should expose the popup field names"


def test_screenshot_captions_skip_nested_lists() -> None:
    """A caption with a sub-list keeps its own text and pairs one image."""
    readme = parse_readme("== Screenshots ==\n1. Main\n    * detail\n2. Second\n")
    assets = AssetInventory(screenshots={1: _shot(1), 2: _shot(2)})
    record = assemble(readme, HEADER, assets, "s", options=OPTIONS)

    soup = BeautifulSoup(record.sections["screenshots"], "html.parser")
    assert len(soup.find_all("img")) == 2, "each top-level caption takes one image"
    assert [em.get_text() for em in soup.find_all("em")] == ["Main", "Second"]
    assert (record.screenshots[1].caption, record.screenshots[2].caption) == (
        "Main",
        "Second",
    ), f"unexpected captions {record.screenshots!r}"


def test_record_is_immutable() -> None:
    """Assembled records cannot be changed after construction."""
    record = assemble(ParsedReadme(), HEADER, AssetInventory(), "s", options=OPTIONS)
    with pytest.raises(dc.FrozenInstanceError):
        record.tested = "1.0"  # type: ignore[misc]
    assert record.to_dict()["tested"] == "6.8", "to_dict should still work"
