"""Distribute readme sections over the fixed set of details-popup tabs.

The popup knows seven tabs (see :data:`reclaim_details._constants.TAB_KEYS`).
Sections named after a tab move into it unchanged; everything else, including
the literal ``Description`` section, is merged into the description tab with
the original section title as a sub-heading.
"""

from __future__ import annotations

import logging
import typing as typ
from html import escape

from reclaim_details._constants import TAB_KEYS
from reclaim_details.readme_parser import normalize_key

from .screenshots import substitute_screenshots

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from reclaim_details.assets import ScreenshotAsset
    from reclaim_details.readme_parser import Section

logger = logging.getLogger(__name__)

DESCRIPTION_TAB = "description"
SCREENSHOTS_TAB = "screenshots"
PART_SEPARATOR = "\n\n"


def _merge_description(leftovers: list[tuple[str, Section]]) -> str:
    """Join leftover sections, hoisting the literal description first."""
    parts: list[str] = []
    for key, section in leftovers:
        if not section.body.strip():
            continue
        if key == DESCRIPTION_TAB:
            parts.insert(0, section.body)
        else:
            parts.append(f"<h4>{escape(section.title)}</h4>\n{section.body}")
    return PART_SEPARATOR.join(parts)


def assemble_tabs(
    sections: cabc.Mapping[str, Section],
    screenshots: cabc.Sequence[ScreenshotAsset] = (),
) -> dict[str, str]:
    """Build the ordered tab mapping for the details popup.

    Parameters
    ----------
    sections : Mapping[str, Section]
        Sections in document order with bodies already formatted for display.
    screenshots : Sequence[ScreenshotAsset], optional
        Discovered screenshot files in number order, used to turn the
        screenshots tab's caption list into images.

    Returns
    -------
    dict[str, str]
        Non-empty tabs keyed by tab name, in vocabulary order.
    """
    tabs: dict[str, str] = dict.fromkeys(TAB_KEYS, "")
    leftovers: list[tuple[str, Section]] = []
    for key, section in sections.items():
        tab_key = normalize_key(key)
        if tab_key in tabs and tab_key != DESCRIPTION_TAB:
            tabs[tab_key] = section.body
        else:
            leftovers.append((tab_key, section))

    if leftovers:
        logger.debug(
            "Merging sections %s into the description tab",
            [section.title for _, section in leftovers],
        )
    tabs[DESCRIPTION_TAB] = _merge_description(leftovers)

    if tabs[SCREENSHOTS_TAB].strip():
        tabs[SCREENSHOTS_TAB] = substitute_screenshots(
            tabs[SCREENSHOTS_TAB], screenshots
        )

    return {key: content for key, content in tabs.items() if content.strip()}


__all__ = ["TAB_KEYS", "assemble_tabs"]
