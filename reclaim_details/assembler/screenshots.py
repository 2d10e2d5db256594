"""Pair screenshot captions from the readme with discovered image files."""

from __future__ import annotations

import re
import typing as typ
from html import escape, unescape

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from reclaim_details.assets import ScreenshotAsset

LIST_ITEM_TAG_PATTERN = re.compile(r"<(/?)li\b[^>]*>")
NESTED_LIST_PATTERN = re.compile(r"<(?:ul|ol)\b")
PARAGRAPH_TAG_PATTERN = re.compile(r"</?p>")
TAG_PATTERN = re.compile(r"<[^>]+>")
IMAGE_STYLE = "max-width: 100%; height: auto;"


class _ListItem(typ.NamedTuple):
    start: int
    end: int
    inner: str


def _strip_tags(markup: str) -> str:
    return unescape(TAG_PATTERN.sub("", markup)).strip()


def _top_level_items(content: str) -> list[_ListItem]:
    """Return the outermost ``<li>`` elements of ``content`` in document order.

    Items of nested lists stay inside their parent's ``inner`` markup.
    """
    items: list[_ListItem] = []
    depth = 0
    start = inner_start = 0
    for match in LIST_ITEM_TAG_PATTERN.finditer(content):
        if not match.group(1):
            if depth == 0:
                start, inner_start = match.start(), match.end()
            depth += 1
        elif depth:
            depth -= 1
            if depth == 0:
                items.append(
                    _ListItem(start, match.end(), content[inner_start : match.start()])
                )
    return items


def _split_nested_list(inner: str) -> tuple[str, str]:
    """Split item markup into its caption and any nested list that follows."""
    match = NESTED_LIST_PATTERN.search(inner)
    if match is None:
        return inner, ""
    return inner[: match.start()], inner[match.start() :]


def default_caption(index: int) -> str:
    """Return the caption used when the readme describes no screenshot."""
    return f"Screenshot {index}"


def resolve_screenshot_caption(content: str, index: int) -> str:
    """Return the caption for screenshot ``index`` from a screenshots section.

    Parameters
    ----------
    content : str
        Screenshots section body, either rendered HTML or raw readme text.
    index : int
        1-based screenshot number.

    Returns
    -------
    str
        The ``index``-th top-level list item (without any nested list) when
        ``content`` contains list markup, otherwise the text of a
        ``"<index>. caption"`` line, otherwise ``"Screenshot <index>"``.
    """
    if not content:
        return default_caption(index)
    if LIST_ITEM_TAG_PATTERN.search(content):
        items = _top_level_items(content)
        if 1 <= index <= len(items):
            caption_html, _nested = _split_nested_list(items[index - 1].inner)
            caption = _strip_tags(caption_html)
            if caption:
                return caption
        return default_caption(index)

    line_pattern = re.compile(rf"^{index}\.\s*(.+)$")
    for line in content.splitlines():
        match = line_pattern.match(line.strip())
        if match:
            return match.group(1).strip()
    return default_caption(index)


def substitute_screenshots(
    content: str, screenshots: cabc.Sequence[ScreenshotAsset]
) -> str:
    """Replace caption list items with image-and-caption list items.

    Top-level list items pair with ``screenshots`` strictly by position: the
    first ``<li>`` takes the first file, the second takes the second, and so
    on, whatever number the filenames carry. Items beyond the number of files
    are left untouched. A nested list stays after the caption.
    """
    if not screenshots:
        return content

    pieces: list[str] = []
    cursor = 0
    for item, shot in zip(_top_level_items(content), screenshots):
        inner = PARAGRAPH_TAG_PATTERN.sub("", item.inner).strip()
        caption_html, nested = _split_nested_list(inner)
        caption_html = caption_html.strip()
        src = escape(shot.src, quote=True)
        alt = escape(_strip_tags(caption_html), quote=True)
        pieces.append(content[cursor : item.start])
        pieces.append(
            f'<li><img src="{src}" alt="{alt}" style="{IMAGE_STYLE}" />'
            f"<br><em>{caption_html}</em>{nested}</li>"
        )
        cursor = item.end
    pieces.append(content[cursor:])
    return "".join(pieces)


__all__ = [
    "default_caption",
    "resolve_screenshot_caption",
    "substitute_screenshots",
]
