"""Render readme section bodies into HTML for the details popup."""

from __future__ import annotations

import re

from markdown import Markdown

SUBHEADING_PATTERN = re.compile(r"^[ \t]*=(?!=)[ \t]*(.+?)[ \t]*(?<!=)=[ \t]*$")
LIST_ITEM_PATTERN = re.compile(r"^[ \t]*(?:[*+-]|\d+\.)[ \t]+\S")
HEADING_PATTERN = re.compile(r"^#{1,6}[ \t]")
FENCE_PATTERN = re.compile(r"^[ \t]*(?:`{3,}|~{3,})")
SUBHEADING_LEVEL = "####"


class ReadmeRenderer:
    """Apply light Markdown formatting to readme section bodies."""

    def __init__(self, pygments_style: str = "default") -> None:
        """Initialize a renderer.

        Parameters
        ----------
        pygments_style : str, optional
            Pygments style for fenced code blocks. Defaults to ``"default"``.
        """
        self.pygments_style = pygments_style

    def markdown(self, text: str) -> str:
        """Render a readme section body into HTML."""
        normalized = self._separate_blocks(self._promote_subheadings(text))
        if not normalized.strip():
            return ""
        md = Markdown(
            extensions=["fenced_code", "codehilite", "tables", "sane_lists"],
            extension_configs={
                "codehilite": {
                    "linenums": False,
                    "guess_lang": False,
                    "css_class": "codehilite",
                    "pygments_style": self.pygments_style,
                }
            },
        )
        return md.convert(normalized)

    @staticmethod
    def _promote_subheadings(text: str) -> str:
        """Turn ``= Sub =`` lines outside fenced code into level-four headings."""
        lines: list[str] = []
        in_fence = False
        for line in text.split("\n"):
            if FENCE_PATTERN.match(line):
                in_fence = not in_fence
            elif not in_fence:
                match = SUBHEADING_PATTERN.match(line)
                if match:
                    lines.append(f"{SUBHEADING_LEVEL} {match.group(1)}")
                    continue
            lines.append(line)
        return "\n".join(lines)

    @staticmethod
    def _separate_blocks(text: str) -> str:
        """Insert the blank lines Markdown needs around headings and lists.

        Readme authors often start a list right below a paragraph or a
        changelog version heading; Markdown would fold such lines into the
        preceding paragraph.
        """
        lines: list[str] = []
        previous = ""
        in_list = False
        in_fence = False
        for line in text.split("\n"):
            if FENCE_PATTERN.match(line):
                in_fence = not in_fence
            elif in_fence:
                lines.append(line)
                continue
            is_item = bool(LIST_ITEM_PATTERN.match(line))
            starts_block = bool(HEADING_PATTERN.match(line)) or (is_item and not in_list)
            follows_heading = bool(HEADING_PATTERN.match(previous))
            if previous.strip() and line.strip() and (starts_block or follows_heading):
                lines.append("")
            lines.append(line)
            if is_item:
                in_list = True
            elif not line.strip() or not line[:1].isspace():
                in_list = False
            previous = line
        return "\n".join(lines)


__all__ = ["ReadmeRenderer"]
