r"""Parse WordPress ``readme.txt`` files into structured metadata and sections.

This module powers the plugin details record by reading the semi-structured
readme format: a ``=== Name ===`` banner, ``Key: value`` metadata lines, a
short description, and ``== Title ==`` sections whose bodies are kept as raw
text for the assembler to format. Parsing is total: malformed or missing
input produces an empty result rather than an error.

Example
-------
>>> from reclaim_details.readme_parser import parse_readme
>>> readme = parse_readme("=== Foo ===\nStable tag: 1.0\n\n== Description ==\nHi")
>>> readme.name, readme.headers["stable_tag"], readme.sections["description"].body
('Foo', '1.0', 'Hi\n')
"""

from __future__ import annotations

import dataclasses as dc
import logging
import re
import typing as typ

if typ.TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

BANNER_PATTERN = re.compile(r"^===(?!=)\s*(\S.*?)\s*(?<!=)===$")
SECTION_PATTERN = re.compile(r"^==(?!=)\s*(\S.*?)\s*(?<!=)==$")
HEADER_PATTERN = re.compile(
    r"^(?P<key>[A-Za-z][A-Za-z0-9 _-]*?)\s*:(?:\s+(?P<value>.*))?$"
)
LEGACY_ENCODINGS: tuple[str, ...] = ("cp1252", "latin-1")
UTF8_BOM = "\ufeff"


@dc.dataclass(frozen=True, slots=True)
class Section:
    """A ``== Title ==`` block and the raw text that follows it.

    Attributes
    ----------
    title : str
        Heading text exactly as written in the readme.
    body : str
        Raw body lines, each terminated by a newline.
    """

    title: str
    body: str


@dc.dataclass(frozen=True, slots=True)
class ParsedReadme:
    """Structured view of a readme file.

    Attributes
    ----------
    name : str
        Plugin name from the top ``=== Name ===`` banner, or ``""``.
    headers : dict[str, str]
        ``Key: value`` metadata keyed by lower_snake_case key.
    sections : dict[str, Section]
        Sections keyed by normalised title, in document order.
    short_description : str
        Free text found between the metadata and the first section.
    """

    name: str = ""
    headers: dict[str, str] = dc.field(default_factory=dict)
    sections: dict[str, Section] = dc.field(default_factory=dict)
    short_description: str = ""

    @property
    def contributors(self) -> list[str]:
        """Return the comma-separated ``Contributors`` header as a list."""
        return _split_list(self.headers.get("contributors", ""))

    @property
    def tags(self) -> list[str]:
        """Return the comma-separated ``Tags`` header as a list."""
        return _split_list(self.headers.get("tags", ""))

    def header(self, key: str, default: str = "") -> str:
        """Return a header value, treating blank values as missing."""
        value = self.headers.get(normalize_key(key), "")
        return value or default


def normalize_key(text: str) -> str:
    """Lower-case ``text`` and join whitespace-separated words with ``_``."""
    return re.sub(r"\s+", "_", text.strip().lower())


def _split_list(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def _looks_like_marker(line: str) -> bool:
    """Return True for ``=`` lines that matched neither banner nor section."""
    return line.startswith("=")


class _SectionBuffer:
    """Accumulate one section body, collapsing interior blank-line runs."""

    def __init__(self, title: str) -> None:
        self.title = title
        self.lines: list[str] = []
        self._pending_blank = False

    def blank(self) -> None:
        if self.lines:
            self._pending_blank = True

    def append(self, line: str) -> None:
        if self._pending_blank:
            self.lines.append("")
            self._pending_blank = False
        self.lines.append(line)

    def build(self) -> Section:
        body = "".join(f"{line}\n" for line in self.lines)
        return Section(title=self.title, body=body)


def parse_readme(text: str) -> ParsedReadme:
    """Parse readme text into a :class:`ParsedReadme`.

    Parameters
    ----------
    text : str
        Decoded readme content. ``None`` or empty text yields an empty result.

    Returns
    -------
    ParsedReadme
        Name, header fields, short description, and ordered sections. Lines
        before the first section contribute to headers or the short
        description; lines after it contribute only to section bodies.
    """
    if not text:
        return ParsedReadme()

    name = ""
    headers: dict[str, str] = {}
    summary: list[str] = []
    buffers: dict[str, _SectionBuffer] = {}
    current: _SectionBuffer | None = None

    for raw_line in text.splitlines():
        line = raw_line.strip()

        banner = BANNER_PATTERN.match(line)
        if banner:
            if not name:
                name = banner.group(1)
            else:
                logger.debug("Ignoring repeated readme banner %r", line)
            continue

        section = SECTION_PATTERN.match(line)
        if section:
            title = section.group(1).strip()
            key = normalize_key(title)
            if key in buffers:
                logger.debug("Duplicate readme section %r replaces earlier body", title)
            current = _SectionBuffer(title)
            buffers[key] = current
            continue

        if current is not None:
            if line:
                current.append(raw_line.rstrip())
            else:
                current.blank()
            continue

        if not line:
            continue
        if _looks_like_marker(line):
            logger.debug("Dropping unbalanced heading marker %r before sections", line)
            continue
        header = HEADER_PATTERN.match(line)
        if header:
            headers[normalize_key(header.group("key"))] = (
                header.group("value") or ""
            ).strip()
            continue
        summary.append(line)

    if not name:
        logger.debug("Readme has no '=== Name ===' banner")

    return ParsedReadme(
        name=name,
        headers=headers,
        sections={key: buffer.build() for key, buffer in buffers.items()},
        short_description=" ".join(summary),
    )


def decode_readme(raw: bytes) -> str:
    """Decode readme bytes to text with normalised newlines.

    UTF-8 is tried first (with or without a byte-order mark). Files that are
    not valid UTF-8 are treated as legacy single-byte text and decoded as
    cp1252, falling back to latin-1 which accepts every byte.
    """
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError:
        text = ""
        for encoding in LEGACY_ENCODINGS:
            try:
                text = raw.decode(encoding)
            except UnicodeDecodeError:
                continue
            logger.debug("Readme is not UTF-8; decoded as %s", encoding)
            break
    text = text.removeprefix(UTF8_BOM)
    return text.replace("\r\n", "\n").replace("\r", "\n")


def load_readme(path: Path) -> ParsedReadme:
    """Read and parse the readme at ``path``.

    A missing or unreadable file yields an empty :class:`ParsedReadme`.
    """
    try:
        raw = path.read_bytes()
    except FileNotFoundError:
        logger.debug("No readme found at %s", path)
        return ParsedReadme()
    except OSError as exc:
        logger.warning("Unable to read readme %s: %s", path, exc)
        return ParsedReadme()
    return parse_readme(decode_readme(raw))


__all__ = [
    "ParsedReadme",
    "Section",
    "decode_readme",
    "load_readme",
    "normalize_key",
    "parse_readme",
]
