"""Dataclasses produced and consumed by the info assembler."""

from __future__ import annotations

import dataclasses as dc
import datetime as dt  # noqa: TC003 - used for runtime type metadata
import typing as typ

from reclaim_details._constants import DEFAULT_TESTED


@dc.dataclass(frozen=True, slots=True)
class AssemblyOptions:
    """Knobs that influence how a :class:`PluginInfoRecord` is assembled.

    Attributes
    ----------
    tested_fallback : str
        ``tested`` value used when the readme has no ``Tested up to`` line.
    added : str
        ISO date the plugin was first published; defaults to ``last_updated``.
    render_markdown : bool
        Format section bodies with Markdown before tab assembly.
    pygments_style : str
        Pygments style used for fenced code in section bodies.
    today : datetime.date or None
        Date reported as ``last_updated``; ``None`` means the current UTC date.
    """

    tested_fallback: str = DEFAULT_TESTED
    added: str = ""
    render_markdown: bool = True
    pygments_style: str = "default"
    today: dt.date | None = None


@dc.dataclass(frozen=True, slots=True)
class Screenshot:
    """Screenshot entry exposed to the details popup."""

    src: str
    caption: str


@dc.dataclass(frozen=True, slots=True)
class PluginInfoRecord:
    """Presentation-ready plugin information for the details popup.

    Attribute names mirror the fields WordPress reads from a
    ``plugins_api`` response and must not be renamed.

    Attributes
    ----------
    name, slug, version : str
        Plugin identity.
    author : str
        Author markup, a link when an author URI is known.
    homepage : str
        Plugin URI from the plugin header.
    short_description : str
        One-line summary.
    requires, tested, requires_php, stable_tag : str
        Compatibility fields, each with a fallback when the readme omits it.
    contributors, tags : list[str]
        Lists taken from the readme header.
    last_updated, added : str
        ISO dates.
    download_link : str
        Link to the latest release, empty without a homepage.
    banners, icons : dict[str, str]
        Asset URLs keyed ``low``/``high`` and ``1x``/``2x``/``svg``.
    sections : dict[str, str]
        Non-empty tabs in fixed vocabulary order.
    screenshots : dict[int, Screenshot]
        Every discovered screenshot keyed by number.
    """

    name: str
    slug: str
    version: str
    author: str
    homepage: str
    short_description: str
    requires: str
    tested: str
    requires_php: str
    stable_tag: str
    contributors: list[str]
    tags: list[str]
    last_updated: str
    added: str
    download_link: str
    banners: dict[str, str]
    icons: dict[str, str]
    sections: dict[str, str]
    screenshots: dict[int, Screenshot]

    def to_dict(self) -> dict[str, typ.Any]:
        """Return the record as plain dictionaries and lists."""
        return dc.asdict(self)


__all__ = ["AssemblyOptions", "PluginInfoRecord", "Screenshot"]
