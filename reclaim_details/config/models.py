"""Typed dataclasses describing reclaim_details configuration."""

from __future__ import annotations

import dataclasses as dc
import datetime as dt  # noqa: TC003 - used for runtime type metadata
from pathlib import Path

from reclaim_details._constants import DEFAULT_TESTED
from reclaim_details.assembler.models import AssemblyOptions


class DetailsConfigError(ValueError):
    """Raised when the details configuration is invalid or incomplete."""


@dc.dataclass(slots=True)
class DetailsConfig:
    """Settings for building one plugin's details record.

    Attributes
    ----------
    plugin_root : Path
        Directory of the plugin (the one holding ``readme.txt``).
    plugins_url : str
        Public URL of the plugins directory; the plugin's assets live at
        ``<plugins_url>/<slug>/assets/``. Empty for relative URLs.
    tested_fallback : str
        ``tested`` value when the readme has no ``Tested up to`` line.
    added : str
        ISO date the plugin was first published.
    markdown : bool
        Format section bodies with Markdown.
    pygments_style : str
        Pygments style for fenced code blocks.
    """

    plugin_root: Path = Path()
    plugins_url: str = ""
    tested_fallback: str = DEFAULT_TESTED
    added: str = ""
    markdown: bool = True
    pygments_style: str = "default"

    @property
    def slug(self) -> str:
        """Return the plugin slug, i.e. the plugin directory name."""
        return self.plugin_root.absolute().name

    @property
    def base_url(self) -> str:
        """Return the public URL of the plugin directory."""
        if not self.plugins_url:
            return ""
        return f"{self.plugins_url.rstrip('/')}/{self.slug}"

    def assembly_options(self, *, today: dt.date | None = None) -> AssemblyOptions:
        """Return assembler options derived from this configuration."""
        return AssemblyOptions(
            tested_fallback=self.tested_fallback,
            added=self.added,
            render_markdown=self.markdown,
            pygments_style=self.pygments_style,
            today=today,
        )


__all__ = ["DetailsConfig", "DetailsConfigError"]
