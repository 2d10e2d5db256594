"""Per-plugin facade that answers WordPress "View details" requests.

:class:`PluginDetails` gathers everything the details popup needs for one
plugin: the header of its main PHP file, its ``readme.txt``, and its
``assets`` folder. A host adapter constructs one per request from an explicit
plugin root, then forwards the ``plugins_api`` and ``plugin_row_meta`` calls to
:meth:`PluginDetails.handle_plugin_info` and
:meth:`PluginDetails.add_view_details_link`.

Example
-------
>>> from pathlib import Path
>>> from reclaim_details.details import PluginDetails
>>> details = PluginDetails.from_root(Path("wp-content/plugins/my-plugin"))  # doctest: +SKIP
>>> details.build_info().sections.keys()  # doctest: +SKIP
dict_keys(['description', 'changelog'])
"""

from __future__ import annotations

import typing as typ
from html import escape
from urllib.parse import urlencode

from ._constants import (
    DETAILS_MODAL_HEIGHT,
    DETAILS_MODAL_WIDTH,
    PLUGIN_INFORMATION_ACTION,
    README_FILENAME,
)
from .assembler import assemble
from .assets import discover_assets
from .config import DetailsConfig
from .plugin_header import find_main_plugin_file, read_plugin_header
from .readme_parser import load_readme

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    import datetime as dt
    from pathlib import Path

    from .assembler import PluginInfoRecord

_T = typ.TypeVar("_T")

DETAILS_LINK_LABEL = "View details"
DETAILS_LINK_CLASSES = "thickbox open-plugin-details-modal"


def build_details_url(admin_url: str, slug: str) -> str:
    """Return the ``plugin-install.php`` URL that opens the details popup."""
    query = urlencode(
        {
            "tab": "plugin-information",
            "plugin": slug,
            "TB_iframe": "true",
            "width": str(DETAILS_MODAL_WIDTH),
            "height": str(DETAILS_MODAL_HEIGHT),
        }
    )
    return f"{admin_url.rstrip('/')}/plugin-install.php?{query}"


class PluginDetails:
    """Details-popup data for a single plugin directory."""

    def __init__(
        self, config: DetailsConfig, *, plugin_file: Path | None = None
    ) -> None:
        """Load header, readme, and assets for the configured plugin.

        Parameters
        ----------
        config : DetailsConfig
            Settings naming the plugin root and assembly fallbacks.
        plugin_file : Path, optional
            Main plugin file; located inside the plugin root when ``None``.
        """
        self.config = config
        self.plugin_root = config.plugin_root
        self.slug = config.slug
        self.plugin_file = plugin_file or find_main_plugin_file(self.plugin_root)
        self.header = read_plugin_header(self.plugin_file)
        self.readme = load_readme(self.plugin_root / README_FILENAME)
        self.assets = discover_assets(self.plugin_root, config.base_url)

    @classmethod
    def from_root(cls, plugin_root: Path, **settings: typ.Any) -> PluginDetails:
        """Build an instance for ``plugin_root`` with optional config overrides."""
        return cls(DetailsConfig(plugin_root=plugin_root, **settings))

    @property
    def plugin_basename(self) -> str:
        """Return the ``<slug>/<file>.php`` identifier WordPress uses for rows."""
        return f"{self.slug}/{self.plugin_file.name}"

    def build_info(self, *, today: dt.date | None = None) -> PluginInfoRecord:
        """Assemble the details record for this plugin."""
        return assemble(
            self.readme,
            self.header,
            self.assets,
            self.slug,
            options=self.config.assembly_options(today=today),
        )

    def handle_plugin_info(
        self, result: _T, action: str, slug: str | None
    ) -> _T | PluginInfoRecord:
        """Answer a ``plugins_api`` request when it targets this plugin.

        Returns ``result`` unchanged for other actions or other slugs.
        """
        if action != PLUGIN_INFORMATION_ACTION or slug != self.slug:
            return result
        return self.build_info()

    def add_view_details_link(
        self,
        plugin_meta: cabc.Sequence[str],
        plugin_basename: str,
        admin_url: str,
    ) -> list[str]:
        """Return ``plugin_meta`` with a "View details" link for this plugin's row."""
        meta = list(plugin_meta)
        if plugin_basename != self.plugin_basename:
            return meta
        href = escape(build_details_url(admin_url, self.slug), quote=True)
        meta.append(
            f'<a href="{href}" class="{DETAILS_LINK_CLASSES}">{DETAILS_LINK_LABEL}</a>'
        )
        return meta


__all__ = ["PluginDetails", "build_details_url"]
