"""Load and validate the YAML settings used to build a plugin details record.

This subpackage parses a ``details.yaml`` file naming the plugin root
directory, the public plugins URL used for asset links, and the fallbacks and
formatting switches handed to the assembler. The primary entry point is
:func:`load_details_config`, which applies defaults and returns a
:class:`DetailsConfig`.

Examples
--------
>>> from pathlib import Path
>>> from reclaim_details.config import load_details_config
>>> config = load_details_config(Path("config/details.yaml"))  # doctest: +SKIP
>>> config.base_url  # doctest: +SKIP
'https://example.org/wp-content/plugins/my-plugin'
"""

from .loader import build_details_config, load_details_config
from .models import DetailsConfig, DetailsConfigError

__all__ = [
    "DetailsConfig",
    "DetailsConfigError",
    "build_details_config",
    "load_details_config",
]
