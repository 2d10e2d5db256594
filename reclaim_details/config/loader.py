"""Load details configuration YAML into typed dataclasses."""

from __future__ import annotations

import datetime as dt
import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from .models import DetailsConfig, DetailsConfigError

_DEFAULTS = DetailsConfig()


def load_details_config(path: Path) -> DetailsConfig:
    """Load the YAML configuration describing one plugin's details record.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML file (for example, ``details.yaml``).
        A relative ``plugin_root`` is resolved against the file's directory.

    Returns
    -------
    DetailsConfig
        Parsed configuration with defaults applied.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    TypeError
        If the top-level YAML structure is not a mapping.
    DetailsConfigError
        If ``plugin_root`` is missing or a value has the wrong type.
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> from reclaim_details.config import load_details_config
    >>> config = load_details_config(Path("details.yaml"))  # doctest: +SKIP
    >>> config.slug  # doctest: +SKIP
    'my-plugin'
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)
    return build_details_config(loaded, base_dir=path.parent)


def build_details_config(
    payload: typ.Mapping[str, typ.Any], *, base_dir: Path | None = None
) -> DetailsConfig:
    """Build a :class:`DetailsConfig` from an already-loaded mapping."""
    root_value = payload.get("plugin_root")
    if not root_value:
        msg = "Configuration is missing 'plugin_root'."
        raise DetailsConfigError(msg)
    plugin_root = Path(str(root_value)).expanduser()
    if base_dir is not None and not plugin_root.is_absolute():
        plugin_root = base_dir / plugin_root

    markdown = payload.get("markdown", _DEFAULTS.markdown)
    if not isinstance(markdown, bool):
        msg = f"'markdown' must be true or false, got {markdown!r}."
        raise DetailsConfigError(msg)

    return DetailsConfig(
        plugin_root=plugin_root,
        plugins_url=_string(payload, "plugins_url", _DEFAULTS.plugins_url),
        tested_fallback=_string(payload, "tested_fallback", _DEFAULTS.tested_fallback),
        added=_date_string(payload.get("added")),
        markdown=markdown,
        pygments_style=_string(payload, "pygments_style", _DEFAULTS.pygments_style),
    )


def _string(payload: typ.Mapping[str, typ.Any], key: str, default: str) -> str:
    """Return ``payload[key]`` as a stripped string, or ``default`` when unset."""
    value = payload.get(key)
    if value is None:
        return default
    if isinstance(value, (dict, list)):
        msg = f"'{key}' must be a scalar value."
        raise DetailsConfigError(msg)
    return str(value).strip()


def _date_string(value: object | None) -> str:
    """Normalise an ``added`` value (YAML date or ISO string) to ``YYYY-MM-DD``."""
    match value:
        case None:
            return ""
        case dt.datetime():
            return value.date().isoformat()
        case dt.date():
            return value.isoformat()
        case str() as text:
            sanitized = text.strip()
            if not sanitized:
                return ""
            try:
                return dt.date.fromisoformat(sanitized).isoformat()
            except ValueError as exc:
                msg = f"'added' must be an ISO date, got {text!r}."
                raise DetailsConfigError(msg) from exc
        case _:
            msg = f"'added' must be an ISO date, got {value!r}."
            raise DetailsConfigError(msg)


__all__ = ["build_details_config", "load_details_config"]
