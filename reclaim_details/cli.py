"""Cyclopts CLI entrypoint for inspecting plugin details records.

The ``reclaim-details`` console script defined here lets plugin authors check
what the WordPress "View details" popup will show before shipping: it can
print the assembled record for a plugin directory, the parsed structure of a
single ``readme.txt``, or the admin URL that opens the popup. Records are
printed as JSON.

Examples
--------
Print the record for a plugin checkout:

>>> from reclaim_details.cli import app
>>> app(["info", "--plugin-root", "wp-content/plugins/my-plugin"])  # doctest: +SKIP

Inspect a readme on its own:

>>> app(["readme", "readme.txt"])  # doctest: +SKIP
"""

from __future__ import annotations

import datetime as dt
import logging
import typing as typ
from pathlib import Path

import cyclopts
import msgspec.json as msgspec_json
from cyclopts import App, Parameter

from .config import DetailsConfig, load_details_config
from .details import PluginDetails, build_details_url
from .readme_parser import load_readme

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"

app = App(
    name="reclaim-details",
    config=cyclopts.config.Env("RECLAIM_DETAILS_", command=False),  # type: ignore[unknown-argument]
)


def _configure_logging(*, verbose: bool) -> None:
    """Send diagnostics to stderr, at DEBUG when ``verbose`` is set."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING, format=LOG_FORMAT
    )


def _to_json(value: object) -> str:
    """Encode ``value`` as indented JSON text."""
    return msgspec_json.format(msgspec_json.encode(value), indent=2).decode("utf-8")


def _resolve_config(
    config: Path | None, plugin_root: Path | None, plugins_url: str | None
) -> DetailsConfig:
    """Return the config from ``config`` or build one from ``plugin_root``."""
    if config is not None:
        resolved = load_details_config(config)
        if plugin_root is not None:
            resolved.plugin_root = plugin_root
    elif plugin_root is not None:
        resolved = DetailsConfig(plugin_root=plugin_root)
    else:
        msg = "Either --config or --plugin-root is required."
        raise ValueError(msg)
    if plugins_url is not None:
        resolved.plugins_url = plugins_url
    return resolved


@app.command(help="Print the assembled details record for a plugin as JSON.")
def info(
    *,
    plugin_root: typ.Annotated[
        Path | None, Parameter(help="Plugin directory holding readme.txt")
    ] = None,
    config: typ.Annotated[
        Path | None, Parameter(help="Path to a details.yaml config file")
    ] = None,
    plugins_url: typ.Annotated[
        str | None, Parameter(help="Public URL of the plugins directory")
    ] = None,
    today: typ.Annotated[
        str | None, Parameter(help="ISO date reported as last_updated")
    ] = None,
    verbose: typ.Annotated[bool, Parameter(help="Log parser diagnostics")] = False,
) -> None:
    """Print the :class:`~reclaim_details.assembler.PluginInfoRecord` for a plugin.

    Parameters
    ----------
    plugin_root : Path or None, optional
        Plugin directory; overrides ``plugin_root`` from ``config``.
    config : Path or None, optional
        YAML configuration file; when ``None`` defaults are used.
    plugins_url : str or None, optional
        Public URL of the plugins directory used to build asset links.
    today : str or None, optional
        ISO date reported as ``last_updated``; defaults to the current UTC date.
    verbose : bool, optional
        Enable DEBUG logging of parse diagnostics.

    Raises
    ------
    ValueError
        If neither ``config`` nor ``plugin_root`` is supplied.
    """
    _configure_logging(verbose=verbose)
    details = PluginDetails(_resolve_config(config, plugin_root, plugins_url))
    report_date = dt.date.fromisoformat(today) if today else None
    print(_to_json(details.build_info(today=report_date)))


@app.command(help="Print the parsed structure of a readme.txt file as JSON.")
def readme(
    path: typ.Annotated[Path, Parameter(help="Path to readme.txt")],
    *,
    verbose: typ.Annotated[bool, Parameter(help="Log parser diagnostics")] = False,
) -> None:
    """Parse ``path`` and print name, headers, short description, and sections."""
    _configure_logging(verbose=verbose)
    print(_to_json(load_readme(path)))


@app.command(help="Print the admin URL that opens the details popup.")
def link(
    *,
    slug: typ.Annotated[str, Parameter(help="Plugin slug (directory name)")],
    admin_url: typ.Annotated[
        str, Parameter(help="Base wp-admin URL")
    ] = "/wp-admin/",
) -> None:
    """Print the ``plugin-install.php`` URL for ``slug``."""
    print(build_details_url(admin_url, slug))


def main() -> None:
    """Invoke the Cyclopts application behind the ``reclaim-details`` command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
