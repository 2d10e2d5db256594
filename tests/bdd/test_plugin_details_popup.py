"""Behaviour tests for the plugin details popup record.

The scenarios in ``features/plugin_details_popup.feature`` build a plugin
directory under ``tmp_path``, assemble its details record through
:class:`reclaim_details.details.PluginDetails`, and check the tabs and
fallback values the popup would display.
"""

from __future__ import annotations

import datetime as dt
import typing as typ
from pathlib import Path

import pytest
from bs4 import BeautifulSoup
from pytest_bdd import given, parsers, scenarios, then, when

from reclaim_details.details import PluginDetails

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from reclaim_details.assembler import PluginInfoRecord

FEATURE_FILE = (
    Path(__file__).resolve().parents[2] / "features" / "plugin_details_popup.feature"
)
scenarios(FEATURE_FILE)


@pytest.fixture
def scenario_state() -> dict[str, object]:
    """Return a mutable dict used to share scenario state across BDD steps."""
    return {}


@given("a plugin with a full readme and two screenshots")
def given_full_plugin(
    make_plugin: cabc.Callable[..., Path], scenario_state: dict[str, object]
) -> None:
    """Create a plugin with the sample readme and two screenshot files."""
    scenario_state["root"] = make_plugin(
        assets=["screenshot-1.png", "screenshot-2.jpg"]
    )


@given("a plugin without a readme")
def given_plugin_without_readme(
    make_plugin: cabc.Callable[..., Path], scenario_state: dict[str, object]
) -> None:
    """Create a plugin that ships only its main PHP file."""
    scenario_state["root"] = make_plugin(readme=None)


@when("I build the details record")
def when_build_record(scenario_state: dict[str, object]) -> None:
    """Assemble the details record for the scenario's plugin."""
    details = PluginDetails.from_root(scenario_state["root"])  # type: ignore[arg-type]
    scenario_state["record"] = details.build_info(today=dt.date(2025, 1, 2))


def _record(scenario_state: dict[str, object]) -> PluginInfoRecord:
    return scenario_state["record"]  # type: ignore[return-value]


@then(parsers.parse("the tabs are {tabs}"))
def then_tabs_are(scenario_state: dict[str, object], tabs: str) -> None:
    """Verify the tab keys and their order."""
    expected = [tab.strip() for tab in tabs.split(",")]
    actual = list(_record(scenario_state).sections)
    assert actual == expected, f"expected tabs {expected!r}, got {actual!r}"


@then("the description tab includes the Credits section")
def then_description_has_credits(scenario_state: dict[str, object]) -> None:
    """Verify the custom Credits section was merged into the description."""
    soup = BeautifulSoup(_record(scenario_state).sections["description"], "html.parser")
    headings = [h4.get_text() for h4 in soup.find_all("h4")]
    assert "Credits" in headings, f"expected a Credits heading, got {headings!r}"
    assert "Thanks to everyone." in soup.get_text(), "expected the Credits body"


@then(parsers.parse("the screenshots tab shows {count:d} images"))
def then_screenshot_images(scenario_state: dict[str, object], count: int) -> None:
    """Verify the screenshots tab carries one image per discovered file."""
    soup = BeautifulSoup(_record(scenario_state).sections["screenshots"], "html.parser")
    images = soup.find_all("img")
    assert len(images) == count, f"expected {count} images, got {len(images)}"
    assert images[1]["src"] == "assets/screenshot-2.jpg", (
        f"unexpected second image source {images[1]['src']!r}"
    )


@then("the compatibility fields use their default values")
def then_defaults(scenario_state: dict[str, object]) -> None:
    """Verify the fallback constants fill the compatibility fields."""
    record = _record(scenario_state)
    assert (record.requires, record.tested, record.requires_php) == (
        "5.0",
        "6.8",
        "7.4",
    ), "expected the default compatibility values"
    assert record.stable_tag == "1.4.2", "stable tag should fall back to the version"
    assert record.name == "Sample Plugin", "name should come from the plugin header"


@then("the record has no tabs")
def then_no_tabs(scenario_state: dict[str, object]) -> None:
    """Verify no sections were produced without a readme."""
    assert _record(scenario_state).sections == {}
