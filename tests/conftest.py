"""Pytest fixtures shared across chartbuilder tests."""

from __future__ import annotations

from collections.abc import Sequence

import pytest

from chartbuilder.config import Config, init
from chartbuilder.types import Margin, RequiredConfig


@pytest.fixture
def base_config() -> Config:
    """Return a 100x50 configuration without margin."""

    return init(RequiredConfig(margin=Margin(top=0, right=0, bottom=0, left=0), width=100, height=50))


@pytest.fixture
def line_records() -> list[dict[str, object]]:
    """Return two small line series keyed by group `g`."""

    return [
        {"g": "A", "x": 1.0, "y": 10.0},
        {"g": "A", "x": 2.0, "y": 16.0},
        {"g": "B", "x": 1.0, "y": 13.0},
        {"g": "B", "x": 2.0, "y": 23.0},
    ]


@pytest.fixture
def band_records() -> list[dict[str, object]]:
    """Return band records where group G2 lacks category `b`."""

    return [
        {"g": "G1", "x": "a", "y": 10.0},
        {"g": "G1", "x": "b", "y": 20.0},
        {"g": "G2", "x": "a", "y": 5.0},
    ]


def pytest_collection_modifyitems(items: Sequence[pytest.Item]) -> None:
    """Enforce that every test has exactly one speed marker.

    - `unit`: pure, fast tests with no IO.
    - `integration`: tests touching the filesystem or running scripts.
    """

    invalid: list[str] = []
    for item in items:
        has_unit = item.get_closest_marker("unit") is not None
        has_integration = item.get_closest_marker("integration") is not None
        if has_unit == has_integration:
            markers = []
            if has_unit:
                markers.append("unit")
            if has_integration:
                markers.append("integration")
            invalid.append(f"{item.nodeid} (markers={markers or 'none'})")

    if invalid:
        joined = "\n".join(f"- {nodeid}" for nodeid in invalid)
        raise pytest.UsageError(
            "Each test must have exactly one speed marker: `@pytest.mark.unit` or "
            "`@pytest.mark.integration`.\n"
            f"Offending tests:\n{joined}"
        )
