"""Tests for domain inference from shaped data."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest

from chartbuilder.config import (
    set_domain_band_continuous,
    set_domain_band_group,
    set_domain_continuous_y,
    set_domain_time_x,
    set_layout,
)
from chartbuilder.domains import (
    EPOCH,
    get_domain_band_from_data,
    get_domain_continuous_from_data,
    get_domain_time_from_data,
    is_empty_domain,
    resolve_domain_band,
)
from chartbuilder.shaping import AccessorContinuous, external_to_data_continuous_group
from chartbuilder.types import (
    DataGroupBand,
    DataGroupTime,
    ResolvedDomainBand,
    StackDirection,
    StackedBar,
)

pytestmark = pytest.mark.unit


def _band_data() -> tuple[DataGroupBand, ...]:
    return (
        DataGroupBand(group_label="G1", points=(("b", 4.0), ("a", -2.0))),
        DataGroupBand(group_label=None, points=(("a", 7.0), ("c", 1.0))),
    )


def test_band_domain_inferred_from_data(base_config) -> None:
    """Labels fall back to the group index; categories keep first occurrence order."""

    domain = get_domain_band_from_data(_band_data(), base_config)
    assert domain.band_group == ("G1", "1")
    assert domain.band_single == ("b", "a", "c")
    assert domain.continuous == (0.0, 7.0)


def test_band_domain_diverging_uses_min(base_config) -> None:
    config = set_layout(base_config, StackedBar(direction=StackDirection.diverging))
    assert get_domain_band_from_data(_band_data(), config).continuous == (-2.0, 7.0)


def test_band_domain_overrides_win(base_config) -> None:
    """User-set parts are returned as given, even when they disagree with data."""

    config = set_domain_band_group(base_config, ["z"])
    config = set_domain_band_continuous(config, (-10.0, 10.0))
    domain = get_domain_band_from_data(_band_data(), config)
    assert domain.band_group == ("z",)
    assert domain.continuous == (-10.0, 10.0)
    assert domain.band_single == ("b", "a", "c")


def test_band_domain_empty_data(base_config) -> None:
    domain = get_domain_band_from_data((), base_config)
    assert domain.band_group == ()
    assert domain.band_single == ()
    assert is_empty_domain(domain.continuous)
    assert resolve_domain_band(domain) == ResolvedDomainBand(band_group=(), band_single=(), continuous=(0.0, 0.0))


def test_continuous_domain_from_line_records(base_config, line_records) -> None:
    """Two line series produce x (1, 2) and y (0, 23)."""

    accessor = AccessorContinuous(x_group=lambda r: r["g"], x_value=lambda r: r["x"], y_value=lambda r: r["y"])
    data = external_to_data_continuous_group(line_records, accessor)
    domain = get_domain_continuous_from_data(None, data, base_config)
    assert domain.x == (1.0, 2.0)
    assert domain.y == (0.0, 23.0)


def test_continuous_domain_prefers_override_then_extent(base_config, line_records) -> None:
    accessor = AccessorContinuous(x_group=lambda r: r["g"], x_value=lambda r: r["x"], y_value=lambda r: r["y"])
    data = external_to_data_continuous_group(line_records, accessor)

    assert get_domain_continuous_from_data((0.0, 4.0), data, base_config).y == (0.0, 4.0)

    config = set_domain_continuous_y(base_config, (5.0, 50.0))
    assert get_domain_continuous_from_data((0.0, 4.0), data, config).y == (5.0, 50.0)


def test_continuous_domain_empty_is_zero(base_config) -> None:
    domain = get_domain_continuous_from_data(None, (), base_config)
    assert domain.x == (0.0, 0.0)
    assert domain.y == (0.0, 0.0)


def test_time_domain_from_data_and_empty_default(base_config) -> None:
    first = datetime(2024, 3, 1, tzinfo=UTC)
    last = datetime(2024, 3, 5, tzinfo=UTC)
    data = (
        DataGroupTime(group_label="A", points=((last, 3.0), (first, 1.0))),
        DataGroupTime(group_label="B", points=((first, 9.0),)),
    )
    domain = get_domain_time_from_data(None, data, base_config)
    assert domain.x == (first, last)
    assert domain.y == (0.0, 9.0)

    empty = get_domain_time_from_data(None, (), base_config)
    assert empty.x == (EPOCH, EPOCH)
    assert EPOCH == datetime(1970, 1, 1, tzinfo=UTC)


def test_time_domain_override(base_config) -> None:
    bounds = (datetime(2020, 1, 1, tzinfo=UTC), datetime(2021, 1, 1, tzinfo=UTC))
    config = set_domain_time_x(base_config, bounds)
    assert get_domain_time_from_data(None, (), config).x == bounds
