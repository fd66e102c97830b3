"""Tests for shaping external records into grouped chart data."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest

from chartbuilder.config import set_domain_band_single
from chartbuilder.shaping import (
    AccessorBand,
    AccessorContinuous,
    AccessorTime,
    data_band_to_data_stacked,
    data_continuous_group_to_data_stacked,
    external_to_data_band,
    external_to_data_continuous_group,
    external_to_data_time_group,
    external_to_datums,
    fill_gaps_for_stack,
    get_stacked_values_and_groupes,
    group_datums,
)
from chartbuilder.stack import StackConfig, stack
from chartbuilder.types import (
    NO_POINT,
    BandPoint,
    DataGroupBand,
    DataGroupContinuous,
    Datum,
    LinearPoint,
    StackedValue,
    TimePoint,
)

pytestmark = pytest.mark.unit

BAND_ACCESSOR = AccessorBand(x_group=lambda r: r["g"], x_value=lambda r: r["x"], y_value=lambda r: r["y"])
LINE_ACCESSOR = AccessorContinuous(x_group=lambda r: r["g"], x_value=lambda r: r["x"], y_value=lambda r: r["y"])


def test_external_to_data_continuous_group_groups_by_label(line_records) -> None:
    """Records split into one group per label with their (x, y) points."""

    data = external_to_data_continuous_group(line_records, LINE_ACCESSOR)
    assert data == (
        DataGroupContinuous(group_label="A", points=((1.0, 10.0), (2.0, 16.0))),
        DataGroupContinuous(group_label="B", points=((1.0, 13.0), (2.0, 23.0))),
    )


def test_external_to_data_band_sorts_and_merges_non_adjacent_groups() -> None:
    """Equal labels far apart in the input end up in one group, in input order."""

    records = [
        {"g": "B", "x": "a", "y": 1},
        {"g": "A", "x": "b", "y": 2},
        {"g": "B", "x": "c", "y": 3},
        {"g": "A", "x": "a", "y": 4},
    ]
    data = external_to_data_band(records, BAND_ACCESSOR)
    assert data == (
        DataGroupBand(group_label="A", points=(("b", 2.0), ("a", 4.0))),
        DataGroupBand(group_label="B", points=(("a", 1.0), ("c", 3.0))),
    )


def test_external_to_data_band_keeps_ungrouped_records_together() -> None:
    """Records without a group label form a single unlabelled group."""

    records = [{"g": None, "x": "a", "y": 1}, {"g": None, "x": "b", "y": 2}]
    data = external_to_data_band(records, BAND_ACCESSOR)
    assert data == (DataGroupBand(group_label=None, points=(("a", 1.0), ("b", 2.0))),)


def test_external_to_data_time_group_reads_datetimes() -> None:
    records = [
        {"g": "A", "x": datetime(2024, 1, 2, tzinfo=UTC), "y": 2},
        {"g": "A", "x": datetime(2024, 1, 1, tzinfo=UTC), "y": 1},
    ]
    accessor = AccessorTime(x_group=lambda r: r["g"], x_value=lambda r: r["x"], y_value=lambda r: r["y"])
    data = external_to_data_time_group(records, accessor)
    assert len(data) == 1
    assert data[0].points == (
        (datetime(2024, 1, 2, tzinfo=UTC), 2.0),
        (datetime(2024, 1, 1, tzinfo=UTC), 1.0),
    )


def test_fill_gaps_for_stack_adds_zero_points(band_records) -> None:
    """A group missing a category receives a zero point, sorted by key."""

    data = fill_gaps_for_stack(external_to_data_band(band_records, BAND_ACCESSOR))
    assert data[0].points == (("a", 10.0), ("b", 20.0))
    assert data[1].points == (("a", 5.0), ("b", 0.0))


def test_fill_gaps_for_stack_is_idempotent() -> None:
    """Filling twice equals filling once and every group shares one key set."""

    data = (
        DataGroupBand(group_label="x", points=(("c", 1.0), ("a", 2.0))),
        DataGroupBand(group_label="y", points=(("b", 3.0),)),
        DataGroupBand(group_label="z", points=()),
    )
    once = fill_gaps_for_stack(data)
    assert fill_gaps_for_stack(once) == once
    for group in once:
        assert [key for key, _ in group.points] == ["a", "b", "c"]


def test_data_band_to_data_stacked_collects_values_per_category(base_config, band_records) -> None:
    data = fill_gaps_for_stack(external_to_data_band(band_records, BAND_ACCESSOR))
    assert data_band_to_data_stacked(data, base_config) == (
        ("a", (10.0, 5.0)),
        ("b", (20.0, 0.0)),
    )


def test_data_band_to_data_stacked_seeds_from_domain(base_config, band_records) -> None:
    """Overridden categories without contributions still appear, empty."""

    config = set_domain_band_single(base_config, ["b", "a", "z"])
    data = external_to_data_band(band_records, BAND_ACCESSOR)
    assert data_band_to_data_stacked(data, config) == (
        ("b", (20.0,)),
        ("a", (10.0, 5.0)),
        ("z", ()),
    )


def test_get_stacked_values_and_groupes_pairs_offsets_with_raw_values(base_config, band_records) -> None:
    """After undoing the reversed stack order, each segment matches its raw value."""

    data = fill_gaps_for_stack(external_to_data_band(band_records, BAND_ACCESSOR))
    result = stack(StackConfig(data=data_band_to_data_stacked(data, base_config)))

    stacked, labels = get_stacked_values_and_groupes(result.values, data)
    assert labels == ("G1", "G2")
    assert stacked[0] == (
        StackedValue(raw_value=10.0, stacked_value=(20.0, 30.0)),
        StackedValue(raw_value=20.0, stacked_value=(0.0, 20.0)),
    )
    assert stacked[1] == (
        StackedValue(raw_value=5.0, stacked_value=(0.0, 5.0)),
        StackedValue(raw_value=0.0, stacked_value=(0.0, 0.0)),
    )
    for group in stacked:
        for entry in group:
            assert entry.stacked_value[1] - entry.stacked_value[0] == entry.raw_value


def test_get_stacked_values_and_groupes_matches_by_label(base_config, band_records) -> None:
    """With labels, raw values follow the category even when order differs from the points."""

    config = set_domain_band_single(base_config, ["b", "a"])
    data = fill_gaps_for_stack(external_to_data_band(band_records, BAND_ACCESSOR))
    result = stack(StackConfig(data=data_band_to_data_stacked(data, config)))

    stacked, _ = get_stacked_values_and_groupes(result.values, data, labels=result.labels)
    assert [entry.raw_value for entry in stacked[0]] == [20.0, 10.0]
    for group in stacked:
        for entry in group:
            assert entry.stacked_value[1] - entry.stacked_value[0] == entry.raw_value


def test_data_continuous_group_to_data_stacked_zero_fills_positions() -> None:
    data = (
        DataGroupContinuous(group_label="A", points=((1.0, 2.0), (3.0, 4.0))),
        DataGroupContinuous(group_label=None, points=((2.0, 5.0),)),
    )
    xs, layers = data_continuous_group_to_data_stacked(data)
    assert xs == (1.0, 2.0, 3.0)
    assert layers == (("A", (2.0, 0.0, 4.0)), ("1", (0.0, 5.0, 0.0)))


def test_unlabelled_and_empty_labels_form_one_group_each() -> None:
    """None and "" are distinct labels and each is emitted exactly once."""

    records = [
        {"g": None, "x": "a", "y": 1},
        {"g": "", "x": "b", "y": 2},
        {"g": None, "x": "c", "y": 3},
    ]
    data = external_to_data_band(records, BAND_ACCESSOR)
    assert data == (
        DataGroupBand(group_label=None, points=(("a", 1.0), ("c", 3.0))),
        DataGroupBand(group_label="", points=(("b", 2.0),)),
    )


def test_external_to_datums_builds_point_variant_from_accessor(line_records) -> None:
    datums = external_to_datums(line_records[:1], LINE_ACCESSOR)
    assert datums == (Datum(group="A", point=LinearPoint(x=1.0, y=10.0)),)

    band = external_to_datums([{"g": None, "x": "a", "y": 2}], BAND_ACCESSOR)
    assert band == (Datum(group=None, point=BandPoint(x="a", y=2.0)),)

    stamp = datetime(2024, 1, 1, tzinfo=UTC)
    accessor = AccessorTime(x_group=lambda r: r["g"], x_value=lambda r: r["x"], y_value=lambda r: r["y"])
    timed = external_to_datums([{"g": "T", "x": stamp, "y": 1}], accessor)
    assert timed == (Datum(group="T", point=TimePoint(x=stamp, y=1.0)),)


def test_group_datums_keeps_groups_of_missing_points() -> None:
    """A NO_POINT datum keeps its group but adds no point."""

    datums = [
        Datum(group="B", point=BandPoint(x="a", y=1.0)),
        Datum(group="A", point=NO_POINT),
        Datum(group="B", point=BandPoint(x="b", y=2.0)),
    ]
    assert group_datums(datums) == [("A", ()), ("B", (("a", 1.0), ("b", 2.0)))]
