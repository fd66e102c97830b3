"""Shape external records into grouped chart data.

The pipeline is generic over the record type: records are only ever read
through the three callables of an accessor bundle. Each record first becomes
a `Datum` carrying a typed point; datums are then grouped by label.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from datetime import datetime
from itertools import groupby
from typing import Any, TypeAlias

from .config import Config
from .domains import get_domain_band_from_data
from .types import (
    BandPoint,
    DataBand,
    DataContinuousGroup,
    DataGroupBand,
    DataGroupContinuous,
    DataGroupTime,
    DataTimeGroup,
    Datum,
    LinearPoint,
    NoPoint,
    Point,
    StackedValue,
    StackedValuesAndGroupes,
    TimePoint,
)


@dataclass(frozen=True, slots=True)
class AccessorBand:
    """Read band points from external records.

    Args:
        x_group: Group label of a record, or None when ungrouped.
        x_value: Category key of a record.
        y_value: Numeric value of a record.
    """

    x_group: Callable[[Any], str | None]
    x_value: Callable[[Any], str]
    y_value: Callable[[Any], float]


@dataclass(frozen=True, slots=True)
class AccessorContinuous:
    """Read numeric (x, y) points from external records."""

    x_group: Callable[[Any], str | None]
    x_value: Callable[[Any], float]
    y_value: Callable[[Any], float]


@dataclass(frozen=True, slots=True)
class AccessorTime:
    """Read (timestamp, y) points from external records."""

    x_group: Callable[[Any], str | None]
    x_value: Callable[[Any], datetime]
    y_value: Callable[[Any], float]


AccessorContinuousOrTime: TypeAlias = AccessorContinuous | AccessorTime

Accessor: TypeAlias = AccessorBand | AccessorContinuous | AccessorTime

StackedBandData: TypeAlias = tuple[tuple[str, tuple[float, ...]], ...]


def _record_point(record: object, accessor: Accessor) -> Point:
    x = accessor.x_value(record)
    y = float(accessor.y_value(record))
    match accessor:
        case AccessorBand():
            return BandPoint(x=str(x), y=y)
        case AccessorContinuous():
            return LinearPoint(x=float(x), y=y)
        case AccessorTime():
            return TimePoint(x=x, y=y)


def external_to_datums(records: Iterable[object], accessor: Accessor) -> tuple[Datum, ...]:
    """Read every record into a `Datum` whose point variant follows the accessor.

    Args:
        records: External records of any type.
        accessor: Band, continuous or time accessors.

    Returns:
        One datum per record, in input order.
    """

    return tuple(Datum(group=accessor.x_group(record), point=_record_point(record, accessor)) for record in records)


def _group_sort_key(datum: Datum) -> tuple[bool, str]:
    """Order unlabelled datums first and keep them apart from the empty label."""

    return (datum.group is not None, datum.group or "")


def group_datums(datums: Iterable[Datum]) -> list[tuple[str | None, tuple[tuple[Any, float], ...]]]:
    """Sort datums by group label and collect one run per distinct label.

    The sort is stable, so points keep their input order within a group.
    `NO_POINT` datums keep their group alive but contribute no point.

    Args:
        datums: Datums of a single point variant.

    Returns:
        `(label, points)` pairs with points as `(x, y)` tuples.
    """

    ordered = sorted(datums, key=_group_sort_key)
    groups: list[tuple[str | None, tuple[tuple[Any, float], ...]]] = []
    for label, run in groupby(ordered, key=lambda datum: datum.group):
        points = []
        for datum in run:
            match datum.point:
                case BandPoint(x=x, y=y) | LinearPoint(x=x, y=y) | TimePoint(x=x, y=y):
                    points.append((x, y))
                case NoPoint():
                    pass
        groups.append((label, tuple(points)))
    return groups


def external_to_data_band(records: Iterable[object], accessor: AccessorBand) -> DataBand:
    """Shape records into band groups.

    Args:
        records: External records of any type.
        accessor: Group/category/value accessors.

    Returns:
        One DataGroupBand per distinct group label, ordered by label.
    """

    groups = group_datums(external_to_datums(records, accessor))
    return tuple(DataGroupBand(group_label=label, points=points) for label, points in groups)


def external_to_data_continuous_group(
    records: Iterable[object],
    accessor: AccessorContinuous,
) -> DataContinuousGroup:
    """Shape records into numeric line groups, ordered by label."""

    groups = group_datums(external_to_datums(records, accessor))
    return tuple(DataGroupContinuous(group_label=label, points=points) for label, points in groups)


def external_to_data_time_group(records: Iterable[object], accessor: AccessorTime) -> DataTimeGroup:
    """Shape records into time line groups, ordered by label."""

    groups = group_datums(external_to_datums(records, accessor))
    return tuple(DataGroupTime(group_label=label, points=points) for label, points in groups)


def fill_gaps_for_stack(data: DataBand) -> DataBand:
    """Give every group a point for every category.

    Categories missing from a group are added with a zero value and each
    group's points are sorted by category key, so that all groups line up
    position by position. Applying this twice is the same as applying it once.

    Args:
        data: Band groups, possibly with missing categories.

    Returns:
        Band groups sharing the same, sorted category set.
    """

    all_keys = {key for group in data for key, _ in group.points}
    filled: list[DataGroupBand] = []
    for group in data:
        present = {key for key, _ in group.points}
        missing = tuple((key, 0.0) for key in sorted(all_keys - present))
        points = tuple(sorted(group.points + missing, key=lambda point: point[0]))
        filled.append(DataGroupBand(group_label=group.group_label, points=points))
    return tuple(filled)


def data_band_to_data_stacked(data: DataBand, config: Config) -> StackedBandData:
    """Collect, per category, the values each group contributes.

    Buckets are seeded from the band-single domain (override or inferred), so a
    category with no contributions still appears with an empty tuple.

    Args:
        data: Band groups, normally already passed through `fill_gaps_for_stack`.
        config: Configuration providing any band-single override.

    Returns:
        `(category, values)` pairs in band-single domain order; values follow
        group order.
    """

    categories = get_domain_band_from_data(data, config).band_single or ()
    buckets: dict[str, list[float]] = {category: [] for category in categories}
    for group in data:
        for key, value in group.points:
            if key in buckets:
                buckets[key].append(value)
    return tuple((category, tuple(buckets[category])) for category in categories)


def data_continuous_group_to_data_stacked(
    data: DataContinuousGroup | DataTimeGroup,
) -> tuple[tuple[Any, ...], tuple[tuple[str, tuple[float, ...]], ...]]:
    """Collect, per group, its value at every x position for stacked lines.

    Args:
        data: Numeric or time line groups.

    Returns:
        The sorted distinct x positions and one `(group label, values)` layer
        per group, with 0 where a group has no point at a position.
    """

    xs = tuple(sorted({x for group in data for x, _ in group.points}))
    layers: list[tuple[str, tuple[float, ...]]] = []
    for idx, group in enumerate(data):
        by_x = dict(group.points)
        label = group.group_label if group.group_label is not None else str(idx)
        layers.append((label, tuple(by_x.get(x, 0.0) for x in xs)))
    return xs, tuple(layers)


def get_stacked_values_and_groupes(
    values: Sequence[Sequence[tuple[float, float]]],
    data: DataBand,
    *,
    labels: Sequence[str] | None = None,
) -> StackedValuesAndGroupes:
    """Pair stacked offsets with the raw values they were computed from.

    `values` is the output of `stack.stack`: one row per category, in reversed
    category order. The rows are reversed back, transposed into one row per
    group and zipped with each group's raw points.

    Args:
        values: Stacked `(start, end)` rows per category, as returned by `stack`.
        data: The band groups that were stacked.
        labels: Category labels of `values`, as returned by `stack`. When
            given, raw values are matched by category key; otherwise by
            position within each group.

    Returns:
        Stacked values per group, plus the group labels.
    """

    rows = list(reversed([list(row) for row in values]))
    row_labels = list(reversed(list(labels))) if labels is not None else None

    stacked_groups: list[tuple[StackedValue, ...]] = []
    for group_idx, group in enumerate(data):
        offsets = [row[group_idx] for row in rows if group_idx < len(row)]
        if row_labels is None:
            raws = [value for _, value in group.points]
        else:
            by_key = dict(group.points)
            present = [label for label, row in zip(row_labels, rows) if group_idx < len(row)]
            raws = [by_key.get(label, 0.0) for label in present]
        stacked_groups.append(
            tuple(StackedValue(raw_value=raw, stacked_value=offset) for offset, raw in zip(offsets, raws))
        )

    group_labels = tuple(
        group.group_label if group.group_label is not None else str(idx) for idx, group in enumerate(data)
    )
    return tuple(stacked_groups), group_labels
