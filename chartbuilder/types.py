"""Domain model for chart configuration and shaped data.

Every union in this module is closed: consumers `match` on the concrete
variants and must handle each one. All types are immutable value objects.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from typing import TypeAlias


class Orientation(StrEnum):
    """Direction the chart's bars or value axis run in."""

    vertical = "vertical"
    horizontal = "horizontal"


class StackDirection(StrEnum):
    """Stacking direction for stacked bar layouts.

    `diverging` allows negative segments that grow away from the zero baseline.
    """

    no_direction = "no_direction"
    diverging = "diverging"


class RenderContext(StrEnum):
    """Where a continuous range is consumed: chart geometry or axis ticks."""

    chart = "chart"
    axis = "axis"


class AccessibilityContent(StrEnum):
    """Accessibility output requested from the renderer."""

    none = "none"
    table = "table"


# Layout


@dataclass(frozen=True, slots=True)
class GroupedBar:
    """Bars of the same group sit side by side."""


@dataclass(frozen=True, slots=True)
class StackedBar:
    """Bars of the same group are stacked on top of each other.

    Args:
        direction: `diverging` splits positive and negative values around zero.
    """

    direction: StackDirection = StackDirection.no_direction


@dataclass(frozen=True, slots=True)
class GroupedLine:
    """One independent line per group."""


@dataclass(frozen=True, slots=True)
class StackedLine:
    """Lines stacked as cumulative areas."""


Layout: TypeAlias = GroupedBar | StackedBar | GroupedLine | StackedLine


def is_diverging(layout: Layout) -> bool:
    """Return True for `StackedBar(diverging)` layouts."""

    return isinstance(layout, StackedBar) and layout.direction == StackDirection.diverging


# Points


@dataclass(frozen=True, slots=True)
class LinearPoint:
    """A numeric (x, y) point."""

    x: float
    y: float


@dataclass(frozen=True, slots=True)
class BandPoint:
    """A categorical point: category key plus value."""

    x: str
    y: float


@dataclass(frozen=True, slots=True)
class TimePoint:
    """A point on a time x-axis."""

    x: datetime
    y: float


@dataclass(frozen=True, slots=True)
class NoPoint:
    """Absence of a point."""


NO_POINT = NoPoint()

Point: TypeAlias = LinearPoint | BandPoint | TimePoint | NoPoint


@dataclass(frozen=True, slots=True)
class Datum:
    """A single point tagged with an optional group.

    Args:
        group: Group label, or None for an ungrouped single series.
        point: The point. A dataset must use a single point variant.
    """

    group: str | None
    point: Point


# Shaped data


@dataclass(frozen=True, slots=True)
class DataGroupBand:
    """Band points belonging to one group.

    Args:
        group_label: Group label, None when the input carried no label.
        points: Ordered `(category, value)` pairs.
    """

    group_label: str | None
    points: tuple[tuple[str, float], ...]


@dataclass(frozen=True, slots=True)
class DataGroupContinuous:
    """Numeric points belonging to one group."""

    group_label: str | None
    points: tuple[tuple[float, float], ...]


@dataclass(frozen=True, slots=True)
class DataGroupTime:
    """Time points belonging to one group."""

    group_label: str | None
    points: tuple[tuple[datetime, float], ...]


DataBand: TypeAlias = tuple[DataGroupBand, ...]
DataContinuousGroup: TypeAlias = tuple[DataGroupContinuous, ...]
DataTimeGroup: TypeAlias = tuple[DataGroupTime, ...]


# Dimensions


@dataclass(frozen=True, slots=True)
class Margin:
    """Outer spacing around the plot area, in pixels. All fields are non-negative."""

    top: float
    right: float
    bottom: float
    left: float


ZERO_MARGIN = Margin(top=0, right=0, bottom=0, left=0)


@dataclass(frozen=True, slots=True)
class RequiredConfig:
    """The fields needed to create a configuration.

    Args:
        margin: Outer margin.
        width: Outer SVG width, including margins.
        height: Outer SVG height, including margins.
    """

    margin: Margin
    width: float
    height: float


# Domains


@dataclass(frozen=True, slots=True)
class DomainBand:
    """Band chart domain with three independently overridable parts.

    Args:
        band_group: Ordered group labels (outer band axis).
        band_single: Ordered category keys (inner band axis).
        continuous: Value axis `(lower, upper)`.
    """

    band_group: tuple[str, ...] | None = None
    band_single: tuple[str, ...] | None = None
    continuous: tuple[float, float] | None = None


@dataclass(frozen=True, slots=True)
class DomainContinuous:
    """Numeric x/y domain; None means infer from data."""

    x: tuple[float, float] | None = None
    y: tuple[float, float] | None = None


@dataclass(frozen=True, slots=True)
class DomainTime:
    """Time x domain and numeric y domain; None means infer from data."""

    x: tuple[datetime, datetime] | None = None
    y: tuple[float, float] | None = None


@dataclass(frozen=True, slots=True)
class ResolvedDomainBand:
    """A band domain with every part filled in."""

    band_group: tuple[str, ...]
    band_single: tuple[str, ...]
    continuous: tuple[float, float]


@dataclass(frozen=True, slots=True)
class ResolvedDomainContinuous:
    """A numeric domain with both axes filled in."""

    x: tuple[float, float]
    y: tuple[float, float]


@dataclass(frozen=True, slots=True)
class ResolvedDomainTime:
    """A time domain with both axes filled in."""

    x: tuple[datetime, datetime]
    y: tuple[float, float]


# Scale kinds


@dataclass(frozen=True, slots=True)
class LinearScaleKind:
    """Map the value axis linearly."""


@dataclass(frozen=True, slots=True)
class LogScaleKind:
    """Map the value axis logarithmically.

    Args:
        base: Logarithm base, > 0 and != 1.
    """

    base: float = 10.0


ScaleKind: TypeAlias = LinearScaleKind | LogScaleKind


# Symbols


Styles: TypeAlias = tuple[tuple[str, str], ...]


@dataclass(frozen=True, slots=True)
class Circle:
    """Circular icon; occupies half of the band width."""

    identifier: str = "symbol-circle"
    styles: Styles = ()


@dataclass(frozen=True, slots=True)
class Corner:
    """Corner icon; occupies the full band width."""

    identifier: str = "symbol-corner"
    styles: Styles = ()


@dataclass(frozen=True, slots=True)
class Triangle:
    """Triangle icon; occupies the full band width."""

    identifier: str = "symbol-triangle"
    styles: Styles = ()


@dataclass(frozen=True, slots=True)
class CustomSymbol:
    """User supplied icon scaled by its viewBox aspect ratio.

    Args:
        viewbox_width: Width of the icon's viewBox.
        viewbox_height: Height of the icon's viewBox.
        paths: SVG path `d` strings, passed through to the renderer.
        identifier: Symbol id used by the renderer.
        styles: Extra style declarations.
    """

    viewbox_width: float
    viewbox_height: float
    paths: tuple[str, ...] = ()
    identifier: str = "symbol-custom"
    styles: Styles = ()


@dataclass(frozen=True, slots=True)
class NoSymbol:
    """No icon."""


Symbol: TypeAlias = Circle | Corner | Triangle | CustomSymbol | NoSymbol


# Colour


@dataclass(frozen=True, slots=True)
class ColorPalette:
    """Cycle through a fixed list of colours."""

    colors: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class ColorInterpolator:
    """Sample colours from `interpolator(t)` with `t` in [0, 1]."""

    interpolator: Callable[[float], str]


@dataclass(frozen=True, slots=True)
class SingleColor:
    """Use one colour for every series."""

    color: str


@dataclass(frozen=True, slots=True)
class NoColor:
    """Leave colouring to stylesheets."""


ColorResource: TypeAlias = ColorPalette | ColorInterpolator | SingleColor | NoColor


# Column titles


ValueFormatter: TypeAlias = Callable[[float], str]


@dataclass(frozen=True, slots=True)
class NoColumnTitle:
    """No value labels on bars."""


@dataclass(frozen=True, slots=True)
class StackedColumnTitle:
    """One label with the stack total above each stacked bar."""

    formatter: ValueFormatter = str


@dataclass(frozen=True, slots=True)
class RelativeColumnTitle:
    """Label placed relative to the end of each bar."""

    formatter: ValueFormatter = str


@dataclass(frozen=True, slots=True)
class AbsoluteColumnTitle:
    """Label placed at a fixed offset from the chart edge."""

    y_offset: float = 0.0
    formatter: ValueFormatter = str


ColumnTitle: TypeAlias = NoColumnTitle | StackedColumnTitle | RelativeColumnTitle | AbsoluteColumnTitle


# Axis descriptors


@dataclass(frozen=True, slots=True)
class AxisDescriptor:
    """Opaque axis options forwarded to the axis renderer.

    Args:
        show: Whether the axis is drawn at all.
        tick_count: Suggested number of ticks.
        tick_format: Optional tick label formatter.
        ticks: Explicit tick values, overriding `tick_count`.
    """

    show: bool = True
    tick_count: int | None = None
    tick_format: Callable[[object], str] | None = None
    ticks: tuple[object, ...] | None = None


# Stacking output


@dataclass(frozen=True, slots=True)
class StackedValue:
    """A raw value paired with its stacked `(start, end)` offsets."""

    raw_value: float
    stacked_value: tuple[float, float]


StackedValues: TypeAlias = tuple[StackedValue, ...]

StackedValuesAndGroupes: TypeAlias = tuple[tuple[StackedValues, ...], tuple[str, ...]]
