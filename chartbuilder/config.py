"""Immutable chart configuration and its copy-on-write setters.

A `Config` is created with `init` and threaded through any number of `set_*`
calls. Each setter returns a new value; the input configuration is never
modified, so a base configuration can be shared between charts freely.

Width and height are stored net of the margin: they describe the inner plot
area, not the outer SVG canvas.

Accessibility table options follow a small state machine (`ConfigState`):

- `initial -> with_table` through `with_table` or any table option setter.
- `initial -> without_table` through `without_table`.
- `with_table -> with_table` through further table option setters.
- `without_table` is terminal for table options; setting one raises
  `ConfigStateError`.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, replace
from datetime import datetime
from enum import StrEnum

from .constants import BOTTOM_GAP, LEFT_GAP
from .types import (
    AccessibilityContent,
    AxisDescriptor,
    ColorResource,
    ColumnTitle,
    DomainBand,
    DomainContinuous,
    DomainTime,
    GroupedBar,
    Layout,
    LinearScaleKind,
    Margin,
    NoColor,
    NoColumnTitle,
    NoSymbol,
    Orientation,
    RequiredConfig,
    ScaleKind,
    StackedBar,
    StackedLine,
    Styles,
    Symbol,
    ZERO_MARGIN,
)


class ConfigState(StrEnum):
    """Which accessibility table options may still be set."""

    initial = "initial"
    with_table = "with_table"
    without_table = "without_table"


class ConfigStateError(ValueError):
    """Raised when a setter is not allowed in the configuration's current state."""

    def __init__(self, *, operation: str, state: ConfigState) -> None:
        """Initialize the error.

        Args:
            operation: Name of the rejected setter.
            state: State the configuration was in.
        """

        super().__init__(f"{operation} is not allowed when the configuration state is {state.value!r}.")
        self.operation = operation
        self.state = state


@dataclass(frozen=True, slots=True)
class Config:
    """Every option a chart can be rendered with.

    Args:
        margin: Margin including the fixed left/bottom gaps once `set_margin` ran.
        width: Inner plot width (outer width minus left and right margin).
        height: Inner plot height (outer height minus top and bottom margin).
        layout: Bar or line layout.
        orientation: Vertical or horizontal bars.
        domain_band: User overrides for band charts.
        domain_continuous: User overrides for numeric x/y charts.
        domain_time: User overrides for time x charts.
        axis_x_band: Band x axis options.
        axis_x_continuous: Numeric x axis options.
        axis_x_time: Time x axis options.
        axis_y_continuous: Value axis options.
        color_resource: Colours handed to the renderer.
        scale_kind: Linear or logarithmic value axis.
        accessibility_content: Whether an accessible data table is emitted.
        table_float_format: Number formatter for the accessibility table.
        table_time_format: Date formatter for the accessibility table.
        table_caption: Caption for the accessibility table.
        column_title: Value labels drawn on bars.
        symbols: Icons drawn beside grouped bars or on line points.
        show_symbols: Whether line charts draw their symbols.
        curve: Opaque curve factory for line charts.
        core_style: Style declarations applied to marks.
        events: Opaque event handlers passed to the renderer.
        svg_title: `<title>` text of the SVG.
        svg_desc: `<desc>` text of the SVG.
        histogram_domain: Explicit histogram domain.
        histogram_steps: Explicit histogram bin edges, ascending.
        state: Accessibility table state.
    """

    margin: Margin
    width: float
    height: float
    layout: Layout = GroupedBar()
    orientation: Orientation = Orientation.vertical
    domain_band: DomainBand = DomainBand()
    domain_continuous: DomainContinuous = DomainContinuous()
    domain_time: DomainTime = DomainTime()
    axis_x_band: AxisDescriptor = AxisDescriptor()
    axis_x_continuous: AxisDescriptor = AxisDescriptor()
    axis_x_time: AxisDescriptor = AxisDescriptor()
    axis_y_continuous: AxisDescriptor = AxisDescriptor()
    color_resource: ColorResource = NoColor()
    scale_kind: ScaleKind = LinearScaleKind()
    accessibility_content: AccessibilityContent = AccessibilityContent.table
    table_float_format: Callable[[float], str] | None = None
    table_time_format: Callable[[datetime], str] | None = None
    table_caption: str | None = None
    column_title: ColumnTitle = NoColumnTitle()
    symbols: tuple[Symbol, ...] = ()
    show_symbols: bool = False
    curve: Callable[..., object] | None = None
    core_style: Styles = ()
    events: tuple[object, ...] = ()
    svg_title: str = ""
    svg_desc: str = ""
    histogram_domain: tuple[float, float] | None = None
    histogram_steps: tuple[float, ...] = ()
    state: ConfigState = ConfigState.initial


def init(required: RequiredConfig) -> Config:
    """Create a configuration from its required fields.

    The margin is stored as given and width/height are reduced by it. Width and
    height must remain > 0 after the subtraction; this is a precondition checked
    by `chartbuilder.validator.validate_config`, not clamped here.

    Args:
        required: Margin plus outer width and height.

    Returns:
        A configuration with library defaults for every other field.
    """

    margin = required.margin
    return Config(
        margin=margin,
        width=required.width - margin.left - margin.right,
        height=required.height - margin.top - margin.bottom,
    )


def default_config() -> Config:
    """Return an empty configuration with a zero margin and zero size."""

    return Config(margin=ZERO_MARGIN, width=0, height=0)


# Dimensions


def set_width(config: Config, width: float) -> Config:
    """Store `width` minus the current left and right margin."""

    return replace(config, width=width - config.margin.left - config.margin.right)


def set_height(config: Config, height: float) -> Config:
    """Store `height` minus the current top and bottom margin."""

    return replace(config, height=height - config.margin.top - config.margin.bottom)


def _with_gaps(margin: Margin) -> Margin:
    return replace(margin, left=margin.left + LEFT_GAP, bottom=margin.bottom + BOTTOM_GAP)


def set_margin(config: Config, margin: Margin) -> Config:
    """Store `margin` with the fixed left and bottom gaps added.

    Width and height already stored are left untouched; use `set_dimensions`
    to change margin and size together.
    """

    return replace(config, margin=_with_gaps(margin))


def set_dimensions(config: Config, dimensions: RequiredConfig) -> Config:
    """Set margin, width and height in one step from outer values.

    Args:
        config: Configuration to update.
        dimensions: Margin plus outer width and height.

    Returns:
        A configuration whose width/height are the outer values minus the
        gapped margin. Applying it twice gives the same result as once.
    """

    margin = _with_gaps(dimensions.margin)
    return replace(
        config,
        margin=margin,
        width=dimensions.width - margin.left - margin.right,
        height=dimensions.height - margin.top - margin.bottom,
    )


# Layout


def set_layout(config: Config, layout: Layout) -> Config:
    return replace(config, layout=layout)


def set_orientation(config: Config, orientation: Orientation) -> Config:
    return replace(config, orientation=orientation)


# Domains


def set_domain_band(config: Config, domain: DomainBand) -> Config:
    return replace(config, domain_band=domain)


def set_domain_band_group(config: Config, band_group: tuple[str, ...] | list[str]) -> Config:
    """Override the group (outer band) domain."""

    return replace(config, domain_band=replace(config.domain_band, band_group=tuple(band_group)))


def set_domain_band_single(config: Config, band_single: tuple[str, ...] | list[str]) -> Config:
    """Override the category (inner band) domain."""

    return replace(config, domain_band=replace(config.domain_band, band_single=tuple(band_single)))


def set_domain_band_continuous(config: Config, continuous: tuple[float, float]) -> Config:
    """Override the value axis domain of a band chart."""

    return replace(config, domain_band=replace(config.domain_band, continuous=tuple(continuous)))


def set_domain_continuous(config: Config, domain: DomainContinuous) -> Config:
    return replace(config, domain_continuous=domain)


def set_domain_continuous_x(config: Config, x: tuple[float, float]) -> Config:
    return replace(config, domain_continuous=replace(config.domain_continuous, x=tuple(x)))


def set_domain_continuous_y(config: Config, y: tuple[float, float]) -> Config:
    return replace(config, domain_continuous=replace(config.domain_continuous, y=tuple(y)))


def set_domain_time(config: Config, domain: DomainTime) -> Config:
    return replace(config, domain_time=domain)


def set_domain_time_x(config: Config, x: tuple[datetime, datetime]) -> Config:
    return replace(config, domain_time=replace(config.domain_time, x=tuple(x)))


def set_domain_time_y(config: Config, y: tuple[float, float]) -> Config:
    return replace(config, domain_time=replace(config.domain_time, y=tuple(y)))


# Axes


def set_axis_x_band(config: Config, axis: AxisDescriptor) -> Config:
    return replace(config, axis_x_band=axis)


def set_axis_x_continuous(config: Config, axis: AxisDescriptor) -> Config:
    return replace(config, axis_x_continuous=axis)


def set_axis_x_time(config: Config, axis: AxisDescriptor) -> Config:
    return replace(config, axis_x_time=axis)


def set_axis_y_continuous(config: Config, axis: AxisDescriptor) -> Config:
    return replace(config, axis_y_continuous=axis)


def hide_x_axis(config: Config) -> Config:
    """Hide every x axis variant."""

    return replace(
        config,
        axis_x_band=replace(config.axis_x_band, show=False),
        axis_x_continuous=replace(config.axis_x_continuous, show=False),
        axis_x_time=replace(config.axis_x_time, show=False),
    )


def hide_y_axis(config: Config) -> Config:
    return replace(config, axis_y_continuous=replace(config.axis_y_continuous, show=False))


# Presentation


def set_color_resource(config: Config, color_resource: ColorResource) -> Config:
    return replace(config, color_resource=color_resource)


def set_scale_kind(config: Config, scale_kind: ScaleKind) -> Config:
    return replace(config, scale_kind=scale_kind)


def set_column_title(config: Config, column_title: ColumnTitle) -> Config:
    return replace(config, column_title=column_title)


def set_symbols(config: Config, symbols: tuple[Symbol, ...] | list[Symbol]) -> Config:
    return replace(config, symbols=tuple(symbols))


def set_show_symbols(config: Config, show: bool) -> Config:
    return replace(config, show_symbols=show)


def set_curve(config: Config, curve: Callable[..., object]) -> Config:
    return replace(config, curve=curve)


def set_core_style(config: Config, styles: Styles | list[tuple[str, str]]) -> Config:
    return replace(config, core_style=tuple(styles))


def set_events(config: Config, events: tuple[object, ...] | list[object]) -> Config:
    return replace(config, events=tuple(events))


def set_svg_title(config: Config, title: str) -> Config:
    return replace(config, svg_title=title)


def set_svg_desc(config: Config, desc: str) -> Config:
    return replace(config, svg_desc=desc)


def set_histogram_domain(config: Config, domain: tuple[float, float]) -> Config:
    return replace(config, histogram_domain=tuple(domain))


def set_histogram_steps(config: Config, steps: tuple[float, ...] | list[float]) -> Config:
    """Use explicit bin edges instead of automatic binning."""

    return replace(config, histogram_steps=tuple(steps))


# Accessibility table


def with_table(config: Config) -> Config:
    """Request an accessibility table.

    Raises:
        ConfigStateError: When `without_table` was applied before.
    """

    _require_table_allowed(config, operation="with_table")
    return replace(config, accessibility_content=AccessibilityContent.table, state=ConfigState.with_table)


def without_table(config: Config) -> Config:
    """Disable the accessibility table; table options cannot be set afterwards."""

    return replace(config, accessibility_content=AccessibilityContent.none, state=ConfigState.without_table)


def set_table_float_format(config: Config, formatter: Callable[[float], str]) -> Config:
    """Set the number formatter of the accessibility table.

    Raises:
        ConfigStateError: When `without_table` was applied before.
    """

    _require_table_allowed(config, operation="set_table_float_format")
    return replace(config, table_float_format=formatter, state=ConfigState.with_table)


def set_table_time_format(config: Config, formatter: Callable[[datetime], str]) -> Config:
    """Set the date formatter of the accessibility table.

    Raises:
        ConfigStateError: When `without_table` was applied before.
    """

    _require_table_allowed(config, operation="set_table_time_format")
    return replace(config, table_time_format=formatter, state=ConfigState.with_table)


def set_table_caption(config: Config, caption: str) -> Config:
    """Set the caption of the accessibility table.

    Raises:
        ConfigStateError: When `without_table` was applied before.
    """

    _require_table_allowed(config, operation="set_table_caption")
    return replace(config, table_caption=caption, state=ConfigState.with_table)


def _require_table_allowed(config: Config, *, operation: str) -> None:
    """Reject table options once the table has been switched off."""

    if config.state == ConfigState.without_table:
        raise ConfigStateError(operation=operation, state=config.state)


# Derived facts


def show_icons(config: Config) -> bool:
    """Return True when at least one real icon is configured."""

    return any(not isinstance(symbol, NoSymbol) for symbol in config.symbols)


def is_stacked(config: Config) -> bool:
    """Return True for stacked bar and stacked line layouts."""

    return isinstance(config.layout, (StackedBar, StackedLine))
