"""Pixel ranges for band and continuous axes.

Horizontal charts flip the band axes relative to vertical charts, and the
continuous range of a chart can differ from the one used to draw its axis.
"""

from __future__ import annotations

import math

from .config import Config, show_icons
from .constants import SYMBOL_GAP
from .scales import BandScale
from .stack import StackOffset, stack_offset_diverging, stack_offset_none
from .symbols import symbol_space
from .types import GroupedBar, Orientation, RenderContext, is_diverging


def get_band_group_range(config: Config, width: float, height: float) -> tuple[float, float]:
    """Return the range of the outer (group) band axis.

    Vertical charts spread groups along `(0, width)`; horizontal charts along
    `(height, 0)`.
    """

    if config.orientation == Orientation.horizontal:
        return (height, 0.0)
    return (0.0, width)


def get_band_single_range(config: Config, value: float) -> tuple[float, float]:
    """Return the range of the inner (category) band axis.

    Args:
        config: Configuration providing the orientation.
        value: Available length, normally the group bandwidth. Floored first.

    Returns:
        `(0, value)` for vertical charts, `(value, 0)` for horizontal charts.
    """

    floored = float(math.floor(value))
    if config.orientation == Orientation.horizontal:
        return (floored, 0.0)
    return (0.0, floored)


def get_continuous_range(
    config: Config,
    render_context: RenderContext,
    width: float,
    height: float,
    band_scale: BandScale,
) -> tuple[float, float]:
    """Return the value-axis range for a chart or its axis.

    Grouped bars leave room for icons at the far end when icons are configured.
    Horizontal non-grouped layouts run right-to-left inside the chart but
    left-to-right on the axis.

    Args:
        config: Configuration with orientation, layout and symbols.
        render_context: Whether the range is for chart geometry or the axis.
        width: Inner plot width.
        height: Inner plot height.
        band_scale: Inner band scale, used to size icons.

    Returns:
        `(start, end)` pixel range.
    """

    grouped = isinstance(config.layout, GroupedBar)
    icon_space = 0.0
    if grouped and show_icons(config):
        icon_space = SYMBOL_GAP + symbol_space(config.orientation, band_scale, config.symbols)

    if config.orientation == Orientation.horizontal:
        if grouped:
            return (0.0, width - icon_space)
        if render_context == RenderContext.chart:
            return (width, 0.0)
        return (0.0, width)

    if grouped:
        return (height - icon_space, 0.0)
    return (height, 0.0)


def adjust_continuous_range(config: Config, stack_depth: int, range_: tuple[float, float]) -> tuple[float, float]:
    """Shift the first bound of a range by the stacked border depth.

    Horizontal grouped bars are unchanged, other horizontal layouts add the
    depth, and vertical layouts subtract it.
    """

    start, end = range_
    if config.orientation == Orientation.horizontal:
        if isinstance(config.layout, GroupedBar):
            return range_
        return (start + stack_depth, end)
    return (start - stack_depth, end)


def get_offset(config: Config) -> StackOffset:
    """Return the stacking offset for the configured layout."""

    if is_diverging(config.layout):
        return stack_offset_diverging
    return stack_offset_none
