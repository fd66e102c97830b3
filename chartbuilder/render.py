"""Render entry points: turn records plus a configuration into resolved charts.

Each entry point runs the same ordered steps:

1. shape the external records into grouped data,
2. fill gaps and stack when the layout needs it,
3. infer the missing domain parts,
4. compute pixel ranges,
5. build scales.

The result is a frozen DTO with no optional domain left. SVG emission, tick
formatting, colours and curves are the job of the renderer consuming it.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, replace

from .config import Config
from .constants import STACKED_LAYER_DEPTH
from .domains import (
    get_domain_band_from_data,
    get_domain_continuous_from_data,
    get_domain_time_from_data,
    resolve_domain_band,
    resolve_domain_continuous,
    resolve_domain_time,
)
from .histogram import (
    AccessorHistogram,
    HistogramBin,
    calculate_histogram_domain,
    calculate_histogram_y_extent,
    external_to_data_histogram,
)
from .ranges import (
    adjust_continuous_range,
    get_band_group_range,
    get_band_single_range,
    get_continuous_range,
    get_offset,
)
from .scales import BandScale, LinearScale, LogScale, TimeScale, to_continuous_scale
from .shaping import (
    AccessorBand,
    AccessorContinuous,
    AccessorContinuousOrTime,
    AccessorTime,
    data_band_to_data_stacked,
    data_continuous_group_to_data_stacked,
    external_to_data_band,
    external_to_data_continuous_group,
    external_to_data_time_group,
    fill_gaps_for_stack,
    get_stacked_values_and_groupes,
)
from .stack import StackConfig, stack, stack_offset_none
from .types import (
    DataBand,
    DataContinuousGroup,
    DataTimeGroup,
    RenderContext,
    ResolvedDomainBand,
    ResolvedDomainContinuous,
    ResolvedDomainTime,
    StackedBar,
    StackedLine,
    StackedValuesAndGroupes,
)
from .validator import validate_config

logger = logging.getLogger(__name__)

ContinuousScale = LinearScale | LogScale


@dataclass(frozen=True, slots=True)
class RenderedBarChart:
    """A bar chart ready for the renderer.

    Args:
        config: Configuration the chart was produced with.
        data: Shaped band groups (gap-filled for stacked layouts).
        domain: Resolved band domain.
        band_group_scale: Outer band scale over group labels.
        band_single_scale: Inner band scale over category keys.
        continuous_scale: Value scale for chart geometry.
        continuous_axis_scale: Value scale for the axis.
        stacked_values: Stacked offsets per group, for stacked layouts only.
        warnings: Validation messages collected while rendering.
    """

    config: Config
    data: DataBand
    domain: ResolvedDomainBand
    band_group_scale: BandScale
    band_single_scale: BandScale
    continuous_scale: ContinuousScale
    continuous_axis_scale: ContinuousScale
    stacked_values: StackedValuesAndGroupes | None = None
    warnings: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class RenderedLineChart:
    """A line chart ready for the renderer.

    Args:
        config: Configuration the chart was produced with.
        data: Shaped numeric or time line groups.
        domain: Resolved numeric or time domain.
        x_scale: Linear or time x scale.
        y_scale: Value scale.
        stacked_values: `(start, end)` per group and x position for stacked lines.
        warnings: Validation messages collected while rendering.
    """

    config: Config
    data: DataContinuousGroup | DataTimeGroup
    domain: ResolvedDomainContinuous | ResolvedDomainTime
    x_scale: LinearScale | TimeScale
    y_scale: ContinuousScale
    stacked_values: tuple[tuple[tuple[float, float], ...], ...] | None = None
    warnings: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class RenderedHistogram:
    """A histogram ready for the renderer."""

    config: Config
    bins: tuple[HistogramBin, ...]
    domain: ResolvedDomainContinuous
    x_scale: LinearScale
    y_scale: ContinuousScale
    warnings: tuple[str, ...] = ()


def _check_config(config: Config) -> tuple[str, ...]:
    """Validate the configuration and log problems without failing."""

    result = validate_config(config)
    for error in result.errors:
        logger.warning("Rendering with invalid configuration: %s", error)
    for warning in result.warnings:
        logger.info("Configuration warning: %s", warning)
    return result.errors + result.warnings


def render_bar(records: Iterable[object], accessor: AccessorBand, config: Config) -> RenderedBarChart:
    """Shape, infer and scale a bar chart.

    Args:
        records: External records.
        accessor: Group/category/value accessors.
        config: Chart configuration.

    Returns:
        RenderedBarChart with resolved domains and scales.
    """

    warnings = _check_config(config)
    stacked_layout = isinstance(config.layout, StackedBar)

    data = external_to_data_band(records, accessor)
    if stacked_layout:
        data = fill_gaps_for_stack(data)
    logger.debug("Shaped %d band groups", len(data))

    domain = get_domain_band_from_data(data, config)
    stacked_values: StackedValuesAndGroupes | None = None
    stack_depth = 0
    if stacked_layout:
        stacked_data = data_band_to_data_stacked(data, config)
        result = stack(StackConfig(data=stacked_data, offset=get_offset(config)))
        stacked_values = get_stacked_values_and_groupes(result.values, data, labels=result.labels)
        stack_depth = len(result.values) * STACKED_LAYER_DEPTH
        if config.domain_band.continuous is None:
            domain = replace(domain, continuous=result.extent)
    resolved = resolve_domain_band(domain)
    logger.debug("Band domain: %s", resolved)

    band_group_scale = BandScale(
        domain=resolved.band_group,
        range=get_band_group_range(config, config.width, config.height),
    )
    band_single_scale = BandScale(
        domain=resolved.band_single,
        range=get_band_single_range(config, band_group_scale.bandwidth),
    )
    chart_range = adjust_continuous_range(
        config,
        stack_depth,
        get_continuous_range(config, RenderContext.chart, config.width, config.height, band_single_scale),
    )
    axis_range = adjust_continuous_range(
        config,
        stack_depth,
        get_continuous_range(config, RenderContext.axis, config.width, config.height, band_single_scale),
    )

    return RenderedBarChart(
        config=config,
        data=data,
        domain=resolved,
        band_group_scale=band_group_scale,
        band_single_scale=band_single_scale,
        continuous_scale=to_continuous_scale(resolved.continuous, chart_range, config.scale_kind),
        continuous_axis_scale=to_continuous_scale(resolved.continuous, axis_range, config.scale_kind),
        stacked_values=stacked_values,
        warnings=warnings,
    )


def _stack_lines(
    data: DataContinuousGroup | DataTimeGroup,
) -> tuple[tuple[tuple[tuple[float, float], ...], ...], tuple[float, float]]:
    """Stack line groups, returning offsets in group order and the y extent."""

    _, layers = data_continuous_group_to_data_stacked(data)
    result = stack(StackConfig(data=layers, offset=stack_offset_none))
    return tuple(reversed(result.values)), result.extent


def render_line(
    records: Iterable[object],
    accessor: AccessorContinuousOrTime,
    config: Config,
) -> RenderedLineChart:
    """Shape, infer and scale a line chart over numeric or time x values.

    Args:
        records: External records.
        accessor: Continuous or time accessors; decides the x axis kind.
        config: Chart configuration.

    Returns:
        RenderedLineChart with resolved domains and scales.
    """

    warnings = _check_config(config)
    x_range = (0.0, config.width)
    y_range = (config.height, 0.0)

    match accessor:
        case AccessorContinuous():
            data: DataContinuousGroup | DataTimeGroup = external_to_data_continuous_group(records, accessor)
        case AccessorTime():
            data = external_to_data_time_group(records, accessor)
    logger.debug("Shaped %d line groups", len(data))

    stacked_values = None
    extent = None
    if isinstance(config.layout, StackedLine):
        stacked_values, extent = _stack_lines(data)

    if isinstance(accessor, AccessorTime):
        time_domain = resolve_domain_time(get_domain_time_from_data(extent, data, config))  # type: ignore[arg-type]
        logger.debug("Time domain: %s", time_domain)
        return RenderedLineChart(
            config=config,
            data=data,
            domain=time_domain,
            x_scale=TimeScale(domain=time_domain.x, range=x_range),
            y_scale=to_continuous_scale(time_domain.y, y_range, config.scale_kind),
            stacked_values=stacked_values,
            warnings=warnings,
        )

    domain = resolve_domain_continuous(get_domain_continuous_from_data(extent, data, config))  # type: ignore[arg-type]
    logger.debug("Continuous domain: %s", domain)
    return RenderedLineChart(
        config=config,
        data=data,
        domain=domain,
        x_scale=LinearScale(domain=domain.x, range=x_range),
        y_scale=to_continuous_scale(domain.y, y_range, config.scale_kind),
        stacked_values=stacked_values,
        warnings=warnings,
    )


def render_histogram(
    records: Iterable[object],
    accessor: AccessorHistogram,
    config: Config,
) -> RenderedHistogram:
    """Bin, infer and scale a histogram.

    The x domain is the configured continuous x domain, else the extent of the
    bin edges. The y domain is the configured one, else `(0, largest count)`.
    """

    warnings = _check_config(config)
    bins = external_to_data_histogram(records, accessor, config)
    logger.debug("Binned values into %d bins", len(bins))

    domain = get_domain_continuous_from_data(calculate_histogram_y_extent(bins), (), config)
    if config.domain_continuous.x is None:
        domain = replace(domain, x=calculate_histogram_domain(bins))
    resolved = resolve_domain_continuous(domain)

    return RenderedHistogram(
        config=config,
        bins=bins,
        domain=resolved,
        x_scale=LinearScale(domain=resolved.x, range=(0.0, config.width)),
        y_scale=to_continuous_scale(resolved.y, (config.height, 0.0), config.scale_kind),
        warnings=warnings,
    )
