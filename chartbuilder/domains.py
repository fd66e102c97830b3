"""Domain inference for band, continuous and time charts.

A domain part the user has set is always returned unchanged. Only parts left
as None are derived from the shaped data. Empty data never raises: numeric
parts default to `(0, 0)`, which callers read as "no data".

Datasets must use one point variant throughout; inference only looks at the
values, it does not detect mixed variants.
"""

from __future__ import annotations

from datetime import UTC, datetime

from .config import Config
from .constants import EPOCH_TIMESTAMP
from .types import (
    DataBand,
    DataContinuousGroup,
    DataTimeGroup,
    DomainBand,
    DomainContinuous,
    DomainTime,
    ResolvedDomainBand,
    ResolvedDomainContinuous,
    ResolvedDomainTime,
    is_diverging,
)

EPOCH = datetime.fromtimestamp(EPOCH_TIMESTAMP, tz=UTC)


def get_domain_band_from_data(data: DataBand, config: Config) -> DomainBand:
    """Fill the missing parts of the band domain from data.

    Args:
        data: Shaped band groups.
        config: Configuration with overrides and layout.

    Returns:
        DomainBand where:
        - `band_group` is the override, else each group's label with the
          stringified index for unlabelled groups;
        - `band_single` is the override, else the distinct category keys in
          first-occurrence order;
        - `continuous` is the override, else `(0, max)`, or `(min, max)` for a
          diverging stacked bar layout.
    """

    domain = config.domain_band

    band_group = domain.band_group
    if band_group is None:
        band_group = tuple(
            group.group_label if group.group_label is not None else str(idx) for idx, group in enumerate(data)
        )

    band_single = domain.band_single
    if band_single is None:
        band_single = tuple(dict.fromkeys(key for group in data for key, _ in group.points))

    continuous = domain.continuous
    if continuous is None:
        values = [value for group in data for _, value in group.points]
        upper = max(values, default=0.0)
        lower = min(values, default=0.0) if is_diverging(config.layout) else 0.0
        continuous = (lower, upper)

    return DomainBand(band_group=band_group, band_single=band_single, continuous=continuous)


def get_domain_continuous_from_data(
    extent: tuple[float, float] | None,
    data: DataContinuousGroup,
    config: Config,
) -> DomainContinuous:
    """Fill the missing parts of a numeric x/y domain from data.

    Args:
        extent: Explicit y extent (histograms); preferred over the data values.
        data: Shaped line groups.
        config: Configuration with overrides.

    Returns:
        DomainContinuous with x as `(min, max)` of x values and y as the
        override, else `extent`, else `(0, max)` of y values.
    """

    domain = config.domain_continuous
    xs = [x for group in data for x, _ in group.points]
    ys = [y for group in data for _, y in group.points]

    x = domain.x if domain.x is not None else (min(xs, default=0.0), max(xs, default=0.0))
    return DomainContinuous(x=x, y=_y_domain(domain.y, extent, ys))


def get_domain_time_from_data(
    extent: tuple[float, float] | None,
    data: DataTimeGroup,
    config: Config,
) -> DomainTime:
    """Fill the missing parts of a time x / numeric y domain from data.

    With no data the x domain is `(epoch, epoch)`.
    """

    domain = config.domain_time
    xs = [x for group in data for x, _ in group.points]
    ys = [y for group in data for _, y in group.points]

    x = domain.x if domain.x is not None else (min(xs, default=EPOCH), max(xs, default=EPOCH))
    return DomainTime(x=x, y=_y_domain(domain.y, extent, ys))


def _y_domain(
    override: tuple[float, float] | None,
    extent: tuple[float, float] | None,
    ys: list[float],
) -> tuple[float, float]:
    """Pick the y domain: override, then explicit extent, then `(0, max)`."""

    if override is not None:
        return override
    if extent is not None:
        return extent
    return (0.0, max(ys, default=0.0))


def resolve_domain_band(domain: DomainBand) -> ResolvedDomainBand:
    """Drop the optionals of an inferred band domain."""

    return ResolvedDomainBand(
        band_group=domain.band_group or (),
        band_single=domain.band_single or (),
        continuous=domain.continuous or (0.0, 0.0),
    )


def resolve_domain_continuous(domain: DomainContinuous) -> ResolvedDomainContinuous:
    return ResolvedDomainContinuous(x=domain.x or (0.0, 0.0), y=domain.y or (0.0, 0.0))


def resolve_domain_time(domain: DomainTime) -> ResolvedDomainTime:
    return ResolvedDomainTime(x=domain.x or (EPOCH, EPOCH), y=domain.y or (0.0, 0.0))


def is_empty_domain(domain: tuple[float, float]) -> bool:
    """Return True for the `(0, 0)` "no data" domain."""

    return domain[0] == 0 and domain[1] == 0
