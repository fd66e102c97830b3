"""Histogram shaping: bin raw values and derive domains from bins."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from typing import Any

import numpy as np

from . import settings
from .config import Config


@dataclass(frozen=True, slots=True)
class AccessorHistogram:
    """Read the binned value of an external record."""

    x_value: Callable[[Any], float]


@dataclass(frozen=True, slots=True)
class HistogramBin:
    """A half-open bin `[x0, x1)`; the last bin also holds `x1`.

    Args:
        x0: Lower edge.
        x1: Upper edge.
        values: Values that fell into the bin, in input order.
    """

    x0: float
    x1: float
    values: tuple[float, ...]

    @property
    def length(self) -> int:
        return len(self.values)


def _extent(values: Sequence[float]) -> tuple[float, float]:
    return (min(values, default=0.0), max(values, default=0.0))


def bin_edges(values: Sequence[float], *, domain: tuple[float, float], steps: Sequence[float] = ()) -> list[float]:
    """Compute bin edges over `domain`.

    Args:
        values: Values to bin, used by automatic binning.
        domain: `(lower, upper)` covered by the bins.
        steps: Explicit thresholds. Thresholds strictly inside the domain
            become inner edges; when empty, numpy's binning rule from
            `settings.HISTOGRAM_BINS` picks the edges.

    Returns:
        Ascending edges, at least two when the domain is not empty.
    """

    lower, upper = sorted(domain)
    if steps:
        inner = sorted(step for step in steps if lower < step < upper)
        return [lower, *inner, upper]
    edges = np.histogram_bin_edges(np.asarray(values, dtype=float), bins=settings.HISTOGRAM_BINS, range=(lower, upper))
    return [float(edge) for edge in edges]


def _bin_values(values: Sequence[float], edges: Sequence[float]) -> tuple[HistogramBin, ...]:
    """Assign values to the bins described by `edges`, dropping outliers."""

    if len(edges) < 2:
        return ()
    buckets: list[list[float]] = [[] for _ in range(len(edges) - 1)]
    array = np.asarray(values, dtype=float)
    indexes = np.searchsorted(np.asarray(edges, dtype=float), array, side="right") - 1
    last = len(buckets) - 1
    for value, idx in zip(values, indexes.tolist()):
        if value == edges[-1]:
            idx = last
        if 0 <= idx <= last:
            buckets[idx].append(value)
    return tuple(
        HistogramBin(x0=edges[idx], x1=edges[idx + 1], values=tuple(bucket)) for idx, bucket in enumerate(buckets)
    )


def external_to_data_histogram(
    records: Iterable[object],
    accessor: AccessorHistogram,
    config: Config,
) -> tuple[HistogramBin, ...]:
    """Bin external records.

    The domain is the configured histogram domain, else the extent of the
    values. Configured steps are used as explicit thresholds; otherwise edges
    come from automatic binning.

    Args:
        records: External records.
        accessor: Value accessor.
        config: Configuration with optional histogram domain and steps.

    Returns:
        Bins in ascending order. Empty input without explicit steps yields no bins.
    """

    values = [float(accessor.x_value(record)) for record in records]
    if not values and not config.histogram_steps:
        return ()
    domain = config.histogram_domain or _extent(values)
    edges = bin_edges(values, domain=domain, steps=config.histogram_steps)
    return _bin_values(values, edges)


def calculate_histogram_values(bins: Iterable[HistogramBin]) -> tuple[float, ...]:
    """Return every binned value, bin by bin."""

    return tuple(value for histogram_bin in bins for value in histogram_bin.values)


def calculate_histogram_domain(bins: Iterable[HistogramBin]) -> tuple[float, float]:
    """Return the extent covered by the bin edges, `(0, 0)` without bins."""

    edges = [edge for histogram_bin in bins for edge in (histogram_bin.x0, histogram_bin.x1)]
    return _extent(edges)


def calculate_histogram_y_extent(bins: Iterable[HistogramBin]) -> tuple[float, float]:
    """Return `(0, largest bin count)`."""

    return (0.0, float(max((histogram_bin.length for histogram_bin in bins), default=0)))
