"""Tests for histogram binning and the domains derived from bins."""

from __future__ import annotations

import pytest

from chartbuilder import settings
from chartbuilder.config import set_histogram_domain, set_histogram_steps
from chartbuilder.histogram import (
    AccessorHistogram,
    HistogramBin,
    bin_edges,
    calculate_histogram_domain,
    calculate_histogram_values,
    calculate_histogram_y_extent,
    external_to_data_histogram,
)

pytestmark = pytest.mark.unit

ACCESSOR = AccessorHistogram(x_value=lambda record: record["v"])


def _records(*values: float) -> list[dict[str, float]]:
    return [{"v": value} for value in values]


def test_explicit_steps_are_inner_thresholds(base_config) -> None:
    """The domain bounds are always edges; the upper bound is inclusive."""

    config = set_histogram_steps(set_histogram_domain(base_config, (0.0, 10.0)), [5.0, 20.0])
    bins = external_to_data_histogram(_records(1, 2, 5, 9, 10), ACCESSOR, config)

    assert bins == (
        HistogramBin(x0=0.0, x1=5.0, values=(1.0, 2.0)),
        HistogramBin(x0=5.0, x1=10.0, values=(5.0, 9.0, 10.0)),
    )
    assert calculate_histogram_values(bins) == (1.0, 2.0, 5.0, 9.0, 10.0)
    assert calculate_histogram_domain(bins) == (0.0, 10.0)
    assert calculate_histogram_y_extent(bins) == (0.0, 3.0)


def test_values_outside_domain_are_dropped(base_config) -> None:
    config = set_histogram_steps(set_histogram_domain(base_config, (0.0, 4.0)), [2.0])
    bins = external_to_data_histogram(_records(-1, 1, 3, 7), ACCESSOR, config)
    assert [histogram_bin.values for histogram_bin in bins] == [(1.0,), (3.0,)]


def test_automatic_binning_covers_all_values(base_config) -> None:
    bins = external_to_data_histogram(_records(*range(10)), ACCESSOR, base_config)
    assert len(bins) >= 2
    assert bins[0].x0 == 0.0
    assert bins[-1].x1 == 9.0
    assert sum(histogram_bin.length for histogram_bin in bins) == 10


def test_automatic_binning_honours_bin_setting(monkeypatch) -> None:
    monkeypatch.setattr(settings, "HISTOGRAM_BINS", 3)
    assert bin_edges([0.0, 3.0, 6.0], domain=(0.0, 6.0)) == [0.0, 2.0, 4.0, 6.0]


def test_empty_input_has_no_bins(base_config) -> None:
    bins = external_to_data_histogram([], ACCESSOR, base_config)
    assert bins == ()
    assert calculate_histogram_domain(bins) == (0.0, 0.0)
    assert calculate_histogram_y_extent(bins) == (0.0, 0.0)
    assert calculate_histogram_values(bins) == ()
