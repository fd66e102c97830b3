"""Stacking of layered values into cumulative `(start, end)` offsets.

Input layers are `(label, values)` pairs where `values[j]` is the layer's
contribution at position `j`. Layers are stacked in reverse order: the last
layer sits on the baseline and the first layer ends up on top. The result
lists layers in that stacked order, so callers pairing the output with their
input have to reverse it back (see `shaping.get_stacked_values_and_groupes`).
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

StackOffset = Callable[[Sequence[Sequence[float]]], list[list[tuple[float, float]]]]


def stack_offset_none(layers: Sequence[Sequence[float]]) -> list[list[tuple[float, float]]]:
    """Stack every layer on the cumulative total of the layers below it.

    Args:
        layers: Values per layer, bottom layer first.

    Returns:
        `(start, end)` pairs per layer and position.
    """

    baseline: list[float] = []
    stacked: list[list[tuple[float, float]]] = []
    for values in layers:
        if len(baseline) < len(values):
            baseline.extend([0.0] * (len(values) - len(baseline)))
        row: list[tuple[float, float]] = []
        for idx, value in enumerate(values):
            start = baseline[idx]
            end = start + value
            baseline[idx] = end
            row.append((start, end))
        stacked.append(row)
    return stacked


def stack_offset_diverging(layers: Sequence[Sequence[float]]) -> list[list[tuple[float, float]]]:
    """Stack positive values upwards and negative values downwards from zero.

    A zero value produces `(0, 0)`. Negative segments are reported as
    `(lower, upper)` so that `end - start` is always the segment length.
    """

    positive: list[float] = []
    negative: list[float] = []
    stacked: list[list[tuple[float, float]]] = []
    for values in layers:
        if len(positive) < len(values):
            padding = [0.0] * (len(values) - len(positive))
            positive.extend(padding)
            negative.extend(padding)
        row: list[tuple[float, float]] = []
        for idx, value in enumerate(values):
            if value > 0:
                start = positive[idx]
                positive[idx] = start + value
                row.append((start, positive[idx]))
            elif value < 0:
                end = negative[idx]
                negative[idx] = end + value
                row.append((negative[idx], end))
            else:
                row.append((0.0, 0.0))
        stacked.append(row)
    return stacked


@dataclass(frozen=True, slots=True)
class StackConfig:
    """Input of `stack`.

    Args:
        data: `(label, values)` layers in input order.
        offset: Offset strategy, `stack_offset_none` by default.
    """

    data: Sequence[tuple[str, Sequence[float]]]
    offset: StackOffset = field(default=stack_offset_none)


@dataclass(frozen=True, slots=True)
class StackResult:
    """Output of `stack`.

    Args:
        values: `(start, end)` pairs per layer, in stacked (reversed) order.
        labels: Layer labels in the same order as `values`.
        extent: `(min, max)` over every offset, `(0, 0)` when empty.
    """

    values: tuple[tuple[tuple[float, float], ...], ...]
    labels: tuple[str, ...]
    extent: tuple[float, float]


def stack(config: StackConfig) -> StackResult:
    """Stack layers in reverse input order.

    Args:
        config: Layers and offset strategy.

    Returns:
        StackResult with layers listed bottom first.
    """

    ordered = list(reversed(list(config.data)))
    labels = tuple(label for label, _ in ordered)
    stacked = config.offset([list(values) for _, values in ordered])
    values = tuple(tuple(row) for row in stacked)
    return StackResult(values=values, labels=labels, extent=_extent(values))


def _extent(values: tuple[tuple[tuple[float, float], ...], ...]) -> tuple[float, float]:
    """Return the `(min, max)` over all stacked offsets."""

    flat = [bound for row in values for pair in row for bound in pair]
    if not flat:
        return (0.0, 0.0)
    return (min(flat), max(flat))
