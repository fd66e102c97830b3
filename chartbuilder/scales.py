"""Small scale objects mapping domain values to pixel positions.

Scales are pure callables: `scale(value)` maps into the range and
`scale.invert(pixel)` maps back (continuous scales only). Degenerate inputs
never raise; they map to the range midpoint or to NaN.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import UTC, datetime

from . import settings
from .types import LinearScaleKind, LogScaleKind, ScaleKind


def _interpolate(range_: tuple[float, float], t: float) -> float:
    """Map `t` in [0, 1] onto the range."""

    return range_[0] + t * (range_[1] - range_[0])


@dataclass(frozen=True, slots=True)
class LinearScale:
    """Linear mapping from `domain` onto `range`."""

    domain: tuple[float, float]
    range: tuple[float, float]

    def __call__(self, value: float) -> float:
        d0, d1 = self.domain
        if d1 == d0:
            return _interpolate(self.range, 0.5)
        return _interpolate(self.range, (value - d0) / (d1 - d0))

    def invert(self, pixel: float) -> float:
        r0, r1 = self.range
        if r1 == r0:
            return _interpolate(self.domain, 0.5)
        return _interpolate(self.domain, (pixel - r0) / (r1 - r0))


@dataclass(frozen=True, slots=True)
class LogScale:
    """Logarithmic mapping from `domain` onto `range`.

    The domain must not contain or cross zero; see `adjust_domain_to_log_scale`.
    A negative domain is mirrored (`-log(-x)`). Values on the wrong side of zero
    map to NaN.

    Args:
        base: Logarithm base, used for tick generation by renderers.
        domain: Strictly positive or strictly negative `(lower, upper)`.
        range: Pixel range.
    """

    base: float
    domain: tuple[float, float]
    range: tuple[float, float]

    def _negative(self) -> bool:
        return self.domain[0] < 0

    def _transform(self, value: float) -> float:
        if self._negative():
            return -math.log(-value) if value < 0 else math.nan
        return math.log(value) if value > 0 else math.nan

    def _untransform(self, value: float) -> float:
        return -math.exp(-value) if self._negative() else math.exp(value)

    def __call__(self, value: float) -> float:
        t0 = self._transform(self.domain[0])
        t1 = self._transform(self.domain[1])
        tv = self._transform(value)
        if math.isnan(t0) or math.isnan(t1) or math.isnan(tv):
            return math.nan
        if t1 == t0:
            return _interpolate(self.range, 0.5)
        return _interpolate(self.range, (tv - t0) / (t1 - t0))

    def invert(self, pixel: float) -> float:
        t0 = self._transform(self.domain[0])
        t1 = self._transform(self.domain[1])
        r0, r1 = self.range
        if math.isnan(t0) or math.isnan(t1):
            return math.nan
        if r1 == r0:
            return self._untransform((t0 + t1) / 2)
        return self._untransform(t0 + (pixel - r0) / (r1 - r0) * (t1 - t0))


def _timestamp(value: datetime) -> float:
    """Return the POSIX timestamp of `value`, reading naive values as UTC."""

    if value.tzinfo is None:
        return value.replace(tzinfo=UTC).timestamp()
    return value.timestamp()


@dataclass(frozen=True, slots=True)
class TimeScale:
    """Linear mapping from a datetime domain onto a pixel range."""

    domain: tuple[datetime, datetime]
    range: tuple[float, float]

    def _linear(self) -> LinearScale:
        return LinearScale(domain=(_timestamp(self.domain[0]), _timestamp(self.domain[1])), range=self.range)

    def __call__(self, value: datetime) -> float:
        return self._linear()(_timestamp(value))

    def invert(self, pixel: float) -> datetime:
        tz = self.domain[0].tzinfo
        stamp = self._linear().invert(pixel)
        if tz is None:
            return datetime.fromtimestamp(stamp, tz=UTC).replace(tzinfo=None)
        return datetime.fromtimestamp(stamp, tz=tz)


@dataclass(frozen=True, slots=True)
class BandScale:
    """Evenly spaced bands for an ordered list of keys.

    Args:
        domain: Ordered distinct keys.
        range: Pixel range; a reversed range lists bands from the far end.
        padding_inner: Fraction of a step left empty between bands.
        padding_outer: Fraction of a step left empty before the first and
            after the last band.
    """

    domain: tuple[str, ...]
    range: tuple[float, float]
    padding_inner: float = settings.BAND_PADDING_INNER
    padding_outer: float = settings.BAND_PADDING_OUTER

    def _layout(self) -> tuple[float, float]:
        """Return `(start, step)` measured from the low end of the range."""

        r0, r1 = self.range
        low, high = min(r0, r1), max(r0, r1)
        n = len(self.domain)
        step = (high - low) / max(1.0, n - self.padding_inner + self.padding_outer * 2)
        start = low + (high - low - step * (n - self.padding_inner)) * 0.5
        return start, step

    @property
    def step(self) -> float:
        return self._layout()[1]

    @property
    def bandwidth(self) -> float:
        return self.step * (1 - self.padding_inner)

    def __call__(self, key: str) -> float | None:
        """Return the band start for `key`, or None for unknown keys."""

        try:
            idx = self.domain.index(key)
        except ValueError:
            return None
        start, step = self._layout()
        if self.range[1] < self.range[0]:
            idx = len(self.domain) - 1 - idx
        return start + step * idx


def adjust_domain_to_log_scale(domain: tuple[float, float]) -> tuple[float, float]:
    """Move a zero endpoint off zero so a log scale can be built.

    A zero lower bound becomes 1; otherwise a zero upper bound becomes -1.
    A `(0, 0)` domain becomes `(1, 0)`, which is still not a usable log
    domain; that case is left to the caller.
    """

    lower, upper = domain
    if lower == 0:
        return (1.0, upper)
    if upper == 0:
        return (lower, -1.0)
    return domain


def to_continuous_scale(
    domain: tuple[float, float],
    range_: tuple[float, float],
    scale_kind: ScaleKind,
) -> LinearScale | LogScale:
    """Build the value-axis scale for a configured scale kind.

    Args:
        domain: Value domain.
        range_: Pixel range.
        scale_kind: Linear, or log with a base.

    Returns:
        LinearScale, or LogScale over the zero-adjusted domain.
    """

    match scale_kind:
        case LinearScaleKind():
            return LinearScale(domain=domain, range=range_)
        case LogScaleKind(base=base):
            return LogScale(base=base, domain=adjust_domain_to_log_scale(domain), range=range_)
