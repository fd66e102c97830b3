"""Footprint of icons drawn next to grouped bars."""

from __future__ import annotations

import math
from collections.abc import Iterable

from .scales import BandScale
from .types import Circle, Corner, CustomSymbol, NoSymbol, Orientation, Symbol, Triangle


def symbol_custom_space(orientation: Orientation, local_dimension: float, custom: CustomSymbol) -> float:
    """Return the length a custom icon needs along the value axis.

    The icon is scaled so its cross-axis side matches `local_dimension`; the
    other side follows the viewBox aspect ratio.
    """

    if orientation == Orientation.horizontal:
        if custom.viewbox_height == 0:
            return 0.0
        return local_dimension / custom.viewbox_height * custom.viewbox_width
    if custom.viewbox_width == 0:
        return 0.0
    return local_dimension / custom.viewbox_width * custom.viewbox_height


def _footprint(symbol: Symbol, *, orientation: Orientation, local_dimension: float) -> float:
    match symbol:
        case Circle():
            return local_dimension / 2
        case Corner() | Triangle():
            return local_dimension
        case CustomSymbol():
            return symbol_custom_space(orientation, local_dimension, symbol)
        case NoSymbol():
            return 0.0


def symbol_space(orientation: Orientation, band_scale: BandScale, symbols: Iterable[Symbol]) -> float:
    """Return the largest icon footprint at the scale's band width, floored.

    Args:
        orientation: Chart orientation.
        band_scale: Inner band scale; its bandwidth is floored first.
        symbols: Configured icons.

    Returns:
        Whole-pixel space to reserve, 0 without icons.
    """

    local_dimension = float(math.floor(band_scale.bandwidth))
    footprints = [_footprint(symbol, orientation=orientation, local_dimension=local_dimension) for symbol in symbols]
    return float(math.floor(max(footprints, default=0.0)))
