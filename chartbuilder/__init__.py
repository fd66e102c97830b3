"""Configuration, domain inference and data shaping core for declarative charts.

This package contains pure computations only: it turns records plus a
configuration into resolved domains, ranges and scales. Emitting SVG is the
job of a renderer consuming the DTOs from `chartbuilder.render`.
"""

import logging

from . import settings
from .config import Config, ConfigState, ConfigStateError, init
from .render import RenderedBarChart, RenderedHistogram, RenderedLineChart, render_bar, render_histogram, render_line
from .shaping import AccessorBand, AccessorContinuous, AccessorTime
from .histogram import AccessorHistogram
from .types import Margin, RequiredConfig

_logger = logging.getLogger(__name__)
_logger.addHandler(logging.NullHandler())
_logger.setLevel(settings.LOG_LEVEL)

__all__ = [
    "AccessorBand",
    "AccessorContinuous",
    "AccessorHistogram",
    "AccessorTime",
    "Config",
    "ConfigState",
    "ConfigStateError",
    "Margin",
    "RenderedBarChart",
    "RenderedHistogram",
    "RenderedLineChart",
    "RequiredConfig",
    "init",
    "render_bar",
    "render_histogram",
    "render_line",
]
