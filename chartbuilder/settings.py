"""Library defaults for chartbuilder.

Defaults are read once from environment variables so that applications can
tune logging and band spacing without threading options through every call.
"""

from __future__ import annotations

import logging
import os


def _env_str(name: str, *, default: str) -> str:
    """Read a string environment variable.

    Args:
        name: Environment variable name.
        default: Value when the variable is not set or blank.

    Returns:
        The trimmed value.
    """

    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip()


def _env_float(name: str, *, default: float) -> float:
    """Parse a float environment variable.

    Args:
        name: Environment variable name.
        default: Value when the variable is not set.

    Returns:
        Parsed float value.
    """

    raw = os.getenv(name)
    if raw is None:
        return default
    return float(raw.strip())


def _env_bins(name: str, *, default: str | int) -> str | int:
    """Parse a numpy bin rule (`"sturges"`, `"auto"`, ...) or an integer bin count."""

    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    value = raw.strip()
    if value.isdigit():
        return int(value)
    return value.lower()


def _env_log_level(name: str, *, default: str) -> str:
    """Read a logging level name, falling back to `default` for unknown names."""

    value = _env_str(name, default=default).upper()
    if value not in logging.getLevelNamesMapping():
        return default
    return value


LOG_LEVEL = _env_log_level("CHARTBUILDER_LOG_LEVEL", default="WARNING")

BAND_PADDING_INNER = _env_float("CHARTBUILDER_BAND_PADDING_INNER", default=0.1)
BAND_PADDING_OUTER = _env_float("CHARTBUILDER_BAND_PADDING_OUTER", default=0.05)

HISTOGRAM_BINS = _env_bins("CHARTBUILDER_HISTOGRAM_BINS", default="sturges")
