"""Precondition checks for chart configurations.

The inference and shaping steps never fail on bad input; they degrade to an
empty chart. Validation is where precondition violations are reported, so
callers can decide whether to render anyway.
"""

from __future__ import annotations

from dataclasses import dataclass

from .config import Config, show_icons
from .types import GroupedBar, GroupedLine, LogScaleKind, StackedBar, StackedLine


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """Result of validating a configuration.

    Args:
        is_valid: True when no errors exist.
        errors: Precondition violations that lead to degenerate output.
        warnings: Options that will be ignored or behave unexpectedly.
    """

    is_valid: bool
    errors: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()


def validate_config(config: Config) -> ValidationResult:
    """Validate a configuration's preconditions.

    Args:
        config: Configuration to check.

    Returns:
        ValidationResult containing errors and warnings.
    """

    errors: list[str] = []
    warnings: list[str] = []

    for side in ("top", "right", "bottom", "left"):
        value = getattr(config.margin, side)
        if value < 0:
            errors.append(f"Config.margin.{side} must be >= 0, got {value!r}.")

    if config.width <= 0:
        errors.append(f"Config.width must be > 0 after subtracting the margin, got {config.width!r}.")
    if config.height <= 0:
        errors.append(f"Config.height must be > 0 after subtracting the margin, got {config.height!r}.")

    if isinstance(config.scale_kind, LogScaleKind):
        base = config.scale_kind.base
        if base <= 0 or base == 1:
            errors.append(f"Config.scale_kind log base must be > 0 and != 1, got {base!r}.")
        for name, domain in (
            ("domain_band.continuous", config.domain_band.continuous),
            ("domain_continuous.y", config.domain_continuous.y),
            ("domain_time.y", config.domain_time.y),
        ):
            if domain is None:
                continue
            lower, upper = domain
            if lower == 0 and upper == 0:
                errors.append(f"Config.{name} {domain!r} cannot be used with a log scale.")
            elif lower < 0 < upper or upper < 0 < lower:
                errors.append(f"Config.{name} {domain!r} crosses zero and cannot be used with a log scale.")

    if config.histogram_domain is not None:
        lower, upper = config.histogram_domain
        if lower > upper:
            errors.append(f"Config.histogram_domain lower bound must be <= upper bound, got {config.histogram_domain!r}.")

    steps = config.histogram_steps
    if any(a >= b for a, b in zip(steps, steps[1:])):
        errors.append("Config.histogram_steps must be strictly ascending.")

    if show_icons(config) and not isinstance(config.layout, (GroupedBar, GroupedLine)):
        warnings.append("Config.symbols are only drawn for grouped layouts and will be ignored.")

    if config.show_symbols and isinstance(config.layout, (GroupedBar, StackedBar)):
        warnings.append("Config.show_symbols only applies to line layouts.")

    if config.curve is not None and not isinstance(config.layout, (GroupedLine, StackedLine)):
        warnings.append("Config.curve only applies to line layouts.")

    band_group = config.domain_band.band_group
    if band_group is not None and len(set(band_group)) != len(band_group):
        warnings.append("Config.domain_band.band_group contains duplicate labels.")
    band_single = config.domain_band.band_single
    if band_single is not None and len(set(band_single)) != len(band_single):
        warnings.append("Config.domain_band.band_single contains duplicate keys.")

    return ValidationResult(is_valid=not errors, errors=tuple(errors), warnings=tuple(warnings))
