"""Encoding/decoding helpers for configuration payloads.

Payloads are plain JSON/YAML-compatible dictionaries. Callables (formatters,
curves, colour interpolators, events) cannot be serialized: they are dropped
on encode and come back as defaults on decode.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from pathlib import Path
from typing import Any, cast

import yaml

from .config import Config, ConfigState, default_config, set_dimensions
from .types import (
    AccessibilityContent,
    Circle,
    ColorPalette,
    ColorResource,
    Corner,
    CustomSymbol,
    DomainBand,
    DomainContinuous,
    DomainTime,
    GroupedBar,
    GroupedLine,
    Layout,
    LinearScaleKind,
    LogScaleKind,
    Margin,
    NoColor,
    NoSymbol,
    Orientation,
    RequiredConfig,
    ScaleKind,
    SingleColor,
    StackDirection,
    StackedBar,
    StackedLine,
    Symbol,
    Triangle,
    ZERO_MARGIN,
)


def encode_config(config: Config) -> dict[str, Any]:
    """Encode a Config into a JSON-serializable dictionary.

    Args:
        config: Config to encode.

    Returns:
        Dict payload; callables are omitted.
    """

    return {
        "margin": _encode_margin(config.margin),
        "width": config.width,
        "height": config.height,
        "layout": _encode_layout(config.layout),
        "orientation": config.orientation.value,
        "domain_band": {
            "band_group": _encode_list(config.domain_band.band_group),
            "band_single": _encode_list(config.domain_band.band_single),
            "continuous": _encode_list(config.domain_band.continuous),
        },
        "domain_continuous": {
            "x": _encode_list(config.domain_continuous.x),
            "y": _encode_list(config.domain_continuous.y),
        },
        "domain_time": {
            "x": None if config.domain_time.x is None else [value.isoformat() for value in config.domain_time.x],
            "y": _encode_list(config.domain_time.y),
        },
        "scale": _encode_scale(config.scale_kind),
        "color": _encode_color(config.color_resource),
        "accessibility_content": config.accessibility_content.value,
        "table_caption": config.table_caption,
        "symbols": [_encode_symbol(symbol) for symbol in config.symbols],
        "show_symbols": config.show_symbols,
        "core_style": [list(pair) for pair in config.core_style],
        "svg_title": config.svg_title,
        "svg_desc": config.svg_desc,
        "histogram_domain": _encode_list(config.histogram_domain),
        "histogram_steps": list(config.histogram_steps),
        "state": config.state.value,
    }


def decode_config(payload: dict[str, Any]) -> Config:
    """Decode a Config from a payload dictionary.

    A `dimensions` entry (`{margin, width, height}` with outer sizes) is applied
    through `set_dimensions`; otherwise `margin`, `width` and `height` are
    taken as already stored values.

    Args:
        payload: Dictionary previously produced by `encode_config` or written by hand.

    Returns:
        Config instance.

    Raises:
        ValueError: When a layout, orientation, scale, colour, symbol or
            accessibility tag is unknown.
    """

    defaults = default_config()
    config = Config(
        margin=_parse_margin(payload.get("margin")),
        width=_parse_float(payload.get("width")) or 0.0,
        height=_parse_float(payload.get("height")) or 0.0,
        layout=_parse_layout(payload.get("layout")),
        orientation=_parse_enum(Orientation, payload.get("orientation"), default=defaults.orientation),
        domain_band=_parse_domain_band(payload.get("domain_band")),
        domain_continuous=_parse_domain_continuous(payload.get("domain_continuous")),
        domain_time=_parse_domain_time(payload.get("domain_time")),
        scale_kind=_parse_scale(payload.get("scale")),
        color_resource=_parse_color(payload.get("color")),
        accessibility_content=_parse_enum(
            AccessibilityContent, payload.get("accessibility_content"), default=defaults.accessibility_content
        ),
        table_caption=_parse_str(payload.get("table_caption")),
        symbols=tuple(_parse_symbol(raw) for raw in (payload.get("symbols") or ())),
        show_symbols=_parse_bool(payload.get("show_symbols")),
        core_style=tuple((str(pair[0]), str(pair[1])) for pair in (payload.get("core_style") or ())),
        svg_title=str(payload.get("svg_title") or ""),
        svg_desc=str(payload.get("svg_desc") or ""),
        histogram_domain=_parse_pair(payload.get("histogram_domain")),
        histogram_steps=tuple(float(step) for step in (payload.get("histogram_steps") or ())),
        state=_parse_enum(ConfigState, payload.get("state"), default=ConfigState.initial),
    )

    dimensions = payload.get("dimensions")
    if isinstance(dimensions, dict):
        config = set_dimensions(
            config,
            RequiredConfig(
                margin=_parse_margin(dimensions.get("margin")),
                width=_parse_float(dimensions.get("width")) or 0.0,
                height=_parse_float(dimensions.get("height")) or 0.0,
            ),
        )
    return config


def load_config(path: str | Path) -> Config:
    """Load a Config from a YAML (or JSON) file.

    Raises:
        ValueError: When the file does not contain a mapping or holds unknown tags.
    """

    raw = Path(path).read_text(encoding="utf-8")
    payload = yaml.safe_load(raw) or {}
    if not isinstance(payload, dict):
        raise ValueError(f"Configuration file {str(path)!r} must contain a mapping.")
    return decode_config(payload)


def dump_config(config: Config) -> str:
    """Serialize a Config to YAML text."""

    return yaml.safe_dump(encode_config(config), sort_keys=False)


# Encoding helpers


def _encode_margin(margin: Margin) -> dict[str, float]:
    return {"top": margin.top, "right": margin.right, "bottom": margin.bottom, "left": margin.left}


def _encode_list(values: tuple[Any, ...] | None) -> list[Any] | None:
    if values is None:
        return None
    return list(values)


def _encode_layout(layout: Layout) -> dict[str, str]:
    match layout:
        case GroupedBar():
            return {"type": "grouped_bar"}
        case StackedBar(direction=direction):
            return {"type": "stacked_bar", "direction": direction.value}
        case GroupedLine():
            return {"type": "grouped_line"}
        case StackedLine():
            return {"type": "stacked_line"}


def _encode_scale(scale_kind: ScaleKind) -> dict[str, Any]:
    match scale_kind:
        case LinearScaleKind():
            return {"type": "linear"}
        case LogScaleKind(base=base):
            return {"type": "log", "base": base}


def _encode_color(color_resource: ColorResource) -> dict[str, Any]:
    match color_resource:
        case ColorPalette(colors=colors):
            return {"type": "palette", "colors": list(colors)}
        case SingleColor(color=color):
            return {"type": "single", "color": color}
        case _:
            return {"type": "none"}


def _encode_symbol(symbol: Symbol) -> dict[str, Any]:
    match symbol:
        case Circle():
            payload: dict[str, Any] = {"type": "circle"}
        case Corner():
            payload = {"type": "corner"}
        case Triangle():
            payload = {"type": "triangle"}
        case CustomSymbol():
            payload = {
                "type": "custom",
                "viewbox_width": symbol.viewbox_width,
                "viewbox_height": symbol.viewbox_height,
                "paths": list(symbol.paths),
            }
        case NoSymbol():
            return {"type": "none"}
    payload["identifier"] = symbol.identifier
    payload["styles"] = [list(pair) for pair in symbol.styles]
    return payload


# Decoding helpers


def _parse_margin(value: object) -> Margin:
    """Parse a margin mapping; missing sides are 0."""

    if not isinstance(value, dict):
        return ZERO_MARGIN
    raw = cast(dict[str, Any], value)
    return Margin(
        top=_parse_float(raw.get("top")) or 0.0,
        right=_parse_float(raw.get("right")) or 0.0,
        bottom=_parse_float(raw.get("bottom")) or 0.0,
        left=_parse_float(raw.get("left")) or 0.0,
    )


def _parse_layout(value: object) -> Layout:
    if value is None:
        return GroupedBar()
    raw = cast(dict[str, Any], value) if isinstance(value, dict) else {"type": value}
    tag = str(raw.get("type") or "grouped_bar")
    if tag == "grouped_bar":
        return GroupedBar()
    if tag == "stacked_bar":
        return StackedBar(
            direction=_parse_enum(StackDirection, raw.get("direction"), default=StackDirection.no_direction)
        )
    if tag == "grouped_line":
        return GroupedLine()
    if tag == "stacked_line":
        return StackedLine()
    raise ValueError(f"Unknown layout type: {tag!r}.")


def _parse_scale(value: object) -> ScaleKind:
    if value is None:
        return LinearScaleKind()
    raw = cast(dict[str, Any], value) if isinstance(value, dict) else {"type": value}
    tag = str(raw.get("type") or "linear")
    if tag == "linear":
        return LinearScaleKind()
    if tag == "log":
        return LogScaleKind(base=_parse_float(raw.get("base")) or 10.0)
    raise ValueError(f"Unknown scale type: {tag!r}.")


def _parse_color(value: object) -> ColorResource:
    if not isinstance(value, dict):
        return NoColor()
    tag = str(value.get("type") or "none")
    if tag == "palette":
        return ColorPalette(colors=tuple(str(color) for color in (value.get("colors") or ())))
    if tag == "single":
        return SingleColor(color=str(value.get("color") or ""))
    if tag == "none":
        return NoColor()
    raise ValueError(f"Unknown color type: {tag!r}.")


def _parse_symbol(value: object) -> Symbol:
    raw = cast(dict[str, Any], value) if isinstance(value, dict) else {"type": value}
    tag = str(raw.get("type") or "none")
    styles = tuple((str(pair[0]), str(pair[1])) for pair in (raw.get("styles") or ()))
    identifier = raw.get("identifier")
    if tag == "none":
        return NoSymbol()
    if tag == "custom":
        symbol: Symbol = CustomSymbol(
            viewbox_width=_parse_float(raw.get("viewbox_width")) or 0.0,
            viewbox_height=_parse_float(raw.get("viewbox_height")) or 0.0,
            paths=tuple(str(path) for path in (raw.get("paths") or ())),
            styles=styles,
        )
    elif tag == "circle":
        symbol = Circle(styles=styles)
    elif tag == "corner":
        symbol = Corner(styles=styles)
    elif tag == "triangle":
        symbol = Triangle(styles=styles)
    else:
        raise ValueError(f"Unknown symbol type: {tag!r}.")
    if identifier:
        symbol = replace(symbol, identifier=str(identifier))
    return symbol


def _parse_domain_band(value: object) -> DomainBand:
    if not isinstance(value, dict):
        return DomainBand()
    return DomainBand(
        band_group=_parse_str_tuple(value.get("band_group")),
        band_single=_parse_str_tuple(value.get("band_single")),
        continuous=_parse_pair(value.get("continuous")),
    )


def _parse_domain_continuous(value: object) -> DomainContinuous:
    if not isinstance(value, dict):
        return DomainContinuous()
    return DomainContinuous(x=_parse_pair(value.get("x")), y=_parse_pair(value.get("y")))


def _parse_domain_time(value: object) -> DomainTime:
    if not isinstance(value, dict):
        return DomainTime()
    raw_x = value.get("x")
    x = None
    if isinstance(raw_x, (list, tuple)) and len(raw_x) == 2:
        start = _parse_datetime(raw_x[0])
        end = _parse_datetime(raw_x[1])
        if start is not None and end is not None:
            x = (start, end)
    return DomainTime(x=x, y=_parse_pair(value.get("y")))


def _parse_enum(enum_type: Any, value: object, *, default: Any) -> Any:
    """Parse a StrEnum member by value."""

    if value is None or value == "":
        return default
    try:
        return enum_type(str(value))
    except ValueError:
        raise ValueError(f"Unknown {enum_type.__name__} value: {value!r}.") from None


def _parse_pair(value: object) -> tuple[float, float] | None:
    """Best-effort `(lower, upper)` parsing."""

    if not isinstance(value, (list, tuple)) or len(value) != 2:
        return None
    lower = _parse_float(value[0])
    upper = _parse_float(value[1])
    if lower is None or upper is None:
        return None
    return (lower, upper)


def _parse_str_tuple(value: object) -> tuple[str, ...] | None:
    if not isinstance(value, (list, tuple)):
        return None
    return tuple(str(item) for item in value)


def _parse_float(value: object) -> float | None:
    """Best-effort float parsing for payloads."""

    if value is None or value == "":
        return None
    try:
        return float(str(value))
    except ValueError:
        return None


def _parse_str(value: object) -> str | None:
    if value is None:
        return None
    return str(value)


def _parse_datetime(value: object) -> datetime | None:
    """Best-effort ISO datetime parsing for payloads."""

    if isinstance(value, datetime):
        return value
    if value is None or value == "":
        return None
    try:
        return datetime.fromisoformat(str(value))
    except ValueError:
        return None


def _parse_bool(value: object) -> bool:
    """Best-effort bool parsing for payloads."""

    if isinstance(value, bool):
        return value
    if value is None:
        return False
    normalized = str(value).strip().casefold()
    return normalized in {"1", "true", "yes", "on"}
