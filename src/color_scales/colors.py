from __future__ import annotations

import math
from typing import Union

# ColorAide
from coloraide import Color as CAColor
from coloraide.spaces.cam16 import CAM16JMh
from coloraide.spaces.cam16_ucs import CAM16UCS
from coloraide.spaces.hct import HCT

from .errors import ConfigurationError


class Color(CAColor):
    """Project-local Color class with CAM16 and HCT support."""


# CAM16-UCS is built on CAM16 JMh, so JMh goes first.
Color.register([CAM16JMh(), CAM16UCS(), HCT()], overwrite=True)

ColorLike = Union[str, CAColor]

FIT_HEX = {"method": "clip"}  # d3 clamps channels when formatting


def parse_color(value: ColorLike) -> Color:
    """Accept a ColorAide color (any space) or a CSS color string."""
    if isinstance(value, CAColor):
        return Color(value)
    if not isinstance(value, str):
        raise ConfigurationError(f"unsupported color value: {value!r}")
    try:
        return Color(value.strip())
    except ValueError as exc:
        raise ConfigurationError(f"invalid color: {value!r}") from exc


def srgb(value: ColorLike) -> Color:
    return parse_color(value).convert("srgb")


def to_hex(value: ColorLike) -> str:
    """Normalize to '#rrggbb', clipping out-of-gamut colors to sRGB."""
    return srgb(value).to_string(hex=True, fit=FIT_HEX)


def alpha_of(color: CAColor) -> float:
    a = color.alpha()
    return 1.0 if math.isnan(a) else float(a)


__all__ = ["Color", "ColorLike", "FIT_HEX", "parse_color", "srgb", "to_hex", "alpha_of"]
