# cubehelix.py – Dave Green's cubehelix scheme
#   - hue in degrees, saturation and lightness in [0,1]
#   - long-path hue interpolation (no 360° wrapping), as the sequential
#     palettes "cool", "warm" and "cubehelix" expect

from __future__ import annotations

from dataclasses import dataclass
from math import cos, isnan, radians, sin

from .colors import Color

# --- Green (2011) projection constants ----------------------------------------
_A = -0.14861
_B = +1.78277
_C = -0.29227
_D = -0.90649
_E = +1.97294


@dataclass(frozen=True)
class Cubehelix:
    h: float
    s: float
    l: float

    def to_rgb(self) -> tuple[float, float, float]:
        """Cubehelix → sRGB triplet in [0-1] (may fall slightly outside)."""
        h = 0.0 if isnan(self.h) else radians(self.h + 120.0)
        l = self.l
        a = 0.0 if isnan(self.s) else self.s * l * (1.0 - l)
        cosh, sinh = cos(h), sin(h)
        return (
            l + a * (_A * cosh + _B * sinh),
            l + a * (_C * cosh + _D * sinh),
            l + a * (_E * cosh),
        )

    def to_color(self) -> Color:
        return Color("srgb", list(self.to_rgb()))


def cubehelix_long(start: Cubehelix, end: Cubehelix, gamma: float = 1.0):
    """Interpolator over the long hue path; gamma only bends lightness."""
    dh = end.h - start.h
    ds = end.s - start.s
    dl = end.l - start.l

    def interpolator(t: float) -> Color:
        return Cubehelix(
            start.h + t * dh,
            start.s + t * ds,
            start.l + (t**gamma) * dl,
        ).to_color()

    return interpolator


__all__ = ["Cubehelix", "cubehelix_long"]
