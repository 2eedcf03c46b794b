"""Pluggable two-color interpolation strategies.

Every strategy is a factory ``(a, b) -> (t -> Color)``.  The built-in ones
convert both endpoints into a working space, blend coordinates linearly and
convert the result back to sRGB:

=============  ============  =====================================
mode           space         notes
=============  ============  =====================================
"rgb"          srgb          naive gamma-encoded blend (default)
"linear-rgb"   srgb-linear   linear-light blend
"lab"          lab           CIE Lab
"hcl"          lch           polar Lab, shorter hue arc
"hcl-long"     lch           polar Lab, longer hue arc
"oklab"        oklab         Oklab Euclidean
"oklch"        oklch         polar Oklab, shorter hue arc
"cam16ucs"     cam16-ucs     CAM16-UCS Euclidean
"hct"          hct           Google HCT, shorter hue arc
=============  ============  =====================================

Values of ``t`` outside [0, 1] continue the blend linearly, so callers that
want clamping must clamp before calling.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Literal, Mapping, Optional, Union

from .colors import Color, ColorLike, alpha_of, parse_color
from .errors import ConfigurationError

Interpolator = Callable[[float], Color]
InterpolatorFactory = Callable[[Color, Color], Interpolator]
HuePolicy = Literal["shorter", "longer", "increasing", "decreasing", "specified"]

HUE_POLICIES = {"shorter", "longer", "increasing", "decreasing", "specified"}


def lerp(a: float, b: float, t: float) -> float:
    # exact at both ends
    return (1.0 - t) * a + t * b


def hue_delta(h1: float, h2: float, policy: HuePolicy) -> float:
    """Signed hue travel from h1 to h2 (degrees) under the given policy."""
    d = h2 - h1
    if policy == "shorter":
        return ((d + 180.0) % 360.0) - 180.0
    if policy == "longer":
        short = ((d + 180.0) % 360.0) - 180.0
        if short == 0.0:
            return 0.0
        return short - 360.0 if short > 0 else short + 360.0
    if policy == "increasing":
        return d % 360.0
    if policy == "decreasing":
        return -((-d) % 360.0)
    return d


@dataclass(frozen=True)
class Interpolation:
    space: str
    hue_index: Optional[int] = None
    hue: HuePolicy = "shorter"

    def __post_init__(self) -> None:
        if self.hue not in HUE_POLICIES:
            raise ConfigurationError(f"unknown hue policy '{self.hue}'")

    def __call__(self, a: Color, b: Color) -> Interpolator:
        ca = a.convert(self.space)
        cb = b.convert(self.space)
        pa = list(ca.coords())
        pb = list(cb.coords())
        alpha_a, alpha_b = alpha_of(a), alpha_of(b)

        # Powerless hue (greys, white) borrows the other side.
        for i in range(len(pa)):
            a_nan, b_nan = math.isnan(pa[i]), math.isnan(pb[i])
            if a_nan and b_nan:
                pa[i] = pb[i] = 0.0
            elif a_nan:
                pa[i] = pb[i]
            elif b_nan:
                pb[i] = pa[i]

        dh = 0.0
        if self.hue_index is not None:
            dh = hue_delta(pa[self.hue_index], pb[self.hue_index], self.hue)
        space, hue_index = self.space, self.hue_index

        def interpolator(t: float) -> Color:
            coords = [lerp(x, y, t) for x, y in zip(pa, pb)]
            if hue_index is not None:
                coords[hue_index] = (pa[hue_index] + t * dh) % 360.0
            return Color(space, coords, lerp(alpha_a, alpha_b, t)).convert("srgb")

        return interpolator


INTERPOLATIONS: Mapping[str, Interpolation] = MappingProxyType(
    {
        "rgb": Interpolation("srgb"),
        "linear-rgb": Interpolation("srgb-linear"),
        "lab": Interpolation("lab"),
        "hcl": Interpolation("lch", hue_index=2),
        "hcl-long": Interpolation("lch", hue_index=2, hue="longer"),
        "oklab": Interpolation("oklab"),
        "oklch": Interpolation("oklch", hue_index=2),
        "cam16ucs": Interpolation("cam16-ucs"),
        "hct": Interpolation("hct", hue_index=0),
    }
)

InterpolationMode = Union[str, InterpolatorFactory]


def resolve_interpolation(mode: InterpolationMode) -> InterpolatorFactory:
    if callable(mode):
        return mode
    name = (mode or "rgb").strip().lower()
    try:
        return INTERPOLATIONS[name]
    except KeyError:
        raise ConfigurationError(
            f"unknown interpolation '{mode}', expected one of {sorted(INTERPOLATIONS)}"
        ) from None


def interpolate_colors(
    a: ColorLike, b: ColorLike, mode: InterpolationMode = "rgb"
) -> Interpolator:
    """A→B interpolator using a named mode or a custom factory."""
    return resolve_interpolation(mode)(parse_color(a), parse_color(b))


__all__ = [
    "HUE_POLICIES",
    "INTERPOLATIONS",
    "Interpolation",
    "InterpolationMode",
    "Interpolator",
    "InterpolatorFactory",
    "hue_delta",
    "interpolate_colors",
    "lerp",
    "resolve_interpolation",
]
