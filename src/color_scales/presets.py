"""The demo dataset and a gallery of color scales built over it.

Each preset is one way of coloring the same 20 values: plain two-stop
blends, a diverging three-stop scale, quantization into bands, perceptual
interpolation, per-channel Lab scales and the built-in palettes.
"""

from __future__ import annotations

import logging
from typing import Callable, Mapping

from .colors import Color
from .errors import ConfigurationError
from .palettes import sequential
from .render import extent
from .scales import (
    ChannelScale,
    ColorScale,
    FunctionScale,
    LinearScale,
    scale_categorical,
    scale_diverging,
    scale_linear,
    scale_quantize,
    scale_sequential,
)

log = logging.getLogger(__name__)

DATASET: tuple[int, ...] = (
    -36, -36, 0, -34, 0, -7, 16, -20, 19, 34, 8, -39, 45, -12, 7, -34, -11, 44, 8, -44,
)  # fmt: skip

Domain = tuple[float, float]


def _lab_pair() -> list[Color]:
    return [Color("lab", [50, -100, 0]), Color("lab", [80, 100, 0])]


def _cool_manual(d: Domain) -> ColorScale:
    # same as "cool", but normalizing by hand and calling the palette directly
    to_unit = LinearScale(d, (0.0, 1.0))
    cool = sequential("cool")
    return FunctionScale(lambda x: cool(to_unit(x)))


PRESETS: Mapping[str, Callable[[Domain], ColorScale]] = {
    "linear": lambda d: scale_linear(d, ["purple", "orange"]),
    "diverging": lambda d: scale_diverging((d[0], 0.0, d[1]), ["purple", "white", "orange"]),
    "quantize": lambda d: scale_quantize(d, ["purple", "white", "orange"]),
    "hcl": lambda d: scale_linear(d, ["purple", "orange"], interpolate="hcl"),
    "lab-rgb": lambda d: scale_linear(d, _lab_pair()),
    "lab": lambda d: scale_linear(d, _lab_pair(), interpolate="lab"),
    "lab-channels": lambda d: ChannelScale(
        "lab", (LinearScale(d, (50.0, 80.0)), LinearScale(d, (-100.0, 100.0)), 0.0)
    ),
    "cool": lambda d: scale_sequential("cool", d),
    "cool-manual": _cool_manual,
    "puor": lambda d: scale_quantize(d, "puor", k=4),
    "paired": lambda d: scale_categorical("paired", d),
}


def build_scale(name: str, domain: Domain | None = None) -> ColorScale:
    """Build a preset over ``domain`` (the dataset's extent by default)."""
    try:
        factory = PRESETS[name]
    except KeyError:
        raise ConfigurationError(
            f"unknown scale '{name}', expected one of {sorted(PRESETS)}"
        ) from None
    d = extent(DATASET) if domain is None else domain
    log.debug("Building preset %s over %s", name, d)
    return factory(d)


__all__ = ["DATASET", "PRESETS", "build_scale"]
