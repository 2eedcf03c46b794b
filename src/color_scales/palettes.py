"""Built-in palettes.

Two read-only registries, populated at import time:

``SEQUENTIAL``
    name → ``PaletteFn``, a pure function mapping t in [0, 1] to a color.
``SCHEMES`` / ``DIVERGING_SCHEMES``
    fixed lists of hex colors for quantized and categorical scales.  Diverging
    schemes come in several sizes, keyed by the number of classes.
"""

from __future__ import annotations

import logging
from math import floor, pi, sin
from types import MappingProxyType
from typing import Callable, Mapping, Optional, Sequence

from .colors import Color
from .cubehelix import Cubehelix, cubehelix_long
from .errors import ConfigurationError

log = logging.getLogger(__name__)

PaletteFn = Callable[[float], Color]


def _split(s: str) -> tuple[str, ...]:
    return tuple("#" + s[i : i + 6] for i in range(0, len(s), 6))


# --- ColorBrewer / d3 schemes -------------------------------------------------
_PAIRED = _split(
    "a6cee31f78b4b2df8a33a02cfb9a99e31a1cfdbf6fff7f00cab2d66a3d9affff99b15928"
)
_CATEGORY10 = _split(
    "1f77b4ff7f0e2ca02cd627289467bd8c564be377c27f7f7fbcbd2217becf"
)
_TABLEAU10 = _split(
    "4e79a7f28e2ce1575976b7b259a14fedc949af7aa1ff9da79c755fbab0ab"
)

_PUOR = {
    3: _split("998ec3f7f7f7f1a340"),
    4: _split("5e3c99b2abd2fdb863e66101"),
    5: _split("5e3c99b2abd2f7f7f7fdb863e66101"),
    6: _split("542788998ec3d8daebfee0b6f1a340b35806"),
    7: _split("542788998ec3d8daebf7f7f7fee0b6f1a340b35806"),
    8: _split("5427888073acb2abd2d8daebfee0b6fdb863e08214b35806"),
    9: _split("5427888073acb2abd2d8daebf7f7f7fee0b6fdb863e08214b35806"),
    10: _split("2d004b5427888073acb2abd2d8daebfee0b6fdb863e08214b358067f3b08"),
    11: _split(
        "2d004b5427888073acb2abd2d8daebf7f7f7fee0b6fdb863e08214b358067f3b08"
    ),
}

_BLUES9 = _split("f7fbffdeebf7c6dbef9ecae16baed64292c62171b508519c08306b")

SCHEMES: Mapping[str, tuple[str, ...]] = MappingProxyType(
    {
        "paired": _PAIRED,
        "category10": _CATEGORY10,
        "tableau10": _TABLEAU10,
    }
)

DIVERGING_SCHEMES: Mapping[str, Mapping[int, tuple[str, ...]]] = MappingProxyType(
    {"puor": MappingProxyType(_PUOR)}
)


# --- continuous palettes ------------------------------------------------------
def _clamp01(t: float) -> float:
    return 0.0 if t <= 0.0 else 1.0 if t >= 1.0 else t


def _bounded(fn: PaletteFn) -> PaletteFn:
    return lambda t: fn(_clamp01(t))


def _ramp(stops: Sequence[str]) -> PaletteFn:
    """Uniform B-spline through sRGB stops, like d3's scheme ramps."""
    spline = Color.interpolate(list(stops), space="srgb", method="bspline")
    return _bounded(lambda t: Color(spline(t)).convert("srgb"))


def _rainbow(t: float) -> Color:
    t -= floor(t)
    ts = abs(t - 0.5)
    return Cubehelix(360.0 * t - 100.0, 1.5 - 1.5 * ts, 0.8 - 0.9 * ts).to_color()


def _sinebow(t: float) -> Color:
    t = (0.5 - t) * pi
    return Color(
        "srgb",
        [sin(t) ** 2, sin(t + pi / 3) ** 2, sin(t + 2 * pi / 3) ** 2],
    )


def _build_sequential() -> dict[str, PaletteFn]:
    return {
        "cool": _bounded(
            cubehelix_long(Cubehelix(260.0, 0.75, 0.35), Cubehelix(80.0, 1.5, 0.8))
        ),
        "warm": _bounded(
            cubehelix_long(Cubehelix(-100.0, 0.75, 0.35), Cubehelix(80.0, 1.5, 0.8))
        ),
        "cubehelix": _bounded(
            cubehelix_long(Cubehelix(300.0, 0.5, 0.0), Cubehelix(-240.0, 0.5, 1.0))
        ),
        "rainbow": _rainbow,
        "sinebow": _sinebow,
        "puor": _ramp(_PUOR[11]),
        "blues": _ramp(_BLUES9),
    }


SEQUENTIAL: Mapping[str, PaletteFn] = MappingProxyType(_build_sequential())
log.debug("Registered sequential palettes: %s", ", ".join(SEQUENTIAL))


def sequential(name: str) -> PaletteFn:
    try:
        return SEQUENTIAL[name.strip().lower()]
    except KeyError:
        raise ConfigurationError(
            f"unknown sequential palette '{name}', expected one of {sorted(SEQUENTIAL)}"
        ) from None


def scheme(name: str, k: Optional[int] = None) -> tuple[str, ...]:
    """Fixed color list by name; diverging schemes need the class count k."""
    key = name.strip().lower()
    if key in SCHEMES:
        return SCHEMES[key]
    if key in DIVERGING_SCHEMES:
        sizes = DIVERGING_SCHEMES[key]
        if k is None or k not in sizes:
            raise ConfigurationError(
                f"scheme '{name}' needs k in {min(sizes)}..{max(sizes)}, got {k}"
            )
        return sizes[k]
    raise ConfigurationError(
        f"unknown scheme '{name}', expected one of "
        f"{sorted(list(SCHEMES) + list(DIVERGING_SCHEMES))}"
    )


__all__ = [
    "DIVERGING_SCHEMES",
    "PaletteFn",
    "SCHEMES",
    "SEQUENTIAL",
    "scheme",
    "sequential",
]
