from __future__ import annotations

import math
import operator
from dataclasses import dataclass
from typing import NamedTuple, Optional

import numpy as np

from .colors import Color
from .errors import ConfigurationError
from .scales import ColorScale


class LegendSample(NamedTuple):
    value: float
    color: Optional[Color]


def sample(
    scale: ColorScale, domain_min: float, domain_max: float, n: int
) -> list[LegendSample]:
    """
    n evenly spaced values from domain_min to domain_max (both included) and
    their colors, in generation order.  A legend draws them in this order.
    """
    try:
        n = operator.index(n)
    except TypeError:
        raise ConfigurationError(f"legend sample count must be an integer, got {n!r}") from None
    if n < 2:
        raise ConfigurationError(f"legend needs n ≥ 2 samples, got {n}")
    step = (domain_max - domain_min) / (n - 1)
    values = domain_min + np.arange(n) * step
    return [LegendSample(float(v), scale.evaluate(float(v))) for v in values]


@dataclass(frozen=True)
class Ramp:
    samples: list[LegendSample]
    thickness: int


def ramp(
    scale: ColorScale, domain_min: float, domain_max: float, n: int, extent: float
) -> Ramp:
    """Samples plus the thickness of each stacked rectangle over ``extent`` px."""
    samples = sample(scale, domain_min, domain_max, n)
    return Ramp(samples, math.ceil(abs(extent) / (n - 1)))


__all__ = ["LegendSample", "Ramp", "ramp", "sample"]
