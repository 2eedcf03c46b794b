from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, ClassVar, Iterable, Literal, Optional, Sequence, Union

import numpy as np

from .colors import Color, ColorLike, parse_color
from .errors import ConfigurationError
from .interpolate import InterpolationMode, Interpolator, lerp, resolve_interpolation
from .palettes import PaletteFn, scheme, sequential

log = logging.getLogger(__name__)

ScaleKind = Literal["continuous", "quantize", "sequential", "categorical"]

# e10, e5, e2 from d3-array's tick algorithm
_E10 = math.sqrt(50)
_E5 = math.sqrt(10)
_E2 = math.sqrt(2)


# ---- validation ---------------------------------------------------------------


def _as_domain(values: Iterable[Any], *, exact: Optional[int] = None) -> tuple[float, ...]:
    try:
        domain = tuple(float(v) for v in values)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"domain must be numeric: {exc}") from exc
    if len(domain) < 2:
        raise ConfigurationError(f"domain needs at least 2 breakpoints, got {len(domain)}")
    if exact is not None and len(domain) != exact:
        raise ConfigurationError(f"domain must have exactly {exact} values, got {len(domain)}")
    if not all(math.isfinite(d) for d in domain):
        raise ConfigurationError("domain breakpoints must be finite")
    steps = np.diff(domain)
    if not (np.all(steps > 0) or np.all(steps < 0)):
        raise ConfigurationError(f"domain must be strictly monotonic: {list(domain)}")
    return domain


def _as_colors(values: Iterable[ColorLike]) -> tuple[Color, ...]:
    if isinstance(values, str):
        raise ConfigurationError("range must be a sequence of colors, not a single string")
    colors = tuple(parse_color(v) for v in values)
    if not colors:
        raise ConfigurationError("range must contain at least one color")
    return colors


def _search_keys(domain: Sequence[float]) -> tuple[int, np.ndarray]:
    """Ascending search keys: descending domains are searched negated."""
    sign = 1 if domain[1] > domain[0] else -1
    return sign, sign * np.asarray(domain, dtype=float)


def _segment(keys: np.ndarray, k: float, clamp: bool) -> tuple[int, float]:
    """Bracketing sub-interval of ascending ``keys`` and the position inside it."""
    if clamp:
        k = min(max(k, keys[0]), keys[-1])
    i = int(np.searchsorted(keys, k, side="right")) - 1
    i = min(max(i, 0), len(keys) - 2)
    k0, k1 = keys[i], keys[i + 1]
    return i, float((k - k0) / (k1 - k0))


def _normalize(domain: Sequence[float], x: float, clamp: bool = True) -> float:
    d0, d1 = domain[0], domain[-1]
    t = (x - d0) / (d1 - d0)
    if clamp:
        t = 0.0 if t <= 0.0 else 1.0 if t >= 1.0 else t
    return t


def tick_increment(start: float, stop: float, count: int) -> float:
    """Positive: tick step; negative: reciprocal of the step (fractional steps)."""
    step = (stop - start) / max(0, count)
    power = math.floor(math.log10(step))
    error = step / 10**power
    factor = 10 if error >= _E10 else 5 if error >= _E5 else 2 if error >= _E2 else 1
    if power >= 0:
        return factor * 10**power
    return -(10 ** -power) / factor


def ticks(start: float, stop: float, count: int = 10) -> list[float]:
    """Round 1-2-5 tick values spanning [start, stop], about ``count`` of them."""
    if count <= 0:
        return []
    if start == stop:
        return [start]
    reverse = stop < start
    if reverse:
        start, stop = stop, start
    inc = tick_increment(start, stop, count)
    if inc == 0 or not math.isfinite(inc):
        return []
    if inc > 0:
        r0, r1 = math.ceil(start / inc), math.floor(stop / inc)
        values = np.arange(r0, r1 + 1) * inc
    else:
        inc = -inc
        r0, r1 = math.ceil(start * inc), math.floor(stop * inc)
        values = np.arange(r0, r1 + 1) / inc
    out = [float(v) for v in values]
    return out[::-1] if reverse else out


# ---- numeric scales -----------------------------------------------------------


@dataclass(frozen=True)
class LinearScale:
    """Piecewise-linear numeric map, used for positions and single channels."""

    domain: tuple[float, ...]
    range: tuple[float, ...]
    clamp: bool = False
    _sign: int = field(init=False, repr=False, compare=False)
    _keys: np.ndarray = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        domain = _as_domain(self.domain)
        try:
            rng = tuple(float(r) for r in self.range)
        except (TypeError, ValueError) as exc:
            raise ConfigurationError(f"range must be numeric: {exc}") from exc
        if len(rng) != len(domain):
            raise ConfigurationError(
                f"domain and range lengths differ ({len(domain)} != {len(rng)})"
            )
        sign, keys = _search_keys(domain)
        object.__setattr__(self, "domain", domain)
        object.__setattr__(self, "range", rng)
        object.__setattr__(self, "_sign", sign)
        object.__setattr__(self, "_keys", keys)

    def __call__(self, x: float) -> float:
        if math.isnan(x):
            return math.nan
        i, t = _segment(self._keys, self._sign * x, self.clamp)
        return lerp(self.range[i], self.range[i + 1], t)

    def invert(self, y: float) -> float:
        return LinearScale(self.range, self.domain, clamp=self.clamp)(y)

    def ticks(self, count: int = 10) -> list[float]:
        return ticks(self.domain[0], self.domain[-1], count)


# ---- color scales -------------------------------------------------------------


class ColorScale(ABC):
    """A number → color mapping.  Instances are immutable and reusable."""

    kind: ClassVar[ScaleKind]
    unknown: Optional[Color]

    def __call__(self, x: float) -> Optional[Color]:
        return self.evaluate(x)

    @abstractmethod
    def evaluate(self, x: float) -> Optional[Color]:
        ...

    def evaluate_many(self, xs: Iterable[float]) -> list[Optional[Color]]:
        return [self.evaluate(float(x)) for x in np.asarray(list(xs), dtype=float).ravel()]

    def _unknown(self) -> Optional[Color]:
        return None if self.unknown is None else self.unknown.clone()


@dataclass(frozen=True)
class ContinuousScale(ColorScale):
    """Linear interpolation across domain segments; 3+ stops make it diverging."""

    domain: tuple[float, ...]
    range: tuple[Color, ...]
    interpolate: InterpolationMode = "rgb"
    clamp: bool = True
    unknown: Optional[Color] = None
    kind: ClassVar[ScaleKind] = "continuous"
    _sign: int = field(init=False, repr=False, compare=False)
    _keys: np.ndarray = field(init=False, repr=False, compare=False)
    _segments: tuple[Interpolator, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        domain = _as_domain(self.domain)
        colors = _as_colors(self.range)
        if len(colors) != len(domain):
            raise ConfigurationError(
                f"continuous scale needs one color per breakpoint "
                f"({len(domain)} breakpoints, {len(colors)} colors)"
            )
        factory = resolve_interpolation(self.interpolate)
        sign, keys = _search_keys(domain)
        object.__setattr__(self, "domain", domain)
        object.__setattr__(self, "range", colors)
        object.__setattr__(self, "_sign", sign)
        object.__setattr__(self, "_keys", keys)
        object.__setattr__(
            self,
            "_segments",
            tuple(factory(a, b) for a, b in zip(colors, colors[1:])),
        )
        if self.unknown is not None:
            object.__setattr__(self, "unknown", parse_color(self.unknown))
        log.debug(
            "continuous scale: domain=%s interpolate=%s clamp=%s",
            domain,
            self.interpolate if isinstance(self.interpolate, str) else "custom",
            self.clamp,
        )

    def evaluate(self, x: float) -> Optional[Color]:
        if math.isnan(x):
            return self._unknown()
        # infinities pin to the end stops even when extrapolating
        clamp = self.clamp or math.isinf(x)
        i, t = _segment(self._keys, self._sign * x, clamp)
        return self._segments[i](t)


@dataclass(frozen=True)
class QuantizeScale(ColorScale):
    """Equal-width buckets over [d0, d1], one palette entry each, no blending."""

    domain: tuple[float, ...]
    range: tuple[Color, ...]
    unknown: Optional[Color] = None
    kind: ClassVar[ScaleKind] = "quantize"

    def __post_init__(self) -> None:
        object.__setattr__(self, "domain", _as_domain(self.domain, exact=2))
        object.__setattr__(self, "range", _as_colors(self.range))
        if self.unknown is not None:
            object.__setattr__(self, "unknown", parse_color(self.unknown))
        log.debug("%s scale: domain=%s buckets=%d", self.kind, self.domain, len(self.range))

    @property
    def width(self) -> float:
        d0, d1 = self.domain
        return (d1 - d0) / len(self.range)

    def bucket(self, x: float) -> int:
        # a value on a threshold belongs to the bucket above it
        sign, keys = _search_keys([self.domain[0], *self.thresholds(), self.domain[1]])
        return int(np.searchsorted(keys[1:-1], sign * x, side="right"))

    def thresholds(self) -> list[float]:
        d0 = self.domain[0]
        return [d0 + self.width * (i + 1) for i in range(len(self.range) - 1)]

    def evaluate(self, x: float) -> Optional[Color]:
        if math.isnan(x):
            return self._unknown()
        return self.range[self.bucket(x)].clone()


@dataclass(frozen=True)
class CategoricalScale(QuantizeScale):
    """Quantize mechanics over the unit-normalized value, labelling categories."""

    kind: ClassVar[ScaleKind] = "categorical"

    def category(self, index: int) -> Color:
        """Direct ordinal lookup; indexes past the palette wrap around."""
        return self.range[index % len(self.range)].clone()


@dataclass(frozen=True)
class SequentialScale(ColorScale):
    """Normalize to [0, 1], then apply a built-in or custom palette function."""

    palette: Union[str, PaletteFn]
    domain: tuple[float, ...] = (0.0, 1.0)
    clamp: bool = True
    unknown: Optional[Color] = None
    kind: ClassVar[ScaleKind] = "sequential"
    _fn: PaletteFn = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        fn = sequential(self.palette) if isinstance(self.palette, str) else self.palette
        if not callable(fn):
            raise ConfigurationError(f"palette must be a name or callable, got {self.palette!r}")
        object.__setattr__(self, "domain", _as_domain(self.domain, exact=2))
        object.__setattr__(self, "_fn", fn)
        if self.unknown is not None:
            object.__setattr__(self, "unknown", parse_color(self.unknown))
        log.debug("sequential scale: palette=%s domain=%s", self.palette, self.domain)

    def evaluate(self, x: float) -> Optional[Color]:
        if math.isnan(x):
            return self._unknown()
        clamp = self.clamp or math.isinf(x)
        return parse_color(self._fn(_normalize(self.domain, x, clamp)))


@dataclass(frozen=True)
class ChannelScale(ColorScale):
    """One numeric scale per channel of ``space``; plain numbers fix a channel."""

    space: str
    channels: tuple[Union[LinearScale, float], ...]
    unknown: Optional[Color] = None
    kind: ClassVar[ScaleKind] = "continuous"

    def __post_init__(self) -> None:
        channels = tuple(
            c if isinstance(c, LinearScale) else float(c) for c in self.channels
        )
        try:
            Color(self.space, [0.0] * len(channels))
        except ValueError as exc:
            raise ConfigurationError(
                f"cannot build '{self.space}' colors from {len(channels)} channels"
            ) from exc
        object.__setattr__(self, "channels", channels)
        if self.unknown is not None:
            object.__setattr__(self, "unknown", parse_color(self.unknown))

    def evaluate(self, x: float) -> Optional[Color]:
        if math.isnan(x):
            return self._unknown()
        coords = [c(x) if isinstance(c, LinearScale) else c for c in self.channels]
        return Color(self.space, coords).convert("srgb")


@dataclass(frozen=True)
class FunctionScale(ColorScale):
    """Any ``x -> color`` callable standing in for a scale."""

    fn: Callable[[float], ColorLike]
    unknown: Optional[Color] = None
    kind: ClassVar[ScaleKind] = "continuous"

    def evaluate(self, x: float) -> Optional[Color]:
        if math.isnan(x):
            return self._unknown()
        return parse_color(self.fn(x))


# ---- constructors -------------------------------------------------------------


def scale_linear(
    domain: Sequence[float],
    range: Sequence[ColorLike],
    *,
    interpolate: InterpolationMode = "rgb",
    clamp: bool = True,
    unknown: Optional[ColorLike] = None,
) -> ContinuousScale:
    return ContinuousScale(
        tuple(domain), tuple(range), interpolate=interpolate, clamp=clamp, unknown=unknown
    )


def scale_diverging(
    domain: Sequence[float],
    range: Sequence[ColorLike],
    **kwargs: Any,
) -> ContinuousScale:
    """Three-stop continuous scale: low → midpoint → high."""
    if len(domain) != 3 or len(range) != 3:
        raise ConfigurationError("diverging scale needs a 3-point domain and 3 colors")
    return scale_linear(domain, range, **kwargs)


def scale_quantize(
    domain: Sequence[float],
    range: Union[str, Sequence[ColorLike]],
    *,
    k: Optional[int] = None,
    unknown: Optional[ColorLike] = None,
) -> QuantizeScale:
    colors = scheme(range, k) if isinstance(range, str) else tuple(range)
    return QuantizeScale(tuple(domain), colors, unknown=unknown)


def scale_categorical(
    range: Union[str, Sequence[ColorLike]],
    domain: Sequence[float] = (0.0, 1.0),
    *,
    k: Optional[int] = None,
    unknown: Optional[ColorLike] = None,
) -> CategoricalScale:
    colors = scheme(range, k) if isinstance(range, str) else tuple(range)
    return CategoricalScale(tuple(domain), colors, unknown=unknown)


def scale_sequential(
    palette: Union[str, PaletteFn],
    domain: Sequence[float] = (0.0, 1.0),
    *,
    clamp: bool = True,
    unknown: Optional[ColorLike] = None,
) -> SequentialScale:
    return SequentialScale(palette, tuple(domain), clamp=clamp, unknown=unknown)


__all__ = [
    "CategoricalScale",
    "ChannelScale",
    "ColorScale",
    "ContinuousScale",
    "FunctionScale",
    "LinearScale",
    "QuantizeScale",
    "ScaleKind",
    "SequentialScale",
    "scale_categorical",
    "scale_diverging",
    "scale_linear",
    "scale_quantize",
    "scale_sequential",
    "tick_increment",
    "ticks",
]
