"""SVG scatterplot with a color-ramp legend.

Rendering only consumes finished colors: circle fills come from
``scale.evaluate`` and the legend from :func:`color_scales.legend.ramp`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Sequence

from jinja2 import Environment

from .colors import Color, to_hex
from .errors import ConfigurationError
from .legend import ramp
from .scales import ColorScale, LinearScale

NO_FILL = "none"

_env = Environment(autoescape=True, trim_blocks=True, lstrip_blocks=True)

SVG_TEMPLATE = _env.from_string(
    """\
<svg xmlns="http://www.w3.org/2000/svg" width="{{ width }}" height="{{ height }}">
  <g class="points">
  {% for c in circles %}
    <circle cx="{{ '%.2f' % c.cx }}" cy="{{ '%.2f' % c.cy }}" r="{{ c.r }}" fill="{{ c.fill }}"/>
  {% endfor %}
  </g>
  <g class="x-axis" transform="translate(0,{{ '%.2f' % x_axis_y }})">
    <line x1="{{ x_range[0] }}" x2="{{ x_range[1] }}" stroke="currentColor"/>
  {% for t in x_ticks %}
    <g class="tick" transform="translate({{ '%.2f' % t.pos }},0)">
      <line y2="6" stroke="currentColor"/>
      <text y="9" dy="0.71em" text-anchor="middle" font-size="10">{{ t.label }}</text>
    </g>
  {% endfor %}
  </g>
  <g class="y-axis" transform="translate({{ '%.2f' % y_axis_x }},0)">
    <line y1="{{ y_range[0] }}" y2="{{ y_range[1] }}" stroke="currentColor"/>
  {% for t in y_ticks %}
    <g class="tick" transform="translate(0,{{ '%.2f' % t.pos }})">
      <line x2="-6" stroke="currentColor"/>
      <text x="-9" dy="0.32em" text-anchor="end" font-size="10">{{ t.label }}</text>
    </g>
  {% endfor %}
  </g>
  <g class="legend">
  {% for r in legend %}
    <rect x="{{ r.x }}" y="{{ '%.2f' % r.y }}" width="{{ r.width }}" height="{{ r.height }}" fill="{{ r.fill }}"/>
  {% endfor %}
  </g>
</svg>
"""
)


@dataclass(frozen=True)
class Circle:
    cx: float
    cy: float
    r: float
    fill: str


@dataclass(frozen=True)
class Tick:
    pos: float
    label: str


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    width: float
    height: float
    fill: str


@dataclass
class Layout:
    width: int
    height: int
    x_range: tuple[float, float]
    y_range: tuple[float, float]
    x_axis_y: float
    y_axis_x: float
    circles: list[Circle] = field(default_factory=list)
    x_ticks: list[Tick] = field(default_factory=list)
    y_ticks: list[Tick] = field(default_factory=list)
    legend: list[Rect] = field(default_factory=list)


def extent(values: Sequence[float]) -> tuple[float, float]:
    if not values:
        raise ConfigurationError("cannot take the extent of an empty dataset")
    return float(min(values)), float(max(values))


def _fill(color: Optional[Color]) -> str:
    return NO_FILL if color is None else to_hex(color)


def _label(v: float) -> str:
    return f"{v:g}"


def scatter_layout(
    dataset: Sequence[float],
    scale: ColorScale,
    *,
    n: int = 10,
    width: int = 500,
    height: int = 500,
    radius: float = 10.0,
    ticks: int = 10,
) -> Layout:
    """Positions, fills, axes and legend rectangles for the scatterplot."""
    lo, hi = extent(dataset)
    x_range = (80.0, width - 20.0)
    y_range = (height - 30.0, 70.0)
    cx = LinearScale((0.0, float(len(dataset))), x_range)
    cy = LinearScale((lo, hi), y_range)

    layout = Layout(
        width=width,
        height=height,
        x_range=x_range,
        y_range=y_range,
        x_axis_y=cy(0.0),
        y_axis_x=cx(0.0),
    )
    layout.circles = [
        Circle(cx(i), cy(v), radius, _fill(scale.evaluate(v)))
        for i, v in enumerate(dataset)
    ]
    layout.x_ticks = [Tick(cx(t), _label(t)) for t in cx.ticks(ticks)]
    layout.y_ticks = [Tick(cy(t), _label(t)) for t in cy.ticks(ticks)]

    # one rectangle per sample, centred on the sample's y position
    r = ramp(scale, lo, hi, n, y_range[0] - y_range[1])
    layout.legend = [
        Rect(10.0, cy(s.value) - r.thickness / 2, 30.0, r.thickness, _fill(s.color))
        for s in r.samples
    ]
    return layout


def render_svg(layout: Layout) -> str:
    return SVG_TEMPLATE.render(**vars(layout))


__all__ = ["Circle", "Layout", "Rect", "Tick", "extent", "render_svg", "scatter_layout"]
