from __future__ import annotations

import logging
import math
import os
from typing import Any, Mapping, Optional

from flask import Flask, jsonify, render_template_string, request
from werkzeug.exceptions import HTTPException

from .colors import to_hex
from .errors import ConfigurationError
from .legend import sample
from .presets import DATASET, PRESETS, build_scale
from .render import extent, render_svg, scatter_layout

log = logging.getLogger(__name__)

DEFAULTS: Mapping[str, Any] = {
    "DEFAULT_SCALE": "quantize",
    "LEGEND_SAMPLES": 10,
    "MAX_SAMPLES": 512,
    "LOG_LEVEL": "INFO",
}

ENV_PREFIX = "COLOR_SCALES_"

INDEX_HTML = """\
<!doctype html>
<html>
  <head><meta charset="utf-8"><title>color scales: {{ name }}</title></head>
  <body>
    <nav>
    {% for p in presets %}
      <a href="?scale={{ p }}&n={{ n }}">{{ p }}</a>
    {% endfor %}
    </nav>
    <div id="div1">{{ svg | safe }}</div>
  </body>
</html>
"""


def load_config(overrides: Optional[Mapping[str, Any]] = None) -> dict[str, Any]:
    """Defaults, then COLOR_SCALES_* environment variables, then overrides."""
    config = dict(DEFAULTS)
    for key, default in DEFAULTS.items():
        raw = os.environ.get(ENV_PREFIX + key)
        if raw is not None:
            config[key] = type(default)(raw)
    config.update(overrides or {})
    return config


def parse_samples(val: str | None, default: int, limit: int) -> int:
    try:
        n = int(val) if val is not None else int(default)
    except ValueError:
        raise ConfigurationError("n must be an integer") from None
    if n < 2:
        raise ConfigurationError(f"n must be ≥ 2, got {n}")
    return min(n, limit)


def parse_value(val: str | None) -> float:
    if val is None:
        raise ConfigurationError("missing x")
    try:
        x = float(val)
    except ValueError:
        raise ConfigurationError(f"x must be a number, got '{val}'") from None
    if not math.isfinite(x):
        raise ConfigurationError(f"x must be finite, got '{val}'")
    return x


# ----------------------------- Flask app ----------------------------------


def create_app(config: Optional[Mapping[str, Any]] = None) -> Flask:
    app = Flask(__name__)
    app.config.update(load_config(config))
    logging.basicConfig(
        level=app.config["LOG_LEVEL"], format="%(levelname)s: %(message)s"
    )

    def requested_scale():
        name = (request.args.get("scale") or app.config["DEFAULT_SCALE"]).lower()
        return name, build_scale(name)

    def requested_samples() -> int:
        return parse_samples(
            request.args.get("n"), app.config["LEGEND_SAMPLES"], app.config["MAX_SAMPLES"]
        )

    @app.errorhandler(ConfigurationError)
    def bad_config(exc: ConfigurationError):
        return jsonify({"error": str(exc)}), 400

    @app.errorhandler(Exception)
    def failed(exc: Exception):
        if isinstance(exc, HTTPException):
            return exc
        log.exception("Request failed")
        return jsonify({"error": str(exc)}), 500

    @app.route("/")
    def index():
        name, scale = requested_scale()
        n = requested_samples()
        svg = render_svg(scatter_layout(DATASET, scale, n=n))
        return render_template_string(
            INDEX_HTML, name=name, n=n, presets=sorted(PRESETS), svg=svg
        )

    @app.route("/scales")
    def scales():
        return jsonify(sorted(PRESETS))

    @app.route("/legend")
    def legend():
        name, scale = requested_scale()
        n = requested_samples()
        lo, hi = extent(DATASET)
        log.debug("legend: scale=%s n=%d", name, n)
        return jsonify(
            [{"value": s.value, "color": to_hex(s.color)} for s in sample(scale, lo, hi, n)]
        )

    @app.route("/colors")
    def colors():
        _, scale = requested_scale()
        return jsonify(
            [{"value": v, "color": to_hex(scale.evaluate(v))} for v in DATASET]
        )

    @app.route("/evaluate")
    def evaluate():
        _, scale = requested_scale()
        x = parse_value(request.args.get("x"))
        color = scale.evaluate(x)
        return jsonify({"value": x, "color": None if color is None else to_hex(color)})

    return app


if __name__ == "__main__":
    create_app().run(debug=False, threaded=True)
