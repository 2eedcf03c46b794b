"""Color-scale walkthrough: one dataset, many ways to color it.

Builds every preset scale over the 20-value demo dataset, prints the colors
each one assigns, and writes the scatterplot + legend for the chosen scale.

Presets
-------
linear        two-stop sRGB blend, purple → orange
diverging     three stops with white pinned at 0
quantize      three flat bands, no interpolation
hcl           purple → orange through LCh (shorter hue)
lab-rgb       Lab endpoints, but blended in sRGB
lab           Lab endpoints blended in Lab
lab-channels  separate numeric scales for L and a, b fixed at 0
cool          built-in cubehelix "cool" palette
cool-manual   "cool" again, normalizing the domain by hand
puor          4-class PuOr scheme, quantized
paired        12-color Paired scheme as categories

Usage
-----
$ python main.py quantize scatter.svg   # write one plot
$ python main.py --serve                # browse all presets on :5000
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from color_scales.app import create_app
from color_scales.colors import to_hex
from color_scales.presets import DATASET, PRESETS, build_scale
from color_scales.render import render_svg, scatter_layout

log = logging.getLogger(__name__)


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("scale", nargs="?", default="quantize", choices=sorted(PRESETS))
    parser.add_argument("out", nargs="?", type=Path, default=Path("scatter.svg"))
    parser.add_argument("-n", type=int, default=10, help="legend samples")
    parser.add_argument("--serve", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")

    if args.serve:
        create_app({"DEFAULT_SCALE": args.scale, "LEGEND_SAMPLES": args.n}).run()
        return

    for name in PRESETS:
        scale = build_scale(name)
        fills = " ".join(to_hex(c) for c in scale.evaluate_many(DATASET[:6]))
        log.info("%-12s %s ...", name, fills)

    layout = scatter_layout(DATASET, build_scale(args.scale), n=args.n)
    args.out.write_text(render_svg(layout), encoding="utf-8")
    log.info("wrote %s (%s)", args.out, args.scale)


if __name__ == "__main__":
    main()
