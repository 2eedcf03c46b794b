import math

import numpy as np
import pytest

from color_scales.colors import Color, to_hex
from color_scales.errors import ConfigurationError
from color_scales.scales import (
    ChannelScale,
    FunctionScale,
    LinearScale,
    scale_categorical,
    scale_diverging,
    scale_linear,
    scale_quantize,
    scale_sequential,
    ticks,
)

PURPLE, WHITE, ORANGE = "#800080", "#ffffff", "#ffa500"


def rgb(color):
    return np.array(color.coords(), dtype=float)


# ---- numeric -----------------------------------------------------------------


def test_linear_scale_positions():
    cx = LinearScale((0, 20), (80, 480))
    assert cx(0) == 80
    assert cx(10) == pytest.approx(280)
    assert cx(20) == 480
    assert cx.invert(280) == pytest.approx(10)


def test_linear_scale_extrapolates_unless_clamped():
    assert LinearScale((0, 1), (0, 10))(2) == pytest.approx(20)
    assert LinearScale((0, 1), (0, 10), clamp=True)(2) == 10


def test_linear_scale_piecewise_and_descending():
    assert LinearScale((-44, 0, 45), (0, 0.5, 1))(-22) == pytest.approx(0.25)
    cy = LinearScale((-44, 45), (470, 70))
    assert cy(-44) == 470
    assert cy(45) == 70
    assert LinearScale((10, 0), (0, 1))(2.5) == pytest.approx(0.75)


def test_ticks():
    assert ticks(-44, 45, 10) == [-40.0, -30.0, -20.0, -10.0, 0.0, 10.0, 20.0, 30.0, 40.0]
    assert ticks(0, 20, 10) == [float(v) for v in range(0, 21, 2)]
    assert ticks(0, 1, 5) == [0.0, 0.2, 0.4, 0.6, 0.8, 1.0]
    assert ticks(45, -44, 10)[0] == 40.0
    assert ticks(3, 3) == [3]


# ---- continuous ----------------------------------------------------------------


def test_two_stop_endpoints_and_midpoint():
    s = scale_linear([-44, 45], ["purple", "orange"])
    assert to_hex(s(-44)) == PURPLE
    assert to_hex(s(45)) == ORANGE
    expected = np.array([128 + 255, 165, 128]) / 2 / 255
    assert np.allclose(rgb(s(0.5)), expected, atol=1e-9)


def test_clamping_law():
    s = scale_linear([-44, 45], ["purple", "orange"])
    assert to_hex(s(-1000)) == to_hex(s(-44))
    assert to_hex(s(1000)) == to_hex(s(45))


def test_unclamped_extrapolates():
    s = scale_linear([0, 1], ["#000000", "#808080"], clamp=False)
    assert np.allclose(rgb(s(2)), [2 * 128 / 255] * 3, atol=1e-9)


def test_unclamped_infinity_pins_to_end_stops():
    s = scale_linear([0, 1], ["purple", "orange"], clamp=False)
    assert to_hex(s(math.inf)) == ORANGE
    assert to_hex(s(-math.inf)) == PURPLE
    grey = scale_sequential(lambda t: Color("srgb", [t, t, t]), [0, 10], clamp=False)
    assert np.allclose(rgb(grey(math.inf)), [1.0] * 3)
    assert np.allclose(rgb(grey(-math.inf)), [0.0] * 3)


def test_diverging():
    s = scale_diverging([-44, 0, 45], ["purple", "white", "orange"])
    assert to_hex(s(-44)) == PURPLE
    assert to_hex(s(0)) == WHITE
    assert to_hex(s(45)) == ORANGE
    half = (128 / 255 + 1) / 2
    assert np.allclose(rgb(s(-22)), [half, 0.5, half], atol=1e-9)
    assert to_hex(s(-80)) == PURPLE
    assert to_hex(s(80)) == ORANGE


def test_descending_domain():
    s = scale_linear([10, 0], ["black", "white"])
    assert to_hex(s(10)) == "#000000"
    assert to_hex(s(0)) == "#ffffff"
    assert np.allclose(rgb(s(2.5)), [0.75] * 3, atol=1e-9)


def test_perceptual_mode_is_selectable():
    plain = scale_linear([0, 1], ["purple", "orange"])
    hcl = scale_linear([0, 1], ["purple", "orange"], interpolate="hcl")
    assert to_hex(hcl(0)) == PURPLE
    assert to_hex(hcl(1)) == ORANGE
    assert to_hex(plain(0.5)) != to_hex(hcl(0.5))


def test_evaluate_is_idempotent_and_returns_fresh_colors():
    s = scale_linear([-44, 45], ["purple", "orange"])
    first = s(12.5)
    assert to_hex(first) == to_hex(s(12.5))
    first.set("red", 0.0)
    assert to_hex(s(12.5)) != to_hex(first)


def test_unknown_for_nan():
    assert scale_linear([0, 1], ["purple", "orange"])(math.nan) is None
    s = scale_linear([0, 1], ["purple", "orange"], unknown="gray")
    assert to_hex(s(math.nan)) == "#808080"


def test_evaluate_many():
    s = scale_linear([0, 1], ["black", "white"])
    assert [to_hex(c) for c in s.evaluate_many(np.array([0.0, 1.0]))] == [
        "#000000",
        "#ffffff",
    ]


@pytest.mark.parametrize(
    "domain, colors",
    [
        ([0], ["purple"]),
        ([0, 0], ["purple", "orange"]),
        ([0, 2, 1], ["purple", "white", "orange"]),
        ([0, 1], ["purple", "white", "orange"]),
        ([0, "x"], ["purple", "orange"]),
        ([0, math.inf], ["purple", "orange"]),
        ([0, 1], ["purple", "not-a-color"]),
    ],
)
def test_invalid_continuous_configuration(domain, colors):
    with pytest.raises(ConfigurationError):
        scale_linear(domain, colors)


def test_invalid_interpolation_name():
    with pytest.raises(ConfigurationError):
        scale_linear([0, 1], ["purple", "orange"], interpolate="nope")


def test_diverging_needs_three_stops():
    with pytest.raises(ConfigurationError):
        scale_diverging([0, 1], ["purple", "orange"])


# ---- quantize / categorical ---------------------------------------------------


def test_quantize_buckets():
    q = scale_quantize([-44, 45], ["purple", "white", "orange"])
    assert q.width == pytest.approx(89 / 3)
    assert q.thresholds() == pytest.approx([-44 + 89 / 3, -44 + 2 * 89 / 3])
    assert to_hex(q(-44)) == PURPLE
    assert to_hex(q(-20)) == to_hex(q(-44))
    assert to_hex(q(10)) == WHITE
    assert to_hex(q(45)) == ORANGE


def test_quantize_no_blending_inside_bucket():
    q = scale_quantize([0, 30], ["purple", "white", "orange"])
    assert {to_hex(q(x)) for x in np.linspace(10.01, 19.99, 25)} == {WHITE}


def test_quantize_clamps_out_of_domain():
    q = scale_quantize([-44, 45], ["purple", "white", "orange"])
    assert q.bucket(-1000) == 0
    assert q.bucket(1000) == 2
    assert q.bucket(math.inf) == 2
    assert q.bucket(-math.inf) == 0


def test_quantize_buckets_partition_domain():
    q = scale_quantize([0, 12], ["#000000", "#444444", "#888888", "#cccccc"])
    counts = np.bincount([q.bucket(x) for x in np.arange(0.5, 12, 1.0)])
    assert counts.tolist() == [3, 3, 3, 3]


@pytest.mark.parametrize(
    "domain, k",
    [([-50, 2], 3), ([2, -50], 3), ([-44, 45], 3), ([0, 1], 7), ([-0.3, 0.7], 5)],
)
def test_quantize_threshold_values_go_to_upper_bucket(domain, k):
    q = scale_quantize(domain, [f"#{i:02x}{i:02x}{i:02x}" for i in range(k)])
    for i, th in enumerate(q.thresholds()):
        assert q.bucket(th) == i + 1


def test_quantize_thresholds_agree_on_integer_domains():
    for lo in range(-50, 0, 3):
        for hi in range(1, 60, 4):
            for k in range(3, 8):
                q = scale_quantize([lo, hi], [f"#{i:02x}0000" for i in range(k)])
                assert [q.bucket(th) for th in q.thresholds()] == list(range(1, k))


def test_quantize_scheme_by_name():
    q = scale_quantize([-44, 45], "puor", k=4)
    assert [to_hex(c) for c in q.range] == ["#5e3c99", "#b2abd2", "#fdb863", "#e66101"]


def test_quantize_configuration_errors():
    with pytest.raises(ConfigurationError):
        scale_quantize([0, 1, 2], ["purple"])
    with pytest.raises(ConfigurationError):
        scale_quantize([0, 1], [])
    with pytest.raises(ConfigurationError):
        scale_quantize([1, 1], ["purple"])


def test_categorical():
    c = scale_categorical("paired", [-44, 45])
    assert len(c.range) == 12
    assert to_hex(c(-44)) == "#a6cee3"
    assert to_hex(c(45)) == "#b15928"
    assert to_hex(c(1000)) == "#b15928"
    assert to_hex(c.category(13)) == "#1f78b4"


# ---- sequential / channel / function ------------------------------------------


def test_sequential_cool():
    s = scale_sequential("cool", [-44, 45])
    assert to_hex(s(-44)) == "#6e40aa"
    assert to_hex(s(45)) == "#aff05b"
    assert to_hex(s(100)) == to_hex(s(45))


def test_sequential_custom_palette():
    s = scale_sequential(lambda t: Color("srgb", [t, t, t]), [0, 10])
    assert np.allclose(rgb(s(5)), [0.5] * 3)


def test_sequential_unknown_palette():
    with pytest.raises(ConfigurationError):
        scale_sequential("plasma-ish", [0, 1])


def test_channel_scale_builds_lab_colors():
    d = (-44.0, 45.0)
    s = ChannelScale("lab", (LinearScale(d, (50, 80)), LinearScale(d, (-100, 100)), 0.0))
    assert to_hex(s(-44)) == to_hex(Color("lab", [50, -100, 0]))
    assert to_hex(s(45)) == to_hex(Color("lab", [80, 100, 0]))


def test_function_scale():
    s = FunctionScale(lambda x: "orange" if x > 0 else "purple")
    assert to_hex(s(3)) == ORANGE
    assert to_hex(s(-3)) == PURPLE
    assert s(math.nan) is None


def test_scales_are_immutable():
    s = scale_linear([0, 1], ["purple", "orange"])
    with pytest.raises(AttributeError):
        s.clamp = False
