"""Number → color scales with perceptual interpolation and legend sampling."""

from .colors import Color, parse_color, to_hex
from .errors import ConfigurationError
from .interpolate import INTERPOLATIONS, Interpolation, interpolate_colors
from .legend import LegendSample, ramp, sample
from .palettes import SCHEMES, SEQUENTIAL, scheme, sequential
from .scales import (
    CategoricalScale,
    ChannelScale,
    ColorScale,
    ContinuousScale,
    FunctionScale,
    LinearScale,
    QuantizeScale,
    SequentialScale,
    scale_categorical,
    scale_diverging,
    scale_linear,
    scale_quantize,
    scale_sequential,
)

__version__ = "0.1.0"
