"""
Rain Ripples - drops falling on a pond, as an animated colour field.
"""

from .colorize import colorize, water_rgb
from .drops import Drop, DropSet
from .engine import RippleEngine
from .field import FieldAccumulator
from .sine_table import SineTable, sin_lut, sin_lut_f32
from .wave_table import (
    QuantizedWaveTable,
    TableDomain,
    WaveShape,
    WaveTablePool,
    ring_bounds,
    ripple_amplitude,
    wave_amplitude,
)

__all__ = [
    "Drop",
    "DropSet",
    "FieldAccumulator",
    "QuantizedWaveTable",
    "RippleEngine",
    "SineTable",
    "TableDomain",
    "WaveShape",
    "WaveTablePool",
    "colorize",
    "ring_bounds",
    "ripple_amplitude",
    "sin_lut",
    "sin_lut_f32",
    "water_rgb",
    "wave_amplitude",
]
