"""
Water colouring: amplitude -> RGB.

Crests ramp toward bright cyan-blue, troughs toward dark teal. The colour
is then pulled toward a green tint and finally toward its own (untinted)
luminance.
"""

import numpy as np

from .config import CREST_RAMP, DESATURATION, TINT, TINT_COLOR, TROUGH_RAMP

_CREST_LO = np.array([lo for lo, _ in CREST_RAMP], dtype=np.float64)
_CREST_HI = np.array([hi for _, hi in CREST_RAMP], dtype=np.float64)
_TROUGH_LO = np.array([lo for lo, _ in TROUGH_RAMP], dtype=np.float64)
_TROUGH_HI = np.array([hi for _, hi in TROUGH_RAMP], dtype=np.float64)
_LUMA = np.array([0.299, 0.587, 0.114], dtype=np.float64)


def _round_half_away(values):
    return np.sign(values) * np.floor(np.abs(values) + 0.5)


def colorize(field, desaturation=DESATURATION, tint=TINT, tint_color=TINT_COLOR):
    """Map an amplitude grid to a ``uint8`` grid with a trailing RGB axis.

    Pure: the same inputs always give the same colours.
    """
    a = np.clip(np.asarray(field, dtype=np.float64), -1.0, 1.0)[..., np.newaxis]
    d = min(max(float(desaturation), 0.0), 1.0)
    t = min(max(float(tint), 0.0), 1.0)

    crest = _CREST_LO + (_CREST_HI - _CREST_LO) * a
    trough = _TROUGH_LO + (_TROUGH_HI - _TROUGH_LO) * -a
    rgb = np.where(a >= 0.0, crest, trough)

    luma = (rgb @ _LUMA)[..., np.newaxis]
    tinted = rgb + t * (np.asarray(tint_color, dtype=np.float64) - rgb)
    desat = tinted + d * (luma - tinted)

    return np.clip(_round_half_away(desat), 0, 255).astype(np.uint8)


def water_rgb(amplitude, desaturation=DESATURATION, tint=TINT, tint_color=TINT_COLOR):
    """Colour of a single amplitude as an ``(r, g, b)`` tuple of ints."""
    r, g, b = colorize(amplitude, desaturation, tint, tint_color)
    return int(r), int(g), int(b)
