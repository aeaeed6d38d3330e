"""
Sums the ripples of all active drops into a scalar amplitude grid.
"""

import math

import numpy as np

from .wave_table import DEFAULT_SHAPE, QuantizedWaveTable, wave_amplitude

TWO_PI = 2.0 * math.pi


def drop_coordinates(drop, width, height):
    """Drop-relative wave coordinates for every column and row.

    Every cell sweeps a full 2*pi across the grid whatever its size, offset
    by the drop's own normalized position. Returns ``(x, y)`` with shapes
    ``(1, width)`` and ``(height, 1)`` so they broadcast to the grid.
    """
    x_left = -0.5 + drop.x / width
    y_top = -0.5 + drop.y / height
    x = -math.pi + x_left * TWO_PI + np.arange(width) * (TWO_PI / width)
    y = -math.pi + y_top * TWO_PI + np.arange(height) * (TWO_PI / height)
    return x[np.newaxis, :], y[:, np.newaxis]


class FieldAccumulator:
    """Linear superposition of drop ripples.

    Reads the quantized table by default; ``exact=True`` evaluates the
    analytic function instead.
    """

    def __init__(self, table=None, exact=False, shape=None):
        self.exact = exact
        self.table = table
        self.shape = shape or (table.shape if table is not None else DEFAULT_SHAPE)
        if not exact and self.table is None:
            self.table = QuantizedWaveTable(shape=self.shape)

    def contribution(self, drop, width, height, now):
        x, y = drop_coordinates(drop, width, height)
        t = drop.age(now)
        if self.exact:
            return wave_amplitude(drop.wave_number, x, y, t, self.shape)
        return self.table.get(drop.wave_number, x, y, t)

    def compute(self, drops, width, height, now):
        """Amplitude grid of shape ``(height, width)`` at time ``now``.

        ``drops`` is a DropSet or any iterable of drops.
        """
        field = np.zeros((height, width), dtype=np.float32)
        for drop in drops:
            field += self.contribution(drop, width, height, now)
        return field
