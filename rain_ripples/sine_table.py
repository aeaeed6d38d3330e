"""
Quantized sine lookup for angle-driven effects.

Two precisions are provided: ``SineTable(np.float64)`` and
``SineTable(np.float32)``. Each builds its own samples in its own precision,
so the two may disagree in the last bit.
"""

import threading

import numpy as np

from .config import SINE_TABLE_SIZE


class SineTable:
    """Nearest-sample sine over one full turn, built on first use."""

    def __init__(self, dtype=np.float64, size=SINE_TABLE_SIZE):
        if size <= 0:
            raise ValueError(f"size must be positive, got {size}")
        self.dtype = np.dtype(dtype).type
        self.size = int(size)
        self._samples = None
        self._lock = threading.Lock()

    @property
    def is_built(self):
        return self._samples is not None

    def _build(self):
        with self._lock:
            if self._samples is not None:
                return self._samples
            step = self.dtype(2.0 * np.pi) / self.dtype(self.size)
            samples = np.sin(np.arange(self.size, dtype=self.dtype) * step)
            samples.flags.writeable = False
            self._samples = samples
            return samples

    def samples(self):
        samples = self._samples
        if samples is None:
            samples = self._build()
        return samples

    def index(self, angle):
        """Bucket index for ``angle`` (radians, any sign or magnitude)."""
        two_pi = self.dtype(2.0 * np.pi)
        a = np.asarray(angle, dtype=self.dtype)
        # np.mod is floored, so negative angles land in [0, 2pi)
        normalized = np.mod(a, two_pi)
        scaled = normalized * self.dtype(self.size) / two_pi
        # Round half away from zero; scaled is never negative here
        return np.floor(scaled + self.dtype(0.5)).astype(np.int64) % self.size

    def sin(self, angle):
        samples = self.samples()
        values = samples[self.index(angle)]
        if np.ndim(values) == 0:
            return self.dtype(values)
        return values

    __call__ = sin


_SIN_F64 = SineTable(np.float64)
_SIN_F32 = SineTable(np.float32)


def sin_lut(angle):
    return _SIN_F64.sin(angle)


def sin_lut_f32(angle):
    return _SIN_F32.sin(angle)
