"""
Ripple wave function and its quantized lookup table.

A drop produces a single ring that expands at ``speed`` units per second:

    wave(d, t) = gain * sin(k*d - speed*t) / (2 + t)

zeroed outside ``speed*t - ring_width <= d <= speed*t`` and tapered linearly
to zero at both ring edges. Evaluating that for every cell and every drop
each frame is the hot path, so the function is sampled once into a dense
``RESOLUTION^3`` float32 table over (x, y, t) and read back by nearest
bucket. Lookups never interpolate.

A table is published as an immutable snapshot. Builds hold the table's lock
for the whole computation and swap the finished array in with a single
reference assignment, so readers never see a half-written table and never
take the lock once the table exists.
"""

import logging
import threading
import time
from dataclasses import dataclass
from typing import NamedTuple

import numpy as np

from .config import (
    RESOLUTION,
    RING_FACTOR,
    T_MAX,
    WAVE_GAIN,
    WAVE_NUMBER,
    WAVE_SPEED,
    X_MAX,
    X_MIN,
    Y_MAX,
    Y_MIN,
)

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class WaveShape:
    """Speed and ring geometry shared by the analytic function and the table."""

    speed: float = WAVE_SPEED
    ring_factor: float = RING_FACTOR
    gain: float = WAVE_GAIN

    def __post_init__(self):
        if self.speed <= 0:
            raise ValueError(f"speed must be positive, got {self.speed}")
        if self.ring_factor <= 0:
            raise ValueError(f"ring_factor must be positive, got {self.ring_factor}")

    @property
    def ring_width(self):
        return self.ring_factor * self.speed


@dataclass(frozen=True)
class TableDomain:
    """Axis ranges and bucket count of a quantized wave table."""

    x_min: float = X_MIN
    x_max: float = X_MAX
    y_min: float = Y_MIN
    y_max: float = Y_MAX
    t_max: float = T_MAX
    resolution: int = RESOLUTION

    def __post_init__(self):
        if self.resolution <= 0:
            raise ValueError(f"resolution must be positive, got {self.resolution}")
        if self.x_max <= self.x_min or self.y_max <= self.y_min or self.t_max <= 0:
            raise ValueError("table domain must have a positive extent on every axis")

    @property
    def dx(self):
        return (self.x_max - self.x_min) / self.resolution

    @property
    def dy(self):
        return (self.y_max - self.y_min) / self.resolution

    @property
    def dt(self):
        return self.t_max / self.resolution

    def axes(self):
        """Bucket midpoints along x, y and t."""
        mid = np.arange(self.resolution, dtype=np.float64) + 0.5
        return (
            self.x_min + mid * self.dx,
            self.y_min + mid * self.dy,
            mid * self.dt,
        )


DEFAULT_SHAPE = WaveShape()
DEFAULT_DOMAIN = TableDomain()


def ring_bounds(t, shape=DEFAULT_SHAPE):
    """Return ``(inner, outer)`` ring radii at elapsed time ``t``."""
    outer = shape.speed * t
    return outer - shape.ring_width, outer


def ripple_amplitude(k, d, t, shape=DEFAULT_SHAPE):
    """Analytic ripple at radial distance ``d`` and elapsed time ``t``.

    Accepts scalars or arrays (broadcast together). Scalars come back as
    plain floats.
    """
    d = np.asarray(d, dtype=np.float64)
    t = np.asarray(t, dtype=np.float64)
    ring = shape.ring_width
    inner, outer = ring_bounds(t, shape)

    wave = shape.gain * np.sin(k * d - outer) / (2.0 + t)
    edge = np.minimum(outer - d, d - inner)
    factor = np.clip(edge / ring, 0.0, 1.0)
    in_ring = (d <= outer) & (d >= inner)
    result = np.where(in_ring, wave * factor, 0.0)

    if result.ndim == 0:
        return float(result)
    return result


def wave_amplitude(k, x, y, t, shape=DEFAULT_SHAPE):
    """Analytic ripple at drop-relative coordinates ``(x, y)``."""
    x = np.asarray(x, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64)
    return ripple_amplitude(k, np.sqrt(x * x + y * y), t, shape)


def _quantize(value, lo, step, n):
    idx = np.floor((np.asarray(value, dtype=np.float64) - lo) / step)
    return np.clip(idx, 0, n - 1).astype(np.intp)


class _Snapshot(NamedTuple):
    wave_number: float
    samples: np.ndarray  # float32, indexed [it, ix, iy]


class QuantizedWaveTable:
    """Nearest-bucket approximation of :func:`wave_amplitude`.

    Samples are stored time-major (``[it, ix, iy]``) so each build step
    writes one contiguous slice. The table is built lazily on the first
    lookup, or eagerly with :meth:`build`.
    """

    def __init__(self, wave_number=WAVE_NUMBER, shape=None, domain=None, pinned=False):
        self.shape = shape or DEFAULT_SHAPE
        self.domain = domain or DEFAULT_DOMAIN
        self._wave_number = float(wave_number)
        self.pinned = pinned  # Pooled tables never change wave number
        self._snapshot = None
        self._build_lock = threading.Lock()

    def __repr__(self):
        state = "built" if self.is_built else "pending"
        return (
            f"QuantizedWaveTable(k={self.wave_number}, "
            f"resolution={self.domain.resolution}, {state})"
        )

    @property
    def wave_number(self):
        return self._wave_number

    @property
    def is_built(self):
        return self._snapshot is not None

    @property
    def nbytes(self):
        n = self.domain.resolution
        return n * n * n * np.dtype(np.float32).itemsize

    def _compute(self, k):
        n = self.domain.resolution
        xs, ys, ts = self.domain.axes()
        X, Y = np.meshgrid(xs, ys, indexing="ij")
        d = np.sqrt(X * X + Y * Y)

        started = time.perf_counter()
        samples = np.empty((n, n, n), dtype=np.float32)
        for it, t in enumerate(ts):
            samples[it] = ripple_amplitude(k, d, t, self.shape)
        samples.flags.writeable = False

        log.info(
            "built wave table k=%s resolution=%d (%.1f MB) in %.2fs",
            k,
            n,
            samples.nbytes / 1e6,
            time.perf_counter() - started,
        )
        return samples

    def build(self):
        """Build the table for the current wave number if it is not built yet."""
        snap = self._snapshot
        if snap is not None:
            return snap
        with self._build_lock:
            snap = self._snapshot
            if snap is None:
                snap = _Snapshot(self._wave_number, self._compute(self._wave_number))
                self._snapshot = snap
        return snap

    def rebuild(self, wave_number):
        """Replace the whole table with one sampled at ``wave_number``.

        Readers keep using the previous snapshot until the new one is
        published.
        """
        wave_number = float(wave_number)
        if self.pinned and wave_number != self._wave_number:
            raise ValueError(
                f"table is pinned to k={self._wave_number}, cannot rebuild for k={wave_number}"
            )
        with self._build_lock:
            snap = self._snapshot
            if snap is None or snap.wave_number != wave_number:
                snap = _Snapshot(wave_number, self._compute(wave_number))
                self._snapshot = snap
                self._wave_number = wave_number
        return snap

    def bucket_index(self, x, y, t):
        dom = self.domain
        n = dom.resolution
        return (
            _quantize(x, dom.x_min, dom.dx, n),
            _quantize(y, dom.y_min, dom.dy, n),
            _quantize(t, 0.0, dom.dt, n),
        )

    def bucket_center(self, x, y, t):
        """Midpoint coordinates of the bucket a lookup of ``(x, y, t)`` reads."""
        dom = self.domain
        ix, iy, it = self.bucket_index(x, y, t)
        return (
            dom.x_min + (ix + 0.5) * dom.dx,
            dom.y_min + (iy + 0.5) * dom.dy,
            (it + 0.5) * dom.dt,
        )

    def lookup(self, x, y, t):
        """Read the stored sample for ``(x, y, t)``; out-of-domain values clamp."""
        snap = self._snapshot
        if snap is None:
            snap = self.build()
        ix, iy, it = self.bucket_index(x, y, t)
        return snap.samples[it, ix, iy]

    def get(self, wave_number, x, y, t):
        """Lookup at ``wave_number``, rebuilding first if the table holds another."""
        snap = self._snapshot
        if snap is None or snap.wave_number != wave_number:
            snap = self.rebuild(wave_number)
        ix, iy, it = self.bucket_index(x, y, t)
        return snap.samples[it, ix, iy]


class WaveTablePool:
    """Shares one table per (wave number, shape, domain).

    The pool lock only guards the registry; each table builds under its own
    lock, so building one key never blocks readers of another.
    """

    def __init__(self):
        self._tables = {}
        self._lock = threading.Lock()

    def __len__(self):
        return len(self._tables)

    def __contains__(self, wave_number):
        return any(key[0] == float(wave_number) for key in self._tables)

    @staticmethod
    def _key(wave_number, shape=None, domain=None):
        return (float(wave_number), shape or DEFAULT_SHAPE, domain or DEFAULT_DOMAIN)

    def table(self, wave_number=WAVE_NUMBER, shape=None, domain=None, build=True):
        key = self._key(wave_number, shape, domain)
        with self._lock:
            table = self._tables.get(key)
            if table is None:
                log.debug("wave table pool miss for k=%s", key[0])
                table = QuantizedWaveTable(key[0], key[1], key[2], pinned=True)
                self._tables[key] = table
        if build:
            table.build()
        return table

    def clear(self):
        with self._lock:
            self._tables.clear()
