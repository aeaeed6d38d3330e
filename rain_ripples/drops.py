"""
Rain drops: spawning on a cadence and expiring after a time-to-live.
"""

import logging
from dataclasses import dataclass

import numpy as np

from .config import DROP_CADENCE, DROP_TTL, WAVE_NUMBER

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Drop:
    x: int
    y: int
    spawned_at: float
    wave_number: float = WAVE_NUMBER

    def age(self, now):
        return now - self.spawned_at


class DropSet:
    """Owns the active drops of one ripple field.

    ``now`` is any monotonic clock in seconds, supplied by the caller.
    Each instance draws positions from its own generator.
    """

    def __init__(
        self,
        width,
        height,
        time_to_live=DROP_TTL,
        spawn_cadence=DROP_CADENCE,
        wave_number=WAVE_NUMBER,
        rng=None,
        seed=None,
    ):
        if time_to_live < 0:
            raise ValueError(f"time_to_live must not be negative, got {time_to_live}")
        if spawn_cadence < 0:
            raise ValueError(f"spawn_cadence must not be negative, got {spawn_cadence}")
        self.resize(width, height)
        self.time_to_live = time_to_live
        self.spawn_cadence = spawn_cadence
        self.wave_number = wave_number
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.last_spawn_at = None  # None until the first spawn
        self._drops = []

    def __len__(self):
        return len(self._drops)

    def __iter__(self):
        return iter(tuple(self._drops))

    def resize(self, width, height):
        """Change the spawn area; existing drops keep their origin."""
        if width <= 0 or height <= 0:
            raise ValueError(f"grid must be at least 1x1, got {width}x{height}")
        self.width = int(width)
        self.height = int(height)

    def _spawn_due(self, now):
        return self.last_spawn_at is None or now - self.last_spawn_at > self.spawn_cadence

    def _spawn(self, now):
        drop = Drop(
            x=int(self.rng.integers(0, self.width)),
            y=int(self.rng.integers(0, self.height)),
            spawned_at=now,
            wave_number=self.wave_number,
        )
        self._drops.append(drop)
        self.last_spawn_at = now
        log.debug("spawned drop at (%d, %d) t=%.3f", drop.x, drop.y, now)
        return drop

    def expire(self, now):
        """Drop every ripple whose age has reached the time-to-live."""
        alive = [d for d in self._drops if d.age(now) < self.time_to_live]
        expired = len(self._drops) - len(alive)
        if expired:
            log.debug("expired %d drop(s) at t=%.3f", expired, now)
        self._drops = alive
        return expired

    def advance(self, now):
        """Spawn at most one drop if the cadence elapsed, then expire old ones.

        Returns the new drop, or None.
        """
        spawned = self._spawn(now) if self._spawn_due(now) else None
        self.expire(now)
        return spawned

    def active_drops(self):
        """Active drops, oldest first."""
        return tuple(self._drops)

    def clear(self):
        self._drops = []
        self.last_spawn_at = None
