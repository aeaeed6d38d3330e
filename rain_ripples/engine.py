"""
Rain ripple engine: drops -> amplitude field -> colour grid, once per frame.
"""

import logging

from .colorize import colorize
from .config import DESATURATION, DROP_CADENCE, DROP_TTL, TINT, WAVE_NUMBER
from .drops import DropSet
from .field import FieldAccumulator
from .wave_table import QuantizedWaveTable

log = logging.getLogger(__name__)


class RippleEngine:
    """Animated ripple field for a ``width`` x ``height`` grid.

    Call :meth:`tick` with the current time, then :meth:`render` for the
    colour grid of that instant. The wave table is built on construction
    unless ``warm=False``; pass ``table`` (e.g. from a WaveTablePool) to
    share one between engines.
    """

    def __init__(
        self,
        width,
        height,
        drop_ttl=DROP_TTL,
        drop_cadence=DROP_CADENCE,
        wave_number=WAVE_NUMBER,
        desaturation=DESATURATION,
        tint=TINT,
        table=None,
        shape=None,
        domain=None,
        exact=False,
        warm=True,
        seed=None,
        rng=None,
    ):
        self.drops = DropSet(
            width,
            height,
            time_to_live=drop_ttl,
            spawn_cadence=drop_cadence,
            wave_number=wave_number,
            rng=rng,
            seed=seed,
        )
        if table is not None and table.wave_number != float(wave_number):
            raise ValueError(
                f"table holds k={table.wave_number}, engine wants k={wave_number}"
            )
        if table is None and not exact:
            table = QuantizedWaveTable(wave_number, shape=shape, domain=domain)
        self.table = table
        self.accumulator = FieldAccumulator(table=table, exact=exact, shape=shape)
        self.desaturation = desaturation
        self.tint = tint
        self.now = None

        if warm and table is not None:
            table.build()

    @property
    def width(self):
        return self.drops.width

    @property
    def height(self):
        return self.drops.height

    def resize(self, width, height):
        log.debug("resize %dx%d -> %dx%d", self.width, self.height, width, height)
        self.drops.resize(width, height)

    def tick(self, now):
        """Advance the drop lifecycle to ``now`` (seconds, non-decreasing)."""
        self.now = now
        return self.drops.advance(now)

    def active_drops(self):
        return self.drops.active_drops()

    def field(self):
        """Scalar amplitude grid ``(height, width)`` at the last tick."""
        now = self.now if self.now is not None else 0.0
        return self.accumulator.compute(self.drops, self.width, self.height, now)

    def render(self):
        """Colour grid ``(height, width, 3)`` of ``uint8`` at the last tick."""
        return colorize(self.field(), self.desaturation, self.tint)
