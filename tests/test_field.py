import math

import numpy as np
import pytest

from rain_ripples.drops import Drop, DropSet
from rain_ripples.field import FieldAccumulator, drop_coordinates
from rain_ripples.wave_table import WaveShape, wave_amplitude


def test_no_drops_gives_flat_field(small_table):
    field = FieldAccumulator(small_table).compute([], 12, 5, now=3.0)
    assert field.shape == (5, 12)
    assert field.dtype == np.float32
    assert not field.any()


def test_coordinates_sweep_one_full_turn():
    width, height = 16, 8
    drop = Drop(4, 6, 0.0)
    x, y = drop_coordinates(drop, width, height)

    assert x.shape == (1, width)
    assert y.shape == (height, 1)
    assert x[0, 0] == pytest.approx(-math.pi + (-0.5 + 4 / width) * 2 * math.pi)
    assert y[0, 0] == pytest.approx(-math.pi + (-0.5 + 6 / height) * 2 * math.pi)
    np.testing.assert_allclose(np.diff(x[0]), 2 * math.pi / width)
    np.testing.assert_allclose(np.diff(y[:, 0]), 2 * math.pi / height)


def test_coordinates_independent_of_grid_size():
    small = drop_coordinates(Drop(5, 5, 0.0), 10, 10)[0]
    large = drop_coordinates(Drop(50, 50, 0.0), 100, 100)[0]
    assert small[0, 0] == pytest.approx(large[0, 0])
    for x in (small, large):
        step = x[0, 1] - x[0, 0]
        assert x[0, -1] - x[0, 0] + step == pytest.approx(2 * math.pi)


def test_fresh_drop_is_silent_in_exact_mode():
    acc = FieldAccumulator(exact=True)
    field = acc.compute([Drop(3, 2, 5.0)], 10, 6, now=5.0)
    assert not field.any()


def test_table_contribution_matches_analytic_bucket_centres(small_table):
    acc = FieldAccumulator(small_table)
    drop = Drop(7, 3, 0.0, wave_number=15.0)
    width, height, now = 24, 12, 1.3

    got = acc.contribution(drop, width, height, now)

    x, y = drop_coordinates(drop, width, height)
    X, Y = np.broadcast_arrays(x, y)
    cx, cy, ct = small_table.bucket_center(X, Y, now)
    expected = wave_amplitude(15.0, cx, cy, ct)
    assert got.shape == (height, width)
    np.testing.assert_allclose(got, expected, atol=1e-6)


def test_exact_contribution_is_the_analytic_function():
    shape = WaveShape(gain=0.7)
    acc = FieldAccumulator(exact=True, shape=shape)
    drop = Drop(2, 9, 1.0, wave_number=11.0)
    got = acc.contribution(drop, 20, 10, now=2.5)
    x, y = drop_coordinates(drop, 20, 10)
    np.testing.assert_allclose(got, wave_amplitude(11.0, x, y, 1.5, shape))


def test_drops_superpose_linearly(small_table):
    acc = FieldAccumulator(small_table)
    a = Drop(1, 1, 0.0)
    b = Drop(8, 4, 0.4)
    now = 1.6
    total = acc.compute([a, b], 16, 8, now)
    parts = acc.contribution(a, 16, 8, now) + acc.contribution(b, 16, 8, now)
    np.testing.assert_allclose(total, parts, atol=1e-6)
    assert total.any()


def test_accepts_drop_set(small_table):
    drops = DropSet(16, 8, time_to_live=5.0, spawn_cadence=0.5, seed=3)
    for now in (0.0, 0.6, 1.2):
        drops.advance(now)
    acc = FieldAccumulator(small_table)
    from_set = acc.compute(drops, 16, 8, 2.0)
    from_list = acc.compute(list(drops.active_drops()), 16, 8, 2.0)
    np.testing.assert_array_equal(from_set, from_list)


def test_default_accumulator_owns_a_table():
    acc = FieldAccumulator()
    assert acc.table is not None
    assert not acc.table.is_built
    assert not acc.exact
