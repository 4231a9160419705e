"""
Tests for the grass resource field.

Verifies:
- init/regrow against the cap
- 3x3 trample plus center rewrite when grazing
- zero floor on every write
- read-only accessors for renderers
"""

import numpy as np
import pytest

from pasture.data_types import GridConfig
from pasture.terrain import ResourceField


def make_field(**overrides) -> ResourceField:
    params = dict(width=10, height=10, grass_max=255.0, grass_initial=100.0,
                  regrowth_rate=1.0, trample=15.0, center_multiplier=8.0)
    params.update(overrides)
    return ResourceField(GridConfig(**params))


def test_init_sets_every_cell():
    field = make_field(grass_initial=42.0)
    assert np.all(field.values() == 42.0)


def test_regrow_below_cap():
    field = make_field(grass_initial=100.0, regrowth_rate=10.0)
    field.regrow()
    assert np.all(field.values() == 110.0)


def test_regrow_clamps_at_cap():
    field = make_field(grass_initial=250.0, regrowth_rate=10.0)
    field.regrow()
    assert np.all(field.values() == min(250.0 + 10.0, 255.0))


def test_sample_wraps():
    field = make_field()
    field.deplete(9, 9, 30.0)
    assert field.sample(-1, -1) == 70.0
    assert field.sample(19, 9) == 70.0


def test_deplete_floors_at_zero():
    field = make_field(grass_initial=10.0)
    field.deplete(3, 3, 50.0)
    assert field.sample(3, 3) == 0.0


def test_forage_trample_and_center_rewrite():
    field = make_field(grass_initial=100.0)

    eaten = field.forage(5, 5, 10.0)

    assert eaten == 10.0
    grass = field.values()
    # Center: second write is g_before - 8 * eaten
    assert grass[5, 5] == 100.0 - 8 * 10.0
    # Ring of eight: trampled once
    for dy in (-1, 0, 1):
        for dx in (-1, 0, 1):
            if dx == 0 and dy == 0:
                continue
            assert grass[5 + dy, 5 + dx] == 85.0
    # Untouched cells
    assert grass[0, 0] == 100.0
    assert np.count_nonzero(grass != 100.0) == 9


def test_forage_eats_at_most_what_is_there():
    field = make_field(grass_initial=100.0)
    field.deplete(2, 2, 96.0)  # 4 left

    eaten = field.forage(2, 2, 10.0)

    assert eaten == 4.0
    assert field.sample(2, 2) == 0.0  # 4 - 32 floored


def test_forage_bare_cell_is_noop():
    field = make_field(grass_initial=0.0)
    eaten = field.forage(4, 4, 10.0)
    assert eaten == 0.0
    assert np.all(field.values() == 0.0)


def test_forage_wraps_at_corner():
    field = make_field(grass_initial=100.0)
    field.forage(0, 0, 10.0)
    grass = field.values()
    for x, y in [(9, 9), (0, 9), (1, 9), (9, 0), (1, 0), (9, 1), (0, 1), (1, 1)]:
        assert grass[y, x] == 85.0, f"cell ({x}, {y}) not trampled"
    assert grass[0, 0] == 20.0


def test_values_is_read_only():
    field = make_field()
    view = field.values()
    with pytest.raises(ValueError):
        view[0, 0] = 1.0
    # Field still writable internally
    field.deplete(0, 0, 1.0)
    assert field.sample(0, 0) == 99.0


def test_colors_green_channel():
    field = make_field(grass_initial=255.0)
    field.deplete(1, 1, 255.0)
    rgba = field.colors()
    assert rgba.shape == (10, 10, 4)
    assert rgba.dtype == np.uint8
    assert rgba[0, 0, 1] == 255
    assert rgba[1, 1, 1] == 0
    assert np.all(rgba[..., 0] == 0)
    assert np.all(rgba[..., 3] == 255)
