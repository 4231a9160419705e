import numpy as np
import pytest

from pasture.spatial import wrap, wrap_point, wrapped_range, in_bounds


def test_wrap_in_range_is_identity():
    for value in range(10):
        assert wrap(value, 10) == value
        assert wrap(wrap(value, 10), 10) == value


def test_wrap_edges():
    assert wrap(10, 10) == 0
    assert wrap(-1, 10) == 9
    assert wrap(23, 10) == 3
    assert wrap(-13, 10) == 7


def test_wrap_point_axes_independent():
    assert wrap_point(-1, 5, 20, 10) == (19, 5)
    assert wrap_point(5, -1, 20, 10) == (5, 9)
    assert wrap_point(20, 10, 20, 10) == (0, 0)


def test_wrapped_range_half_open():
    cols = wrapped_range(1, 3, 10)
    assert np.array_equal(cols, np.array([8, 9, 0, 1, 2, 3]))
    assert 4 not in cols  # center + radius excluded


def test_in_bounds():
    assert in_bounds(0, 0, 5, 5)
    assert in_bounds(4, 4, 5, 5)
    assert not in_bounds(5, 0, 5, 5)
    assert not in_bounds(0, -1, 5, 5)


def test_wrap_rejects_non_integer_coordinates():
    with pytest.raises(AssertionError):
        wrap(2.5, 10)
    assert wrap(np.int64(12), 10) == 2
