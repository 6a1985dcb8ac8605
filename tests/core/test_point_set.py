"""Tests for PointSet sorting, hit-testing and y edits."""

import numpy as np
import pytest

from curvescope.core.errors import EmptyStateError, IndexOutOfRangeError
from curvescope.core.point_set import PointSet
from curvescope.core.window import Window


def test_load_sorts_by_x():
    ps = PointSet([(3.0, 30.0), (1.0, 10.0), (2.0, 20.0)])
    np.testing.assert_array_equal(ps.x, [1.0, 2.0, 3.0])
    np.testing.assert_array_equal(ps.y, [10.0, 20.0, 30.0])


def test_sort_is_stable_for_equal_x():
    ps = PointSet([(1.0, 5.0), (0.0, 0.0), (1.0, 6.0), (1.0, 7.0)])
    np.testing.assert_array_equal(ps.y, [0.0, 5.0, 6.0, 7.0])


def test_load_rejects_wrong_shape():
    with pytest.raises(ValueError):
        PointSet().load([[1.0, 2.0, 3.0]])


@pytest.mark.parametrize("bad", [np.inf, -np.inf, np.nan])
def test_load_rejects_non_finite(bad):
    ps = PointSet([(0.0, 1.0)])
    revision = ps.revision
    with pytest.raises(ValueError, match="finite"):
        ps.load([(0.0, 0.0), (1.0, bad)])
    assert ps.revision == revision
    assert ps.sample(0) == (0.0, 1.0)


def test_empty_load():
    ps = PointSet([])
    assert len(ps) == 0
    assert ps.is_empty()
    with pytest.raises(EmptyStateError):
        ps.bounds()


def test_bounds():
    ps = PointSet([(0.0, 1.0), (5.0, -2.0), (2.0, 4.0)])
    assert ps.bounds() == Window(0.0, 5.0, -2.0, 4.0)


def test_arrays_are_read_only():
    ps = PointSet([(0.0, 1.0)])
    with pytest.raises(ValueError):
        ps.y[0] = 3.0


class TestNearest:
    @pytest.fixture
    def ps(self):
        return PointSet([(1.0, 0.0), (5.0, 3.0), (9.0, -1.0)])

    def test_within_half_tolerance_found(self, ps):
        t = 0.1
        assert ps.nearest(5.0 + 0.5 * t, 3.0, t) == 1

    def test_beyond_tolerance_not_found(self, ps):
        t = 0.1
        assert ps.nearest(5.0 + 2 * t, 3.0, t) is None

    def test_y_distance_also_checked(self, ps):
        assert ps.nearest(5.0, 3.5, 0.1) is None

    def test_returns_first_match_not_closest(self):
        ps = PointSet([(0.0, 0.0), (0.15, 0.0)])
        # Query is closer to the second sample but the first is also in range
        assert ps.nearest(0.1, 0.0, 0.2) == 0

    def test_empty_set(self):
        assert PointSet().nearest(0.0, 0.0, 1.0) is None


class TestSetY:
    def test_mutates_only_y(self):
        ps = PointSet([(0.0, 0.0), (1.0, 1.0), (2.0, 2.0)])
        x_before = ps.x.copy()
        ps.set_y(1, -7.5)
        np.testing.assert_array_equal(ps.x, x_before)
        assert ps.sample(1) == (1.0, -7.5)

    def test_bumps_revision(self):
        ps = PointSet([(0.0, 0.0)])
        rev = ps.revision
        ps.set_y(0, 1.0)
        assert ps.revision == rev + 1

    def test_out_of_range(self):
        ps = PointSet([(0.0, 0.0)])
        with pytest.raises(IndexOutOfRangeError):
            ps.set_y(3, 1.0)
        with pytest.raises(IndexError):
            ps.set_y(-1, 1.0)

    def test_non_finite_y_rejected(self):
        ps = PointSet([(0.0, 0.0)])
        with pytest.raises(ValueError):
            ps.set_y(0, np.nan)
        assert ps.sample(0) == (0.0, 0.0)


def test_visible_range():
    ps = PointSet([(float(i), 0.0) for i in range(10)])
    assert ps.visible_range(2.5, 6.0) == (3, 7)
    assert ps.visible_range(20.0, 30.0) == (10, 10)
