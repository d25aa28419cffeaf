"""Tests for FieldSampler caching, staleness and total read access."""

import numpy as np
import numpy.testing as npt
import pytest

from surfnets2d import Circle2D, FieldSampler, Geometry2D, Grid2D, sample_levelset_2d


def _sampler(width=4, height=4, radius=1.5, center=(2.0, 2.0)):
    grid = Grid2D(width=width, height=height, cell_size=1.0)
    return FieldSampler(grid, Circle2D(radius, center=center))


class TestEmptySampler:
    def test_get_before_recompute_is_zero(self):
        s = _sampler()
        assert s.get(0, 0) == 0.0
        assert s.shape is None
        assert s.values is None
        assert not s.is_populated
        assert s.is_stale

    def test_no_geometry_samples_zero(self):
        s = FieldSampler(Grid2D(width=2, height=3))
        s.recompute()
        assert s.shape == (3, 4)
        npt.assert_array_equal(s.values, np.zeros((3, 4)))
        assert not s.is_stale


class TestRecompute:
    def test_shape_matches_grid(self):
        s = _sampler(width=5, height=3)
        s.recompute()
        assert s.shape == (6, 4)
        assert s.shape == s.grid.vertex_shape

    def test_known_values(self):
        s = _sampler()
        s.recompute()
        assert s.get(2, 2) == pytest.approx(-1.5)
        assert s.get(0, 0) == pytest.approx(1.328, abs=1e-3)
        assert s.get(1, 2) == pytest.approx(-0.5)

    def test_matches_one_shot_sampling(self):
        s = _sampler(width=6, height=5)
        s.recompute()
        npt.assert_allclose(s.values, sample_levelset_2d(s.geometry, s.grid))

    def test_idempotent(self):
        s = _sampler()
        s.recompute()
        first = np.array(s.values)
        s.recompute()
        npt.assert_array_equal(s.values, first)

    def test_overwrites_in_place(self):
        s = _sampler()
        s.recompute()
        before = s.values
        s.geometry.radius = 1.0
        s.recompute()
        assert np.shares_memory(before, s.values)
        assert s.get(2, 2) == pytest.approx(-1.0)

    def test_reallocates_on_resize(self):
        s = _sampler()
        s.recompute()
        before = s.values
        s.grid.reconfigure(width=6)
        s.recompute()
        assert s.shape == (7, 5)
        assert not np.shares_memory(before, s.values)

    def test_values_is_read_only(self):
        s = _sampler()
        s.recompute()
        with pytest.raises(ValueError):
            s.values[0, 0] = 1.0


class TestGet:
    def test_out_of_bounds_is_zero(self):
        s = _sampler()
        s.recompute()
        assert s.get(5, 0) == 0.0
        assert s.get(0, 5) == 0.0

    def test_negative_index_does_not_wrap(self):
        s = _sampler()
        s.recompute()
        assert s.get(-1, 0) == 0.0
        assert s.get(0, -1) == 0.0

    def test_returns_python_float(self):
        s = _sampler()
        s.recompute()
        assert type(s.get(1, 1)) is float


class TestStaleness:
    def test_grid_growth_without_recompute(self):
        grid = Grid2D(width=8, height=8)
        s = FieldSampler(grid, Circle2D(3.0, center=(4.0, 4.0)))
        s.recompute()
        old = s.get(8, 0)

        grid.reconfigure(width=10)
        assert s.is_stale
        assert s.shape == (9, 9)
        assert s.get(8, 0) == old
        for x in (9, 10):
            for y in range(grid.height + 1):
                assert s.get(x, y) == 0.0

    def test_origin_change_is_stale_with_same_shape(self):
        s = _sampler()
        s.recompute()
        s.grid.reconfigure(origin=(1.0, 0.0))
        assert s.shape == s.grid.vertex_shape
        assert s.is_stale

    def test_shape_parameter_change_is_stale(self):
        s = _sampler()
        s.recompute()
        s.geometry.radius = 2.0
        assert s.is_stale
        # get never resamples on its own
        assert s.get(2, 2) == pytest.approx(-1.5)

    def test_ensure_current(self):
        s = _sampler()
        assert s.ensure_current() is True
        assert s.ensure_current() is False
        s.geometry.center = (1.0, 1.0)
        assert s.ensure_current() is True
        assert s.get(1, 1) == pytest.approx(-1.5)

    def test_swapping_geometry_is_stale(self):
        s = _sampler()
        s.recompute()
        s.geometry = Geometry2D(lambda p: p[..., 0] - 1.0)
        assert s.is_stale
        s.ensure_current()
        assert s.get(3, 0) == pytest.approx(2.0)
