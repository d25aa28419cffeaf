"""Tests for surfnets2d geometry classes and math helpers.

Verifies:
- Correct sign (negative inside, positive outside, zero on surface)
- Exact or near-exact distance at analytically known points
- Revision tracking on parameter changes
"""

import numpy as np
import numpy.testing as npt
import pytest

from surfnets2d import Circle2D, Geometry2D
from surfnets2d import sdf_lib as sdf
from surfnets2d.geometry import MIN_RADIUS


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _p(*xy) -> np.ndarray:
    """Single 2-D point as shape ``(1, 2)``."""
    return np.array([list(xy)], dtype=float)


def _grid(n: int = 16) -> np.ndarray:
    lin = np.linspace(-1.0, 1.0, n)
    X, Y = np.meshgrid(lin, lin, indexing="ij")
    return np.stack([X, Y], axis=-1)


# ===========================================================================
# Math helpers
# ===========================================================================

class TestSdfLib:
    def test_vec2_stacks_last_axis(self):
        v = sdf.vec2(np.array([1.0, 2.0]), np.array([3.0, 4.0]))
        npt.assert_array_equal(v, [[1.0, 3.0], [2.0, 4.0]])

    def test_vec2_broadcasts(self):
        v = sdf.vec2(np.zeros(3), 1.0)
        assert v.shape == (3, 2)
        npt.assert_array_equal(v[:, 1], [1.0, 1.0, 1.0])

    def test_vec2_exported(self):
        assert "vec2" in sdf.__all__

    def test_length(self):
        npt.assert_allclose(sdf.length(_p(3, 4)), [5.0])

    def test_normalize_unit(self):
        npt.assert_allclose(sdf.normalize(np.array([0.0, -2.0])), [0.0, -1.0])

    def test_normalize_zero_stays_zero(self):
        out = sdf.normalize(np.zeros(2))
        npt.assert_array_equal(out, [0.0, 0.0])
        assert np.isfinite(out).all()

    def test_lerp(self):
        npt.assert_allclose(sdf.lerp([0.0, 0.0], [2.0, 4.0], 0.25), [0.5, 1.0])

    def test_sd_circle(self):
        npt.assert_allclose(sdf.sdCircle(_p(1, 0), np.array([1.0, 1.0]), 0.5), [0.5])


# ===========================================================================
# Base class
# ===========================================================================

class TestGeometry2D:
    def test_sdf_callable(self):
        g = Geometry2D(lambda p: np.zeros(p.shape[:-1]))
        assert g.sdf(_grid()).shape == (16, 16)

    def test_call_is_sdf(self):
        g = Geometry2D(lambda p: p[..., 0] - 0.5)
        npt.assert_array_equal(g(_grid()), g.sdf(_grid()))

    def test_evaluate_single_point(self):
        g = Geometry2D(lambda p: p[..., 0] - 0.5)
        assert g.evaluate((2.0, 7.0)) == pytest.approx(1.5)

    def test_evaluate_rejects_wrong_shape(self):
        g = Geometry2D(lambda p: p[..., 0])
        with pytest.raises(ValueError):
            g.evaluate((1.0, 2.0, 3.0))

    def test_vector_to_surface_unsupported(self):
        g = Geometry2D(lambda p: p[..., 0])
        assert g.vector_to_surface((1.0, 0.0), 1.0) is None

    def test_revision_starts_at_zero(self):
        assert Geometry2D(lambda p: p[..., 0]).revision == 0


# ===========================================================================
# Circle
# ===========================================================================

class TestCircle2D:
    C = (1.5, -0.5)
    R = 0.75

    def test_centre_is_minus_radius(self):
        c = Circle2D(self.R, center=self.C)
        assert c.evaluate(self.C) == pytest.approx(-self.R)

    def test_on_surface(self):
        c = Circle2D(self.R, center=self.C)
        assert c.evaluate((self.C[0] + self.R, self.C[1])) == pytest.approx(0.0, abs=1e-12)

    def test_outside(self):
        c = Circle2D(self.R, center=self.C)
        assert c.evaluate((self.C[0] + 2 * self.R, self.C[1])) == pytest.approx(self.R)

    def test_default_centre_is_origin(self):
        npt.assert_allclose(Circle2D(0.3).sdf(_p(0, 0)), [-0.3], atol=1e-12)

    def test_batched(self):
        d = Circle2D(0.5).sdf(_grid(8))
        assert d.shape == (8, 8)
        assert (d < 0).any() and (d > 0).any()

    def test_radius_clamped(self):
        assert Circle2D(0.0).radius == MIN_RADIUS
        c = Circle2D(1.0)
        c.radius = -2.0
        assert c.radius == MIN_RADIUS

    def test_setters_bump_revision(self):
        c = Circle2D(1.0)
        c.radius = 2.0
        c.center = (1.0, 1.0)
        assert c.revision == 2
        assert c.evaluate((1.0, 1.0)) == pytest.approx(-2.0)

    def test_center_is_a_copy(self):
        c = Circle2D(1.0, center=(0.0, 0.0))
        c.center[0] = 5.0
        npt.assert_array_equal(c.center, [0.0, 0.0])
        assert c.revision == 0

    def test_vector_outside_points_to_centre(self):
        c = Circle2D(1.0)
        npt.assert_allclose(c.vector_to_surface((3.0, 0.0), 2.0), [-2.0, 0.0])

    def test_vector_inside_points_away_from_centre(self):
        c = Circle2D(1.0)
        npt.assert_allclose(c.vector_to_surface((0.0, 0.5), -0.5), [0.0, 0.5])

    def test_vector_lands_on_surface(self):
        c = Circle2D(1.5, center=(2.0, 2.0))
        p = np.array([0.3, 3.1])
        tip = p + c.vector_to_surface(p, c.evaluate(p))
        assert c.evaluate(tip) == pytest.approx(0.0, abs=1e-12)

    def test_vector_at_centre_is_zero(self):
        c = Circle2D(1.0, center=(2.0, 2.0))
        v = c.vector_to_surface((2.0, 2.0), -1.0)
        npt.assert_array_equal(np.abs(v), [0.0, 0.0])
