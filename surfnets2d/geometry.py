"""2D signed-distance-function geometries.

A geometry maps ``(..., 2)`` point arrays to ``(...)`` signed distances,
negative inside and positive outside.  The sampling and crossing code only
relies on :meth:`Geometry2D.sdf`; shapes with a closed-form gradient also
implement :meth:`Geometry2D.vector_to_surface`.
"""

from __future__ import annotations

from typing import Callable, Optional, Sequence

import numpy as np
import numpy.typing as npt

from . import sdf_lib as sdf

# ---------------------------------------------------------------------------
# Type aliases
# ---------------------------------------------------------------------------
_Array = npt.NDArray[np.floating]
_SDFFunc = Callable[[_Array], _Array]

MIN_RADIUS = 1e-4


# ===========================================================================
# Base class
# ===========================================================================

class Geometry2D:
    """Base class for 2D signed-distance-function geometries.

    A ``Geometry2D`` wraps a callable ``func(p) -> distances`` where *p* is
    a ``(..., 2)`` array of 2D points and the return value is a ``(...)``
    array of signed distances.  The callable is treated as opaque, so a
    plain ``Geometry2D`` cannot produce surface vectors.

    Every geometry carries a :attr:`revision` counter.  Subclasses bump it
    through :meth:`_touch` whenever one of their parameters changes so that
    samplers can tell their cached values are out of date.
    """

    def __init__(self, func: _SDFFunc) -> None:
        self._func = func
        self._revision = 0

    @property
    def revision(self) -> int:
        """Number of parameter changes since construction."""
        return self._revision

    def _touch(self) -> None:
        self._revision += 1

    def sdf(self, p: _Array) -> _Array:
        """Evaluate signed distance at *p* (shape ``(..., 2)``)."""
        return self._func(p)

    def __call__(self, p: _Array) -> _Array:
        return self.sdf(p)

    def evaluate(self, point: Sequence[float]) -> float:
        """Signed distance at a single 2D *point*."""
        p = np.asarray(point, dtype=float)
        if p.shape != (2,):
            raise ValueError(f"expected a single 2D point, got shape {p.shape}")
        return float(self.sdf(p[None, :])[0])

    def vector_to_surface(self, point: Sequence[float], distance: float) -> Optional[_Array]:
        """Vector from *point* toward the surface, or ``None`` if unsupported.

        *distance* is the signed distance previously computed at *point*.
        """
        return None


# ===========================================================================
# Primitive shapes
# ===========================================================================

class Circle2D(Geometry2D):
    """Circle with *center* ``(cx, cy)`` and *radius*.

    The radius is clamped to :data:`MIN_RADIUS`.  Changing :attr:`center` or
    :attr:`radius` bumps :attr:`revision`.
    """

    def __init__(self, radius: float, center: Sequence[float] = (0.0, 0.0)) -> None:
        self._center = np.array(center, dtype=float)
        self._radius = max(MIN_RADIUS, float(radius))
        super().__init__(lambda p: sdf.sdCircle(p, self._center, self._radius))

    @property
    def center(self) -> _Array:
        return self._center.copy()

    @center.setter
    def center(self, value: Sequence[float]) -> None:
        self._center = np.array(value, dtype=float)
        self._touch()

    @property
    def radius(self) -> float:
        return self._radius

    @radius.setter
    def radius(self, value: float) -> None:
        self._radius = max(MIN_RADIUS, float(value))
        self._touch()

    def vector_to_surface(self, point: Sequence[float], distance: float) -> _Array:
        """Vector from *point* to the nearest point on the circle.

        The direction is radial and the magnitude is ``abs(distance)``:
        outside points (positive distance) get a vector toward the centre,
        inside points one away from it.  At the exact centre the direction
        is undefined and the zero vector is returned.
        """
        p = np.asarray(point, dtype=float)[:2]
        return sdf.normalize(self._center - p) * float(distance)

    def __repr__(self) -> str:
        cx, cy = self._center
        return f"Circle2D(radius={self._radius!r}, center=({cx!r}, {cy!r}))"
