"""Vectors from sampled points toward the implicit surface."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np
import numpy.typing as npt

from .crossing import SignCategory, classify
from .geometry import Geometry2D
from .sampler import FieldSampler

_Array = npt.NDArray[np.floating]
_Index2D = Tuple[int, int]
_Point2D = Tuple[float, float]
_Point3D = Tuple[float, float, float]

# Vectors with a squared length at or below this are not reported.
MIN_SQUARED_LENGTH = float(np.finfo(np.float32).tiny)


def vector_to_surface(
    geometry: Optional[Geometry2D],
    point: Sequence[float],
    distance: float,
) -> _Array:
    """Vector from *point* toward the surface of *geometry*.

    *distance* is the signed distance already sampled at *point*; a third
    (plane) coordinate on *point* is ignored.  Geometries without a
    closed-form surface direction, and a missing geometry, give the zero
    vector.
    """
    if geometry is None:
        return np.zeros(2)
    p = np.asarray(point, dtype=float)[:2]
    v = geometry.vector_to_surface(p, distance)
    if v is None:
        return np.zeros(2)
    return np.asarray(v, dtype=float)


@dataclass(frozen=True)
class SurfaceVector:
    """Surface vector rooted at grid vertex *index*.

    *origin* is the vertex world position ``(x, y, plane_z)`` and *vector*
    the 2D offset to the surface, both as plain floats.
    """

    index: _Index2D
    origin: _Point3D
    distance: float
    vector: _Point2D

    @property
    def category(self) -> SignCategory:
        return classify(self.distance, 0.0)

    @property
    def tip(self) -> _Point2D:
        return self.origin[0] + self.vector[0], self.origin[1] + self.vector[1]


def _iter_samples(sampler: FieldSampler, samples: Optional[Iterable[_Index2D]]) -> Iterable[_Index2D]:
    grid = sampler.grid
    samples = list(samples) if samples is not None else []
    if not samples:
        for y in range(grid.height + 1):
            for x in range(grid.width + 1):
                yield x, y
        return
    for x, y in samples:
        if grid.contains(x, y):
            yield int(x), int(y)


def surface_vectors(
    sampler: FieldSampler,
    samples: Optional[Iterable[_Index2D]] = None,
) -> List[SurfaceVector]:
    """Surface vectors for the given grid vertices.

    With no *samples* every vertex is used, row by row.  Out-of-range
    vertices are skipped, as are vertices whose vector is zero (on the
    surface, at a degenerate point, or for an unsupported geometry).
    """
    sampler.ensure_current()
    grid = sampler.grid
    out = []
    for x, y in _iter_samples(sampler, samples):
        distance = sampler.get(x, y)
        origin = grid.position_of(x, y)
        v = vector_to_surface(sampler.geometry, origin, distance)
        if float(np.dot(v, v)) <= MIN_SQUARED_LENGTH:
            continue
        out.append(SurfaceVector(
            index=(x, y),
            origin=(float(origin[0]), float(origin[1]), float(origin[2])),
            distance=distance,
            vector=(float(v[0]), float(v[1])),
        ))
    return out
