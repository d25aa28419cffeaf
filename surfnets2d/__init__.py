"""
surfnets2d — 2D Surface Nets Sampling Kernel
============================================

Sampling and zero-crossing kernel for contouring 2D signed distance fields
in the Surface Nets / Marching Squares style.

Implemented features
--------------------
- Vertex grid with world-space mapping: :class:`Grid2D`
- Distance fields: :class:`Geometry2D`, :class:`Circle2D`
- Cached sampling: :class:`FieldSampler`, :func:`sample_levelset_2d`
- Sign classification: :func:`classify`, :func:`classify_array`
- Edge crossings: :func:`has_crossing`, :func:`interpolate`,
  :func:`resolve_edge`, :func:`find_crossings`
- Surface vectors: :func:`vector_to_surface`, :func:`surface_vectors`

Quick start
-----------

::

    from surfnets2d import Grid2D, Circle2D, FieldSampler, find_crossings

    grid    = Grid2D(width=4, height=4, cell_size=1.0)
    circle  = Circle2D(radius=1.5, center=(2.0, 2.0))
    sampler = FieldSampler(grid, circle)
    sampler.recompute()

    for c in find_crossings(sampler, epsilon=1e-4):
        print(c.start, c.end, c.t, c.position)
"""

from .geometry import Geometry2D, Circle2D
from .grid import GridConfig, Grid2D, sample_levelset_2d
from .sampler import FieldSampler
from .crossing import (
    DEFAULT_EPSILON,
    SignCategory,
    classify,
    classify_array,
    has_crossing,
    interpolate,
    EdgeCrossing,
    resolve_edge,
    find_crossings,
)
from .vectors import SurfaceVector, vector_to_surface, surface_vectors

__version__ = "0.1.0"

__all__ = [
    # Geometry
    "Geometry2D",
    "Circle2D",

    # Grid
    "GridConfig",
    "Grid2D",
    "sample_levelset_2d",

    # Sampling
    "FieldSampler",

    # Classification and crossings
    "DEFAULT_EPSILON",
    "SignCategory",
    "classify",
    "classify_array",
    "has_crossing",
    "interpolate",
    "EdgeCrossing",
    "resolve_edge",
    "find_crossings",

    # Surface vectors
    "SurfaceVector",
    "vector_to_surface",
    "surface_vectors",
]
