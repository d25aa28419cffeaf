"""Sign classification and zero-crossing interpolation along grid edges.

Sample values are bucketed with a symmetric tolerance band: anything in
``[-epsilon, +epsilon]`` counts as :attr:`SignCategory.ZERO`.  An edge
crosses the surface when its two endpoints fall in different categories,
except that two ``ZERO`` endpoints never count as a crossing.  This
under-reports crossings where the field is flat at the epsilon scale; that
bias is kept on purpose.

The crossing point is the linear estimate ``t = d1 / (d1 - d2)`` along the
edge from the first to the second endpoint.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import IntEnum
from typing import List, Optional, Tuple

import numpy as np
import numpy.typing as npt

from . import sdf_lib as sdf
from .sampler import FieldSampler

logger = logging.getLogger(__name__)

_Array = npt.NDArray[np.floating]
_Index2D = Tuple[int, int]
_Point3D = Tuple[float, float, float]

DEFAULT_EPSILON = 1e-4

# Relative and absolute tolerance for treating two endpoint values as equal.
INTERP_REL_TOL = 1e-6
INTERP_ABS_TOL = 1e-12


class SignCategory(IntEnum):
    NEGATIVE = -1
    ZERO = 0
    POSITIVE = 1


# ===========================================================================
# Sign classification
# ===========================================================================

def classify(value: float, epsilon: float = DEFAULT_EPSILON) -> SignCategory:
    """Bucket *value* into inside, outside or boundary.

    ``value > epsilon`` is POSITIVE, ``value < -epsilon`` is NEGATIVE and
    the closed band in between is ZERO.  A negative *epsilon* is treated
    as 0.
    """
    epsilon = max(0.0, epsilon)
    if value > epsilon:
        return SignCategory.POSITIVE
    if value < -epsilon:
        return SignCategory.NEGATIVE
    return SignCategory.ZERO


def classify_array(values: _Array, epsilon: float = DEFAULT_EPSILON) -> npt.NDArray[np.int8]:
    """Element-wise :func:`classify`, returned as ``int8`` category values."""
    epsilon = max(0.0, epsilon)
    v = np.asarray(values, dtype=float)
    out = np.zeros(v.shape, dtype=np.int8)
    out[v > epsilon] = SignCategory.POSITIVE
    out[v < -epsilon] = SignCategory.NEGATIVE
    return out


# ===========================================================================
# Edge crossings
# ===========================================================================

def has_crossing(d1: float, d2: float, epsilon: float = DEFAULT_EPSILON) -> bool:
    """True if the endpoint values *d1* and *d2* lie on different sides.

    Two values inside the epsilon band are never a crossing, even when
    their algebraic signs differ.
    """
    a = classify(d1, epsilon)
    b = classify(d2, epsilon)
    if a == SignCategory.ZERO and b == SignCategory.ZERO:
        return False
    return a != b


def interpolate(d1: float, d2: float) -> Optional[float]:
    """Edge parameter in ``[0, 1]`` where the linear estimate reaches zero.

    Returns ``None`` if *d1* and *d2* are approximately equal, in which case
    the direction of the zero is undefined.  The result is clamped, so a
    value does not by itself mean the edge crosses; check
    :func:`has_crossing` first.
    """
    d1 = float(d1)
    d2 = float(d2)
    if abs(d1 - d2) <= max(INTERP_REL_TOL * max(abs(d1), abs(d2)), INTERP_ABS_TOL):
        return None
    t = d1 / (d1 - d2)
    return float(sdf.clamp(t, 0.0, 1.0))


@dataclass(frozen=True)
class EdgeCrossing:
    """A located zero-crossing on the edge from *start* to *end*.

    *position* is the world point ``(x, y, plane_z)`` as plain floats, so
    crossings compare by value and can be hashed.
    """

    start: _Index2D
    end: _Index2D
    d1: float
    d2: float
    t: float
    position: _Point3D

    @property
    def is_horizontal(self) -> bool:
        return self.start[1] == self.end[1]


def _is_adjacent(start: _Index2D, end: _Index2D) -> bool:
    dx = abs(end[0] - start[0])
    dy = abs(end[1] - start[1])
    return dx + dy == 1


def resolve_edge(
    sampler: FieldSampler,
    start: _Index2D,
    end: _Index2D,
    epsilon: float = DEFAULT_EPSILON,
) -> Optional[EdgeCrossing]:
    """Locate the zero-crossing on a single grid edge.

    Parameters
    ----------
    sampler:
        Sampler for the field; it is brought up to date first if stale.
    start, end:
        Vertex coordinates of two grid-adjacent vertices.
    epsilon:
        Half-width of the ZERO band used by :func:`has_crossing`.

    Returns
    -------
    EdgeCrossing or None
        ``None`` if either endpoint lies outside the grid, the edge does not
        cross, or the endpoint values are too close to interpolate.

    Raises
    ------
    ValueError
        If *start* and *end* are not one axis-aligned grid step apart.
    """
    start = (int(start[0]), int(start[1]))
    end = (int(end[0]), int(end[1]))
    grid = sampler.grid
    if not grid.contains(*start) or not grid.contains(*end):
        return None
    if not _is_adjacent(start, end):
        raise ValueError(f"vertices {start} and {end} are not grid-adjacent")

    sampler.ensure_current()
    d1 = sampler.get(*start)
    d2 = sampler.get(*end)
    if not has_crossing(d1, d2, epsilon):
        return None
    t = interpolate(d1, d2)
    if t is None:
        return None

    position = sdf.lerp(grid.position_of(*start), grid.position_of(*end), t)
    position = (float(position[0]), float(position[1]), float(position[2]))
    return EdgeCrossing(start=start, end=end, d1=d1, d2=d2, t=t, position=position)


def find_crossings(sampler: FieldSampler, epsilon: float = DEFAULT_EPSILON) -> List[EdgeCrossing]:
    """Resolve every edge of the sampler's grid, horizontal edges first."""
    sampler.ensure_current()
    crossings = []
    for start, end in sampler.grid.edges():
        crossing = resolve_edge(sampler, start, end, epsilon)
        if crossing is not None:
            crossings.append(crossing)
    logger.debug("found %d edge crossings (epsilon=%g)", len(crossings), epsilon)
    return crossings
