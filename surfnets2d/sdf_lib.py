"""2-D SDF math helpers for the surfnets2d package.

This module provides:

* **Type alias**: :data:`_F`
* **Vector constructor**: :func:`vec2`
* **Math helpers**: :func:`length`, :func:`clamp`,
  :func:`normalize`, :func:`lerp`
* **Primitive SDF**: :func:`sdCircle`

All functions accept and return ``numpy.ndarray`` objects and support
broadcasting over arbitrary leading batch dimensions.  A "point array" *p*
has shape ``(..., 2)``; scalar SDF results have shape ``(...,)``.
"""

from __future__ import annotations

import numpy as np
import numpy.typing as npt

# ---------------------------------------------------------------------------
# Type alias
# ---------------------------------------------------------------------------
_F = npt.NDArray[np.floating]

__all__ = [
    "_F",
    "vec2",
    "length", "clamp", "normalize", "lerp",
    "sdCircle",
]


# ===========================================================================
# Vector constructors
# ===========================================================================

def vec2(x: _F, y: _F) -> _F:
    """Stack *x* and *y* into a ``(..., 2)`` array."""
    x, y = np.broadcast_arrays(x, y)
    return np.stack([x, y], axis=-1)


# ===========================================================================
# Math helpers
# ===========================================================================

def length(v: _F) -> _F:
    """Euclidean length along the last axis."""
    return np.linalg.norm(v, axis=-1)


def clamp(x: _F, lo: float | _F, hi: float | _F) -> _F:
    """Clamp *x* element-wise to ``[lo, hi]``."""
    return np.minimum(np.maximum(x, lo), hi)


def normalize(v: _F, eps: float = 1e-12) -> _F:
    """Unit vectors along the last axis; vectors shorter than *eps* become zero."""
    v = np.asarray(v, dtype=float)
    n = length(v)[..., None]
    return np.where(n > eps, v / np.where(n > eps, n, 1.0), 0.0)


def lerp(a: _F, b: _F, t: float | _F) -> _F:
    """Linear interpolation ``a + (b - a) * t``."""
    a = np.asarray(a, dtype=float)
    b = np.asarray(b, dtype=float)
    return a + (b - a) * t


# ===========================================================================
# 2-D primitive SDFs
# ===========================================================================

def sdCircle(p: _F, c: _F, r: float) -> _F:
    """2-D circle of radius *r* centred at *c*."""
    return length(p - c) - r
