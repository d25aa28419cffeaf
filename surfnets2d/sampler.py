"""Cached sampling of a distance field over a vertex grid."""

from __future__ import annotations

import logging
from typing import Optional, Tuple

import numpy as np
import numpy.typing as npt

from .geometry import Geometry2D
from .grid import Grid2D

logger = logging.getLogger(__name__)

_Array = npt.NDArray[np.floating]


class FieldSampler:
    """Evaluates a geometry at every vertex of a grid and keeps the result.

    Parameters
    ----------
    grid:
        The vertex grid to sample.
    geometry:
        The distance field.  ``None`` samples as zero everywhere.

    The sampled array has shape ``(width + 1, height + 1)`` and is indexed
    ``[x, y]``.  It is only written by :meth:`recompute`; readers go through
    :meth:`get` or the read-only :attr:`values` view.

    Nothing is resampled implicitly.  After reconfiguring the grid or
    editing the geometry's parameters, call :meth:`recompute` (or
    :meth:`ensure_current`, which does so only when :attr:`is_stale`).
    """

    def __init__(self, grid: Grid2D, geometry: Optional[Geometry2D] = None) -> None:
        self._grid = grid
        self._geometry = geometry
        self._values: Optional[_Array] = None
        self._grid_revision = -1
        self._geometry_revision = -1

    @property
    def grid(self) -> Grid2D:
        return self._grid

    @property
    def geometry(self) -> Optional[Geometry2D]:
        return self._geometry

    @geometry.setter
    def geometry(self, geometry: Optional[Geometry2D]) -> None:
        self._geometry = geometry
        self._geometry_revision = -1

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def shape(self) -> Optional[Tuple[int, int]]:
        """Dimensions of the stored array, or ``None`` before the first sample."""
        if self._values is None:
            return None
        return self._values.shape

    @property
    def is_populated(self) -> bool:
        return self._values is not None

    @property
    def is_stale(self) -> bool:
        """True if the stored samples no longer describe the grid and geometry."""
        if self._values is None or self._values.shape != self._grid.vertex_shape:
            return True
        if self._grid_revision != self._grid.revision:
            return True
        return self._geometry_revision != self._current_geometry_revision()

    @property
    def values(self) -> Optional[_Array]:
        """Read-only view of the sampled array."""
        if self._values is None:
            return None
        view = self._values.view()
        view.flags.writeable = False
        return view

    def _current_geometry_revision(self) -> int:
        return self._geometry.revision if self._geometry is not None else 0

    # ------------------------------------------------------------------
    # Sampling
    # ------------------------------------------------------------------

    def recompute(self) -> None:
        """Sample the geometry at every grid vertex.

        A new array is allocated only when the grid's vertex shape differs
        from the stored one; otherwise samples are overwritten in place.
        """
        shape = self._grid.vertex_shape
        if self._values is None or self._values.shape != shape:
            logger.debug("allocating sample array of shape %s", shape)
            self._values = np.zeros(shape, dtype=float)

        if self._geometry is None:
            self._values[...] = 0.0
        else:
            self._values[...] = self._geometry.sdf(self._grid.vertex_positions())

        self._grid_revision = self._grid.revision
        self._geometry_revision = self._current_geometry_revision()
        logger.debug("sampled %d vertices", self._values.size)

    def ensure_current(self) -> bool:
        """Recompute if :attr:`is_stale`; return whether a recompute happened."""
        if not self.is_stale:
            return False
        self.recompute()
        return True

    def get(self, x: int, y: int) -> float:
        """Sampled value at vertex ``(x, y)``.

        Returns ``0.0`` when nothing has been sampled yet or ``(x, y)`` is
        outside the stored array.  Never triggers a resample, so after a
        grid change this reads the old samples until :meth:`recompute`.
        """
        if self._values is None:
            return 0.0
        width, height = self._values.shape
        if x < 0 or y < 0 or x >= width or y >= height:
            return 0.0
        return float(self._values[x, y])

    def __repr__(self) -> str:
        return f"FieldSampler(grid={self._grid!r}, geometry={self._geometry!r}, shape={self.shape})"
