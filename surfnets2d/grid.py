"""Regular vertex grid and one-shot sampling of 2D signed distance functions."""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from typing import Iterator, Tuple

import numpy as np
import numpy.typing as npt

from . import sdf_lib as sdf
from .geometry import Geometry2D

logger = logging.getLogger(__name__)

_Array = npt.NDArray[np.floating]
_Index2D = Tuple[int, int]
_Edge = Tuple[_Index2D, _Index2D]

MIN_CELL_SIZE = 0.01


@dataclass(frozen=True)
class GridConfig:
    """Immutable grid parameters.

    *width* and *height* count cells, so the lattice has ``width + 1`` by
    ``height + 1`` vertices.  Out-of-range values are clamped rather than
    rejected: both counts to at least 1 and *cell_size* to
    :data:`MIN_CELL_SIZE`.  *plane_z* is only carried through as the third
    coordinate of world positions.
    """

    width: int = 8
    height: int = 8
    cell_size: float = 1.0
    origin: Tuple[float, float] = (0.0, 0.0)
    plane_z: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "width", max(1, int(self.width)))
        object.__setattr__(self, "height", max(1, int(self.height)))
        object.__setattr__(self, "cell_size", max(MIN_CELL_SIZE, float(self.cell_size)))
        ox, oy = self.origin
        object.__setattr__(self, "origin", (float(ox), float(oy)))
        object.__setattr__(self, "plane_z", float(self.plane_z))


class Grid2D:
    """Maps integer vertex coordinates to world-space positions.

    The parameters live in a frozen :class:`GridConfig`.  The only way to
    change them is :meth:`reconfigure`, which swaps the config and bumps
    :attr:`revision`; anything sampled against the old config is then stale.
    """

    def __init__(self, config: GridConfig | None = None, **params) -> None:
        if config is not None and params:
            raise ValueError("pass either a GridConfig or keyword parameters, not both")
        self._config = config if config is not None else GridConfig(**params)
        self._revision = 0

    # ------------------------------------------------------------------
    # Parameters
    # ------------------------------------------------------------------

    @property
    def config(self) -> GridConfig:
        return self._config

    @property
    def revision(self) -> int:
        return self._revision

    @property
    def width(self) -> int:
        return self._config.width

    @property
    def height(self) -> int:
        return self._config.height

    @property
    def cell_size(self) -> float:
        return self._config.cell_size

    @property
    def origin(self) -> Tuple[float, float]:
        return self._config.origin

    @property
    def plane_z(self) -> float:
        return self._config.plane_z

    @property
    def vertex_shape(self) -> _Index2D:
        """``(width + 1, height + 1)``, the shape of a sampled field."""
        return self._config.width + 1, self._config.height + 1

    def reconfigure(self, **changes) -> GridConfig:
        """Replace some grid parameters and return the new config.

        Takes effect immediately.  Previously sampled data is not touched;
        samplers detect the change through :attr:`revision`.
        """
        fields = {f.name for f in dataclasses.fields(GridConfig)}
        unknown = sorted(set(changes) - fields)
        if unknown:
            raise ValueError(f"unknown grid parameter(s): {', '.join(unknown)}")
        self._config = dataclasses.replace(self._config, **changes)
        self._revision += 1
        logger.debug("grid reconfigured to %s (revision %d)", self._config, self._revision)
        return self._config

    # ------------------------------------------------------------------
    # Coordinates
    # ------------------------------------------------------------------

    def position_of(self, x: int, y: int) -> _Array:
        """World position ``(ox + x*h, oy + y*h, plane_z)`` of vertex ``(x, y)``.

        Indices are not bounds-checked; use :meth:`contains` first.
        """
        ox, oy = self._config.origin
        h = self._config.cell_size
        return np.array([ox + x * h, oy + y * h, self._config.plane_z])

    def contains(self, x: int, y: int) -> bool:
        """True if ``(x, y)`` is a vertex of this grid (bounds inclusive)."""
        return 0 <= x <= self._config.width and 0 <= y <= self._config.height

    def vertex_positions(self) -> _Array:
        """2D positions of every vertex, shape ``(width + 1, height + 1, 2)``.

        Indexed ``[x, y]``, matching :meth:`position_of`.
        """
        ox, oy = self._config.origin
        h = self._config.cell_size
        xs = ox + np.arange(self._config.width + 1) * h
        ys = oy + np.arange(self._config.height + 1) * h
        X, Y = np.meshgrid(xs, ys, indexing="ij")
        return sdf.vec2(X, Y)

    def edges(self) -> Iterator[_Edge]:
        """Yield every lattice edge as ``((x0, y0), (x1, y1))``.

        Horizontal edges come first, row by row, then vertical edges.
        """
        w, h = self._config.width, self._config.height
        for y in range(h + 1):
            for x in range(w):
                yield (x, y), (x + 1, y)
        for y in range(h):
            for x in range(w + 1):
                yield (x, y), (x, y + 1)

    def __repr__(self) -> str:
        return f"Grid2D({self._config!r})"


def sample_levelset_2d(geom: Geometry2D, grid: Grid2D) -> _Array:
    """Sample *geom* at every vertex of *grid*.

    Parameters
    ----------
    geom:
        A 2-D geometry whose ``sdf()`` method accepts ``(..., 2)`` arrays.
    grid:
        The vertex grid to sample.

    Returns
    -------
    numpy.ndarray
        Shape ``(width + 1, height + 1)`` array of signed distances,
        indexed ``[x, y]``.
    """
    return np.asarray(geom.sdf(grid.vertex_positions()), dtype=float)
