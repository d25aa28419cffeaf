"""Render a sampled circle field with its edge crossings and surface vectors.

Usage::

    python scripts/plot_field.py                          # saves field_2d.png
    python scripts/plot_field.py --width 16 --height 12 --radius 4.5
    python scripts/plot_field.py --out my_file.png --no-vectors -v

Requirements: numpy, matplotlib
"""
from __future__ import annotations

import argparse
import logging
import os
import sys

# Ensure the repo root (parent of scripts/) is importable regardless of cwd
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import numpy as np  # noqa: E402

from surfnets2d import (  # noqa: E402
    DEFAULT_EPSILON,
    Circle2D,
    FieldSampler,
    Grid2D,
    SignCategory,
    classify_array,
    find_crossings,
    surface_vectors,
)

logger = logging.getLogger("plot_field")

_CATEGORY_COLORS = {
    SignCategory.NEGATIVE: "#33cc59",
    SignCategory.ZERO: "#cce6ff",
    SignCategory.POSITIVE: "#ff5959",
}


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

def render_field(sampler: FieldSampler, out_path: str, epsilon: float, show_vectors: bool = True) -> None:
    sampler.ensure_current()
    grid = sampler.grid
    phi = sampler.values
    positions = grid.vertex_positions()

    ox, oy = grid.origin
    extent = [ox, ox + grid.width * grid.cell_size, oy, oy + grid.height * grid.cell_size]

    fig, ax = plt.subplots(figsize=(6.4, 6.4), facecolor="#111111")
    ax.set_facecolor("#111111")
    ax.set_aspect("equal")
    for spine in ax.spines.values():
        spine.set_edgecolor("#444444")
    ax.tick_params(colors="#888888", labelsize=7)

    # phi is indexed [x, y]; imshow wants rows along y
    lim = max(float(np.nanmax(np.abs(phi))), 1e-6)
    ax.imshow(phi.T, origin="lower", extent=extent, cmap="seismic",
              vmin=-lim, vmax=lim, interpolation="bilinear", alpha=0.6)

    for x in range(grid.width + 1):
        ax.plot(positions[x, :, 0], positions[x, :, 1], color="white", alpha=0.35, lw=0.6)
    for y in range(grid.height + 1):
        ax.plot(positions[:, y, 0], positions[:, y, 1], color="white", alpha=0.35, lw=0.6)

    categories = classify_array(phi, epsilon)
    for category, color in _CATEGORY_COLORS.items():
        mask = categories == category
        ax.scatter(positions[mask, 0], positions[mask, 1], s=14, color=color, zorder=3)

    crossings = find_crossings(sampler, epsilon)
    if crossings:
        pts = np.array([c.position[:2] for c in crossings])
        ax.scatter(pts[:, 0], pts[:, 1], s=22, color="#ffd900", zorder=4, label="crossings")

    if show_vectors:
        for sv in surface_vectors(sampler):
            color = _CATEGORY_COLORS[sv.category]
            ax.annotate("", xy=tuple(sv.tip), xytext=tuple(sv.origin[:2]),
                        arrowprops=dict(arrowstyle="->", color=color, lw=0.8), zorder=2)

    ax.set_title(f"{sampler.geometry!r}\n{len(crossings)} crossings, epsilon={epsilon:g}",
                 color="white", fontsize=8)
    plt.tight_layout(pad=0.4)
    fig.savefig(out_path, dpi=200, bbox_inches="tight", facecolor=fig.get_facecolor())
    plt.close(fig)
    print(f"Saved: {out_path}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Render a sampled circle SDF with edge crossings to a PNG.")
    parser.add_argument("--out", default="field_2d.png", help="Output PNG path")
    parser.add_argument("--width", type=int, default=8, help="Grid cells along x (default 8)")
    parser.add_argument("--height", type=int, default=8, help="Grid cells along y (default 8)")
    parser.add_argument("--cell-size", type=float, default=1.0, help="Cell size (default 1.0)")
    parser.add_argument("--center", type=float, nargs=2, default=None, metavar=("CX", "CY"),
                        help="Circle centre (default: grid centre)")
    parser.add_argument("--radius", type=float, default=2.0, help="Circle radius (default 2.0)")
    parser.add_argument("--epsilon", type=float, default=DEFAULT_EPSILON, help="Sign band half-width")
    parser.add_argument("--no-vectors", action="store_true", help="Do not draw surface vectors")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    if args.epsilon < 0:
        parser.error("--epsilon must be non-negative")

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")

    grid = Grid2D(width=args.width, height=args.height, cell_size=args.cell_size)
    if args.center is None:
        center = (grid.width * grid.cell_size / 2.0, grid.height * grid.cell_size / 2.0)
    else:
        center = tuple(args.center)
    sampler = FieldSampler(grid, Circle2D(args.radius, center=center))
    logger.debug("rendering %r", sampler)

    render_field(sampler, args.out, args.epsilon, show_vectors=not args.no_vectors)


if __name__ == "__main__":
    main()
