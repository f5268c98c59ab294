"""
Seeds: initial disturbances placed on a wave grid before it runs.

This is how waves start:
- Raise a band of cells to the limit (something dropped along an edge)
- Raise a single cell or a disk (a stone into a pond)
- Add a smooth Gaussian bump
- Make a region more or less damped by changing its sustainability

Every helper checks its coordinates first and raises IndexError before
touching the grid, so a bad call never leaves a half-seeded grid.
"""

from __future__ import annotations
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from wavesim.core.grid import WaveGrid


def add_band(
    grid: "WaveGrid",
    x0: int,
    x1: int,
    y0: int,
    y1: int,
    altitude: float | None = None,
):
    """
    Set a rectangular band of cells to a fixed altitude.

    Args:
        grid: Grid to seed
        x0, x1: Column range, half-open [x0, x1)
        y0, y1: Row range, half-open [y0, y1)
        altitude: Altitude to assign; defaults to the grid's limit
    """
    if x1 <= x0 or y1 <= y0:
        raise ValueError(f"Empty band: x=[{x0}, {x1}), y=[{y0}, {y1})")
    grid.check_bounds(x0, y0)
    grid.check_bounds(x1 - 1, y1 - 1)

    if altitude is None:
        altitude = grid.config.limit

    mask = np.zeros(grid.shape, dtype=bool)
    mask[y0:y1, x0:x1] = True
    grid.fill_altitude(mask, altitude)


def seed_default_band(grid: "WaveGrid", rows: int = 3):
    """
    Raise the left half of the first `rows` rows to the limit.

    This is the start-up disturbance of the interactive simulation.
    """
    add_band(grid, 0, max(grid.width // 2, 1), 0, min(rows, grid.height))


def add_point_drop(grid: "WaveGrid", x: int, y: int, altitude: float):
    """Set a single cell's altitude."""
    grid.set_altitude(x, y, altitude)


def add_disk_drop(
    grid: "WaveGrid",
    cx: int,
    cy: int,
    radius: float,
    altitude: float,
):
    """Set every cell within `radius` of (cx, cy) to `altitude`."""
    grid.check_bounds(cx, cy)
    grid.fill_altitude(_disk_mask(grid, cx, cy, radius), altitude)


def add_gaussian_drop(
    grid: "WaveGrid",
    cx: int,
    cy: int,
    peak: float,
    sigma: float,
):
    """
    Add a Gaussian bump centered at (cx, cy) to the current altitudes.

    Args:
        cx, cy: Center coordinates
        peak: Altitude added at the center
        sigma: Standard deviation (spread) in cells
    """
    grid.check_bounds(cx, cy)
    if sigma <= 0:
        raise ValueError(f"sigma must be positive, got {sigma}")

    ny, nx = grid.shape
    yy, xx = np.ogrid[:ny, :nx]
    dist_sq = (xx - cx) ** 2 + (yy - cy) ** 2
    bump = peak * np.exp(-dist_sq / (2 * sigma ** 2))
    grid.fill_altitude(np.ones(grid.shape, dtype=bool), grid.altitude + bump)


def set_sustainability_region(
    grid: "WaveGrid",
    cx: int,
    cy: int,
    radius: float,
    sustainability: float,
):
    """
    Change the damping divisor of a disk of cells.

    Low values damp strongly (a marsh); high values let waves travel far.
    """
    grid.check_bounds(cx, cy)
    grid.fill_sustainability(_disk_mask(grid, cx, cy, radius), sustainability)


def _disk_mask(grid: "WaveGrid", cx: int, cy: int, radius: float) -> np.ndarray:
    if radius < 0:
        raise ValueError(f"radius must be non-negative, got {radius}")
    ny, nx = grid.shape
    yy, xx = np.ogrid[:ny, :nx]
    dist = np.sqrt((xx - cx) ** 2 + (yy - cy) ** 2)
    return dist <= radius
