"""
Diagnostics derived from a wave grid's state.

IMPORTANT: These are DERIVED quantities for display and validation only.
Nothing here feeds back into the update rule.

Intensity is what a renderer uses to color a tile:
    intensity = (altitude + limit) / (2 * limit), clipped to [0, 1]
so -limit maps to black, 0 to mid gray and +limit to white.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from wavesim.core.grid import WaveGrid


def intensity(grid: "WaveGrid") -> np.ndarray:
    """
    Normalized grayscale intensity of every cell.

    Returns:
        Array of shape (height, width), values in [0, 1]
    """
    limit = grid.config.limit
    return np.clip((grid.altitude + limit) / (2.0 * limit), 0.0, 1.0)


def intensity_at(grid: "WaveGrid", x: int, y: int) -> float:
    """Grayscale intensity of a single cell."""
    limit = grid.config.limit
    value = (grid.altitude_at(x, y) + limit) / (2.0 * limit)
    return min(max(value, 0.0), 1.0)


def total_height(grid: "WaveGrid") -> float:
    """Sum of all altitudes."""
    return float(grid.altitude.sum())


def mean_altitude(grid: "WaveGrid") -> float:
    return float(grid.altitude.mean())


def is_bounded(grid: "WaveGrid", tolerance: float | None = None) -> bool:
    """
    Check altitudes and accelerations against the grid's limit.

    Args:
        grid: Grid to check
        tolerance: Slack allowed on altitudes. The uniform shift added at
            the end of each step may push a clamped cell past the limit by
            up to |last_shift|, which is the default slack.

    Returns:
        True if every acceleration lies in [-limit, limit] and every
        altitude in [-limit - tolerance, limit + tolerance]
    """
    limit = grid.config.limit
    if tolerance is None:
        tolerance = abs(grid.last_shift)

    acc_ok = bool(np.all(np.abs(grid.acceleration) <= limit))
    alt_ok = bool(np.all(np.abs(grid.altitude) <= limit + tolerance))
    return acc_ok and alt_ok


def mirror_asymmetry(field: np.ndarray, axis: int = 1) -> float:
    """
    Largest difference between a field and its mirror image.

    Args:
        field: 2D array indexed [y, x]
        axis: 1 mirrors about the vertical midline (left/right),
              0 about the horizontal midline (top/bottom)

    Returns:
        max |field - flip(field)|, 0.0 for a perfectly symmetric field
    """
    return float(np.max(np.abs(field - np.flip(field, axis=axis))))


def kinetic_energy(grid: "WaveGrid") -> float:
    """0.5 * mass * sum(velocity²)."""
    return float(0.5 * grid.config.mass * np.sum(grid.velocity ** 2))


def potential_energy(grid: "WaveGrid") -> float:
    """
    0.5 * sum((altitude - neighbor mean)²) over cells that have neighbors.

    This is the quantity the restoring force works to reduce; it is zero
    for a flat grid.
    """
    displacement = grid.altitude - grid.neighbor_mean()
    displacement = np.where(grid.neighbor_count > 0, displacement, 0.0)
    return float(0.5 * np.sum(displacement ** 2))


@dataclass
class GridSummary:
    """Snapshot of aggregate grid quantities."""

    step_count: int
    total_height: float
    mean_altitude: float
    min_altitude: float
    max_altitude: float
    kinetic_energy: float
    potential_energy: float
    bounded: bool

    def __str__(self) -> str:
        return (
            f"step {self.step_count}: "
            f"mean={self.mean_altitude:+.4f} "
            f"range=[{self.min_altitude:.2f}, {self.max_altitude:.2f}] "
            f"KE={self.kinetic_energy:.4g} PE={self.potential_energy:.4g}"
            f"{'' if self.bounded else ' (OUT OF BOUNDS)'}"
        )


def summarize(grid: "WaveGrid") -> GridSummary:
    """Collect the aggregate quantities of a grid into one record."""
    alt = grid.altitude
    return GridSummary(
        step_count=grid.step_count,
        total_height=float(alt.sum()),
        mean_altitude=float(alt.mean()),
        min_altitude=float(alt.min()),
        max_altitude=float(alt.max()),
        kinetic_energy=kinetic_energy(grid),
        potential_energy=potential_energy(grid),
        bounded=is_bounded(grid),
    )
