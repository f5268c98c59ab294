"""
WaveGrid: the 2D height field that carries the simulated wave.

The grid stores ONLY engine primitives, one array per quantity:
- altitude: the simulated height, the observable output
- velocity / acceleration: integration state
- sustainability: per-cell damping divisor (higher = less damping)

Each step runs three ordered phases over the whole grid:
- Phase A: restoring force toward the neighbor mean, minus damping, clamped
- Phase B: integrate velocity and altitude, clamp altitude
- Phase C: add a uniform shift that pulls the mean altitude toward zero

Phase A reads every neighbor's pre-step altitude, so it finishes for the
whole grid before Phase B writes anything.

Colors, intensities and other derived quantities live in the analysis layer.
"""

from __future__ import annotations
import logging
import math
import threading
from dataclasses import dataclass

import numpy as np
from scipy.ndimage import convolve

from wavesim.core.timing import StepTimer

logger = logging.getLogger(__name__)


MAP_WIDTH = 128
MAP_HEIGHT = 128
MASS = 0.1  # Mass of each cell, the same for all cells
LIMIT = 500.0  # Maximum absolute altitude (and acceleration) a cell can reach
ACTION_RESOLUTION = 20.0  # Velocity is divided by this when moving altitude
SUSTAIN = 1000.0  # Anti-damping. Propagation range grows with it. Minimum is 1
DELAY = 0.001  # Minimum seconds between steps
POWER = 1.0  # Exponent of the restoring force. Natural value is 1.0

# 3x3 neighborhood excluding the cell itself (Moore neighborhood)
NEIGHBOR_KERNEL = np.array(
    [
        [1.0, 1.0, 1.0],
        [1.0, 0.0, 1.0],
        [1.0, 1.0, 1.0],
    ]
)


@dataclass
class WaveGridConfig:
    """Configuration for a wave grid. Fixed once the grid is built."""

    width: int = MAP_WIDTH
    height: int = MAP_HEIGHT
    mass: float = MASS
    limit: float = LIMIT
    action_resolution: float = ACTION_RESOLUTION
    delay: float = DELAY
    power: float = POWER
    sustainability: float = SUSTAIN  # Default damping divisor for every cell

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"Grid dimensions must be positive, got {self.width}x{self.height}"
            )
        for name in ("mass", "limit", "action_resolution", "sustainability"):
            value = getattr(self, name)
            if not math.isfinite(value) or value <= 0:
                raise ValueError(f"{name} must be positive and finite, got {value}")
        if not math.isfinite(self.power):
            raise ValueError(f"power must be finite, got {self.power}")
        if not math.isfinite(self.delay) or self.delay < 0:
            raise ValueError(f"delay must be non-negative and finite, got {self.delay}")

    @property
    def n_cells(self) -> int:
        return self.width * self.height


def _check_sustainability(value: float):
    if not math.isfinite(value) or value <= 0:
        raise ValueError(f"sustainability must be positive and finite, got {value}")


@dataclass(frozen=True)
class Cell:
    """Snapshot of one cell's state."""

    altitude: float
    acceleration: float
    velocity: float
    sustainability: float


class WaveGrid:
    """
    The wave engine's state and update rule.

    Arrays are indexed [y, x] with shape (height, width). Callers read
    through altitude_at() or the read-only array views; only the grid
    itself (and its seeding setters) writes cell state.

    State is stored as float64, so values carry more precision than a
    single-precision grid would and will not match one bit for bit.
    """

    def __init__(self, config: WaveGridConfig | None = None):
        self.config = config if config is not None else WaveGridConfig()
        ny, nx = self.config.height, self.config.width

        # ═══════════════════════════════════════════════════════════════
        # CELL STATE
        # ═══════════════════════════════════════════════════════════════
        self._altitude = np.zeros((ny, nx), dtype=np.float64)
        self._velocity = np.zeros((ny, nx), dtype=np.float64)
        self._acceleration = np.zeros((ny, nx), dtype=np.float64)
        self._sustainability = np.full(
            (ny, nx), self.config.sustainability, dtype=np.float64
        )

        # Neighbor counts depend only on the shape: 8 inside, 5 on edges,
        # 3 in corners, 0 on a single-cell grid
        self._neighbor_count = convolve(
            np.ones((ny, nx), dtype=np.float64),
            NEIGHBOR_KERNEL,
            mode="constant",
            cval=0.0,
        )
        self._has_neighbors = self._neighbor_count > 0

        # Step triggering
        self._timer = StepTimer(delay=self.config.delay)
        self._active = False
        self._lock = threading.RLock()

        self.step_count = 0
        self.last_shift = 0.0

        logger.info("Created %dx%d wave grid", nx, ny)

    @classmethod
    def create(cls, width: int, height: int, **overrides) -> "WaveGrid":
        """Build a grid of the given size; other config fields may be overridden."""
        return cls(WaveGridConfig(width=width, height=height, **overrides))

    # ───────────────────────────────────────────────────────────────────
    # Shape and read access
    # ───────────────────────────────────────────────────────────────────

    @property
    def shape(self) -> tuple[int, int]:
        """Return (height, width) grid dimensions."""
        return self.config.height, self.config.width

    @property
    def width(self) -> int:
        return self.config.width

    @property
    def height(self) -> int:
        return self.config.height

    @property
    def active(self) -> bool:
        """True once trigger() has been called."""
        return self._active

    @property
    def altitude(self) -> np.ndarray:
        """Read-only view of all altitudes, shape (height, width)."""
        return self._read_only(self._altitude)

    @property
    def velocity(self) -> np.ndarray:
        return self._read_only(self._velocity)

    @property
    def acceleration(self) -> np.ndarray:
        return self._read_only(self._acceleration)

    @property
    def sustainability(self) -> np.ndarray:
        return self._read_only(self._sustainability)

    @property
    def neighbor_count(self) -> np.ndarray:
        """Number of in-grid neighbors of every cell."""
        return self._read_only(self._neighbor_count)

    @staticmethod
    def _read_only(arr: np.ndarray) -> np.ndarray:
        view = arr.view()
        view.flags.writeable = False
        return view

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.config.width and 0 <= y < self.config.height

    def check_bounds(self, x: int, y: int):
        """Raise IndexError if (x, y) lies outside the grid."""
        if not self.in_bounds(x, y):
            raise IndexError(
                f"Cell ({x}, {y}) is outside the "
                f"{self.config.width}x{self.config.height} grid"
            )

    def altitude_at(self, x: int, y: int) -> float:
        """Altitude of cell (x, y)."""
        self.check_bounds(x, y)
        return float(self._altitude[y, x])

    def cell_at(self, x: int, y: int) -> Cell:
        """Snapshot of every quantity stored for cell (x, y)."""
        self.check_bounds(x, y)
        return Cell(
            altitude=float(self._altitude[y, x]),
            acceleration=float(self._acceleration[y, x]),
            velocity=float(self._velocity[y, x]),
            sustainability=float(self._sustainability[y, x]),
        )

    def neighbor_mean(self) -> np.ndarray:
        """
        Mean altitude of each cell's in-grid neighbors.

        Cells beyond the boundary are skipped, not treated as zero, so edge
        and corner cells average over 5 and 3 neighbors. Cells without any
        neighbor get 0.
        """
        neighbor_sum = convolve(
            self._altitude, NEIGHBOR_KERNEL, mode="constant", cval=0.0
        )
        return np.divide(
            neighbor_sum,
            self._neighbor_count,
            out=np.zeros_like(neighbor_sum),
            where=self._has_neighbors,
        )

    # ───────────────────────────────────────────────────────────────────
    # Seeding
    # ───────────────────────────────────────────────────────────────────

    def set_altitude(self, x: int, y: int, value: float):
        """Set one cell's altitude, clamped to [-limit, limit]."""
        self.check_bounds(x, y)
        if not math.isfinite(value):
            raise ValueError(f"altitude must be finite, got {value}")
        limit = self.config.limit
        with self._lock:
            self._altitude[y, x] = min(max(value, -limit), limit)

    def set_sustainability(self, x: int, y: int, value: float):
        """Set one cell's damping divisor."""
        self.check_bounds(x, y)
        _check_sustainability(value)
        with self._lock:
            self._sustainability[y, x] = value

    def fill_altitude(self, mask: np.ndarray, values):
        """
        Assign altitudes wherever mask is True.

        Args:
            mask: Boolean array of the grid's shape
            values: Scalar or array of the grid's shape; clamped to [-limit, limit]
        """
        mask = self._check_mask(mask)
        values = np.broadcast_to(np.asarray(values, dtype=np.float64), self.shape)
        if not np.all(np.isfinite(values[mask])):
            raise ValueError("altitudes must be finite")
        limit = self.config.limit
        clamped = np.clip(values, -limit, limit)
        with self._lock:
            self._altitude[mask] = clamped[mask]

    def fill_sustainability(self, mask: np.ndarray, value: float):
        """Assign a damping divisor wherever mask is True."""
        mask = self._check_mask(mask)
        _check_sustainability(value)
        with self._lock:
            self._sustainability[mask] = value

    def _check_mask(self, mask: np.ndarray) -> np.ndarray:
        mask = np.asarray(mask)
        if mask.dtype != np.bool_:
            raise ValueError(f"Mask must be boolean, got dtype {mask.dtype}")
        if mask.shape != self.shape:
            raise ValueError(
                f"Mask shape {mask.shape} does not match grid shape {self.shape}"
            )
        return mask

    # ───────────────────────────────────────────────────────────────────
    # Triggering
    # ───────────────────────────────────────────────────────────────────

    def trigger(self):
        """
        Activate the simulation for the rest of the session.

        This is a latch: once set it is never cleared.
        """
        with self._lock:
            if not self._active:
                logger.info("Wave simulation activated")
            self._active = True

    def advance(self, dt: float) -> bool:
        """
        Feed one host frame to the engine.

        Does nothing until trigger() has been called. Afterwards, frame
        deltas accumulate until at least config.delay seconds have passed,
        then exactly one step runs and the counter restarts at zero.

        Args:
            dt: Elapsed seconds since the previous call

        Returns:
            True if a step ran during this call
        """
        with self._lock:
            if not self._active:
                return False
            if not self._timer.accumulate(dt):
                return False
            self.step()
            return True

    # ───────────────────────────────────────────────────────────────────
    # Update rule
    # ───────────────────────────────────────────────────────────────────

    def step(self) -> float:
        """
        Run one simulation step, ignoring the trigger latch and the timer.

        Returns:
            The uniform shift applied in Phase C
        """
        with self._lock:
            total_height = self._compute_forces()
            self._integrate()
            shift = self._apply_shift(total_height)

            self.step_count += 1
            self.last_shift = shift
            logger.debug(
                "Step %d: total_height=%.6g shift=%.6g",
                self.step_count, total_height, shift,
            )
            return shift

    def run(self, n_steps: int) -> dict:
        """
        Run n_steps steps back to back.

        Returns:
            Statistics dictionary
        """
        with self._lock:
            for _ in range(n_steps):
                self.step()

            return {
                "n_steps": n_steps,
                "step_count": self.step_count,
                "mean_altitude": float(self._altitude.mean()),
                "min_altitude": float(self._altitude.min()),
                "max_altitude": float(self._altitude.max()),
                "total_height": float(self._altitude.sum()),
                "last_shift": self.last_shift,
            }

    def _compute_forces(self) -> float:
        """
        Phase A: fill the acceleration field from pre-step altitudes.

        Returns:
            Sum of all pre-step altitudes
        """
        cfg = self.config
        alt = self._altitude
        acc = self._acceleration

        acc.fill(0.0)
        total_height = float(alt.sum())

        mean = self.neighbor_mean()
        if cfg.power == 1.0:
            force = -(alt - mean) / cfg.mass
        else:
            # The sign is taken against the (just reset) acceleration, not
            # the altitude. copysign gives +1 for +0, like a sign-bit signum.
            force = (
                np.copysign(1.0, mean - acc)
                * np.abs(alt - mean) ** cfg.power
                / cfg.mass
            )
        acc += np.where(self._has_neighbors, force, 0.0)

        # Damping
        acc -= self._velocity / self._sustainability

        np.clip(acc, -cfg.limit, cfg.limit, out=acc)
        return total_height

    def _integrate(self):
        """Phase B: velocity from acceleration, altitude from velocity."""
        limit = self.config.limit
        self._velocity += self._acceleration
        tentative = self._altitude + self._velocity / self.config.action_resolution
        np.clip(tentative, -limit, limit, out=self._altitude)

    def _apply_shift(self, total_height: float) -> float:
        """Phase C: pull the mean altitude toward zero. Not clamped."""
        shift = -total_height / self.config.n_cells
        self._altitude += shift
        return shift
