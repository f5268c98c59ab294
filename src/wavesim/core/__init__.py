"""
Core engine primitives.

This layer knows NOTHING about colors, sprites or input bindings.
It only knows:
- Cells with altitude, velocity, acceleration and sustainability
- The three-phase step (force, integration, global shift)
- When a step is due (trigger latch + minimum inter-step delay)
- How to place initial disturbances on the grid
"""

from wavesim.core.grid import Cell, WaveGrid, WaveGridConfig
from wavesim.core.timing import StepTimer
from wavesim.core.seeds import (
    add_band,
    add_point_drop,
    add_disk_drop,
    add_gaussian_drop,
    set_sustainability_region,
    seed_default_band,
)

__all__ = [
    "Cell",
    "WaveGrid",
    "WaveGridConfig",
    "StepTimer",
    "add_band",
    "add_point_drop",
    "add_disk_drop",
    "add_gaussian_drop",
    "set_sustainability_region",
    "seed_default_band",
]
