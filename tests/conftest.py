"""
Pytest configuration and shared fixtures.
"""

import pytest
import numpy as np


@pytest.fixture
def small_grid():
    """A 16x16 grid with default constants."""
    from wavesim.core import WaveGrid
    return WaveGrid.create(16, 16)


@pytest.fixture
def scenario_grid():
    """4x4 grid, flat except for cell (1, 1) raised to 100."""
    from wavesim.core import WaveGrid
    grid = WaveGrid.create(4, 4)
    grid.set_altitude(1, 1, 100.0)
    return grid


@pytest.fixture
def rng():
    """Reproducible random number generator."""
    return np.random.default_rng(seed=42)
