"""
wavesim: 2D Height-Field Wave Simulator

A discrete-time wave engine over a fixed grid of cells, each carrying
altitude, velocity, acceleration and a damping coefficient.

Core concepts:
- A disturbance raises or lowers a few cells
- Each cell is pulled toward the mean altitude of its neighbors
- Velocity carries the pull onward, so the disturbance spreads as a wave
- Sustainability damps velocity; a uniform shift keeps the mean near zero

The host drives the engine with trigger events and frame deltas and reads
back altitudes; rendering lives outside this package.
"""

__version__ = "0.1.0"
