"""
Analysis layer: derived quantities for display and validation.

IMPORTANT: This is NOT seen by the engine. One-way derivation only.

- intensity: normalized grayscale value a host uses as a color channel
- totals and bounds: mean correction and boundedness checks
- mirror_asymmetry: how far a field is from mirror symmetry
- energies and summarize: coarse health of a running simulation
"""

from wavesim.analysis.diagnostics import (
    GridSummary,
    intensity,
    intensity_at,
    total_height,
    mean_altitude,
    is_bounded,
    mirror_asymmetry,
    kinetic_energy,
    potential_energy,
    summarize,
)

__all__ = [
    "GridSummary",
    "intensity",
    "intensity_at",
    "total_height",
    "mean_altitude",
    "is_bounded",
    "mirror_asymmetry",
    "kinetic_energy",
    "potential_energy",
    "summarize",
]
