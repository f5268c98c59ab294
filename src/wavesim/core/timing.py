"""
StepTimer: decides when the next simulation step is due.

The host calls the engine once per frame with that frame's elapsed seconds.
The timer accumulates those deltas and fires once the total reaches the
configured delay, so the step rate is capped independently of how finely
the host slices time.

Deltas are accumulated as exact rationals. Ten deltas of 0.0001 therefore
fire exactly like a single delta of 0.001, whatever order they arrive in.
"""

from __future__ import annotations
import math
from dataclasses import dataclass, field
from fractions import Fraction


@dataclass
class StepTimer:
    """Accumulates frame deltas and fires when at least `delay` has elapsed."""

    delay: float = 0.001  # Minimum seconds between steps
    _elapsed: Fraction = field(default=Fraction(0), init=False, repr=False)
    _threshold: Fraction = field(default=Fraction(0), init=False, repr=False)

    def __post_init__(self):
        if not math.isfinite(self.delay) or self.delay < 0:
            raise ValueError(f"delay must be non-negative and finite, got {self.delay}")
        self._threshold = Fraction(float(self.delay))

    @property
    def elapsed(self) -> float:
        """Seconds accumulated since the timer last fired."""
        return float(self._elapsed)

    def accumulate(self, dt: float) -> bool:
        """
        Add one frame delta.

        Args:
            dt: Elapsed seconds since the previous call

        Returns:
            True if the accumulated time reached the delay. The counter is
            reset to zero in that case.
        """
        dt = float(dt)
        if math.isnan(dt) or dt < 0:
            raise ValueError(f"dt must be non-negative, got {dt}")
        if math.isinf(dt):
            # An unbounded frame is always long enough
            self._elapsed = Fraction(0)
            return True

        self._elapsed += Fraction(dt)
        if self._elapsed < self._threshold:
            return False

        self._elapsed = Fraction(0)
        return True

    def reset(self):
        """Drop any accumulated time."""
        self._elapsed = Fraction(0)
