"""One-pole topology-preserving low-pass filter."""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass
class OnePoleFilter:
    """A one-pole trapezoidal low-pass filter holding its integrator state."""

    state: float = 0.0

    def process(self, inp: float, coef: float) -> float:
        """Filter one sample with a precomputed cutoff coefficient."""
        v = (inp - self.state) * coef / (1.0 + coef)
        res = v + self.state
        self.state = res + v
        return res

    def lowpass_unwarped(self, inp: float, cutoff: float, sr_inv: float) -> float:
        """Filter one sample at ``cutoff`` Hz without frequency prewarping."""
        return self.process(inp, cutoff * sr_inv * math.pi)

    def lowpass(self, inp: float, cutoff: float, sr_inv: float) -> float:
        """Filter one sample at ``cutoff`` Hz with tangent prewarping."""
        return self.process(inp, math.tan(cutoff * sr_inv * math.pi))