"""Band-limited pulse oscillator using BLEP residuals, with a fixed sample delay."""

from __future__ import annotations

import functools
import math
from collections import deque
from itertools import pairwise

# Length of the oscillator's internal delay; the BLEP spans twice this.
SAMPLES = 8
# Table points per output sample.
B_OVERSAMPLING = 64


@functools.lru_cache(maxsize=None)
def _blep_table(samples: int, oversampling: int, cutoff: float) -> tuple[float, ...]:
    """Return the BLEP residual magnitude, sampled ``oversampling`` times per sample.

    Entry ``k`` holds the residual at ``k / oversampling - samples`` samples from the
    step: the integrated windowed sinc before the step and its complement after it.
    """
    half = samples * oversampling
    impulse = []
    for k in range(2 * half + 1):
        t = k / oversampling - samples
        window = (
            0.42
            + 0.5 * math.cos(math.pi * t / samples)
            + 0.08 * math.cos(2.0 * math.pi * t / samples)
        )
        x = cutoff * t
        sinc = 1.0 if x == 0 else math.sin(math.pi * x) / (math.pi * x)
        impulse.append(cutoff * sinc * window)

    cumulative = [0.0]
    for a, b in pairwise(impulse):
        cumulative.append(cumulative[-1] + 0.5 * (a + b))
    total = cumulative[-1]

    table = [
        value / total if k < half else 1.0 - value / total
        for k, value in enumerate(cumulative)
    ]
    # Slack past the end so that offsets up to just over one sample stay in range.
    table.extend([0.0] * (2 * oversampling + 2))
    return tuple(table)


class SampleDelay:
    """Delays a signal by a fixed number of samples."""

    def __init__(self, length: int = SAMPLES) -> None:
        if length < 1:
            raise ValueError(f"delay length must be at least 1, got {length}")
        self.length = length
        self._buffer: deque[float] = deque([0.0] * length, maxlen=length)

    def feed_return(self, value: float) -> float:
        """Push ``value`` and return the value pushed ``length`` calls ago."""
        out = self._buffer[0]
        self._buffer.append(value)
        return out

    def fill_zeroes(self) -> None:
        """Clear the delay so that it outputs silence."""
        self._buffer.extend([0.0] * self.length)


class PulseOsc:
    """Pulse wave generator whose edges are corrected with BLEP residuals."""

    def __init__(self, samples: int = SAMPLES, oversampling: int = B_OVERSAMPLING) -> None:
        if samples < 1 or oversampling < 1:
            raise ValueError("samples and oversampling must be at least 1")
        self.samples = samples
        self.oversampling = oversampling
        self._n = samples * 2
        self._blep = _blep_table(samples, oversampling, 1.0)
        self._blep_decimated = _blep_table(samples, oversampling, 0.5)
        self._table = self._blep
        self._buffer = [0.0] * self._n
        self._pos = 0
        self._pw1t = False
        self._delay = SampleDelay(samples)

    def set_decimation(self) -> None:
        """Use the half-band BLEP, for running at twice the output rate."""
        self._table = self._blep_decimated

    def remove_decimation(self) -> None:
        """Use the full-band BLEP."""
        self._table = self._blep

    def alias_reduction(self) -> float:
        """Return the next correction sample to add to the delayed value."""
        return -self.next_blep()

    def process_leader(
        self, x: float, delta: float, pulse_width: float, pulse_width_was: float
    ) -> None:
        """Register the edges crossed by a free-running phase ``x``."""
        summated = delta - (pulse_width - pulse_width_was)

        if self._pw1t and x >= 1.0:
            x -= 1.0
            self.mix_in_impulse_center(x / delta, 1.0)
            self._pw1t = False

        if not self._pw1t and x >= pulse_width and x - summated <= pulse_width:
            self._pw1t = True
            frac = (x - pulse_width) / summated
            self.mix_in_impulse_center(frac, -1.0)

        if self._pw1t and x >= 1.0:
            x -= 1.0
            self.mix_in_impulse_center(x / delta, 1.0)
            self._pw1t = False

    def _falling_edge(self, x: float, delta: float, hard_sync_reset: bool, hard_sync_frac: float) -> None:
        x -= 1.0
        if not hard_sync_reset or x / delta > hard_sync_frac:
            self.mix_in_impulse_center(x / delta, 1.0)
            self._pw1t = False

    def process_follower(
        self,
        x: float,
        delta: float,
        hard_sync_reset: bool,
        hard_sync_frac: float,
        pulse_width: float,
        pulse_width_was: float,
    ) -> None:
        """Register the edges of a phase ``x`` that a leader may hard-sync."""
        summated = delta - (pulse_width - pulse_width_was)

        if self._pw1t and x >= 1.0:
            self._falling_edge(x, delta, hard_sync_reset, hard_sync_frac)

        if not self._pw1t and x >= pulse_width and x - summated <= pulse_width:
            frac = (x - pulse_width) / summated
            if not hard_sync_reset or frac > hard_sync_frac:
                self._pw1t = True
                self.mix_in_impulse_center(frac, -1.0)

        if self._pw1t and x >= 1.0:
            self._falling_edge(x, delta, hard_sync_reset, hard_sync_frac)

        if hard_sync_reset:
            self.mix_in_impulse_center(hard_sync_frac, 1.0 if self._pw1t else 0.0)
            self._pw1t = False

    def value(self, x: float, pulse_width: float) -> float:
        """Return the naive pulse value, delayed to line up with the corrections."""
        return self._delay.feed_return(self.value_fast(x, pulse_width))

    def value_fast(self, x: float, pulse_width: float) -> float:
        """Return the naive, undelayed pulse value for phase ``x``."""
        if x >= pulse_width:
            return 1.0 - (0.5 - pulse_width) - 0.5
        return -(0.5 - pulse_width) - 0.5

    def mix_in_impulse_center(self, offset: float, scale: float) -> None:
        """Add a BLEP residual for an edge ``offset`` samples in the past, scaled."""
        table = self._table
        os_ = self.oversampling
        lp_in = int(os_ * offset)
        frac = offset * os_ - lp_in
        f1 = 1.0 - frac
        for i in range(self._n):
            mix = table[lp_in] * f1 + table[lp_in + 1] * frac
            slot = (self._pos + i) % self._n
            if i < self.samples:
                self._buffer[slot] += mix * scale
            else:
                self._buffer[slot] -= mix * scale
            lp_in += os_

    def next_blep(self) -> float:
        """Consume the current residual slot and return the next one."""
        self._buffer[self._pos] = 0.0
        self._pos = (self._pos + 1) % self._n
        return self._buffer[self._pos]