"""Low-frequency oscillator with blended waveforms and tempo sync."""

from __future__ import annotations

import math
import random

from obxf.filters import OnePoleFilter

TWO_PI = 2.0 * math.pi
HALF_PI = 0.5 * math.pi
INV_PI = 1.0 / math.pi
INV_TWO_PI = 1.0 / TWO_PI
TWO_BY_PI = 2.0 / math.pi

# Tempo-synced rates in cycles per quarter note, selected by the raw parameter.
SYNC_RATES = (1.0 / 8.0, 1.0 / 4.0, 1.0 / 3.0, 1.0 / 2.0, 1.0, 3.0 / 2.0, 2.0, 3.0, 4.0)

_SMOOTHING_CUTOFF = 3000.0


def fast_sin(x: float) -> float:
    """Return a rational approximation of sin(x), accurate on -pi..pi."""
    x2 = x * x
    numerator = -x * (
        -11511339840.0 + x2 * (1640635920.0 + x2 * (-52785432.0 + x2 * 479249.0))
    )
    denominator = 11511339840.0 + x2 * (277920720.0 + x2 * (3177720.0 + x2 * 18361.0))
    return numerator / denominator


class Lfo:
    """An LFO mixing triangle/sine, saw/square and glide/sample-and-hold waves."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng if rng is not None else random.Random()
        self._smoother = OnePoleFilter()
        self.sample_rate = 44100.0
        self._sample_rate_inv = 1.0 / self.sample_rate
        self.sync_rate = 1.0
        self._synced = False

        self.phase = 0.0
        self.sine = 0.0
        self.square = 0.0
        self.saw = 0.0
        self.tri = 0.0
        self.sampleglide = 0.0
        self.samplehold = self._next_random()
        self.sg_history = self.samplehold

        self.frequency = 1.0
        self.phase_inc = 0.0
        self.fr_unsc = 0.0  # frequency value without sync
        self.pw = 0.0
        self.raw_param = 0.0
        self.wave1blend = 0.0
        self.wave2blend = 0.0
        self.wave3blend = 0.0

    def _next_random(self) -> float:
        return self._rng.random() * 2.0 - 1.0

    @property
    def synced(self) -> bool:
        """Whether the rate follows the host tempo."""
        return self._synced

    def set_synced(self) -> None:
        """Follow the host tempo, taking the rate from the raw parameter."""
        self._synced = True
        self.recalc_rate(self.raw_param)

    def set_unsynced(self) -> None:
        """Run freely at the last frequency set."""
        self._synced = False
        self.phase_inc = self.fr_unsc

    def host_sync_retrigger(self, bpm: float, quarters: float) -> None:
        """Align the phase with the host position when synced."""
        if self._synced:
            self.phase_inc = (bpm / 60.0) * self.sync_rate
            phase = self.phase_inc * quarters
            self.phase = math.fmod(phase, 1.0) * TWO_PI - math.pi

    def value(self) -> float:
        """Return the smoothed blend of the current waveform values."""
        result = 0.0
        if self.wave1blend >= 0.0:
            result += self.tri * self.wave1blend
        else:
            result += self.sine * -self.wave1blend

        if self.wave2blend >= 0.0:
            result += self.saw * self.wave2blend
        else:
            result += self.square * -self.wave2blend

        if self.wave3blend >= 0.0:
            result += self.sampleglide * self.wave3blend
        else:
            result += self.samplehold * -self.wave3blend

        return self._smoother.lowpass_unwarped(result, _SMOOTHING_CUTOFF, self._sample_rate_inv)

    def set_sample_rate(self, sr: float) -> None:
        """Set the sample rate in Hz."""
        if sr <= 0:
            raise ValueError(f"sample rate must be positive, got {sr}")
        self.sample_rate = sr
        self._sample_rate_inv = 1.0 / sr

    def bend(self, x: float, d: float) -> float:
        """Bend ``x`` by the curvature ``d``; zero leaves it unchanged."""
        if d == 0:
            return x
        a = 0.5 * d
        for _ in range(3):
            x = x - a * x * x + a
        return x

    def update(self) -> None:
        """Advance the phase by one sample and recompute the waveforms."""
        self.phase += self.phase_inc * TWO_PI * self._sample_rate_inv

        if self.phase > math.pi:
            self.phase -= TWO_PI
            self.sg_history = self.samplehold
            self.samplehold = self._next_random()

        phase = self.phase
        self.sine = fast_sin(phase)
        wrap = TWO_PI if phase > HALF_PI else 0.0
        self.tri = TWO_BY_PI * abs(phase + HALF_PI - wrap) - 1.0
        self.square = 1.0 if phase > math.pi * self.pw * 0.9 else -1.0
        self.saw = self.bend(-phase * INV_PI, -self.pw)
        self.sampleglide = (
            self.sg_history
            + (self.samplehold - self.sg_history) * (math.pi + phase) * INV_TWO_PI
        )

    def set_frequency(self, val: float) -> None:
        """Set the free-running frequency in Hz."""
        self.fr_unsc = val
        if not self._synced:
            self.phase_inc = val

    def set_raw_param(self, param: float) -> None:
        """Store the normalised rate parameter, used for synced rate changes."""
        self.raw_param = param
        if self._synced:
            self.recalc_rate(param)

    def recalc_rate(self, param: float) -> None:
        """Pick the synced rate that the normalised ``param`` selects."""
        index = int(param * (len(SYNC_RATES) - 1))
        self.sync_rate = SYNC_RATES[index] if 0 <= index < len(SYNC_RATES) else 1.0