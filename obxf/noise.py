"""White, pink and red noise generators driven by a linear congruential generator."""

from __future__ import annotations

import math

MAX_RANDOM_ROWS = 30
RANDOM_BITS = 24
RANDOM_SHIFT = 32 - RANDOM_BITS


def _int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value & 0x80000000 else value


class Noise:
    """Noise source producing white, pink (Voss-McCartney) and red noise."""

    def __init__(self) -> None:
        self._white_state = 0
        # Compensates volume at higher sample rates, where the noise bandwidth widens.
        self._vol_comp = 1.0
        self._red_state = 0.0
        self._rows = [0] * MAX_RANDOM_ROWS
        self._running_sum = 0
        self._index = 0
        self._index_mask = 0
        self._scale = 1.0
        self.set_pink_noise_gen()

    def set_sample_rate(self, sr: float, num_pink_generators: int = 10) -> None:
        """Adapt the white noise level to ``sr`` and reset the pink generator."""
        self._vol_comp = (4.6567e-10 * 0.5) * math.sqrt(sr / 44100.0)
        self.set_pink_noise_gen(num_pink_generators)

    def seed_white_noise(self, seed: int = 0) -> None:
        """Set the random generator's state."""
        self._white_state = _int32(seed)

    def set_pink_noise_gen(self, num_generators: int = 10) -> None:
        """Reset the pink noise generator to use ``num_generators`` rows."""
        if not 0 <= num_generators <= MAX_RANDOM_ROWS:
            raise ValueError(
                f"number of pink noise generators must be 0..{MAX_RANDOM_ROWS}, "
                f"got {num_generators}"
            )
        self._index = 0
        self._index_mask = (1 << num_generators) - 1
        pmax = (num_generators + 1) * (1 << (RANDOM_BITS - 1))
        self._scale = 1.0 / pmax
        self._rows = [0] * MAX_RANDOM_ROWS
        self._running_sum = 0

    def random_value(self) -> int:
        """Advance the generator and return its new signed 32-bit state."""
        self._white_state = _int32(self._white_state * 1103515245 + 12345)
        return self._white_state

    def white_sample(self) -> float:
        """Return the next white noise sample."""
        return self.random_value() * self._vol_comp

    def pink_sample(self) -> float:
        """Return the next pink noise sample, within -1..1."""
        self._index = (self._index + 1) & self._index_mask

        if self._index != 0:
            index = self._index
            num_zeros = (index & -index).bit_length() - 1
            random_value = self.random_value() >> RANDOM_SHIFT
            # Only one row changes per sample, so the sum is updated in place.
            self._running_sum += random_value - self._rows[num_zeros]
            self._rows[num_zeros] = random_value

        random_value = self.random_value() >> RANDOM_SHIFT
        return self._scale * (self._running_sum + random_value)

    def red_sample(self) -> float:
        """Return the next red (Brownian) noise sample, reflected into -1..1."""
        state = self._red_state + self.white_sample() * 0.05
        if state > 1.0:
            state = 2.0 - state
        elif state < -1.0:
            state = -2.0 - state
        self._red_state = state
        return state