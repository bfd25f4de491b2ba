"""Half-band polyphase decimators reducing two input samples to one."""

from __future__ import annotations


class _HalfBandDecimator:
    """Half-band FIR decimator built from a chain of partial-sum registers."""

    def __init__(self, center_tap: float, odd_taps: tuple[float, ...]) -> None:
        # odd_taps runs h1, h3, ...; registers run from the outermost tap inwards
        # and out again, with the centre tap fed by the second input.
        outer_first = tuple(reversed(odd_taps))
        self._h0 = center_tap
        self._coeffs = outer_first + tuple(odd_taps)
        self._center = len(odd_taps) - 1
        self._registers = [0.0] * (len(self._coeffs) - 1)

    def _step(self, x0: float, x1: float) -> float:
        regs = self._registers
        out = regs[-1] + self._coeffs[-1] * x0
        shifted = [0.0] + regs[:-1]
        self._registers = [prev + c * x0 for prev, c in zip(shifted, self._coeffs)]
        self._registers[self._center] += self._h0 * x1
        return out


class Decimator17(_HalfBandDecimator):
    """Seventeen-tap half-band decimator."""

    def __init__(self) -> None:
        super().__init__(
            0.5,
            (
                0.314356238,
                -0.0947515890,
                0.0463142134,
                -0.0240881704,
                0.0120250406,
                -0.00543170841,
                0.00207426259,
                -0.000572688237,
                5.18944944e-005,
            ),
        )

    def calc(self, x0: float, x1: float) -> float:
        """Feed the sample pair ``x0``, ``x1`` and return one output sample."""
        return self._step(x0, x1)


class Decimator9(_HalfBandDecimator):
    """Nine-tap half-band decimator."""

    def __init__(self) -> None:
        super().__init__(
            8192.0 / 16384.0,
            (
                5042.0 / 16384.0,
                -1277.0 / 16384.0,
                429.0 / 16384.0,
                -116.0 / 16384.0,
                18.0 / 16384.0,
            ),
        )

    def calc(self, x0: float, x1: float) -> float:
        """Feed the sample pair ``x0``, ``x1`` and return one output sample."""
        return self._step(x0, x1)