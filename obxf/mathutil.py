"""Pitch and parameter scaling helpers."""

from __future__ import annotations

import math

LN2 = 0.69314718056
MULT = LN2 / 12.0


def get_pitch(index: float) -> float:
    """Return the frequency in Hz of a note ``index`` semitones from A 440."""
    return 440.0 * math.exp(MULT * index)


def linsc(param: float, minimum: float, maximum: float) -> float:
    """Scale a normalised ``param`` linearly onto ``minimum``..``maximum``."""
    return param * (maximum - minimum) + minimum


def logsc(param: float, minimum: float, maximum: float, rolloff: float = 19.0) -> float:
    """Scale a normalised ``param`` exponentially onto ``minimum``..``maximum``."""
    curve = (math.exp(param * math.log(rolloff + 1.0)) - 1.0) / rolloff
    return curve * (maximum - minimum) + minimum