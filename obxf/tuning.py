"""Note tuning: twelve-tone equal temperament or an external tuning master."""

from __future__ import annotations

import enum
from typing import Protocol


class TuningSource(Protocol):
    """An external source of microtuning, such as a tuning master."""

    def has_master(self) -> bool: ...

    def retuning_in_semitones(self, midi_index: int, channel: int) -> float: ...

    def scale_name(self) -> str: ...


class TuningMode(enum.Enum):
    """Where note tuning comes from."""

    MTS_ESP = enum.auto()
    TWELVE_TET = enum.auto()


class Tuning:
    """Maps MIDI note numbers to tuned fractional note numbers."""

    def __init__(self, source: TuningSource | None = None) -> None:
        self.source = source
        self.mode = TuningMode.TWELVE_TET

    def update_status(self) -> None:
        """Use the external master when one is present, equal temperament otherwise."""
        self.mode = TuningMode.MTS_ESP if self.has_master() else TuningMode.TWELVE_TET

    def has_master(self) -> bool:
        """Return True if an external tuning master is connected."""
        return self.source is not None and bool(self.source.has_master())

    def midi_note_from_master(self, midi_index: int) -> float:
        """Return ``midi_index`` retuned by the external master."""
        if self.source is None:
            return float(midi_index)
        return midi_index + self.source.retuning_in_semitones(midi_index, -1)

    def tuned_midi_note(self, midi_index: int) -> float:
        """Return the tuned note number for ``midi_index`` in the current mode."""
        if self.mode is TuningMode.MTS_ESP:
            return self.midi_note_from_master(midi_index)
        return float(midi_index)

    def scale_name(self) -> str:
        """Return the external master's scale name, or an empty string."""
        if self.source is None:
            return ""
        return self.source.scale_name()