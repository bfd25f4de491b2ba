"""Program host: the plugin's program list, parameter routing and change notification."""

from __future__ import annotations

import os
from collections.abc import Sequence
from typing import Callable

from obxf.bank import PROGRAM_COUNT, Bank
from obxf.fifo import ParameterFifo
from obxf.library import PresetLibrary

PLUGIN_NAME = "OB-Xf"
DEFAULT_SAMPLE_RATE = 44100.0
SUPPORTED_OUTPUT_CHANNELS = (1, 2)
DEFAULT_FIFO_CAPACITY = 1024

ParameterSink = Callable[[int, float], None]


class ProgramHost:
    """Owns the bank of programs and routes parameter values to the engine."""

    name = PLUGIN_NAME
    accepts_midi = True
    produces_midi = False
    is_midi_effect = False
    tail_length_seconds = 0.0
    has_editor = True

    def __init__(
        self,
        param_count: int,
        defaults: Sequence[float] | None = None,
        *,
        engine: ParameterSink | None = None,
        host_update: Callable[[], None] | None = None,
        program_count: int = PROGRAM_COUNT,
        fifo_capacity: int = DEFAULT_FIFO_CAPACITY,
    ) -> None:
        self.param_count = param_count
        self.bank = Bank(param_count, defaults, program_count)
        self.engine = engine
        self.host_update = host_update
        self.fifo = ParameterFifo(fifo_capacity)
        self.sample_rate = DEFAULT_SAMPLE_RATE
        self.is_host_automated_change = True
        self._listeners: list[Callable[[], None]] = []

        self._apply_current_program()
        self.set_current_program(0)

    # Change notification

    def add_change_listener(self, listener: Callable[[], None]) -> None:
        """Call ``listener`` whenever the program or its state changes."""
        self._listeners.append(listener)

    def _send_change_message(self) -> None:
        for listener in list(self._listeners):
            listener()

    def _update_host_display(self) -> None:
        if self.host_update is not None:
            self.host_update()

    # Programs

    def num_programs(self) -> int:
        """Return the number of programs in the bank."""
        return len(self.bank)

    def current_program(self) -> int:
        """Return the index of the current program."""
        return self.bank.current_program

    def _apply_current_program(self) -> None:
        program = self.bank.current()
        for index, value in enumerate(list(program.values)):
            self._send_to_engine(index, value)

    def set_current_program(self, index: int, update_host: bool = True) -> None:
        """Select program ``index``, push its values to the engine and notify."""
        self.bank.select(index)
        self.is_host_automated_change = False
        self.fifo.clear()
        try:
            self._apply_current_program()
        finally:
            self.is_host_automated_change = True
        self._send_change_message()
        if update_host:
            self._update_host_display()

    def on_program_change(self, program_number: int) -> None:
        """Handle a MIDI program change."""
        self.set_current_program(program_number)

    def program_name(self, index: int) -> str:
        """Return the name of program ``index``."""
        return self.bank.programs[index].name

    def change_program_name(self, index: int, name: str) -> None:
        """Rename program ``index``."""
        self.bank.programs[index].name = name

    # Parameters

    def _send_to_engine(self, index: int, value: float) -> None:
        if self.engine is not None:
            self.engine(index, value)

    def update_program_value(self, index: int, value: float) -> None:
        """Store ``value`` for parameter ``index`` in the current program."""
        self.bank.current().values[index] = value

    def set_parameter(self, index: int, value: float) -> bool:
        """Apply a host change of parameter ``index``; return False if out of range."""
        if not 0 <= index < self.param_count:
            return False
        self.is_host_automated_change = False
        try:
            self.update_program_value(index, value)
            self._send_to_engine(index, value)
        finally:
            self.is_host_automated_change = True
        return True

    # Audio configuration

    def prepare_to_play(self, sample_rate: float) -> None:
        """Record the sample rate the host will run at."""
        if sample_rate <= 0:
            raise ValueError(f"sample rate must be positive, got {sample_rate}")
        self.sample_rate = float(sample_rate)

    def is_bus_layout_supported(self, output_channels: int) -> bool:
        """Return True for mono or stereo output."""
        return output_channels in SUPPORTED_OUTPUT_CHANNELS

    # Preset library

    def make_library(
        self,
        document_folder: str | os.PathLike[str] | None = None,
        *,
        load_state: Callable[[bytes], bool] | None = None,
        get_state: Callable[[], bytes] | None = None,
        get_program_state: Callable[[], bytes] | None = None,
    ) -> PresetLibrary:
        """Return a preset library wired to this host's programs."""

        def set_patch_name(name: str) -> None:
            self.bank.current().name = name

        def reset_patch() -> None:
            self.bank.current().set_default_values()

        def is_program_name(index: int, name: str) -> bool:
            return self.bank.programs[index].name == name

        return PresetLibrary(
            document_folder,
            load_state=load_state,
            get_state=get_state,
            get_program_state=get_program_state,
            num_programs=self.num_programs,
            program_name=lambda: self.bank.current().name,
            set_patch_name=set_patch_name,
            reset_patch_to_default=reset_patch,
            send_change_message=self._send_change_message,
            set_current_program=lambda index: self.set_current_program(index),
            is_program_name=is_program_name,
            host_update=self._update_host_display,
        )