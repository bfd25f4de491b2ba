"""Preset bar: shows the current program and steps between programs."""

from __future__ import annotations

from typing import Callable, Protocol


class ProgramNavigator(Protocol):
    """What the preset bar needs from the editor."""

    def prev_program(self) -> None: ...

    def next_program(self) -> None: ...

    def current_program_index(self) -> int: ...

    def current_program_name(self) -> str: ...


def format_preset_label(index: int, name: str) -> str:
    """Return the label for program ``index`` (zero based): number padded to three, then name."""
    return f"{str(index + 1).rjust(3, '0')}: {name}"


class PresetBar:
    """Holds the preset label text and forwards navigation to the editor."""

    def __init__(self, editor: ProgramNavigator) -> None:
        self.editor = editor
        self.text = "---"
        self.on_label_click: Callable[[tuple[int, int]], None] | None = None

    def update(self) -> str:
        """Refresh the label from the editor's current program and return it."""
        self.text = format_preset_label(
            self.editor.current_program_index(), self.editor.current_program_name()
        )
        return self.text

    def previous_clicked(self) -> None:
        """Step to the previous program."""
        self.editor.prev_program()

    def next_clicked(self) -> None:
        """Step to the next program."""
        self.editor.next_program()

    def label_clicked(self, position: tuple[int, int]) -> None:
        """Report a left click on the label at screen ``position``."""
        if self.on_label_click is not None:
            self.on_label_click(position)