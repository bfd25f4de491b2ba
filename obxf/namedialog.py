"""Dialog state for entering a patch name."""

from __future__ import annotations

import enum
from typing import Callable

TITLE = "Patch Name"


class DialogResult(enum.IntEnum):
    """How the dialog was closed."""

    CANCEL = 0
    OK = 1


class PresetNameDialog:
    """Holds the edited name and reports OK or Cancel with it."""

    def __init__(self, callback: Callable[[DialogResult, str], None] | None = None) -> None:
        self.callback = callback
        self.text = ""

    def set_text(self, text: str) -> None:
        """Replace the edited name."""
        self.text = text

    def _finish(self, result: DialogResult) -> None:
        if self.callback is None:
            raise RuntimeError("no callback is set for the patch name dialog")
        self.callback(result, self.text)

    def ok_clicked(self) -> None:
        """Accept the name."""
        self._finish(DialogResult.OK)

    def cancel_clicked(self) -> None:
        """Dismiss the dialog."""
        self._finish(DialogResult.CANCEL)

    def return_pressed(self) -> None:
        """Accept the name from the keyboard."""
        self._finish(DialogResult.OK)

    def escape_pressed(self) -> None:
        """Dismiss the dialog from the keyboard."""
        self._finish(DialogResult.CANCEL)