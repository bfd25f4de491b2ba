"""Bank of programs with a current selection."""

from __future__ import annotations

from collections.abc import Sequence

PROGRAM_COUNT = 128


class Program:
    """One program: a name and one normalised value per parameter."""

    def __init__(self, defaults: Sequence[float], name: str = "Default") -> None:
        self.defaults = tuple(float(v) for v in defaults)
        self.values = list(self.defaults)
        self.name = name

    def set_default_values(self) -> None:
        """Restore every parameter value to its default."""
        self.values = list(self.defaults)


class Bank:
    """A fixed set of programs, one of which is current."""

    def __init__(
        self,
        param_count: int,
        defaults: Sequence[float] | None = None,
        program_count: int = PROGRAM_COUNT,
    ) -> None:
        if param_count < 0 or program_count < 1:
            raise ValueError("a bank needs at least one program and a non-negative parameter count")
        if defaults is None:
            defaults = [0.0] * param_count
        elif len(defaults) != param_count:
            raise ValueError(f"expected {param_count} default values, got {len(defaults)}")
        self.programs = [Program(defaults) for _ in range(program_count)]
        self.current_program = 0

    def __len__(self) -> int:
        return len(self.programs)

    def select(self, index: int) -> Program:
        """Make program ``index`` current and return it."""
        if not 0 <= index < len(self.programs):
            raise IndexError(f"program index {index} out of range 0..{len(self.programs) - 1}")
        self.current_program = index
        return self.programs[index]

    def current(self) -> Program:
        """Return the current program."""
        return self.programs[self.current_program]