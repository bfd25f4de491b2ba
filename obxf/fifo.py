"""Bounded queue of parameter changes passed between threads."""

from __future__ import annotations

import threading
from collections import deque
from dataclasses import dataclass

MAX_PARAM_ID_LEN = 32


def _truncate_id(parameter_id: str) -> str:
    raw = parameter_id.encode("utf-8")[: MAX_PARAM_ID_LEN - 1]
    return raw.decode("utf-8", errors="ignore")


@dataclass(frozen=True)
class ParameterChange:
    """A parameter identifier with its new value; the id is cut to 31 UTF-8 bytes."""

    parameter_id: str = ""
    new_value: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "parameter_id", _truncate_id(self.parameter_id))


class ParameterFifo:
    """First-in first-out queue holding at most ``capacity - 1`` changes."""

    def __init__(self, capacity: int) -> None:
        if capacity < 1:
            raise ValueError(f"capacity must be at least 1, got {capacity}")
        self.capacity = capacity
        self._items: deque[ParameterChange] = deque()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._items)

    def clear(self) -> None:
        """Discard every queued change."""
        with self._lock:
            self._items.clear()

    def free_space(self) -> int:
        """Return how many more changes can be pushed."""
        return self.capacity - len(self._items) - 1

    def push(self, parameter_id: str, new_value: float) -> bool:
        """Queue a change; return False if the queue is full."""
        with self._lock:
            if self.free_space() <= 0:
                return False
            self._items.append(ParameterChange(parameter_id, new_value))
            return True

    def pop(self) -> ParameterChange | None:
        """Return the oldest change, or None if the queue is empty."""
        with self._lock:
            if not self._items:
                return None
            return self._items.popleft()