"""Button state tracking with pressed and released edges."""

from __future__ import annotations

from enum import IntFlag
from typing import Callable, Optional

_MASK = 0xFFFF


class Key(IntFlag):
    """Console buttons as bits of the key state."""

    NONE = 0
    A = 1
    B = 2
    SELECT = 4
    START = 8
    RIGHT = 16
    LEFT = 32
    UP = 64
    DOWN = 128
    R = 256
    L = 512
    X = 1024
    Y = 2048
    TOUCH = 4096
    LID = 8192


class KeyState:
    """Keeps the current and previous key states read from ``callback``."""

    def __init__(self, callback: Optional[Callable[[], int]] = None) -> None:
        self.callback = callback
        self._previous = 0
        self._current = 0

    def scan(self) -> None:
        """Read a new state; without a callback the state stays as it is."""
        if self.callback is not None:
            self._previous = self._current
            self._current = int(self.callback()) & _MASK

    def down(self) -> Key:
        """Keys pressed since the previous scan."""
        return Key(self._current & ~self._previous)

    def held(self) -> Key:
        """Keys held down at the last scan."""
        return Key(self._current)

    def current(self) -> Key:
        """Keys held down at the last scan."""
        return Key(self._current)

    def up(self) -> Key:
        """Keys released since the previous scan."""
        return Key(self._previous & ~self._current)