"""
Input latch and the adapter that feeds it from host events
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional

LEFT_KEYS = frozenset({"ArrowLeft", "a", "A"})
RIGHT_KEYS = frozenset({"ArrowRight", "d", "D"})


@dataclass(frozen=True)
class InputState:
    """Snapshot of player intent consumed once per frame"""
    left: bool = False
    right: bool = False
    pointer_x: Optional[float] = None  # None when no pointer is steering

    @property
    def direction(self) -> int:
        return int(self.right) - int(self.left)


class InputAdapter:
    """Latches host events; the simulation reads `state` at frame start.

    Handlers never touch the simulation, so event timing is decoupled from
    step timing.
    """

    def __init__(self):
        self._held = set()
        self._pointer_x: Optional[float] = None

    def key_down(self, key: str):
        self._held.add(key)

    def key_up(self, key: str):
        self._held.discard(key)

    def pointer_move(self, x: float):
        self._pointer_x = float(x)

    def pointer_leave(self):
        self._pointer_x = None

    def clear(self):
        self._held.clear()
        self._pointer_x = None

    @property
    def state(self) -> InputState:
        return InputState(
            left=bool(self._held & LEFT_KEYS),
            right=bool(self._held & RIGHT_KEYS),
            pointer_x=self._pointer_x,
        )


def with_direction(state: InputState, direction: int) -> InputState:
    """Input state holding exactly one direction (-1, 0, +1)"""
    return replace(state, left=direction < 0, right=direction > 0)
