"""
Scheduler port: request the next frame callback, or cancel it
"""

from __future__ import annotations

from typing import Callable, Dict, List, Tuple

FrameCallback = Callable[[float], None]  # receives a timestamp in ms


class Scheduler:
    def request(self, callback: FrameCallback) -> int:
        raise NotImplementedError

    def cancel(self, handle: int) -> None:
        raise NotImplementedError


class ManualScheduler(Scheduler):
    """Headless scheduler; the caller fires frames with explicit timestamps"""

    def __init__(self):
        self._next_handle = 1
        self._pending: Dict[int, FrameCallback] = {}

    @property
    def pending(self) -> int:
        return len(self._pending)

    def request(self, callback: FrameCallback) -> int:
        handle = self._next_handle
        self._next_handle += 1
        self._pending[handle] = callback
        return handle

    def cancel(self, handle: int) -> None:
        self._pending.pop(handle, None)

    def fire(self, timestamp_ms: float) -> int:
        """Run every callback pending right now; returns how many ran"""
        due: List[Tuple[int, FrameCallback]] = list(self._pending.items())
        self._pending.clear()
        for _, callback in due:
            callback(timestamp_ms)
        return len(due)

    def run(self, frames: int, frame_ms: float = 16.0, start_ms: float = 0.0) -> float:
        """Fire up to `frames` frames at a fixed cadence; returns the last timestamp"""
        t = start_ms
        for _ in range(frames):
            if not self._pending:
                break
            t += frame_ms
            self.fire(t)
        return t

