"""
Frame stepper: wall-clock timestamps -> clamped delta time
"""

from __future__ import annotations

import math
from typing import Optional

from .config import JumperConfig, DEFAULT_CONFIG
from .utils import clamp


class Stepper:
    """Turns frame timestamps (ms) into a dt in [0, max_dt].

    The first frame after a reset has no previous timestamp and uses the
    nominal tick. Non-finite timestamps also fall back to the nominal tick
    and do not replace the last good timestamp.
    """

    def __init__(self, config: JumperConfig = DEFAULT_CONFIG):
        self.nominal_dt = config.nominal_dt
        self.max_dt = config.max_dt
        self._last: Optional[float] = None

    def reset(self):
        self._last = None

    def tick(self, timestamp_ms: float) -> float:
        if not math.isfinite(timestamp_ms):
            return self.nominal_dt
        if self._last is None:
            self._last = timestamp_ms
            return self.nominal_dt
        dt = timestamp_ms - self._last
        self._last = timestamp_ms
        return clamp(dt, 0.0, self.max_dt)

    @property
    def last_timestamp(self) -> Optional[float]:
        return self._last
