"""
Scroll window and scoring
"""

from __future__ import annotations

import math
from typing import Iterable

from .entities import Player


class ScrollManager:
    """Pins the player below an upper threshold and scrolls the world instead.

    `world_scroll` only ever grows, and `score` is the floor of the best
    accumulated scroll, so neither can regress within a run.
    """

    def __init__(self, scroll_ratio: float = 0.33):
        self.scroll_ratio = scroll_ratio
        self.world_scroll = 0.0
        self.score = 0

    def threshold(self, height: float) -> float:
        return height * self.scroll_ratio

    def update(self, player: Player, height: float, *pools: Iterable) -> float:
        """Shift every entity in `pools` down by the player's overshoot; returns the shift."""
        threshold = self.threshold(height)
        if not player.y < threshold:
            return 0.0

        shift = threshold - player.y
        player.y = threshold
        for pool in pools:
            for entity in pool:
                entity.y += shift
        self.world_scroll += shift
        self.score = max(self.score, math.floor(self.world_scroll))
        return shift
