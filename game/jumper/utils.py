"""
Utility functions for game mechanics
"""

from __future__ import annotations
import random
from typing import Optional, Tuple
import numpy as np


def clamp(x: float, lo: float, hi: float) -> float:
    """Clamp value between low and high bounds"""
    return lo if x < lo else hi if x > hi else x


def circle_collide(x1, y1, r1, x2, y2, r2) -> bool:
    """Check if two circles collide"""
    dx = x1 - x2
    dy = y1 - y2
    rr = r1 + r2
    return (dx * dx + dy * dy) <= (rr * rr)


def uniform(rng: random.Random, bounds: Tuple[float, float]) -> float:
    """Draw from [lo, hi) using only rng.random()"""
    lo, hi = bounds
    return lo + rng.random() * (hi - lo)


def chance(rng: random.Random, p: float) -> bool:
    return rng.random() < p


def make_rng(seed: Optional[int] = None) -> random.Random:
    """Independent seedable source for one session"""
    return random.Random(seed)


def seed_everything(py_seed: Optional[int]):
    """Seed all random number generators"""
    if py_seed is None:
        return
    random.seed(py_seed)
    np.random.seed(py_seed)
