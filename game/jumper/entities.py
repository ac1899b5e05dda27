"""
Game entity dataclasses
"""

from dataclasses import dataclass
from enum import Enum


class PlatformKind(str, Enum):
    NORMAL = "normal"
    HAZARDOUS = "hazardous"


@dataclass
class Player:
    """Player ball"""
    x: float
    y: float
    r: float = 18.0
    vx: float = 0.0
    vy: float = 0.0

    @property
    def top(self) -> float:
        return self.y - self.r

    @property
    def bottom(self) -> float:
        return self.y + self.r


@dataclass
class Platform:
    """Axis-aligned platform; drifts down while `slide` distance remains"""
    x: float
    y: float
    w: float
    h: float = 14.0
    vy: float = 0.0
    kind: PlatformKind = PlatformKind.NORMAL
    slide: float = 0.0

    @property
    def hazardous(self) -> bool:
        return self.kind is PlatformKind.HAZARDOUS


@dataclass
class Pellet:
    """Collectible pellet riding above a platform"""
    x: float
    y: float
    r: float = 8.0
    vy: float = 0.0
    slide: float = 0.0


@dataclass
class Hazard:
    """Projectile crossing the viewport horizontally"""
    x: float
    y: float
    vx: float
    r: float = 10.0
    direction: int = 1  # +1 moving right, -1 moving left
