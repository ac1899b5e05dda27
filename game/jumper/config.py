"""
Tunables for the jumper simulation

All distances are pixels and all velocities are pixels per nominal 16 ms
tick. Ranges are (low, high) tuples sampled uniformly.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, fields, replace as _dc_replace
from typing import Tuple


class ConfigError(ValueError):
    """Raised when a configuration would make the simulation degenerate"""


@dataclass(frozen=True)
class JumperConfig:
    # Timing
    nominal_dt: float = 16.0  # ms
    max_dt: float = 32.0  # ms, clamp against frame hitches

    # Player
    player_r: float = 18.0
    min_player_r: float = 10.0
    max_player_r: float = 30.0
    start_offset: float = 80.0  # distance of the spawn point above the bottom
    start_vy_factor: float = 0.85

    # Motion
    gravity: float = 0.6
    jump_vel: float = -25.5  # bounce at base radius
    friction: float = 0.98
    key_accel: float = 0.6
    pointer_gain: float = 0.0025
    land_epsilon: float = 0.01

    # Damage and pickups
    hazard_platform_shrink: float = 3.0
    hazard_platform_bounce: float = 0.6  # bounce multiplier on hazardous platforms
    pellet_growth: float = 2.0
    pellet_boost: float = -8.0
    hazard_shrink: float = 3.0
    hazard_bounce_damping: float = 0.5
    hazard_knockback: float = 6.0

    # Scrolling / pruning
    scroll_ratio: float = 0.33
    prune_margin: float = 50.0

    # Generation
    platform_count: int = 30  # pool capacity at reference_height
    reference_height: float = 720.0
    lookahead_screens: float = 2.0
    base_spawn_cap: int = 8
    speed_divisor: float = 6.0
    hard_spawn_cap: int = 48
    top_up_cap: int = 12
    spacing: Tuple[float, float] = (50.0, 130.0)
    top_up_spacing: Tuple[float, float] = (70.0, 190.0)
    platform_w: Tuple[float, float] = (80.0, 200.0)
    platform_h: float = 14.0
    side_margin: float = 10.0
    drift_vy: Tuple[float, float] = (0.6, 1.2)
    drift_distance: float = 30.0  # slide of platforms spawned above the viewport
    hazardous_chance: float = 0.10
    pellet_chance: float = 0.15
    pellet_r: float = 8.0
    pellet_gap: float = 4.0
    hazard_chance: float = 0.08
    hazard_r: float = 10.0
    hazard_speed: Tuple[float, float] = (3.0, 5.0)
    hazard_offset: Tuple[float, float] = (20.0, 80.0)

    # Starting layout
    start_platform_w: float = 140.0
    start_platform_gap: float = 6.0
    initial_platforms: int = 8
    initial_drift: float = 1.5

    def replace(self, **changes) -> "JumperConfig":
        """Return a validated copy with some fields changed"""
        return _dc_replace(self, **changes).validate()

    def validate(self) -> "JumperConfig":
        """Fail fast on values that could stall or corrupt generation."""
        for f in fields(self):
            value = getattr(self, f.name)
            values = value if isinstance(value, tuple) else (value,)
            for v in values:
                if not math.isfinite(v):
                    raise ConfigError(f"{f.name} must be finite, got {value!r}")

        positive = (
            "nominal_dt", "max_dt", "player_r", "min_player_r", "max_player_r",
            "gravity", "platform_h", "pellet_r", "hazard_r", "speed_divisor",
            "lookahead_screens", "scroll_ratio", "reference_height",
        )
        for name in positive:
            if getattr(self, name) <= 0:
                raise ConfigError(f"{name} must be > 0, got {getattr(self, name)!r}")

        for name in ("platform_count", "base_spawn_cap", "hard_spawn_cap"):
            if getattr(self, name) < 1:
                raise ConfigError(f"{name} must be >= 1, got {getattr(self, name)!r}")

        non_negative = (
            "top_up_cap", "prune_margin", "side_margin", "pellet_gap",
            "land_epsilon", "start_offset", "start_platform_gap",
            "initial_platforms", "hazard_platform_shrink", "pellet_growth",
            "hazard_shrink", "hazard_knockback", "drift_distance",
        )
        for name in non_negative:
            if getattr(self, name) < 0:
                raise ConfigError(f"{name} must be >= 0, got {getattr(self, name)!r}")

        if not self.min_player_r <= self.player_r <= self.max_player_r:
            raise ConfigError(
                f"player_r {self.player_r} outside [{self.min_player_r}, {self.max_player_r}]"
            )
        if self.jump_vel >= 0:
            raise ConfigError("jump_vel must be negative (upward)")
        if self.pellet_boost > 0:
            raise ConfigError("pellet_boost must be <= 0 (upward)")
        if not 0.0 < self.friction <= 1.0:
            raise ConfigError("friction must be in (0, 1]")
        if not 0.0 < self.scroll_ratio < 1.0:
            raise ConfigError("scroll_ratio must be in (0, 1)")
        for name in ("hazard_platform_bounce", "hazard_bounce_damping"):
            if not 0.0 <= getattr(self, name) <= 1.0:
                raise ConfigError(f"{name} must be in [0, 1]")
        for name in ("hazardous_chance", "pellet_chance", "hazard_chance"):
            if not 0.0 <= getattr(self, name) <= 1.0:
                raise ConfigError(f"{name} must be a probability in [0, 1]")

        # Strictly positive lower bounds keep every spawn above the last one
        for name in ("spacing", "top_up_spacing", "platform_w", "hazard_speed"):
            lo, hi = getattr(self, name)
            if lo <= 0 or hi < lo:
                raise ConfigError(f"{name} must satisfy 0 < low <= high, got {(lo, hi)!r}")
        for name in ("drift_vy", "hazard_offset"):
            lo, hi = getattr(self, name)
            if lo < 0 or hi < lo:
                raise ConfigError(f"{name} must satisfy 0 <= low <= high, got {(lo, hi)!r}")

        if self.hard_spawn_cap < self.base_spawn_cap:
            raise ConfigError("hard_spawn_cap must be >= base_spawn_cap")
        if self.spacing[0] - self.drift_distance < self.platform_h:
            raise ConfigError("spacing low bound minus drift_distance must be >= platform_h")
        if self.max_dt < self.nominal_dt:
            raise ConfigError("max_dt must be >= nominal_dt")
        return self


DEFAULT_CONFIG = JumperConfig()


@dataclass(frozen=True)
class Viewport:
    """Viewport geometry in pixels"""
    width: float
    height: float

    @staticmethod
    def is_valid(width: float, height: float) -> bool:
        return (
            math.isfinite(width) and math.isfinite(height)
            and width > 0 and height > 0
        )

    def __post_init__(self):
        if not Viewport.is_valid(self.width, self.height):
            raise ConfigError(f"invalid viewport {self.width!r}x{self.height!r}")
