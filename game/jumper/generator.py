"""
Procedural world generation

Keeps platform coverage from the current top-most platform up to a lookahead
line above the viewport, within a per-frame spawn budget and a pool limit.
"""

from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass
from typing import List

from .config import JumperConfig, Viewport
from .entities import Hazard, Pellet, Platform, PlatformKind
from .utils import chance, uniform

logger = logging.getLogger(__name__)


@dataclass
class GenerationReport:
    """Outcome of one generator pass"""
    spawned: int
    cap: int
    highest: float
    desired_top: float
    budget_exhausted: bool  # the per-frame spawn cap stopped the lookahead fill
    pool_full: bool = False  # the pool limit stopped it

    @property
    def lookahead_reached(self) -> bool:
        return self.highest <= self.desired_top


class WorldGenerator:
    """Spawns platforms plus the pellets and hazards that ride on them"""

    def __init__(self, config: JumperConfig, rng: random.Random):
        self.config = config
        self.rng = rng

    def capacity(self, viewport: Viewport) -> int:
        """Target pool size, scaled up for viewports taller than the reference"""
        cfg = self.config
        scaled = math.ceil(cfg.platform_count * viewport.height / cfg.reference_height)
        return max(cfg.platform_count, scaled)

    def pool_limit(self, viewport: Viewport) -> int:
        return self.capacity(viewport) + self.config.top_up_cap

    def spawn_cap(self, player_vy: float) -> int:
        """Per-frame cap, scaled by vertical speed"""
        cfg = self.config
        speed_factor = max(1, math.ceil(abs(player_vy) / cfg.speed_divisor))
        return min(cfg.hard_spawn_cap, cfg.base_spawn_cap * speed_factor)

    def make_platform(self, y: float, vy: float, viewport: Viewport,
                      kind: PlatformKind = PlatformKind.NORMAL) -> Platform:
        cfg = self.config
        w = uniform(self.rng, cfg.platform_w)
        free = viewport.width - w - 2 * cfg.side_margin
        x = self.rng.random() * max(0.0, free) + cfg.side_margin
        # Only platforms spawned above the viewport slide into place
        slide = cfg.drift_distance if y < 0 and vy > 0 else 0.0
        return Platform(x=x, y=y, w=w, h=cfg.platform_h, vy=vy if slide else 0.0,
                        kind=kind, slide=slide)

    def spawn(self, y: float, viewport: Viewport, platforms: List[Platform],
              pellets: List[Pellet], hazards: List[Hazard]) -> Platform:
        """Roll one platform and its riders at height y"""
        cfg = self.config
        vy = uniform(self.rng, cfg.drift_vy)
        kind = PlatformKind.HAZARDOUS if chance(self.rng, cfg.hazardous_chance) else PlatformKind.NORMAL
        platform = self.make_platform(y, vy, viewport, kind)
        platforms.append(platform)

        if kind is PlatformKind.NORMAL:
            if chance(self.rng, cfg.pellet_chance):
                offset = cfg.pellet_r + cfg.pellet_gap
                pellets.append(Pellet(
                    x=platform.x + platform.w / 2,
                    y=platform.y - offset,
                    r=cfg.pellet_r,
                    vy=platform.vy,
                    slide=platform.slide,
                ))
            if chance(self.rng, cfg.hazard_chance):
                hazards.append(self.make_hazard(platform, viewport))
        return platform

    def make_hazard(self, platform: Platform, viewport: Viewport) -> Hazard:
        cfg = self.config
        direction = 1 if self.rng.random() < 0.5 else -1
        speed = uniform(self.rng, cfg.hazard_speed)
        x = -cfg.hazard_r if direction > 0 else viewport.width + cfg.hazard_r
        y = platform.y - uniform(self.rng, cfg.hazard_offset)
        return Hazard(x=x, y=y, vx=speed * direction, r=cfg.hazard_r, direction=direction)

    def top_up(self, platforms: List[Platform], pellets: List[Pellet],
               hazards: List[Hazard], viewport: Viewport,
               player_vy: float) -> GenerationReport:
        cfg = self.config
        highest = min((p.y for p in platforms), default=viewport.height)
        desired_top = -cfg.lookahead_screens * viewport.height
        cap = self.spawn_cap(player_vy)
        capacity = self.capacity(viewport)
        limit = capacity + cfg.top_up_cap

        spawned = 0
        while highest > desired_top and spawned < cap and len(platforms) < limit:
            highest = self.spawn(highest - uniform(self.rng, cfg.spacing),
                                 viewport, platforms, pellets, hazards).y
            spawned += 1
        short = highest > desired_top
        exhausted = short and spawned >= cap
        pool_full = short and len(platforms) >= limit

        # Pre-fill with looser spacing, bounded separately
        while len(platforms) < capacity and spawned < cap + cfg.top_up_cap:
            highest = self.spawn(highest - uniform(self.rng, cfg.top_up_spacing),
                                 viewport, platforms, pellets, hazards).y
            spawned += 1

        if spawned:
            logger.debug("spawned %d platforms (cap %d), top at %.1f", spawned, cap, highest)
        return GenerationReport(
            spawned=spawned,
            cap=cap,
            highest=highest,
            desired_top=desired_top,
            budget_exhausted=exhausted,
            pool_full=pool_full,
        )
