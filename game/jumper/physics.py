"""
Physics integration and collision resolution
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Tuple

from .config import JumperConfig
from .controls import InputState
from .entities import Hazard, Pellet, Platform, Player
from .utils import circle_collide, clamp

logger = logging.getLogger(__name__)


def set_radius(player: Player, r: float, config: JumperConfig):
    """Single entry point for radius changes; keeps r in bounds"""
    player.r = clamp(r, config.min_player_r, config.max_player_r)


def bounce_velocity(player: Player, config: JumperConfig) -> float:
    """Upward landing velocity, proportional to current size"""
    return config.jump_vel * (player.r / config.player_r)


def wrap_horizontal(player: Player, width: float):
    # Torus on x only. Left uses <= so a ball resting exactly on -r wraps.
    if player.x <= -player.r:
        player.x = width + player.r
    elif player.x > width + player.r:
        player.x = -player.r


def integrate_player(player: Player, controls: InputState, dt: float,
                     width: float, config: JumperConfig):
    scale = dt / config.nominal_dt

    ax = controls.direction * config.key_accel
    if controls.pointer_x is not None:
        ax += (controls.pointer_x - player.x) * config.pointer_gain
    player.vx += ax * scale
    player.vx *= config.friction ** scale
    player.x += player.vx * scale

    player.vy += config.gravity * scale
    player.y += player.vy * scale

    wrap_horizontal(player, width)


def _drift(entity, scale: float):
    # Slide is bounded by drift_distance, so gaps shrink by at most that much
    if not entity.vy:
        return
    step = min(entity.vy * scale, entity.slide)
    entity.y += step
    entity.slide -= step
    if entity.slide <= 0:
        entity.slide = 0.0
        entity.vy = 0.0


def advance_world(platforms: Iterable[Platform], pellets: Iterable[Pellet],
                  hazards: Iterable[Hazard], dt: float, config: JumperConfig):
    """Slide drifting platforms/pellets and move hazards"""
    scale = dt / config.nominal_dt
    for p in platforms:
        _drift(p, scale)
    for pellet in pellets:
        _drift(pellet, scale)
    for h in hazards:
        h.x += h.vx * scale


def landing_candidates(player: Player, platforms: Iterable[Platform],
                       dt: float, config: JumperConfig) -> List[Platform]:
    """Platforms whose swept band the player's bottom crossed this tick"""
    if player.vy <= 0:
        return []
    travel = player.vy * (dt / config.nominal_dt)
    bottom = player.y + player.r
    hits = []
    for p in platforms:
        if (
            player.x + player.r > p.x
            and player.x - player.r < p.x + p.w
            and bottom > p.y
            and bottom < p.y + p.h + travel
        ):
            hits.append(p)
    return hits


def resolve_platforms(player: Player, platforms: Iterable[Platform], dt: float,
                      config: JumperConfig) -> Optional[Platform]:
    """Land on at most one platform per tick.

    When several bands qualify, the platform with the highest top (smallest
    y) wins since it is the first surface the falling ball reaches; equal
    tops keep pool order.
    """
    candidates = landing_candidates(player, platforms, dt, config)
    if not candidates:
        return None

    target = candidates[0]
    for p in candidates[1:]:
        if p.y < target.y:
            target = p

    if target.hazardous:
        set_radius(player, player.r - config.hazard_platform_shrink, config)
        player.vy = bounce_velocity(player, config) * config.hazard_platform_bounce
    else:
        player.vy = bounce_velocity(player, config)
    player.y = target.y - player.r - config.land_epsilon

    if len(candidates) > 1:
        logger.debug("landing resolved among %d overlapping platforms", len(candidates))
    return target


def collect_pellets(player: Player, pellets: List[Pellet],
                    config: JumperConfig) -> Tuple[List[Pellet], int]:
    """Returns (remaining pellets, number picked up)"""
    remaining = []
    picked = 0
    for p in pellets:
        if circle_collide(player.x, player.y, player.r, p.x, p.y, p.r):
            set_radius(player, player.r + config.pellet_growth, config)
            player.vy = min(player.vy, config.pellet_boost)
            picked += 1
        else:
            remaining.append(p)
    return remaining, picked


def resolve_hazards(player: Player, hazards: List[Hazard],
                    config: JumperConfig) -> Tuple[List[Hazard], int]:
    """Returns (remaining hazards, number of hits); hazards are consumed"""
    remaining = []
    hits = 0
    for h in hazards:
        if not circle_collide(player.x, player.y, player.r, h.x, h.y, h.r):
            remaining.append(h)
            continue
        hits += 1
        set_radius(player, player.r - config.hazard_shrink, config)
        if player.vy < 0:
            player.vy *= config.hazard_bounce_damping

        # Push away from the hazard; dead-centre hits follow its travel
        dx = player.x - h.x
        away = (dx > 0) - (dx < 0) or h.direction
        player.vx += config.hazard_knockback * away
    return remaining, hits


def step_physics(player: Player, platforms: List[Platform], pellets: List[Pellet],
                 hazards: List[Hazard], controls: InputState, dt: float,
                 width: float, config: JumperConfig) -> Tuple[List[Pellet], List[Hazard], Dict[str, float]]:
    """One integration + collision pass. Returns surviving pellets/hazards and events."""
    events = {"landing": 0.0, "hazard_landing": 0.0, "pellet": 0.0, "hazard_hit": 0.0}

    integrate_player(player, controls, dt, width, config)
    advance_world(platforms, pellets, hazards, dt, config)

    landed = resolve_platforms(player, platforms, dt, config)
    if landed is not None:
        events["hazard_landing" if landed.hazardous else "landing"] += 1.0

    pellets, picked = collect_pellets(player, pellets, config)
    events["pellet"] += picked
    hazards, hits = resolve_hazards(player, hazards, config)
    events["hazard_hit"] += hits
    return pellets, hazards, events
