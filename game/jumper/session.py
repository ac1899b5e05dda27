"""
Simulation session: owns every entity pool and the per-frame step
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from .config import JumperConfig, Viewport, DEFAULT_CONFIG
from .controls import InputState
from .entities import Hazard, Pellet, Platform, PlatformKind, Player
from .generator import GenerationReport, WorldGenerator
from .physics import step_physics
from .scroll import ScrollManager
from .utils import make_rng

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlayerView:
    x: float
    y: float
    r: float
    vy: float


@dataclass(frozen=True)
class PlatformView:
    x: float
    y: float
    w: float
    h: float
    kind: PlatformKind


@dataclass(frozen=True)
class CircleView:
    x: float
    y: float
    r: float


@dataclass(frozen=True)
class Snapshot:
    """Read-only frame state for a renderer"""
    player: PlayerView
    platforms: Tuple[PlatformView, ...]
    pellets: Tuple[CircleView, ...]
    hazards: Tuple[CircleView, ...]
    score: int
    width: float
    height: float


@dataclass
class StepResult:
    dt: float
    events: Dict[str, float]
    shift: float
    generation: GenerationReport
    fallen: bool
    pruned: int = 0


@dataclass
class SessionStats:
    frames: int = 0
    landings: int = 0
    hazard_landings: int = 0
    pellets: int = 0
    hazard_hits: int = 0


class Session:
    """One run of the game. Restarting means building a new Session."""

    def __init__(self, viewport: Viewport, config: JumperConfig = DEFAULT_CONFIG,
                 rng: Optional[random.Random] = None, populate: bool = True):
        self.config = config.validate()
        self.viewport = viewport
        self.rng = rng if rng is not None else make_rng()

        self.generator = WorldGenerator(self.config, self.rng)
        self.scroll = ScrollManager(self.config.scroll_ratio)
        self.stats = SessionStats()

        self.player = Player(
            x=viewport.width / 2,
            y=viewport.height - self.config.start_offset,
            r=self.config.player_r,
            vy=self.config.jump_vel * self.config.start_vy_factor,
        )
        self.platforms: List[Platform] = []
        self.pellets: List[Pellet] = []
        self.hazards: List[Hazard] = []

        if populate:
            self._build_start_layout()

    # ----------------------------
    # Setup
    # ----------------------------

    def _build_start_layout(self):
        cfg = self.config
        vp = self.viewport

        # Static ground under the spawn point
        w = cfg.start_platform_w
        self.platforms.append(Platform(
            x=max(cfg.side_margin, (vp.width - w) / 2),
            y=self.player.y + self.player.r + cfg.start_platform_gap,
            w=w,
            h=cfg.platform_h,
            vy=0.0,
        ))

        count = min(cfg.initial_platforms, cfg.platform_count - 1)
        for i in range(count):
            y = vp.height - (i * vp.height) / (count - 1 or 1) - 100
            self.platforms.append(self.generator.make_platform(y, cfg.initial_drift, vp))

    # ----------------------------
    # Frame step
    # ----------------------------

    @property
    def score(self) -> int:
        return self.scroll.score

    @property
    def world_scroll(self) -> float:
        return self.scroll.world_scroll

    @property
    def fallen(self) -> bool:
        return self.player.top > self.viewport.height

    def step(self, controls: InputState, dt: float) -> StepResult:
        vp = self.viewport

        self.pellets, self.hazards, events = step_physics(
            self.player, self.platforms, self.pellets, self.hazards,
            controls, dt, vp.width, self.config,
        )
        shift = self.scroll.update(self.player, vp.height,
                                   self.platforms, self.pellets, self.hazards)
        report = self.generator.top_up(self.platforms, self.pellets, self.hazards,
                                       vp, self.player.vy)
        fallen = self.fallen
        pruned = self.prune()

        self.stats.frames += 1
        self.stats.landings += int(events["landing"])
        self.stats.hazard_landings += int(events["hazard_landing"])
        self.stats.pellets += int(events["pellet"])
        self.stats.hazard_hits += int(events["hazard_hit"])

        return StepResult(dt=dt, events=events, shift=shift, generation=report,
                          fallen=fallen, pruned=pruned)

    def prune(self) -> int:
        """Drop entities past the bottom margin and hazards that left the sides"""
        bottom = self.viewport.height + self.config.prune_margin
        width = self.viewport.width
        before = len(self.platforms) + len(self.pellets) + len(self.hazards)

        self.platforms = [p for p in self.platforms if p.y < bottom]
        self.pellets = [p for p in self.pellets if p.y < bottom]
        self.hazards = [
            h for h in self.hazards
            if h.y < bottom
            and not (h.direction > 0 and h.x - h.r > width)
            and not (h.direction < 0 and h.x + h.r < 0)
        ]
        return before - (len(self.platforms) + len(self.pellets) + len(self.hazards))

    # ----------------------------
    # Host boundary
    # ----------------------------

    def resize(self, width: float, height: float) -> bool:
        """Apply a new viewport; degenerate sizes are ignored"""
        if not Viewport.is_valid(width, height):
            logger.warning("ignoring invalid viewport size %rx%r", width, height)
            return False
        self.viewport = Viewport(width, height)
        return True

    def snapshot(self) -> Snapshot:
        p = self.player
        return Snapshot(
            player=PlayerView(p.x, p.y, p.r, p.vy),
            platforms=tuple(PlatformView(q.x, q.y, q.w, q.h, q.kind) for q in self.platforms),
            pellets=tuple(CircleView(q.x, q.y, q.r) for q in self.pellets),
            hazards=tuple(CircleView(q.x, q.y, q.r) for q in self.hazards),
            score=self.score,
            width=self.viewport.width,
            height=self.viewport.height,
        )
