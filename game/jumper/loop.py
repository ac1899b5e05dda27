"""
Game loop: glues lifecycle, scheduler, stepper, input and the session
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from .clock import Stepper
from .config import JumperConfig, Viewport, DEFAULT_CONFIG
from .controls import InputAdapter
from .lifecycle import BestScoreStore, GameState, Lifecycle
from .scheduler import Scheduler
from .session import Session, Snapshot, StepResult
from .utils import make_rng

logger = logging.getLogger(__name__)


class GameLoop:
    """Frame-driven controller for one player.

    Only `frame` mutates the session. A frame is requested from the scheduler
    only while RUNNING; pause, game over and restart cancel the pending
    request, and a callback from an older request is ignored if it fires
    anyway.
    """

    def __init__(
        self,
        viewport: Viewport,
        scheduler: Scheduler,
        config: JumperConfig = DEFAULT_CONFIG,
        store: Optional[BestScoreStore] = None,
        seed: Optional[int] = None,
        inputs: Optional[InputAdapter] = None,
        on_frame: Optional[Callable[[Snapshot], None]] = None,
    ):
        self.config = config.validate()
        self.viewport = viewport
        self.scheduler = scheduler
        self.inputs = inputs if inputs is not None else InputAdapter()
        self.on_frame = on_frame
        self.seed = seed

        self.lifecycle = Lifecycle(store)
        self.stepper = Stepper(self.config)
        self.runs = 0
        self.session = self._new_session()
        self.last_result: Optional[StepResult] = None

        self._handle: Optional[int] = None
        self._generation = 0

    # ----------------------------
    # Lifecycle signals
    # ----------------------------

    @property
    def state(self) -> GameState:
        return self.lifecycle.state

    @property
    def score(self) -> int:
        return self.session.score

    @property
    def best_score(self) -> int:
        return self.lifecycle.best_score

    @property
    def new_best(self) -> bool:
        return self.lifecycle.new_best

    def snapshot(self) -> Snapshot:
        return self.session.snapshot()

    # ----------------------------
    # Lifecycle controls
    # ----------------------------

    def start(self):
        """IDLE/GAME_OVER -> RUNNING with a brand new session"""
        self.lifecycle.start()
        self._cancel()
        self.runs += 1
        self.session = self._new_session()
        self.last_result = None
        self.stepper.reset()
        self._schedule()

    def pause(self):
        self.lifecycle.pause()
        self._cancel()

    def resume(self):
        self.lifecycle.resume()
        self.stepper.reset()
        self._schedule()

    def resize(self, width: float, height: float) -> bool:
        if not self.session.resize(width, height):
            return False
        self.viewport = self.session.viewport
        return True

    def shutdown(self):
        """Drop any pending frame, e.g. when the host window closes"""
        self._cancel()

    # ----------------------------
    # Frame
    # ----------------------------

    def frame(self, timestamp_ms: float, generation: Optional[int] = None) -> Optional[StepResult]:
        if generation is not None and generation != self._generation:
            logger.debug("dropping stale frame from request %d", generation)
            return None
        self._handle = None
        if not self.lifecycle.running:
            return None

        dt = self.stepper.tick(timestamp_ms)
        result = self.session.step(self.inputs.state, dt)
        self.last_result = result
        if result.fallen:
            self.lifecycle.finish(self.session.score)

        if self.on_frame is not None:
            self.on_frame(self.session.snapshot())
        if self.lifecycle.running:
            self._schedule()
        return result

    def _new_session(self) -> Session:
        seed = None if self.seed is None else self.seed + self.runs
        return Session(self.viewport, self.config, make_rng(seed))

    def _schedule(self):
        self._generation += 1
        generation = self._generation
        self._handle = self.scheduler.request(lambda t: self.frame(t, generation))

    def _cancel(self):
        if self._handle is not None:
            self.scheduler.cancel(self._handle)
            self._handle = None
        self._generation += 1
