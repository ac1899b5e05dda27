"""
Run lifecycle and best-score persistence

IDLE --start--> RUNNING --fall--> GAME_OVER --start--> RUNNING
                RUNNING <--pause/resume--> PAUSED
"""

from __future__ import annotations

import json
import logging
import os
from enum import Enum
from typing import Optional

logger = logging.getLogger(__name__)


class GameState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    GAME_OVER = "game_over"


class LifecycleError(RuntimeError):
    """Invalid lifecycle transition"""


# ----------------------------
# Best-score sinks
# ----------------------------

class BestScoreStore:
    """Persistence sink for a single integer"""

    def load(self) -> int:
        raise NotImplementedError

    def save(self, score: int) -> None:
        raise NotImplementedError


class MemoryBestScoreStore(BestScoreStore):
    def __init__(self, best: int = 0):
        self.best = best
        self.writes = 0

    def load(self) -> int:
        return self.best

    def save(self, score: int) -> None:
        self.best = score
        self.writes += 1


class JsonBestScoreStore(BestScoreStore):
    """Best score in a small JSON file; storage trouble never ends a run."""

    def __init__(self, path: str):
        self.path = path

    def load(self) -> int:
        try:
            with open(self.path, "r") as f:
                value = json.load(f)["best_score"]
        except FileNotFoundError:
            return 0
        except (OSError, ValueError, KeyError, TypeError) as exc:
            logger.warning("could not read best score from %s: %s", self.path, exc)
            return 0

        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            logger.warning("ignoring corrupt best score %r in %s", value, self.path)
            return 0
        return value

    def save(self, score: int) -> None:
        try:
            directory = os.path.dirname(self.path)
            if directory:
                os.makedirs(directory, exist_ok=True)
            with open(self.path, "w") as f:
                json.dump({"best_score": int(score)}, f)
        except OSError as exc:
            logger.warning("could not write best score to %s: %s", self.path, exc)


# ----------------------------
# State machine
# ----------------------------

class Lifecycle:
    """Owns the run state, the frozen final score and the best-score record"""

    def __init__(self, store: Optional[BestScoreStore] = None):
        self.store = store if store is not None else MemoryBestScoreStore()
        self.state = GameState.IDLE
        self.best_score = self.store.load()
        self.final_score: Optional[int] = None
        self.new_best = False

    @property
    def running(self) -> bool:
        return self.state is GameState.RUNNING

    @property
    def game_over(self) -> bool:
        return self.state is GameState.GAME_OVER

    def _require(self, *states: GameState):
        if self.state not in states:
            raise LifecycleError(f"cannot do that while {self.state.value}")

    def start(self):
        self._require(GameState.IDLE, GameState.GAME_OVER)
        self.final_score = None
        self.new_best = False
        self.state = GameState.RUNNING
        logger.info("run started (best %d)", self.best_score)

    def pause(self):
        self._require(GameState.RUNNING)
        self.state = GameState.PAUSED

    def resume(self):
        self._require(GameState.PAUSED)
        self.state = GameState.RUNNING

    def finish(self, score: int) -> bool:
        """RUNNING -> GAME_OVER. Returns True when the run set a new record."""
        self._require(GameState.RUNNING)
        self.state = GameState.GAME_OVER
        self.final_score = score
        if score > self.best_score:
            self.best_score = score
            self.new_best = True
            self.store.save(score)
            logger.info("game over with new best %d", score)
        else:
            logger.info("game over at %d (best %d)", score, self.best_score)
        return self.new_best
