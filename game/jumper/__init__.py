"""2D Game module - Endless vertical jumper simulation"""

from .config import ConfigError, JumperConfig, Viewport, DEFAULT_CONFIG
from .controls import InputAdapter, InputState
from .entities import Hazard, Pellet, Platform, PlatformKind, Player
from .generator import GenerationReport, WorldGenerator
from .jumper_env import JumperEnv, run_random_episode
from .lifecycle import (
    BestScoreStore,
    GameState,
    JsonBestScoreStore,
    Lifecycle,
    LifecycleError,
    MemoryBestScoreStore,
)
from .loop import GameLoop
from .scheduler import ManualScheduler, Scheduler
from .session import Session, Snapshot, StepResult

__all__ = [
    'ConfigError', 'JumperConfig', 'Viewport', 'DEFAULT_CONFIG',
    'InputAdapter', 'InputState',
    'Hazard', 'Pellet', 'Platform', 'PlatformKind', 'Player',
    'GenerationReport', 'WorldGenerator',
    'JumperEnv', 'run_random_episode',
    'BestScoreStore', 'GameState', 'JsonBestScoreStore', 'Lifecycle',
    'LifecycleError', 'MemoryBestScoreStore',
    'GameLoop', 'ManualScheduler', 'Scheduler',
    'Session', 'Snapshot', 'StepResult',
]
