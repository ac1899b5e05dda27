"""
JumperEnv - the endless jumper as a Gymnasium environment
---------------------------------------------------------
- Same Session/physics as the playable window, stepped at a fixed dt
- Gymnasium API
- Discrete action space: 0 no input, 1 hold left, 2 hold right
- Vector observation: player state + K nearest platforms + nearest pellet
  + nearest hazard, all mapped into [-1, 1]
- Reward: climb progress, pellet pickups, damage penalties, death penalty

Quick test:
    python -m game.jumper.jumper_env
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from .config import JumperConfig, Viewport, DEFAULT_CONFIG
from .controls import InputState, with_direction
from .lifecycle import Lifecycle, MemoryBestScoreStore
from .session import Session
from .utils import clamp, make_rng, seed_everything

DEFAULT_REWARDS = {
    "R_CLIMB": 0.01,    # per pixel of new score
    "R_PELLET": 0.5,
    "R_HAZARD": 1.0,    # projectile hit or hazardous landing
    "R_LANDING": 0.05,
    "R_TIME": 0.001,
    "R_DEATH": 5.0,
}


class JumperEnv(gym.Env):
    """Endless vertical jumper environment"""

    metadata = {"render_modes": ["human"], "render_fps": 60}

    # actions
    NOOP = 0
    LEFT = 1
    RIGHT = 2

    def __init__(
        self,
        render_mode: Optional[str] = None,
        width: int = 480,
        height: int = 720,
        frame_ms: float = 16.0,
        max_steps: int = 3600,  # 60s at 60 FPS
        k_platforms: int = 5,
        rewards: Optional[Dict[str, float]] = None,
        config: Optional[JumperConfig] = None,
        **overrides,
    ):
        super().__init__()

        assert render_mode is None or render_mode in self.metadata["render_modes"]
        self.render_mode = render_mode

        base = config if config is not None else DEFAULT_CONFIG
        self.config = base.replace(**overrides) if overrides else base.validate()
        self.viewport = Viewport(width, height)
        self.width = width
        self.height = height
        self.frame_ms = frame_ms
        self.max_steps = max_steps
        self.k_platforms = k_platforms
        self.rewards = dict(DEFAULT_REWARDS, **(rewards or {}))

        self.action_space = spaces.Discrete(3)

        # Player: pos(2) vel(2) radius(1)
        # Each platform: rel pos(2) width(1) hazardous(1)
        # Pellet: rel pos(2); hazard: rel pos(2) heading(1)
        obs_dim = 5 + self.k_platforms * 4 + 2 + 3
        self.observation_space = spaces.Box(
            low=-1.0, high=1.0, shape=(obs_dim,), dtype=np.float32
        )

        self._window = None
        self._best_store = MemoryBestScoreStore()
        self.session: Session = None  # type: ignore
        self.lifecycle: Lifecycle = None  # type: ignore
        self._step_count = 0
        self._events: Dict[str, float] = {}
        self._last_score = 0

    # ----------------------------
    # Gym API
    # ----------------------------

    def reset(self, seed: Optional[int] = None, options: Optional[dict] = None):
        super().reset(seed=seed)
        seed_everything(seed)

        session_seed = seed if seed is not None else int(self.np_random.integers(2 ** 31))
        self.session = Session(self.viewport, self.config, make_rng(session_seed))
        self.lifecycle = Lifecycle(self._best_store)
        self.lifecycle.start()

        self._step_count = 0
        self._events = {}
        self._last_score = 0

        return self._get_obs(), self._get_info()

    def step(self, action):
        action = int(action)
        assert self.action_space.contains(action), f"{action} is not a valid action."

        direction = {self.NOOP: 0, self.LEFT: -1, self.RIGHT: 1}[action]
        controls = with_direction(InputState(), direction)

        result = self.session.step(controls, self.frame_ms)
        self._events = result.events

        terminated = result.fallen
        if terminated:
            self.lifecycle.finish(self.session.score)

        reward = self._compute_reward(terminated)
        self._last_score = self.session.score

        self._step_count += 1
        truncated = not terminated and self._step_count >= self.max_steps

        obs = self._get_obs()
        info = self._get_info()

        if self.render_mode == "human":
            self.render()

        return obs, reward, terminated, truncated, info

    # ----------------------------
    # Observation / reward / info
    # ----------------------------

    def _get_obs(self) -> np.ndarray:
        cfg = self.config
        p = self.session.player
        w, h = self.viewport.width, self.viewport.height

        r_span = max(1e-6, cfg.max_player_r - cfg.min_player_r)
        vmax = abs(cfg.jump_vel) * (cfg.max_player_r / cfg.player_r)
        obs_parts = [
            clamp(p.x / w * 2 - 1, -1, 1),
            clamp(p.y / h * 2 - 1, -1, 1),
            clamp(p.vx / 20.0, -1, 1),
            clamp(p.vy / vmax, -1, 1),
            ((p.r - cfg.min_player_r) / r_span) * 2 - 1,
        ]

        # Platforms: K nearest by centre distance
        platforms_sorted = sorted(
            self.session.platforms,
            key=lambda q: (q.x + q.w / 2 - p.x) ** 2 + (q.y - p.y) ** 2
        )
        for i in range(self.k_platforms):
            if i < len(platforms_sorted):
                q = platforms_sorted[i]
                obs_parts += [
                    clamp((q.x + q.w / 2 - p.x) / w, -1, 1),
                    clamp((q.y - p.y) / h, -1, 1),
                    clamp(q.w / w, 0, 1),
                    1.0 if q.hazardous else -1.0,
                ]
            else:
                obs_parts += [0.0, 0.0, 0.0, 0.0]

        pellet = min(self.session.pellets, default=None,
                     key=lambda q: (q.x - p.x) ** 2 + (q.y - p.y) ** 2)
        if pellet is not None:
            obs_parts += [clamp((pellet.x - p.x) / w, -1, 1), clamp((pellet.y - p.y) / h, -1, 1)]
        else:
            obs_parts += [0.0, 0.0]

        hazard = min(self.session.hazards, default=None,
                     key=lambda q: (q.x - p.x) ** 2 + (q.y - p.y) ** 2)
        if hazard is not None:
            obs_parts += [
                clamp((hazard.x - p.x) / w, -1, 1),
                clamp((hazard.y - p.y) / h, -1, 1),
                float(hazard.direction),
            ]
        else:
            obs_parts += [0.0, 0.0, 0.0]

        return np.array(obs_parts, dtype=np.float32)

    def _compute_reward(self, died: bool) -> float:
        R = self.rewards
        reward = 0.0

        reward += R["R_CLIMB"] * (self.session.score - self._last_score)
        reward += R["R_PELLET"] * self._events.get("pellet", 0.0)
        reward += R["R_LANDING"] * self._events.get("landing", 0.0)

        damage = self._events.get("hazard_hit", 0.0) + self._events.get("hazard_landing", 0.0)
        reward -= R["R_HAZARD"] * damage
        reward -= R["R_TIME"]

        if died:
            reward -= R["R_DEATH"]

        return float(reward)

    def _get_info(self) -> Dict[str, Any]:
        stats = self.session.stats
        return {
            "score": self.session.score,
            "best_score": self.lifecycle.best_score,
            "new_best": self.lifecycle.new_best,
            "radius": self.session.player.r,
            "pellets_collected": stats.pellets,
            "hazard_hits": stats.hazard_hits + stats.hazard_landings,
            "landings": stats.landings + stats.hazard_landings,
            "num_platforms": len(self.session.platforms),
            "step": self._step_count,
        }

    # ----------------------------
    # Rendering with Arcade
    # ----------------------------

    def render(self):
        if self.render_mode is None:
            return None

        if self._window is None:
            from .window import JumperWindow
            self._window = JumperWindow(self.width, self.height, source=lambda: self.session.snapshot())

        self._window.on_draw()
        return None

    def close(self):
        if self._window is not None:
            self._window.close()
            self._window = None


# ----------------------------
# Quick sanity test
# ----------------------------

def run_random_episode(render: bool = True, seed: int = 42):
    """Run a random episode for testing"""
    env = JumperEnv(render_mode="human" if render else None)
    obs, info = env.reset(seed=seed)

    terminated = False
    truncated = False
    total = 0.0

    import time
    while not (terminated or truncated):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total += reward

        if render and env._window:
            env._window.dispatch_events()
            env._window.on_draw()
            env._window.flip()
            time.sleep(1 / 60)

    print(f"Random episode return: {total:.2f}  score: {info['score']}  steps: {info['step']}")
    env.close()
    return total, info


if __name__ == "__main__":
    run_random_episode(render=True)
