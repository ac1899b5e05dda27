import math
import random

import pytest

from game.jumper import ConfigError, DEFAULT_CONFIG, JumperConfig, Session, Viewport


def test_defaults_are_valid():
    assert DEFAULT_CONFIG.validate() is DEFAULT_CONFIG


def test_config_error_is_value_error():
    assert issubclass(ConfigError, ValueError)


@pytest.mark.parametrize("changes", [
    {"spacing": (0.0, 80.0)},
    {"spacing": (-5.0, 80.0)},
    {"top_up_spacing": (90.0, 70.0)},
    {"platform_w": (0.0, 10.0)},
    {"platform_h": 0.0},
    {"hazard_speed": (0.0, 1.0)},
    {"drift_vy": (-1.0, 1.0)},
    {"pellet_chance": 1.5},
    {"hazard_chance": -0.1},
    {"gravity": math.nan},
    {"spacing": (50.0, math.inf)},
    {"player_r": 40.0},
    {"min_player_r": 20.0},
    {"jump_vel": 5.0},
    {"friction": 0.0},
    {"scroll_ratio": 1.0},
    {"platform_count": 0},
    {"base_spawn_cap": 0},
    {"hard_spawn_cap": 4},
    {"top_up_cap": -1},
    {"max_dt": 8.0},
    {"hazard_platform_bounce": 1.5},
])
def test_degenerate_values_fail_fast(changes):
    with pytest.raises(ConfigError):
        DEFAULT_CONFIG.replace(**changes)


def test_session_validates_its_config(viewport):
    bad = JumperConfig(spacing=(0.0, 0.0))
    with pytest.raises(ConfigError):
        Session(viewport, bad, random.Random(0))


def test_replace_returns_new_config():
    cfg = DEFAULT_CONFIG.replace(gravity=1.0)
    assert cfg.gravity == 1.0
    assert DEFAULT_CONFIG.gravity == 0.6


@pytest.mark.parametrize("size", [(0, 600), (480, 0), (-1, 600), (math.nan, 600), (480, math.inf)])
def test_viewport_rejects_degenerate_sizes(size):
    with pytest.raises(ConfigError):
        Viewport(*size)
    assert not Viewport.is_valid(*size)


def test_drift_cannot_close_minimum_spacing():
    with pytest.raises(ConfigError):
        DEFAULT_CONFIG.replace(drift_distance=40.0)
    with pytest.raises(ConfigError):
        DEFAULT_CONFIG.replace(drift_distance=-1.0)
    assert DEFAULT_CONFIG.replace(drift_distance=36.0).drift_distance == 36.0
