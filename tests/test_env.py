import numpy as np
import pytest
from gymnasium.utils.env_checker import check_env

from game.jumper import ConfigError, JumperEnv

from conftest import HEIGHT


@pytest.fixture
def env():
    e = JumperEnv()
    yield e
    e.close()


def test_reset_and_step_shapes(env):
    obs, info = env.reset(seed=0)
    assert env.observation_space.contains(obs)
    assert obs.shape == (5 + 4 * env.k_platforms + 5,)
    assert info["score"] == 0 and info["step"] == 0

    obs, reward, terminated, truncated, info = env.step(JumperEnv.RIGHT)
    assert env.observation_space.contains(obs)
    assert isinstance(reward, float)
    assert not terminated and not truncated
    assert info["step"] == 1


def test_same_seed_same_trajectory():
    a, b = JumperEnv(), JumperEnv()
    oa, _ = a.reset(seed=123)
    ob, _ = b.reset(seed=123)
    np.testing.assert_array_equal(oa, ob)

    actions = np.random.default_rng(0).integers(0, 3, size=200)
    for action in actions:
        ra = a.step(action)
        rb = b.step(action)
        np.testing.assert_array_equal(ra[0], rb[0])
        assert ra[1:4] == rb[1:4]
        if ra[2] or ra[3]:
            break


def test_falling_terminates_with_death_penalty(env):
    env.reset(seed=1)
    s = env.session
    s.platforms = []
    s.player.y = HEIGHT + s.player.r + 1
    s.player.vy = 2.0

    _, reward, terminated, truncated, info = env.step(JumperEnv.NOOP)
    assert terminated and not truncated
    assert reward < -4.0
    assert env.lifecycle.game_over


def test_truncates_at_max_steps():
    env = JumperEnv(max_steps=5)
    env.reset(seed=2)
    for _ in range(4):
        _, _, terminated, truncated, _ = env.step(JumperEnv.NOOP)
        assert not truncated
    _, _, terminated, truncated, _ = env.step(JumperEnv.NOOP)
    assert truncated and not terminated


def test_config_overrides_are_validated():
    env = JumperEnv(gravity=1.2)
    assert env.config.gravity == 1.2
    with pytest.raises(ConfigError):
        JumperEnv(spacing=(0.0, 10.0))


def test_reward_overrides_merge_with_defaults():
    env = JumperEnv(rewards={"R_DEATH": 1.0})
    assert env.rewards["R_DEATH"] == 1.0
    assert env.rewards["R_PELLET"] == 0.5


def test_passes_gymnasium_checker(env):
    check_env(env, skip_render_check=True)
