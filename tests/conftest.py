import random

import pytest

from game.jumper import DEFAULT_CONFIG, InputState, Session, Viewport

WIDTH = 480
HEIGHT = 720


@pytest.fixture
def config():
    return DEFAULT_CONFIG


@pytest.fixture
def viewport():
    return Viewport(WIDTH, HEIGHT)


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def no_input():
    return InputState()


@pytest.fixture
def empty_session(viewport, config, rng):
    """Session without the starting layout"""
    return Session(viewport, config, rng, populate=False)
