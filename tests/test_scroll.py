import pytest

from game.jumper import Hazard, Pellet, Platform, Player
from game.jumper.scroll import ScrollManager

from conftest import HEIGHT


def test_threshold_is_a_third_of_the_screen():
    assert ScrollManager(0.33).threshold(HEIGHT) == pytest.approx(237.6)


def test_overshoot_shifts_world_and_scores():
    scroll = ScrollManager(0.33)
    player = Player(x=100.0, y=200.0)
    plat = Platform(x=0.0, y=300.0, w=100.0)
    pellet = Pellet(x=0.0, y=-50.0)
    hazard = Hazard(x=30.0, y=100.0, vx=4.0)

    shift = scroll.update(player, HEIGHT, [plat], [pellet], [hazard])

    assert shift == pytest.approx(37.6)
    assert player.y == pytest.approx(237.6)
    assert plat.y == pytest.approx(337.6)
    assert pellet.y == pytest.approx(-12.4)
    assert hazard.y == pytest.approx(137.6)
    assert hazard.x == 30.0
    assert scroll.score == 37


def test_below_threshold_nothing_moves():
    scroll = ScrollManager(0.33)
    player = Player(x=100.0, y=400.0)
    plat = Platform(x=0.0, y=300.0, w=100.0)

    assert scroll.update(player, HEIGHT, [plat]) == 0.0
    assert player.y == 400.0 and plat.y == 300.0
    assert scroll.score == 0


def test_score_accumulates_fractional_scroll():
    scroll = ScrollManager(0.33)
    for _ in range(3):
        scroll.update(Player(x=0.0, y=237.6 - 0.5), HEIGHT)
    assert scroll.world_scroll == pytest.approx(1.5)
    assert scroll.score == 1
