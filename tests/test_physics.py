import pytest

from game.jumper import Hazard, InputState, Pellet, Platform, PlatformKind, Player
from game.jumper.physics import (
    advance_world,
    collect_pellets,
    integrate_player,
    resolve_hazards,
    resolve_platforms,
    step_physics,
    wrap_horizontal,
)

from conftest import WIDTH


def falling_player(**kw):
    defaults = dict(x=100.0, y=180.0, r=18.0, vx=0.0, vy=5.0)
    defaults.update(kw)
    return Player(**defaults)


def platform_below(**kw):
    defaults = dict(x=50.0, y=200.0, w=100.0, h=14.0)
    defaults.update(kw)
    return Platform(**defaults)


# ----------------------------
# Integration
# ----------------------------

def test_wrap_left_edge_to_right(config, no_input):
    p = Player(x=-18.0, y=300.0, r=18.0)
    integrate_player(p, no_input, 16.0, WIDTH, config)
    assert p.x == WIDTH + 18.0
    assert p.vx == 0.0


def test_wrap_right_edge_to_left():
    p = Player(x=WIDTH + 19.0, y=300.0, r=18.0, vx=1.0)
    wrap_horizontal(p, WIDTH)
    assert p.x == -18.0
    assert p.vx == 1.0


def test_wrap_changes_only_x():
    p = Player(x=-18.0, y=321.0, r=18.0, vx=-2.5, vy=7.0)
    wrap_horizontal(p, WIDTH)
    assert p == Player(x=WIDTH + 18.0, y=321.0, r=18.0, vx=-2.5, vy=7.0)


def test_inside_bounds_does_not_wrap():
    p = Player(x=WIDTH + 18.0, y=300.0, r=18.0)
    wrap_horizontal(p, WIDTH)
    assert p.x == WIDTH + 18.0


def test_rising_player_reaches_apex_once(config, no_input):
    p = Player(x=240.0, y=600.0, r=18.0, vy=config.jump_vel * config.start_vy_factor)
    vys = [p.vy]
    ys = [p.y]
    for _ in range(80):
        before = p.vy
        integrate_player(p, no_input, 16.0, WIDTH, config)
        assert p.vy == pytest.approx(before + config.gravity)
        vys.append(p.vy)
        ys.append(p.y)

    sign_changes = sum(1 for a, b in zip(vys, vys[1:]) if (a < 0) != (b < 0))
    assert sign_changes == 1

    apex = ys.index(min(ys))
    assert 0 < apex < len(ys) - 1
    assert all(b < a for a, b in zip(ys[:apex], ys[1:apex + 1]))
    assert all(b > a for a, b in zip(ys[apex:], ys[apex + 1:]))


def test_motion_scales_with_dt(config, no_input):
    a = Player(x=100.0, y=100.0, vx=2.0, vy=1.0)
    b = Player(x=100.0, y=100.0, vx=2.0, vy=1.0)
    integrate_player(a, no_input, 8.0, WIDTH, config)
    integrate_player(b, no_input, 16.0, WIDTH, config)
    assert a.vy - 1.0 == pytest.approx((b.vy - 1.0) / 2)
    assert a.x - 100.0 < b.x - 100.0


def test_keys_and_pointer_accelerate(config):
    p = Player(x=100.0, y=100.0)
    integrate_player(p, InputState(right=True), 16.0, WIDTH, config)
    assert p.vx == pytest.approx(config.key_accel * config.friction)

    q = Player(x=100.0, y=100.0)
    integrate_player(q, InputState(pointer_x=300.0), 16.0, WIDTH, config)
    assert q.vx == pytest.approx(200.0 * config.pointer_gain * config.friction)

    s = Player(x=100.0, y=100.0)
    integrate_player(s, InputState(left=True, right=True), 16.0, WIDTH, config)
    assert s.vx == 0.0


def test_drift_stops_after_its_slide(config):
    above = Platform(x=0.0, y=-10.0, w=50.0, vy=1.0, slide=10.0)
    inside = Platform(x=0.0, y=40.0, w=50.0, vy=1.0)
    pellet = Pellet(x=10.0, y=-30.0, vy=1.0, slide=18.0)
    hazard = Hazard(x=0.0, y=0.0, vx=4.0)

    advance_world([above, inside], [pellet], [hazard], 16.0, config)
    assert above.y == pytest.approx(-9.0)
    assert above.vy == 1.0
    assert inside.y == 40.0 and inside.vy == 0.0
    assert pellet.y == pytest.approx(-29.0)
    assert hazard.x == pytest.approx(4.0)

    for _ in range(20):
        advance_world([above], [pellet], [], 16.0, config)
    assert above.vy == 0.0 and above.y == pytest.approx(0.0)
    assert pellet.vy == 0.0 and pellet.y == pytest.approx(-12.0)


def test_drift_lands_exactly_on_its_slide(config):
    plat = Platform(x=0.0, y=-10.0, w=50.0, vy=1.2, slide=1.0)
    advance_world([plat], [], [], 32.0, config)
    assert plat.y == -9.0
    assert plat.vy == 0.0 and plat.slide == 0.0

    advance_world([plat], [], [], 32.0, config)
    assert plat.y == -9.0


# ----------------------------
# Platform landings
# ----------------------------

def test_normal_landing_bounces_and_snaps(config, no_input):
    p = falling_player()
    plat = platform_below()
    step_physics(p, [plat], [], [], no_input, 16.0, WIDTH, config)

    assert p.vy == pytest.approx(config.jump_vel)
    assert p.y == pytest.approx(plat.y - p.r - config.land_epsilon)
    assert p.r == config.player_r


def test_hazardous_landing_shrinks_and_weakens_bounce(config, no_input):
    p = falling_player()
    plat = platform_below(kind=PlatformKind.HAZARDOUS)
    _, _, events = step_physics(p, [plat], [], [], no_input, 16.0, WIDTH, config)

    assert p.r == pytest.approx(config.player_r - config.hazard_platform_shrink)
    assert p.vy < 0
    assert abs(p.vy) < abs(config.jump_vel)
    assert p.vy == pytest.approx(config.jump_vel * (15.0 / 18.0) * config.hazard_platform_bounce)
    assert events["hazard_landing"] == 1.0


def test_hazardous_landing_respects_min_radius(config, no_input):
    p = falling_player(r=config.min_player_r + 1.0, y=188.0)
    step_physics(p, [platform_below(kind=PlatformKind.HAZARDOUS)], [], [], no_input, 16.0, WIDTH, config)
    assert p.r == config.min_player_r


def test_bigger_player_bounces_higher(config, no_input):
    small = falling_player()
    big = falling_player(r=24.0, y=174.0)
    step_physics(small, [platform_below()], [], [], no_input, 16.0, WIDTH, config)
    step_physics(big, [platform_below()], [], [], no_input, 16.0, WIDTH, config)
    assert big.vy < small.vy < 0


def test_rising_player_passes_through(config):
    p = falling_player(vy=-5.0, y=195.0)
    assert resolve_platforms(p, [platform_below()], 16.0, config) is None
    assert p.vy == -5.0


def test_no_landing_without_horizontal_overlap(config, no_input):
    p = falling_player(x=300.0)
    step_physics(p, [platform_below()], [], [], no_input, 16.0, WIDTH, config)
    assert p.vy > 0


@pytest.mark.parametrize("order", ["low_first", "high_first"])
def test_overlapping_platforms_highest_top_wins(config, order):
    p = falling_player()
    # bottom lands at 203.6 after integration; both bands contain it
    p.y = 185.6
    p.vy = 5.6
    high = Platform(x=50.0, y=196.0, w=100.0, kind=PlatformKind.HAZARDOUS)
    low = Platform(x=50.0, y=200.0, w=100.0)
    pool = [low, high] if order == "low_first" else [high, low]

    landed = resolve_platforms(p, pool, 16.0, config)
    assert landed is high
    assert p.y == pytest.approx(196.0 - p.r - config.land_epsilon)
    assert p.r == config.player_r - config.hazard_platform_shrink


def test_overlapping_platforms_equal_tops_keep_pool_order(config):
    p = falling_player(y=185.6, vy=5.6)
    first = Platform(x=50.0, y=200.0, w=100.0)
    second = Platform(x=60.0, y=200.0, w=100.0, kind=PlatformKind.HAZARDOUS)
    assert resolve_platforms(p, [first, second], 16.0, config) is first
    assert p.r == config.player_r
    assert p.vy == pytest.approx(config.jump_vel)


@pytest.mark.parametrize("dt", [16.0, 32.0])
@pytest.mark.parametrize("start_gap", [0.0, 3.0, 37.3, 150.0])
@pytest.mark.parametrize("vy", [0.5, 7.0, 19.9, 45.0, 80.0])
def test_thin_platform_is_never_tunnelled(config, no_input, dt, start_gap, vy):
    plat = Platform(x=0.0, y=400.0, w=WIDTH, h=2.0)
    p = Player(x=WIDTH / 2, y=plat.y - 18.0 - start_gap, r=18.0, vy=vy)

    landings = 0
    for _ in range(500):
        integrate_player(p, no_input, dt, WIDTH, config)
        if resolve_platforms(p, [plat], dt, config) is not None:
            landings += 1
            break
        if p.y > plat.y + plat.h:
            break

    assert landings == 1
    assert p.y == pytest.approx(plat.y - p.r - config.land_epsilon)


# ----------------------------
# Pellets and hazards
# ----------------------------

def test_pellet_pickup_grows_and_boosts(config):
    p = Player(x=100.0, y=100.0, r=18.0, vy=3.0)
    near = Pellet(x=110.0, y=100.0)
    far = Pellet(x=300.0, y=100.0)
    remaining, picked = collect_pellets(p, [near, far], config)

    assert picked == 1
    assert remaining == [far]
    assert p.r == pytest.approx(20.0)
    assert p.vy == config.pellet_boost


def test_pellet_keeps_faster_ascent_and_caps_radius(config):
    p = Player(x=100.0, y=100.0, r=config.max_player_r - 1.0, vy=-20.0)
    collect_pellets(p, [Pellet(x=100.0, y=90.0)], config)
    assert p.vy == -20.0
    assert p.r == config.max_player_r


def test_touching_circles_count_as_overlap(config):
    p = Player(x=100.0, y=100.0, r=18.0)
    _, picked = collect_pellets(p, [Pellet(x=126.0, y=100.0, r=8.0)], config)
    assert picked == 1


def test_hazard_hit_shrinks_damps_and_knocks_back(config):
    p = Player(x=100.0, y=100.0, r=18.0, vx=0.0, vy=-10.0)
    h = Hazard(x=90.0, y=100.0, vx=4.0, direction=1)
    remaining, hits = resolve_hazards(p, [h], config)

    assert hits == 1
    assert remaining == []
    assert p.r == pytest.approx(15.0)
    assert p.vy == pytest.approx(-5.0)
    assert p.vx == pytest.approx(config.hazard_knockback)


def test_hazard_knockback_away_from_right_side(config):
    p = Player(x=100.0, y=100.0, vy=4.0)
    resolve_hazards(p, [Hazard(x=110.0, y=100.0, vx=-4.0, direction=-1)], config)
    assert p.vx == pytest.approx(-config.hazard_knockback)
    assert p.vy == 4.0


def test_dead_centre_hazard_pushes_along_its_travel(config):
    p = Player(x=100.0, y=100.0)
    resolve_hazards(p, [Hazard(x=100.0, y=90.0, vx=-4.0, direction=-1)], config)
    assert p.vx == pytest.approx(-config.hazard_knockback)


def test_hazard_miss_keeps_hazard(config):
    p = Player(x=100.0, y=100.0)
    h = Hazard(x=200.0, y=100.0, vx=4.0)
    remaining, hits = resolve_hazards(p, [h], config)
    assert hits == 0 and remaining == [h]
    assert p.r == config.player_r


def test_radius_never_leaves_bounds_under_repeated_hits(config):
    p = Player(x=100.0, y=100.0)
    for _ in range(10):
        resolve_hazards(p, [Hazard(x=100.0, y=100.0, vx=1.0)], config)
    assert p.r == config.min_player_r
    for _ in range(20):
        collect_pellets(p, [Pellet(x=100.0, y=100.0)], config)
    assert p.r == config.max_player_r
