import random

import pytest

from necrophage.boss.common import BossRelation, Controlled, Damage, Summon
from necrophage.boss.prophet import (
    BLINK_RANGE,
    CONTROL_DURATION,
    PHASE_0_TIMER,
    PHASE_2_TIMER,
    PROPHET_DMG,
    PULSE_RADIUS,
    ZEALOT_HP,
    ZEALOTS_ENRAGED,
    ZEALOTS_NORMAL,
    Prophet,
    blink,
)
from necrophage.camera import Vec3
from necrophage.combat import GridPos


def _walkable(x, y):
    return True


def _blocked(x, y):
    return False


def test_summons_zealots():
    boss = Prophet(pos=GridPos(10, 4))
    actions = boss.update(4.0, [], [], _walkable, random.Random(0))
    assert len(actions) == ZEALOTS_NORMAL
    assert all(isinstance(a, Summon) and a.hp == ZEALOT_HP for a in actions)
    assert all(a.pos.y == 4 for a in actions)
    assert boss.ai.phase_timer == pytest.approx(PHASE_0_TIMER)


def test_enraged_summons_more_and_clamps_to_edge():
    boss = Prophet(pos=GridPos(0, 2))
    boss.health.current = 10.0
    actions = boss.update(4.0, [], [], _walkable, random.Random(0))
    assert len(actions) == ZEALOTS_ENRAGED
    assert min(a.pos.x for a in actions) >= 0


def test_psychic_pulse_hits_friendlies_in_radius():
    boss = Prophet(pos=GridPos(5, 5))
    boss.ai.phase = 1
    boss.ai.phase_timer = 0.0
    friendlies = [("near", Vec3(7.0, 0.5, 8.0)), ("far", Vec3(5.0 + PULSE_RADIUS + 1.0, 0.5, 5.0))]
    actions = boss.update(0.0, friendlies, [], _walkable, random.Random(0))
    assert actions == [Damage("near", PROPHET_DMG, GridPos(5, 5))]


def test_blink_moves_and_controls_first_member():
    boss = Prophet(pos=GridPos(20, 20))
    boss.ai.phase = 2
    boss.ai.phase_timer = 0.0
    actions = boss.update(0.0, [], ["m1", "m2"], _walkable, random.Random(3))
    assert actions == [Controlled(timer=CONTROL_DURATION, target="m1")]
    assert boss.pos.chebyshev(GridPos(20, 20)) <= BLINK_RANGE
    assert boss.xyz == Vec3(float(boss.pos.x), 0.5, float(boss.pos.y))
    assert boss.ai.phase_timer == pytest.approx(PHASE_2_TIMER)


def test_blink_without_walkable_tile_stays_put():
    boss = Prophet(pos=GridPos(20, 20))
    boss.ai.phase = 2
    boss.ai.phase_timer = 0.0
    actions = boss.update(0.0, [], [], _blocked, random.Random(3))
    assert actions == []
    assert boss.pos == GridPos(20, 20)
    assert boss.xyz == Vec3(20.0, 0.5, 20.0)


def test_blink_never_leaves_map():
    rng = random.Random(7)
    for _ in range(50):
        landing = blink(GridPos(0, 0), _walkable, rng)
        assert landing.x >= 0 and landing.y >= 0
        assert landing.chebyshev(GridPos(0, 0)) <= BLINK_RANGE


def test_blink_returns_none_when_blocked():
    assert blink(GridPos(5, 5), _blocked, random.Random(1)) is None


def test_surrendered_prophet_is_idle():
    boss = Prophet(pos=GridPos(5, 5), relation=BossRelation.SURRENDERED)
    assert boss.update(10.0, [], ["m1"], _walkable, random.Random(0)) == []
    assert boss.ai.phase == 0