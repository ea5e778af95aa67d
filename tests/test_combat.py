import math

import pytest

from necrophage.camera import Vec3
from necrophage.combat import (
    Attack,
    DamageEvent,
    Dying,
    GridPos,
    Health,
    apply_damage,
    death_biomass_value,
    dissolve_alpha,
    dist_xz,
    has_line_of_sight,
    heal_on_kill,
)


def make_map(walls=(), width=10, height=10):
    wall_set = set(walls)

    def is_wall(x, y):
        if not (0 <= x < width and 0 <= y < height):
            return True
        return (x, y) in wall_set

    return is_wall


def test_civilian_drops_smaller_orb_than_enemy():
    assert death_biomass_value(True) == 2.0
    assert death_biomass_value(False) == 5.0
    assert death_biomass_value(True) < death_biomass_value(False)


def test_los_clear_on_open_floor():
    assert has_line_of_sight(make_map(), GridPos(0, 0), GridPos(9, 0))


def test_los_blocked_by_wall():
    assert not has_line_of_sight(make_map([(5, 0)]), GridPos(0, 0), GridPos(9, 0))


def test_los_diagonal_clear():
    assert has_line_of_sight(make_map(), GridPos(0, 0), GridPos(5, 5))


def test_los_same_tile_returns_true():
    pos = GridPos(3, 3)
    assert has_line_of_sight(make_map([(3, 3)]), pos, pos)


def test_los_endpoints_not_checked():
    is_wall = make_map([(9, 0)])
    assert has_line_of_sight(is_wall, GridPos(0, 0), GridPos(9, 0))


def test_chebyshev_distance():
    assert GridPos(0, 0).chebyshev(GridPos(3, -5)) == 5
    assert GridPos(2, 2).chebyshev(GridPos(2, 2)) == 0


def test_dist_xz_ignores_height():
    assert dist_xz(Vec3(0.0, 10.0, 0.0), Vec3(3.0, -4.0, 4.0)) == pytest.approx(5.0)


def test_exhausted_enemy_dies_from_lethal_damage():
    hp = Health(10.0)
    result = apply_damage(hp, 999.0, harvestable=False)
    assert result <= 0.0
    assert hp.current == result


def test_harvestable_enemy_survives_lethal_damage():
    hp = Health(10.0)
    result = apply_damage(hp, 999.0, harvestable=True)
    assert result > 0.0
    assert result == pytest.approx(0.5)


def test_harvest_floor_minimum():
    hp = Health(0.1)
    assert apply_damage(hp, 5.0, harvestable=True) == pytest.approx(0.01)


def test_invincible_takes_no_damage():
    hp = Health(20.0)
    assert apply_damage(hp, 15.0, harvestable=False, invincible=True) == 20.0


def test_non_fatal_damage_subtracts():
    hp = Health(20.0)
    assert apply_damage(hp, 5.0, harvestable=True) == 15.0
    assert hp.fraction() == pytest.approx(0.75)


def test_heal_on_kill_caps_at_max():
    hp = Health(100.0, current=50.0)
    assert heal_on_kill(hp, 2) == 56.0
    assert heal_on_kill(hp, 100) == 100.0


def test_heal_on_kill_zero_kills():
    hp = Health(100.0, current=50.0)
    assert heal_on_kill(hp, 0) == 50.0


def test_attack_cooldown_cycle():
    atk = Attack(damage=5.0, cooldown=1.0)
    assert atk.ready()
    atk.trigger()
    assert not atk.ready()
    atk.tick(0.6)
    assert not atk.ready()
    atk.tick(0.6)
    assert atk.ready()


def test_dissolve_alpha_clamped():
    assert dissolve_alpha(2.0) == 1.0
    assert dissolve_alpha(1.0) == pytest.approx(0.5)
    assert dissolve_alpha(-1.0) == 0.0
    assert dissolve_alpha(5.0) == 1.0


def test_dying_waits_then_fades():
    dying = Dying()
    assert dying.tick(0.5) is False
    assert dying.alpha == 1.0
    assert dying.tick(0.6) is False
    assert dying.tick(1.0) is False
    assert dying.alpha == pytest.approx(0.5)
    assert dying.tick(1.0) is True
    assert dying.alpha == 0.0


def test_damage_event_defaults():
    ev = DamageEvent(target="enemy", amount=3.0)
    assert ev.attacker_pos is None
    assert math.isclose(ev.amount, 3.0)