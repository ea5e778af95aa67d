from necrophage.boss.common import (
    BossNarrativePhase,
    Controlled,
    Damage,
    TelegraphMarker,
    within_radius,
)
from necrophage.camera import Vec3


def test_telegraph_marker_has_positive_timer():
    marker = TelegraphMarker(timer=1.5, damage=20.0, radius=2.0)
    assert marker.tick(1.0, [("p", Vec3(0.0, 0.0, 0.0))]) == []
    assert marker.timer > 0.0
    assert marker.damage > 0.0
    assert marker.radius > 0.0
    assert not marker.exploded


def test_telegraph_marker_explodes_on_friendlies_in_radius():
    marker = TelegraphMarker(timer=0.5, damage=20.0, radius=2.0, position=Vec3(0.0, 0.05, 0.0))
    friendlies = [
        ("near", Vec3(1.0, 0.5, 1.0)),
        ("far", Vec3(3.0, 0.0, 0.0)),
        ("edge", Vec3(0.0, 9.0, 2.0)),
    ]
    hits = marker.tick(0.5, friendlies)
    assert [hit.target for hit in hits] == ["near", "edge"]
    assert all(hit.amount == 20.0 and hit.attacker_pos is None for hit in hits)
    assert all(isinstance(hit, Damage) for hit in hits)
    assert marker.exploded
    assert marker.tick(1.0, friendlies) == []


def test_controlled_wears_off():
    ctrl = Controlled(timer=3.0, target="member")
    assert ctrl.tick(1.0) is False
    assert ctrl.tick(2.0) is True
    assert ctrl.target == "member"


def test_narrative_phase_transition_and_interphase():
    np = BossNarrativePhase()
    assert np.update(0.5, 0) == 2
    assert np.in_interphase
    assert np.phase == 2
    assert np.update(0.4, 1) is None
    assert np.in_interphase
    assert np.update(0.4, 0) is None
    assert not np.in_interphase
    assert np.update(0.2, 0) == 3
    assert np.phase == 3


def test_narrative_phase_thresholds_inclusive():
    assert BossNarrativePhase().update(0.66, 0) == 2
    assert BossNarrativePhase().update(0.67, 0) is None
    assert BossNarrativePhase().update(0.33, 0) == 3


def test_narrative_phase_never_goes_backward():
    np = BossNarrativePhase()
    np.update(0.5, 0)
    np.update(0.5, 0)
    assert np.update(0.9, 0) is None
    assert np.phase == 2
    assert not np.in_interphase


def test_within_radius_ignores_height_and_is_inclusive():
    friendlies = [("a", Vec3(3.0, 100.0, 0.0)), ("b", Vec3(3.0, 0.0, 0.1)), ("c", Vec3(-1.0, 0.0, -1.0))]
    assert within_radius(Vec3(0.0, 0.0, 0.0), friendlies, 3.0) == ["a", "c"]