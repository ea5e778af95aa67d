import pytest

from necrophage.camera import ISO_OFFSET, MAX_SCALE, MIN_SCALE, CameraRig, Vec3


def test_follow_with_large_step_snaps_to_target():
    rig = CameraRig()
    target = Vec3(4.0, 0.5, -3.0)
    position = rig.follow(target, 1.0)
    assert rig.base_look_at == target
    assert position == target + ISO_OFFSET
    assert rig.camera_look_at == target


def test_follow_with_small_step_moves_partway():
    rig = CameraRig()
    target = Vec3(10.0, 0.0, 10.0)
    rig.follow(target, 0.01)
    remaining = (target - rig.base_look_at).length()
    assert 0.0 < remaining < target.length()


def test_follow_converges_over_many_frames():
    rig = CameraRig()
    target = Vec3(6.0, 0.0, 2.0)
    previous = target.length()
    for _ in range(50):
        rig.follow(target, 1 / 60)
        remaining = (target - rig.base_look_at).length()
        assert remaining <= previous
        previous = remaining
    assert previous < 0.01


def test_light_follows_above_target():
    rig = CameraRig()
    position = rig.update_light(Vec3(1.0, 0.5, 2.0))
    assert position.x == 1.0
    assert position.y == pytest.approx(0.5 + 2.5)
    assert position.z == 2.0


def test_zoom_clamps_to_limits():
    rig = CameraRig()
    for _ in range(100):
        rig.zoom(1.0)
    assert rig.scale == MIN_SCALE == 0.005
    for _ in range(100):
        rig.zoom(-1.0)
    assert rig.scale == MAX_SCALE == 0.02


def test_zoom_in_reduces_scale():
    rig = CameraRig()
    before = rig.scale
    assert rig.zoom(1.0) < before


def test_damage_trauma_caps_at_one():
    rig = CameraRig()
    for _ in range(5):
        rig.add_damage_trauma()
    assert rig.trauma == 1.0


def test_shake_decays_to_rest():
    rig = CameraRig()
    rig.add_damage_trauma()
    assert rig.apply_shake(10.0, 1.0) is None
    assert rig.trauma == 0.0


def test_shake_offsets_only_horizontally_around_base():
    rig = CameraRig()
    rig.follow(Vec3(3.0, 0.0, 3.0), 1.0)
    for _ in range(3):
        rig.add_damage_trauma()
    position = rig.apply_shake(0.01, 0.7)
    base = rig.base_look_at + ISO_OFFSET
    assert position.y == base.y
    assert abs(position.x - base.x) <= 0.3
    assert abs(position.z - base.z) <= 0.3
    assert rig.base_look_at == Vec3(3.0, 0.0, 3.0)