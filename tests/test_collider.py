import math

import pytest

from unisonphys.collider import (
    BoxCollider,
    CircleCollider,
    RigidBodyConfig,
    Vec2,
)


def test_vec2_lerp_midpoint():
    assert Vec2(0.0, 0.0).lerp(Vec2(2.0, 4.0), 0.5) == Vec2(1.0, 2.0)


def test_vec2_lerp_endpoints():
    a, b = Vec2(1.0, -1.0), Vec2(3.0, 5.0)
    assert a.lerp(b, 0.0) == a
    assert a.lerp(b, 1.0) == b


def test_vec2_arithmetic():
    assert Vec2(1.0, 2.0) + Vec2(3.0, 4.0) == Vec2(4.0, 6.0)
    assert Vec2(3.0, 4.0) - Vec2(1.0, 2.0) == Vec2(2.0, 2.0)
    assert Vec2(1.0, 2.0) * 3.0 == Vec2(3.0, 6.0)
    assert tuple(Vec2(5.0, 6.0)) == (5.0, 6.0)


def test_collider_aabb_circle_at_origin():
    collider = CircleCollider(1.0)
    assert collider.get_aabb(Vec2.ZERO, 0.0) == (-1.0, -1.0, 1.0, 1.0)


def test_circle_aabb_ignores_rotation():
    collider = CircleCollider(2.0)
    assert collider.get_aabb(Vec2(1.0, 1.0), 1.3) == (-1.0, -1.0, 3.0, 3.0)


def test_box_aabb_unrotated():
    collider = BoxCollider(2.0, 1.0)
    assert collider.get_aabb(Vec2(1.0, 0.0), 0.0) == pytest.approx((-1.0, -1.0, 3.0, 1.0))


def test_box_aabb_quarter_turn_swaps_extents():
    collider = BoxCollider(2.0, 1.0)
    assert collider.get_aabb(Vec2.ZERO, math.pi / 2) == pytest.approx(
        (-1.0, -2.0, 1.0, 2.0), abs=1e-9
    )


def test_box_aabb_with_trig_matches_rotation():
    collider = BoxCollider(1.5, 0.5)
    angle = 0.7
    expected = collider.get_aabb(Vec2(2.0, -1.0), angle)
    got = collider.get_aabb_with_trig(
        Vec2(2.0, -1.0), abs(math.cos(angle)), abs(math.sin(angle))
    )
    assert got == pytest.approx(expected)


def test_half_extents():
    assert CircleCollider(0.5).half_extents() == Vec2(0.5, 0.5)
    assert BoxCollider(2.0, 3.0).half_extents() == Vec2(2.0, 3.0)


def test_area():
    assert CircleCollider(2.0).area() == pytest.approx(4.0 * math.pi)
    assert BoxCollider(1.0, 2.0).area() == pytest.approx(8.0)


def test_inertia():
    assert CircleCollider(2.0).inertia(3.0) == pytest.approx(6.0)
    # width 2, height 4: (1/12) * 12 * (4 + 16) = 20
    assert BoxCollider(1.0, 2.0).inertia(12.0) == pytest.approx(20.0)


def test_config_defaults():
    config = RigidBodyConfig()
    assert config.collider == CircleCollider(1.0)
    assert config.density == 1000.0
    assert config.position == Vec2.ZERO
    assert config.friction == 0.8
    assert config.restitution == 0.3
    assert config.is_kinematic is False


def test_config_builder_chain():
    config = (
        RigidBodyConfig()
        .as_circle(1.0)
        .at_position(0.0, 5.0)
        .with_density(500.0)
        .with_rotation(0.25)
        .with_velocity(1.0, -2.0)
        .with_angular_velocity(3.0)
    )
    assert config.collider == CircleCollider(1.0)
    assert config.position == Vec2(0.0, 5.0)
    assert config.density == 500.0
    assert config.rotation == 0.25
    assert config.velocity == Vec2(1.0, -2.0)
    assert config.angular_velocity == 3.0


def test_config_builders_do_not_mutate_original():
    base = RigidBodyConfig()
    changed = base.as_aabb(1.0, 2.0).as_kinematic()
    assert base.collider == CircleCollider(1.0)
    assert base.is_kinematic is False
    assert changed.collider == BoxCollider(1.0, 2.0)
    assert changed.is_kinematic is True


def test_with_collider():
    config = RigidBodyConfig().with_collider(BoxCollider(0.5, 0.25))
    assert config.collider.half_extents() == Vec2(0.5, 0.25)


@pytest.mark.parametrize(
    "value, expected", [(-0.5, 0.0), (0.4, 0.4), (1.7, 1.0)]
)
def test_friction_and_restitution_clamped(value, expected):
    config = RigidBodyConfig().with_friction(value).with_restitution(value)
    assert config.friction == expected
    assert config.restitution == expected