import math

import pytest

from unisonphys.bodies import BodyHandle, CollisionGroups
from unisonphys.collider import RigidBodyConfig, Vec2
from unisonphys.world import PhysicsWorld


def circle(x, y, radius=1.0):
    return RigidBodyConfig().as_circle(radius).at_position(x, y)


def test_add_rigid_body():
    world = PhysicsWorld()
    handle = world.add_rigid_body(circle(5.0, 10.0).with_density(1000.0))
    assert world.contains(handle)
    pos = world.get_position(handle)
    assert pos.x == pytest.approx(5.0)
    assert pos.y == pytest.approx(10.0)


def test_add_remove_body():
    world = PhysicsWorld()
    h1 = world.add_rigid_body(circle(0.0, 0.0))
    h2 = world.add_rigid_body(circle(2.0, 0.0))
    assert world.body_count() == 2
    assert world.remove_body(h1) is True
    assert world.body_count() == 1
    assert not world.contains(h1)
    assert world.contains(h2)
    assert world.remove_body(h1) is False
    assert list(world.handles()) == [h2]


def test_unknown_handle_queries_return_none():
    world = PhysicsWorld()
    missing = BodyHandle(99)
    assert world.get_velocity(missing) is None
    assert world.get_position(missing) is None
    assert world.get_rigid_body(missing) is None
    assert world.are_overlapping(missing, missing, 0.0) is False


def test_settings_are_clamped():
    world = PhysicsWorld()
    world.set_ground_friction(2.0)
    world.set_ground_restitution(-1.0)
    world.set_substeps(0)
    world.set_contact_iterations(0)
    assert world.ground_friction == 1.0
    assert world.ground_restitution == 0.0
    assert world.substeps == 1
    assert world.contact_iterations == 1


def test_apply_impulse_and_kinematic():
    world = PhysicsWorld()
    dynamic = world.add_rigid_body(circle(0.0, 0.0))
    fixed = world.add_rigid_body(circle(5.0, 0.0).as_kinematic())
    world.apply_impulse(dynamic, 5.0, 10.0)
    world.apply_impulse(fixed, 5.0, 10.0)
    assert world.get_velocity(dynamic) == Vec2(5.0, 10.0)
    assert world.get_velocity(fixed) == Vec2(0.0, 0.0)


def test_apply_acceleration_and_angular():
    world = PhysicsWorld()
    handle = world.add_rigid_body(circle(0.0, 0.0))
    world.apply_acceleration(handle, 2.0, 0.0, 0.5)
    world.apply_angular_velocity(handle, 1.5)
    assert world.get_velocity(handle).x == pytest.approx(1.0)
    assert world.get_angular_velocity(handle) == pytest.approx(1.5)


def test_set_position_moves_previous_pose_too():
    world = PhysicsWorld()
    handle = world.add_rigid_body(circle(3.0, 4.0))
    world.set_position(handle, 10.0, 20.0)
    assert world.get_position(handle) == Vec2(10.0, 20.0)
    assert world.get_position_interpolated(handle, 0.0) == Vec2(10.0, 20.0)


def test_kinetic_energy():
    world = PhysicsWorld()
    handle = world.add_rigid_body(circle(0.0, 0.0).with_density(1000.0))
    world.add_rigid_body(circle(5.0, 0.0).as_kinematic())
    world.set_velocity(handle, 2.0, 0.0)
    assert world.get_kinetic_energy(handle) == pytest.approx(2000.0 * math.pi, rel=1e-9)
    assert world.total_kinetic_energy() == pytest.approx(2000.0 * math.pi, rel=1e-9)


def test_gravity_makes_bodies_fall():
    world = PhysicsWorld()
    handle = world.add_rigid_body(circle(0.0, 10.0))
    world.step(1.0 / 60.0)
    assert world.get_position(handle).y < 10.0
    assert world.get_velocity(handle).y < 0.0


def test_body_comes_to_rest_on_ground():
    world = PhysicsWorld()
    world.ground_y = 0.0
    handle = world.add_rigid_body(circle(0.0, 3.0))
    for _ in range(300):
        world.step(1.0 / 60.0)
    assert world.get_lowest_y(handle) >= -1e-6
    assert world.get_lowest_y(handle) < 0.05
    assert world.is_grounded(handle, 0.1)


def test_step_with_terrain():
    world = PhysicsWorld()
    handle = world.add_rigid_body(circle(0.0, 5.0))
    for _ in range(300):
        world.step_with_terrain(1.0 / 60.0, lambda x: 2.0)
    assert world.get_lowest_y(handle) == pytest.approx(2.0, abs=0.05)


def test_kinematic_body_does_not_move():
    world = PhysicsWorld()
    handle = world.add_rigid_body(circle(0.0, 5.0).as_kinematic())
    world.step(0.1)
    assert world.get_position(handle) == Vec2(0.0, 5.0)


def test_overlapping_bodies_separate():
    world = PhysicsWorld()
    world.gravity = 0.0
    a = world.add_rigid_body(circle(0.0, 0.0))
    b = world.add_rigid_body(circle(1.0, 0.0))
    world.step(1.0 / 60.0)
    pa, pb = world.get_position(a), world.get_position(b)
    assert math.hypot(pa.x - pb.x, pa.y - pb.y) >= 2.0 - 1e-6


def test_collision_groups_disable_contacts():
    world = PhysicsWorld()
    world.gravity = 0.0
    a = world.add_rigid_body(circle(0.0, 0.0))
    b = world.add_rigid_body(circle(1.0, 0.0))
    assert world.set_collision_groups(a, CollisionGroups.NONE) is True
    assert world.get_collision_groups(a) == CollisionGroups.NONE
    world.step(1.0 / 60.0)
    pa, pb = world.get_position(a), world.get_position(b)
    assert pb.x - pa.x == pytest.approx(1.0)


def test_get_contact():
    world = PhysicsWorld()
    a = world.add_rigid_body(circle(0.0, 0.0))
    b = world.add_rigid_body(circle(2.05, 0.0))
    far = world.add_rigid_body(circle(20.0, 0.0))
    assert world.get_contact(a, 0.1) == b
    assert world.get_contact(far, 0.1) is None
    assert world.are_overlapping(a, b, 0.1)
    assert not world.are_overlapping(a, b, 0.0)


def test_surface_contact_on_other_body():
    world = PhysicsWorld()
    world.add_rigid_body(RigidBodyConfig().as_aabb(1.0, 0.5).as_kinematic())
    ball = world.add_rigid_body(circle(0.0, 1.0, radius=0.5))
    assert world.get_surface_contact_y(ball, 0.1) == pytest.approx(0.5)


def test_is_grounded_threshold():
    world = PhysicsWorld()
    world.ground_y = 0.0
    handle = world.add_rigid_body(circle(0.0, 1.05))
    assert world.is_grounded(handle, 0.1)
    assert not world.is_grounded(handle, 0.01)


def test_render_data_interpolated():
    world = PhysicsWorld()
    handle = world.add_rigid_body(
        RigidBodyConfig().as_aabb(2.0, 1.0).at_position(0.0, 10.0)
    )
    world.step(1.0 / 60.0)
    body = world.get_rigid_body(handle)
    position, half_extents, rotation = world.get_rigid_body_render_data_interpolated(
        handle, 5.0
    )
    assert position == body.position
    assert half_extents == Vec2(2.0, 1.0)
    assert rotation == pytest.approx(body.rotation)
    assert world.get_position_interpolated(handle, 0.0) == body.prev_position


def test_iter_rigid_pairs_handles_with_bodies():
    world = PhysicsWorld()
    h = world.add_rigid_body(circle(1.0, 2.0))
    pairs = list(world.iter_rigid())
    assert len(pairs) == 1
    assert pairs[0][0] == h
    assert pairs[0][1].position == Vec2(1.0, 2.0)