"""A physics world of rigid bodies with ground, gravity and contacts."""

from __future__ import annotations

from collections.abc import Callable, Iterator

from unisonphys.bodies import BodyHandle, CollisionGroups
from unisonphys.body import RigidBody
from unisonphys.collider import AABB, RigidBodyConfig, Vec2
from unisonphys.queries import aabbs_touch, find_contact, kinetic_energy, surface_contact_y
from unisonphys.registry import BodyRegistry
from unisonphys.resolve import resolve_rigid_collisions


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


class PhysicsWorld:
    """Rigid bodies stepped with substeps, a ground plane and pairwise contacts.

    ``gravity`` (default -9.8) and ``ground_y`` (default None, no ground) are
    plain attributes. Operations on unknown handles do nothing, and queries on
    them return None.
    """

    def __init__(self) -> None:
        self.gravity: float = -9.8
        self.ground_y: float | None = None
        self._ground_friction = 0.8
        self._ground_restitution = 0.3
        self._substeps = 4
        self._contact_iters = 5
        self._bodies: BodyRegistry[RigidBody] = BodyRegistry()

    @property
    def ground_friction(self) -> float:
        return self._ground_friction

    @property
    def ground_restitution(self) -> float:
        return self._ground_restitution

    @property
    def substeps(self) -> int:
        return self._substeps

    @property
    def contact_iterations(self) -> int:
        return self._contact_iters

    def set_ground_friction(self, friction: float) -> None:
        """Ground friction, clamped to 0 (ice) to 1 (sticky)."""
        self._ground_friction = _clamp(friction, 0.0, 1.0)

    def set_ground_restitution(self, restitution: float) -> None:
        """Ground bounciness, clamped to 0 to 1."""
        self._ground_restitution = _clamp(restitution, 0.0, 1.0)

    def set_substeps(self, substeps: int) -> None:
        """Substeps per step, at least one."""
        self._substeps = max(1, substeps)

    def set_contact_iterations(self, iterations: int) -> None:
        """Contact resolution passes per substep, at least one."""
        self._contact_iters = max(1, iterations)

    # Bodies

    def add_rigid_body(self, config: RigidBodyConfig) -> BodyHandle:
        return self._bodies.add(RigidBody(config), CollisionGroups())

    def remove_body(self, handle: BodyHandle) -> bool:
        return self._bodies.remove(handle)

    def contains(self, handle: BodyHandle) -> bool:
        return self._bodies.contains(handle)

    def body_count(self) -> int:
        return len(self._bodies)

    def get_rigid_body(self, handle: BodyHandle) -> RigidBody | None:
        return self._bodies.get(handle)

    def get_collision_groups(self, handle: BodyHandle) -> CollisionGroups | None:
        return self._bodies.groups_of(handle)

    def set_collision_groups(self, handle: BodyHandle, groups: CollisionGroups) -> bool:
        return self._bodies.set_groups(handle, groups)

    def handles(self) -> Iterator[BodyHandle]:
        return self._bodies.handles()

    def iter_rigid(self) -> Iterator[tuple[BodyHandle, RigidBody]]:
        return self._bodies.items()

    # Forces and velocities

    def apply_force(self, handle: BodyHandle, fx: float, fy: float) -> None:
        """Apply a force at the centre of mass, taken as an impulse."""
        body = self._bodies.get(handle)
        if body is not None:
            body.apply_impulse(fx, fy)

    def apply_impulse(self, handle: BodyHandle, vx: float, vy: float) -> None:
        """Change a dynamic body's velocity directly."""
        body = self._bodies.get(handle)
        if body is not None and body.inv_mass > 0.0:
            body.linear_velocity = body.linear_velocity + Vec2(vx, vy)

    def apply_central_force(self, handle: BodyHandle, fx: float, fy: float) -> None:
        self.apply_force(handle, fx, fy)

    def apply_central_impulse(self, handle: BodyHandle, vx: float, vy: float) -> None:
        self.apply_impulse(handle, vx, vy)

    def apply_acceleration(
        self, handle: BodyHandle, ax: float, ay: float, dt: float
    ) -> None:
        """Accelerate a dynamic body regardless of its mass."""
        self.apply_impulse(handle, ax * dt, ay * dt)

    def set_velocity(self, handle: BodyHandle, vx: float, vy: float) -> None:
        body = self._bodies.get(handle)
        if body is not None:
            body.linear_velocity = Vec2(vx, vy)

    def get_velocity(self, handle: BodyHandle) -> Vec2 | None:
        body = self._bodies.get(handle)
        return body.linear_velocity if body is not None else None

    def get_angular_velocity(self, handle: BodyHandle) -> float | None:
        """Angular velocity in radians per second, counter-clockwise positive."""
        body = self._bodies.get(handle)
        return body.angular_velocity if body is not None else None

    def set_linear_velocity(self, handle: BodyHandle, vx: float, vy: float) -> None:
        """Set the linear velocity, leaving the angular velocity alone."""
        self.set_velocity(handle, vx, vy)

    def apply_angular_velocity(self, handle: BodyHandle, omega: float) -> None:
        body = self._bodies.get(handle)
        if body is not None:
            body.angular_velocity += omega

    def apply_torque(self, handle: BodyHandle, torque: float, dt: float) -> None:
        body = self._bodies.get(handle)
        if body is not None:
            body.apply_angular_impulse(torque * dt)

    # Position

    def get_position(self, handle: BodyHandle) -> Vec2 | None:
        body = self._bodies.get(handle)
        return body.get_center() if body is not None else None

    def translate(self, handle: BodyHandle, dx: float, dy: float) -> None:
        """Move a body together with its previous pose, so no velocity results."""
        body = self._bodies.get(handle)
        if body is not None:
            offset = Vec2(dx, dy)
            body.position = body.position + offset
            body.prev_position = body.prev_position + offset

    def set_position(self, handle: BodyHandle, x: float, y: float) -> None:
        current = self.get_position(handle)
        if current is not None:
            self.translate(handle, x - current.x, y - current.y)

    # Queries

    def _other_aabbs(self, handle: BodyHandle) -> Iterator[tuple[BodyHandle, AABB]]:
        return (
            (other, body.get_aabb())
            for other, body in self._bodies.items()
            if other != handle
        )

    def get_aabb(self, handle: BodyHandle) -> AABB | None:
        body = self._bodies.get(handle)
        return body.get_aabb() if body is not None else None

    def get_lowest_y(self, handle: BodyHandle) -> float | None:
        aabb = self.get_aabb(handle)
        return aabb[1] if aabb is not None else None

    def is_grounded(self, handle: BodyHandle, threshold: float) -> bool:
        """True when the body rests on the ground or on another body."""
        return self.get_surface_contact_y(handle, threshold) is not None

    def get_contact(self, handle: BodyHandle, threshold: float) -> BodyHandle | None:
        """The first other body whose bounds come within ``threshold``."""
        aabb = self.get_aabb(handle)
        if aabb is None:
            return None
        return find_contact(aabb, self._other_aabbs(handle), threshold)

    def are_overlapping(self, a: BodyHandle, b: BodyHandle, threshold: float) -> bool:
        aabb_a = self.get_aabb(a)
        aabb_b = self.get_aabb(b)
        if aabb_a is None or aabb_b is None:
            return False
        return aabbs_touch(aabb_a, aabb_b, threshold)

    def get_surface_contact_y(self, handle: BodyHandle, threshold: float) -> float | None:
        """Height of the highest surface under the body, or None."""
        aabb = self.get_aabb(handle)
        if aabb is None:
            return None
        min_x, min_y, max_x, _ = aabb
        others = (other for _, other in self._other_aabbs(handle))
        return surface_contact_y(min_y, min_x, max_x, others, self.ground_y, threshold)

    def get_kinetic_energy(self, handle: BodyHandle) -> float | None:
        body = self._bodies.get(handle)
        return kinetic_energy(body) if body is not None else None

    def total_kinetic_energy(self) -> float:
        return sum(kinetic_energy(body) for body in self._bodies.bodies())

    # Simulation

    def _simulate(
        self, dt: float, ground_for: Callable[[RigidBody], float | None]
    ) -> None:
        bodies = self._bodies.bodies()
        if not bodies:
            return
        groups = self._bodies.all_groups()
        substep_dt = dt / self._substeps
        for _ in range(self._substeps):
            for body in bodies:
                body.pre_solve(substep_dt, self.gravity)
                ground = ground_for(body)
                if ground is not None:
                    body.solve_ground_collision(
                        ground, self._ground_friction, self._ground_restitution
                    )
            for _ in range(self._contact_iters):
                resolve_rigid_collisions(bodies, groups)
            for body in bodies:
                body.post_solve(substep_dt)

    def step(self, dt: float) -> None:
        """Advance the simulation by ``dt`` seconds over the flat ground, if any."""
        self._simulate(dt, lambda body: self.ground_y)

    def step_with_terrain(self, dt: float, height_at: Callable[[float], float]) -> None:
        """Advance the simulation with ground height given by ``height_at(x)``."""
        self._simulate(dt, lambda body: height_at(body.get_center().x))

    # Rendering

    def get_position_interpolated(self, handle: BodyHandle, alpha: float) -> Vec2 | None:
        """Position between the previous (alpha 0) and current (alpha 1) pose."""
        body = self._bodies.get(handle)
        if body is None:
            return None
        return body.prev_position.lerp(body.position, _clamp(alpha, 0.0, 1.0))

    def get_rigid_body_render_data_interpolated(
        self, handle: BodyHandle, alpha: float
    ) -> tuple[Vec2, Vec2, float] | None:
        """Interpolated ``(position, half_extents, rotation)`` for drawing."""
        body = self._bodies.get(handle)
        if body is None:
            return None
        alpha = _clamp(alpha, 0.0, 1.0)
        position = body.prev_position.lerp(body.position, alpha)
        rotation = body.prev_rotation * (1.0 - alpha) + body.rotation * alpha
        return position, body.collider.half_extents(), rotation