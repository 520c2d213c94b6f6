"""Rigid bodies integrated with position-based dynamics."""

from __future__ import annotations

from unisonphys.collider import AABB, Collider, RigidBodyConfig, Vec2

_MIN_MASS = 1e-10


class RigidBody:
    """A rigid body with position, rotation and velocity state.

    An inverse mass of zero marks the body as kinematic: the solver never
    moves it.
    """

    def __init__(self, config: RigidBodyConfig | None = None) -> None:
        config = config if config is not None else RigidBodyConfig()
        if config.is_kinematic:
            inv_mass, inv_inertia = 0.0, 0.0
        else:
            mass = config.density * config.collider.area()
            inertia = config.collider.inertia(mass)
            inv_mass = 1.0 / mass if mass > _MIN_MASS else 0.0
            inv_inertia = 1.0 / inertia if inertia > _MIN_MASS else 0.0

        self.position: Vec2 = config.position
        self.rotation: float = config.rotation
        self.linear_velocity: Vec2 = config.velocity
        self.angular_velocity: float = config.angular_velocity
        self.prev_position: Vec2 = config.position
        self.prev_rotation: float = config.rotation
        self.inv_mass: float = inv_mass
        self.inv_inertia: float = inv_inertia
        self.collider: Collider = config.collider
        self.friction: float = config.friction
        self.restitution: float = config.restitution

    def __repr__(self) -> str:
        return (
            f"RigidBody(position={self.position!r}, rotation={self.rotation!r}, "
            f"collider={self.collider!r})"
        )

    def is_kinematic(self) -> bool:
        """True when the body is not moved by the simulation."""
        return self.inv_mass == 0.0

    def get_aabb(self) -> AABB:
        """World bounds ``(min_x, min_y, max_x, max_y)`` of the body."""
        return self.collider.get_aabb(self.position, self.rotation)

    def get_center(self) -> Vec2:
        """Centre of mass position."""
        return self.position

    def apply_impulse(self, impulse_x: float, impulse_y: float) -> None:
        """Apply an impulse at the centre of mass."""
        if self.inv_mass > 0.0:
            self.linear_velocity = Vec2(
                self.linear_velocity.x + impulse_x * self.inv_mass,
                self.linear_velocity.y + impulse_y * self.inv_mass,
            )

    def apply_impulse_at_point(
        self, impulse_x: float, impulse_y: float, point_x: float, point_y: float
    ) -> None:
        """Apply an impulse at a world point, which also spins the body."""
        self.apply_impulse(impulse_x, impulse_y)
        if self.inv_inertia > 0.0:
            rx = point_x - self.position.x
            ry = point_y - self.position.y
            torque = rx * impulse_y - ry * impulse_x
            self.angular_velocity += torque * self.inv_inertia

    def apply_angular_impulse(self, angular_impulse: float) -> None:
        """Apply an angular impulse (torque times time)."""
        if self.inv_inertia > 0.0:
            self.angular_velocity += angular_impulse * self.inv_inertia

    def pre_solve(self, dt: float, gravity: float) -> None:
        """Remember the current pose, apply gravity and integrate the pose."""
        if self.inv_mass == 0.0:
            return
        self.prev_position = self.position
        self.prev_rotation = self.rotation
        self.linear_velocity = Vec2(
            self.linear_velocity.x, self.linear_velocity.y + gravity * dt
        )
        self.position = Vec2(
            self.position.x + self.linear_velocity.x * dt,
            self.position.y + self.linear_velocity.y * dt,
        )
        self.rotation += self.angular_velocity * dt

    def post_solve(self, dt: float) -> None:
        """Derive velocities from the change of pose over the step."""
        if self.inv_mass == 0.0:
            return
        inv_dt = 1.0 / dt
        self.linear_velocity = Vec2(
            (self.position.x - self.prev_position.x) * inv_dt,
            (self.position.y - self.prev_position.y) * inv_dt,
        )
        self.angular_velocity = (self.rotation - self.prev_rotation) * inv_dt

    def solve_ground_collision(
        self, ground_y: float, friction: float, restitution: float
    ) -> None:
        """Push the body out of a horizontal ground plane and apply bounce and friction."""
        if self.inv_mass == 0.0:
            return
        _, min_y, _, _ = self.get_aabb()
        if min_y >= ground_y:
            return
        penetration = ground_y - min_y
        self.position = Vec2(self.position.x, self.position.y + penetration)

        vx, vy = self.linear_velocity
        if vy < 0.0:
            vy = -vy * restitution
        vx *= 1.0 - friction
        self.linear_velocity = Vec2(vx, vy)
        self.angular_velocity *= 1.0 - friction * 0.5