"""Vectors, collider shapes and rigid body configuration."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from typing import ClassVar

AABB = tuple[float, float, float, float]


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


@dataclass(frozen=True)
class Vec2:
    """An immutable two-dimensional vector."""

    x: float = 0.0
    y: float = 0.0

    ZERO: ClassVar["Vec2"]

    def __add__(self, other: Vec2) -> Vec2:
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vec2) -> Vec2:
        return Vec2(self.x - other.x, self.y - other.y)

    def __mul__(self, scale: float) -> Vec2:
        return Vec2(self.x * scale, self.y * scale)

    __rmul__ = __mul__

    def __iter__(self):
        yield self.x
        yield self.y

    def lerp(self, other: Vec2, t: float) -> Vec2:
        """Linear interpolation from this vector towards ``other``."""
        return Vec2(self.x + (other.x - self.x) * t, self.y + (other.y - self.y) * t)


Vec2.ZERO = Vec2(0.0, 0.0)


class Collider(ABC):
    """A collision shape attached to a rigid body."""

    @abstractmethod
    def half_extents(self) -> Vec2:
        """Half-size of the shape, as used for rendering."""

    def get_aabb(self, position: Vec2, rotation: float) -> AABB:
        """World bounds ``(min_x, min_y, max_x, max_y)`` at a pose."""
        return self.get_aabb_with_trig(
            position, abs(math.cos(rotation)), abs(math.sin(rotation))
        )

    @abstractmethod
    def get_aabb_with_trig(self, position: Vec2, abs_cos: float, abs_sin: float) -> AABB:
        """World bounds using precomputed absolute cosine and sine of the rotation."""

    @abstractmethod
    def area(self) -> float:
        """Area of the shape, used to derive mass from density."""

    @abstractmethod
    def inertia(self, mass: float) -> float:
        """Moment of inertia of a solid shape of the given mass."""


@dataclass(frozen=True)
class CircleCollider(Collider):
    """A circle of the given radius."""

    radius: float

    def half_extents(self) -> Vec2:
        return Vec2(self.radius, self.radius)

    def get_aabb_with_trig(self, position: Vec2, abs_cos: float, abs_sin: float) -> AABB:
        r = self.radius
        return (position.x - r, position.y - r, position.x + r, position.y + r)

    def area(self) -> float:
        return math.pi * self.radius * self.radius

    def inertia(self, mass: float) -> float:
        return 0.5 * mass * self.radius * self.radius


@dataclass(frozen=True)
class BoxCollider(Collider):
    """A box given by its half-width and half-height, rotating with its body."""

    half_width: float
    half_height: float

    def half_extents(self) -> Vec2:
        return Vec2(self.half_width, self.half_height)

    def get_aabb_with_trig(self, position: Vec2, abs_cos: float, abs_sin: float) -> AABB:
        extent_x = self.half_width * abs_cos + self.half_height * abs_sin
        extent_y = self.half_width * abs_sin + self.half_height * abs_cos
        return (
            position.x - extent_x,
            position.y - extent_y,
            position.x + extent_x,
            position.y + extent_y,
        )

    def area(self) -> float:
        return 4.0 * self.half_width * self.half_height

    def inertia(self, mass: float) -> float:
        w = 2.0 * self.half_width
        h = 2.0 * self.half_height
        return (1.0 / 12.0) * mass * (w * w + h * h)


@dataclass(frozen=True)
class RigidBodyConfig:
    """Settings for creating a rigid body; builder methods return updated copies."""

    collider: Collider = field(default_factory=lambda: CircleCollider(1.0))
    density: float = 1000.0
    position: Vec2 = Vec2.ZERO
    rotation: float = 0.0
    velocity: Vec2 = Vec2.ZERO
    angular_velocity: float = 0.0
    is_kinematic: bool = False
    friction: float = 0.8
    restitution: float = 0.3

    def with_collider(self, collider: Collider) -> RigidBodyConfig:
        return replace(self, collider=collider)

    def as_circle(self, radius: float) -> RigidBodyConfig:
        return replace(self, collider=CircleCollider(radius))

    def as_aabb(self, half_width: float, half_height: float) -> RigidBodyConfig:
        return replace(self, collider=BoxCollider(half_width, half_height))

    def with_density(self, density: float) -> RigidBodyConfig:
        return replace(self, density=density)

    def at_position(self, x: float, y: float) -> RigidBodyConfig:
        return replace(self, position=Vec2(x, y))

    def with_rotation(self, rotation: float) -> RigidBodyConfig:
        return replace(self, rotation=rotation)

    def with_velocity(self, vx: float, vy: float) -> RigidBodyConfig:
        return replace(self, velocity=Vec2(vx, vy))

    def with_angular_velocity(self, omega: float) -> RigidBodyConfig:
        return replace(self, angular_velocity=omega)

    def as_kinematic(self) -> RigidBodyConfig:
        return replace(self, is_kinematic=True)

    def with_friction(self, friction: float) -> RigidBodyConfig:
        """Set friction, clamped to the range 0 to 1."""
        return replace(self, friction=_clamp(friction, 0.0, 1.0))

    def with_restitution(self, restitution: float) -> RigidBodyConfig:
        """Set restitution, clamped to the range 0 to 1."""
        return replace(self, restitution=_clamp(restitution, 0.0, 1.0))