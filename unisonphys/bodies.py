"""Handles, collision filtering, materials and soft body configuration."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import ClassVar

from unisonphys.collider import Vec2

_ALL_BITS = 0xFFFF_FFFF


@dataclass(frozen=True)
class BodyHandle:
    """Identifier of a body in a physics world."""

    index: int


@dataclass(frozen=True)
class CollisionGroups:
    """Bit masks deciding which bodies may collide with each other."""

    membership: int = _ALL_BITS
    filter: int = _ALL_BITS

    NONE: ClassVar["CollisionGroups"]
    ALL: ClassVar["CollisionGroups"]

    def can_collide(self, other: CollisionGroups) -> bool:
        """True when each side's membership is accepted by the other's filter."""
        return (self.membership & other.filter) != 0 and (
            other.membership & self.filter
        ) != 0


CollisionGroups.NONE = CollisionGroups(0, 0)
CollisionGroups.ALL = CollisionGroups(_ALL_BITS, _ALL_BITS)


@dataclass(frozen=True)
class Material:
    """Density and compliance of a soft body; defaults are those of rubber."""

    density: float = 1100.0
    edge_compliance: float = 0.0
    area_compliance: float = 1e-7

    SLIME: ClassVar["Material"]
    JELLO: ClassVar["Material"]
    RUBBER: ClassVar["Material"]
    WOOD: ClassVar["Material"]
    METAL: ClassVar["Material"]


Material.SLIME = Material(800.0, 1e-5, 1e-4)
Material.JELLO = Material(1000.0, 0.0, 1e-6)
Material.RUBBER = Material(1100.0, 0.0, 1e-7)
Material.WOOD = Material(600.0, 0.0, 1e-8)
Material.METAL = Material(2000.0, 0.0, 0.0)


@dataclass(frozen=True)
class BodyConfig:
    """Settings for creating a soft body; builder methods return updated copies."""

    material: Material = field(default_factory=Material)
    collision_groups: CollisionGroups = field(default_factory=CollisionGroups)
    position: Vec2 = Vec2.ZERO
    velocity: Vec2 = Vec2.ZERO

    def with_material(self, material: Material) -> BodyConfig:
        return replace(self, material=material)

    def with_collision_groups(self, groups: CollisionGroups) -> BodyConfig:
        return replace(self, collision_groups=groups)

    def without_collisions(self) -> BodyConfig:
        return replace(self, collision_groups=CollisionGroups.NONE)

    def at_position(self, x: float, y: float) -> BodyConfig:
        return replace(self, position=Vec2(x, y))

    def with_velocity(self, vx: float, vy: float) -> BodyConfig:
        return replace(self, velocity=Vec2(vx, vy))