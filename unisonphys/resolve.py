"""Position-based response to contacts between rigid bodies."""

from __future__ import annotations

import math
from collections.abc import Sequence
from itertools import combinations

from unisonphys.bodies import CollisionGroups
from unisonphys.body import RigidBody
from unisonphys.collider import Vec2
from unisonphys.contacts import Contact, rigid_narrow_phase

_MIN_WEIGHT = 1e-10
_MIN_TANGENT = 1e-8


def resolve_pair(a: RigidBody, b: RigidBody) -> Contact | None:
    """Separate two touching bodies and apply spin, bounce and friction.

    Returns the contact that was resolved, or None when the bodies do not
    touch or are both kinematic.
    """
    contact = rigid_narrow_phase(a, b)
    if contact is None:
        return None
    wa, wb = a.inv_mass, b.inv_mass
    w_total = wa + wb
    if w_total < _MIN_WEIGHT:
        return None

    pen, nx, ny = contact.penetration, contact.nx, contact.ny
    normal = Vec2(nx, ny)
    share_a = wa / w_total
    share_b = wb / w_total
    push_a = pen * share_a
    push_b = pen * share_b

    a.position = a.position + normal * push_a
    b.position = b.position - normal * push_b

    if a.inv_inertia > 0.0:
        rx = contact.contact_x - a.position.x
        ry = contact.contact_y - a.position.y
        a.angular_velocity += (rx * (ny * push_a) - ry * (nx * push_a)) * a.inv_inertia
    if b.inv_inertia > 0.0:
        rx = contact.contact_x - b.position.x
        ry = contact.contact_y - b.position.y
        b.angular_velocity += (rx * (-ny * push_b) - ry * (-nx * push_b)) * b.inv_inertia

    restitution = math.sqrt(a.restitution * b.restitution)
    friction = (a.friction + b.friction) * 0.5

    relative = (a.position - a.prev_position) - (b.position - b.prev_position)
    rel_vn = relative.x * nx + relative.y * ny

    if rel_vn < 0.0:
        bounce = -rel_vn * restitution
        if wa > 0.0:
            a.position = a.position + normal * (bounce * share_a)
        if wb > 0.0:
            b.position = b.position - normal * (bounce * share_b)

    tangent = relative - normal * rel_vn
    tan_mag = math.hypot(tangent.x, tangent.y)
    if tan_mag > _MIN_TANGENT:
        damp = min(friction * pen, tan_mag)
        direction = tangent * (1.0 / tan_mag)
        if wa > 0.0:
            a.position = a.position - direction * (damp * share_a)
        if wb > 0.0:
            b.position = b.position + direction * (damp * share_b)

    return contact


def _bounds_overlap(a: RigidBody, b: RigidBody) -> bool:
    a_min_x, a_min_y, a_max_x, a_max_y = a.get_aabb()
    b_min_x, b_min_y, b_max_x, b_max_y = b.get_aabb()
    return not (
        a_max_x < b_min_x or b_max_x < a_min_x or a_max_y < b_min_y or b_max_y < a_min_y
    )


def resolve_rigid_collisions(
    bodies: Sequence[RigidBody],
    groups: Sequence[CollisionGroups] | None = None,
) -> int:
    """Resolve every touching pair once, honouring collision groups.

    ``groups`` runs parallel to ``bodies``; when omitted every body collides
    with every other. Returns the number of contacts resolved.
    """
    if groups is None:
        groups = [CollisionGroups()] * len(bodies)
    elif len(groups) != len(bodies):
        raise ValueError(
            f"got {len(groups)} collision groups for {len(bodies)} bodies"
        )

    resolved = 0
    for i, j in combinations(range(len(bodies)), 2):
        a, b = bodies[i], bodies[j]
        if not _bounds_overlap(a, b):
            continue
        if not groups[i].can_collide(groups[j]):
            continue
        if resolve_pair(a, b) is not None:
            resolved += 1
    return resolved