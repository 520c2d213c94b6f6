"""Geometric queries over body bounds and rigid body energy."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TypeVar

from unisonphys.body import RigidBody
from unisonphys.collider import AABB

K = TypeVar("K")


def aabbs_touch(a: AABB, b: AABB, threshold: float) -> bool:
    """True when two bounds overlap once each is grown by ``threshold``."""
    a_min_x, a_min_y, a_max_x, a_max_y = a
    b_min_x, b_min_y, b_max_x, b_max_y = b
    return (
        a_max_x + threshold >= b_min_x
        and a_min_x - threshold <= b_max_x
        and a_max_y + threshold >= b_min_y
        and a_min_y - threshold <= b_max_y
    )


def find_contact(
    aabb: AABB, others: Iterable[tuple[K, AABB]], threshold: float
) -> K | None:
    """Key of the first of ``others`` whose bounds touch ``aabb``, or None."""
    return next(
        (key for key, other in others if aabbs_touch(aabb, other, threshold)), None
    )


def surface_contact_y(
    lowest_y: float,
    min_x: float,
    max_x: float,
    others: Iterable[AABB],
    ground_y: float | None,
    threshold: float,
) -> float | None:
    """Height of the highest surface a body is resting on, or None.

    The body is described by its lowest point and horizontal extent. The
    ground counts when the body is within ``threshold`` of it; another body
    counts when it overlaps horizontally and its top lies within
    ``threshold`` above or ``2 * threshold`` below the body's lowest point.
    """
    best: float | None = None
    if ground_y is not None and lowest_y < ground_y + threshold:
        best = ground_y
    for o_min_x, _, o_max_x, o_max_y in others:
        if max_x < o_min_x or min_x > o_max_x:
            continue
        if o_max_y - threshold * 2.0 < lowest_y < o_max_y + threshold:
            if best is None or o_max_y > best:
                best = o_max_y
    return best


def kinetic_energy(body: RigidBody) -> float:
    """Linear kinetic energy of a rigid body; zero for kinematic bodies."""
    if body.inv_mass <= 0.0:
        return 0.0
    mass = 1.0 / body.inv_mass
    v = body.linear_velocity
    return 0.5 * mass * (v.x * v.x + v.y * v.y)