"""Narrow-phase contact generation between pairs of rigid bodies."""

from __future__ import annotations

import math
from dataclasses import dataclass, replace

from unisonphys.body import RigidBody
from unisonphys.collider import BoxCollider, CircleCollider, Vec2

Corners = list[tuple[float, float]]

_EPSILON = 1e-10


@dataclass(frozen=True)
class Contact:
    """Penetration depth, unit normal from B towards A, and a contact point."""

    penetration: float
    nx: float
    ny: float
    contact_x: float
    contact_y: float


def rigid_narrow_phase(a: RigidBody, b: RigidBody) -> Contact | None:
    """Contact between two rigid bodies, or None if they do not touch."""
    ca, cb = a.collider, b.collider
    if isinstance(ca, CircleCollider) and isinstance(cb, CircleCollider):
        dx = a.position.x - b.position.x
        dy = a.position.y - b.position.y
        dist_sq = dx * dx + dy * dy
        min_dist = ca.radius + cb.radius
        if dist_sq >= min_dist * min_dist or dist_sq < _EPSILON:
            return None
        dist = math.sqrt(dist_sq)
        nx, ny = dx / dist, dy / dist
        return Contact(
            min_dist - dist,
            nx,
            ny,
            b.position.x + nx * cb.radius,
            b.position.y + ny * cb.radius,
        )
    if isinstance(ca, CircleCollider) and isinstance(cb, BoxCollider):
        return circle_box_contact(
            a.position, ca.radius, b.position, b.rotation, cb.half_width, cb.half_height
        )
    if isinstance(ca, BoxCollider) and isinstance(cb, CircleCollider):
        contact = circle_box_contact(
            b.position, cb.radius, a.position, a.rotation, ca.half_width, ca.half_height
        )
        if contact is None:
            return None
        return replace(contact, nx=-contact.nx, ny=-contact.ny)
    if isinstance(ca, BoxCollider) and isinstance(cb, BoxCollider):
        return box_box_contact(
            a.position, a.rotation, ca.half_width, ca.half_height,
            b.position, b.rotation, cb.half_width, cb.half_height,
        )
    raise TypeError(
        f"unsupported collider pair: {type(ca).__name__}, {type(cb).__name__}"
    )


def _closest_face(left: float, right: float, bottom: float, top: float) -> tuple[float, float, float]:
    smallest = min(left, right, bottom, top)
    if smallest == left:
        return smallest, -1.0, 0.0
    if smallest == right:
        return smallest, 1.0, 0.0
    if smallest == bottom:
        return smallest, 0.0, -1.0
    return smallest, 0.0, 1.0


def circle_box_contact(
    circle_pos: Vec2, radius: float, box_pos: Vec2, box_rot: float, hw: float, hh: float
) -> Contact | None:
    """Contact between a circle and a rotated box; the normal points towards the circle."""
    cos_r = math.cos(box_rot)
    sin_r = math.sin(box_rot)
    dx = circle_pos.x - box_pos.x
    dy = circle_pos.y - box_pos.y
    lx = dx * cos_r + dy * sin_r
    ly = -dx * sin_r + dy * cos_r

    cx = max(-hw, min(hw, lx))
    cy = max(-hh, min(hh, ly))
    sx = lx - cx
    sy = ly - cy
    dist_sq = sx * sx + sy * sy
    if dist_sq >= radius * radius:
        return None

    if dist_sq > _EPSILON:
        dist = math.sqrt(dist_sq)
        pen = radius - dist
        local_nx, local_ny = sx / dist, sy / dist
    else:
        min_pen, local_nx, local_ny = _closest_face(lx + hw, hw - lx, ly + hh, hh - ly)
        pen = min_pen + radius

    nx = local_nx * cos_r - local_ny * sin_r
    ny = local_nx * sin_r + local_ny * cos_r
    world_cx = cx * cos_r - cy * sin_r + box_pos.x
    world_cy = cx * sin_r + cy * cos_r + box_pos.y
    return Contact(pen, nx, ny, world_cx, world_cy)


def box_box_contact(
    pos_a: Vec2, rot_a: float, hw_a: float, hh_a: float,
    pos_b: Vec2, rot_b: float, hw_b: float, hh_b: float,
) -> Contact | None:
    """Contact between two rotated boxes by the separating axis test on their face normals."""
    corners_a = box_corners(pos_a, rot_a, hw_a, hh_a)
    corners_b = box_corners(pos_b, rot_b, hw_b, hh_b)
    axes = [box_axis(rot_a, 0), box_axis(rot_a, 1), box_axis(rot_b, 0), box_axis(rot_b, 1)]

    min_overlap = math.inf
    best_nx = best_ny = 0.0
    for ax, ay in axes:
        min_a, max_a = project_corners(corners_a, ax, ay)
        min_b, max_b = project_corners(corners_b, ax, ay)
        overlap = min(max_a, max_b) - max(min_a, min_b)
        if overlap <= 0.0:
            return None
        if overlap < min_overlap:
            min_overlap = overlap
            d = (pos_a.x - pos_b.x) * ax + (pos_a.y - pos_b.y) * ay
            best_nx, best_ny = (ax, ay) if d >= 0.0 else (-ax, -ay)

    return Contact(
        min_overlap,
        best_nx,
        best_ny,
        (pos_a.x + pos_b.x) * 0.5,
        (pos_a.y + pos_b.y) * 0.5,
    )


def box_corners(pos: Vec2, rot: float, hw: float, hh: float) -> Corners:
    """The four world-space corners of a rotated box, counter-clockwise from top-right."""
    c = math.cos(rot)
    s = math.sin(rot)
    return [
        (pos.x + hw * c - hh * s, pos.y + hw * s + hh * c),
        (pos.x - hw * c - hh * s, pos.y - hw * s + hh * c),
        (pos.x - hw * c + hh * s, pos.y - hw * s - hh * c),
        (pos.x + hw * c + hh * s, pos.y + hw * s - hh * c),
    ]


def box_axis(rot: float, index: int) -> tuple[float, float]:
    """Face normal of a rotated box: its local x axis for index 0, else its local y axis."""
    c = math.cos(rot)
    s = math.sin(rot)
    return (c, s) if index == 0 else (-s, c)


def project_corners(corners: Corners, ax: float, ay: float) -> tuple[float, float]:
    """Minimum and maximum projection of the corners onto an axis."""
    projections = [cx * ax + cy * ay for cx, cy in corners]
    return min(projections), max(projections)