"""Point-versus-rigid-body queries used for soft body contact."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

from unisonphys.body import RigidBody
from unisonphys.collider import BoxCollider, CircleCollider

_EPSILON = 1e-10

Hit = tuple[float, float, float]


class QueryKind(Enum):
    """Where a point lies relative to a collider."""

    PENETRATING = "penetrating"
    NEAR_SURFACE = "near_surface"
    FAR = "far"


@dataclass(frozen=True)
class PointQuery:
    """Result of a point query.

    ``distance`` is the penetration depth for a penetrating point and the gap
    to the surface for a point near it; the normal points out of the collider.
    """

    kind: QueryKind
    distance: float = 0.0
    nx: float = 0.0
    ny: float = 0.0


_FAR = PointQuery(QueryKind.FAR)


def _unsupported(body: RigidBody) -> TypeError:
    return TypeError(f"unsupported collider: {type(body.collider).__name__}")


def _to_local(body: RigidBody, px: float, py: float, cos_r: float, sin_r: float) -> tuple[float, float]:
    dx = px - body.position.x
    dy = py - body.position.y
    return dx * cos_r + dy * sin_r, -dx * sin_r + dy * cos_r


def _to_world(local_nx: float, local_ny: float, cos_r: float, sin_r: float) -> tuple[float, float]:
    return local_nx * cos_r - local_ny * sin_r, local_nx * sin_r + local_ny * cos_r


def _nearest_face(left: float, right: float, bottom: float, top: float) -> tuple[float, float, float]:
    """Smallest of four face distances with the local normal of that face."""
    smallest = min(left, right, bottom, top)
    if smallest == left:
        return smallest, -1.0, 0.0
    if smallest == right:
        return smallest, 1.0, 0.0
    if smallest == bottom:
        return smallest, 0.0, -1.0
    return smallest, 0.0, 1.0


def _box_penetration(box: BoxCollider, lx: float, ly: float, cos_r: float, sin_r: float) -> Hit:
    hw, hh = box.half_width, box.half_height
    depth, lnx, lny = _nearest_face(lx + hw, hw - lx, ly + hh, hh - ly)
    return (depth, *_to_world(lnx, lny, cos_r, sin_r))


def _box_edge_normal(box: BoxCollider, lx: float, ly: float, cos_r: float, sin_r: float) -> tuple[float, float]:
    hw, hh = box.half_width, box.half_height
    _, lnx, lny = _nearest_face(abs(lx + hw), abs(lx - hw), abs(ly + hh), abs(ly - hh))
    return _to_world(lnx, lny, cos_r, sin_r)


def contains_point(body: RigidBody, px: float, py: float) -> Hit | None:
    """``(penetration, nx, ny)`` if the point lies inside the body, else None."""
    collider = body.collider
    if isinstance(collider, CircleCollider):
        dx = px - body.position.x
        dy = py - body.position.y
        dist_sq = dx * dx + dy * dy
        if dist_sq < collider.radius * collider.radius and dist_sq > _EPSILON:
            dist = math.sqrt(dist_sq)
            return collider.radius - dist, dx / dist, dy / dist
        return None
    if isinstance(collider, BoxCollider):
        cos_r = math.cos(body.rotation)
        sin_r = math.sin(body.rotation)
        lx, ly = _to_local(body, px, py, cos_r, sin_r)
        if abs(lx) < collider.half_width and abs(ly) < collider.half_height:
            return _box_penetration(collider, lx, ly, cos_r, sin_r)
        return None
    raise _unsupported(body)


def nearest_surface_dist(body: RigidBody, px: float, py: float) -> Hit | None:
    """``(distance, nx, ny)`` to the nearest surface for a point outside the body, else None."""
    collider = body.collider
    if isinstance(collider, CircleCollider):
        dx = px - body.position.x
        dy = py - body.position.y
        dist_sq = dx * dx + dy * dy
        if dist_sq >= collider.radius * collider.radius and dist_sq > _EPSILON:
            dist = math.sqrt(dist_sq)
            return dist - collider.radius, dx / dist, dy / dist
        return None
    if isinstance(collider, BoxCollider):
        cos_r = math.cos(body.rotation)
        sin_r = math.sin(body.rotation)
        lx, ly = _to_local(body, px, py, cos_r, sin_r)
        hw, hh = collider.half_width, collider.half_height
        if abs(lx) < hw and abs(ly) < hh:
            return None
        sx = lx - max(-hw, min(hw, lx))
        sy = ly - max(-hh, min(hh, ly))
        dist_sq = sx * sx + sy * sy
        if dist_sq > _EPSILON:
            dist = math.sqrt(dist_sq)
            return (dist, *_to_world(sx / dist, sy / dist, cos_r, sin_r))
        return (0.0, *_box_edge_normal(collider, lx, ly, cos_r, sin_r))
    raise _unsupported(body)


def query_point(
    body: RigidBody,
    px: float,
    py: float,
    contact_threshold: float,
    cos_r: float,
    sin_r: float,
) -> PointQuery:
    """Classify a point as penetrating, near the surface or far from the body.

    ``cos_r`` and ``sin_r`` are the cosine and sine of the body's rotation,
    passed in so callers can reuse them across many points.
    """
    collider = body.collider
    if isinstance(collider, CircleCollider):
        dx = px - body.position.x
        dy = py - body.position.y
        dist_sq = dx * dx + dy * dy
        if dist_sq < _EPSILON:
            return _FAR
        dist = math.sqrt(dist_sq)
        if dist_sq < collider.radius * collider.radius:
            return PointQuery(QueryKind.PENETRATING, collider.radius - dist, dx / dist, dy / dist)
        gap = dist - collider.radius
        if gap < contact_threshold:
            return PointQuery(QueryKind.NEAR_SURFACE, gap, dx / dist, dy / dist)
        return _FAR
    if isinstance(collider, BoxCollider):
        lx, ly = _to_local(body, px, py, cos_r, sin_r)
        hw, hh = collider.half_width, collider.half_height
        if abs(lx) < hw and abs(ly) < hh:
            return PointQuery(QueryKind.PENETRATING, *_box_penetration(collider, lx, ly, cos_r, sin_r))
        sx = lx - max(-hw, min(hw, lx))
        sy = ly - max(-hh, min(hh, ly))
        dist_sq = sx * sx + sy * sy
        if dist_sq > contact_threshold * contact_threshold:
            return _FAR
        if dist_sq > _EPSILON:
            dist = math.sqrt(dist_sq)
            if dist >= contact_threshold:
                return _FAR
            nx, ny = _to_world(sx / dist, sy / dist, cos_r, sin_r)
            return PointQuery(QueryKind.NEAR_SURFACE, dist, nx, ny)
        nx, ny = _box_edge_normal(collider, lx, ly, cos_r, sin_r)
        return PointQuery(QueryKind.NEAR_SURFACE, 0.0, nx, ny)
    raise _unsupported(body)