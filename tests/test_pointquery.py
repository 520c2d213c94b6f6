import math

import pytest

from unisonphys.body import RigidBody
from unisonphys.collider import RigidBodyConfig
from unisonphys.pointquery import (
    PointQuery,
    QueryKind,
    contains_point,
    nearest_surface_dist,
    query_point,
)


def circle_body(radius=1.0, x=0.0, y=0.0):
    return RigidBody(RigidBodyConfig().as_circle(radius).at_position(x, y))


def box_body(hw=1.0, hh=0.5, x=0.0, y=0.0, rotation=0.0):
    return RigidBody(
        RigidBodyConfig().as_aabb(hw, hh).at_position(x, y).with_rotation(rotation)
    )


def query(body, px, py, threshold):
    return query_point(
        body, px, py, threshold, math.cos(body.rotation), math.sin(body.rotation)
    )


def test_contains_point_circle():
    body = circle_body()
    assert contains_point(body, 0.5, 0.0) is not None
    assert contains_point(body, 2.0, 0.0) is None


def test_contains_point_circle_values():
    body = circle_body()
    pen, nx, ny = contains_point(body, 0.5, 0.0)
    assert pen == pytest.approx(0.5)
    assert (nx, ny) == pytest.approx((1.0, 0.0))


def test_contains_point_circle_centre_is_ignored():
    assert contains_point(circle_body(), 0.0, 0.0) is None


def test_contains_point_box_nearest_face():
    body = box_body()
    pen, nx, ny = contains_point(body, 0.9, 0.0)
    assert pen == pytest.approx(0.1)
    assert (nx, ny) == pytest.approx((1.0, 0.0))
    pen, nx, ny = contains_point(body, 0.0, -0.4)
    assert pen == pytest.approx(0.1)
    assert (nx, ny) == pytest.approx((0.0, -1.0))


def test_contains_point_box_outside_and_on_edge():
    body = box_body()
    assert contains_point(body, 1.5, 0.0) is None
    assert contains_point(body, 1.0, 0.0) is None


def test_contains_point_rotated_box():
    body = box_body(rotation=math.pi / 2)
    pen, nx, ny = contains_point(body, 0.0, 0.9)
    assert pen == pytest.approx(0.1)
    assert (nx, ny) == pytest.approx((0.0, 1.0), abs=1e-9)
    assert contains_point(body, 0.9, 0.0) is None


def test_nearest_surface_dist_circle():
    dist, nx, ny = nearest_surface_dist(circle_body(), 0.0, 3.0)
    assert dist == pytest.approx(2.0)
    assert (nx, ny) == pytest.approx((0.0, 1.0))
    assert nearest_surface_dist(circle_body(), 0.5, 0.0) is None


def test_nearest_surface_dist_box_edge_and_corner():
    body = box_body()
    dist, nx, ny = nearest_surface_dist(body, 2.0, 0.0)
    assert dist == pytest.approx(1.0)
    assert (nx, ny) == pytest.approx((1.0, 0.0))
    dist, nx, ny = nearest_surface_dist(body, 2.0, 1.5)
    assert dist == pytest.approx(math.sqrt(2.0))
    assert (nx, ny) == pytest.approx((1 / math.sqrt(2.0), 1 / math.sqrt(2.0)))


def test_nearest_surface_dist_box_on_surface():
    dist, nx, ny = nearest_surface_dist(box_body(), 0.0, 0.5)
    assert dist == 0.0
    assert (nx, ny) == pytest.approx((0.0, 1.0))


def test_nearest_surface_dist_box_inside():
    assert nearest_surface_dist(box_body(), 0.2, 0.1) is None


def test_query_point_circle_kinds():
    body = circle_body()
    inside = query(body, 0.5, 0.0, 0.05)
    assert inside.kind is QueryKind.PENETRATING
    assert inside.distance == pytest.approx(0.5)
    near = query(body, 1.02, 0.0, 0.05)
    assert near.kind is QueryKind.NEAR_SURFACE
    assert near.distance == pytest.approx(0.02)
    assert (near.nx, near.ny) == pytest.approx((1.0, 0.0))
    assert query(body, 2.0, 0.0, 0.05).kind is QueryKind.FAR
    assert query(body, 0.0, 0.0, 0.05) == PointQuery(QueryKind.FAR)


def test_query_point_box_kinds():
    body = box_body()
    inside = query(body, 0.9, 0.0, 0.05)
    assert inside.kind is QueryKind.PENETRATING
    assert inside.distance == pytest.approx(0.1)
    near = query(body, 0.0, 0.52, 0.05)
    assert near.kind is QueryKind.NEAR_SURFACE
    assert near.distance == pytest.approx(0.02)
    assert (near.nx, near.ny) == pytest.approx((0.0, 1.0))
    on_edge = query(body, 1.0, 0.0, 0.05)
    assert on_edge.kind is QueryKind.NEAR_SURFACE
    assert on_edge.distance == 0.0
    assert query(body, 3.0, 0.0, 0.05).kind is QueryKind.FAR


@pytest.mark.parametrize(
    "px,py",
    [(0.3, 0.1), (-0.8, 0.05), (0.1, -0.35), (0.0, 0.2)],
)
def test_query_point_agrees_with_contains_point(px, py):
    body = box_body(x=0.5, y=-0.25, rotation=0.4)
    expected = contains_point(body, px + 0.5, py - 0.25)
    result = query(body, px + 0.5, py - 0.25, 0.05)
    assert expected is not None
    assert result.kind is QueryKind.PENETRATING
    assert (result.distance, result.nx, result.ny) == pytest.approx(expected)


def test_query_point_agrees_with_nearest_surface_dist():
    body = box_body(rotation=0.3)
    px, py = 1.3, 0.4
    dist, nx, ny = nearest_surface_dist(body, px, py)
    result = query(body, px, py, dist + 0.1)
    assert result.kind is QueryKind.NEAR_SURFACE
    assert (result.distance, result.nx, result.ny) == pytest.approx((dist, nx, ny))
    assert query(body, px, py, dist * 0.5).kind is QueryKind.FAR


def test_normals_are_unit_length():
    body = box_body(rotation=1.1)
    result = query(body, 2.0, 2.5, 10.0)
    assert math.hypot(result.nx, result.ny) == pytest.approx(1.0)