"""Square, rounded box, ellipse, star and blob meshes."""

from __future__ import annotations

import math

from unisonphys.mesh import Mesh

_U32 = 0xFFFF_FFFF


def _radial_triangles(ring_size: int, rings: int) -> list[int]:
    """Two triangles per segment between each pair of neighbouring rings."""
    triangles: list[int] = []
    for r in range(rings):
        ring_start = r * ring_size
        next_ring_start = (r + 1) * ring_size
        for i in range(ring_size):
            nxt = (i + 1) % ring_size
            triangles.extend(
                (
                    ring_start + i,
                    next_ring_start + i,
                    ring_start + nxt,
                    ring_start + nxt,
                    next_ring_start + i,
                    next_ring_start + nxt,
                )
            )
    return triangles


def create_square_mesh(size: float, divisions: int) -> Mesh:
    """A centred square grid of ``(divisions + 1) ** 2`` vertices with 0-1 UVs."""
    half_size = size / 2.0
    vertices: list[float] = []
    uvs: list[float] = []
    for y in range(divisions + 1):
        for x in range(divisions + 1):
            tx = x / divisions
            ty = y / divisions
            vertices.extend((-half_size + tx * size, -half_size + ty * size))
            uvs.extend((tx, ty))

    per_row = divisions + 1
    triangles: list[int] = []
    for y in range(divisions):
        for x in range(divisions):
            curr = y * per_row + x
            right = curr + 1
            up = curr + per_row
            up_right = up + 1
            triangles.extend((curr, right, up, right, up_right, up))

    return Mesh.with_uvs(vertices, triangles, uvs)


def create_rounded_box_mesh(
    width: float, height: float, corner_radius: float, corner_segments: int
) -> Mesh:
    """A box whose corners are quarter-circle arcs, triangulated as a fan.

    The corner radius is limited to half the smaller side. Vertex 0 is the
    centre; the perimeter runs counter-clockwise from the bottom-right corner
    with ``corner_segments + 1`` vertices per corner.
    """
    r = min(min(width, height) / 2.0, corner_radius)
    half_w = width / 2.0
    half_h = height / 2.0

    vertices: list[float] = [0.0, 0.0]
    uvs: list[float] = [0.5, 0.5]

    corners = (
        (half_w - r, -half_h + r, -math.pi / 2.0),
        (half_w - r, half_h - r, 0.0),
        (-half_w + r, half_h - r, math.pi / 2.0),
        (-half_w + r, -half_h + r, math.pi),
    )
    for cx, cy, start_angle in corners:
        for i in range(corner_segments + 1):
            angle = start_angle + (i / corner_segments) * (math.pi / 2.0)
            px = cx + r * math.cos(angle)
            py = cy + r * math.sin(angle)
            vertices.extend((px, py))
            uvs.extend(((px + half_w) / width, (py + half_h) / height))

    total = 4 * (corner_segments + 1)
    triangles: list[int] = []
    for i in range(total):
        triangles.extend((0, 1 + i, 1 + (i + 1) % total))

    return Mesh.with_uvs(vertices, triangles, uvs)


def create_ellipse_mesh(width: float, height: float, segments: int, rings: int) -> Mesh:
    """An ellipse built from concentric rings around a hole of 20% size.

    UVs are ``(angle fraction, radial fraction)``.
    """
    inner_scale = 0.2
    vertices: list[float] = []
    uvs: list[float] = []
    for r in range(rings + 1):
        radial_t = r / rings
        t = inner_scale + (1.0 - inner_scale) * radial_t
        rx = width * 0.5 * t
        ry = height * 0.5 * t
        for i in range(segments):
            angle = (i / segments) * math.pi * 2.0
            vertices.extend((math.cos(angle) * rx, math.sin(angle) * ry))
            uvs.extend((i / segments, radial_t))
    return Mesh.with_uvs(vertices, _radial_triangles(segments, rings), uvs)


def create_star_mesh(
    outer_radius: float, inner_radius: float, points: int, rings: int
) -> Mesh:
    """A star whose vertices alternate between tip and valley radius.

    Each ring has ``2 * points`` vertices around a hole of 25% size.
    """
    total_points = points * 2
    inner_scale = 0.25
    vertices: list[float] = []
    uvs: list[float] = []
    for r in range(rings + 1):
        radial_t = r / rings
        t = inner_scale + (1.0 - inner_scale) * radial_t
        for i in range(total_points):
            angle = (i / total_points) * math.pi * 2.0
            radius = (outer_radius if i % 2 == 0 else inner_radius) * t
            vertices.extend((math.cos(angle) * radius, math.sin(angle) * radius))
            uvs.extend((i / total_points, radial_t))
    return Mesh.with_uvs(vertices, _radial_triangles(total_points, rings), uvs)


def create_blob_mesh(
    base_radius: float, variation: float, segments: int, rings: int, seed: int
) -> Mesh:
    """An irregular round mesh whose radii vary deterministically with ``seed``.

    Each vertex radius is scaled by ``1 + noise * variation`` with noise in
    the range -1 to 1. The hole in the centre is 20% of the size.
    """

    def pseudo_random(i: int, j: int) -> float:
        mixed = (i * 1103515245 + j * 12345 + seed) & _U32
        return (mixed % 1000) / 1000.0 * 2.0 - 1.0

    inner_scale = 0.2
    vertices: list[float] = []
    uvs: list[float] = []
    for r in range(rings + 1):
        radial_t = r / rings
        base_t = inner_scale + (1.0 - inner_scale) * radial_t
        for i in range(segments):
            angle = (i / segments) * math.pi * 2.0
            radius = base_radius * base_t * (1.0 + pseudo_random(r, i) * variation)
            vertices.extend((math.cos(angle) * radius, math.sin(angle) * radius))
            uvs.extend((i / segments, radial_t))
    return Mesh.with_uvs(vertices, _radial_triangles(segments, rings), uvs)