"""Ring (annulus) meshes and wireframe indices for radial meshes."""

from __future__ import annotations

import math

from unisonphys.mesh import Mesh


def create_ring_mesh(
    outer_radius: float,
    inner_radius: float,
    segments: int,
    radial_divisions: int,
) -> Mesh:
    """Create a ring mesh with UV coordinates.

    Vertices are laid out ring by ring from the inner edge outwards, with
    ``segments`` vertices per ring and no duplicate vertex at the seam. UVs
    map positions directly so that ``outer_radius`` reaches the texture edge.
    """
    vertices: list[float] = []
    uvs: list[float] = []
    for r in range(radial_divisions + 1):
        t = r / radial_divisions
        radius = inner_radius + (outer_radius - inner_radius) * t
        for i in range(segments):
            angle = (i / segments) * math.pi * 2.0
            x = math.cos(angle) * radius
            y = math.sin(angle) * radius
            vertices.extend((x, y))
            uvs.extend((0.5 + (x / outer_radius) * 0.5, 0.5 + (y / outer_radius) * 0.5))

    triangles: list[int] = []
    for r in range(radial_divisions):
        for i in range(segments):
            curr = r * segments + i
            nxt = r * segments + (i + 1) % segments
            curr_outer = (r + 1) * segments + i
            next_outer = (r + 1) * segments + (i + 1) % segments
            triangles.extend((curr, curr_outer, nxt, nxt, curr_outer, next_outer))

    return Mesh.with_uvs(vertices, triangles, uvs)


def create_ring_wireframe(segments: int, radial_divisions: int) -> list[int]:
    """Line index pairs outlining the triangles of a ring mesh."""
    lines: list[int] = []
    last = radial_divisions - 1
    for r in range(radial_divisions):
        for i in range(segments):
            curr = r * segments + i
            nxt = r * segments + (i + 1) % segments
            curr_outer = (r + 1) * segments + i
            next_outer = (r + 1) * segments + (i + 1) % segments
            lines.extend((curr, nxt))
            lines.extend((curr, curr_outer))
            lines.extend((nxt, curr_outer))
            if r == last:
                lines.extend((curr_outer, next_outer))
    return lines


def create_radial_wireframe(segments: int, rings: int) -> list[int]:
    """Line index pairs for radial meshes (ellipse, star, blob) with a centre hole."""
    lines: list[int] = []
    for r in range(rings + 1):
        ring_start = r * segments
        for i in range(segments):
            lines.extend((ring_start + i, ring_start + (i + 1) % segments))
            if r < rings:
                lines.extend((ring_start + i, (r + 1) * segments + i))
    return lines