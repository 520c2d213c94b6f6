"""Triangle meshes and boundary edge extraction."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable, MutableSequence, Sequence
from dataclasses import dataclass

Edge = tuple[int, int]


@dataclass
class Mesh:
    """Triangle mesh with flat vertex, index and optional UV arrays.

    ``vertices`` holds ``[x0, y0, x1, y1, ...]`` and ``triangles`` holds
    vertex indices in groups of three. ``boundary_edges`` is filled in on
    demand by :meth:`ensure_boundary_edges`.
    """

    vertices: list[float]
    triangles: list[int]
    uvs: list[float] | None = None
    boundary_edges: list[Edge] | None = None

    @classmethod
    def with_uvs(
        cls, vertices: Sequence[float], triangles: Sequence[int], uvs: Sequence[float]
    ) -> Mesh:
        """Create a mesh carrying UV coordinates, one pair per vertex."""
        if len(vertices) != len(uvs):
            raise ValueError(
                f"UV count must match vertex count: {len(uvs)} != {len(vertices)}"
            )
        return cls(list(vertices), list(triangles), list(uvs))

    def ensure_boundary_edges(self) -> list[Edge]:
        """Compute and cache the outer boundary edges, then return them.

        For meshes with holes only the outermost boundary loop is kept.
        """
        if self.boundary_edges is None:
            all_edges = compute_boundary_edges_from_triangles(self.triangles)
            self.boundary_edges = extract_outer_boundary(self.vertices, all_edges)
        return self.boundary_edges

    def vertex_count(self) -> int:
        """Number of vertices."""
        return len(self.vertices) // 2

    def uvs_or_default(self) -> list[float]:
        """A copy of the UVs, or zeros when the mesh has none."""
        if self.uvs is None:
            return [0.0] * len(self.vertices)
        return list(self.uvs)


def _triples(triangles: Sequence[int]) -> Iterable[tuple[int, int, int]]:
    it = iter(triangles)
    return zip(it, it, it)


def compute_boundary_edges_from_triangles(triangles: Sequence[int]) -> list[Edge]:
    """Edges that belong to exactly one triangle, keeping their winding direction.

    A trailing incomplete triangle is ignored.
    """
    counts: dict[Edge, int] = {}
    directed: dict[Edge, Edge] = {}
    for a, b, c in _triples(triangles):
        for edge in ((a, b), (b, c), (c, a)):
            key = (min(edge), max(edge))
            if key in counts:
                counts[key] += 1
            else:
                counts[key] = 1
                directed[key] = edge
    return [directed[key] for key, count in counts.items() if count == 1]


def _trace_loops(edges: Sequence[Edge]) -> list[list[int]]:
    adjacency: dict[int, list[int]] = defaultdict(list)
    for a, b in edges:
        adjacency[a].append(b)
        adjacency[b].append(a)

    visited: set[int] = set()
    loops: list[list[int]] = []
    for start, _ in edges:
        if start in visited:
            continue
        loop_verts: list[int] = []
        current = start
        prev: int | None = None
        while True:
            visited.add(current)
            loop_verts.append(current)
            nxt = next((n for n in adjacency[current] if n != prev), None)
            if nxt is None or nxt == start or nxt in visited:
                break
            prev, current = current, nxt
        if len(loop_verts) >= 3:
            loops.append(loop_verts)
    return loops


def extract_outer_boundary(vertices: Sequence[float], edges: Sequence[Edge]) -> list[Edge]:
    """Keep only the edges of the boundary loop enclosing the largest area.

    With a single loop (or none) every edge is returned unchanged.
    """
    if not edges:
        return []
    loops = _trace_loops(edges)
    if len(loops) <= 1:
        return list(edges)

    outer_loop: list[int] = loops[0]
    best_area = shoelace_area(vertices, outer_loop)
    for candidate in loops[1:]:
        area = shoelace_area(vertices, candidate)
        if area >= best_area:
            outer_loop, best_area = candidate, area

    outer_set = set(outer_loop)
    return [(a, b) for a, b in edges if a in outer_set and b in outer_set]


def shoelace_area(vertices: Sequence[float], loop_verts: Sequence[int]) -> float:
    """Absolute area enclosed by a loop of vertex indices."""
    total = 0.0
    for vi, vj in zip(loop_verts, [*loop_verts[1:], *loop_verts[:1]]):
        xi, yi = vertices[vi * 2], vertices[vi * 2 + 1]
        xj, yj = vertices[vj * 2], vertices[vj * 2 + 1]
        total += xi * yj - xj * yi
    return abs(total) * 0.5


def offset_vertices(vertices: MutableSequence[float], dx: float, dy: float) -> None:
    """Shift every vertex of a flat coordinate array in place."""
    vertices[0::2] = [x + dx for x in vertices[0::2]]
    vertices[1::2] = [y + dy for y in vertices[1::2]]