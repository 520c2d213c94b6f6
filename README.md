# unisonphys

A small 2D physics toolkit in pure Python. It has no dependencies. It provides:

- **Rigid bodies** (`unisonphys.body.RigidBody`) with circle and box colliders (`unisonphys.collider.CircleCollider`, `BoxCollider`). They are built from a `RigidBodyConfig` and use position-based integration. A body created with `as_kinematic()` has zero inverse mass, and the solver never moves it.
- **Contacts** (`unisonphys.contacts`). Narrow-phase tests for circle–circle, circle–box and box–box pairs; box–box uses separating axes. Each test returns a `Contact`. `unisonphys.resolve` applies the response: position correction, restitution, friction and angular response.
- **Point queries** (`unisonphys.pointquery`). `contains_point`, `nearest_surface_dist` and `query_point` test a point against a rigid body. `query_point` reports whether the point is penetrating, near the surface or far, with a depth and an outward normal.
- **Collision groups** (`unisonphys.bodies.CollisionGroups`). A membership mask and a filter mask decide which bodies interact.
- **A world** (`unisonphys.world.PhysicsWorld`). It holds rigid bodies by `BodyHandle` and steps them with substeps and contact iterations, over a flat ground or a terrain height function. It answers contact, grounding, energy and interpolation queries.
- **Meshes**. `unisonphys.mesh.Mesh` holds flat vertex, triangle and UV arrays and can compute its outer boundary edges. Generators are in `unisonphys.rings` (ring mesh, ring and radial wireframes) and `unisonphys.shapes` (square, rounded box, ellipse, star, blob).

## Installation

```
pip install .
```

## Quick start

```python
from unisonphys.collider import RigidBodyConfig
from unisonphys.world import PhysicsWorld

world = PhysicsWorld()
world.ground_y = 0.0
world.set_ground_friction(0.5)
world.set_ground_restitution(0.2)

ball = world.add_rigid_body(
    RigidBodyConfig().as_circle(0.5).at_position(0.0, 5.0).with_restitution(0.6)
)
crate = world.add_rigid_body(
    RigidBodyConfig().as_aabb(1.0, 0.5).at_position(0.2, 1.0)
)

for _ in range(120):
    world.step(1 / 60)

print(world.get_position(ball), world.is_grounded(ball, 0.05))
```

Gravity is the attribute `world.gravity`, which defaults to -9.8. The ground is `world.ground_y`, which defaults to `None` (no ground). Operations on an unknown or removed handle do nothing. Queries on such a handle return `None`, or `False` for the boolean ones.

`apply_force` adds the force to the velocity as an impulse, scaled by the inverse mass. `apply_impulse` adds its values to the velocity directly. `apply_torque(handle, torque, dt)` applies an angular impulse.

## Collision groups

```python
from unisonphys.bodies import CollisionGroups

player = CollisionGroups(0b0001, 0b0010)
enemy = CollisionGroups(0b0010, 0b0001)
assert player.can_collide(enemy)

world.set_collision_groups(crate, CollisionGroups(0b0100, 0b0100))
```

Two bodies collide only if each one's membership is accepted by the other's filter.

## Terrain

`step_with_terrain` takes a function from x to ground height. For each body, the ground height is read at the x of the body's centre. The bottom of the body's bounding box is then pushed up to that height.

```python
import math

world.step_with_terrain(1 / 60, lambda x: 0.3 * math.sin(x))
```

## Meshes

```python
from unisonphys.rings import create_ring_mesh, create_ring_wireframe
from unisonphys.shapes import create_star_mesh

ring = create_ring_mesh(1.0, 0.5, 8, 2)
print(ring.vertex_count(), len(ring.triangles) // 3)   # 24 32

star = create_star_mesh(1.5, 0.7, 5, 3)
edges = star.ensure_boundary_edges()   # outer loop only; the centre hole is dropped
print(len(edges))
```

## Rendering helpers

Between fixed steps, `get_position_interpolated(handle, alpha)` and `get_rigid_body_render_data_interpolated(handle, alpha)` blend the previous and current pose. `alpha` is clamped to the range 0 to 1. The second method returns `(position, half_extents, rotation)`.

## What it does not do

- `PhysicsWorld` simulates rigid bodies only. Meshes can be generated and analysed, but nothing simulates them as deformable bodies.
- `Material` and `BodyConfig` (in `unisonphys.bodies`) describe settings for deformable bodies. No part of the package consumes them.
- There is no drawing, window or command-line program. The rendering helpers only return numbers.

## Running the tests

```
pip install .[test]
pytest
```