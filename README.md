# piotercraft

The simulation core of a block-building sandbox world. It keeps track of
what the world is made of and how that changes. Drawing it is left to a
renderer of your choice.

- a world split into square chunks, with Perlin-noise terrain made of sand,
  dirt and grass, and a water layer at height 14
- trees with log trunks and leaf crowns, placed at random on high ground
- torch light that spreads through empty space and fades with distance,
  including light that crosses chunk borders
- a camera driven by keyboard and mouse input, with view and perspective
  matrices
- frustum tests for chunk bounding boxes and for single cubes
- raycasting from the camera to find the cube being looked at, and placing
  or removing cubes at that spot
- chunk streaming around the camera: chunks are built on background
  threads, set aside when they leave the render distance and restored when
  the camera comes back

The only dependency is `numpy`. Install with `pip install .`, and
`pip install .[test]` to run the tests with `pytest`.

## What it does not do

The package has no window, no drawing, no input handling, no texture or
font loading and no command to start a game. `Materials` only names the
texture files and texture units a renderer would use; nothing here opens
them. The world is not saved to disk: chunks set aside outside the render
distance are kept in memory only.

## Coordinates

Voxel grids are nested lists indexed `grid[x][z][y]`. Cube positions inside
a chunk are local `(x, y, z)` tuples in the range `0 .. size - 1`. Chunks
are addressed by a `ChunkCoord(x, z)`. World positions map to chunks with
floor division, so negative positions land in the right chunk:

```python
from piotercraft.coords import floor_divide, negative_safe_modulo, is_position_within_bounds

floor_divide(-1, 64)          # -1
negative_safe_modulo(-1, 64)  # 63
is_position_within_bounds((0, 63, 10), 64)  # True
```

`chunk_window_around(center, distance)` gives the `ChunkWindow` of chunks
within a render distance, and `is_chunk_within_window` tests a coordinate
against it, edges included.

## Cube types and materials

`CubeType` lists the cube kinds: `NONE`, `SAND`, `DIRT`, `GRASS`, `WATER`,
`LOG`, `LEAVES` and `TORCH`. A `Cube` has a world position and a type, and
`Cube.model()` returns its 4x4 translation matrix. `Materials` holds the
texture paths, texture units, shininess and transparency of each kind
except `NONE`:

```python
from piotercraft.cube import CubeType
from piotercraft.materials import Materials

water = Materials().get(CubeType.WATER)
water.alpha  # 0.5, water is drawn half transparent
```

`piotercraft.vertex_data` holds the shared cube geometry: `VERTICES`
(24 `Vertex` values with texture coordinate and normal), `INDICES` and
`WATER_INDICES` (the top face only).

## Camera and frustum

```python
import math
from piotercraft.camera import Camera, Movement, perspective
from piotercraft.frustum import Frustum

camera = Camera()                                # at (64, 30, 64), looking along -z
camera.process_keyboard(Movement.FORWARD, 0.5)
camera.process_mouse_movement(10.0, -5.0, True)  # pitch is kept within ±89°
camera.process_mouse_scroll(2.0)                 # zoom is kept within 1..45

projection = perspective(math.radians(camera.zoom), 16 / 9, 0.1, 200.0)
frustum = Frustum()
frustum.update(projection @ camera.view_matrix())
frustum.is_aabb_inside((0, 0, 0), (1, 1, 1))
```

`look_at` builds a view matrix directly. `Frustum.is_model_included(model)`
tests a unit cube placed by a model matrix, widened by a tolerance of 7
units by default.

## The world

`World` owns the loaded chunks. By default chunks are 64 cubes on a side
and 8 chunks are kept loaded in each direction; smaller values make a
lighter world. Each frame, give it the camera position and let it update:

```python
from piotercraft.world import World

world = World(chunk_size=16, render_distance=1)
world.set_camera_position(camera.position)
world.update_loaded_chunks()
```

`update_loaded_chunks` restores saved chunks that come back into range,
sets aside chunks that are out of range (unless a rebuild of theirs is
still running), collects chunks the background loader has finished and
starts a new load when the camera enters another chunk. It then gives
modified chunks the cubes that border them in neighbouring chunks and
rebuilds their cubes and light in the background, applying each result on
a later call once it is ready.

`world.loaded_chunks` and `world.saved_chunks` are read-only views;
`world.get_chunk(coord)` returns a loaded chunk or `None`.
`world.perform_frustum_culling(frustum)` sets each chunk's `is_culled`.

Building and breaking goes through raycasts from the camera:

```python
from piotercraft.cube import CubeType

world.add_cube_from_raycast(camera, 5.0, CubeType.TORCH)
world.remove_cube_from_raycast(camera, 5.0)
```

Both return whether a cube was placed or removed. Placing or removing a
torch marks the eight surrounding chunks as modified, so their lighting is
worked out again.

`World`, `ChunkLoader`, `ChunkVoxels` and `GridGenerator` accept a `noise`
object (anything with `noise(x, z)`) and `World`, `ChunkLoader`,
`ChunkVoxels` and `TreeGenerator` accept a `tree_rng`/`rng` such as
`random.Random(seed)`, for repeatable worlds.

## Building blocks

The parts can be used on their own:

- `terrain`: `PerlinNoise`, `GridGenerator`, `empty_grid` and
  `cube_type_for_height` build the terrain of one chunk
- `trees`: `TreeGenerator` plants trunks and crowns and re-emits them as
  cubes
- `light`: `LightPropagator.compute_light_mask` spreads torch light through
  a grid padded by one cell, and returns the chunk's values ordered by z,
  then y, then x
- `voxels`: `ChunkVoxels` holds the grid of one chunk and builds its
  `CubeData` (visible cubes, instance matrices and light volume)
- `chunk`: `Chunk` wraps `ChunkVoxels` with the applied instance matrices,
  light volume and culling flag
- `neighbors`: `NeighborGatherer` collects the cubes on the borders of the
  eight neighbouring chunks
- `raycaster`: `Raycaster.raycast` walks a ray through the loaded chunks and
  returns a `HitResult` or `None`
- `updater` and `loader`: `ChunkUpdater` and `ChunkLoader` run rebuilds and
  chunk generation on background threads
- `clock`: `Clock.tick` measures frame time and frames per second