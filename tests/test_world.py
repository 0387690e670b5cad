import math
import time
from types import SimpleNamespace

import numpy as np
import pytest

from piotercraft.camera import Camera, perspective
from piotercraft.coords import ChunkCoord
from piotercraft.cube import CubeType
from piotercraft.frustum import Frustum
from piotercraft.world import World

SIZE = 8


class _Flat:
    def __init__(self, value=0.0):
        self.value = value

    def noise(self, x, z):
        return self.value


def _world(render_distance=1):
    return World(chunk_size=SIZE, render_distance=render_distance, noise=_Flat())


def _settle(world, predicate, timeout=30.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        world.update_loaded_chunks()
        if predicate():
            return True
        time.sleep(0.01)
    return False


def _window(cx, cz, distance=1):
    return {
        ChunkCoord(x, z)
        for x in range(cx - distance, cx + distance + 1)
        for z in range(cz - distance, cz + distance + 1)
    }


def _down_camera():
    return SimpleNamespace(
        position=np.array([1.3, 3.5, 1.3]), front=np.array([0.001, -1.0, 0.001])
    )


def test_initial_chunks_cover_render_window():
    world = _world()
    assert set(world.loaded_chunks) == _window(0, 0)
    assert world.get_chunk(ChunkCoord(0, 0)) is world.loaded_chunks[ChunkCoord(0, 0)]
    assert world.get_chunk(ChunkCoord(5, 5)) is None


def test_add_and_remove_cube_from_raycast():
    world = _world()
    camera = _down_camera()
    chunk = world.get_chunk(ChunkCoord(0, 0))
    assert chunk.is_cube_in_grid((1, 0, 1))
    assert not chunk.is_cube_in_grid((1, 1, 1))

    assert world.add_cube_from_raycast(camera, 5.0, CubeType.DIRT) is True
    assert chunk.cube_type((1, 1, 1)) is CubeType.DIRT

    assert world.remove_cube_from_raycast(camera, 5.0) is True
    assert not chunk.is_cube_in_grid((1, 1, 1))
    assert chunk.is_cube_in_grid((1, 0, 1))


def test_raycast_miss_changes_nothing():
    world = _world()
    camera = SimpleNamespace(
        position=np.array([1.3, 3.5, 1.3]), front=np.array([0.001, 1.0, 0.001])
    )
    assert world.add_cube_from_raycast(camera, 5.0, CubeType.SAND) is False
    assert world.remove_cube_from_raycast(camera, 5.0) is False
    assert not world.get_chunk(ChunkCoord(0, 0)).is_cube_in_grid((1, 1, 1))


def test_torch_marks_neighbors_modified():
    world = _world()
    for chunk in world.loaded_chunks.values():
        chunk.voxels.set_modified(False)
    assert world.add_cube_from_raycast(_down_camera(), 5.0, CubeType.TORCH)
    assert all(chunk.is_modified for chunk in world.loaded_chunks.values())


def test_non_torch_leaves_neighbors_untouched():
    world = _world()
    for chunk in world.loaded_chunks.values():
        chunk.voxels.set_modified(False)
    assert world.add_cube_from_raycast(_down_camera(), 5.0, CubeType.SAND)
    modified = {c for c, chunk in world.loaded_chunks.items() if chunk.is_modified}
    assert modified == {ChunkCoord(0, 0)}


def test_update_applies_cube_data_to_all_chunks():
    world = _world()
    world.set_camera_position((1.0, 3.0, 1.0))
    assert _settle(
        world, lambda: not any(c.is_modified for c in world.loaded_chunks.values())
    )
    chunk = world.get_chunk(ChunkCoord(0, 0))
    assert len(chunk.light_volume) == SIZE ** 3
    assert CubeType.SAND in chunk.instance_model_matrices


def test_moving_camera_evicts_loads_and_restores():
    world = _world()
    world.set_camera_position((1.0, 3.0, 1.0))
    assert _settle(
        world, lambda: not any(c.is_modified for c in world.loaded_chunks.values())
    )
    original = world.get_chunk(ChunkCoord(0, 0))

    world.set_camera_position((3 * SIZE + 1.0, 3.0, 1.0))
    assert _settle(world, lambda: set(world.loaded_chunks) == _window(3, 0))
    assert ChunkCoord(0, 0) in world.saved_chunks
    assert world.get_chunk(ChunkCoord(0, 0)) is None
    assert not set(world.saved_chunks) & set(world.loaded_chunks)

    world.set_camera_position((1.0, 3.0, 1.0))
    assert _settle(world, lambda: set(world.loaded_chunks) == _window(0, 0))
    assert world.get_chunk(ChunkCoord(0, 0)) is original
    assert ChunkCoord(0, 0) not in world.saved_chunks


def test_frustum_culling_marks_chunks_behind_camera():
    world = _world()
    camera = Camera(position=(4.0, 2.0, 2.0))
    frustum = Frustum()
    frustum.update(
        perspective(math.radians(45.0), 16 / 9, 0.1, 200.0) @ camera.view_matrix()
    )
    world.perform_frustum_culling(frustum)
    assert world.get_chunk(ChunkCoord(0, 1)).is_culled is True
    assert world.get_chunk(ChunkCoord(0, -1)).is_culled is False


@pytest.mark.parametrize("distance", [0, 1, 2])
def test_initial_chunk_count_matches_render_distance(distance):
    world = World(chunk_size=4, render_distance=distance, noise=_Flat())
    assert set(world.loaded_chunks) == _window(0, 0, distance)
    assert len(world.loaded_chunks) == (2 * distance + 1) ** 2