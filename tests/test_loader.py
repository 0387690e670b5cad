import time

import pytest

from piotercraft.chunk import Chunk
from piotercraft.coords import ChunkCoord
from piotercraft.loader import ChunkLoader

SIZE = 4


def window(cx, cz, distance):
    return {
        ChunkCoord(x, z)
        for x in range(cx - distance, cx + distance + 1)
        for z in range(cz - distance, cz + distance + 1)
    }


def test_create_chunk_places_chunk():
    chunk = ChunkLoader(1, SIZE).create_chunk(3, -2)
    assert isinstance(chunk, Chunk)
    assert (chunk.voxels.world_x, chunk.voxels.world_z) == (3, -2)
    assert chunk.size == SIZE


def test_idle_loader_state():
    loader = ChunkLoader(1, SIZE)
    assert loader.is_task_running() is False
    assert loader.is_finished() is False


def test_retrieve_without_task_raises():
    with pytest.raises(RuntimeError):
        ChunkLoader(1, SIZE).retrieve_new_chunks()


def test_generates_only_missing_chunks():
    loader = ChunkLoader(1, SIZE)
    existing = {ChunkCoord(0, 0), ChunkCoord(1, 1)}
    loader.launch_task(0, 0, existing)
    assert loader.is_task_running()
    chunks = loader.retrieve_new_chunks()
    assert set(chunks) == window(0, 0, 1) - existing
    assert loader.is_task_running() is False
    assert loader.is_finished() is False


def test_chunks_match_their_coordinates():
    loader = ChunkLoader(1, SIZE)
    loader.launch_task(5, -3, set())
    chunks = loader.retrieve_new_chunks()
    assert set(chunks) == window(5, -3, 1)
    for coord, chunk in chunks.items():
        assert (chunk.voxels.world_x, chunk.voxels.world_z) == (coord.x, coord.z)


def test_task_finishes():
    loader = ChunkLoader(1, SIZE)
    loader.launch_task(0, 0, set())
    deadline = time.monotonic() + 10.0
    while not loader.is_finished() and time.monotonic() < deadline:
        time.sleep(0.005)
    assert loader.is_finished()
    assert len(loader.retrieve_new_chunks()) == len(window(0, 0, 1))


def test_nothing_missing_gives_empty_result():
    loader = ChunkLoader(2, SIZE)
    loader.launch_task(0, 0, window(0, 0, 2))
    assert loader.retrieve_new_chunks() == {}