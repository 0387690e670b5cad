"""The world of chunks around the camera: loading, editing and updating."""

from __future__ import annotations

import math
import threading
from types import MappingProxyType
from typing import Mapping, Optional

import numpy as np

from .chunk import Chunk
from .coords import (
    ChunkCoord,
    ChunkWindow,
    chunk_window_around,
    floor_divide,
    is_chunk_within_window,
    negative_safe_modulo,
)
from .cube import CubeType
from .frustum import Frustum
from .loader import ChunkLoader
from .neighbors import NeighborGatherer
from .raycaster import HitResult, Raycaster
from .terrain import NoiseSource
from .updater import ChunkUpdater

DEFAULT_CHUNK_SIZE = 64
DEFAULT_RENDER_DISTANCE = 8


class World:
    """Keeps the chunks within the render distance of the camera loaded.

    Chunks leaving the window are set aside and restored when the camera
    comes back; chunks never seen before are generated in the background.
    """

    def __init__(
        self,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        render_distance: int = DEFAULT_RENDER_DISTANCE,
        noise: Optional[NoiseSource] = None,
        tree_rng=None,
    ) -> None:
        self.chunk_size = chunk_size
        self.render_distance = render_distance
        self.camera_position = np.zeros(3)
        self._lock = threading.RLock()
        self._loaded: dict[ChunkCoord, Chunk] = {}
        self._saved: dict[ChunkCoord, Chunk] = {}
        self._updaters: dict[ChunkCoord, ChunkUpdater] = {}
        self._loader = ChunkLoader(render_distance, chunk_size, noise, tree_rng)
        self._load_initial_chunks()
        self._last_camera_chunk = ChunkCoord(0, 0)

    @property
    def loaded_chunks(self) -> Mapping[ChunkCoord, Chunk]:
        """Read-only view of the chunks currently loaded."""
        return MappingProxyType(self._loaded)

    @property
    def saved_chunks(self) -> Mapping[ChunkCoord, Chunk]:
        """Read-only view of the chunks set aside outside the window."""
        return MappingProxyType(self._saved)

    def set_camera_position(self, position) -> None:
        self.camera_position = np.asarray(position, dtype=float)

    def get_chunk(self, coord: ChunkCoord) -> Optional[Chunk]:
        """The loaded chunk at ``coord``, or None."""
        with self._lock:
            return self._loaded.get(coord)

    def add_cube_from_raycast(self, camera, max_distance: float,
                              cube_type: CubeType) -> bool:
        """Place a cube against the face the camera is looking at."""
        hit = self._raycast(camera, max_distance)
        if hit is None:
            return False
        x, y, z = (p + n for p, n in zip(hit.position, hit.normal))
        coord = ChunkCoord(floor_divide(x, self.chunk_size),
                           floor_divide(z, self.chunk_size))
        chunk = self.get_chunk(coord)
        if chunk is None:
            return False
        local = (negative_safe_modulo(x, self.chunk_size), y,
                 negative_safe_modulo(z, self.chunk_size))
        added = chunk.add_cube(local, cube_type)
        if added and cube_type is CubeType.TORCH:
            self._notify_neighbor_chunks(coord)
        return added

    def remove_cube_from_raycast(self, camera, max_distance: float) -> bool:
        """Remove the cube the camera is looking at."""
        hit = self._raycast(camera, max_distance)
        if hit is None:
            return False
        x, y, z = hit.position
        coord = ChunkCoord(floor_divide(x, self.chunk_size),
                           floor_divide(z, self.chunk_size))
        chunk = self.get_chunk(coord)
        if chunk is None:
            return False
        local = (negative_safe_modulo(x, self.chunk_size), y,
                 negative_safe_modulo(z, self.chunk_size))
        if chunk.cube_type(local) is CubeType.TORCH:
            self._notify_neighbor_chunks(coord)
        return chunk.remove_cube(local)

    def update_loaded_chunks(self) -> None:
        """Run one frame of chunk loading, eviction and cube recomputation."""
        camera_chunk = ChunkCoord(
            math.floor(self.camera_position[0] / self.chunk_size),
            math.floor(self.camera_position[2] / self.chunk_size),
        )
        self._adjust_loaded_chunks(camera_chunk)
        self._reload_relevant_chunks(camera_chunk)
        self._inject_neighbors_to_modified_chunks()
        self._run_update_per_chunk()

    def perform_frustum_culling(self, frustum: Frustum) -> None:
        """Update the culled flag of every loaded chunk."""
        with self._lock:
            chunks = list(self._loaded.values())
        for chunk in chunks:
            chunk.perform_frustum_culling(frustum)

    def _raycast(self, camera, max_distance: float) -> Optional[HitResult]:
        with self._lock:
            snapshot = dict(self._loaded)
        return Raycaster(camera, self.chunk_size).raycast(snapshot, max_distance)

    def _load_initial_chunks(self) -> None:
        distance = self.render_distance
        with self._lock:
            for x in range(-distance, distance + 1):
                for z in range(-distance, distance + 1):
                    self._attach(ChunkCoord(x, z), self._loader.create_chunk(x, z))

    def _attach(self, coord: ChunkCoord, chunk: Chunk) -> None:
        self._loaded[coord] = chunk
        self._updaters[coord] = ChunkUpdater(chunk)

    def _notify_neighbor_chunks(self, center: ChunkCoord) -> None:
        for offset_x in (-1, 0, 1):
            for offset_z in (-1, 0, 1):
                if offset_x == 0 and offset_z == 0:
                    continue
                neighbor = self.get_chunk(
                    ChunkCoord(center.x + offset_x, center.z + offset_z)
                )
                if neighbor is not None:
                    neighbor.mark_modified()

    def _update_camera_chunk(self, coord: ChunkCoord) -> bool:
        with self._lock:
            if coord != self._last_camera_chunk:
                self._last_camera_chunk = coord
                return True
            return False

    def _merge_new_chunks(self, new_chunks: Mapping[ChunkCoord, Chunk]) -> None:
        with self._lock:
            for coord, chunk in new_chunks.items():
                if coord not in self._loaded:
                    self._attach(coord, chunk)

    def _reload_relevant_chunks(self, camera_chunk: ChunkCoord) -> None:
        moved = self._update_camera_chunk(camera_chunk)
        with self._lock:
            existing = frozenset(self._loaded)
        if self._loader.is_task_running() and self._loader.is_finished():
            self._merge_new_chunks(self._loader.retrieve_new_chunks())
        if moved and not self._loader.is_task_running():
            self._loader.launch_task(camera_chunk.x, camera_chunk.z, existing)

    def _adjust_loaded_chunks(self, camera_chunk: ChunkCoord) -> None:
        window = chunk_window_around(camera_chunk, self.render_distance)
        with self._lock:
            self._restore_saved_chunks(window)
            self._evict_out_of_range_chunks(window)

    def _restore_saved_chunks(self, window: ChunkWindow) -> None:
        for coord in [c for c in self._saved if is_chunk_within_window(c, window)]:
            chunk = self._saved.pop(coord)
            self._loaded.setdefault(coord, chunk)
            self._updaters[coord] = ChunkUpdater(self._loaded[coord])

    def _should_evict(self, coord: ChunkCoord, window: ChunkWindow) -> bool:
        if is_chunk_within_window(coord, window):
            return False
        updater = self._updaters.get(coord)
        return updater is None or not updater.is_update_running()

    def _evict_out_of_range_chunks(self, window: ChunkWindow) -> None:
        for coord in [c for c in self._loaded if self._should_evict(c, window)]:
            self._saved[coord] = self._loaded.pop(coord)
            self._updaters.pop(coord, None)

    def _inject_neighbors_to_modified_chunks(self) -> None:
        with self._lock:
            items = list(self._loaded.items())
        gatherer = NeighborGatherer(self.chunk_size)
        for coord, chunk in items:
            if chunk.is_modified:
                chunk.set_neighbors_surrounding_cubes(
                    gatherer.gather_neighbors_for_coord(coord, self.get_chunk)
                )

    def _run_update_per_chunk(self) -> None:
        with self._lock:
            updaters = list(self._updaters.items())
        for coord, updater in updaters:
            chunk = self.get_chunk(coord)
            if chunk is not None and chunk.is_modified and not updater.is_update_running():
                updater.launch_update()
            updater.check_and_apply_update()