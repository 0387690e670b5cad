"""A chunk of the world: voxels plus the state used to draw them."""

from __future__ import annotations

import numpy as np

from .coords import NeighborVoxels, Position, is_position_within_bounds
from .cube import CubeData, CubeType
from .frustum import Frustum
from .voxels import ChunkVoxels


class Chunk:
    """Wraps a chunk's voxels with its uploaded instance data and culling state."""

    def __init__(self, voxels: ChunkVoxels) -> None:
        self.voxels = voxels
        self.instance_model_matrices: dict[CubeType, list[np.ndarray]] = {}
        self.light_volume: list[float] = []
        self.is_culled = False

    @property
    def size(self) -> int:
        return self.voxels.size

    @property
    def is_modified(self) -> bool:
        """True when the chunk's cube data must be recomputed."""
        return self.voxels.is_modified

    def add_cube(self, local_pos: Position, cube_type: CubeType) -> bool:
        return self.voxels.add_cube(local_pos, cube_type)

    def remove_cube(self, local_pos: Position) -> bool:
        return self.voxels.remove_cube(local_pos)

    def is_cube_in_grid(self, local_pos: Position) -> bool:
        return self.voxels.is_cube_in_grid(local_pos)

    def is_valid_cube_at(self, pos: Position) -> bool:
        """True if ``pos`` is inside the chunk and holds a cube."""
        return is_position_within_bounds(pos, self.size) and self.voxels.is_cube_in_grid(pos)

    def cube_type(self, pos: Position) -> CubeType:
        return self.voxels.cube_type_at(pos)

    def mark_modified(self) -> None:
        self.voxels.set_modified(True)

    def set_neighbors_surrounding_cubes(self, data: NeighborVoxels) -> None:
        self.voxels.set_neighbors_surrounding_cubes(data)

    def clear_neighbors_surrounding_cubes(self) -> None:
        self.voxels.clear_neighbors_surrounding_cubes()

    def chunk_center(self) -> np.ndarray:
        """World position of the chunk's centre."""
        return self.voxels.chunk_origin() + self.size / 2.0

    def compute_cube_data(self) -> CubeData:
        return self.voxels.compute_cube_data()

    def apply_cube_data(self, data: CubeData) -> None:
        """Adopt freshly computed cube data and mark the chunk up to date."""
        self.voxels.store_cubes(data.cubes)
        self.instance_model_matrices = {
            cube_type: list(matrices)
            for cube_type, matrices in data.instance_model_matrices.items()
        }
        self.light_volume = list(data.light_volume)
        self.voxels.set_modified(False)

    def perform_frustum_culling(self, frustum: Frustum) -> None:
        """Mark the chunk culled when its bounding box is outside ``frustum``."""
        lo, hi = self.voxels.compute_chunk_aabb()
        self.is_culled = not frustum.is_aabb_inside(lo, hi)