"""Voxel contents of one chunk and the cubes that are visible in it."""

from __future__ import annotations

import threading
from typing import Callable, Optional

import numpy as np

from .coords import (
    NEIGHBOR_OFFSETS,
    NeighborVoxels,
    Position,
    VoxelGrid,
    is_position_within_bounds,
)
from .cube import Cube, CubeData, CubeType
from .light import LightPropagator
from .terrain import GridGenerator, NoiseSource
from .trees import TreeGenerator

CubeCreator = Callable[[Position, CubeType], None]

WATER_HEIGHT = 14
_LIGHT_ATTENUATION = 0.8


class ChunkVoxels:
    """The voxel grid of a chunk, its torches, trees and exposed cubes.

    The grid is indexed ``grid[x][z][y]``; positions are ``(x, y, z)``.
    When no ``grid`` is given, terrain is generated from noise.
    """

    def __init__(
        self,
        size: int,
        world_x: int = 0,
        world_z: int = 0,
        grid: Optional[VoxelGrid] = None,
        tree_rng=None,
        noise: Optional[NoiseSource] = None,
    ) -> None:
        self.size = size
        self.world_x = world_x
        self.world_z = world_z
        self._trees = TreeGenerator(size, tree_rng)
        if grid is None:
            grid = GridGenerator(size, world_x, world_z, noise).generate_grid()
        else:
            if len(grid) != size or any(len(plane) != size for plane in grid):
                raise ValueError(f"grid must be {size} cells on each axis")
            grid = [[list(column) for column in plane] for plane in grid]
        self._grid: VoxelGrid = grid
        self._cubes: list[Cube] = []
        self._instance_matrices: dict[CubeType, list[np.ndarray]] = {}
        self._torches: list[Position] = []
        self._neighbor_cubes: NeighborVoxels = {}
        self._modified = True
        self._lock = threading.Lock()
        self._rebuild_cubes_from_grid()

    @property
    def is_modified(self) -> bool:
        """True when the cubes need to be recomputed."""
        return self._modified

    @property
    def cubes(self) -> tuple[Cube, ...]:
        """The currently stored visible cubes."""
        return tuple(self._cubes)

    @property
    def instance_model_matrices(self) -> dict[CubeType, list[np.ndarray]]:
        """Model matrices of the cubes built when the chunk was created."""
        return self._instance_matrices

    @property
    def torch_positions(self) -> tuple[Position, ...]:
        """Local positions of the torches placed in this chunk."""
        return tuple(self._torches)

    def add_cube(self, local_pos: Position, cube_type: CubeType) -> bool:
        """Place a cube in an empty in-bounds cell; return whether it was placed."""
        pos = tuple(local_pos)
        with self._lock:
            if not is_position_within_bounds(pos, self.size) or self._occupied(pos):
                return False
            x, y, z = pos
            self._grid[x][z][y] = cube_type
            if cube_type is CubeType.TORCH:
                self._torches.append(pos)
            self._modified = True
            return True

    def remove_cube(self, local_pos: Position) -> bool:
        """Empty an occupied in-bounds cell; return whether a cube was removed."""
        pos = tuple(local_pos)
        with self._lock:
            if not is_position_within_bounds(pos, self.size) or not self._occupied(pos):
                return False
            x, y, z = pos
            if self._grid[x][z][y] is CubeType.TORCH and pos in self._torches:
                self._torches.remove(pos)
            self._grid[x][z][y] = CubeType.NONE
            self._trees.remove_tree_cube_at(pos)
            self._modified = True
            return True

    def is_cube_in_grid(self, local_pos: Position) -> bool:
        """True if the cell at ``local_pos`` holds a cube."""
        pos = self._checked(local_pos)
        return self._occupied(pos)

    def cube_type_at(self, local_pos: Position) -> CubeType:
        """The cube type stored at ``local_pos``."""
        x, y, z = self._checked(local_pos)
        return self._grid[x][z][y]

    def chunk_origin(self) -> np.ndarray:
        """World position of the chunk's minimum corner."""
        return np.array(
            [self.world_x * self.size, 0.0, self.world_z * self.size], dtype=float
        )

    def compute_chunk_aabb(self) -> tuple[np.ndarray, np.ndarray]:
        """The chunk's world-space bounding box as ``(min, max)``."""
        lo = self.chunk_origin()
        return lo, lo + float(self.size)

    def compute_cube_data(self) -> CubeData:
        """Compute light and visible cubes; consumes the neighbouring halo cubes."""
        with self._lock:
            data = CubeData()
            propagator = LightPropagator(self.size, _LIGHT_ATTENUATION)
            data.light_volume = propagator.compute_light_mask(
                self._grid, self._torches, self._neighbor_cubes
            )
            self._neighbor_cubes = {}

            def build(world_pos: Position, cube_type: CubeType) -> None:
                cube = Cube(world_pos, cube_type)
                data.cubes.append(cube)
                data.instance_model_matrices.setdefault(cube_type, []).append(
                    cube.model()
                )

            self._regenerate(build)
            return data

    def set_modified(self, value: bool) -> None:
        with self._lock:
            self._modified = bool(value)

    def set_neighbors_surrounding_cubes(self, data: NeighborVoxels) -> None:
        """Store halo cubes (padded coordinates) for the next light computation."""
        with self._lock:
            self._neighbor_cubes = dict(data)

    def clear_neighbors_surrounding_cubes(self) -> None:
        with self._lock:
            self._neighbor_cubes = {}

    def store_cubes(self, cubes) -> None:
        """Replace the stored visible cubes."""
        with self._lock:
            self._cubes = list(cubes)

    def _checked(self, local_pos: Position) -> Position:
        pos = tuple(local_pos)
        if not is_position_within_bounds(pos, self.size):
            raise IndexError(f"position {pos} is outside a chunk of size {self.size}")
        return pos

    def _occupied(self, pos: Position) -> bool:
        x, y, z = pos
        return self._grid[x][z][y] is not CubeType.NONE

    def _is_exposed(self, x: int, y: int, z: int) -> bool:
        for ox, oy, oz in NEIGHBOR_OFFSETS:
            neighbor = (x + ox, y + oy, z + oz)
            if not is_position_within_bounds(neighbor, self.size):
                return True
            nx, ny, nz = neighbor
            if self._grid[nx][nz][ny] is CubeType.NONE:
                return True
        return False

    def _process_grid(self, origin_x: int, origin_z: int,
                      create_cube: CubeCreator) -> None:
        for x, plane in enumerate(self._grid):
            for z, column in enumerate(plane):
                for y, cube_type in enumerate(column):
                    world_pos = (origin_x + x, y, origin_z + z)
                    if cube_type is not CubeType.NONE and self._is_exposed(x, y, z):
                        create_cube(world_pos, cube_type)
                    elif y == WATER_HEIGHT:
                        create_cube(world_pos, CubeType.WATER)

    def _regenerate(self, create_cube: CubeCreator) -> None:
        origin_x = self.world_x * self.size
        origin_z = self.world_z * self.size
        self._process_grid(origin_x, origin_z, create_cube)
        self._trees.generate_trees(self._grid)
        self._trees.reapply_trunks(origin_x, origin_z, create_cube)
        self._trees.reapply_crowns(origin_x, origin_z, create_cube)

    def _rebuild_cubes_from_grid(self) -> None:
        self._cubes = []
        self._instance_matrices = {}

        def build(world_pos: Position, cube_type: CubeType) -> None:
            cube = Cube(world_pos, cube_type)
            self._cubes.append(cube)
            self._instance_matrices.setdefault(cube_type, []).append(cube.model())

        self._regenerate(build)