"""Breadth-first propagation of torch light through a padded chunk volume."""

from __future__ import annotations

from collections import deque
from typing import Iterable, Mapping, Optional

import numpy as np

from .coords import (
    NEIGHBOR_OFFSETS,
    Position,
    VoxelGrid,
    is_position_within_bounds,
)
from .cube import CubeType

_PADDING = 2
_MIN_LIGHT = 0.01


class LightPropagator:
    """Computes per-voxel torch light for a chunk and a one-cell halo around it.

    Grids are indexed ``grid[x][z][y]``; positions are ``(x, y, z)`` tuples.
    Halo positions passed as neighbour cubes are in padded coordinates, where
    the chunk occupies ``1 .. chunk_size`` on each axis.
    """

    def __init__(self, chunk_size: int, attenuation: float) -> None:
        self.chunk_size = chunk_size
        self.padded_size = chunk_size + _PADDING
        self.attenuation = attenuation

    def compute_light_mask(
        self,
        voxel_grid: VoxelGrid,
        torch_positions: Iterable[Position],
        neighbor_cubes: Optional[Mapping[Position, CubeType]] = None,
    ) -> list[float]:
        """Return the chunk's light values ordered by z, then y, then x."""
        n = self.chunk_size
        shape = (self.padded_size,) * 3
        solid = np.zeros(shape, dtype=bool)
        light = np.zeros(shape, dtype=float)
        if n > 0:
            inner = np.asarray(
                [
                    [[cell is not CubeType.NONE for cell in column] for column in plane]
                    for plane in voxel_grid
                ],
                dtype=bool,
            )
            solid[1 : n + 1, 1 : n + 1, 1 : n + 1] = inner

        queue: deque[Position] = deque()
        for position, cube_type in (neighbor_cubes or {}).items():
            if not is_position_within_bounds(position, self.padded_size):
                continue
            x, y, z = position
            solid[x, z, y] = cube_type is not CubeType.NONE
            if cube_type is CubeType.TORCH:
                light[x, z, y] = 1.0
                queue.append((x, y, z))

        for lx, ly, lz in torch_positions:
            padded = (lx + 1, ly + 1, lz + 1)
            if not is_position_within_bounds(padded, self.padded_size):
                continue
            x, y, z = padded
            light[x, z, y] = 1.0
            queue.append(padded)

        self._propagate(queue, light, solid)
        return light[1 : n + 1, 1 : n + 1, 1 : n + 1].transpose(1, 2, 0).ravel().tolist()

    def _propagate(
        self, queue: deque[Position], light: np.ndarray, solid: np.ndarray
    ) -> None:
        while queue:
            x, y, z = queue.popleft()
            current = float(light[x, z, y])
            if current < _MIN_LIGHT:
                continue
            next_value = current * self.attenuation
            for ox, oy, oz in NEIGHBOR_OFFSETS:
                neighbor = (x + ox, y + oy, z + oz)
                if not is_position_within_bounds(neighbor, self.padded_size):
                    continue
                nx, ny, nz = neighbor
                if next_value <= light[nx, nz, ny]:
                    continue
                light[nx, nz, ny] = next_value
                if not solid[nx, nz, ny]:
                    queue.append(neighbor)