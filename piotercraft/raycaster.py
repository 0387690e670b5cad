"""Voxel ray casting from the camera into the loaded chunks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional

import numpy as np

from .chunk import Chunk
from .coords import ChunkCoord, Position, floor_divide, negative_safe_modulo


@dataclass(frozen=True)
class HitResult:
    """The first filled cell met by a ray."""

    position: Position
    chunk_coord: ChunkCoord
    normal: Position
    hit: bool = True


def _next_axis(boundaries: np.ndarray) -> int:
    bx, by, bz = boundaries
    if bx < by and bx < bz:
        return 0
    if by < bz:
        return 1
    return 2


class Raycaster:
    """Steps a ray cell by cell from the camera along its viewing direction.

    ``camera`` needs ``position`` and ``front`` vectors.
    """

    def __init__(self, camera, chunk_size: int) -> None:
        self.size = chunk_size
        self.origin = np.asarray(camera.position, dtype=float)
        direction = np.asarray(camera.front, dtype=float)
        self.direction = direction / np.linalg.norm(direction)

    def raycast(
        self, loaded_chunks: Mapping[ChunkCoord, Chunk], max_distance: float
    ) -> Optional[HitResult]:
        """Return the first filled cell within ``max_distance``, or None."""
        with np.errstate(divide="ignore", invalid="ignore"):
            block = np.floor(self.origin).astype(int)
            step = np.sign(self.direction).astype(int)
            boundaries = (block + step * 0.5 - self.origin) / self.direction
            increments = np.abs(1.0 / self.direction)
            last_step: Position = (0, 0, 0)
            distance = 0.0

            while distance < max_distance:
                hit = self._hit_at(loaded_chunks, block, last_step)
                if hit is not None:
                    return hit
                axis = _next_axis(boundaries)
                block[axis] += step[axis]
                distance = boundaries[axis]
                boundaries[axis] += increments[axis]
                last_step = tuple(
                    int(step[axis]) if i == axis else 0 for i in range(3)
                )
        return None

    def _hit_at(
        self,
        loaded_chunks: Mapping[ChunkCoord, Chunk],
        block: np.ndarray,
        last_step: Position,
    ) -> Optional[HitResult]:
        bx, by, bz = (int(c) for c in block)
        coord = ChunkCoord(floor_divide(bx, self.size), floor_divide(bz, self.size))
        chunk = loaded_chunks.get(coord)
        if chunk is None or not 0 <= by < self.size:
            return None
        local = (
            negative_safe_modulo(bx, self.size),
            by,
            negative_safe_modulo(bz, self.size),
        )
        if not chunk.is_cube_in_grid(local):
            return None
        normal = tuple(-c for c in last_step)
        return HitResult((bx, by, bz), coord, normal, True)