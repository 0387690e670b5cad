"""Collects the cubes bordering a chunk from its eight horizontal neighbours."""

from __future__ import annotations

from typing import Callable, Optional

from .chunk import Chunk
from .coords import ChunkCoord, NeighborVoxels

ChunkLookup = Callable[[ChunkCoord], Optional[Chunk]]


class NeighborGatherer:
    """Builds the one-cell halo around a chunk, in padded coordinates.

    In padded coordinates the chunk occupies ``1 .. size`` on every axis, so
    halo cells sit at ``0`` or ``size + 1`` along x or z.
    """

    def __init__(self, size: int) -> None:
        self.chunk_size = size

    def gather_neighbors_for_coord(
        self, center: ChunkCoord, get_chunk: ChunkLookup
    ) -> NeighborVoxels:
        """Return the halo cubes of the chunk at ``center``."""
        result: NeighborVoxels = {}
        for offset_x in (-1, 0, 1):
            for offset_z in (-1, 0, 1):
                if offset_x == 0 and offset_z == 0:
                    continue
                neighbor = get_chunk(
                    ChunkCoord(center.x + offset_x, center.z + offset_z)
                )
                if neighbor is not None:
                    self._gather_faces(neighbor, offset_x, offset_z, result)
        return result

    def _local_edge(self, offset: int) -> int:
        return self.chunk_size - 1 if offset < 0 else 0

    def _padded_edge(self, offset: int) -> int:
        return 0 if offset < 0 else self.chunk_size + 1

    def _gather_faces(self, neighbor: Chunk, offset_x: int, offset_z: int,
                      out: NeighborVoxels) -> None:
        size = self.chunk_size
        if offset_x != 0 and offset_z == 0:
            local_x = self._local_edge(offset_x)
            padded_x = self._padded_edge(offset_x)
            cells = (
                ((local_x, y, z), (padded_x, y + 1, z + 1))
                for y in range(size) for z in range(size)
            )
        elif offset_x == 0 and offset_z != 0:
            local_z = self._local_edge(offset_z)
            padded_z = self._padded_edge(offset_z)
            cells = (
                ((x, y, local_z), (x + 1, y + 1, padded_z))
                for x in range(size) for y in range(size)
            )
        else:
            local_x = self._local_edge(offset_x)
            local_z = self._local_edge(offset_z)
            padded_x = self._padded_edge(offset_x)
            padded_z = self._padded_edge(offset_z)
            cells = (
                ((local_x, y, local_z), (padded_x, y + 1, padded_z))
                for y in range(size)
            )
        for local, padded in cells:
            if neighbor.is_valid_cube_at(local):
                out[padded] = neighbor.cube_type(local)