"""Random placement of tree trunks and leaf crowns inside a chunk."""

from __future__ import annotations

import random
from typing import Callable, Optional

from .coords import Position, VoxelGrid
from .cube import CubeType

CubeCreator = Callable[[Position, CubeType], None]

_MIN_GROUND_HEIGHT = 16
_TREE_PROBABILITY = 0.02
_CROWN_RADIUS = 2


class TreeGenerator:
    """Remembers a chunk's trees so they can be regrown and re-emitted.

    ``rng`` needs ``random()`` and ``randrange(n)``; a fresh
    :class:`random.Random` is used when none is given.
    """

    def __init__(self, chunk_size: int, rng: Optional[random.Random] = None) -> None:
        self.chunk_size = chunk_size
        self._rng = rng if rng is not None else random.Random()
        self._trunks: set[Position] = set()
        self._crowns: set[Position] = set()

    @property
    def trunk_positions(self) -> frozenset[Position]:
        """Local positions of all trunk cubes."""
        return frozenset(self._trunks)

    @property
    def crown_positions(self) -> frozenset[Position]:
        """Local positions of all leaf cubes."""
        return frozenset(self._crowns)

    def generate_trees(self, voxel_grid: VoxelGrid) -> None:
        """Plant trunks if none exist yet, then grow crowns on trunks lacking one."""
        if not self._trunks:
            self._generate_new_trunks(voxel_grid)
        self._generate_crowns(self._trunk_tops(), voxel_grid)

    def reapply_trunks(self, origin_x: float, origin_z: float,
                       create_cube: CubeCreator) -> None:
        """Emit every trunk cube at its world position as LOG."""
        self._reapply(self._trunks, origin_x, origin_z, CubeType.LOG, create_cube)

    def reapply_crowns(self, origin_x: float, origin_z: float,
                       create_cube: CubeCreator) -> None:
        """Emit every crown cube at its world position as LEAVES."""
        self._reapply(self._crowns, origin_x, origin_z, CubeType.LEAVES, create_cube)

    def remove_tree_cube_at(self, local_pos: Position) -> None:
        """Forget any trunk or crown cube at ``local_pos``."""
        pos = tuple(local_pos)
        self._trunks.discard(pos)
        self._crowns.discard(pos)

    def _reapply(self, positions, origin_x, origin_z, cube_type, create_cube) -> None:
        for x, y, z in sorted(positions):
            if y < self.chunk_size:
                create_cube((int(origin_x + x), y, int(origin_z + z)), cube_type)

    def _highest_filled_y(self, voxel_grid: VoxelGrid, x: int, z: int) -> int:
        column = voxel_grid[x][z]
        return next(
            (y for y in reversed(range(self.chunk_size))
             if column[y] is not CubeType.NONE),
            -1,
        )

    def _generate_new_trunks(self, voxel_grid: VoxelGrid) -> None:
        for x in range(self.chunk_size):
            for z in range(self.chunk_size):
                highest = self._highest_filled_y(voxel_grid, x, z)
                if highest > _MIN_GROUND_HEIGHT and self._rng.random() < _TREE_PROBABILITY:
                    self._place_trunk(x, highest, z, voxel_grid)

    def _place_trunk(self, x: int, highest: int, z: int, voxel_grid: VoxelGrid) -> None:
        height = 4 + self._rng.randrange(4)
        for y in range(highest + 1, highest + 1 + height):
            if y < self.chunk_size:
                self._trunks.add((x, y, z))
                voxel_grid[x][z][y] = CubeType.LOG

    def _trunk_tops(self) -> dict[tuple[int, int], int]:
        tops: dict[tuple[int, int], int] = {}
        for x, y, z in self._trunks:
            column = (x, z)
            if column not in tops or y > tops[column]:
                tops[column] = y
        return tops

    def _generate_crowns(self, tops: dict[tuple[int, int], int],
                         voxel_grid: VoxelGrid) -> None:
        for (col_x, col_z), top_y in sorted(tops.items()):
            if any(cx == col_x and cz == col_z for cx, _, cz in self._crowns):
                continue
            self._grow_crown(col_x, col_z, top_y, voxel_grid)

    def _grow_crown(self, col_x: int, col_z: int, top_y: int,
                    voxel_grid: VoxelGrid) -> None:
        span = range(-_CROWN_RADIUS, _CROWN_RADIUS + 1)
        for ox in span:
            for oy in span:
                for oz in span:
                    if ox == 0 and oy <= 0 and oz == 0:
                        continue
                    squared = ox * ox + oy * oy + oz * oz
                    if squared <= 1 or squared > _CROWN_RADIUS * _CROWN_RADIUS:
                        continue
                    pos = (col_x + ox, top_y + oy, col_z + oz)
                    if not all(0 <= c < self.chunk_size for c in pos):
                        continue
                    self._crowns.add(pos)
                    voxel_grid[pos[0]][pos[2]][pos[1]] = CubeType.LEAVES