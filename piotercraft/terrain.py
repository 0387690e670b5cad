"""Height-map terrain generation from 2D gradient noise."""

from __future__ import annotations

import math
import random
from typing import Optional, Protocol

from .coords import VoxelGrid
from .cube import CubeType

_GRADIENTS = tuple(
    (math.cos(i * math.pi / 4), math.sin(i * math.pi / 4)) for i in range(8)
)


def _fade(t: float) -> float:
    return t * t * t * (t * (t * 6 - 15) + 10)


def _lerp(a: float, b: float, t: float) -> float:
    return a + t * (b - a)


class PerlinNoise:
    """Seeded 2D Perlin noise with values in [-1, 1]."""

    def __init__(self, seed: int = 1337, frequency: float = 0.02) -> None:
        self.seed = seed
        self.frequency = frequency
        perm = list(range(256))
        random.Random(seed).shuffle(perm)
        self._perm = perm * 2

    def noise(self, x: float, z: float) -> float:
        """Noise value at ``(x, z)`` after scaling by the frequency."""
        x *= self.frequency
        z *= self.frequency
        x0 = math.floor(x)
        z0 = math.floor(z)
        dx = x - x0
        dz = z - z0
        xi = x0 & 255
        zi = z0 & 255
        u = _fade(dx)
        v = _fade(dz)
        g00 = self._grad(xi, zi, dx, dz)
        g10 = self._grad(xi + 1, zi, dx - 1, dz)
        g01 = self._grad(xi, zi + 1, dx, dz - 1)
        g11 = self._grad(xi + 1, zi + 1, dx - 1, dz - 1)
        value = _lerp(_lerp(g00, g10, u), _lerp(g01, g11, u), v) * math.sqrt(2.0)
        return max(-1.0, min(1.0, value))

    def _grad(self, xi: int, zi: int, dx: float, dz: float) -> float:
        gx, gz = _GRADIENTS[self._perm[self._perm[xi] + zi] & 7]
        return gx * dx + gz * dz


class NoiseSource(Protocol):
    def noise(self, x: float, z: float) -> float: ...


def empty_grid(size: int, fill: CubeType = CubeType.NONE) -> VoxelGrid:
    """A ``size``³ grid indexed ``[x][z][y]`` filled with ``fill``."""
    return [[[fill for _ in range(size)] for _ in range(size)] for _ in range(size)]


def cube_type_for_height(y: int) -> CubeType:
    """Sand below 11, dirt below 14, grass above."""
    if y < 11:
        return CubeType.SAND
    if y < 14:
        return CubeType.DIRT
    return CubeType.GRASS


class GridGenerator:
    """Builds the initial voxel grid of a chunk from noise heights."""

    def __init__(self, chunk_size: int, world_x_index: int, world_z_index: int,
                 noise: Optional[NoiseSource] = None) -> None:
        self.chunk_size = chunk_size
        self.world_x_index = world_x_index
        self.world_z_index = world_z_index
        self.noise = noise if noise is not None else PerlinNoise()

    def generate_grid(self) -> VoxelGrid:
        """Fill each column from the bottom up to its noise-derived height."""
        size = self.chunk_size
        grid = empty_grid(size)
        for x in range(size):
            world_x = self.world_x_index * size + x
            for z in range(size):
                world_z = self.world_z_index * size + z
                value = self.noise.noise(float(world_x), float(world_z))
                height = int((value + 1.1) * 0.7 * size / 2) - 3
                column = grid[x][z]
                for y in range(min(height + 1, size)):
                    column[y] = cube_type_for_height(y)
        return grid