"""Chunk coordinates, windows of chunks and integer grid helpers."""

from __future__ import annotations

from dataclasses import dataclass

from .cube import CubeType

Position = tuple[int, int, int]
VoxelGrid = list[list[list[CubeType]]]
LightGrid = list[list[list[float]]]
NeighborVoxels = dict[Position, CubeType]

NEIGHBOR_OFFSETS: tuple[Position, ...] = (
    (1, 0, 0),
    (-1, 0, 0),
    (0, 1, 0),
    (0, -1, 0),
    (0, 0, 1),
    (0, 0, -1),
)


@dataclass(frozen=True)
class ChunkCoord:
    """Horizontal index of a chunk in the world."""

    x: int = 0
    z: int = 0


@dataclass(frozen=True)
class ChunkWindow:
    """Inclusive rectangle of chunk indices."""

    min_x: int = 0
    max_x: int = 0
    min_z: int = 0
    max_z: int = 0


def is_position_within_bounds(pos, boundary: int) -> bool:
    """True if every component of ``pos`` lies in ``[0, boundary)``."""
    return all(0 <= c < boundary for c in pos)


def is_chunk_within_window(coord: ChunkCoord, window: ChunkWindow) -> bool:
    """True if ``coord`` lies inside ``window`` (edges included)."""
    return (
        window.min_x <= coord.x <= window.max_x
        and window.min_z <= coord.z <= window.max_z
    )


def chunk_window_around(center: ChunkCoord, render_distance: int) -> ChunkWindow:
    """The square window of chunks within ``render_distance`` of ``center``."""
    return ChunkWindow(
        center.x - render_distance,
        center.x + render_distance,
        center.z - render_distance,
        center.z + render_distance,
    )


def _truncating_div(a: int, b: int) -> int:
    quotient = abs(a) // abs(b)
    return -quotient if (a < 0) != (b < 0) else quotient


def floor_divide(a: int, b: int) -> int:
    """Integer division rounding negative numerators toward minus infinity."""
    return _truncating_div(a, b) if a >= 0 else _truncating_div(a - b + 1, b)


def negative_safe_modulo(a: int, b: int) -> int:
    """Remainder of ``a / b`` shifted into the non-negative range."""
    remainder = a - b * _truncating_div(a, b)
    return remainder + b if remainder < 0 else remainder