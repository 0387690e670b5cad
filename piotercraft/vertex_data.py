"""Geometry shared by every cube: vertices and triangle indices."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Vertex:
    """A cube vertex with texture coordinate and face normal."""

    position: tuple[float, float, float]
    tex_coord: tuple[float, float]
    normal: tuple[float, float, float]


def _face(normal, corners):
    return [Vertex(pos, tex, normal) for pos, tex in corners]


VERTICES: tuple[Vertex, ...] = tuple(
    _face((0.0, 0.0, -1.0), [
        ((-0.5, -0.5, -0.5), (0.0, 0.0)),
        ((0.5, 0.5, -0.5), (1.0, 1.0)),
        ((0.5, -0.5, -0.5), (1.0, 0.0)),
        ((-0.5, 0.5, -0.5), (0.0, 1.0)),
    ])
    + _face((0.0, 0.0, 1.0), [
        ((-0.5, -0.5, 0.5), (0.0, 0.0)),
        ((0.5, -0.5, 0.5), (1.0, 0.0)),
        ((0.5, 0.5, 0.5), (1.0, 1.0)),
        ((-0.5, 0.5, 0.5), (0.0, 1.0)),
    ])
    + _face((-1.0, 0.0, 0.0), [
        ((-0.5, 0.5, 0.5), (0.0, 1.0)),
        ((-0.5, 0.5, -0.5), (1.0, 1.0)),
        ((-0.5, -0.5, -0.5), (1.0, 0.0)),
        ((-0.5, -0.5, 0.5), (0.0, 0.0)),
    ])
    + _face((1.0, 0.0, 0.0), [
        ((0.5, 0.5, 0.5), (0.0, 1.0)),
        ((0.5, -0.5, -0.5), (1.0, 0.0)),
        ((0.5, 0.5, -0.5), (1.0, 1.0)),
        ((0.5, -0.5, 0.5), (0.0, 0.0)),
    ])
    + _face((0.0, -1.0, 0.0), [
        ((-0.5, -0.5, -0.5), (0.0, 1.0)),
        ((0.5, -0.5, -0.5), (1.0, 1.0)),
        ((0.5, -0.5, 0.5), (1.0, 0.0)),
        ((-0.5, -0.5, 0.5), (0.0, 0.0)),
    ])
    + _face((0.0, 1.0, 0.0), [
        ((-0.5, 0.5, -0.5), (0.0, 1.0)),
        ((0.5, 0.5, 0.5), (1.0, 0.0)),
        ((0.5, 0.5, -0.5), (1.0, 1.0)),
        ((-0.5, 0.5, 0.5), (0.0, 0.0)),
    ])
)

INDICES: tuple[int, ...] = (
    0, 1, 2, 1, 0, 3,
    4, 5, 6, 6, 7, 4,
    8, 9, 10, 10, 11, 8,
    12, 13, 14, 13, 12, 15,
    16, 17, 18, 18, 19, 16,
    20, 21, 22, 21, 20, 23,
)

WATER_INDICES: tuple[int, ...] = (20, 21, 22, 21, 20, 23)
WATER_INDICES_COUNT = len(WATER_INDICES)