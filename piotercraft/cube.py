"""Cube kinds, single placed cubes and the per-chunk cube data bundle."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

import numpy as np


class CubeType(enum.Enum):
    """Kind of voxel; NONE marks an empty cell."""

    NONE = 0
    SAND = 1
    DIRT = 2
    GRASS = 3
    WATER = 4
    LOG = 5
    LEAVES = 6
    TORCH = 7


def translation_matrix(position) -> np.ndarray:
    """Return the 4x4 matrix translating by ``position`` (column-vector convention)."""
    matrix = np.identity(4, dtype=float)
    matrix[:3, 3] = np.asarray(position, dtype=float)
    return matrix


@dataclass(frozen=True)
class Cube:
    """A cube placed at a world position."""

    position: tuple[float, float, float]
    cube_type: CubeType

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "position", tuple(float(c) for c in self.position)
        )

    def model(self) -> np.ndarray:
        """The model matrix placing this cube in the world."""
        return translation_matrix(self.position)


@dataclass
class CubeData:
    """Cubes, instance matrices and light volume computed for one chunk."""

    cubes: list[Cube] = field(default_factory=list)
    instance_model_matrices: dict[CubeType, list[np.ndarray]] = field(
        default_factory=dict
    )
    light_volume: list[float] = field(default_factory=list)