"""Surface materials used when drawing each cube type."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from .cube import CubeType

_PLACEHOLDER_UNIT = 99
_OPAQUE = 1.0
_SEMI_TRANSPARENT = 0.5


@dataclass(frozen=True)
class Material:
    """Textures, texture units and shading parameters of a cube type."""

    main_diffuse_texture_path: str = ""
    secondary_diffuse_texture_path: str = ""
    emission_texture_path: str = ""
    main_diffuse_unit: int = 0
    secondary_diffuse_unit: int = 0
    emission_unit: int = 0
    shininess: float = 0.0
    alpha: float = 0.0
    use_secondary_texture: bool = False


def _single(path: str, unit: int, shininess: float, alpha: float = _OPAQUE) -> Material:
    return Material(
        main_diffuse_texture_path=path,
        main_diffuse_unit=unit,
        secondary_diffuse_unit=_PLACEHOLDER_UNIT,
        emission_unit=_PLACEHOLDER_UNIT,
        shininess=shininess,
        alpha=alpha,
    )


class Materials:
    """Material table for every drawable cube type."""

    def __init__(self) -> None:
        self._materials: dict[CubeType, Material] = {
            CubeType.SAND: _single("textures/sand.jpg", 1, 32.0),
            CubeType.DIRT: _single("textures/dirt.jpg", 2, 16.0),
            CubeType.GRASS: _single("textures/grass.jpg", 3, 8.0),
            CubeType.WATER: _single("textures/water.jpg", 4, 64.0, _SEMI_TRANSPARENT),
            CubeType.LOG: Material(
                main_diffuse_texture_path="textures/logBark.jpg",
                secondary_diffuse_texture_path="textures/logInside.jpg",
                main_diffuse_unit=5,
                secondary_diffuse_unit=6,
                emission_unit=_PLACEHOLDER_UNIT,
                shininess=32.0,
                alpha=_OPAQUE,
                use_secondary_texture=True,
            ),
            CubeType.LEAVES: _single("textures/leaves.jpg", 7, 8.0),
            CubeType.TORCH: _single("textures/lamp.png", 8, 32.0),
        }

    def get(self, cube_type: CubeType) -> Material:
        """The material of ``cube_type``; raises KeyError for types without one."""
        return self._materials[cube_type]

    def all(self) -> Mapping[CubeType, Material]:
        """Read-only view of every material by cube type."""
        return MappingProxyType(self._materials)