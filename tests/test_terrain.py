import pytest

from piotercraft.cube import CubeType
from piotercraft.terrain import (
    GridGenerator,
    PerlinNoise,
    cube_type_for_height,
    empty_grid,
)


class _ConstantNoise:
    def __init__(self, value):
        self.value = value
        self.calls = []

    def noise(self, x, z):
        self.calls.append((x, z))
        return self.value


@pytest.mark.parametrize(
    "y, expected",
    [
        (0, CubeType.SAND),
        (10, CubeType.SAND),
        (11, CubeType.DIRT),
        (13, CubeType.DIRT),
        (14, CubeType.GRASS),
        (40, CubeType.GRASS),
    ],
)
def test_cube_type_for_height(y, expected):
    assert cube_type_for_height(y) is expected


def test_empty_grid_shape_and_fill():
    grid = empty_grid(3, CubeType.DIRT)
    assert len(grid) == 3
    assert all(len(plane) == 3 and all(len(col) == 3 for col in plane) for plane in grid)
    assert all(c is CubeType.DIRT for plane in grid for col in plane for c in col)


def test_noise_is_zero_on_lattice_points():
    noise = PerlinNoise(seed=7, frequency=1.0)
    assert noise.noise(0.0, 0.0) == 0.0
    assert noise.noise(3.0, -5.0) == 0.0


def test_noise_is_bounded_and_deterministic():
    a = PerlinNoise(seed=42)
    b = PerlinNoise(seed=42)
    samples = [(x * 3.7, z * 5.3) for x in range(-10, 10) for z in range(-10, 10)]
    values = [a.noise(x, z) for x, z in samples]
    assert values == [b.noise(x, z) for x, z in samples]
    assert all(-1.0 <= v <= 1.0 for v in values)
    assert any(v != 0.0 for v in values)


def test_different_seeds_give_different_fields():
    samples = [(x * 7.3, z * 11.1) for x in range(10) for z in range(10)]
    a = [PerlinNoise(seed=1).noise(x, z) for x, z in samples]
    b = [PerlinNoise(seed=2).noise(x, z) for x, z in samples]
    assert a != b


def test_lowest_noise_leaves_grid_empty():
    grid = GridGenerator(16, 0, 0, noise=_ConstantNoise(-1.1)).generate_grid()
    assert all(c is CubeType.NONE for plane in grid for col in plane for c in col)


def test_noise_sampled_at_world_coordinates():
    noise = _ConstantNoise(0.0)
    GridGenerator(4, 2, -1, noise=noise).generate_grid()
    expected = {(float(8 + x), float(-4 + z)) for x in range(4) for z in range(4)}
    assert set(noise.calls) == expected


def test_columns_are_filled_prefixes_with_layered_types():
    size = 32
    grid = GridGenerator(size, 1, -2).generate_grid()
    assert len(grid) == size
    for plane in grid:
        for column in plane:
            filled = [c is not CubeType.NONE for c in column]
            top = sum(filled)
            assert filled == [True] * top + [False] * (size - top)
            for y in range(top):
                assert column[y] is cube_type_for_height(y)


def test_constant_noise_gives_flat_terrain():
    grid = GridGenerator(20, 0, 0, noise=_ConstantNoise(0.5)).generate_grid()
    heights = {sum(c is not CubeType.NONE for c in col) for plane in grid for col in plane}
    assert len(heights) == 1


def test_higher_noise_gives_taller_terrain():
    low = GridGenerator(20, 0, 0, noise=_ConstantNoise(-0.5)).generate_grid()
    high = GridGenerator(20, 0, 0, noise=_ConstantNoise(0.5)).generate_grid()
    low_count = sum(c is not CubeType.NONE for plane in low for col in plane for c in col)
    high_count = sum(c is not CubeType.NONE for plane in high for col in plane for c in col)
    assert high_count > low_count


def test_generation_is_repeatable_per_chunk():
    first = GridGenerator(16, 3, 4, noise=PerlinNoise(seed=5)).generate_grid()
    second = GridGenerator(16, 3, 4, noise=PerlinNoise(seed=5)).generate_grid()
    assert first == second
    assert len(first) == 16
    noise = _ConstantNoise(0.0)
    GridGenerator(16, 3, 4, noise=noise).generate_grid()
    assert min(noise.calls) == (48.0, 64.0)
    assert max(noise.calls) == (63.0, 79.0)