import pytest

from piotercraft.cube import CubeType
from piotercraft.trees import TreeGenerator


class _AlwaysRng:
    """Always plants a tree of the smallest height."""

    def random(self):
        return 0.0

    def randrange(self, n):
        return 0


class _NeverRng:
    def random(self):
        return 0.99

    def randrange(self, n):
        return n - 1


SIZE = 20


def _grid_with_column(height, column=(5, 5)):
    grid = [[[CubeType.NONE for _ in range(SIZE)] for _ in range(SIZE)] for _ in range(SIZE)]
    cx, cz = column
    for y in range(height + 1):
        grid[cx][cz][y] = CubeType.GRASS
    return grid


@pytest.fixture
def planted():
    grid = _grid_with_column(17)
    gen = TreeGenerator(SIZE, rng=_AlwaysRng())
    gen.generate_trees(grid)
    return gen, grid


def test_trunk_is_placed_above_ground_and_clipped(planted):
    gen, grid = planted
    assert gen.trunk_positions == {(5, 18, 5), (5, 19, 5)}
    assert grid[5][5][18] is CubeType.LOG
    assert grid[5][5][19] is CubeType.LOG


def test_crown_shape_invariants(planted):
    gen, grid = planted
    crowns = gen.crown_positions
    assert crowns
    for x, y, z in crowns:
        dx, dy, dz = x - 5, y - 19, z - 5
        assert 1 < dx * dx + dy * dy + dz * dz <= 4
        assert not (dx == 0 and dz == 0 and dy <= 0)
        assert 0 <= y < SIZE
        assert grid[x][z][y] is CubeType.LEAVES
    assert (7, 19, 5) in crowns
    assert (6, 19, 5) not in crowns


def test_second_generation_changes_nothing(planted):
    gen, grid = planted
    trunks, crowns = gen.trunk_positions, gen.crown_positions
    gen.generate_trees(grid)
    assert gen.trunk_positions == trunks
    assert gen.crown_positions == crowns


def test_low_ground_gets_no_trees():
    grid = _grid_with_column(16)
    gen = TreeGenerator(SIZE, rng=_AlwaysRng())
    gen.generate_trees(grid)
    assert gen.trunk_positions == frozenset()
    assert gen.crown_positions == frozenset()


def test_unlucky_roll_plants_nothing():
    grid = _grid_with_column(17)
    gen = TreeGenerator(SIZE, rng=_NeverRng())
    gen.generate_trees(grid)
    assert gen.trunk_positions == frozenset()


def test_reapply_emits_world_positions(planted):
    gen, _ = planted
    trunks, leaves = [], []
    gen.reapply_trunks(20.0, -40.0, lambda pos, t: trunks.append((pos, t)))
    gen.reapply_crowns(20.0, -40.0, lambda pos, t: leaves.append((pos, t)))
    assert sorted(trunks) == [((25, 18, -35), CubeType.LOG), ((25, 19, -35), CubeType.LOG)]
    assert len(leaves) == len(gen.crown_positions)
    assert all(t is CubeType.LEAVES for _, t in leaves)
    assert {(x - 20, y, z + 40) for (x, y, z), _ in leaves} == set(gen.crown_positions)


def test_removed_cube_is_not_reapplied(planted):
    gen, _ = planted
    gen.remove_tree_cube_at((5, 19, 5))
    gen.remove_tree_cube_at((7, 19, 5))
    emitted = []
    gen.reapply_trunks(0.0, 0.0, lambda pos, t: emitted.append(pos))
    gen.reapply_crowns(0.0, 0.0, lambda pos, t: emitted.append(pos))
    assert (5, 19, 5) not in emitted
    assert (7, 19, 5) not in emitted
    assert (5, 18, 5) in emitted