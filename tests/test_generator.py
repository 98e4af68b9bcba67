import numpy as np
import pytest

from sweeper.errors import ConfigError
from sweeper.generator import (
    FixedBoardGenerator, RandomBoardGenerator, RowMajorBoardGenerator, neighbor_counts, neighbors,
)


@pytest.mark.parametrize('width,height,mines', [(2, 1, 1), (3, 3, 8), (9, 9, 10), (16, 16, 40), (30, 16, 99)])
def test_random_board_has_exact_mines_and_clear_safe_cell(width, height, mines):
    gen = RandomBoardGenerator(seed=7)
    for safe_x, safe_y in [(0, 0), (width - 1, height - 1), (width // 2, height // 2)]:
        grid = gen.generate(width, height, mines, safe_x, safe_y)
        assert grid.shape == (height, width)
        assert grid.dtype == bool
        assert int(grid.sum()) == mines
        assert not grid[safe_y, safe_x]


def test_every_safe_cell_on_small_board():
    gen = RandomBoardGenerator(seed=3)
    for y in range(3):
        for x in range(4):
            grid = gen.generate(4, 3, 11, x, y)
            assert int(grid.sum()) == 11
            assert not grid[y, x]


def test_mine_placement_is_roughly_uniform():
    gen = RandomBoardGenerator(seed=1234)
    trials = 4000
    hits = np.zeros((3, 3))
    for _ in range(trials):
        hits += gen.generate(3, 3, 4, 1, 1)
    freq = hits / trials
    assert freq[1, 1] == 0
    # each of the 8 candidate cells should hold a mine half the time
    others = np.delete(freq.ravel(), 4)
    assert np.all(others > 0.43)
    assert np.all(others < 0.57)


def test_same_seed_gives_same_board():
    a = RandomBoardGenerator(seed=42).generate(16, 16, 40, 3, 4)
    b = RandomBoardGenerator(seed=42).generate(16, 16, 40, 3, 4)
    assert np.array_equal(a, b)


def test_neighbor_counts_match_brute_force():
    rng = np.random.default_rng(0)
    for width, height in [(1, 1), (1, 5), (5, 1), (4, 4), (30, 16)]:
        mines = rng.random((height, width)) < 0.3
        counts = neighbor_counts(mines)
        assert counts.dtype == np.uint8
        for y in range(height):
            for x in range(width):
                expected = sum(1 for nx, ny in neighbors(x, y, width, height) if mines[ny, nx])
                assert counts[y, x] == expected


def test_neighbors_at_corner_edge_and_middle():
    assert sorted(neighbors(0, 0, 3, 3)) == [(0, 1), (1, 0), (1, 1)]
    assert len(neighbors(1, 0, 3, 3)) == 5
    assert len(neighbors(1, 1, 3, 3)) == 8
    assert neighbors(0, 0, 1, 1) == []


def test_row_major_skips_safe_cell():
    grid = RowMajorBoardGenerator().generate(3, 2, 3, 1, 0)
    assert grid.tolist() == [[True, False, True], [True, False, False]]


def test_fixed_layout_is_returned_as_copy():
    layout = np.array([[True, False, False]])
    gen = FixedBoardGenerator(layout)
    grid = gen.generate(3, 1, 1, 2, 0)
    assert grid.tolist() == [[True, False, False]]
    grid[0, 1] = True
    assert gen.generate(3, 1, 1, 2, 0).tolist() == [[True, False, False]]


@pytest.mark.parametrize('args', [
    (2, 1, 1, 2, 0),   # wrong shape
    (3, 1, 2, 2, 0),   # wrong mine count
    (3, 1, 1, 0, 0),   # mine on the safe cell
])
def test_fixed_layout_mismatch_is_config_error(args):
    with pytest.raises(ConfigError):
        FixedBoardGenerator([[True, False, False]]).generate(*args)
