from carpark.rh.rh_grid import OPPOSITE, Position, find_extent, grid_size, in_bounds

GRID = [
    [2, 2, 0],
    [0, 3, 0],
    [0, 3, 0],
]


def test_position_shifted():
    assert Position(1, 1).shifted("up") == Position(1, 0)
    assert Position(1, 1).shifted("right", 2) == Position(3, 1)
    assert Position(0, 0).shifted("left") == Position(-1, 0)


def test_opposite_directions_cancel():
    pos = Position(2, 3)
    for direction, back in OPPOSITE.items():
        assert pos.shifted(direction).shifted(back) == pos


def test_grid_size_and_bounds():
    assert grid_size(GRID) == (3, 3)
    assert grid_size([]) == (0, 0)
    assert in_bounds(GRID, Position(2, 2))
    assert not in_bounds(GRID, Position(3, 0))
    assert not in_bounds(GRID, Position(0, -1))


def test_find_extent_from_any_cell():
    assert find_extent(GRID, Position(0, 0)) == (Position(0, 0), Position(1, 0))
    assert find_extent(GRID, Position(1, 0)) == (Position(0, 0), Position(1, 0))
    assert find_extent(GRID, Position(1, 2)) == (Position(1, 1), Position(1, 2))


def test_find_extent_empty_or_outside():
    assert find_extent(GRID, Position(2, 0)) is None
    assert find_extent(GRID, Position(5, 5)) is None


def test_find_extent_limited_directions():
    top_left, bottom_right = find_extent(GRID, Position(1, 0), directions=("right", "down"))
    assert top_left == Position(1, 0)
    assert bottom_right == Position(1, 0)


def test_find_extent_l_shape_spans_both_axes():
    grid = [
        [4, 4],
        [4, 0],
    ]
    assert find_extent(grid, Position(0, 0)) == (Position(0, 0), Position(1, 1))
