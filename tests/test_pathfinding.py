import pytest

from ashvale.geometry import Vec2
from ashvale.pathfinding import find_path, heuristic
from ashvale.tilemap import SCALED_TILE_SIZE, TileMap, IntRect

HALF = SCALED_TILE_SIZE // 2


def center(x, y):
    return Vec2(x * SCALED_TILE_SIZE + HALF, y * SCALED_TILE_SIZE + HALF)


def to_tile(point):
    return int(point.x // SCALED_TILE_SIZE), int(point.y // SCALED_TILE_SIZE)


def block(grid, x, y):
    grid.set_tile(x, y, IntRect(0, 0, 16, 16), passable=False)


def assert_valid_path(grid, path, start_tile, goal_tile):
    assert path[0] == center(*start_tile)
    assert path[-1] == center(*goal_tile)
    tiles = [to_tile(p) for p in path]
    for (ax, ay), (bx, by) in zip(tiles, tiles[1:]):
        assert max(abs(ax - bx), abs(ay - by)) == 1
    for tile in tiles[1:]:
        assert grid.is_tile_passable(*tile)


def test_heuristic_is_manhattan_distance():
    assert heuristic((0, 0), (3, -4)) == 7.0


def test_heuristic_is_symmetric_and_zero_on_same_tile():
    assert heuristic((2, 5), (7, 1)) == heuristic((7, 1), (2, 5))
    assert heuristic((4, 4), (4, 4)) == 0.0


def test_same_tile_gives_single_center():
    grid = TileMap(10, 10)
    assert find_path(grid, Vec2(5, 5), Vec2(40, 40)) == [center(0, 0)]


def test_negative_pixels_truncate_toward_zero():
    grid = TileMap(10, 10)
    assert find_path(grid, Vec2(-10, -10), Vec2(10, 10)) == [center(0, 0)]


def test_straight_path_along_row():
    grid = TileMap(10, 10)
    path = find_path(grid, center(0, 0), center(3, 0))
    assert path == [center(x, 0) for x in range(4)]


def test_diagonal_path_is_connected():
    grid = TileMap(10, 10)
    path = find_path(grid, center(0, 0), center(3, 3))
    assert_valid_path(grid, path, (0, 0), (3, 3))
    assert len(path) >= 4


def test_path_goes_through_gap_in_wall():
    grid = TileMap(8, 8)
    for y in range(8):
        if y != 6:
            block(grid, 2, y)
    path = find_path(grid, center(0, 0), center(4, 0))
    assert_valid_path(grid, path, (0, 0), (4, 0))
    assert center(2, 6) in path


def test_impassable_goal_is_unreachable():
    grid = TileMap(6, 6)
    block(grid, 4, 4)
    assert find_path(grid, center(0, 0), center(4, 4)) == []


def test_enclosed_goal_is_unreachable():
    grid = TileMap(7, 7)
    for dx in (-1, 0, 1):
        for dy in (-1, 0, 1):
            if dx or dy:
                block(grid, 4 + dx, 4 + dy)
    assert find_path(grid, center(0, 0), center(4, 4)) == []


def test_goal_outside_map_is_unreachable():
    grid = TileMap(5, 5)
    assert find_path(grid, center(0, 0), center(9, 9)) == []


@pytest.mark.parametrize("goal", [(4, 0), (0, 4), (4, 4), (2, 3)])
def test_paths_on_open_grid_are_valid(goal):
    grid = TileMap(5, 5)
    path = find_path(grid, center(0, 0), center(*goal))
    assert_valid_path(grid, path, (0, 0), goal)
    assert len(path) == len(set(path))