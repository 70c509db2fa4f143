import struct

import pytest

from ashvale.geometry import IntRect
from ashvale.tilemap import TILE_SIZE, Tile, TileMap


def test_blank_map_has_no_placed_tiles_and_is_passable():
    tile_map = TileMap(4, 3)
    assert list(tile_map.placed_tiles()) == []
    assert all(tile_map.is_tile_passable(x, y) for x in range(4) for y in range(3))


def test_default_tile():
    tile = Tile()
    assert tile.rect == IntRect(0, 0, TILE_SIZE, TILE_SIZE)
    assert tile.placed is False
    assert tile.passable is True


def test_tile_place_marks_placed():
    tile = Tile()
    tile.place(IntRect(16, 32, 16, 16))
    assert tile.placed
    assert tile.rect == IntRect(16, 32, 16, 16)


def test_set_tile_and_read_back():
    tile_map = TileMap(4, 3)
    rect = IntRect(32, 16, 16, 16)
    tile_map.set_tile(2, 1, rect, False)
    cell = tile_map.tile(2, 1)
    assert cell.placed
    assert cell.rect == rect
    assert not tile_map.is_tile_passable(2, 1)
    assert list(tile_map.placed_tiles()) == [(2, 1, cell)]


def test_set_tile_defaults_to_passable():
    tile_map = TileMap(2, 2)
    tile_map.set_tile(0, 0, IntRect(0, 16, 16, 16))
    assert tile_map.is_tile_passable(0, 0)


@pytest.mark.parametrize("x, y", [(-1, 0), (0, -1), (4, 0), (0, 3)])
def test_set_tile_out_of_bounds_is_ignored(x, y):
    tile_map = TileMap(4, 3)
    tile_map.set_tile(x, y, IntRect(16, 16, 16, 16), False)
    assert list(tile_map.placed_tiles()) == []


@pytest.mark.parametrize("x, y", [(-1, 0), (0, -1), (4, 0), (0, 3)])
def test_out_of_bounds_is_not_passable(x, y):
    assert TileMap(4, 3).is_tile_passable(x, y) is False


def test_tile_out_of_bounds_raises():
    with pytest.raises(IndexError):
        TileMap(4, 3).tile(4, 0)


def test_placed_tiles_row_major_order():
    tile_map = TileMap(3, 3)
    tile_map.set_tile(2, 0, IntRect(0, 0, 16, 16))
    tile_map.set_tile(0, 2, IntRect(0, 0, 16, 16))
    tile_map.set_tile(1, 0, IntRect(0, 0, 16, 16))
    assert [(x, y) for x, y, _ in tile_map.placed_tiles()] == [(1, 0), (2, 0), (0, 2)]


def test_clear_resets_tiles():
    tile_map = TileMap(2, 2)
    tile_map.set_tile(1, 1, IntRect(16, 16, 16, 16), False)
    tile_map.clear()
    assert list(tile_map.placed_tiles()) == []
    assert tile_map.is_tile_passable(1, 1)


def test_blank_map_bytes_are_one_zero_flag_per_tile():
    assert TileMap(4, 3).to_bytes() == b"\x00" * 12


def test_placed_tile_wire_format():
    tile_map = TileMap(2, 1)
    tile_map.set_tile(1, 0, IntRect(16, 32, 16, 16), False)
    expected = b"\x00" + b"\x01" + struct.pack("<4i", 16, 32, 16, 16) + b"\x00"
    assert tile_map.to_bytes() == expected


def test_bytes_round_trip():
    source = TileMap(5, 4)
    source.set_tile(0, 0, IntRect(0, 0, 16, 16), True)
    source.set_tile(3, 2, IntRect(48, 64, 16, 16), False)
    source.set_tile(4, 3, IntRect(-16, 16, 16, 16), True)
    target = TileMap(5, 4)
    target.read_bytes(source.to_bytes())
    assert list(target.placed_tiles()) == list(source.placed_tiles())
    assert target.to_bytes() == source.to_bytes()


def test_file_round_trip(tmp_path):
    source = TileMap(3, 3)
    source.set_tile(1, 1, IntRect(16, 0, 16, 16), False)
    path = tmp_path / "map_1.dat"
    source.save(path)
    target = TileMap(3, 3)
    target.load(path)
    assert target.tile(1, 1) == source.tile(1, 1)
    assert not target.is_tile_passable(1, 1)


def test_missing_final_passable_flag_keeps_previous_value():
    tile_map = TileMap(1, 1)
    tile_map.read_bytes(b"\x01" + struct.pack("<4i", 16, 16, 16, 16))
    cell = tile_map.tile(0, 0)
    assert cell.placed
    assert cell.rect == IntRect(16, 16, 16, 16)
    assert cell.passable


def test_unplaced_records_keep_existing_tiles():
    tile_map = TileMap(2, 1)
    tile_map.set_tile(0, 0, IntRect(32, 32, 16, 16), False)
    tile_map.read_bytes(b"\x00\x00")
    cell = tile_map.tile(0, 0)
    assert cell.placed
    assert cell.rect == IntRect(32, 32, 16, 16)
    assert not cell.passable


def test_short_data_stops_between_tiles():
    tile_map = TileMap(3, 1)
    tile_map.read_bytes(b"\x01" + struct.pack("<4i", 0, 16, 16, 16) + b"\x01")
    assert [(x, y) for x, y, _ in tile_map.placed_tiles()] == [(0, 0)]


def test_truncated_tile_record_raises():
    tile_map = TileMap(2, 1)
    with pytest.raises(ValueError):
        tile_map.read_bytes(b"\x01" + b"\x10\x00")


def test_load_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        TileMap(2, 2).load(tmp_path / "absent.dat")