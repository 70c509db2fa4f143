"""Tile grids and their binary map file format."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from os import PathLike
from pathlib import Path
from typing import Iterator, List, Tuple, Union

from ashvale.geometry import IntRect

TILE_SIZE = 16
SCALE_FACTOR = 3
SCALED_TILE_SIZE = TILE_SIZE * SCALE_FACTOR
MAP_WIDTH_PIXELS = 1280
MAP_HEIGHT_PIXELS = 720
MAP_WIDTH = MAP_WIDTH_PIXELS // TILE_SIZE
MAP_HEIGHT = MAP_HEIGHT_PIXELS // TILE_SIZE

_RECT = struct.Struct("<4i")
_FLAG = struct.Struct("<?")


def _default_rect() -> IntRect:
    return IntRect(0, 0, TILE_SIZE, TILE_SIZE)


@dataclass
class Tile:
    """One cell of a tile map."""

    rect: IntRect = field(default_factory=_default_rect)
    placed: bool = False
    passable: bool = True

    def place(self, rect: IntRect) -> None:
        """Assign a tilesheet region to the cell and mark it placed."""
        self.rect = rect
        self.placed = True


class TileMap:
    """A rectangular grid of tiles stored row by row."""

    def __init__(self, width: int = MAP_WIDTH, height: int = MAP_HEIGHT) -> None:
        self.width = width
        self.height = height
        self._rows: List[List[Tile]] = []
        self.clear()

    def _in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def tile(self, x: int, y: int) -> Tile:
        """Return the tile at column x, row y."""
        if not self._in_bounds(x, y):
            raise IndexError(f"tile ({x}, {y}) is outside the {self.width}x{self.height} map")
        return self._rows[y][x]

    def set_tile(self, x: int, y: int, rect: IntRect, passable: bool = True) -> None:
        """Place a tile; coordinates outside the map are ignored."""
        if self._in_bounds(x, y):
            cell = self._rows[y][x]
            cell.place(rect)
            cell.passable = passable

    def is_tile_passable(self, x: int, y: int) -> bool:
        """Whether the tile can be walked on; outside the map never is."""
        if self._in_bounds(x, y):
            return self._rows[y][x].passable
        return False

    def placed_tiles(self) -> Iterator[Tuple[int, int, Tile]]:
        """Yield (x, y, tile) for every placed tile in row-major order."""
        for y, row in enumerate(self._rows):
            for x, cell in enumerate(row):
                if cell.placed:
                    yield x, y, cell

    def clear(self) -> None:
        """Reset every cell to an empty, passable tile."""
        self._rows = [[Tile() for _ in range(self.width)] for _ in range(self.height)]

    def to_bytes(self) -> bytes:
        """Serialise the map in the binary map file format."""
        out = bytearray()
        for row in self._rows:
            for cell in row:
                out += _FLAG.pack(cell.placed)
                if cell.placed:
                    rect = cell.rect
                    out += _RECT.pack(rect.left, rect.top, rect.width, rect.height)
                    out += _FLAG.pack(cell.passable)
        return bytes(out)

    def read_bytes(self, data: bytes) -> None:
        """Apply serialised map data on top of the current tiles.

        Tiles not placed in the data keep their current state. A missing
        passability flag at the very end leaves that tile's flag unchanged.
        Reading stops quietly when the data runs out between tiles.
        """
        view = memoryview(data)
        offset = 0
        for row in self._rows:
            for cell in row:
                if offset >= len(view):
                    return
                placed = view[offset] != 0
                offset += 1
                if not placed:
                    continue
                if offset + _RECT.size > len(view):
                    raise ValueError("map data ends inside a tile record")
                left, top, width, height = _RECT.unpack_from(view, offset)
                offset += _RECT.size
                cell.place(IntRect(left, top, width, height))
                if offset < len(view):
                    cell.passable = view[offset] != 0
                    offset += 1

    def save(self, path: Union[str, PathLike]) -> None:
        """Write the map to a file."""
        Path(path).write_bytes(self.to_bytes())

    def load(self, path: Union[str, PathLike]) -> None:
        """Read a map file on top of the current tiles."""
        self.read_bytes(Path(path).read_bytes())