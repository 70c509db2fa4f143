"""Importing tile layouts from scene files in the TSCN text format."""

from __future__ import annotations

import logging
import re
from os import PathLike
from pathlib import Path
from typing import List, Optional, Union

from ashvale.geometry import IntRect
from ashvale.tilemap import TILE_SIZE, TileMap

logger = logging.getLogger(__name__)

_NUMBER = re.compile(r"-?\d+")
_TILEMAP_MARKERS = ('[node name="TileMap"', "[node name='TileMap'", 'type="TileMap"')


def extract_texture_path(text: str) -> Optional[str]:
    """The quoted value on the last line mentioning ``path=``, if any."""
    found: Optional[str] = None
    for line in text.splitlines():
        if "path=" not in line:
            continue
        start = line.find('"')
        if start == -1:
            continue
        end = line.find('"', start + 1)
        if end != -1:
            found = line[start + 1 : end]
    return found


def extract_tile_ids(text: str) -> List[int]:
    """Non-zero tile ids listed after ``tile_data`` inside a TileMap node."""
    ids: List[int] = []
    in_tile_map = False
    in_tile_data = False
    for line in text.splitlines():
        if any(marker in line for marker in _TILEMAP_MARKERS):
            in_tile_map = True
            continue
        if not in_tile_map:
            continue
        if "tile_data" in line:
            in_tile_data = True
            continue
        if not in_tile_data:
            continue
        if ")" in line:
            in_tile_data = False
            in_tile_map = False
            continue
        ids.extend(int(token) for token in _NUMBER.findall(line) if token != "0")
    return ids


def import_tscn(tile_map: TileMap, path: Union[str, PathLike], tilesheet_width: int) -> int:
    """Replace the map's tiles with those of a scene file; return how many were placed.

    Ids fill the map row by row; positive ids select tiles of a tilesheet
    of the given pixel width, counting from 1.
    """
    tiles_per_row = tilesheet_width // TILE_SIZE
    if tiles_per_row <= 0:
        raise ValueError(f"tilesheet width {tilesheet_width} is narrower than one tile")

    source = Path(path)
    if not source.exists():
        raise FileNotFoundError(f"File does not exist: {source}")
    text = source.read_text()

    texture = extract_texture_path(text)
    if texture is not None:
        logger.info("Found texture path: %s", texture)
    ids = extract_tile_ids(text)
    logger.info("Found %d tiles", len(ids))

    tile_map.clear()
    x = y = 0
    placed = 0
    for tid in ids:
        if x >= tile_map.width:
            x = 0
            y += 1
        if y >= tile_map.height:
            break
        if tid > 0:
            index = tid - 1
            rect = IntRect(
                (index % tiles_per_row) * TILE_SIZE,
                (index // tiles_per_row) * TILE_SIZE,
                TILE_SIZE,
                TILE_SIZE,
            )
            tile_map.tile(x, y).place(rect)
            placed += 1
        x += 1

    logger.info("Placed %d tiles on the map", placed)
    return placed