"""Loading numbered maps from a directory and answering passability queries."""

from __future__ import annotations

import logging
from os import PathLike
from pathlib import Path
from typing import List, Optional, Union

from ashvale.tilemap import MAP_HEIGHT, MAP_WIDTH, SCALED_TILE_SIZE, TileMap

logger = logging.getLogger(__name__)


class MapManager:
    """Keeps the current map and loads map_<n>.dat files from a directory."""

    def __init__(
        self,
        maps_dir: Union[str, PathLike] = "maps",
        width: int = MAP_WIDTH,
        height: int = MAP_HEIGHT,
    ) -> None:
        self.maps_directory = Path(maps_dir)
        self.maps_directory.mkdir(parents=True, exist_ok=True)
        self.tile_map = TileMap(width, height)
        self.current_map_number = 1
        self.current_map_filename: Optional[Path] = None

    def map_path(self, map_number: int) -> Path:
        """Path of the file that holds the given map number."""
        return self.maps_directory / f"map_{map_number}.dat"

    def load_map(self, map_number: int) -> bool:
        """Load a numbered map; return False if its file does not exist."""
        path = self.map_path(map_number)
        if not path.exists():
            logger.info("Map %s does not exist!", path)
            return False
        self.tile_map.load(path)
        self.current_map_number = map_number
        self.current_map_filename = path
        logger.info("Loaded map: %s", path)
        return True

    def available_maps(self) -> List[str]:
        """Names of the .dat map files in the maps directory, sorted."""
        return sorted(
            entry.name
            for entry in self.maps_directory.iterdir()
            if entry.is_file() and entry.suffix == ".dat"
        )

    def is_tile_passable(self, x: int, y: int) -> bool:
        """Whether the tile at tile coordinates (x, y) can be walked on."""
        return self.tile_map.is_tile_passable(x, y)

    def is_position_passable(self, x: float, y: float) -> bool:
        """Whether the tile under pixel coordinates (x, y) can be walked on."""
        tile_x = int(x / SCALED_TILE_SIZE)
        tile_y = int(y / SCALED_TILE_SIZE)
        return self.tile_map.is_tile_passable(tile_x, tile_y)