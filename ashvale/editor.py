"""An interactive tile map editor that paints tiles from a tilesheet and saves numbered maps."""

from __future__ import annotations

import argparse
import logging
import queue
import sys
import threading
from os import PathLike
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Union

from ashvale.geometry import IntRect
from ashvale.tilemap import TILE_SIZE, TileMap
from ashvale.tscn import import_tscn

logger = logging.getLogger(__name__)

EDITOR_SCALE_FACTOR = 3
EDITOR_SCALED_TILE_SIZE = TILE_SIZE * EDITOR_SCALE_FACTOR
EDITOR_MAP_WIDTH_PIXELS = 1027
EDITOR_MAP_HEIGHT_PIXELS = 768
EDITOR_MAP_WIDTH = EDITOR_MAP_WIDTH_PIXELS // TILE_SIZE
EDITOR_MAP_HEIGHT = EDITOR_MAP_HEIGHT_PIXELS // TILE_SIZE
TILESHEET_PANEL = 512

MAP_EXTENSIONS = (".dat", ".tscn")

CONTROLS = (
    "Ctrl + S: Save current map",
    "Ctrl + L: Load last saved map",
    "Ctrl + N: New blank map",
    "Ctrl + [number]: Load specific map (e.g., Ctrl+1 loads map_1.dat)",
    "Ctrl + I: Import TSCN file",
    "G: Toggle grid",
    "P: Toggle passability for selected tile",
    "Type a number and press Enter to load that map (e.g., '18' loads map_18.dat)",
)


class TileMapEditor:
    """Editing state: the map being painted, the selected tile and the options."""

    def __init__(self, maps_dir: Union[str, PathLike] = "maps") -> None:
        self.maps_dir = Path(maps_dir)
        self.maps_dir.mkdir(parents=True, exist_ok=True)
        self.tile_map = TileMap(EDITOR_MAP_WIDTH, EDITOR_MAP_HEIGHT)
        self.selected_rect = IntRect(0, 0, TILE_SIZE, TILE_SIZE)
        self.show_grid = True
        self.current_map_number = 1
        self.passable = True

    def _map_file(self, map_number: int) -> Path:
        return self.maps_dir / f"map_{map_number}.dat"

    def available_maps(self) -> List[str]:
        """Names of the map and scene files in the maps directory, sorted."""
        return sorted(
            entry.name
            for entry in self.maps_dir.iterdir()
            if entry.is_file() and entry.suffix in MAP_EXTENSIONS
        )

    def load_map(self, map_number: int) -> bool:
        """Read a numbered map on top of the current one; False if it does not exist."""
        path = self._map_file(map_number)
        if not path.exists():
            logger.info("Map %s does not exist!", path)
            return False
        self.tile_map.load(path)
        self.current_map_number = map_number
        logger.info("Loaded map: %s", path)
        return True

    def click_map(self, px: int, py: int) -> None:
        """Paint the selected tile at a pixel position of the map view."""
        tile_x = int(px) // EDITOR_SCALED_TILE_SIZE
        tile_y = int(py) // EDITOR_SCALED_TILE_SIZE
        self.tile_map.set_tile(tile_x, tile_y, self.selected_rect, self.passable)

    def click_tilesheet(self, px: int, py: int) -> IntRect:
        """Select the tilesheet tile under a pixel position and return its region."""
        left = (int(px) // TILE_SIZE) * TILE_SIZE
        top = (int(py) // TILE_SIZE) * TILE_SIZE
        self.selected_rect = IntRect(left, top, TILE_SIZE, TILE_SIZE)
        return self.selected_rect

    def toggle_grid(self) -> bool:
        """Show or hide the grid; return whether it is now shown."""
        self.show_grid = not self.show_grid
        return self.show_grid

    def toggle_passable(self) -> bool:
        """Flip whether newly painted tiles are passable; return the new setting."""
        self.passable = not self.passable
        logger.info(
            "Tile passability set to: %s", "Passable" if self.passable else "Non-passable"
        )
        return self.passable

    def save(self) -> Path:
        """Save under the current number, then move on to the next number."""
        path = self._map_file(self.current_map_number)
        self.tile_map.save(path)
        logger.info("Map saved as: %s", path)
        self.current_map_number += 1
        return path

    def load_last(self) -> bool:
        """Load the most recently saved map, if any was saved."""
        if self.current_map_number > 1:
            return self.load_map(self.current_map_number - 1)
        return False

    def new_map(self) -> None:
        """Start again from a blank map."""
        self.tile_map = TileMap(EDITOR_MAP_WIDTH, EDITOR_MAP_HEIGHT)
        logger.info("Created new blank map")


def _read_console(lines: "queue.Queue[str]") -> None:
    for line in sys.stdin:
        lines.put(line.strip())


class _View:
    """Draws the map view and the tilesheet panel into one pygame window."""

    def __init__(self, pygame, surface, tilesheet) -> None:
        self._pg = pygame
        self.surface = surface
        self.tilesheet = tilesheet
        self._tiles: Dict[tuple, object] = {}

    def _tile_image(self, rect: IntRect, passable: bool):
        key = (rect, passable)
        if key not in self._tiles:
            image = None
            if self.tilesheet is not None:
                area = self._pg.Rect(rect.left, rect.top, rect.width, rect.height)
                if self.tilesheet.get_rect().contains(area):
                    image = self._pg.transform.scale(
                        self.tilesheet.subsurface(area),
                        (rect.width * EDITOR_SCALE_FACTOR, rect.height * EDITOR_SCALE_FACTOR),
                    )
                    if not passable:
                        image = image.copy()
                        image.fill((255, 200, 200), special_flags=self._pg.BLEND_RGB_MULT)
            self._tiles[key] = image
        return self._tiles[key]

    def draw(self, editor: TileMapEditor) -> None:
        pg = self._pg
        self.surface.fill((30, 30, 30))
        map_area = pg.Rect(0, 0, EDITOR_MAP_WIDTH_PIXELS, EDITOR_MAP_HEIGHT_PIXELS)
        self.surface.set_clip(map_area)
        self.surface.fill((50, 50, 50), map_area)
        for x, y, tile in editor.tile_map.placed_tiles():
            image = self._tile_image(tile.rect, tile.passable)
            if image is not None:
                self.surface.blit(image, (x * EDITOR_SCALED_TILE_SIZE, y * EDITOR_SCALED_TILE_SIZE))
        if editor.show_grid:
            colour = (100, 100, 100)
            for x in range(EDITOR_MAP_WIDTH + 1):
                px = x * EDITOR_SCALED_TILE_SIZE
                pg.draw.line(self.surface, colour, (px, 0), (px, EDITOR_MAP_HEIGHT_PIXELS))
            for y in range(EDITOR_MAP_HEIGHT + 1):
                py = y * EDITOR_SCALED_TILE_SIZE
                pg.draw.line(self.surface, colour, (0, py), (EDITOR_MAP_WIDTH_PIXELS, py))
        self.surface.set_clip(None)

        panel = pg.Rect(EDITOR_MAP_WIDTH_PIXELS, 0, TILESHEET_PANEL, TILESHEET_PANEL)
        self.surface.set_clip(panel)
        if self.tilesheet is not None:
            self.surface.blit(self.tilesheet, panel.topleft)
        selected = editor.selected_rect
        pg.draw.rect(
            self.surface,
            (255, 0, 0),
            pg.Rect(panel.left + selected.left, selected.top, TILE_SIZE, TILE_SIZE),
            2,
        )
        self.surface.set_clip(None)


def _import(editor: TileMapEditor, path: str, tilesheet) -> None:
    if tilesheet is None:
        logger.error("No tilesheet is loaded; cannot import %s", path)
        return
    try:
        import_tscn(editor.tile_map, path, tilesheet.get_width())
    except (OSError, ValueError) as exc:
        logger.error("Failed to import TSCN file %s: %s", path, exc)
        return
    logger.info("Successfully imported TSCN file")


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Open the editor window and run until it is closed."""
    parser = argparse.ArgumentParser(prog="ashvale-editor", description="Edit tile maps.")
    parser.add_argument("--maps", default="maps", help="directory for map_<n>.dat files")
    parser.add_argument(
        "--tilesheet",
        default="Assets/Map/Fantasy/forest_/forest_1.png",
        help="image to take tiles from",
    )
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(message)s")

    import pygame

    editor = TileMapEditor(args.maps)
    print("\nAvailable maps:")
    for name in editor.available_maps():
        print(name)
    print("\nControls:")
    for line in CONTROLS:
        print(line)

    pygame.init()
    try:
        window = pygame.display.set_mode(
            (EDITOR_MAP_WIDTH_PIXELS + TILESHEET_PANEL, max(EDITOR_MAP_HEIGHT_PIXELS, TILESHEET_PANEL))
        )
        pygame.display.set_caption("Map Editor")
        try:
            tilesheet = pygame.image.load(args.tilesheet).convert_alpha()
        except (pygame.error, OSError) as exc:
            logger.error("Failed to load tilesheet! (%s)", exc)
            tilesheet = None
        view = _View(pygame, window, tilesheet)

        lines: "queue.Queue[str]" = queue.Queue()
        threading.Thread(target=_read_console, args=(lines,), daemon=True).start()
        awaiting_import = False

        frame_clock = pygame.time.Clock()
        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                    x, y = event.pos
                    if x < EDITOR_MAP_WIDTH_PIXELS and y < EDITOR_MAP_HEIGHT_PIXELS:
                        editor.click_map(x, y)
                    elif x >= EDITOR_MAP_WIDTH_PIXELS and y < TILESHEET_PANEL:
                        editor.click_tilesheet(x - EDITOR_MAP_WIDTH_PIXELS, y)
                elif event.type == pygame.KEYDOWN:
                    ctrl = bool(event.mod & pygame.KMOD_CTRL)
                    if event.key == pygame.K_g:
                        editor.toggle_grid()
                    elif event.key == pygame.K_p:
                        editor.toggle_passable()
                    elif ctrl and event.key == pygame.K_s:
                        editor.save()
                    elif ctrl and event.key == pygame.K_l:
                        editor.load_last()
                    elif ctrl and event.key == pygame.K_n:
                        editor.new_map()
                    elif ctrl and pygame.K_0 <= event.key <= pygame.K_9:
                        editor.load_map(event.key - pygame.K_0)
                    elif ctrl and event.key == pygame.K_i:
                        print("Enter TSCN file path to import: ", end="", flush=True)
                        awaiting_import = True

            while True:
                try:
                    line = lines.get_nowait()
                except queue.Empty:
                    break
                if not line:
                    continue
                if awaiting_import:
                    awaiting_import = False
                    _import(editor, line, tilesheet)
                    continue
                try:
                    number = int(line)
                except ValueError:
                    continue
                editor.load_map(number)

            view.draw(editor)
            pygame.display.flip()
            frame_clock.tick(60)
        return 0
    finally:
        pygame.quit()


if __name__ == "__main__":
    sys.exit(main())