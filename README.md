# ashvale

Pieces of a small top-down action role-playing game: tile maps stored in a
compact binary format, passability queries, eight-direction A* pathfinding,
the player character's movement and animation state, the sword's swing, an
importer for tile data in TSCN scene files, and an interactive tile map
editor built on pygame.

## Installing

```
pip install .
```

To run the test suite as well:

```
pip install ".[test]"
pytest
```

## Editing maps

```
ashvale-editor
```

Options:

- `--maps DIR` – directory that holds the `map_<n>.dat` files (default `maps`)
- `--tilesheet PATH` – image to take tiles from
  (default `Assets/Map/Fantasy/forest_/forest_1.png`)

The editor opens one window: the map view on the left, the tilesheet on the
right. Click a tile in the tilesheet to select it, then click in the map view
to paint it. If the tilesheet cannot be loaded, the editor still runs but
draws no tiles.

- `G` – toggle the grid
- `P` – toggle whether newly painted tiles can be walked on (non-passable
  tiles are drawn with a red tint)
- `Ctrl+S` – save the map as `map_<n>.dat` under the current number, then
  move on to the next number
- `Ctrl+L` – load the map saved last
- `Ctrl+N` – start a new blank map
- `Ctrl+0`–`Ctrl+9` – load that map number
- `Ctrl+I` – import a TSCN scene file; type its path in the console and
  press Enter

Typing a number in the console and pressing Enter loads that map number.
On start the editor prints the `.dat` and `.tscn` files found in the maps
directory and the list of controls.

## Using the pieces from Python

```python
from ashvale.geometry import IntRect
from ashvale.tilemap import TileMap
from ashvale.mapmanager import MapManager
from ashvale.pathfinding import find_path

tiles = TileMap(80, 45)
tiles.set_tile(3, 4, IntRect(16, 0, 16, 16), False)
tiles.save("maps/map_1.dat")

manager = MapManager("maps")
manager.load_map(1)
print(manager.is_position_passable(150.0, 200.0))
print(find_path(manager, (24.0, 24.0), (300.0, 300.0)))
```

The modules:

- `ashvale.geometry` – `Vec2`, `IntRect`, `FloatRect` (with `intersects`)
  and `Clock`, which takes an optional time source so it can be driven by
  hand.
- `ashvale.tilemap` – `Tile` and `TileMap`. `to_bytes`/`read_bytes` and
  `save`/`load` use the binary map format: per tile a placed flag, and for
  placed tiles four little-endian 32-bit integers for the tilesheet region
  followed by a passable flag. Reading applies the data on top of the
  current tiles.
- `ashvale.mapmanager` – `MapManager` loads `map_<n>.dat` from a directory
  (`load_map` returns `False` when the file is missing), lists the available
  maps, and answers passability in tile or pixel coordinates. Anything
  outside the map is not passable.
- `ashvale.pathfinding` – `find_path(grid, start, goal)` takes pixel
  positions and returns the centres of the tiles along the path, or an empty
  list when the goal cannot be reached. `heuristic` is the Manhattan
  distance between tile coordinates.
- `ashvale.player` – `Player.update(inputs, map_manager)` advances one frame
  from an `InputState` (movement, dash, attack), blocking moves into
  impassable tiles; `take_damage`, `hitbox` and `center` cover combat
  geometry and health, including the death animation.
- `ashvale.weapon` – `Weapon` follows the player (`update_position`) and
  swings through a 45-degree arc over a quarter of a second
  (`update_swing`). `Weapon.from_file` sizes it after an image.
- `ashvale.tscn` – `extract_texture_path`, `extract_tile_ids` and
  `import_tscn(tile_map, path, tilesheet_width)`, which fills a `TileMap`
  row by row from the non-zero tile ids and returns how many tiles it
  placed.

## What this package does not do

There is no playable game here: no command that starts the game, no game
window, title, level-cleared or game-over screens, no enemies, no combat
between player and enemies, no healing over time, no scoring, and no music
or sound. The package provides the map, pathfinding, player and weapon
logic and the map editor only.