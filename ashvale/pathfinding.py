"""A* search over a grid of passable and blocked tiles."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Optional, Protocol, Tuple

from ashvale.geometry import Vec2
from ashvale.tilemap import SCALED_TILE_SIZE

STRAIGHT_COST = 1.0
DIAGONAL_COST = 1.414

Coord = Tuple[int, int]


class PassabilityGrid(Protocol):
    """Anything that can say whether a tile can be walked on."""

    def is_tile_passable(self, x: int, y: int) -> bool: ...


@dataclass(eq=False)
class _Node:
    x: int
    y: int
    g: float = 0.0
    h: float = 0.0
    parent: Optional[_Node] = None

    @property
    def f(self) -> float:
        return self.g + self.h

    def chain(self) -> Iterator[_Node]:
        node: Optional[_Node] = self
        while node is not None:
            yield node
            node = node.parent


def heuristic(a: Iterable[int], b: Iterable[int]) -> float:
    """Manhattan distance between two tile coordinates."""
    ax, ay = a
    bx, by = b
    return float(abs(ax - bx) + abs(ay - by))


def _to_tile(position: Iterable[float]) -> Coord:
    px, py = position
    return int(px / SCALED_TILE_SIZE), int(py / SCALED_TILE_SIZE)


def _tile_center(node: _Node) -> Vec2:
    half = SCALED_TILE_SIZE // 2
    return Vec2(float(node.x * SCALED_TILE_SIZE + half), float(node.y * SCALED_TILE_SIZE + half))


def find_path(grid: PassabilityGrid, start: Iterable[float], goal: Iterable[float]) -> List[Vec2]:
    """Find a path between two pixel positions, moving in eight directions.

    Returns the centres of the tiles along the path, start and goal
    included, or an empty list when the goal cannot be reached.
    """
    start_tile = _to_tile(start)
    goal_tile = _to_tile(goal)

    first = _Node(*start_tile)
    first.h = heuristic(start_tile, goal_tile)

    # Insertion order matters: ties on cost go to the earliest entry.
    open_nodes: Dict[Coord, _Node] = {start_tile: first}
    closed: set = set()

    while open_nodes:
        current = min(open_nodes.values(), key=lambda node: node.f)
        current_coord = (current.x, current.y)

        if current_coord == goal_tile:
            return [_tile_center(node) for node in reversed(list(current.chain()))]

        del open_nodes[current_coord]
        closed.add(current_coord)

        for dx in (-1, 0, 1):
            for dy in (-1, 0, 1):
                if dx == 0 and dy == 0:
                    continue
                coord = (current.x + dx, current.y + dy)
                if coord in closed or not grid.is_tile_passable(*coord):
                    continue

                step = DIAGONAL_COST if dx != 0 and dy != 0 else STRAIGHT_COST
                new_g = current.g + step
                existing = open_nodes.get(coord)
                if existing is None or new_g < existing.g:
                    open_nodes[coord] = _Node(
                        coord[0],
                        coord[1],
                        g=new_g,
                        h=heuristic(coord, goal_tile),
                        parent=current,
                    )

    return []