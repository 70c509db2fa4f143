"""Tile maps, pathfinding, player logic and a tile map editor for a top-down role-playing game."""

__version__ = "0.1.0"