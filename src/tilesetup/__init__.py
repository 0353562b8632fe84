"""Tile layout planning: grids, cut pieces, patterns, masks and undo history."""

__version__ = "0.1.0"
