"""Tile-based collect-and-escape game with .ber maps and XPM textures."""

__version__ = "0.1.0"
__all__ = ["colors", "xpm", "mapfile", "pathcheck", "game", "app"]