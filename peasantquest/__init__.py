"""A tile-based puzzle game with XPM tile images, text maps and a pygame window."""

__version__ = "1.0.0"
__all__ = ["app", "colors", "game", "mapfile", "parsing", "xpm"]