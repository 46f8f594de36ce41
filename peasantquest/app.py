"""Window, drawing and the command that starts a game."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

import pygame

from peasantquest.game import Game, Key
from peasantquest.mapfile import MapReadError, read_map, split_rows
from peasantquest.parsing import COLLECTIBLE, WALL, MapError, validate_map
from peasantquest.xpm import XpmError, XpmImage, load_xpm

TILE_SIZE = 64
TITLE = "The story of the Peasant becomming a Magical Princess"
SETS_DIRECTORY = "./sets"

_KEYMAP: dict[int, Key] = {
    pygame.K_w: Key.W,
    pygame.K_a: Key.A,
    pygame.K_s: Key.S,
    pygame.K_d: Key.D,
    pygame.K_ESCAPE: Key.ESCAPE,
}


@dataclass(frozen=True)
class Tileset:
    """The images used to draw a map."""

    floor: XpmImage
    wall: XpmImage
    collectible: XpmImage
    player: XpmImage
    exit: XpmImage
    powered_player: XpmImage


_TILE_FILES = {
    "floor": "floor.xpm",
    "wall": "wall.xpm",
    "collectible": "collectible.xpm",
    "player": "player_peasant.xpm",
    "exit": "exit-tp.xpm",
    "powered_player": "player_mega.xpm",
}


def load_tileset(directory: str | os.PathLike[str]) -> Tileset:
    """Load every tile image from ``directory``."""
    base = Path(directory)
    return Tileset(**{field: load_xpm(base / name) for field, name in _TILE_FILES.items()})


def _to_surface(image: XpmImage) -> pygame.Surface:
    data = bytearray()
    for value in image.pixels:
        data += bytes((
            (value >> 16) & 0xFF,
            (value >> 8) & 0xFF,
            value & 0xFF,
            0xFF - ((value >> 24) & 0xFF),
        ))
    surface = pygame.image.frombuffer(bytes(data), (image.width, image.height), "RGBA")
    return surface.copy()


class Renderer:
    """Draws tiles of a game onto a pygame surface."""

    def __init__(self, surface: pygame.Surface, tileset: Tileset) -> None:
        self.surface = surface
        self.tileset = tileset
        self._cache: dict[int, tuple[XpmImage, pygame.Surface]] = {}

    def _surface_for(self, image: XpmImage) -> pygame.Surface:
        cached = self._cache.get(id(image))
        if cached is None or cached[0] is not image:
            cached = (image, _to_surface(image))
            self._cache[id(image)] = cached
        return cached[1]

    def draw_tile(self, image: XpmImage, x: int, y: int) -> None:
        """Draw ``image`` on the map cell at column ``x`` of row ``y``."""
        self.surface.blit(self._surface_for(image), (x * TILE_SIZE, y * TILE_SIZE))

    def draw_all(self, game: Game) -> None:
        """Draw the whole map; exits appear only once every item is collected."""
        tiles = self.tileset
        for y, row in enumerate(game.rows):
            for x, char in enumerate(row):
                self.draw_tile(tiles.floor, x, y)
                if char == WALL:
                    self.draw_tile(tiles.wall, x, y)
                elif char == COLLECTIBLE:
                    self.draw_tile(tiles.collectible, x, y)
        player = tiles.powered_player if game.powered else tiles.player
        self.draw_tile(player, *game.player)
        if game.powered:
            for position in game.exit_positions():
                self.draw_tile(tiles.exit, *position)


def _load_game(path: str) -> Game | None:
    try:
        text = read_map(path)
    except MapReadError:
        print("Error 1: bad map path")
        return None
    rows = split_rows(text)
    try:
        validate_map(path, rows)
    except MapError as exc:
        print(f"Error : {exc}")
        return None
    return Game(rows)


def _run(game: Game, tileset: Tileset) -> int:
    pygame.init()
    try:
        screen = pygame.display.set_mode((game.width * TILE_SIZE, game.height * TILE_SIZE))
        pygame.display.set_caption(TITLE)
        renderer = Renderer(screen, tileset)
        renderer.draw_all(game)
        pygame.display.flip()
        clock = pygame.time.Clock()
        while True:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    return 0
                if event.type != pygame.KEYUP:
                    continue
                key = _KEYMAP.get(event.key)
                if key is None:
                    continue
                result = game.handle_key(key)
                if result.moved:
                    print(result.walk, flush=True)
                if result.quit or result.finished:
                    return 0
                renderer.draw_all(game)
                pygame.display.flip()
            clock.tick(60)
    finally:
        pygame.quit()


def main(argv: Sequence[str] | None = None) -> int:
    """Start a game on the map file named on the command line."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) != 1:
        print("Error : wrong number of arguments", end="")
        return 0
    game = _load_game(args[0])
    if game is None:
        return 0
    try:
        tileset = load_tileset(SETS_DIRECTORY)
    except XpmError as exc:
        print(f"Error : {exc}")
        return 1
    return _run(game, tileset)


if __name__ == "__main__":
    sys.exit(main())