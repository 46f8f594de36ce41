"""Game state and movement rules."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable

from peasantquest.parsing import COLLECTIBLE, EXIT, FLOOR, PLAYER, WALL, MapError

Position = tuple[int, int]


class Key(IntEnum):
    """Key codes the game reacts to."""

    A = 0
    S = 1
    D = 2
    W = 13
    ESCAPE = 53


_STEPS: dict[Key, Position] = {
    Key.W: (0, -1),
    Key.A: (-1, 0),
    Key.S: (0, 1),
    Key.D: (1, 0),
}


@dataclass(frozen=True)
class MoveResult:
    """What a key press or a step did to the game."""

    origin: Position
    position: Position
    walk: int
    moved: bool = False
    collected: bool = False
    finished: bool = False
    quit: bool = False


class Game:
    """A running game on a validated map."""

    def __init__(self, rows: Iterable[str]) -> None:
        self._grid = [list(row) for row in rows]
        self.collectibles = sum(row.count(COLLECTIBLE) for row in self._grid)
        players = [
            (x, y)
            for y, row in enumerate(self._grid)
            for x, char in enumerate(row)
            if char == PLAYER
        ]
        if not players:
            raise MapError("map has no player")
        self.player: Position = players[-1]
        self.walk = 0

    @property
    def rows(self) -> tuple[str, ...]:
        """The current map, one string per row."""
        return tuple("".join(row) for row in self._grid)

    @property
    def height(self) -> int:
        return len(self._grid)

    @property
    def width(self) -> int:
        return len(self._grid[-1]) if self._grid else 0

    @property
    def powered(self) -> bool:
        """True once every collectible has been picked up."""
        return self.collectibles == 0

    def tile(self, x: int, y: int) -> str:
        """Return the map character at column ``x`` of row ``y``."""
        if not (0 <= y < len(self._grid) and 0 <= x < len(self._grid[y])):
            raise IndexError(f"tile ({x}, {y}) outside the map")
        return self._grid[y][x]

    def exit_positions(self) -> list[Position]:
        """Positions of every exit, row by row."""
        return [
            (x, y)
            for y, row in enumerate(self._grid)
            for x, char in enumerate(row)
            if char == EXIT
        ]

    def move(self, dx: int, dy: int) -> MoveResult:
        """Step the player by ``(dx, dy)`` unless a wall is in the way."""
        origin = self.player
        target = (origin[0] + dx, origin[1] + dy)
        try:
            tile = self.tile(*target)
        except IndexError:
            tile = WALL
        if tile == WALL:
            return MoveResult(origin, origin, self.walk)
        collected = tile == COLLECTIBLE
        if collected:
            self.collectibles -= 1
            self._grid[target[1]][target[0]] = FLOOR
            tile = FLOOR
        self.walk += 1
        finished = self.collectibles == 0 and tile == EXIT
        self.player = target
        return MoveResult(
            origin, target, self.walk, moved=True, collected=collected, finished=finished
        )

    def handle_key(self, key_code: int) -> MoveResult:
        """Apply a key press; unknown keys change nothing."""
        try:
            key = Key(key_code)
        except ValueError:
            return MoveResult(self.player, self.player, self.walk)
        if key is Key.ESCAPE:
            return MoveResult(self.player, self.player, self.walk, quit=True)
        return self.move(*_STEPS[key])