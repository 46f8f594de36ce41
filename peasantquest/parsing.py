"""Validation of map rows before a game starts."""

from __future__ import annotations

import os
from collections import Counter
from dataclasses import dataclass
from typing import Sequence

WALL = "1"
FLOOR = "0"
COLLECTIBLE = "C"
EXIT = "E"
PLAYER = "P"
ALLOWED = frozenset((FLOOR, WALL, COLLECTIBLE, EXIT, PLAYER))


class MapError(ValueError):
    """Raised when a map breaks one of the rules of the game."""


@dataclass(frozen=True)
class MapInfo:
    """Size and element counts of a validated map."""

    width: int
    height: int
    collectibles: int
    exits: int
    players: int


def check_name(path: str | os.PathLike[str]) -> None:
    """Reject short map names that do not look like ``.ber`` files.

    Only names under five characters are examined, and a name passes as
    soon as any one of its last three characters matches ``.ber``.
    """
    name = os.fspath(path)
    if (
        len(name) < 5
        and name[-1:] != "e"
        and name[-2:-1] != "b"
        and name[-3:-2] != "."
    ):
        raise MapError("bad map extension or name")


def check_elements(rows: Sequence[str]) -> tuple[int, int]:
    """Check that every tile is known; return ``(height, width)``.

    The width is that of the last row.
    """
    for row in rows:
        if any(char not in ALLOWED for char in row):
            raise MapError("bad elements")
    width = len(rows[-1]) if rows else 0
    return len(rows), width


def count_elements(rows: Sequence[str]) -> tuple[int, int, int]:
    """Return ``(collectibles, exits, players)``.

    A map needs at least one collectible, at least one exit and exactly
    one player.
    """
    counts = Counter(char for row in rows for char in row)
    collectibles, exits, players = counts[COLLECTIBLE], counts[EXIT], counts[PLAYER]
    if collectibles < 1 or exits < 1 or players != 1:
        raise MapError("bad number of elements")
    return collectibles, exits, players


def check_rectangular(rows: Sequence[str], width: int) -> None:
    """Check that every row is ``width`` tiles long."""
    if any(len(row) != width for row in rows):
        raise MapError("map not rectangular")


def check_walls(rows: Sequence[str], width: int, height: int) -> None:
    """Check that the map is closed by walls on all four sides."""
    if not rows:
        return
    top, bottom = rows[0], rows[height - 1]
    for column, char in enumerate(top):
        if char != WALL or bottom[column:column + 1] != WALL:
            raise MapError("bad wall")
    for row in rows:
        if row[:1] != WALL or (width < 1 or row[width - 1:width] != WALL):
            raise MapError("bad wall")


def validate_map(path: str | os.PathLike[str], rows: Sequence[str]) -> MapInfo:
    """Run every check on a map in order and describe the map."""
    rows = list(rows)
    check_name(path)
    height, width = check_elements(rows)
    collectibles, exits, players = count_elements(rows)
    check_rectangular(rows, width)
    check_walls(rows, width, height)
    return MapInfo(width, height, collectibles, exits, players)