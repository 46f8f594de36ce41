"""Reading of XPM pixmaps into plain pixel grids."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from typing import Iterable, Iterator

from peasantquest.colors import lookup_color

# Pixel value stored for the "None" colour: the alpha byte marks transparency.
TRANSPARENT = 0xFF000000

_WORD_SEPARATORS = re.compile(r"[ \t]+")
_LEADING_INT = re.compile(r"[ \t\n\v\f\r]*([+-]?\d+)")
_LEADING_HEX = re.compile(r"\s*([+-]?(?:0[xX])?[0-9a-fA-F]+)")
_QUOTED = re.compile(r'"([^"]*)"')
_NAME_LIMIT = 63


class XpmError(ValueError):
    """Raised when XPM data cannot be read or decoded."""


@dataclass(frozen=True)
class XpmImage:
    """A decoded image: ``pixels`` holds 0xAARRGGBB values row by row."""

    width: int
    height: int
    pixels: tuple[int, ...]

    def pixel(self, x: int, y: int) -> int:
        """Return the colour at column ``x`` of row ``y``."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height} image")
        return self.pixels[y * self.width + x]


def split_words(text: str) -> list[str]:
    """Split ``text`` on runs of spaces and tabs, dropping empty words."""
    return [word for word in _WORD_SEPARATORS.split(text) if word]


def _blank_unquoted(text: str, opener: str, closer: str) -> str:
    """Replace every ``opener ... closer`` span outside double quotes with spaces."""
    pieces: list[str] = []
    quoted = False
    pos = 0
    size = len(text)
    while pos < size:
        char = text[pos]
        if char == '"':
            quoted = not quoted
        if not quoted and text.startswith(opener, pos):
            close = text.find(closer, pos + len(opener))
            stop = size if close == -1 else close + len(closer)
            pieces.append(" " * (stop - pos))
            pos = stop
            continue
        pieces.append(char)
        pos += 1
    return "".join(pieces)


def strip_comments(text: str) -> str:
    """Blank out C comments that lie outside quoted strings, keeping the length."""
    text = _blank_unquoted(text, "/*", "*/")
    return _blank_unquoted(text, "//", "\n")


def _atoi(word: str) -> int:
    match = _LEADING_INT.match(word)
    return int(match.group(1)) if match else 0


def text_rgb(name: str, end: str | None) -> int:
    """Resolve a colour specification to 0xRRGGBB.

    ``#`` introduces a hexadecimal value; otherwise ``name`` (joined with
    ``end`` when given) is looked up among the named colours. Unknown names
    give 0 and ``None`` gives -1.
    """
    if name.startswith("#"):
        match = _LEADING_HEX.match(name[1:])
        return int(match.group(1), 16) if match else 0
    if end is not None:
        name = f"{name} {end}"[:_NAME_LIMIT]
    value = lookup_color(name)
    return 0 if value is None else value


def _next_line(lines: Iterator[str], what: str) -> str:
    line = next(lines, None)
    if line is None:
        raise XpmError(f"missing {what}")
    return line


def _read_palette(lines: Iterator[str], count: int, cpp: int) -> dict[str, int]:
    palette: dict[str, int] = {}
    for _ in range(count):
        line = _next_line(lines, "colour definition")
        words = split_words(line[cpp:])
        try:
            marker = words.index("c")
        except ValueError:
            raise XpmError(f"no colour key in {line!r}") from None
        if marker + 1 >= len(words):
            raise XpmError(f"no colour after key in {line!r}")
        end = words[marker + 2] if marker + 2 < len(words) else None
        value = text_rgb(words[marker + 1], end)
        key = line[:cpp]
        if cpp <= 2:
            palette[key] = value
        else:
            palette.setdefault(key, value)
    return palette


def parse_xpm(lines: Iterable[str]) -> XpmImage:
    """Decode the quoted strings of an XPM image, header first."""
    rows = iter(lines)
    words = split_words(_next_line(rows, "header"))
    if len(words) < 4:
        raise XpmError("XPM header needs width, height, colours and chars per pixel")
    width, height, ncolors, cpp = (_atoi(word) for word in words[:4])
    if min(width, height, ncolors, cpp) <= 0:
        raise XpmError(f"invalid XPM header {words[:4]!r}")

    palette = _read_palette(rows, ncolors, cpp)

    pixels: list[int] = []
    span = width * cpp
    for _ in range(height):
        line = _next_line(rows, "pixel row")
        if len(line) < span:
            raise XpmError(f"pixel row {line!r} shorter than {width} pixels")
        for start in range(0, span, cpp):
            value = palette.get(line[start:start + cpp], 0)
            pixels.append(TRANSPARENT if value == -1 else value)
    return XpmImage(width, height, tuple(pixels))


def parse_xpm_text(text: str) -> XpmImage:
    """Decode the text of an XPM file."""
    return parse_xpm(_QUOTED.findall(strip_comments(text)))


def load_xpm(path: str | os.PathLike[str]) -> XpmImage:
    """Read and decode the XPM file at ``path``."""
    try:
        with open(path, encoding="latin-1") as handle:
            text = handle.read()
    except OSError as exc:
        raise XpmError(f"cannot read {os.fspath(path)}") from exc
    return parse_xpm_text(text)