"""Reading of map files into text and rows."""

from __future__ import annotations

import os
from typing import AnyStr, Iterator, Protocol

BUFFER_SIZE = 1000


class _Readable(Protocol[AnyStr]):
    def read(self, size: int = ..., /) -> AnyStr: ...


class MapReadError(OSError):
    """Raised when a map file cannot be read or holds nothing."""


def iter_lines(stream: _Readable[AnyStr]) -> Iterator[AnyStr]:
    """Yield the lines of a text or binary stream, each with its ``\\n``.

    Only ``\\n`` separates lines; a last line without one is yielded as is.
    """
    buffer = stream.read(0)
    newline = "\n" if isinstance(buffer, str) else b"\n"
    while True:
        chunk = stream.read(BUFFER_SIZE)
        if not chunk:
            break
        buffer += chunk
        start = 0
        while (end := buffer.find(newline, start)) != -1:
            yield buffer[start:end + 1]
            start = end + 1
        buffer = buffer[start:]
    if buffer:
        yield buffer


def split_rows(text: str) -> list[str]:
    """Split map text on ``\\n``, dropping empty rows."""
    return [row for row in text.split("\n") if row]


def read_map(path: str | os.PathLike[str]) -> str:
    """Return the whole text of the map file at ``path``."""
    try:
        with open(path, "rb") as stream:
            data = b"".join(iter_lines(stream))
    except OSError as exc:
        raise MapReadError(f"bad map path: {os.fspath(path)}") from exc
    if not data:
        raise MapReadError(f"bad map path: {os.fspath(path)} is empty")
    return data.decode("latin-1")