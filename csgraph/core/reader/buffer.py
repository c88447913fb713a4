"""Byte buffer cursor and database acquisition."""

from __future__ import annotations

import logging
import mmap
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from csgraph.core.exceptions import DatabaseReadError

log = logging.getLogger(__name__)

_NEWLINE = ord("\n")


class ByteCursor:
    """Line reader over an immutable byte buffer.

    Reads stop at ``end``, so a cursor bounded by the trailer offset never
    returns trailer lines.
    """

    __slots__ = ("_data", "offset", "end", "_line_limit", "truncated")

    def __init__(
        self,
        data: bytes | mmap.mmap,
        offset: int = 0,
        end: int | None = None,
        line_limit: int | None = None,
    ) -> None:
        self._data = data
        self.offset = offset
        self.end = len(data) if end is None else min(end, len(data))
        self._line_limit = line_limit
        self.truncated = 0

    @property
    def at_end(self) -> bool:
        return self.offset >= self.end

    def read_line(self) -> str:
        """Read up to the next newline and step past it.

        Returns "" at the end of the buffer. With a line limit, longer lines
        are consumed but read as "".
        """
        start = self.offset
        if start >= self.end:
            return ""

        stop = self._data.find(b"\n", start, self.end)
        if stop == -1:
            stop = self.end
        self.offset = stop + 1

        length = stop - start
        if self._line_limit is not None and length > self._line_limit:
            self.truncated += 1
            log.debug("Dropped %d byte line at offset %d", length, start)
            return ""
        return bytes(self._data[start:stop]).decode("utf-8", errors="replace")

    def rewind(self, offset: int) -> None:
        self.offset = offset

    def __repr__(self) -> str:
        return f"ByteCursor(offset={self.offset}, end={self.end})"


@contextmanager
def open_buffer(path: Path) -> Iterator[bytes | mmap.mmap]:
    """Map a database file read-only for the duration of the block.

    The mapping and the file are released on every exit path.
    """
    try:
        handle = path.open("rb")
    except OSError as e:
        raise DatabaseReadError(f"Cannot open {path}: {e}") from e

    with handle:
        try:
            size = handle.seek(0, 2)
            handle.seek(0)
            # mmap refuses empty files.
            mapped = mmap.mmap(handle.fileno(), 0, access=mmap.ACCESS_READ) if size else None
        except OSError as e:
            raise DatabaseReadError(f"Cannot map {path}: {e}") from e

        if mapped is None:
            yield b""
            return

        log.debug("Mapped %s (%d bytes)", path, size)
        try:
            yield mapped
        finally:
            mapped.close()
