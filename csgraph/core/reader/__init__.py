"""
cscope database reader.

Turns the bytes of a cscope.out file into per-file symbol records:

    - header.py: the ``cscope <version> <dir> ... <trailer>`` line
    - symbols.py: file blocks and symbol groups up to the trailer offset
    - trailer.py: view paths, source files and include directories
    - buffer.py: line cursor over the bytes and read-only file mapping

Usage:
    with open_buffer(Path("cscope.out")) as data:
        db = read_database(data)
"""

from __future__ import annotations

import logging
import mmap
from pathlib import Path

from csgraph.core.config import ReaderOptions
from csgraph.core.models import CscopeDatabase
from csgraph.core.reader.buffer import ByteCursor, open_buffer
from csgraph.core.reader.header import parse_header
from csgraph.core.reader.symbols import read_files
from csgraph.core.reader.trailer import parse_trailer

log = logging.getLogger(__name__)


def read_database(
    data: bytes | bytearray | memoryview | mmap.mmap,
    options: ReaderOptions | None = None,
) -> CscopeDatabase:
    """Parse a whole database held in memory.

    Raises:
        MalformedHeaderError: the first line is not a cscope header.
    """
    options = options or ReaderOptions()
    if isinstance(data, (bytearray, memoryview)):
        data = bytes(data)

    limit = options.legacy_line_limit
    header_cursor = ByteCursor(data, line_limit=limit)
    header = parse_header(header_cursor)
    log.debug(
        "cscope database version %d for %s, trailer at %d",
        header.version,
        header.directory,
        header.trailer_offset,
    )

    trailer_cursor = ByteCursor(data, offset=header.trailer_offset, line_limit=limit)
    trailer = parse_trailer(trailer_cursor)

    symbols = ByteCursor(
        data, offset=header.symbols_start, end=header.trailer_offset, line_limit=limit
    )
    files = read_files(symbols)

    db = CscopeDatabase(
        header=header,
        trailer=trailer,
        files=files,
        truncated_lines=header_cursor.truncated + symbols.truncated + trailer_cursor.truncated,
    )
    log.debug("Read %r", db)
    return db


def load_database(path: Path, options: ReaderOptions | None = None) -> CscopeDatabase:
    """Read a database file. The file is only held open while parsing.

    Raises:
        DatabaseReadError: the file cannot be opened or mapped.
        MalformedHeaderError: the file is not a cscope database.
    """
    with open_buffer(path) as data:
        return read_database(data, options)


__all__ = [
    "ByteCursor",
    "load_database",
    "open_buffer",
    "read_database",
]
