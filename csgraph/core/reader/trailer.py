"""Trailer parser: view paths, source files and include directories."""

from __future__ import annotations

import logging

from csgraph.core.models import Trailer
from csgraph.core.reader.buffer import ByteCursor

log = logging.getLogger(__name__)


def _count(line: str) -> int:
    try:
        return max(int(line.strip() or 0), 0)
    except ValueError:
        return 0


def _read_list(cursor: ByteCursor, count: int, label: str) -> list[str]:
    items = []
    for i in range(count):
        if cursor.at_end:
            log.debug("Trailer ends after %d of %d %s", i, count, label)
            break
        item = cursor.read_line()
        log.debug("[%d of %d] %s: %s", i + 1, count, label, item)
        items.append(item)
    return items


def parse_trailer(cursor: ByteCursor) -> Trailer:
    """Parse the trailer starting at the cursor.

    Layout::

        <n viewpaths>
        <viewpath> * n
        <n sources>
        <source> * n
        <n includes>
        <string space used by includes>
        <include> * n
    """
    if cursor.at_end:
        return Trailer()

    viewpaths = _read_list(cursor, _count(cursor.read_line()), "Viewpath")
    sources = _read_list(cursor, _count(cursor.read_line()), "Source")
    n_includes = _count(cursor.read_line())
    cursor.read_line()
    includes = _read_list(cursor, n_includes, "Include")

    return Trailer(viewpaths=viewpaths, sources=sources, includes=includes)
