"""Symbol section parser.

Each source file in the database is stored as::

    <mark><file path>
    <empty line>

followed, for each source line containing a symbol, by::

    <line number><blank><non-symbol text>
    <optional mark><symbol>
    <non-symbol text>
    repeat above 2 lines as necessary
    <empty line>

Only function definitions (``$``) and function calls (`````) are kept.
"""

from __future__ import annotations

import logging
import re

from csgraph.core.models import FileRecord, SymbolKind
from csgraph.core.reader.buffer import ByteCursor
from csgraph.core.symbols import SymbolTable

log = logging.getLogger(__name__)

FILE_MARK = "@"

# Every mark cscope writes after a tab on a symbol line.
MARKS = frozenset("@$`}#)~=;ceglmpstu")

_KINDS = {kind.value: kind for kind in SymbolKind}

_LINENO = re.compile(r"[0-9]+")


def _leading_int(text: str) -> int:
    """Leading ASCII digits of text, 0 when there are none."""
    match = _LINENO.match(text)
    return int(match.group()) if match else 0


def _split_mark(line: str) -> tuple[str | None, str]:
    """Split a symbol line into its mark and symbol text."""
    text = line.lstrip(" ")
    if len(text) >= 2 and text[0] == "\t" and text[1] in MARKS:
        return text[1], text[2:]
    return None, text


def read_symbol_group(table: SymbolTable, cursor: ByteCursor, lineno: int) -> None:
    """Read the symbol lines for one source line, up to the empty line."""
    while not cursor.at_end:
        line = cursor.read_line()
        if not line:
            break

        mark, text = _split_mark(line)
        kind = _KINDS.get(mark) if mark else None
        if kind is None:
            continue

        # Mark-only lines continue the previous symbol.
        if not text or (len(text) == 1 and text in MARKS and not text.isalnum()):
            log.debug("%s:%d: empty %r symbol", table.path, lineno, mark)
            continue

        table.add(text, kind, lineno)

        # <non-symbol text>
        cursor.read_line()


def read_file_block(cursor: ByteCursor) -> FileRecord | None:
    """Read one ``<mark><file>`` block.

    Stops in front of the next file line, which is left for the next call.
    Returns None for a block without a file name.
    """
    header = cursor.read_line().lstrip()
    mark, path = header[:1], header[1:]
    if mark and mark != FILE_MARK:
        log.debug("Unexpected file mark %r for %s", mark, path)

    table = SymbolTable(path, mark or FILE_MARK)

    # <empty line>
    cursor.read_line()

    while not cursor.at_end:
        start = cursor.offset
        line = cursor.read_line().lstrip()
        if line.startswith(FILE_MARK):
            cursor.rewind(start)
            break
        read_symbol_group(table, cursor, _leading_int(line))

    if not path:
        return None
    log.debug("Loaded %s: %d functions", path, len(table))
    return table.to_record()


def read_files(cursor: ByteCursor) -> list[FileRecord]:
    """Read file blocks until the cursor reaches its end."""
    files: list[FileRecord] = []
    while not cursor.at_end:
        record = read_file_block(cursor)
        if record is not None:
            files.append(record)
    return files
