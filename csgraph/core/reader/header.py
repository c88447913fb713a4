"""Header line parser."""

from __future__ import annotations

from csgraph.core.exceptions import MalformedHeaderError
from csgraph.core.models import Header
from csgraph.core.reader.buffer import ByteCursor

MAGIC = "cscope"


def parse_header(cursor: ByteCursor) -> Header:
    """Parse ``cscope <version> <dir> [-c] [-T] [-q] <trailer>``.

    A ``-q`` option does not consume the symbol count that cscope writes
    after it, so in inverted-index databases that count is read as the
    trailer offset.
    """
    line = cursor.read_line()
    symbols_start = cursor.offset
    tokens = line.split()

    if not tokens or not tokens[0].startswith(MAGIC):
        raise MalformedHeaderError("This does not appear to be a cscope database")
    if len(tokens) < 3:
        raise MalformedHeaderError(f"Truncated header: {line!r}")

    try:
        version = int(tokens[1])
    except ValueError as e:
        raise MalformedHeaderError(f"Bad version in header: {tokens[1]!r}") from e

    flags = {"c": False, "T": False, "q": False}
    trailer_offset: int | None = None
    for tok in tokens[3:]:
        if tok.startswith("-") and len(tok) == 2:
            if tok[1] not in flags:
                raise MalformedHeaderError(f"Unrecognized header option {tok}")
            flags[tok[1]] = True
            continue
        try:
            trailer_offset = int(tok)
        except ValueError as e:
            raise MalformedHeaderError(f"Bad trailer offset in header: {tok!r}") from e
        break

    if trailer_offset is None:
        raise MalformedHeaderError("Header has no trailer offset")
    if trailer_offset < 0:
        raise MalformedHeaderError(f"Negative trailer offset {trailer_offset}")

    return Header(
        version=version,
        directory=tokens[2],
        trailer_offset=trailer_offset,
        symbols_start=symbols_start,
        ascii_only=flags["c"],
        prefix_match=flags["T"],
        inverted_index=flags["q"],
    )
