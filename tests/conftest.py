"""Shared fixtures: build cscope databases in memory."""

from collections.abc import Callable, Sequence

import pytest

# (line number, symbol lines) where a symbol line is "<mark><text>" or plain text.
Group = tuple[int, Sequence[str]]
FileEntry = tuple[str, Sequence[Group]]

SYMBOL_MARKS = "@$`}#)~=;ceglmpstu"


def build_cscope(
    files: Sequence[FileEntry],
    sources: Sequence[str] = (),
    viewpaths: Sequence[str] = (".",),
    includes: Sequence[str] = (),
    options: str = "-c",
) -> bytes:
    """Lay out a database the way ``cscope -b -c`` writes it."""
    body: list[str] = []
    for path, groups in files:
        body.append(f"\t@{path}\n")
        body.append("\n")
        for lineno, symbols in groups:
            body.append(f"{lineno} \n")
            for sym in symbols:
                if sym[:1] in SYMBOL_MARKS:
                    body.append(f"\t{sym}\n")
                else:
                    body.append(f"{sym}\n")
                body.append(" ();\n")
            body.append("\n")
    # cscope ends the symbol section with a nameless file.
    body.append("\t@\n")

    trailer = [str(len(viewpaths)), *viewpaths, str(len(sources)), *sources]
    trailer += [str(len(includes)), str(sum(len(i) + 1 for i in includes)), *includes]

    option_part = f" {options}" if options else ""
    header_len = len(f"cscope 15 /src{option_part} {0:010d}\n")
    offset = header_len + len("".join(body).encode())
    header = f"cscope 15 /src{option_part} {offset:010d}\n"
    return (header + "".join(body) + "\n".join(trailer) + "\n").encode()


@pytest.fixture
def make_db() -> Callable[..., bytes]:
    """Factory for database bytes, see build_cscope()."""
    return build_cscope


@pytest.fixture
def sample_db() -> bytes:
    """Two files: main.c calls into util.c, util.c has a cycle.

    main -> parse, run; parse -> lex; run -> loop; loop -> run
    """
    return build_cscope(
        [
            (
                "main.c",
                [
                    (1, ["~<stdio.h"]),
                    (3, ["$main"]),
                    (5, ["`parse", "argv"]),
                    (6, ["`run", "`parse"]),
                ],
            ),
            (
                "util.c",
                [
                    (10, ["$parse"]),
                    (11, ["`lex"]),
                    (20, ["$run"]),
                    (21, ["`loop"]),
                    (30, ["$loop"]),
                    (31, ["`run"]),
                    (40, ["$lex"]),
                ],
            ),
        ],
        sources=["main.c", "util.c"],
        includes=["/usr/include"],
    )
