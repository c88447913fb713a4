"""Defaults and reader options."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

# Line buffer size of fixed-buffer cscope readers.
LEGACY_LINE_CAPACITY = 1024

DEFAULT_DEPTH = 5
DEFAULT_DATABASE_NAME = "cscope.out"
DATABASE_ENV_VAR = "CSGRAPH_DATABASE"


@dataclass(frozen=True)
class ReaderOptions:
    """Options for reading a database.

    legacy_line_limit: when set, lines longer than this many bytes are read as
        empty lines, matching output of tools built on fixed line buffers.
    """

    legacy_line_limit: int | None = None

    @classmethod
    def legacy(cls) -> ReaderOptions:
        return cls(legacy_line_limit=LEGACY_LINE_CAPACITY)


def get_default_db_path(root: Path) -> Path:
    """Get the database path: $CSGRAPH_DATABASE, else root/cscope.out."""
    override = os.environ.get(DATABASE_ENV_VAR)
    if override:
        return Path(override)
    return root / DEFAULT_DATABASE_NAME
