"""Build a CallGraphIndex from file records."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

from csgraph.core.graph.base import CallGraphIndex
from csgraph.core.graph.models import KeyMode
from csgraph.core.models import FileRecord

log = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]

PROGRESS_INTERVAL = 1000


def build_index(
    files: Sequence[FileRecord],
    mode: KeyMode = KeyMode.NAME,
    on_progress: ProgressCallback | None = None,
) -> CallGraphIndex:
    """Index every definition of every file. O(definitions + calls).

    Files are processed in order, so with ``KeyMode.NAME`` the last file
    defining a name wins.

    Args:
        files: File records from the reader
        mode: Index key space
        on_progress: Optional callback (definitions done, total definitions)
    """
    index = CallGraphIndex(mode)
    total = sum(f.function_count for f in files)
    done = 0

    for record in files:
        for definition in record.definitions.values():
            if mode is KeyMode.NAME and definition.name in index:
                log.debug("%s redefines %s", record.path, definition.name)
            index.add_definition(definition)
            done += 1
            if on_progress and done % PROGRESS_INTERVAL == 0:
                on_progress(done, total)

    if on_progress:
        on_progress(done, total)

    log.debug("Built %r", index)
    return index
