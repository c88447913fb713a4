"""Data models for graph queries."""

from __future__ import annotations

from enum import Enum
from typing import NamedTuple


class CallEdge(NamedTuple):
    """One ``caller -> callee`` edge of a query result."""

    caller: str
    callee: str

    def __str__(self) -> str:
        return f"{self.caller} -> {self.callee}"


class KeyMode(Enum):
    """How definitions from different files share index entries."""

    # Bare function name; a later file's definition replaces an earlier one.
    NAME = "name"
    # One entry per (file, name); lookups by name merge all of them.
    QUALIFIED = "qualified"


class TraversalPolicy(Enum):
    """How traversals treat nodes they have already expanded."""

    # Depth is the only bound; cycles repeat edges once per level.
    BOUNDED_REPEAT = "repeat"
    # Every edge at most once.
    DEDUPLICATED = "dedup"


class Direction(Enum):
    """Query direction and its digraph title."""

    CALLERS = "Callers to"
    CALLEES = "Callees of"

    @property
    def label(self) -> str:
        return self.value
