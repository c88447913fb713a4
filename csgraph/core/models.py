"""Data models for csgraph."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class SymbolKind(Enum):
    """Symbol marks that take part in the call graph."""

    DEFINITION = "$"
    CALL = "`"


@dataclass(frozen=True)
class Symbol:
    """A function definition or call site read from the database."""

    name: str
    kind: SymbolKind
    line: int
    file: str


@dataclass
class Definition:
    """A function definition and the distinct names it calls.

    The first call seen for a callee name is kept; later calls to the same
    name are dropped along with their line numbers.
    """

    symbol: Symbol
    callees: dict[str, Symbol] = field(default_factory=dict)

    @property
    def name(self) -> str:
        return self.symbol.name

    def add_callee(self, call: Symbol) -> bool:
        """Record a call site. Returns False if the name was already recorded."""
        if call.name in self.callees:
            return False
        self.callees[call.name] = call
        return True

    def callee_names(self) -> list[str]:
        """Distinct callee names in first-seen order."""
        return list(self.callees)


@dataclass
class FileRecord:
    """A source file entry and the functions defined in it."""

    path: str
    mark: str = "@"
    definitions: dict[str, Definition] = field(default_factory=dict)

    @property
    def function_count(self) -> int:
        return len(self.definitions)


@dataclass(frozen=True)
class Header:
    """The first line of a cscope database.

    Looks like ``cscope <version> <dir> [-c] [-q] [-T] <trailer offset>``.
    """

    version: int
    directory: str
    trailer_offset: int
    symbols_start: int
    ascii_only: bool = False
    prefix_match: bool = False
    inverted_index: bool = False


@dataclass
class Trailer:
    """Lists stored after the symbol section."""

    viewpaths: list[str] = field(default_factory=list)
    sources: list[str] = field(default_factory=list)
    includes: list[str] = field(default_factory=list)


@dataclass
class CscopeDatabase:
    """Everything read from one cscope database."""

    header: Header
    trailer: Trailer
    files: list[FileRecord]
    truncated_lines: int = 0

    @property
    def function_count(self) -> int:
        return sum(f.function_count for f in self.files)

    def __repr__(self) -> str:
        return (
            f"CscopeDatabase(files={len(self.files)}, functions={self.function_count}, "
            f"sources={len(self.trailer.sources)})"
        )
