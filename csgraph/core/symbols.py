"""Per-file symbol table built while reading a file block."""

from __future__ import annotations

import logging

from csgraph.core.models import Definition, FileRecord, Symbol, SymbolKind

log = logging.getLogger(__name__)


class SymbolTable:
    """Collects the definitions of one file and attaches calls to them.

    Calls belong to the most recently defined function in the same file.
    The cursor lives only as long as the table, so it starts empty for
    every file block.
    """

    def __init__(self, path: str, mark: str = "@") -> None:
        self.path = path
        self.mark = mark
        self._definitions: dict[str, Definition] = {}
        self._current: Definition | None = None

    @property
    def current_definition(self) -> Definition | None:
        return self._current

    def add(self, name: str, kind: SymbolKind, line: int) -> bool:
        """Add a symbol. Returns False if it was dropped."""
        symbol = Symbol(name=name, kind=kind, line=line, file=self.path)
        match symbol.kind:
            case SymbolKind.DEFINITION:
                self.define(symbol)
                return True
            case SymbolKind.CALL:
                return self.call(symbol)

    def define(self, symbol: Symbol) -> Definition:
        definition = Definition(symbol=symbol)
        self._definitions[symbol.name] = definition
        self._current = definition
        return definition

    def call(self, symbol: Symbol) -> bool:
        if self._current is None:
            # Usually a macro expanded outside any function body.
            log.debug("%s:%d: call to %s outside a function", self.path, symbol.line, symbol.name)
            return False
        return self._current.add_callee(symbol)

    def __len__(self) -> int:
        return len(self._definitions)

    def to_record(self) -> FileRecord:
        return FileRecord(path=self.path, mark=self.mark, definitions=dict(self._definitions))
