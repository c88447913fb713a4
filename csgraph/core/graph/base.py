"""Call graph index: function name to distinct direct callees."""

from __future__ import annotations

from csgraph.core.graph.models import KeyMode
from csgraph.core.models import Definition


class CallGraphIndex:
    """Read-only mapping from function name to the names it calls.

    In ``KeyMode.NAME`` a definition replaces any earlier definition of the
    same name, wherever it came from. Callers and callees of the two are not
    merged. ``KeyMode.QUALIFIED`` keeps one entry per (file, name) and merges
    them when looked up by name.
    """

    __slots__ = ("_mode", "_by_name", "_by_file")

    def __init__(self, mode: KeyMode = KeyMode.NAME) -> None:
        self._mode = mode
        self._by_name: dict[str, list[str]] = {}
        self._by_file: dict[str, dict[str, list[str]]] = {}

    @property
    def mode(self) -> KeyMode:
        return self._mode

    def add_definition(self, definition: Definition) -> None:
        """Add or replace the entry for a definition. O(callees)."""
        name = definition.name
        callees = definition.callee_names()

        if self._mode is KeyMode.NAME:
            self._by_name[name] = callees
            return

        per_file = self._by_file.setdefault(name, {})
        per_file[definition.symbol.file] = callees
        merged: list[str] = []
        for names in per_file.values():
            merged.extend(n for n in names if n not in merged)
        self._by_name[name] = merged

    def callees_of(self, name: str) -> list[str]:
        """Direct callees in first-seen order; empty for unknown names."""
        return self._by_name.get(name, [])

    def calls(self, caller: str, callee: str) -> bool:
        """Does caller call callee directly?"""
        return callee in self.callees_of(caller)

    def names(self) -> list[str]:
        """Every defined function name, in insertion order."""
        return list(self._by_name)

    def definitions_of(self, name: str) -> list[str]:
        """Files defining name. Only tracked in qualified mode."""
        return list(self._by_file.get(name, {}))

    @property
    def num_edges(self) -> int:
        return sum(len(callees) for callees in self._by_name.values())

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __len__(self) -> int:
        return len(self._by_name)

    def __repr__(self) -> str:
        return f"CallGraphIndex(functions={len(self)}, edges={self.num_edges}, mode={self._mode.value})"
