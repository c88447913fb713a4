"""Unit tests for the call graph index, traversal and rendering."""

import io

import pytest

from csgraph.core import FileRecord, SymbolKind, SymbolTable
from csgraph.core.graph import (
    CallEdge,
    CallGraphIndex,
    Direction,
    KeyMode,
    TraversalPolicy,
    build_index,
    callees,
    callers,
    render_dot,
    write_graphs,
)

DEDUP = TraversalPolicy.DEDUPLICATED


def make_file(path: str, functions: dict[str, list[str]]) -> FileRecord:
    """Create a file record: function name -> names it calls."""
    table = SymbolTable(path)
    line = 1
    for name, calls in functions.items():
        table.add(name, SymbolKind.DEFINITION, line)
        for call in calls:
            line += 1
            table.add(call, SymbolKind.CALL, line)
        line += 10
    return table.to_record()


def edges(*pairs: str) -> list[CallEdge]:
    """edges("A>B", "B>C") -> [CallEdge("A", "B"), CallEdge("B", "C")]."""
    return [CallEdge(*pair.split(">")) for pair in pairs]


@pytest.fixture
def linear_index() -> CallGraphIndex:
    """A -> B -> C -> D."""
    return build_index([make_file("a.c", {"A": ["B"], "B": ["C"], "C": ["D"], "D": []})])


@pytest.fixture
def branching_index() -> CallGraphIndex:
    """A -> B -> D, A -> C -> D (diamond shape)."""
    return build_index([make_file("a.c", {"A": ["B", "C"], "B": ["D"], "C": ["D"], "D": []})])


@pytest.fixture
def cyclic_index() -> CallGraphIndex:
    """A -> B -> C -> A."""
    return build_index([make_file("a.c", {"A": ["B"], "B": ["C"], "C": ["A"]})])


class TestSymbolTable:
    """Tests for per-file symbol collection."""

    def test_call_without_definition_is_dropped(self) -> None:
        table = SymbolTable("a.c")
        assert table.add("printf", SymbolKind.CALL, 1) is False
        assert table.current_definition is None
        assert len(table) == 0

    def test_calls_go_to_latest_definition(self) -> None:
        table = SymbolTable("a.c")
        table.add("f", SymbolKind.DEFINITION, 1)
        table.add("x", SymbolKind.CALL, 2)
        table.add("g", SymbolKind.DEFINITION, 5)
        table.add("y", SymbolKind.CALL, 6)

        record = table.to_record()
        assert record.definitions["f"].callee_names() == ["x"]
        assert record.definitions["g"].callee_names() == ["y"]

    def test_duplicate_call_is_noop(self) -> None:
        table = SymbolTable("a.c")
        table.add("f", SymbolKind.DEFINITION, 1)
        assert table.add("x", SymbolKind.CALL, 2) is True
        assert table.add("x", SymbolKind.CALL, 3) is False

        definition = table.to_record().definitions["f"]
        assert definition.callees["x"].line == 2


class TestCallGraphIndex:
    """Tests for index construction."""

    def test_entries(self, branching_index: CallGraphIndex) -> None:
        assert branching_index.callees_of("A") == ["B", "C"]
        assert branching_index.names() == ["A", "B", "C", "D"]
        assert branching_index.num_edges == 4

    def test_leaf_has_empty_entry(self, linear_index: CallGraphIndex) -> None:
        assert "D" in linear_index
        assert linear_index.callees_of("D") == []

    def test_undefined_callee_is_absent(self) -> None:
        index = build_index([make_file("a.c", {"main": ["printf"]})])
        assert "printf" not in index
        assert index.callees_of("printf") == []
        assert len(index) == 1

    def test_later_file_replaces_same_name(self) -> None:
        """Same-named functions are not merged: the last file processed wins."""
        index = build_index(
            [
                make_file("one.c", {"foo": ["a"]}),
                make_file("two.c", {"foo": ["b"]}),
            ]
        )
        assert index.callees_of("foo") == ["b"]
        assert callees(index, "foo", 5) == edges("foo>b")
        assert index.definitions_of("foo") == []

    def test_qualified_mode_merges_same_name(self) -> None:
        index = build_index(
            [
                make_file("one.c", {"foo": ["a", "c"]}),
                make_file("two.c", {"foo": ["b", "a"]}),
            ],
            mode=KeyMode.QUALIFIED,
        )
        assert index.callees_of("foo") == ["a", "c", "b"]
        assert index.definitions_of("foo") == ["one.c", "two.c"]
        assert index.mode is KeyMode.QUALIFIED

    def test_progress_callback(self) -> None:
        calls: list[tuple[int, int]] = []
        build_index(
            [make_file("a.c", {"f": [], "g": []}), make_file("b.c", {"h": []})],
            on_progress=lambda done, total: calls.append((done, total)),
        )
        assert calls[-1] == (3, 3)


class TestCallees:
    """Tests for callee traversal."""

    def test_depth_zero(self, linear_index: CallGraphIndex) -> None:
        assert callees(linear_index, "A", 0) == []
        assert callees(linear_index, "A", 0, DEDUP) == []

    def test_depth_one(self, branching_index: CallGraphIndex) -> None:
        assert callees(branching_index, "A", 1) == edges("A>B", "A>C")

    def test_respects_depth(self, linear_index: CallGraphIndex) -> None:
        assert callees(linear_index, "A", 2) == edges("A>B", "B>C")

    def test_acyclic_full_depth(self, linear_index: CallGraphIndex) -> None:
        assert callees(linear_index, "A", 10) == edges("A>B", "B>C", "C>D")

    def test_branching_depth_first(self, branching_index: CallGraphIndex) -> None:
        assert callees(branching_index, "A", 5) == edges("A>B", "B>D", "A>C", "C>D")

    def test_unknown_name(self, linear_index: CallGraphIndex) -> None:
        assert callees(linear_index, "nope", 5) == []

    def test_cycle_repeats_edges(self, cyclic_index: CallGraphIndex) -> None:
        assert callees(cyclic_index, "A", 5) == edges("A>B", "B>C", "C>A", "A>B", "B>C")

    def test_cycle_deduplicated(self, cyclic_index: CallGraphIndex) -> None:
        assert callees(cyclic_index, "A", 5, DEDUP) == edges("A>B", "B>C", "C>A")

    def test_deduplicated_reexpands_with_more_depth(self) -> None:
        """C is first reached at depth 2 via B, then at depth 1 via A."""
        index = build_index([make_file("a.c", {"A": ["B", "C"], "B": ["C"], "C": ["D"]})])

        assert callees(index, "A", 2, DEDUP) == edges("A>B", "B>C", "A>C", "C>D")
        assert callees(index, "A", 3) == edges("A>B", "B>C", "C>D", "A>C", "C>D")
        assert callees(index, "A", 3, DEDUP) == edges("A>B", "B>C", "C>D", "A>C")


class TestCallers:
    """Tests for caller traversal."""

    def test_depth_zero(self, linear_index: CallGraphIndex) -> None:
        assert callers(linear_index, "D", 0) == []

    def test_linear(self, linear_index: CallGraphIndex) -> None:
        assert callers(linear_index, "D", 10) == edges("C>D", "B>C", "A>B")

    def test_branching(self, branching_index: CallGraphIndex) -> None:
        assert callers(branching_index, "D", 5) == edges("B>D", "A>B", "C>D", "A>C")

    def test_unknown_name(self, linear_index: CallGraphIndex) -> None:
        assert callers(linear_index, "nope", 5) == []

    def test_undefined_callee_has_callers(self) -> None:
        index = build_index([make_file("a.c", {"main": ["printf"]})])
        assert callers(index, "printf", 3) == edges("main>printf")

    def test_cycle_repeats_edges(self, cyclic_index: CallGraphIndex) -> None:
        assert callers(cyclic_index, "A", 5) == edges("C>A", "B>C", "A>B", "C>A", "B>C")

    def test_cycle_deduplicated(self, cyclic_index: CallGraphIndex) -> None:
        assert callers(cyclic_index, "A", 5, DEDUP) == edges("C>A", "B>C", "A>B")


class TestRender:
    """Tests for digraph rendering."""

    def test_render_dot(self) -> None:
        text = render_dot(Direction.CALLEES, "main", edges("main>f", "f>g"))
        assert text == 'digraph "Callees of main" {\n    main -> f\n    f -> g\n}\n'

    def test_render_callers_title(self) -> None:
        text = render_dot(Direction.CALLERS, "g", edges("f>g"))
        assert text.startswith('digraph "Callers to g" {\n')

    def test_render_empty(self) -> None:
        assert render_dot(Direction.CALLERS, "main", []) == ""

    def test_write_both_blocks(self, linear_index: CallGraphIndex) -> None:
        sink = io.StringIO()
        written = write_graphs(linear_index, "B", 1, sink)

        assert written == 2
        assert sink.getvalue() == (
            'digraph "Callers to B" {\n    A -> B\n}\n'
            'digraph "Callees of B" {\n    B -> C\n}\n'
        )

    def test_write_skips_empty_direction(self, linear_index: CallGraphIndex) -> None:
        sink = io.StringIO()
        written = write_graphs(linear_index, "A", 3, sink)

        assert written == 1
        assert "Callers to" not in sink.getvalue()
        assert sink.getvalue().startswith('digraph "Callees of A" {')

    def test_write_unknown_name(self, linear_index: CallGraphIndex) -> None:
        sink = io.StringIO()
        assert write_graphs(linear_index, "nope", 3, sink) == 0
        assert sink.getvalue() == ""

    def test_write_direction_flags(self, linear_index: CallGraphIndex) -> None:
        sink = io.StringIO()
        written = write_graphs(linear_index, "B", 2, sink, include_callees=False)

        assert written == 1
        assert "Callees of" not in sink.getvalue()

        sink = io.StringIO()
        assert write_graphs(linear_index, "B", 2, sink, False, False) == 0

    def test_write_with_policy(self, cyclic_index: CallGraphIndex) -> None:
        sink = io.StringIO()
        write_graphs(cyclic_index, "A", 5, sink, include_callers=False, policy=DEDUP)

        assert sink.getvalue().count("->") == 3
