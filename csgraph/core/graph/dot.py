"""Graphviz digraph rendering of query results."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Protocol

from csgraph.core.graph.models import CallEdge, Direction, TraversalPolicy
from csgraph.core.graph.traversal import callees, callers

if TYPE_CHECKING:
    from csgraph.core.graph.base import CallGraphIndex


class TextSink(Protocol):
    """Anything with a write(str) method, e.g. a text file or StringIO."""

    def write(self, text: str, /) -> object: ...


def render_dot(direction: Direction, name: str, edges: Sequence[CallEdge]) -> str:
    """Render edges as a digraph block, or "" when there are none."""
    if not edges:
        return ""
    lines = [f'digraph "{direction.label} {name}" {{']
    lines.extend(f"    {edge.caller} -> {edge.callee}" for edge in edges)
    lines.append("}")
    return "\n".join(lines) + "\n"


def query(
    index: CallGraphIndex,
    direction: Direction,
    name: str,
    depth: int,
    policy: TraversalPolicy = TraversalPolicy.BOUNDED_REPEAT,
) -> list[CallEdge]:
    """Run the traversal for one direction."""
    if direction is Direction.CALLERS:
        return callers(index, name, depth, policy)
    return callees(index, name, depth, policy)


def write_graphs(
    index: CallGraphIndex,
    name: str,
    depth: int,
    sink: TextSink,
    include_callers: bool = True,
    include_callees: bool = True,
    policy: TraversalPolicy = TraversalPolicy.BOUNDED_REPEAT,
) -> int:
    """Write the callers block, then the callees block, skipping empty ones.

    Returns:
        Number of blocks written (0, 1 or 2)
    """
    wanted = []
    if include_callers:
        wanted.append(Direction.CALLERS)
    if include_callees:
        wanted.append(Direction.CALLEES)

    written = 0
    for direction in wanted:
        text = render_dot(direction, name, query(index, direction, name, depth, policy))
        if text:
            sink.write(text)
            written += 1
    return written
