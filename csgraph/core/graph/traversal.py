"""Depth-bounded caller/callee traversal."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from csgraph.core.graph.models import CallEdge, TraversalPolicy

if TYPE_CHECKING:
    from csgraph.core.graph.base import CallGraphIndex


def callees(
    index: CallGraphIndex,
    name: str,
    depth: int,
    policy: TraversalPolicy = TraversalPolicy.BOUNDED_REPEAT,
) -> list[CallEdge]:
    """Edges from name down to depth levels of callees, depth first.

    With BOUNDED_REPEAT nothing stops a cycle but the depth, so A -> B -> A
    yields A -> B, B -> A, A -> B, ... until depth runs out. Edge count can
    grow exponentially with depth.
    """
    if policy is TraversalPolicy.DEDUPLICATED:
        return _walk_deduplicated(index, name, depth, _callee_step)

    if depth <= 0:
        return []

    edges: list[CallEdge] = []
    for callee in index.callees_of(name):
        edges.append(CallEdge(name, callee))
        edges.extend(callees(index, callee, depth - 1))
    return edges


def callers(
    index: CallGraphIndex,
    name: str,
    depth: int,
    policy: TraversalPolicy = TraversalPolicy.BOUNDED_REPEAT,
) -> list[CallEdge]:
    """Edges into name from depth levels of callers, depth first.

    Every level scans the whole index in insertion order: O(len(index) ** depth)
    in the worst case. Cycles are handled as in callees().
    """
    if policy is TraversalPolicy.DEDUPLICATED:
        return _walk_deduplicated(index, name, depth, _caller_step)

    if depth <= 0:
        return []

    edges: list[CallEdge] = []
    for item in index.names():
        if index.calls(item, name):
            edges.append(CallEdge(item, name))
            edges.extend(callers(index, item, depth - 1))
    return edges


def _callee_step(index: CallGraphIndex, name: str) -> list[tuple[CallEdge, str]]:
    return [(CallEdge(name, c), c) for c in index.callees_of(name)]


def _caller_step(index: CallGraphIndex, name: str) -> list[tuple[CallEdge, str]]:
    return [(CallEdge(item, name), item) for item in index.names() if index.calls(item, name)]


def _walk_deduplicated(
    index: CallGraphIndex,
    name: str,
    depth: int,
    step: Callable[[CallGraphIndex, str], list[tuple[CallEdge, str]]],
) -> list[CallEdge]:
    """Same order as the repeating walk, but each edge once.

    A node is expanded again only when reached with more depth left than
    before, so the result is every edge within depth hops.
    """
    edges: list[CallEdge] = []
    seen: set[CallEdge] = set()
    expanded: dict[str, int] = {}

    def dfs(node: str, remaining: int) -> None:
        if remaining <= 0 or expanded.get(node, 0) >= remaining:
            return
        expanded[node] = remaining
        for edge, nxt in step(index, node):
            if edge not in seen:
                seen.add(edge)
                edges.append(edge)
            dfs(nxt, remaining - 1)

    dfs(name, depth)
    return edges
