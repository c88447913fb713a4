"""
Call graph index, traversal and rendering.

Data Structures:
    - CallGraphIndex: function name -> distinct direct callees
    - CallEdge: one caller -> callee pair in a query result
    - KeyMode / TraversalPolicy / Direction: index and query options

Algorithms:
    - traversal: depth-bounded callers() / callees(), repeating or deduplicated
    - dot: digraph text for a query result

Loading:
    - build_index(): index the file records produced by the reader
"""

from csgraph.core.graph.base import CallGraphIndex
from csgraph.core.graph.dot import render_dot, write_graphs
from csgraph.core.graph.loader import build_index
from csgraph.core.graph.models import CallEdge, Direction, KeyMode, TraversalPolicy
from csgraph.core.graph.traversal import callees, callers

__all__ = [
    "CallEdge",
    "CallGraphIndex",
    "Direction",
    "KeyMode",
    "TraversalPolicy",
    "build_index",
    "callees",
    "callers",
    "render_dot",
    "write_graphs",
]
