"""
csgraph: Caller/callee graphs from cscope databases.

csgraph reads the cross-reference file built by ``cscope -b`` and lets you:
- Find every function that calls a function, to a given depth
- Find every function a function calls, to a given depth
- Render either as a Graphviz digraph

Usage:
    from csgraph.core import load_database
    from csgraph.core.graph import build_index, write_graphs

    db = load_database(Path("cscope.out"))
    index = build_index(db.files)
    write_graphs(index, "main", depth=3, sink=sys.stdout)
"""

__version__ = "0.1.0"
