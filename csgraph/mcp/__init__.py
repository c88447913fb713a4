"""
MCP server for csgraph.

Exposes cscope call graph queries to LLMs via the Model Context Protocol.

Tools:
    - csgraph_callers: Find what calls a function, to a depth
    - csgraph_callees: Find what a function calls, to a depth
    - csgraph_stats: Get database statistics

Usage:
    Run from the directory holding cscope.out (or set CSGRAPH_DATABASE):
    mcp-server-csgraph
"""

import asyncio

from csgraph.mcp.server import serve as _serve


def serve() -> None:
    """Entry point for the MCP server."""
    asyncio.run(_serve())


__all__ = ["serve"]
