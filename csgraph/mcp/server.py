"""MCP server implementation for csgraph."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from csgraph.core import CscopeDatabase, CsgraphError, get_default_db_path, load_database
from csgraph.core.config import DEFAULT_DEPTH
from csgraph.core.graph import CallGraphIndex, Direction, TraversalPolicy, build_index
from csgraph.core.graph.dot import query, render_dot

log = logging.getLogger(__name__)

server = Server("csgraph")

_loaded: tuple[CscopeDatabase, CallGraphIndex] | None = None


def _get_index() -> tuple[CscopeDatabase, CallGraphIndex]:
    """Load the database for the current directory once per process."""
    global _loaded
    if _loaded is None:
        db_path = get_default_db_path(Path.cwd())
        if not db_path.exists():
            raise FileNotFoundError(
                f"No cscope database found. Run 'cscope -b -R' first.\nExpected: {db_path}"
            )
        db = load_database(db_path)
        _loaded = (db, build_index(db.files))
        log.info("Loaded %s: %r", db_path, _loaded[1])
    return _loaded


def _query_schema(description: str) -> dict[str, Any]:
    return {
        "type": "object",
        "properties": {
            "name": {
                "type": "string",
                "description": description,
            },
            "depth": {
                "type": "integer",
                "description": f"Maximum number of hops (default: {DEFAULT_DEPTH})",
                "default": DEFAULT_DEPTH,
            },
            "policy": {
                "type": "string",
                "enum": [p.value for p in TraversalPolicy],
                "description": "repeat: follow cycles until depth runs out; dedup: each edge once",
                "default": TraversalPolicy.BOUNDED_REPEAT.value,
            },
        },
        "required": ["name"],
    }


@server.list_tools()  # type: ignore[no-untyped-call, untyped-decorator]
async def list_tools() -> list[Tool]:
    """List available tools."""
    return [
        Tool(
            name="csgraph_callers",
            description=(
                "Find the functions that call a given C function, up to a depth. "
                "Returns caller -> callee edges and a Graphviz digraph."
            ),
            inputSchema=_query_schema("Name of the function to find callers for"),
        ),
        Tool(
            name="csgraph_callees",
            description=(
                "Find the functions a given C function calls, up to a depth. "
                "Returns caller -> callee edges and a Graphviz digraph."
            ),
            inputSchema=_query_schema("Name of the function to find callees for"),
        ),
        Tool(
            name="csgraph_stats",
            description="Get statistics about the cscope database.",
            inputSchema={
                "type": "object",
                "properties": {},
            },
        ),
    ]


@server.call_tool()  # type: ignore[untyped-decorator]
async def call_tool(name: str, arguments: dict[str, Any]) -> list[TextContent]:
    """Handle tool calls."""
    try:
        if name == "csgraph_callers":
            result = _handle_query(Direction.CALLERS, arguments)
        elif name == "csgraph_callees":
            result = _handle_query(Direction.CALLEES, arguments)
        elif name == "csgraph_stats":
            result = _handle_stats()
        else:
            result = {"error": f"Unknown tool: {name}"}

        return [TextContent(type="text", text=json.dumps(result, indent=2))]

    except (FileNotFoundError, CsgraphError, ValueError) as e:
        return [TextContent(type="text", text=json.dumps({"error": str(e)}))]


def _handle_query(direction: Direction, arguments: dict[str, Any]) -> dict[str, Any]:
    """Handle csgraph_callers and csgraph_callees."""
    _, index = _get_index()
    name = arguments["name"]
    depth = int(arguments.get("depth", DEFAULT_DEPTH))
    policy = TraversalPolicy(arguments.get("policy", TraversalPolicy.BOUNDED_REPEAT.value))

    edges = query(index, direction, name, depth, policy)
    result: dict[str, Any] = {
        "name": name,
        "direction": direction.label,
        "depth": depth,
        "edges": [[e.caller, e.callee] for e in edges],
        "dot": render_dot(direction, name, edges),
    }
    if not edges and name not in index:
        result["error"] = f"No definition of '{name}'"
    return result


def _handle_stats() -> dict[str, Any]:
    """Handle csgraph_stats."""
    db, index = _get_index()
    return {
        "version": db.header.version,
        "directory": db.header.directory,
        "files": len(db.files),
        "functions": db.function_count,
        "indexed_functions": len(index),
        "edges": index.num_edges,
    }


async def serve() -> None:
    """Run the MCP server."""
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())
