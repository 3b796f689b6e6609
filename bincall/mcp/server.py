"""MCP server implementation for bincall."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from bincall.config import ToolConfig
from bincall.core.builder import BuildResult
from bincall.core.exceptions import BincallError
from bincall.core.graph import compute_reachable_set, filter_callers_within, load_from_binary

logger = logging.getLogger(__name__)

server = Server("bincall")

_BINARY_PROPERTY = {
    "type": "string",
    "description": "Path to the ELF binary",
}


def _load(binary: str) -> BuildResult:
    """Build the call graph for a binary path."""
    path = Path(binary)
    if not path.is_file():
        raise FileNotFoundError(f"No such binary: {binary}")
    return load_from_binary(path, ToolConfig.from_env())


def _name_tool(name: str, description: str) -> Tool:
    return Tool(
        name=name,
        description=description,
        inputSchema={
            "type": "object",
            "properties": {
                "binary": _BINARY_PROPERTY,
                "name": {"type": "string", "description": "Function name"},
            },
            "required": ["binary", "name"],
        },
    )


@server.list_tools()  # type: ignore[no-untyped-call, untyped-decorator]
async def list_tools() -> list[Tool]:
    """List available tools."""
    return [
        _name_tool(
            "bincall_callers",
            "Find all functions in a binary that directly call a given function.",
        ),
        _name_tool(
            "bincall_callees",
            "Find all functions in a binary that a given function directly calls.",
        ),
        Tool(
            name="bincall_lookup",
            description="Resolve a code address to the function that contains it.",
            inputSchema={
                "type": "object",
                "properties": {
                    "binary": _BINARY_PROPERTY,
                    "address": {
                        "type": "string",
                        "description": "Address, hex (0x...) or decimal",
                    },
                },
                "required": ["binary", "address"],
            },
        ),
        Tool(
            name="bincall_reach",
            description=(
                "List the direct callers of a target function that are reachable "
                "from a root function (default: the function containing the entry point)."
            ),
            inputSchema={
                "type": "object",
                "properties": {
                    "binary": _BINARY_PROPERTY,
                    "target": {"type": "string", "description": "Function whose callers to report"},
                    "root": {"type": "string", "description": "Start function (optional)"},
                },
                "required": ["binary", "target"],
            },
        ),
        Tool(
            name="bincall_stats",
            description="Get symbol and call graph statistics for a binary.",
            inputSchema={
                "type": "object",
                "properties": {"binary": _BINARY_PROPERTY},
                "required": ["binary"],
            },
        ),
    ]


@server.call_tool()  # type: ignore[untyped-decorator]
async def call_tool(name: str, arguments: dict[str, Any]) -> list[TextContent]:
    """Handle tool calls."""
    try:
        if name == "bincall_callers":
            result = handle_callers(_load(arguments["binary"]), arguments["name"])
        elif name == "bincall_callees":
            result = handle_callees(_load(arguments["binary"]), arguments["name"])
        elif name == "bincall_lookup":
            result = handle_lookup(_load(arguments["binary"]), arguments["address"])
        elif name == "bincall_reach":
            result = handle_reach(
                _load(arguments["binary"]),
                arguments["target"],
                arguments.get("root"),
            )
        elif name == "bincall_stats":
            result = handle_stats(_load(arguments["binary"]))
        else:
            result = {"error": f"Unknown tool: {name}"}

        return [TextContent(type="text", text=json.dumps(result, indent=2))]

    except (FileNotFoundError, BincallError) as e:
        logger.warning("Tool %s failed: %s", name, e)
        return [TextContent(type="text", text=json.dumps({"error": str(e)}))]
    except Exception as e:
        logger.exception("Tool %s raised", name)
        return [TextContent(type="text", text=json.dumps({"error": str(e)}))]


def handle_callers(result: BuildResult, name: str) -> dict[str, Any]:
    """Handle bincall_callers tool."""
    return {"name": name, "callers": result.graph.get_callers(name)}


def handle_callees(result: BuildResult, name: str) -> dict[str, Any]:
    """Handle bincall_callees tool."""
    return {"name": name, "callees": result.graph.get_callees(name)}


def handle_lookup(result: BuildResult, address: str) -> dict[str, Any]:
    """Handle bincall_lookup tool."""
    try:
        value = int(address, 0)
    except ValueError:
        return {"error": f"Invalid address '{address}'"}

    symbol = result.symbols.resolve(value)
    if symbol is None:
        return {"address": f"{value:#x}", "function": None}
    return {
        "address": f"{value:#x}",
        "function": symbol.name,
        "start": f"{symbol.address:#x}",
        "offset": value - symbol.address,
    }


def handle_reach(result: BuildResult, target: str, root: str | None) -> dict[str, Any]:
    """Handle bincall_reach tool."""
    if root is None and result.symbols.has_entry_point:
        root = result.symbols.lookup(result.symbols.entry_point)
    if root is None:
        return {"error": "No root given and no entry point function found"}

    reachable = compute_reachable_set(result.graph, root)
    root_address = result.symbols.address_of(root)
    return {
        "root": root,
        "root_address": f"{root_address:#x}" if root_address is not None else None,
        "target": target,
        "reachable": sorted(reachable),
        "callers": filter_callers_within(result.graph, target, reachable),
    }


def handle_stats(result: BuildResult) -> dict[str, Any]:
    """Handle bincall_stats tool."""
    symbols = result.symbols
    return {
        "symbols": result.stats.symbols,
        "call_sites": result.stats.call_sites,
        "unresolved": result.stats.unresolved,
        "functions": result.graph.num_nodes,
        "edges": result.stats.edges,
        "entry_point": f"{symbols.entry_point:#x}" if symbols.has_entry_point else None,
    }


async def serve() -> None:
    """Run the MCP server."""
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())
