"""
MCP server for bincall.

Exposes binary call graph queries to LLMs via the Model Context Protocol.

Tools:
    - bincall_callers: Find what calls a function
    - bincall_callees: Find what a function calls
    - bincall_lookup: Resolve an address to its enclosing function
    - bincall_reach: Callers of a target reachable from a root
    - bincall_stats: Get symbol and graph statistics

Usage:
    Run: bincall-mcp
"""

import asyncio

from bincall.mcp.server import serve as _serve


def serve() -> None:
    """Entry point for the MCP server."""
    asyncio.run(_serve())


__all__ = ["serve"]
