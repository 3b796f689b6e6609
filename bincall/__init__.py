"""
bincall: Call graph reachability for compiled x86-64 binaries.

bincall reads a binary's symbol table (readelf) and disassembly (objdump)
to build a function-level call graph, enabling you to:
- Resolve any instruction address to its enclosing function
- Find all callers/callees of a function
- Ask which functions reachable from a root directly call a target

Usage:
    from bincall.config import ToolConfig
    from bincall.core.graph import load_from_binary, reachable_callers

    result = load_from_binary(Path("a.out"), ToolConfig.from_env())
    reachable_callers(result.graph, "main", "abort")
"""

__version__ = "0.1.0"
