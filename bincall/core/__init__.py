"""
Core module: data models, exceptions, symbol table and graph construction.

Models (models.py):
    - Symbol: A function's start address and name
    - SymbolRecord/EntryPointRecord: The symbol stream
    - InstructionRecord: The instruction stream
    - BuildStats: Counters from a construction

Exceptions (exceptions.py):
    - BincallError: Base exception for all bincall errors
    - ContractError: API misuse (entry point read/write, build order)
    - ToolError: An external tool failed

Symbols (symbols.py):
    - SymbolTable: Lazily sorted address index with floor lookup

Builder (builder.py):
    - CallGraphBuilder: Symbol phase, then instruction phase
"""

from bincall.core.builder import BuildResult, CallGraphBuilder, build_call_graph
from bincall.core.exceptions import (
    BincallError,
    BuildOrderError,
    ContractError,
    DuplicateEntryPointError,
    EntryPointUnsetError,
    ToolError,
)
from bincall.core.models import (
    BuildStats,
    EntryPointRecord,
    InstructionRecord,
    Symbol,
    SymbolRecord,
)
from bincall.core.symbols import SymbolTable

__all__ = [
    # Models
    "Symbol",
    "SymbolRecord",
    "EntryPointRecord",
    "InstructionRecord",
    "BuildStats",
    # Exceptions
    "BincallError",
    "ContractError",
    "EntryPointUnsetError",
    "DuplicateEntryPointError",
    "BuildOrderError",
    "ToolError",
    # Construction
    "SymbolTable",
    "CallGraphBuilder",
    "BuildResult",
    "build_call_graph",
]
