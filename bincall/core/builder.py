"""Builder that turns symbol and instruction records into a call graph."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from bincall.core.exceptions import BuildOrderError
from bincall.core.graph.base import CallGraph
from bincall.core.models import BuildStats, EntryPointRecord, InstructionRecord, SymbolRecord
from bincall.core.symbols import SymbolTable

logger = logging.getLogger(__name__)

SymbolStreamRecord = SymbolRecord | EntryPointRecord


@dataclass
class BuildResult:
    """A finished symbol table and call graph."""

    symbols: SymbolTable
    graph: CallGraph
    stats: BuildStats


class CallGraphBuilder:
    """Coordinates the two construction phases.

    1. Symbol phase: the whole symbol stream goes into the SymbolTable.
    2. Instruction phase: each control transfer is resolved on both ends
       through the finished table and recorded as an edge.

    Floor lookup is only correct against the complete table, so the
    instruction phase refuses to start before the symbol phase ran, and the
    table is read-only once it has.
    """

    def __init__(self) -> None:
        self._symbols = SymbolTable()
        self._graph = CallGraph()
        self._stats = BuildStats()
        self._symbols_loaded = False
        self._instructions_loaded = False

    def load_symbols(self, records: Iterable[SymbolStreamRecord]) -> None:
        """Drain the symbol stream into the table."""
        if self._instructions_loaded:
            raise BuildOrderError("Symbols cannot change after instructions were loaded")
        if self._symbols_loaded:
            raise BuildOrderError("Symbols were already loaded")

        for record in records:
            if isinstance(record, EntryPointRecord):
                self._symbols.entry_point = record.address
            else:
                self._symbols.add(record.address, record.name)

        self._symbols_loaded = True
        self._stats.symbols = len(self._symbols)
        logger.info("Loaded %d symbols", self._stats.symbols)

    def load_instructions(self, records: Iterable[InstructionRecord]) -> None:
        """Drain the instruction stream, recording resolvable call edges."""
        if not self._symbols_loaded:
            raise BuildOrderError("Symbols must be loaded before instructions")
        self._instructions_loaded = True

        for record in records:
            self._stats.instructions += 1
            if not record.is_control_transfer:
                continue
            self._stats.call_sites += 1

            caller = self._symbols.lookup(record.source)
            callee = self._symbols.lookup(record.target) if caller is not None else None
            if caller is None or callee is None:
                self._stats.unresolved += 1
                logger.debug(
                    "Unresolved call site %#x -> %#x", record.source, record.target
                )
                continue
            self._graph.add(caller, callee)

        self._stats.edges = self._graph.num_edges
        logger.info(
            "Resolved %d call sites into %d edges (%d unresolved)",
            self._stats.call_sites - self._stats.unresolved,
            self._stats.edges,
            self._stats.unresolved,
        )

    def result(self) -> BuildResult:
        return BuildResult(symbols=self._symbols, graph=self._graph, stats=self._stats)


def build_call_graph(
    symbol_records: Iterable[SymbolStreamRecord],
    instruction_records: Iterable[InstructionRecord],
) -> BuildResult:
    """Run both phases in order and return the finished structures."""
    builder = CallGraphBuilder()
    builder.load_symbols(symbol_records)
    builder.load_instructions(instruction_records)
    return builder.result()
