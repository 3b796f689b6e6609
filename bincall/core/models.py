"""Data models for bincall."""

from __future__ import annotations

from dataclasses import dataclass

# Address 0 marks undefined/external symbols and is never stored.
UNDEFINED_ADDRESS = 0


@dataclass(frozen=True)
class Symbol:
    """A function symbol: its start address and name."""

    address: int
    name: str


@dataclass(frozen=True)
class SymbolRecord:
    """A symbol table row delivered by the symbol dumper."""

    address: int
    name: str


@dataclass(frozen=True)
class EntryPointRecord:
    """The program entry address delivered by the symbol dumper."""

    address: int


@dataclass(frozen=True)
class InstructionRecord:
    """A disassembled instruction with a literal target address."""

    source: int
    target: int
    is_control_transfer: bool = True


class BuildStats:
    """Statistics from a graph construction."""

    def __init__(self) -> None:
        self.symbols: int = 0
        self.instructions: int = 0
        self.call_sites: int = 0
        self.edges: int = 0
        self.unresolved: int = 0

    def __repr__(self) -> str:
        return (
            f"BuildStats(symbols={self.symbols}, instructions={self.instructions}, "
            f"call_sites={self.call_sites}, edges={self.edges}, "
            f"unresolved={self.unresolved})"
        )
