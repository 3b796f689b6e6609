"""Parser for `readelf --headers --symbols` output."""

from __future__ import annotations

import re
from collections.abc import Iterator
from pathlib import Path
from typing import TYPE_CHECKING

from bincall.core.models import EntryPointRecord, SymbolRecord
from bincall.readers.base import parse_lines, run_lines

if TYPE_CHECKING:
    from bincall.config import ToolConfig

_ENTRY_RE = re.compile(r"Entry point address:\s*(0x[0-9a-f]+)")
_HEADING_RE = re.compile(r"^[A-Z]")
# Num: Value Size Type Bind Vis Ndx Name; UND/ABS rows have no numeric Ndx.
_SYMBOL_RE = re.compile(
    r"^\s*\d+:\s*([0-9a-f]+)\s+(?:0x[0-9a-f]+|\d+)\s+\S+\s+\S+\s+\S+\s+\d+\s+(.*)"
)

_SYMTAB = ".symtab"


class ReadelfParser:
    """Stateful line parser: symbol rows only count inside `.symtab`."""

    def __init__(self) -> None:
        self._in_symtab = False

    def parse_line(self, line: str) -> SymbolRecord | EntryPointRecord | None:
        match = _ENTRY_RE.search(line)
        if match:
            return EntryPointRecord(address=int(match.group(1), 16))

        if _HEADING_RE.match(line):
            self._in_symtab = _SYMTAB in line
            return None

        if not self._in_symtab:
            return None

        match = _SYMBOL_RE.match(line)
        if not match:
            return None
        name = match.group(2).strip()
        if not name:
            return None
        return SymbolRecord(address=int(match.group(1), 16), name=name)


def parse_readelf(lines: Iterator[str]) -> Iterator[SymbolRecord | EntryPointRecord]:
    """Parse readelf output lines into symbol stream records."""
    return parse_lines(ReadelfParser(), lines)


def read_symbols(binary: Path, config: ToolConfig) -> Iterator[SymbolRecord | EntryPointRecord]:
    """Run readelf on a binary and yield its symbol stream."""
    return parse_readelf(run_lines(config.readelf_command(str(binary))))
