"""
Readers: Turn external tool output into core records.

This module is the boundary between bincall and the binutils it drives.
The core only ever sees records; the text formats stay here.

Components:
    - run_lines: Spawn a tool and stream its stdout line by line
    - LineParser: Protocol for per-line parsers
    - ReadelfParser: Entry point and `.symtab` rows from readelf
    - parse_instruction: Direct call/jump records from objdump

Adding a new tool:
    1. Write a parser with a parse_line() method returning a record or None
    2. Feed it run_lines() output through parse_lines()
"""

from bincall.readers.base import LineParser, parse_lines, run_lines
from bincall.readers.objdump import (
    CONTROL_TRANSFER_MNEMONICS,
    ObjdumpParser,
    parse_instruction,
    parse_objdump,
    read_instructions,
)
from bincall.readers.readelf import ReadelfParser, parse_readelf, read_symbols

__all__ = [
    "CONTROL_TRANSFER_MNEMONICS",
    "LineParser",
    "ObjdumpParser",
    "ReadelfParser",
    "parse_instruction",
    "parse_lines",
    "parse_objdump",
    "parse_readelf",
    "read_instructions",
    "read_symbols",
    "run_lines",
]
