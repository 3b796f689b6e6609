"""Parser for `objdump --disassemble` output."""

from __future__ import annotations

import re
from collections.abc import Iterator
from pathlib import Path
from typing import TYPE_CHECKING

from bincall.core.models import InstructionRecord
from bincall.readers.base import parse_lines, run_lines

if TYPE_CHECKING:
    from bincall.config import ToolConfig

CONTROL_TRANSFER_MNEMONICS = (
    "callq",
    "call",
    "jmpq",
    "jmp",
    "jne",
    "je",
    "jge",
    "jg",
    "jle",
    "jl",
)

# "  401136:\te8 f5 fe ff ff \tcall   401030 <puts@plt>" or "callq  0x5".
# A leading '*' marks an indirect target.
_INSN_RE = re.compile(
    r"^\s*([0-9a-f]+):\s.*?\b(" + "|".join(CONTROL_TRANSFER_MNEMONICS) + r")\s+"
    r"(\*)?(?:0x)?([0-9a-f]+)\b"
)


def parse_instruction(line: str) -> InstructionRecord | None:
    """Parse a direct call/jump line; None for anything else."""
    match = _INSN_RE.match(line)
    if not match or match.group(3):
        return None
    return InstructionRecord(
        source=int(match.group(1), 16),
        target=int(match.group(4), 16),
        is_control_transfer=True,
    )


class ObjdumpParser:
    """Line parser adapter for `parse_lines`."""

    def parse_line(self, line: str) -> InstructionRecord | None:
        return parse_instruction(line)


def parse_objdump(lines: Iterator[str]) -> Iterator[InstructionRecord]:
    """Parse objdump output lines into instruction records."""
    return parse_lines(ObjdumpParser(), lines)


def read_instructions(binary: Path, config: ToolConfig) -> Iterator[InstructionRecord]:
    """Run objdump on a binary and yield its control transfers."""
    return parse_objdump(run_lines(config.objdump_command(str(binary))))
