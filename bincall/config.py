"""Configuration for the external symbol dumper and disassembler."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

READELF_ENV = "BINCALL_READELF"
OBJDUMP_ENV = "BINCALL_OBJDUMP"

DEFAULT_READELF = "readelf"
DEFAULT_OBJDUMP = "objdump"

DEFAULT_READELF_ARGS = ["--headers", "--symbols", "--wide"]
DEFAULT_OBJDUMP_ARGS = ["--disassemble", "--wide"]


@dataclass
class ToolConfig:
    """Executables and arguments used to dump a binary."""

    readelf: str = DEFAULT_READELF
    objdump: str = DEFAULT_OBJDUMP
    readelf_args: list[str] = field(default_factory=lambda: list(DEFAULT_READELF_ARGS))
    objdump_args: list[str] = field(default_factory=lambda: list(DEFAULT_OBJDUMP_ARGS))

    @classmethod
    def from_env(cls) -> ToolConfig:
        """Defaults, with executables overridable through the environment."""
        return cls(
            readelf=os.environ.get(READELF_ENV, DEFAULT_READELF),
            objdump=os.environ.get(OBJDUMP_ENV, DEFAULT_OBJDUMP),
        )

    def readelf_command(self, binary: str) -> list[str]:
        return [self.readelf, *self.readelf_args, binary]

    def objdump_command(self, binary: str) -> list[str]:
        return [self.objdump, *self.objdump_args, binary]
