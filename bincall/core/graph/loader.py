"""Build a CallGraph from a binary on disk."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from bincall.config import ToolConfig
    from bincall.core.builder import BuildResult

logger = logging.getLogger(__name__)


def load_from_binary(binary: Path, config: ToolConfig) -> BuildResult:
    """Dump symbols, then disassembly, and build the graph. O(lines)."""
    from bincall.core.builder import CallGraphBuilder
    from bincall.readers import read_instructions, read_symbols

    logger.info("Loading %s", binary)
    builder = CallGraphBuilder()
    builder.load_symbols(read_symbols(binary, config))
    builder.load_instructions(read_instructions(binary, config))
    return builder.result()
