"""Line streaming from external tools."""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Iterator
from typing import Protocol, TypeVar

from bincall.core.exceptions import ToolError

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", covariant=True)


class LineParser(Protocol[RecordT]):
    """Protocol for tool output parsers."""

    def parse_line(self, line: str) -> RecordT | None:
        """Parse one output line; None when the line carries no record."""
        ...


def run_lines(argv: list[str]) -> Iterator[str]:
    """Run a tool and yield its stdout line by line, without line endings.

    Stderr is passed through. Raises ToolError if the tool cannot be
    started or exits non-zero.
    """
    logger.debug("Running %s", " ".join(argv))
    try:
        process = subprocess.Popen(
            argv,
            stdout=subprocess.PIPE,
            text=True,
            errors="replace",
        )
    except OSError as e:
        raise ToolError(f"Cannot run {argv[0]}: {e}") from e

    if process.stdout is None:
        raise ToolError(f"No output pipe for {argv[0]}")
    drained = False
    try:
        for line in process.stdout:
            yield line.rstrip("\r\n")
        drained = True
    finally:
        if not drained:
            # Consumer stopped early: stop the tool rather than drain it.
            process.kill()
        process.stdout.close()
        code = process.wait()

    if code != 0:
        raise ToolError(f"{argv[0]} exited with code {code}")


def parse_lines(parser: LineParser[RecordT], lines: Iterator[str]) -> Iterator[RecordT]:
    """Feed lines through a parser, yielding the records it recognises."""
    for line in lines:
        record = parser.parse_line(line)
        if record is not None:
            yield record
