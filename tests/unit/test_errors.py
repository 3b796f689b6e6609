"""Tests for error handling paths."""

import sys

import pytest

from bincall.core.builder import CallGraphBuilder
from bincall.core.exceptions import (
    BincallError,
    BuildOrderError,
    ContractError,
    DuplicateEntryPointError,
    EntryPointUnsetError,
    ToolError,
)
from bincall.core.models import EntryPointRecord, InstructionRecord, SymbolRecord
from bincall.readers import run_lines


class TestHierarchy:
    """Tests for the exception hierarchy."""

    @pytest.mark.parametrize(
        "error", [EntryPointUnsetError, DuplicateEntryPointError, BuildOrderError]
    )
    def test_logic_faults_are_contract_errors(self, error: type[Exception]) -> None:
        assert issubclass(error, ContractError)
        assert issubclass(error, BincallError)

    def test_tool_error_is_not_contract_error(self) -> None:
        assert issubclass(ToolError, BincallError)
        assert not issubclass(ToolError, ContractError)


class TestBuilderErrors:
    """Tests for builder misuse."""

    def test_instructions_before_symbols(self) -> None:
        builder = CallGraphBuilder()
        with pytest.raises(BuildOrderError):
            builder.load_instructions([InstructionRecord(source=0x10, target=0x20)])

    def test_symbols_after_instructions(self) -> None:
        """The table stays as the edges were resolved against it."""
        builder = CallGraphBuilder()
        builder.load_symbols([SymbolRecord(0x100, "main"), SymbolRecord(0x300, "die")])
        builder.load_instructions([InstructionRecord(source=0x210, target=0x300)])
        with pytest.raises(BuildOrderError):
            builder.load_symbols([SymbolRecord(0x200, "helper")])
        result = builder.result()
        assert result.graph.edges() == [("main", "die")]
        assert result.symbols.lookup(0x210) == "main"

    def test_symbols_twice(self) -> None:
        builder = CallGraphBuilder()
        builder.load_symbols([SymbolRecord(0x100, "main")])
        with pytest.raises(BuildOrderError):
            builder.load_symbols([SymbolRecord(0x200, "helper")])
        assert builder.result().symbols.lookup(0x250) == "main"

    def test_two_entry_points(self) -> None:
        builder = CallGraphBuilder()
        with pytest.raises(DuplicateEntryPointError):
            builder.load_symbols([EntryPointRecord(0x1000), EntryPointRecord(0x2000)])

    def test_unresolved_is_not_an_error(self) -> None:
        builder = CallGraphBuilder()
        builder.load_symbols([])
        builder.load_instructions([InstructionRecord(source=0x10, target=0x20)])
        result = builder.result()
        assert result.stats.unresolved == 1
        assert result.graph.num_edges == 0


class TestRunLines:
    """Tests for external tool streaming."""

    def test_yields_lines(self) -> None:
        lines = list(run_lines([sys.executable, "-c", "print('a'); print('b c')"]))
        assert lines == ["a", "b c"]

    def test_nonzero_exit(self) -> None:
        with pytest.raises(ToolError) as exc_info:
            list(run_lines([sys.executable, "-c", "import sys; sys.exit(3)"]))
        assert "code 3" in str(exc_info.value)

    def test_missing_executable(self) -> None:
        with pytest.raises(ToolError) as exc_info:
            list(run_lines(["/nonexistent/bincall-tool"]))
        assert "Cannot run" in str(exc_info.value)

    def test_early_close(self) -> None:
        lines = run_lines([sys.executable, "-c", "for i in range(10**6): print(i)"])
        assert next(lines) == "0"
        lines.close()

    def test_missing_output_pipe(self, monkeypatch: pytest.MonkeyPatch) -> None:
        class NoPipe:
            stdout = None

            def __init__(self, *args: object, **kwargs: object) -> None:
                pass

        monkeypatch.setattr("bincall.readers.base.subprocess.Popen", NoPipe)
        with pytest.raises(ToolError) as exc_info:
            list(run_lines(["readelf"]))
        assert "No output pipe" in str(exc_info.value)
