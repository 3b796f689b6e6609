"""CLI entry point for bincall."""

import json
import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler

from bincall.config import DEFAULT_OBJDUMP, DEFAULT_READELF, OBJDUMP_ENV, READELF_ENV, ToolConfig
from bincall.core.builder import BuildResult
from bincall.core.exceptions import BincallError, EntryPointUnsetError
from bincall.core.graph import compute_reachable_set, filter_callers_within, load_from_binary

app = typer.Typer(
    name="bincall",
    help="Call graph reachability for compiled x86-64 binaries.",
    no_args_is_help=True,
)
console = Console()
err_console = Console(stderr=True)

BinaryArg = Annotated[
    Path, typer.Argument(help="ELF binary to analyze", exists=True, dir_okay=False)
]
ReadelfOpt = Annotated[
    str, typer.Option("--readelf", envvar=READELF_ENV, help="readelf executable")
]
ObjdumpOpt = Annotated[
    str, typer.Option("--objdump", envvar=OBJDUMP_ENV, help="objdump executable")
]
JsonOpt = Annotated[bool, typer.Option("--json", "-j", help="Output as JSON")]


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log debug output")] = False,
) -> None:
    """Configure logging for all commands."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
    )


def load(binary: Path, readelf: str, objdump: str) -> BuildResult:
    """Build the call graph for a binary, exiting on tool errors."""
    config = ToolConfig(readelf=readelf, objdump=objdump)
    try:
        return load_from_binary(binary, config)
    except BincallError as e:
        err_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(code=1) from e


def entry_function(result: BuildResult) -> str | None:
    """Name of the function containing the entry point, if known."""
    try:
        return result.symbols.lookup(result.symbols.entry_point)
    except EntryPointUnsetError:
        return None


@app.command()
def stats(
    binary: BinaryArg,
    output_json: JsonOpt = False,
    readelf: ReadelfOpt = DEFAULT_READELF,
    objdump: ObjdumpOpt = DEFAULT_OBJDUMP,
) -> None:
    """Show symbol and call graph statistics."""
    result = load(binary, readelf, objdump)
    entry = result.symbols.entry_point if result.symbols.has_entry_point else None
    data = {
        "symbols": result.stats.symbols,
        "instructions": result.stats.instructions,
        "call_sites": result.stats.call_sites,
        "unresolved": result.stats.unresolved,
        "functions": result.graph.num_nodes,
        "edges": result.stats.edges,
        "entry_point": f"{entry:#x}" if entry is not None else None,
        "entry_function": entry_function(result),
    }

    if output_json:
        print(json.dumps(data))
        return

    console.print(f"Symbols: {data['symbols']}")
    console.print(f"Call sites: {data['call_sites']} [dim]({data['unresolved']} unresolved)[/]")
    console.print(f"Functions in graph: {data['functions']}")
    console.print(f"Edges: {data['edges']}")
    if entry is not None:
        console.print(f"Entry point: {data['entry_point']} ([cyan]{data['entry_function']}[/])")


@app.command()
def lookup(
    binary: BinaryArg,
    address: Annotated[str, typer.Argument(help="Address, hex (0x...) or decimal")],
    output_json: JsonOpt = False,
    readelf: ReadelfOpt = DEFAULT_READELF,
    objdump: ObjdumpOpt = DEFAULT_OBJDUMP,
) -> None:
    """Find the function containing an address."""
    try:
        value = int(address, 0)
    except ValueError:
        err_console.print(f"[red]Error:[/red] invalid address '{address}'")
        raise typer.Exit(code=1) from None

    result = load(binary, readelf, objdump)
    symbol = result.symbols.resolve(value)

    if output_json:
        data = None
        if symbol is not None:
            data = {
                "name": symbol.name,
                "address": f"{symbol.address:#x}",
                "offset": value - symbol.address,
            }
        print(json.dumps(data))
        return

    if symbol is None:
        console.print(f"No function at or below [cyan]{value:#x}[/cyan]")
        return
    console.print(
        f"[cyan]{symbol.name}[/cyan]+{value - symbol.address:#x} "
        f"[dim](starts at {symbol.address:#x})[/]"
    )


@app.command()
def callers(
    binary: BinaryArg,
    name: Annotated[str, typer.Argument(help="Function name")],
    output_json: JsonOpt = False,
    readelf: ReadelfOpt = DEFAULT_READELF,
    objdump: ObjdumpOpt = DEFAULT_OBJDUMP,
) -> None:
    """Show what calls a function (who calls this?)."""
    result = load(binary, readelf, objdump)
    caller_list = result.graph.get_callers(name)

    if output_json:
        print(json.dumps({"name": name, "callers": caller_list}))
        return

    console.print(f"\n[bold cyan]{name}[/]")
    if not caller_list:
        console.print("  [dim]No callers found[/]")
        return
    console.print("  [green]Called by:[/]")
    for caller in caller_list:
        console.print(f"    [cyan]{caller}[/]")


@app.command()
def callees(
    binary: BinaryArg,
    name: Annotated[str, typer.Argument(help="Function name")],
    output_json: JsonOpt = False,
    readelf: ReadelfOpt = DEFAULT_READELF,
    objdump: ObjdumpOpt = DEFAULT_OBJDUMP,
) -> None:
    """Show what a function calls (what does this call?)."""
    result = load(binary, readelf, objdump)
    callee_list = result.graph.get_callees(name)

    if output_json:
        print(json.dumps({"name": name, "callees": callee_list}))
        return

    console.print(f"\n[bold cyan]{name}[/]")
    if not callee_list:
        console.print("  [dim]No calls found[/]")
        return
    console.print("  [green]Calls:[/]")
    for callee in callee_list:
        console.print(f"    [cyan]{callee}[/]")


@app.command()
def reach(
    binary: BinaryArg,
    target: Annotated[str, typer.Argument(help="Function whose callers to report")],
    root: Annotated[
        str | None,
        typer.Option("--root", "-r", help="Start function (default: entry point's function)"),
    ] = None,
    output_json: JsonOpt = False,
    readelf: ReadelfOpt = DEFAULT_READELF,
    objdump: ObjdumpOpt = DEFAULT_OBJDUMP,
) -> None:
    """Show callers of TARGET that are reachable from ROOT."""
    result = load(binary, readelf, objdump)

    start = root or entry_function(result)
    if start is None:
        err_console.print("[red]Error:[/red] no --root given and no entry point function found")
        raise typer.Exit(code=1)

    reachable = compute_reachable_set(result.graph, start)
    caller_list = filter_callers_within(result.graph, target, reachable)
    root_address = result.symbols.address_of(start)

    if output_json:
        print(
            json.dumps(
                {
                    "root": start,
                    "root_address": f"{root_address:#x}" if root_address is not None else None,
                    "target": target,
                    "reachable": len(reachable),
                    "callers": caller_list,
                }
            )
        )
        return

    console.print(f"\n[bold]Callers of [cyan]{target}[/cyan] reachable from [cyan]{start}[/cyan][/]")
    if root_address is not None:
        console.print(f"[dim]{start} starts at {root_address:#x}[/]")
    console.print(f"[dim]{len(reachable)} functions reachable[/]")
    if not caller_list:
        console.print("  [dim]No reachable callers found[/]")
        return
    for caller in caller_list:
        console.print(f"  [cyan]{caller}[/]")


if __name__ == "__main__":
    app()
