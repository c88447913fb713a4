"""CLI entry point for csgraph."""

import json
import logging
import sys
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.progress import BarColumn, Progress, SpinnerColumn, TaskProgressColumn, TextColumn
from rich.table import Table

from csgraph.core import CscopeDatabase, CsgraphError, ReaderOptions, load_database
from csgraph.core.config import DATABASE_ENV_VAR, DEFAULT_DATABASE_NAME, DEFAULT_DEPTH
from csgraph.core.graph import CallGraphIndex, KeyMode, TraversalPolicy, build_index, write_graphs

app = typer.Typer(
    name="csgraph",
    help="Caller/callee graphs from a cscope database.",
    no_args_is_help=True,
)
# Results go to stdout; status goes to stderr.
console = Console(stderr=True)
out_console = Console()

DatabaseOption = Annotated[
    Path,
    typer.Option(
        "--database",
        "-c",
        envvar=DATABASE_ENV_VAR,
        help="cscope database file",
    ),
]


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Debug logging")] = False,
) -> None:
    """Caller/callee graphs from a cscope database."""
    logging.basicConfig(
        level=logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    if verbose:
        logging.getLogger("csgraph").setLevel(logging.DEBUG)


def load(
    database: Path,
    legacy_lines: bool = False,
    mode: KeyMode = KeyMode.NAME,
) -> tuple[CscopeDatabase, CallGraphIndex]:
    """Read the database and build the index behind a spinner.

    Exits with status 1 if the database cannot be read.
    """
    options = ReaderOptions.legacy() if legacy_lines else ReaderOptions()

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
        console=console,
        transient=True,
    ) as progress:
        task = progress.add_task(f"Reading [cyan]{database.name}[/]", total=None)
        try:
            db = load_database(database, options)
        except CsgraphError as e:
            progress.stop()
            console.print(f"[red]Error loading cscope database:[/red] {e}")
            raise typer.Exit(code=1) from e

        progress.update(task, description="Building internal database")

        def on_progress(done: int, total: int) -> None:
            progress.update(task, total=total, completed=done)

        index = build_index(db.files, mode, on_progress=on_progress)

    if db.truncated_lines:
        console.print(f"[dim]Dropped {db.truncated_lines} overlong lines[/]")
    return db, index


@app.command()
def graph(
    function: Annotated[str, typer.Argument(help="Function to plot callers and callees of")],
    database: DatabaseOption = Path(DEFAULT_DATABASE_NAME),
    depth: Annotated[
        int, typer.Option("--depth", "-d", min=0, help="Depth of traversal")
    ] = DEFAULT_DEPTH,
    output: Annotated[
        Path | None, typer.Option("--output", "-o", help="Write results to this file")
    ] = None,
    no_callers: Annotated[
        bool, typer.Option("--no-callers", "-x", help="Do not print callers")
    ] = False,
    no_callees: Annotated[
        bool, typer.Option("--no-callees", "-y", help="Do not print callees")
    ] = False,
    policy: Annotated[
        TraversalPolicy,
        typer.Option("--policy", help="repeat: follow cycles until depth runs out; dedup: each edge once"),
    ] = TraversalPolicy.BOUNDED_REPEAT,
    qualified: Annotated[
        bool,
        typer.Option("--qualified", help="Merge same-named functions from different files"),
    ] = False,
    legacy_lines: Annotated[
        bool,
        typer.Option("--legacy-lines", help="Drop lines over 1024 bytes, as fixed-buffer readers do"),
    ] = False,
) -> None:
    """Print digraphs of the callers to and callees of a function."""
    mode = KeyMode.QUALIFIED if qualified else KeyMode.NAME
    _, index = load(database, legacy_lines=legacy_lines, mode=mode)

    if function not in index:
        console.print(f"[dim]No definition of '[cyan]{function}[/cyan]' in {database}[/]")

    if output is None:
        written = write_graphs(
            index, function, depth, sys.stdout, not no_callers, not no_callees, policy
        )
    else:
        try:
            with output.open("w", encoding="utf-8") as out:
                written = write_graphs(
                    index, function, depth, out, not no_callers, not no_callees, policy
                )
        except OSError as e:
            console.print(f"[red]Error opening output file {output}:[/red] {e}")
            raise typer.Exit(code=1) from e

    if not written:
        console.print(f"No edges for '[cyan]{function}[/cyan]' at depth {depth}")


@app.command()
def stats(
    database: DatabaseOption = Path(DEFAULT_DATABASE_NAME),
    output_json: Annotated[bool, typer.Option("--json", "-j", help="Output as JSON")] = False,
    legacy_lines: Annotated[
        bool, typer.Option("--legacy-lines", help="Drop lines over 1024 bytes")
    ] = False,
) -> None:
    """Show database and index statistics."""
    db, index = load(database, legacy_lines=legacy_lines)
    hdr = db.header

    result = {
        "version": hdr.version,
        "directory": hdr.directory,
        "ascii_only": hdr.ascii_only,
        "prefix_match": hdr.prefix_match,
        "inverted_index": hdr.inverted_index,
        "files": len(db.files),
        "functions": db.function_count,
        "indexed_functions": len(index),
        "edges": index.num_edges,
        "sources": len(db.trailer.sources),
        "viewpaths": len(db.trailer.viewpaths),
        "includes": len(db.trailer.includes),
        "truncated_lines": db.truncated_lines,
    }

    if output_json:
        print(json.dumps(result))
        return

    out_console.print(f"cscope version {hdr.version} for [cyan]{hdr.directory}[/]")
    out_console.print(f"Files: {result['files']}")
    out_console.print(f"Functions: {result['functions']} ({result['indexed_functions']} distinct)")
    out_console.print(f"Edges: {result['edges']}")
    out_console.print(
        f"[dim]Trailer: {result['viewpaths']} viewpaths, {result['sources']} sources, "
        f"{result['includes']} include dirs[/]"
    )


@app.command()
def files(
    database: DatabaseOption = Path(DEFAULT_DATABASE_NAME),
    output_json: Annotated[bool, typer.Option("--json", "-j", help="Output as JSON")] = False,
    legacy_lines: Annotated[
        bool, typer.Option("--legacy-lines", help="Drop lines over 1024 bytes")
    ] = False,
) -> None:
    """List source files and the functions defined in each."""
    db, _ = load(database, legacy_lines=legacy_lines)

    if output_json:
        result = [
            {"path": f.path, "functions": sorted(f.definitions)}
            for f in db.files
        ]
        print(json.dumps(result))
        return

    if not db.files:
        console.print("No files in database")
        return

    table = Table("File", "Functions")
    for record in db.files:
        table.add_row(record.path, str(record.function_count))
    out_console.print(table)


if __name__ == "__main__":
    app()
