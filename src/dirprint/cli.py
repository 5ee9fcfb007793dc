"""CLI for dirprint."""

import json
import logging
from pathlib import Path
from typing import Iterable, List, Optional, Set

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from .config import DirprintConfig, load_config
from .core import ChangeType, Diff
from .errors import ConfigError, EnumerationFailedError, SnapshotError
from .ops import check as ops_check, load_snapshot, save_snapshot, snapshot_excludes
from .snapshot import capture as capture_fingerprint


app = typer.Typer(help="""\
Cheap change detection for directory trees. Fingerprint a directory from
file metadata only (path, size, mtime), store the fingerprint, and later
check whether anything was added, removed or modified.""")

console = Console()
err_console = Console(stderr=True)

EXIT_CHANGED = 1
EXIT_ERROR = 2

_CHANGE_STYLES = {
    ChangeType.ADDED: ("+", "green"),
    ChangeType.DELETED: ("-", "red"),
    ChangeType.MODIFIED: ("~", "yellow"),
}


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
):
    """Configure logging for all commands."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def _fail(error: Exception) -> None:
    """Print an error and exit with the error code."""
    err_console.print(f"[red]✗[/red] {escape(str(error))}")
    raise typer.Exit(EXIT_ERROR)


def _load_root_config(root: Path) -> DirprintConfig:
    try:
        return load_config(root)
    except ConfigError as e:
        _fail(e)


def _excluded(root: Path, config: DirprintConfig, extra: Optional[Iterable[Path]]) -> Set[str]:
    """Merge configured excludes with --exclude options (relative to cwd)."""
    excluded = config.excluded_paths(root)
    excluded.update(str(p.absolute()) for p in (extra or []))
    return excluded


def _render_diff(diff: Diff) -> None:
    """Print a diff as a table of changed paths."""
    table = Table(show_header=True, header_style="bold")
    table.add_column("", width=1)
    table.add_column("Path")
    table.add_column("Change", style="dim")
    for event in diff.to_events():
        symbol, color = _CHANGE_STYLES[event.change_type]
        table.add_row(f"[{color}]{symbol}[/{color}]", escape(event.path), event.change_type.value)
    console.print(table)
    console.print(diff.summary())


@app.command()
def capture(
    root: Path = typer.Argument(..., help="Directory to fingerprint"),
    exclude: Optional[List[Path]] = typer.Option(None, "--exclude", "-x", help="Subpath to prune (repeatable)"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write the fingerprint to this file"),
    as_json: bool = typer.Option(False, "--json", help="Print the full fingerprint as JSON"),
):
    """Capture a fingerprint and print its root hash.

    Examples:
        dirprint capture ~/Downloads
        dirprint capture . -x ./build -o /tmp/before.json
        dirprint capture data --json
    """
    config = _load_root_config(root)
    excluded = _excluded(root, config, exclude)
    if output is not None:
        excluded |= snapshot_excludes(root, output)
    try:
        fingerprint = capture_fingerprint(root, excluded, ignore=config.ignore_spec(root))
    except (EnumerationFailedError, OSError) as e:
        _fail(e)

    if output is not None:
        save_snapshot(fingerprint, output)

    if as_json:
        typer.echo(json.dumps(fingerprint.model_dump(), indent=2))
        return

    console.print(f"[bold]{fingerprint.hash}[/bold]  {len(fingerprint.entries)} files")
    if output is not None:
        console.print(f"[green]✓[/green] Saved to {escape(str(output))}")


@app.command()
def check(
    root: Path = typer.Argument(..., help="Directory to check"),
    snapshot: Optional[Path] = typer.Option(None, "--snapshot", "-s", help="Stored fingerprint (default: <root>/.dirprint/snapshot.json)"),
    exclude: Optional[List[Path]] = typer.Option(None, "--exclude", "-x", help="Subpath to prune (repeatable)"),
    update: bool = typer.Option(True, "--update/--no-update", help="Store the new fingerprint when it changed or none existed"),
):
    """Compare a directory against its stored fingerprint.

    Exits 0 when unchanged and 1 when something changed.

    Examples:
        dirprint check ~/Downloads
        dirprint check . --no-update
        dirprint check data -s /tmp/data.json
    """
    config = _load_root_config(root)
    snapshot_path = snapshot if snapshot is not None else config.snapshot_path(root)

    try:
        result = ops_check(
            root,
            snapshot_path,
            _excluded(root, config, exclude),
            ignore=config.ignore_spec(root),
            update=update,
        )
    except (EnumerationFailedError, SnapshotError, OSError) as e:
        _fail(e)

    if result.previous is None:
        console.print(f"[dim]No snapshot at {escape(str(snapshot_path))}, comparing against empty[/dim]")

    if not result.changed:
        console.print(f"[green]✓[/green] Unchanged ({result.current.hash})")
        return

    _render_diff(result.diff)
    if result.saved:
        console.print(f"[dim]Snapshot updated: {escape(str(snapshot_path))}[/dim]")
    raise typer.Exit(EXIT_CHANGED)


@app.command()
def diff(
    old: Path = typer.Argument(..., help="Earlier saved fingerprint"),
    new: Path = typer.Argument(..., help="Later saved fingerprint"),
):
    """Compare two saved fingerprints.

    Exits 0 when identical and 1 when they differ.
    """
    try:
        old_fp = load_snapshot(old)
        new_fp = load_snapshot(new)
    except SnapshotError as e:
        _fail(e)

    if not new_fp.changed(old_fp):
        console.print("[green]✓[/green] No changes")
        return

    _render_diff(new_fp.diff(old_fp))
    raise typer.Exit(EXIT_CHANGED)


if __name__ == "__main__":
    app()
