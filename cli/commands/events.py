"""
Events command - list decoded track events.
"""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from smfsplit.errors import SMFError
from smfsplit.formats.smf.reader import SMFReader
from cli.display.tables import display_events

console = Console()
app = typer.Typer()


@app.command()
def events(
    file: Path = typer.Argument(..., help="MIDI file (.mid) to inspect"),
    track: Optional[int] = typer.Option(
        None, "--track", "-t", min=0, help="Track index (default: all tracks)"
    ),
    limit: Optional[int] = typer.Option(
        50, "--limit", "-n", min=1, help="Maximum events shown per track"
    ),
    show_all: bool = typer.Option(False, "--all", "-a", help="Show every event (ignore --limit)"),
) -> None:
    """
    List the decoded events of one or all tracks.

    Examples:

        smfsplit events song.mid

        smfsplit events song.mid --track 2 --all
    """
    if not file.exists():
        console.print(f"[red]Error: File not found: {file}[/red]")
        raise typer.Exit(1)

    try:
        smf = SMFReader.read(file)
    except SMFError as e:
        console.print(f"[red]Error ({e.kind}): {e}[/red]")
        raise typer.Exit(1)

    if track is not None and track >= len(smf.tracks):
        console.print(
            f"[red]Error: Track {track} out of range (file has {len(smf.tracks)} tracks)[/red]"
        )
        raise typer.Exit(1)

    indices = [track] if track is not None else range(len(smf.tracks))
    for index in indices:
        display_events(smf.tracks[index], index, None if show_all else limit)


if __name__ == "__main__":
    app()
