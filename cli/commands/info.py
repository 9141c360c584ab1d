"""
Info command - display MIDI file header and track summary.
"""

from pathlib import Path

import typer
from rich.console import Console

from smfsplit.errors import SMFError
from smfsplit.formats.smf.reader import SMFReader
from cli.display.tables import display_smf_info, display_tracks_table

console = Console()
app = typer.Typer()


@app.command()
def info(
    file: Path = typer.Argument(..., help="MIDI file (.mid) to analyze"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show tracebacks on errors"),
) -> None:
    """
    Show header information and a per-track summary.

    Examples:

        smfsplit info song.mid
    """
    if not file.exists():
        console.print(f"[red]Error: File not found: {file}[/red]")
        raise typer.Exit(1)

    with open(file, "rb") as f:
        data = f.read()

    try:
        smf = SMFReader.parse(data)
    except SMFError as e:
        console.print(f"[red]Error ({e.kind}): {e}[/red]")
        if verbose:
            console.print_exception()
        raise typer.Exit(1)

    display_smf_info(smf, str(file), len(data))
    display_tracks_table(smf)


if __name__ == "__main__":
    app()
