"""
smfsplit - Split Standard MIDI Files into one file per track.

A CLI for splitting, inspecting and validating MIDI files.
"""

import typer
from rich.console import Console

from smfsplit import __version__
from cli.log import setup_logging
from cli.commands.split import split
from cli.commands.info import info
from cli.commands.events import events
from cli.commands.validate import validate
from cli.commands.dump import dump

console = Console()

# Main app
app = typer.Typer(
    name="smfsplit",
    help="Split Standard MIDI Files into one file per track.",
    add_completion=False,
    rich_markup_mode="rich",
)

# Add commands directly
app.command(name="split")(split)
app.command(name="info")(info)
app.command(name="events")(events)
app.command(name="validate")(validate)
app.command(name="dump")(dump)


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]smfsplit[/bold] version {__version__}")
    console.print("[dim]Per-track splitter for Standard MIDI Files[/dim]")


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version_flag: bool = typer.Option(False, "--version", "-V", help="Show version"),
    debug: bool = typer.Option(False, "--debug", help="Show debug log output"),
) -> None:
    """
    smfsplit - Split MIDI files into one file per track.

    Each output keeps every track, tempo change and controller of the
    input, with the notes of all other tracks silenced.

    [bold]Quick Start:[/bold]

        smfsplit split song.mid           # One file per track
        smfsplit split song.mid --zip     # Same, bundled as song.zip

    [bold]Analysis Commands:[/bold]

        smfsplit info song.mid            # Header and track summary
        smfsplit events song.mid -t 1     # Decoded events of track 1
        smfsplit dump song.mid            # Chunk map and hex dump

    [bold]Utility Commands:[/bold]

        smfsplit validate song.mid        # Structure and round-trip check

    Use --help with any command for more details.
    """
    setup_logging(debug)

    if version_flag:
        version()
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())


def run() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    run()
