"""
Split command - write one MIDI file per track.
"""

import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn

from smfsplit.config import DEFAULT_REDUCTION, SplitOptions, VelocityPolicy
from smfsplit.converters.orchestrator import build_zip, split_midi_bytes
from smfsplit.errors import SMFError
from cli.display.tables import display_split_results

console = Console()
app = typer.Typer()
logger = logging.getLogger(__name__)


@app.command()
def split(
    files: List[Path] = typer.Argument(..., help="MIDI files (.mid) to split"),
    output_dir: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Output directory (default: next to each input)"
    ),
    policy: VelocityPolicy = typer.Option(
        VelocityPolicy.MUTE,
        "--policy",
        "-p",
        envvar="SMFSPLIT_POLICY",
        case_sensitive=False,
        help="What to do with note velocities of the other tracks",
    ),
    reduction: int = typer.Option(
        DEFAULT_REDUCTION,
        "--reduction",
        "-r",
        envvar="SMFSPLIT_REDUCTION",
        min=0,
        max=127,
        help="Velocity reduction for --policy reduce",
    ),
    include_all: bool = typer.Option(
        False, "--all", "-a", help="Also write an unmodified '<name>_All' file"
    ),
    as_zip: bool = typer.Option(False, "--zip", "-z", help="Bundle outputs into one zip per input"),
    running_status: Optional[bool] = typer.Option(
        None,
        "--running-status/--no-running-status",
        help="Force running status on or off (default: same as input)",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show detailed progress"),
) -> None:
    """
    Split MIDI files into one file per track.

    Every output keeps all tracks, tempo changes and controllers of the
    input; only the notes of the other tracks are silenced.

    Examples:

        smfsplit split song.mid

        smfsplit split song.mid -o stems --zip

        smfsplit split *.mid --policy reduce --reduction 40
    """
    options = SplitOptions(
        policy=policy,
        reduction=reduction,
        include_all=include_all,
        running_status=running_status,
    )
    failed = 0

    for source in files:
        if not source.exists():
            console.print(f"[red]Error: File not found: {source}[/red]")
            failed += 1
            continue

        target_dir = output_dir or source.parent

        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
            transient=not verbose,
        ) as progress:
            task = progress.add_task(f"Splitting {source.name}...", total=None)

            try:
                with open(source, "rb") as f:
                    data = f.read()
                outputs = split_midi_bytes(data, source.name, options)
            except SMFError as e:
                console.print(f"[red]Error ({e.kind}): {source}: {e}[/red]")
                if verbose:
                    console.print_exception()
                failed += 1
                continue

            target_dir.mkdir(parents=True, exist_ok=True)
            archive = None

            if as_zip:
                archive = f"{source.stem}.zip"
                with open(target_dir / archive, "wb") as f:
                    f.write(build_zip(outputs))
            else:
                for output in outputs:
                    with open(target_dir / output.name, "wb") as f:
                        f.write(output.data)

            progress.update(task, description="Done!")

        logger.debug("Wrote %d outputs for %s", len(outputs), source)
        display_split_results(str(source), outputs, target_dir, archive)

    if failed:
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
