"""
Rich table displays for MIDI file information.
"""

from pathlib import Path
from typing import Optional, Sequence

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from smfsplit.converters.orchestrator import SplitOutput
from smfsplit.models.event import ChannelEvent, MetaEvent
from smfsplit.models.smf import MidiFile
from smfsplit.models.track import Track
from cli.display.formatters import (
    event_details,
    event_kind,
    format_division,
    format_optional,
    value_bar,
)

console = Console()

FORMAT_NAMES = {
    0: "0 (single track)",
    1: "1 (simultaneous tracks)",
    2: "2 (independent patterns)",
}


def display_smf_info(smf: MidiFile, filepath: str, filesize: int) -> None:
    """Display header information for a MIDI file."""
    tempos = [
        e.bpm
        for t in smf.tracks
        for e in t.events
        if isinstance(e, MetaEvent) and e.bpm is not None
    ]
    tempo = f"{tempos[0]:.2f} BPM" if tempos else "120.00 BPM (default)"
    if len(tempos) > 1:
        tempo += f" [dim](+{len(tempos) - 1} changes)[/dim]"

    splittable = "[green]Yes[/green]" if smf.format != 0 else "[red]No (format 0)[/red]"

    content = f"""[bold]File:[/bold] {filepath}
[bold]Size:[/bold] {filesize} bytes
[bold]Format:[/bold] {FORMAT_NAMES.get(smf.format, str(smf.format))}
[bold]Tracks:[/bold] {smf.header.track_count}
[bold]Division:[/bold] {format_division(smf.header)}
[bold]Tempo:[/bold] {tempo}
[bold]Length:[/bold] {smf.duration_ticks} ticks
[bold]Running Status:[/bold] {"used" if smf.running_status else "not used"}
[bold]Splittable:[/bold] {splittable}"""

    if smf.trailing_chunks:
        chunk_types = ", ".join(c.chunk_type.decode("latin-1") for c in smf.trailing_chunks)
        content += f"\n[bold]Extra Chunks:[/bold] {chunk_types}"

    console.print(
        Panel(
            content,
            title="[bold blue]MIDI File Info[/bold blue]",
            border_style="blue",
            expand=False,
        )
    )


def display_tracks_table(smf: MidiFile) -> None:
    """Display one row per track."""
    table = Table(title="Tracks", box=box.ROUNDED, show_header=True, header_style="bold magenta")
    table.add_column("#", style="dim", width=3)
    table.add_column("Name", style="cyan", width=24)
    table.add_column("Events", justify="right", width=8)
    table.add_column("Notes", justify="right", width=8)
    table.add_column("Channels", width=14)
    table.add_column("Max Velocity", width=18)
    table.add_column("Length", justify="right", width=10)

    for index, track in enumerate(smf.tracks):
        channels = ", ".join(str(c + 1) for c in sorted(track.channels)) or "-"
        table.add_row(
            str(index),
            format_optional(track.name, "[dim]-[/dim]"),
            str(len(track)),
            str(track.note_count),
            channels,
            value_bar(_max_velocity(track)),
            str(track.duration_ticks),
        )

    console.print(table)


def _max_velocity(track: Track) -> int:
    return max(
        (e.velocity for e in track.events if isinstance(e, ChannelEvent) and e.is_note_on),
        default=0,
    )


def display_events(track: Track, index: int, limit: Optional[int] = None) -> None:
    """Display the decoded events of one track."""
    title = f"Track {index}"
    if track.name:
        title += f" - {track.name}"

    table = Table(title=title, box=box.SIMPLE, show_header=True, header_style="bold cyan")
    table.add_column("Tick", justify="right", style="dim", width=8)
    table.add_column("Delta", justify="right", width=6)
    table.add_column("Ch", justify="right", width=3)
    table.add_column("Event", style="cyan", width=18)
    table.add_column("Details")

    shown = track.events if limit is None else track.events[:limit]
    for tick, event in zip(track.absolute_times(), shown):
        channel = str(event.channel + 1) if isinstance(event, ChannelEvent) else ""
        table.add_row(
            str(tick),
            str(event.delta_time),
            channel,
            event_kind(event),
            escape(event_details(event)),
        )

    console.print(table)

    if len(shown) < len(track.events):
        console.print(f"[dim]... {len(track.events) - len(shown)} more events[/dim]")


def display_split_results(
    source: str, outputs: Sequence[SplitOutput], output_dir: Path, archive: Optional[str] = None
) -> None:
    """Display the files produced for one input."""
    table = Table(
        title=f"Split: {source}", box=box.ROUNDED, show_header=True, header_style="bold green"
    )
    table.add_column("#", style="dim", width=4)
    table.add_column("Track Name", style="cyan", width=24)
    table.add_column("Output", width=40)
    table.add_column("Size", justify="right", width=10)

    for output in outputs:
        table.add_row(
            "all" if output.index is None else str(output.index),
            format_optional(output.track_name, "[dim]-[/dim]"),
            output.name,
            f"{len(output.data)} B",
        )

    console.print(table)

    if archive:
        console.print(f"[green]Wrote archive:[/green] {output_dir / archive}")
    else:
        console.print(f"[green]Wrote {len(outputs)} file(s) to[/green] {output_dir}")
