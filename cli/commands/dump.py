"""
Dump command - chunk map and hex dump of a MIDI file.
"""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from cli.display.hex_view import display_chunk_map, display_hex_dump, scan_chunks

console = Console()
app = typer.Typer()


@app.command()
def dump(
    file: Path = typer.Argument(..., help="MIDI file (.mid) to dump"),
    chunk: Optional[int] = typer.Option(
        None, "--chunk", "-c", min=0, help="Hex dump only this chunk (0 = MThd)"
    ),
    lines: int = typer.Option(32, "--lines", "-l", min=1, help="Maximum hex lines"),
) -> None:
    """
    Show the chunk layout and a raw hex dump.

    Works on damaged files too, since chunks are scanned without decoding.

    Examples:

        smfsplit dump song.mid

        smfsplit dump song.mid --chunk 1 --lines 64
    """
    if not file.exists():
        console.print(f"[red]Error: File not found: {file}[/red]")
        raise typer.Exit(1)

    with open(file, "rb") as f:
        data = f.read()

    display_chunk_map(data)

    if chunk is None:
        display_hex_dump(data, title=file.name, max_lines=lines)
        return

    chunks = scan_chunks(data)
    if chunk >= len(chunks):
        console.print(f"[red]Error: Chunk {chunk} not found ({len(chunks)} chunks)[/red]")
        raise typer.Exit(1)

    info = chunks[chunk]
    body = data[info.offset : info.offset + 8 + info.length]
    display_hex_dump(
        body,
        title=f"Chunk {chunk} ({info.chunk_type})",
        start_offset=info.offset,
        max_lines=lines,
    )


if __name__ == "__main__":
    app()
