"""
Chunk map and hex dump display.
"""

from typing import List, NamedTuple

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

console = Console()


class ChunkInfo(NamedTuple):
    offset: int
    chunk_type: str
    length: int
    complete: bool


def scan_chunks(data: bytes) -> List[ChunkInfo]:
    """
    List the chunks of an SMF without decoding them.

    Scanning stops at the first chunk whose header or body is cut short.
    """
    chunks = []
    offset = 0

    while offset + 8 <= len(data):
        chunk_type = data[offset : offset + 4].decode("latin-1")
        length = int.from_bytes(data[offset + 4 : offset + 8], "big")
        complete = offset + 8 + length <= len(data)
        chunks.append(ChunkInfo(offset, chunk_type, length, complete))
        if not complete:
            break
        offset += 8 + length

    return chunks


def display_chunk_map(data: bytes) -> None:
    """Display the chunk layout of a file."""
    table = Table(title="Chunks", box=box.ROUNDED, show_header=True, header_style="bold magenta")
    table.add_column("#", style="dim", width=3)
    table.add_column("Offset", style="dim", width=10)
    table.add_column("Type", style="cyan", width=6)
    table.add_column("Length", justify="right", width=10)
    table.add_column("Status", width=12)

    for index, chunk in enumerate(scan_chunks(data)):
        status = "[green]OK[/green]" if chunk.complete else "[red]Truncated[/red]"
        table.add_row(
            str(index), f"0x{chunk.offset:06X}", chunk.chunk_type, str(chunk.length), status
        )

    console.print(table)


def display_hex_dump(
    data: bytes,
    title: str = "Hex Dump",
    start_offset: int = 0,
    bytes_per_line: int = 16,
    max_lines: int = 32,
) -> None:
    """Display formatted hex dump with Rich."""
    lines = []
    end = min(len(data), max_lines * bytes_per_line)

    for offset in range(0, end, bytes_per_line):
        chunk = data[offset : offset + bytes_per_line]
        hex_str = " ".join(f"{b:02X}" for b in chunk)
        ascii_str = "".join(chr(b) if 32 <= b < 127 else "." for b in chunk)
        lines.append(
            f"[dim]{start_offset + offset:08X}[/dim]  "
            f"{hex_str:<{bytes_per_line * 3}} [cyan]{escape(ascii_str)}[/cyan]"
        )

    if len(data) > end:
        lines.append(f"[dim]... {len(data) - end} more bytes ...[/dim]")

    console.print(Panel("\n".join(lines), title=title, border_style="blue", expand=False))
