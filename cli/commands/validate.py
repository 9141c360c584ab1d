"""
Validate command - check MIDI file structure and round-trip integrity.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

import typer
from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from smfsplit.errors import SMFError
from smfsplit.formats.smf.reader import SMFReader
from smfsplit.formats.smf.writer import SMFWriter
from smfsplit.models.smf import MidiFile

console = Console()
app = typer.Typer()


@dataclass
class ValidationIssue:
    """A single validation issue."""

    severity: str  # "error", "warning", "info"
    area: str
    message: str
    offset: Optional[int] = None


@dataclass
class ValidationResult:
    """Result of validating a MIDI file."""

    filepath: str
    valid: bool
    errors: List[ValidationIssue] = field(default_factory=list)
    warnings: List[ValidationIssue] = field(default_factory=list)
    info: List[ValidationIssue] = field(default_factory=list)

    @property
    def total_issues(self) -> int:
        return len(self.errors) + len(self.warnings) + len(self.info)


class SMFValidator:
    """Validate SMF structure, splittability and encode/decode round-trip."""

    def __init__(self, data: bytes, filepath: str):
        self.data = data
        self.filepath = filepath
        self.issues: List[ValidationIssue] = []

    def validate(self) -> ValidationResult:
        """Perform full validation and return result."""
        self.issues = []

        smf = self._validate_decode()
        if smf is not None:
            self._validate_header(smf)
            self._validate_tracks(smf)
            self._validate_roundtrip(smf)

        errors = [i for i in self.issues if i.severity == "error"]
        warnings = [i for i in self.issues if i.severity == "warning"]
        info = [i for i in self.issues if i.severity == "info"]

        return ValidationResult(
            filepath=self.filepath,
            valid=not errors,
            errors=errors,
            warnings=warnings,
            info=info,
        )

    def _add_issue(
        self, severity: str, area: str, message: str, offset: Optional[int] = None
    ) -> None:
        self.issues.append(ValidationIssue(severity, area, message, offset))

    def _validate_decode(self) -> Optional[MidiFile]:
        try:
            smf = SMFReader.parse(self.data)
        except SMFError as e:
            self._add_issue("error", e.kind, e.message, e.offset)
            return None

        self._add_issue("info", "Decode", f"Decoded {len(smf.tracks)} track(s)")
        return smf

    def _validate_header(self, smf: MidiFile) -> None:
        if smf.format == 0:
            self._add_issue(
                "warning", "Format", "Format 0 file cannot be split into tracks", 8
            )
        else:
            self._add_issue("info", "Format", f"Format {smf.format} is splittable")

        if smf.header.division == 0:
            self._add_issue("warning", "Division", "Time division is zero", 12)

        for chunk in smf.trailing_chunks:
            self._add_issue(
                "warning",
                "Chunks",
                f"Unrecognized chunk {chunk.chunk_type!r} ({len(chunk.data)} bytes) kept as is",
            )

    def _validate_tracks(self, smf: MidiFile) -> None:
        durations = {t.duration_ticks for t in smf.tracks}
        if len(durations) > 1:
            self._add_issue(
                "info",
                "Tracks",
                f"Track lengths differ ({min(durations)}-{max(durations)} ticks)",
            )

        for index, track in enumerate(smf.tracks):
            if track.note_count == 0:
                self._add_issue("info", "Tracks", f"Track {index} has no notes")

    def _validate_roundtrip(self, smf: MidiFile) -> None:
        try:
            encoded = SMFWriter().to_bytes(smf)
            decoded = SMFReader.parse(encoded)
        except SMFError as e:
            self._add_issue("error", "Round-trip", f"{e.kind}: {e.message}")
            return

        if encoded == self.data:
            self._add_issue("info", "Round-trip", "Re-encoding is byte-identical")
        elif decoded.tracks == smf.tracks and decoded.header == smf.header:
            self._add_issue(
                "warning",
                "Round-trip",
                "Re-encoding differs in bytes but decodes to identical events",
            )
        else:
            self._add_issue("error", "Round-trip", "Re-encoded file decodes to different events")


def display_validation(result: ValidationResult, verbose: bool = False) -> None:
    """Display validation result with Rich formatting."""
    if result.valid:
        status = "[bold green]VALID[/bold green]"
        border = "green"
    else:
        status = "[bold red]INVALID[/bold red]"
        border = "red"

    console.print(
        Panel(
            f"[bold]File:[/bold] {result.filepath}\n"
            f"[bold]Status:[/bold] {status}\n\n"
            f"Errors: [red]{len(result.errors)}[/red]  "
            f"Warnings: [yellow]{len(result.warnings)}[/yellow]  "
            f"Info: [blue]{len(result.info)}[/blue]",
            title="[bold]Validation Result[/bold]",
            border_style=border,
        )
    )

    if result.errors or result.warnings:
        table = Table(title="Issues", box=box.ROUNDED, show_header=True, header_style="bold cyan")
        table.add_column("Severity", width=10)
        table.add_column("Area", style="cyan", width=20)
        table.add_column("Offset", style="dim", width=10)
        table.add_column("Message")

        rows = [("[red]ERROR[/red]", i) for i in result.errors]
        rows += [("[yellow]WARN[/yellow]", i) for i in result.warnings]

        for label, issue in rows:
            offset = f"0x{issue.offset:X}" if issue.offset is not None else "-"
            table.add_row(label, issue.area, offset, issue.message)

        console.print(table)

    if result.info and (verbose or not (result.errors or result.warnings)):
        info_table = Table(title="Validation Checks", box=box.SIMPLE, show_header=False)
        info_table.add_column("", width=70)

        for issue in result.info:
            info_table.add_row(f"[green]OK[/green] {issue.area}: {issue.message}")

        console.print(info_table)


@app.command()
def validate(
    file: Path = typer.Argument(..., help="MIDI file (.mid) to validate"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show all validation details"),
    strict: bool = typer.Option(False, "--strict", "-s", help="Treat warnings as errors"),
) -> None:
    """
    Validate a MIDI file structure.

    Checks for:

    - Valid MThd/MTrk chunks and chunk lengths
    - Well-formed events and End-of-Track markers
    - Splittable format (1 or 2)
    - Lossless decode/encode round-trip

    Examples:

        smfsplit validate song.mid

        smfsplit validate song.mid --strict
    """
    if not file.exists():
        console.print(f"[red]Error: File not found: {file}[/red]")
        raise typer.Exit(1)

    with open(file, "rb") as f:
        data = f.read()

    result = SMFValidator(data, str(file)).validate()

    if strict and result.warnings:
        result.valid = False

    display_validation(result, verbose)

    if not result.valid:
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
