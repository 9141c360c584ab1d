"""
Standard MIDI File aggregate model.
"""

from dataclasses import dataclass, field
from typing import List

from smfsplit.models.track import Track


@dataclass
class Header:
    """
    Contents of the MThd chunk.

    Attributes:
        format: 0 (single track), 1 (simultaneous tracks), 2 (independent patterns)
        track_count: Number of MTrk chunks
        division: Raw time division word, copied unchanged to every output
    """

    format: int
    track_count: int
    division: int

    @property
    def is_smpte(self) -> bool:
        return bool(self.division & 0x8000)

    @property
    def ticks_per_quarter(self) -> int:
        """Ticks per quarter note (0 for SMPTE timing)."""
        if self.is_smpte:
            return 0
        return self.division & 0x7FFF

    @property
    def smpte_fps(self) -> int:
        """SMPTE frames per second (0 for metrical timing)."""
        if not self.is_smpte:
            return 0
        # Upper byte is the negative frame rate in two's complement
        return 256 - (self.division >> 8)

    @property
    def ticks_per_frame(self) -> int:
        if not self.is_smpte:
            return 0
        return self.division & 0xFF


@dataclass
class UnknownChunk:
    """A non-MThd/MTrk chunk kept opaquely for round-tripping."""

    chunk_type: bytes
    data: bytes


@dataclass
class MidiFile:
    """
    Complete in-memory representation of one SMF.

    Attributes:
        header: Parsed header chunk
        tracks: One Track per MTrk chunk, in file order
        trailing_chunks: Unrecognized chunks found after the last track
        running_status: Whether the source used running-status compression
    """

    header: Header
    tracks: List[Track] = field(default_factory=list)
    trailing_chunks: List[UnknownChunk] = field(default_factory=list)
    running_status: bool = False

    @property
    def format(self) -> int:
        return self.header.format

    @property
    def duration_ticks(self) -> int:
        return max((t.duration_ticks for t in self.tracks), default=0)

    def track_names(self) -> List[str]:
        return [t.name or "" for t in self.tracks]
