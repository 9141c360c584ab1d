"""
Track splitting for Standard MIDI Files.

Example:
    from smfsplit.converters import split_midi_bytes

    outputs = split_midi_bytes(data, "song.mid")
"""

from smfsplit.converters.splitter import TrackSplitter, split_tracks
from smfsplit.converters.orchestrator import (
    SplitOutput,
    build_zip,
    sanitize_name,
    split_midi_bytes,
)

__all__ = [
    "TrackSplitter",
    "split_tracks",
    "SplitOutput",
    "build_zip",
    "sanitize_name",
    "split_midi_bytes",
]
