"""
smfsplit - Split Standard MIDI Files into one file per track.

Each output keeps every track of the input, with the same timing, tempo
map and controller data, but only one track left audible.

Example usage:
    from smfsplit import SMFReader, SMFWriter, TrackSplitter

    smf = SMFReader.read("song.mid")
    for index, variant in enumerate(TrackSplitter().split(smf)):
        SMFWriter.write(variant, f"song_{index}.mid")
"""

__version__ = "0.1.0"
__author__ = "smfsplit Contributors"

from smfsplit.config import SplitOptions, VelocityPolicy
from smfsplit.converters.orchestrator import SplitOutput, build_zip, split_midi_bytes
from smfsplit.converters.splitter import TrackSplitter
from smfsplit.errors import SMFError
from smfsplit.formats.smf.reader import SMFReader
from smfsplit.formats.smf.writer import SMFWriter
from smfsplit.models.smf import Header, MidiFile
from smfsplit.models.track import Track

__all__ = [
    "SMFReader",
    "SMFWriter",
    "TrackSplitter",
    "SplitOptions",
    "SplitOutput",
    "VelocityPolicy",
    "SMFError",
    "Header",
    "MidiFile",
    "Track",
    "build_zip",
    "split_midi_bytes",
]
