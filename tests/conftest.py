"""Test configuration and fixtures."""

import struct
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

END_OF_TRACK = b"\x00\xff\x2f\x00"


def header_chunk(smf_format: int = 1, track_count: int = 2, division: int = 96) -> bytes:
    """Build an MThd chunk."""
    return b"MThd" + struct.pack(">IHHH", 6, smf_format, track_count, division)


def track_chunk(body: bytes) -> bytes:
    """Build an MTrk chunk around a raw event body."""
    return b"MTrk" + struct.pack(">I", len(body)) + body


def build_smf(bodies, smf_format: int = 1, division: int = 96) -> bytes:
    """Build a complete SMF from raw track bodies."""
    data = header_chunk(smf_format, len(bodies), division)
    for body in bodies:
        data += track_chunk(body)
    return data


@pytest.fixture
def two_track_data():
    """Format 1, two tracks, one note-on at velocity 100 each."""
    return build_smf(
        [
            b"\x00\x90\x3c\x64" + END_OF_TRACK,
            b"\x00\x91\x40\x64" + END_OF_TRACK,
        ]
    )


@pytest.fixture
def song_data():
    """
    Format 1 file with a conductor track and two instrument tracks.

    Track 0: tempo, time signature, key signature, name
    Track 1: "Piano" on channel 0, program change, notes, controller, pitch bend
    Track 2: "Bass" on channel 1, notes terminated by note-off events
    """
    conductor = (
        b"\x00\xff\x03\x05Tempo"
        b"\x00\xff\x51\x03\x07\xa1\x20"  # 120 BPM
        b"\x00\xff\x58\x04\x04\x02\x18\x08"  # 4/4
        b"\x00\xff\x59\x02\xff\x00"  # 1 flat, major
        b"\x83\x00\xff\x51\x03\x06\x1a\x80"  # 150 BPM at tick 384
        + END_OF_TRACK
    )
    piano = (
        b"\x00\xff\x03\x05Piano"
        b"\x00\xc0\x00"
        b"\x00\xb0\x07\x64"
        b"\x00\x90\x3c\x50"
        b"\x00\x90\x40\x5a"
        b"\x60\x90\x3c\x00"
        b"\x00\x90\x40\x00"
        b"\x10\xe0\x00\x50"
        b"\x81\x40\x90\x43\x7f"
        b"\x60\x80\x43\x40"
        + END_OF_TRACK
    )
    bass = (
        b"\x00\xff\x03\x04Bass"
        b"\x00\xc1\x21"
        b"\x00\x91\x24\x64"
        b"\x81\x70\x81\x24\x00"
        b"\x00\x91\x28\x01"
        b"\x60\x81\x28\x00"
        + END_OF_TRACK
    )
    return build_smf([conductor, piano, bass], division=480)


@pytest.fixture
def running_status_data():
    """Format 1, single track using running status for note events."""
    body = (
        b"\x00\x90\x3c\x64"
        b"\x00\x40\x64"  # running status note-on
        b"\x60\x3c\x00"
        b"\x00\x40\x00"
        + END_OF_TRACK
    )
    return build_smf([body, b"\x00\x91\x30\x40" + END_OF_TRACK])


@pytest.fixture
def format0_data():
    """Format 0 file with notes on two channels."""
    body = b"\x00\x90\x3c\x64\x00\x91\x40\x64\x60\x80\x3c\x00\x00\x81\x40\x00" + END_OF_TRACK
    return build_smf([body], smf_format=0)


@pytest.fixture
def song_file(tmp_path, song_data):
    """Write song_data to a .mid file and return its path."""
    path = tmp_path / "song.mid"
    path.write_bytes(song_data)
    return path
