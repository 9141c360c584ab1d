"""Tests for the SMF reader."""

import struct

import pytest

from conftest import END_OF_TRACK, build_smf, header_chunk, track_chunk
from smfsplit.errors import (
    BadHeaderLength,
    InvalidMagic,
    MalformedVLQ,
    MissingEndOfTrack,
    RunningStatusWithNoPriorEvent,
    SMFError,
    TrackLengthMismatch,
    TruncatedInput,
    UnexpectedChunkType,
    ValueOutOfRange,
)
from smfsplit.formats.smf.reader import SMFReader, read_smf
from smfsplit.models.event import ChannelEvent, EventType, MetaEvent, MetaType, SysExEvent


class TestHeader:
    """Test cases for MThd parsing."""

    def test_parse_header(self, song_data):
        smf = SMFReader.parse(song_data)

        assert smf.header.format == 1
        assert smf.header.track_count == 3
        assert smf.header.division == 480
        assert smf.header.ticks_per_quarter == 480
        assert len(smf.tracks) == 3

    def test_invalid_magic(self):
        data = b"RIFF" + build_smf([END_OF_TRACK])[4:]

        with pytest.raises(InvalidMagic):
            SMFReader.parse(data)

    def test_bad_header_length(self):
        data = b"MThd" + struct.pack(">IHHHH", 8, 1, 1, 96, 0) + track_chunk(END_OF_TRACK)

        with pytest.raises(BadHeaderLength):
            SMFReader.parse(data)

    def test_truncated_header_body(self):
        """A header declaring 6 bytes followed by only 4 is truncated."""
        data = b"MThd\x00\x00\x00\x06\x00\x01\x00\x02"

        with pytest.raises(TruncatedInput):
            SMFReader.parse(data)

    def test_empty_input(self):
        with pytest.raises(TruncatedInput):
            SMFReader.parse(b"")

    def test_unknown_format_rejected(self):
        data = header_chunk(3, 1) + track_chunk(END_OF_TRACK)

        with pytest.raises(ValueOutOfRange):
            SMFReader.parse(data)

    def test_smpte_division(self):
        # -25 fps, 40 ticks per frame
        data = build_smf([END_OF_TRACK], division=0xE728)
        header = SMFReader.parse(data).header

        assert header.is_smpte
        assert header.smpte_fps == 25
        assert header.ticks_per_frame == 40
        assert header.ticks_per_quarter == 0

    def test_all_errors_share_base_class(self):
        with pytest.raises(SMFError) as excinfo:
            SMFReader.parse(b"MThd")

        assert excinfo.value.kind == "TruncatedInput"


class TestChunks:
    """Test cases for MTrk chunk framing."""

    def test_unexpected_chunk_type(self):
        data = header_chunk(1, 2) + track_chunk(END_OF_TRACK) + b"XFIH\x00\x00\x00\x00"

        with pytest.raises(UnexpectedChunkType) as excinfo:
            SMFReader.parse(data)

        assert excinfo.value.offset == 14 + 12

    def test_missing_track_chunk(self):
        data = header_chunk(1, 2) + track_chunk(END_OF_TRACK)

        with pytest.raises(TruncatedInput):
            SMFReader.parse(data)

    def test_track_chunk_longer_than_file(self):
        data = header_chunk(1, 1) + b"MTrk" + struct.pack(">I", 100) + END_OF_TRACK

        with pytest.raises(TruncatedInput):
            SMFReader.parse(data)

    def test_trailing_chunks_preserved(self):
        data = build_smf([END_OF_TRACK]) + b"XMET\x00\x00\x00\x03abc"
        smf = SMFReader.parse(data)

        assert len(smf.trailing_chunks) == 1
        assert smf.trailing_chunks[0].chunk_type == b"XMET"
        assert smf.trailing_chunks[0].data == b"abc"

    def test_extra_track_chunk_rejected(self):
        body = b"\x00\x90\x3c\x64" + END_OF_TRACK
        data = header_chunk(1, 1) + track_chunk(body) + track_chunk(body)
        extra_offset = 14 + 8 + len(body)

        with pytest.raises(UnexpectedChunkType) as excinfo:
            SMFReader.parse(data)

        assert excinfo.value.offset == extra_offset

    def test_extra_track_chunk_after_unknown_chunk_rejected(self):
        data = build_smf([END_OF_TRACK]) + b"XMET\x00\x00\x00\x00" + track_chunk(END_OF_TRACK)

        with pytest.raises(UnexpectedChunkType):
            SMFReader.parse(data)

    def test_partial_trailing_chunk_rejected(self):
        data = build_smf([END_OF_TRACK]) + b"XM"

        with pytest.raises(TruncatedInput):
            SMFReader.parse(data)


class TestTrackEvents:
    """Test cases for event decoding."""

    def test_decode_events(self, song_data):
        smf = SMFReader.parse(song_data)
        piano = smf.tracks[1]

        assert piano.name == "Piano"
        assert piano.events[1] == ChannelEvent(0, EventType.PROGRAM_CHANGE, 0, 0, 0)
        assert piano.events[2] == ChannelEvent(0, EventType.CONTROL_CHANGE, 0, 7, 100)
        assert piano.events[3] == ChannelEvent(0, EventType.NOTE_ON, 0, 60, 80)
        assert piano.events[5].is_note_off
        assert piano.events[7].pitch == 0x50 * 128 - 8192
        assert piano.events[8].delta_time == 192
        assert piano.events[-1] == MetaEvent(0, MetaType.END_OF_TRACK, b"")

    def test_decode_meta_events(self, song_data):
        conductor = SMFReader.parse(song_data).tracks[0]

        tempo = conductor.events[1]
        assert tempo.tempo == 500000
        assert tempo.bpm == pytest.approx(120.0)
        assert conductor.events[2].time_signature == (4, 4)
        assert conductor.events[3].key_signature == (-1, False)
        assert conductor.events[4].delta_time == 384
        assert conductor.duration_ticks == 384

    def test_running_status(self, running_status_data):
        smf = SMFReader.parse(running_status_data)
        events = smf.tracks[0].events

        assert smf.running_status
        assert [e.data1 for e in events[:4]] == [0x3C, 0x40, 0x3C, 0x40]
        assert all(e.event_type == EventType.NOTE_ON for e in events[:4])
        assert events[2].delta_time == 0x60

    def test_no_running_status_flag(self, two_track_data):
        assert not SMFReader.parse(two_track_data).running_status

    def test_running_status_survives_meta_event(self):
        body = b"\x00\x90\x3c\x64\x00\xff\x01\x01x\x10\x3c\x00" + END_OF_TRACK
        events = SMFReader.parse(build_smf([body])).tracks[0].events

        assert events[2] == ChannelEvent(0x10, EventType.NOTE_ON, 0, 0x3C, 0)

    def test_running_status_with_no_prior_event(self):
        data = build_smf([b"\x00\x3c\x64" + END_OF_TRACK])

        with pytest.raises(RunningStatusWithNoPriorEvent) as excinfo:
            SMFReader.parse(data)

        assert excinfo.value.offset == 14 + 8 + 1

    def test_running_status_is_per_track(self):
        data = build_smf([b"\x00\x90\x3c\x64" + END_OF_TRACK, b"\x00\x3c\x64" + END_OF_TRACK])

        with pytest.raises(RunningStatusWithNoPriorEvent):
            SMFReader.parse(data)

    def test_sysex_events(self):
        body = (
            b"\x00\xf0\x05\x7e\x7f\x09\x01\xf7"
            b"\x00\xf0\x03\x43\x12\x00"
            b"\x10\xf7\x02\x43\xf7"
            + END_OF_TRACK
        )
        events = SMFReader.parse(build_smf([body])).tracks[0].events

        assert events[0] == SysExEvent(0, b"\x7e\x7f\x09\x01\xf7")
        assert not events[1].escape
        assert events[2] == SysExEvent(0x10, b"\x43\xf7", escape=True)

    def test_one_data_byte_messages(self):
        body = b"\x00\xc5\x10\x00\xd5\x20" + END_OF_TRACK
        events = SMFReader.parse(build_smf([body])).tracks[0].events

        assert events[0] == ChannelEvent(0, EventType.PROGRAM_CHANGE, 5, 0x10, 0)
        assert events[1] == ChannelEvent(0, EventType.CHANNEL_PRESSURE, 5, 0x20, 0)

    def test_channel_mode_message(self):
        body = b"\x00\xb3\x7b\x00" + END_OF_TRACK
        event = SMFReader.parse(build_smf([body])).tracks[0].events[0]

        assert event.is_channel_mode
        assert event.channel == 3

    def test_missing_end_of_track(self):
        data = build_smf([b"\x00\x90\x3c\x64"])

        with pytest.raises(MissingEndOfTrack):
            SMFReader.parse(data)

    def test_empty_track_body(self):
        with pytest.raises(MissingEndOfTrack):
            SMFReader.parse(build_smf([b""]))

    def test_bytes_after_end_of_track(self):
        data = build_smf([END_OF_TRACK + b"\x00\x90\x3c\x64"])

        with pytest.raises(TrackLengthMismatch):
            SMFReader.parse(data)

    def test_event_overruns_chunk(self):
        """An event cut by the declared length is a length mismatch."""
        body = b"\x00\x90\x3c\x64" + END_OF_TRACK
        data = header_chunk(1, 1) + b"MTrk" + struct.pack(">I", 3) + body

        with pytest.raises(TrackLengthMismatch):
            SMFReader.parse(data)

    def test_meta_payload_overruns_chunk(self):
        data = build_smf([b"\x00\xff\x03\x20abc"])

        with pytest.raises(TrackLengthMismatch):
            SMFReader.parse(data)

    def test_malformed_delta_time(self):
        data = build_smf([b"\xff\xff\xff\xff\x00\x90\x3c\x64" + END_OF_TRACK])

        with pytest.raises(MalformedVLQ):
            SMFReader.parse(data)

    @pytest.mark.parametrize("status", [0xF1, 0xF2, 0xF8, 0xFE])
    def test_system_status_rejected(self, status):
        data = build_smf([bytes([0x00, status, 0x00]) + END_OF_TRACK])

        with pytest.raises(ValueOutOfRange):
            SMFReader.parse(data)

    def test_status_byte_in_data_position(self):
        data = build_smf([b"\x00\x90\x3c\x90" + END_OF_TRACK])

        with pytest.raises(ValueOutOfRange):
            SMFReader.parse(data)


class TestReadFile:
    """Test cases for file-based reading."""

    def test_read_file(self, song_file):
        smf = read_smf(song_file)

        assert smf.track_names() == ["Tempo", "Piano", "Bass"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            SMFReader.read(tmp_path / "missing.mid")
