"""Tests for the bytes-in, bytes-out split entry point."""

import io
import zipfile

import pytest

from conftest import END_OF_TRACK, build_smf
from smfsplit.config import SplitOptions, VelocityPolicy
from smfsplit.converters.orchestrator import build_zip, sanitize_name, split_midi_bytes
from smfsplit.errors import NotSplittable, TruncatedInput, ValueOutOfRange
from smfsplit.formats.smf.reader import SMFReader


class TestSplitMidiBytes:
    """Test cases for split_midi_bytes."""

    def test_one_output_per_track(self, song_data):
        outputs = split_midi_bytes(song_data, "song.mid")

        assert [o.index for o in outputs] == [0, 1, 2]
        assert [o.name for o in outputs] == [
            "song_Tempo.mid",
            "song_Piano.mid",
            "song_Bass.mid",
        ]
        assert [o.track_name for o in outputs] == ["Tempo", "Piano", "Bass"]

    def test_outputs_decode(self, song_data):
        for output in split_midi_bytes(song_data, "song.mid"):
            smf = SMFReader.parse(output.data)
            assert smf.header.track_count == 3
            for index, track in enumerate(smf.tracks):
                if index != output.index:
                    assert track.note_count == 0

    def test_default_names_without_track_name(self, two_track_data):
        outputs = split_midi_bytes(two_track_data, "duo.MID")

        assert [o.name for o in outputs] == ["duo_track-0.MID", "duo_track-1.MID"]
        assert all(o.track_name is None for o in outputs)

    def test_include_all(self, song_data):
        outputs = split_midi_bytes(song_data, "song.mid", SplitOptions(include_all=True))

        assert len(outputs) == 4
        assert outputs[-1].index is None
        assert outputs[-1].name == "song_All.mid"
        assert outputs[-1].data == song_data

    def test_duplicate_names_made_unique(self):
        named = b"\x00\xff\x03\x04Lead"
        data = build_smf(
            [named + b"\x00\x90\x3c\x64" + END_OF_TRACK, named + b"\x00\x91\x3c\x64" + END_OF_TRACK]
        )
        outputs = split_midi_bytes(data, "x.mid")

        assert [o.name for o in outputs] == ["x_Lead.mid", "x_Lead-1.mid"]

    def test_renamed_duplicate_does_not_collide(self):
        bodies = [
            b"\x00\xff\x03\x01B" + END_OF_TRACK,
            b"\x00\xff\x03\x03B-2" + END_OF_TRACK,
            b"\x00\xff\x03\x01B" + END_OF_TRACK,
        ]
        outputs = split_midi_bytes(build_smf(bodies), "s.mid")
        names = [o.name for o in outputs]

        assert names == ["s_B.mid", "s_B-2.mid", "s_B-3.mid"]
        with zipfile.ZipFile(io.BytesIO(build_zip(outputs))) as archive:
            assert archive.namelist() == names

    def test_duplicate_names_ignore_case(self):
        bodies = [
            b"\x00\xff\x03\x04Lead" + END_OF_TRACK,
            b"\x00\xff\x03\x04LEAD" + END_OF_TRACK,
        ]
        names = [o.name for o in split_midi_bytes(build_smf(bodies), "x.mid")]

        assert names == ["x_Lead.mid", "x_LEAD-1.mid"]

    def test_unsafe_track_name(self):
        data = build_smf([b"\x00\xff\x03\x07AC/DC:1" + END_OF_TRACK])
        outputs = split_midi_bytes(data, "rock.mid")

        assert outputs[0].name == "rock_AC_DC_1.mid"
        assert outputs[0].track_name == "AC/DC:1"

    def test_name_template(self, two_track_data):
        options = SplitOptions(name_template="{index:02d}-{stem}{ext}")
        outputs = split_midi_bytes(two_track_data, "duo.mid", options)

        assert [o.name for o in outputs] == ["00-duo.mid", "01-duo.mid"]

    def test_reduce_policy_option(self, two_track_data):
        options = SplitOptions(policy=VelocityPolicy.REDUCE, reduction=30)
        outputs = split_midi_bytes(two_track_data, "duo.mid", options)
        other = SMFReader.parse(outputs[0].data).tracks[1]

        assert other.events[0].velocity == 70

    def test_forced_running_status_option(self, song_data):
        options = SplitOptions(running_status=True)
        outputs = split_midi_bytes(song_data, "song.mid", options)

        assert len(outputs[1].data) < len(split_midi_bytes(song_data, "song.mid")[1].data)

    def test_format_0_rejected(self, format0_data):
        with pytest.raises(NotSplittable):
            split_midi_bytes(format0_data, "single.mid")

    def test_truncated_input_rejected(self):
        with pytest.raises(TruncatedInput):
            split_midi_bytes(b"MThd\x00\x00\x00\x06\x00\x01\x00\x02")


class TestOptions:
    """Test cases for SplitOptions."""

    def test_defaults(self):
        options = SplitOptions()

        assert options.policy == VelocityPolicy.MUTE
        assert options.reduction == 30
        assert not options.include_all
        assert options.running_status is None

    def test_policy_from_string(self):
        assert SplitOptions(policy="preserve").policy == VelocityPolicy.PRESERVE

    def test_invalid_policy(self):
        with pytest.raises(ValueError):
            SplitOptions(policy="louder")

    def test_invalid_reduction(self):
        with pytest.raises(ValueOutOfRange):
            SplitOptions(reduction=-1)


class TestZip:
    """Test cases for zip bundling."""

    def test_build_zip(self, song_data):
        outputs = split_midi_bytes(song_data, "song.mid", SplitOptions(include_all=True))

        with zipfile.ZipFile(io.BytesIO(build_zip(outputs))) as archive:
            assert archive.namelist() == [o.name for o in outputs]
            assert archive.read("song_Piano.mid") == outputs[1].data


@pytest.mark.parametrize(
    "name,expected",
    [
        ("Piano", "Piano"),
        ("Lead / Solo", "Lead _ Solo"),
        ("  ", "_"),
        ("..", "_"),
        ("a\x00b", "a_b"),
    ],
)
def test_sanitize_name(name, expected):
    assert sanitize_name(name) == expected
