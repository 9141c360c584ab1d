#!/usr/bin/env python3
"""
Example: Split a MIDI file in memory

Builds a small two-track song with the models, encodes it, splits it and
prints what each output contains. Pass a .mid path to split that instead.
"""

import sys

sys.path.insert(0, "..")

from smfsplit import SplitOptions, VelocityPolicy, split_midi_bytes
from smfsplit.formats.smf.reader import SMFReader
from smfsplit.formats.smf.writer import SMFWriter
from smfsplit.models import ChannelEvent, Header, MetaEvent, MidiFile, Track


def build_demo_song() -> bytes:
    melody = Track(
        [
            MetaEvent.track_name("Melody"),
            MetaEvent.set_tempo(500000),
            ChannelEvent.note_on(0, 72, 100),
            ChannelEvent.note_on(0, 72, 0, delta_time=240),
            MetaEvent.end_of_track(),
        ]
    )
    drums = Track(
        [
            MetaEvent.track_name("Drums"),
            ChannelEvent.note_on(9, 36, 120),
            ChannelEvent.note_off(9, 36, delta_time=120),
            MetaEvent.end_of_track(delta_time=120),
        ]
    )
    smf = MidiFile(Header(format=1, track_count=2, division=480), [melody, drums])
    return SMFWriter().to_bytes(smf)


def main():
    if len(sys.argv) > 1:
        with open(sys.argv[1], "rb") as f:
            data = f.read()
        filename = sys.argv[1]
    else:
        data = build_demo_song()
        filename = "demo.mid"

    # Reduce the other tracks instead of muting them
    options = SplitOptions(policy=VelocityPolicy.REDUCE, reduction=60, include_all=True)
    outputs = split_midi_bytes(data, filename, options)

    for output in outputs:
        smf = SMFReader.parse(output.data)
        print(f"{output.name} ({len(output.data)} bytes)")
        for index, track in enumerate(smf.tracks):
            velocities = [e.velocity for e in track.events if getattr(e, "is_note_on", False)]
            print(f"  Track {index} {track.name or '-'}: note-on velocities {velocities}")
        print()


if __name__ == "__main__":
    main()
