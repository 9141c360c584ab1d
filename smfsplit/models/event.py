"""
MIDI track event data models.

A track event is one of three kinds:

    - ChannelEvent: channel voice/mode messages (status 0x80-0xEF)
    - MetaEvent:    SMF-only metadata (status 0xFF)
    - SysExEvent:   system exclusive packets (status 0xF0 or 0xF7)

Each event carries the delta-time (in ticks) since the previous event of
its track. Running status is a wire-level detail handled by the reader and
writer; it never appears in these models.
"""

import struct
from dataclasses import dataclass, replace
from enum import IntEnum
from typing import Optional, Tuple, Union


class EventType(IntEnum):
    """Channel message types (status high nibble)."""

    NOTE_OFF = 0x80
    NOTE_ON = 0x90
    POLY_PRESSURE = 0xA0
    CONTROL_CHANGE = 0xB0
    PROGRAM_CHANGE = 0xC0
    CHANNEL_PRESSURE = 0xD0
    PITCH_BEND = 0xE0

    @property
    def data_length(self) -> int:
        """Number of data bytes following the status byte."""
        if self in (EventType.PROGRAM_CHANGE, EventType.CHANNEL_PRESSURE):
            return 1
        return 2


class MetaType(IntEnum):
    """Common meta event types."""

    SEQUENCE_NUMBER = 0x00
    TEXT = 0x01
    COPYRIGHT = 0x02
    TRACK_NAME = 0x03
    INSTRUMENT_NAME = 0x04
    LYRIC = 0x05
    MARKER = 0x06
    CUE_POINT = 0x07
    CHANNEL_PREFIX = 0x20
    MIDI_PORT = 0x21
    END_OF_TRACK = 0x2F
    SET_TEMPO = 0x51
    SMPTE_OFFSET = 0x54
    TIME_SIGNATURE = 0x58
    KEY_SIGNATURE = 0x59
    SEQUENCER_SPECIFIC = 0x7F


TEXT_META_TYPES = frozenset(range(0x01, 0x10))

# Controllers 120-127 are channel mode messages
CHANNEL_MODE_FIRST = 120

META_STATUS = 0xFF
SYSEX_STATUS = 0xF0
SYSEX_ESCAPE = 0xF7


@dataclass
class ChannelEvent:
    """
    A channel voice or channel mode message.

    Attributes:
        delta_time: Ticks since previous event
        event_type: Message type
        channel: MIDI channel (0-15)
        data1: First data byte (note, controller, program...)
        data2: Second data byte (velocity, value...); 0 for 1-byte messages
    """

    delta_time: int
    event_type: EventType
    channel: int = 0
    data1: int = 0
    data2: int = 0

    @property
    def status(self) -> int:
        return self.event_type | (self.channel & 0x0F)

    @property
    def is_note_on(self) -> bool:
        """Check if this is a note-on event with velocity > 0."""
        return self.event_type == EventType.NOTE_ON and self.data2 > 0

    @property
    def is_note_off(self) -> bool:
        """Check if this is a note-off event (or note-on with velocity 0)."""
        return self.event_type == EventType.NOTE_OFF or (
            self.event_type == EventType.NOTE_ON and self.data2 == 0
        )

    @property
    def is_channel_mode(self) -> bool:
        """Control change with a reserved mode controller number (120-127)."""
        return self.event_type == EventType.CONTROL_CHANGE and self.data1 >= CHANNEL_MODE_FIRST

    @property
    def note(self) -> int:
        return self.data1

    @property
    def velocity(self) -> int:
        return self.data2

    @property
    def pitch(self) -> int:
        """Signed pitch bend value (-8192..8191)."""
        return ((self.data2 << 7) | self.data1) - 8192

    @property
    def data_bytes(self) -> bytes:
        if self.event_type.data_length == 1:
            return bytes([self.data1])
        return bytes([self.data1, self.data2])

    def with_velocity(self, velocity: int) -> "ChannelEvent":
        """Return a copy with a new velocity (data2)."""
        return replace(self, data2=velocity)

    @classmethod
    def note_on(cls, channel: int, note: int, velocity: int, delta_time: int = 0) -> "ChannelEvent":
        """Create a note-on event."""
        return cls(delta_time, EventType.NOTE_ON, channel, note, velocity)

    @classmethod
    def note_off(
        cls, channel: int, note: int, velocity: int = 0, delta_time: int = 0
    ) -> "ChannelEvent":
        """Create a note-off event."""
        return cls(delta_time, EventType.NOTE_OFF, channel, note, velocity)

    @classmethod
    def control_change(
        cls, channel: int, cc: int, value: int, delta_time: int = 0
    ) -> "ChannelEvent":
        """Create a control change event."""
        return cls(delta_time, EventType.CONTROL_CHANGE, channel, cc, value)

    @classmethod
    def program_change(cls, channel: int, program: int, delta_time: int = 0) -> "ChannelEvent":
        """Create a program change event."""
        return cls(delta_time, EventType.PROGRAM_CHANGE, channel, program, 0)


@dataclass
class MetaEvent:
    """
    A meta event: type byte plus raw payload.

    Attributes:
        delta_time: Ticks since previous event
        meta_type: Meta type byte (see MetaType)
        data: Payload bytes, exactly as declared by the length field
    """

    delta_time: int
    meta_type: int
    data: bytes = b""

    @property
    def is_end_of_track(self) -> bool:
        return self.meta_type == MetaType.END_OF_TRACK

    @property
    def is_text(self) -> bool:
        return self.meta_type in TEXT_META_TYPES

    @property
    def text(self) -> str:
        """Payload decoded as text (invalid UTF-8 bytes replaced)."""
        return self.data.decode("utf-8", errors="replace")

    @property
    def tempo(self) -> Optional[int]:
        """Microseconds per quarter note for Set Tempo events."""
        if self.meta_type != MetaType.SET_TEMPO or len(self.data) != 3:
            return None
        return int.from_bytes(self.data, "big")

    @property
    def bpm(self) -> Optional[float]:
        tempo = self.tempo
        if not tempo:
            return None
        return 60_000_000 / tempo

    @property
    def time_signature(self) -> Optional[Tuple[int, int]]:
        """(numerator, denominator) for Time Signature events."""
        if self.meta_type != MetaType.TIME_SIGNATURE or len(self.data) < 2:
            return None
        return self.data[0], 2 ** self.data[1]

    @property
    def key_signature(self) -> Optional[Tuple[int, bool]]:
        """(sharps/flats, is_minor) for Key Signature events."""
        if self.meta_type != MetaType.KEY_SIGNATURE or len(self.data) != 2:
            return None
        sharps = struct.unpack("b", self.data[:1])[0]
        return sharps, bool(self.data[1])

    @classmethod
    def end_of_track(cls, delta_time: int = 0) -> "MetaEvent":
        return cls(delta_time, MetaType.END_OF_TRACK, b"")

    @classmethod
    def track_name(cls, name: str, delta_time: int = 0) -> "MetaEvent":
        return cls(delta_time, MetaType.TRACK_NAME, name.encode("utf-8"))

    @classmethod
    def set_tempo(cls, tempo: int, delta_time: int = 0) -> "MetaEvent":
        return cls(delta_time, MetaType.SET_TEMPO, tempo.to_bytes(3, "big"))


@dataclass
class SysExEvent:
    """
    A system exclusive packet.

    Attributes:
        delta_time: Ticks since previous event
        data: Payload bytes (normally ending with 0xF7)
        escape: True for 0xF7 packets (continuations / escaped bytes)
    """

    delta_time: int
    data: bytes = b""
    escape: bool = False

    @property
    def status(self) -> int:
        return SYSEX_ESCAPE if self.escape else SYSEX_STATUS


Event = Union[ChannelEvent, MetaEvent, SysExEvent]


def is_end_of_track(event: Event) -> bool:
    return isinstance(event, MetaEvent) and event.is_end_of_track
