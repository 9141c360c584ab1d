"""
Display formatting utilities for CLI output.
"""

from typing import Optional

from smfsplit.models.event import ChannelEvent, Event, EventType, MetaEvent, MetaType, SysExEvent
from smfsplit.models.smf import Header

NOTE_NAMES = ["C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B"]

EVENT_NAMES = {
    EventType.NOTE_OFF: "Note Off",
    EventType.NOTE_ON: "Note On",
    EventType.POLY_PRESSURE: "Poly Pressure",
    EventType.CONTROL_CHANGE: "Control Change",
    EventType.PROGRAM_CHANGE: "Program Change",
    EventType.CHANNEL_PRESSURE: "Channel Pressure",
    EventType.PITCH_BEND: "Pitch Bend",
}

META_NAMES = {
    MetaType.SEQUENCE_NUMBER: "Sequence Number",
    MetaType.TEXT: "Text",
    MetaType.COPYRIGHT: "Copyright",
    MetaType.TRACK_NAME: "Track Name",
    MetaType.INSTRUMENT_NAME: "Instrument Name",
    MetaType.LYRIC: "Lyric",
    MetaType.MARKER: "Marker",
    MetaType.CUE_POINT: "Cue Point",
    MetaType.CHANNEL_PREFIX: "Channel Prefix",
    MetaType.MIDI_PORT: "MIDI Port",
    MetaType.END_OF_TRACK: "End of Track",
    MetaType.SET_TEMPO: "Set Tempo",
    MetaType.SMPTE_OFFSET: "SMPTE Offset",
    MetaType.TIME_SIGNATURE: "Time Signature",
    MetaType.KEY_SIGNATURE: "Key Signature",
    MetaType.SEQUENCER_SPECIFIC: "Sequencer Specific",
}


def value_bar(
    value: int,
    max_value: int = 127,
    width: int = 10,
    filled_char: str = "█",
    empty_char: str = "░",
) -> str:
    """
    Create a text-based bar graphic with value.

    Returns:
        Formatted string like " 91 [███████░░░]"
    """
    if max_value <= 0:
        max_value = 1

    clamped = max(0, min(value, max_value))
    fill_count = int((clamped / max_value) * width)
    bar = filled_char * fill_count + empty_char * (width - fill_count)

    return f"{value:3d} [{bar}]"


def note_name(note: int) -> str:
    """Convert MIDI note number to name (60 = C4)."""
    return f"{NOTE_NAMES[note % 12]}{note // 12 - 1}"


def format_division(header: Header) -> str:
    """Describe the time division word."""
    if header.is_smpte:
        return f"SMPTE {header.smpte_fps} fps, {header.ticks_per_frame} ticks/frame"
    return f"{header.ticks_per_quarter} ticks/quarter"


def format_hex(data: bytes, limit: int = 16) -> str:
    """Hex preview of a payload."""
    text = " ".join(f"{b:02X}" for b in data[:limit])
    if len(data) > limit:
        text += f" ... (+{len(data) - limit})"
    return text


def event_kind(event: Event) -> str:
    """Short human-readable kind of an event."""
    if isinstance(event, ChannelEvent):
        if event.is_channel_mode:
            return "Channel Mode"
        return EVENT_NAMES[event.event_type]
    if isinstance(event, MetaEvent):
        return META_NAMES.get(event.meta_type, f"Meta 0x{event.meta_type:02X}")
    return "SysEx (escape)" if event.escape else "SysEx"


def event_details(event: Event) -> str:
    """Describe event payload."""
    if isinstance(event, ChannelEvent):
        return _channel_details(event)
    if isinstance(event, MetaEvent):
        return _meta_details(event)
    if isinstance(event, SysExEvent):
        return format_hex(event.data)
    return ""


def _channel_details(event: ChannelEvent) -> str:
    kind = event.event_type
    if kind in (EventType.NOTE_ON, EventType.NOTE_OFF):
        return f"{note_name(event.note)} ({event.note}) vel {event.velocity}"
    if kind == EventType.POLY_PRESSURE:
        return f"{note_name(event.note)} pressure {event.data2}"
    if kind == EventType.CONTROL_CHANGE:
        return f"CC{event.data1} = {event.data2}"
    if kind == EventType.PROGRAM_CHANGE:
        return f"Program {event.data1}"
    if kind == EventType.CHANNEL_PRESSURE:
        return f"Pressure {event.data1}"
    return f"Bend {event.pitch:+d}"


def _meta_details(event: MetaEvent) -> str:
    if event.is_text:
        return repr(event.text)
    if event.bpm is not None:
        return f"{event.bpm:.2f} BPM ({event.tempo} us/quarter)"
    if event.time_signature is not None:
        numerator, denominator = event.time_signature
        return f"{numerator}/{denominator}"
    if event.key_signature is not None:
        sharps, minor = event.key_signature
        accidentals = f"{abs(sharps)} {'sharp' if sharps >= 0 else 'flat'}(s)"
        return f"{accidentals} {'minor' if minor else 'major'}"
    if event.is_end_of_track:
        return ""
    return format_hex(event.data)


def format_optional(value: Optional[str], default: str = "N/A") -> str:
    return value if value else default
