"""Data models for SMF representation."""

from smfsplit.models.event import (
    ChannelEvent,
    Event,
    EventType,
    MetaEvent,
    MetaType,
    SysExEvent,
)
from smfsplit.models.track import Track
from smfsplit.models.smf import Header, MidiFile, UnknownChunk

__all__ = [
    "ChannelEvent",
    "Event",
    "EventType",
    "MetaEvent",
    "MetaType",
    "SysExEvent",
    "Track",
    "Header",
    "MidiFile",
    "UnknownChunk",
]
