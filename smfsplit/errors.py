"""
Error taxonomy for SMF decoding, encoding and splitting.

Every failure is deterministic given the input and aborts the whole
operation; no partial output is ever produced.
"""

from typing import Optional


class SMFError(Exception):
    """Base class for all Standard MIDI File errors."""

    def __init__(self, message: str, offset: Optional[int] = None):
        self.message = message
        self.offset = offset
        if offset is not None:
            message = f"{message} (at offset 0x{offset:X})"
        super().__init__(message)

    @property
    def kind(self) -> str:
        """Short name of the error kind, e.g. ``TruncatedInput``."""
        return type(self).__name__


class TruncatedInput(SMFError):
    """Fewer bytes available than a field or declared chunk length requires."""


class InvalidMagic(SMFError):
    """The first chunk is not an ``MThd`` header chunk."""


class UnexpectedChunkType(SMFError):
    """A chunk expected to be ``MTrk`` has a different identifier."""


class BadHeaderLength(SMFError):
    """The header chunk does not declare a 6-byte body."""


class MalformedVLQ(SMFError):
    """A variable-length quantity is longer than 4 bytes."""


class ValueOutOfRange(SMFError):
    """A numeric field is outside its valid domain."""


class RunningStatusWithNoPriorEvent(SMFError):
    """A data byte appears where a status byte was expected and none precedes it."""


class MissingEndOfTrack(SMFError):
    """A track does not end with exactly one End-of-Track meta event."""


class TrackLengthMismatch(SMFError):
    """Track body consumption disagrees with the declared chunk length."""


class NotSplittable(SMFError):
    """The file format does not support per-track extraction (format 0)."""
