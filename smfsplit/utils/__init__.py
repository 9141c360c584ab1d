"""Utility functions for smfsplit."""

from smfsplit.utils.byte_cursor import ByteReader, ByteWriter, decode_vlq, encode_vlq
from smfsplit.utils.validation import validate_channel, validate_midi_value

__all__ = [
    "ByteReader",
    "ByteWriter",
    "encode_vlq",
    "decode_vlq",
    "validate_channel",
    "validate_midi_value",
]
