"""
Byte cursor primitives for SMF parsing and serialization.

All multi-byte integers in a Standard MIDI File are big-endian. Delta-times
and meta/sysex lengths use the MIDI variable-length quantity (VLQ):

    - 7 data bits per byte, most significant group first
    - bit 7 set on every byte except the last
    - at most 4 bytes, so the largest value is 0x0FFFFFFF

Example:
    >>> encode_vlq(0x80)
    b'\\x81\\x00'
    >>> decode_vlq(b'\\xff\\x7f')
    (16383, 2)
"""

import struct
from typing import Tuple, Union

from smfsplit.errors import MalformedVLQ, TruncatedInput, ValueOutOfRange

VLQ_MAX = 0x0FFFFFFF
VLQ_MAX_BYTES = 4


def encode_vlq(value: int) -> bytes:
    """
    Encode an integer as a minimal-length MIDI variable-length quantity.

    Args:
        value: Integer in range 0..0x0FFFFFFF

    Returns:
        1 to 4 encoded bytes

    Raises:
        ValueOutOfRange: If value cannot be represented
    """
    if not 0 <= value <= VLQ_MAX:
        raise ValueOutOfRange(f"VLQ value must be 0-0x{VLQ_MAX:X}, got {value}")

    result = bytearray([value & 0x7F])
    value >>= 7
    while value:
        result.insert(0, (value & 0x7F) | 0x80)
        value >>= 7

    return bytes(result)


def decode_vlq(data: Union[bytes, bytearray], offset: int = 0) -> Tuple[int, int]:
    """
    Decode a variable-length quantity starting at offset.

    Returns:
        Tuple of (value, number of bytes consumed)
    """
    reader = ByteReader(data, offset)
    value = reader.read_vlq()
    return value, reader.position - offset


class ByteReader:
    """
    Forward-only reader over a byte sequence.

    Example:
        reader = ByteReader(b"MThd\\x00\\x00\\x00\\x06")
        magic = reader.read_bytes(4)
        length = reader.read_u32()
    """

    def __init__(self, data: Union[bytes, bytearray], position: int = 0, origin: int = 0):
        self.data = bytes(data)
        self.position = position
        # Offset of data[0] within the enclosing file, for error reporting
        self.origin = origin

    @property
    def offset(self) -> int:
        """Absolute offset of the cursor within the enclosing file."""
        return self.origin + self.position

    @property
    def remaining(self) -> int:
        return len(self.data) - self.position

    def at_end(self) -> bool:
        return self.position >= len(self.data)

    def _require(self, count: int) -> None:
        if count > self.remaining:
            raise TruncatedInput(
                f"Need {count} bytes, only {max(self.remaining, 0)} available",
                self.offset,
            )

    def read_bytes(self, count: int) -> bytes:
        self._require(count)
        chunk = self.data[self.position : self.position + count]
        self.position += count
        return chunk

    def peek_u8(self) -> int:
        self._require(1)
        return self.data[self.position]

    def read_u8(self) -> int:
        self._require(1)
        value = self.data[self.position]
        self.position += 1
        return value

    def read_u16(self) -> int:
        return struct.unpack(">H", self.read_bytes(2))[0]

    def read_u32(self) -> int:
        return struct.unpack(">I", self.read_bytes(4))[0]

    def read_vlq(self) -> int:
        """
        Read a MIDI variable-length quantity.

        Raises:
            MalformedVLQ: If the quantity does not terminate within 4 bytes
            TruncatedInput: If input ends inside the quantity
        """
        start = self.offset
        value = 0

        for _ in range(VLQ_MAX_BYTES):
            byte = self.read_u8()
            value = (value << 7) | (byte & 0x7F)
            if not byte & 0x80:
                return value

        raise MalformedVLQ("Variable-length quantity exceeds 4 bytes", start)


class ByteWriter:
    """
    Growable output buffer mirroring ByteReader.

    Chunk lengths are only known after the body has been serialized, so
    ``reserve_u32`` leaves a placeholder which ``patch_u32`` fills later.
    """

    def __init__(self):
        self._buffer = bytearray()

    def __len__(self) -> int:
        return len(self._buffer)

    @property
    def position(self) -> int:
        return len(self._buffer)

    def getvalue(self) -> bytes:
        return bytes(self._buffer)

    def write_bytes(self, data: Union[bytes, bytearray]) -> None:
        self._buffer.extend(data)

    def write_u8(self, value: int) -> None:
        if not 0 <= value <= 0xFF:
            raise ValueOutOfRange(f"u8 value must be 0-255, got {value}")
        self._buffer.append(value)

    def write_u16(self, value: int) -> None:
        if not 0 <= value <= 0xFFFF:
            raise ValueOutOfRange(f"u16 value must be 0-65535, got {value}")
        self._buffer.extend(struct.pack(">H", value))

    def write_u32(self, value: int) -> None:
        if not 0 <= value <= 0xFFFFFFFF:
            raise ValueOutOfRange(f"u32 value out of range: {value}")
        self._buffer.extend(struct.pack(">I", value))

    def write_vlq(self, value: int) -> None:
        self._buffer.extend(encode_vlq(value))

    def reserve_u32(self) -> int:
        """Write a zero u32 placeholder and return its offset."""
        offset = len(self._buffer)
        self._buffer.extend(b"\x00\x00\x00\x00")
        return offset

    def patch_u32(self, offset: int, value: int) -> None:
        if not 0 <= value <= 0xFFFFFFFF:
            raise ValueOutOfRange(f"u32 value out of range: {value}")
        struct.pack_into(">I", self._buffer, offset, value)
