"""
Standard MIDI File reader.

Decodes .mid files into the MidiFile model.

SMF Structure:
    MThd <length=6> <format:u16> <ntrks:u16> <division:u16>
    MTrk <length:u32> <delta:vlq> <event> <delta:vlq> <event> ...
    MTrk ...

Track events:
    0x80-0xEF   Channel message, 1 or 2 data bytes (status may be omitted
                when equal to the previous one: running status)
    0xFF        Meta: <type:u8> <length:vlq> <payload>
    0xF0/0xF7   SysEx: <length:vlq> <payload>
"""

import logging
from pathlib import Path
from typing import List, Optional, Tuple, Union

from smfsplit.errors import (
    BadHeaderLength,
    InvalidMagic,
    MissingEndOfTrack,
    RunningStatusWithNoPriorEvent,
    TrackLengthMismatch,
    TruncatedInput,
    UnexpectedChunkType,
    ValueOutOfRange,
)
from smfsplit.models.event import (
    META_STATUS,
    SYSEX_ESCAPE,
    SYSEX_STATUS,
    ChannelEvent,
    Event,
    EventType,
    MetaEvent,
    SysExEvent,
)
from smfsplit.models.smf import Header, MidiFile, UnknownChunk
from smfsplit.models.track import Track
from smfsplit.utils.byte_cursor import ByteReader
from smfsplit.utils.validation import validate_format

logger = logging.getLogger(__name__)

HEADER_MAGIC = b"MThd"
TRACK_MAGIC = b"MTrk"
HEADER_LENGTH = 6
CHUNK_HEADER_SIZE = 8


class SMFReader:
    """
    Reader for Standard MIDI Files.

    A reader instance holds only per-call state; use one instance per file
    or the ``read`` / ``parse`` class methods.

    Example:
        smf = SMFReader.read("song.mid")
        print(f"Format {smf.format}, {len(smf.tracks)} tracks")
    """

    def __init__(self):
        self._reader: Optional[ByteReader] = None
        self._used_running_status = False

    @classmethod
    def read(cls, filepath: Union[str, Path]) -> MidiFile:
        """
        Read a .mid file and return a MidiFile.

        Args:
            filepath: Path to .mid file

        Returns:
            Parsed MidiFile object
        """
        filepath = Path(filepath)

        if not filepath.exists():
            raise FileNotFoundError(f"File not found: {filepath}")

        with open(filepath, "rb") as f:
            data = f.read()

        return cls().parse_bytes(data)

    @classmethod
    def parse(cls, data: bytes) -> MidiFile:
        """Parse SMF bytes with a fresh reader."""
        return cls().parse_bytes(data)

    def parse_bytes(self, data: bytes) -> MidiFile:
        """
        Parse SMF data from bytes.

        Args:
            data: Raw file contents

        Returns:
            Parsed MidiFile object

        Raises:
            SMFError: On any structural problem in the input
        """
        self._reader = ByteReader(data)
        self._used_running_status = False

        header = self._parse_header()
        logger.debug(
            "Header: format=%d tracks=%d division=0x%04X",
            header.format,
            header.track_count,
            header.division,
        )

        tracks = []
        for index in range(header.track_count):
            tracks.append(self._parse_track_chunk(index))

        trailing = self._parse_trailing_chunks()
        if trailing:
            logger.debug("Preserving %d trailing chunk(s)", len(trailing))

        return MidiFile(
            header=header,
            tracks=tracks,
            trailing_chunks=trailing,
            running_status=self._used_running_status,
        )

    def _read_chunk_header(self) -> Tuple[bytes, int, int]:
        """Read chunk type and length; returns (type, length, offset)."""
        offset = self._reader.position
        chunk_type = self._reader.read_bytes(4)
        length = self._reader.read_u32()
        return chunk_type, length, offset

    def _read_chunk_body(self, length: int, chunk_type: bytes) -> bytes:
        if length > self._reader.remaining:
            raise TruncatedInput(
                f"{chunk_type.decode('latin-1')} chunk declares {length} bytes, "
                f"only {self._reader.remaining} available",
                self._reader.position,
            )
        return self._reader.read_bytes(length)

    def _parse_header(self) -> Header:
        """Parse the MThd chunk."""
        chunk_type, length, offset = self._read_chunk_header()

        if chunk_type != HEADER_MAGIC:
            raise InvalidMagic(f"Expected {HEADER_MAGIC!r}, got {chunk_type!r}", offset)

        if length != HEADER_LENGTH:
            raise BadHeaderLength(
                f"Header chunk length must be {HEADER_LENGTH}, got {length}", offset + 4
            )

        body = ByteReader(self._read_chunk_body(length, chunk_type))
        smf_format = body.read_u16()
        track_count = body.read_u16()
        division = body.read_u16()

        validate_format(smf_format)

        return Header(format=smf_format, track_count=track_count, division=division)

    def _parse_track_chunk(self, index: int) -> Track:
        """Parse one MTrk chunk."""
        chunk_type, length, offset = self._read_chunk_header()

        if chunk_type != TRACK_MAGIC:
            raise UnexpectedChunkType(
                f"Track {index}: expected {TRACK_MAGIC!r}, got {chunk_type!r}", offset
            )

        body_offset = self._reader.position
        body = self._read_chunk_body(length, chunk_type)
        decoder = TrackDecoder(body, body_offset, index)
        track = decoder.decode()

        if decoder.used_running_status:
            self._used_running_status = True

        logger.debug(
            "Track %d: %d bytes, %d events%s",
            index,
            length,
            len(track),
            " (running status)" if decoder.used_running_status else "",
        )
        return track

    def _parse_trailing_chunks(self) -> List[UnknownChunk]:
        """Keep any complete non-track chunks after the declared tracks."""
        chunks = []
        while not self._reader.at_end():
            chunk_type, length, offset = self._read_chunk_header()
            if chunk_type == TRACK_MAGIC:
                raise UnexpectedChunkType(
                    "MTrk chunk beyond the track count declared in the header", offset
                )
            chunks.append(UnknownChunk(chunk_type, self._read_chunk_body(length, chunk_type)))
        return chunks


class TrackDecoder:
    """
    Decodes the event stream of a single MTrk body.

    The running status byte is local to one track body.
    """

    def __init__(self, body: bytes, base_offset: int = 0, index: int = 0):
        self.index = index
        self._reader = ByteReader(body, origin=base_offset)
        self._running_status: Optional[int] = None
        self.used_running_status = False

    def decode(self) -> Track:
        """
        Decode all events up to and including End-of-Track.

        Raises:
            MissingEndOfTrack: If the body ends without End-of-Track
            TrackLengthMismatch: If an event overruns the body or bytes follow End-of-Track
        """
        events: List[Event] = []

        while not self._reader.at_end():
            try:
                event = self._read_event()
            except TruncatedInput as exc:
                raise TrackLengthMismatch(
                    f"Track {self.index}: event runs past declared chunk length "
                    f"of {len(self._reader.data)} bytes",
                    exc.offset,
                ) from exc

            events.append(event)

            if isinstance(event, MetaEvent) and event.is_end_of_track:
                if not self._reader.at_end():
                    raise TrackLengthMismatch(
                        f"Track {self.index}: {self._reader.remaining} byte(s) after End-of-Track",
                        self._reader.offset,
                    )
                return Track(events)

        raise MissingEndOfTrack(
            f"Track {self.index}: chunk ended without End-of-Track", self._reader.offset
        )

    def _read_event(self) -> Event:
        delta_time = self._reader.read_vlq()
        status_offset = self._reader.offset
        status = self._reader.read_u8()

        if status < 0x80:
            if self._running_status is None:
                raise RunningStatusWithNoPriorEvent(
                    f"Track {self.index}: data byte 0x{status:02X} with no prior status",
                    status_offset,
                )
            self.used_running_status = True
            return self._read_channel_event(delta_time, self._running_status, first=status)

        if status < 0xF0:
            self._running_status = status
            return self._read_channel_event(delta_time, status)

        # SMF 1.0 cancels running status at meta and sysex events; it is kept
        # here anyway to accept files from writers that rely on it
        if status == META_STATUS:
            meta_type = self._reader.read_u8()
            length = self._reader.read_vlq()
            return MetaEvent(delta_time, meta_type, self._reader.read_bytes(length))

        if status in (SYSEX_STATUS, SYSEX_ESCAPE):
            length = self._reader.read_vlq()
            return SysExEvent(
                delta_time, self._reader.read_bytes(length), escape=status == SYSEX_ESCAPE
            )

        raise ValueOutOfRange(
            f"Track {self.index}: status byte 0x{status:02X} is not valid in a MIDI file",
            status_offset,
        )

    def _read_data_byte(self) -> int:
        offset = self._reader.offset
        value = self._reader.read_u8()
        if value & 0x80:
            raise ValueOutOfRange(
                f"Track {self.index}: expected data byte, got 0x{value:02X}", offset
            )
        return value

    def _read_channel_event(
        self, delta_time: int, status: int, first: Optional[int] = None
    ) -> ChannelEvent:
        event_type = EventType(status & 0xF0)
        data1 = first if first is not None else self._read_data_byte()
        data2 = self._read_data_byte() if event_type.data_length == 2 else 0
        return ChannelEvent(delta_time, event_type, status & 0x0F, data1, data2)


def read_smf(filepath: Union[str, Path]) -> MidiFile:
    """
    Convenience function to read a .mid file.

    Args:
        filepath: Path to .mid file

    Returns:
        Parsed MidiFile
    """
    return SMFReader.read(filepath)
