"""
Standard MIDI File writer.

Writes MidiFile objects back to SMF bytes.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from smfsplit.errors import MissingEndOfTrack, ValueOutOfRange
from smfsplit.models.event import META_STATUS, ChannelEvent, MetaEvent, SysExEvent
from smfsplit.models.smf import Header, MidiFile
from smfsplit.models.track import Track
from smfsplit.utils.byte_cursor import ByteWriter
from smfsplit.utils.validation import validate_channel, validate_format, validate_midi_value

logger = logging.getLogger(__name__)


class SMFWriter:
    """
    Writer for Standard MIDI Files.

    Channel events use running status (the status byte is omitted when it
    repeats) if ``running_status`` is True. With the default ``None`` the
    writer follows ``MidiFile.running_status``, so files decoded without
    running status are re-encoded byte for byte.

    Example:
        smf = SMFReader.read("song.mid")
        SMFWriter.write(smf, "copy.mid")
    """

    # File constants
    HEADER_MAGIC = b"MThd"
    TRACK_MAGIC = b"MTrk"
    HEADER_LENGTH = 6

    def __init__(self, running_status: Optional[bool] = None):
        self.running_status = running_status
        self._buffer = ByteWriter()

    @classmethod
    def write(
        cls,
        smf: MidiFile,
        filepath: Union[str, Path],
        running_status: Optional[bool] = None,
    ) -> None:
        """
        Write a MidiFile to a .mid file.

        Args:
            smf: MidiFile to write
            filepath: Output file path
            running_status: Force running status on or off (None = follow source)
        """
        data = cls(running_status).to_bytes(smf)

        filepath = Path(filepath)
        filepath.parent.mkdir(parents=True, exist_ok=True)

        with open(filepath, "wb") as f:
            f.write(data)

    def to_bytes(self, smf: MidiFile) -> bytes:
        """
        Convert MidiFile to SMF bytes.

        Args:
            smf: MidiFile to convert

        Returns:
            Complete SMF file data

        Raises:
            ValueOutOfRange: If a header or event field is out of range
            MissingEndOfTrack: If a track is not terminated correctly
        """
        if smf.header.track_count != len(smf.tracks):
            raise ValueOutOfRange(
                f"Header declares {smf.header.track_count} tracks, "
                f"but {len(smf.tracks)} are present"
            )

        compress = smf.running_status if self.running_status is None else self.running_status

        self._buffer = ByteWriter()
        self._write_header(smf.header)

        for index, track in enumerate(smf.tracks):
            self._write_track(track, index, compress)

        for chunk in smf.trailing_chunks:
            self._write_chunk_start(chunk.chunk_type)
            self._buffer.write_u32(len(chunk.data))
            self._buffer.write_bytes(chunk.data)

        data = self._buffer.getvalue()
        logger.debug("Encoded %d tracks into %d bytes", len(smf.tracks), len(data))
        return data

    def _write_chunk_start(self, chunk_type: bytes) -> None:
        if len(chunk_type) != 4:
            raise ValueOutOfRange(f"Chunk type must be 4 bytes, got {chunk_type!r}")
        self._buffer.write_bytes(chunk_type)

    def _write_header(self, header: Header) -> None:
        """Write the 14-byte MThd chunk."""
        validate_format(header.format)

        self._write_chunk_start(self.HEADER_MAGIC)
        self._buffer.write_u32(self.HEADER_LENGTH)
        self._buffer.write_u16(header.format)
        self._buffer.write_u16(header.track_count)
        self._buffer.write_u16(header.division)

    def _write_track(self, track: Track, index: int, compress: bool) -> None:
        """Write one MTrk chunk, back-patching its length."""
        if not track.has_end_of_track:
            raise MissingEndOfTrack(
                f"Track {index} must end with exactly one End-of-Track event"
            )

        self._write_chunk_start(self.TRACK_MAGIC)
        length_offset = self._buffer.reserve_u32()
        body_start = self._buffer.position

        last_status: Optional[int] = None

        for event in track.events:
            self._buffer.write_vlq(event.delta_time)

            if isinstance(event, ChannelEvent):
                status = self._channel_status(event)
                if not (compress and status == last_status):
                    self._buffer.write_u8(status)
                last_status = status
                self._buffer.write_bytes(event.data_bytes)

            elif isinstance(event, MetaEvent):
                self._buffer.write_u8(META_STATUS)
                self._buffer.write_u8(event.meta_type)
                self._buffer.write_vlq(len(event.data))
                self._buffer.write_bytes(event.data)
                last_status = None

            elif isinstance(event, SysExEvent):
                self._buffer.write_u8(event.status)
                self._buffer.write_vlq(len(event.data))
                self._buffer.write_bytes(event.data)
                last_status = None

            else:
                raise TypeError(f"Unsupported event: {event!r}")

        self._buffer.patch_u32(length_offset, self._buffer.position - body_start)

    @staticmethod
    def _channel_status(event: ChannelEvent) -> int:
        validate_channel(event.channel)
        validate_midi_value(event.data1, "Data byte 1")
        validate_midi_value(event.data2, "Data byte 2")
        return event.status


def write_smf(smf: MidiFile, running_status: Optional[bool] = None) -> bytes:
    """
    Convenience function to encode a MidiFile.

    Args:
        smf: MidiFile to encode
        running_status: Force running status on or off (None = follow source)

    Returns:
        SMF bytes
    """
    return SMFWriter(running_status).to_bytes(smf)
