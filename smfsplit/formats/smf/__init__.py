"""Standard MIDI File format handlers."""

from smfsplit.formats.smf.reader import SMFReader, TrackDecoder, read_smf
from smfsplit.formats.smf.writer import SMFWriter, write_smf

__all__ = ["SMFReader", "SMFWriter", "TrackDecoder", "read_smf", "write_smf"]
