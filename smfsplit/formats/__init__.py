"""Format handlers for Standard MIDI Files."""

from smfsplit.formats.smf import SMFReader, SMFWriter

__all__ = ["SMFReader", "SMFWriter"]
