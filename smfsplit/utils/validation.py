"""
Range validation for MIDI values.
"""

from smfsplit.errors import ValueOutOfRange


def validate_midi_value(value: int, name: str = "value") -> None:
    """
    Validate that a value is a MIDI data byte (0-127).

    Raises:
        ValueOutOfRange: If value is out of range
    """
    if not 0 <= value <= 127:
        raise ValueOutOfRange(f"{name} must be 0-127, got {value}")


def validate_channel(channel: int) -> None:
    """
    Validate a zero-based MIDI channel number (0-15).

    Raises:
        ValueOutOfRange: If channel is out of range
    """
    if not 0 <= channel <= 15:
        raise ValueOutOfRange(f"MIDI channel must be 0-15, got {channel}")


def validate_format(smf_format: int) -> None:
    """Validate SMF format number (0, 1 or 2)."""
    if smf_format not in (0, 1, 2):
        raise ValueOutOfRange(f"SMF format must be 0, 1 or 2, got {smf_format}")


def validate_velocity_reduction(amount: int) -> None:
    """Validate a velocity reduction amount."""
    validate_midi_value(amount, "Velocity reduction")
