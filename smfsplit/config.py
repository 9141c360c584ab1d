"""
Split options.

Options are plain keyword values; the CLI maps its flags (and the
SMFSPLIT_POLICY / SMFSPLIT_REDUCTION environment variables) onto them.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from smfsplit.utils.validation import validate_velocity_reduction


class VelocityPolicy(str, Enum):
    """How note-on velocities of non-selected tracks are treated."""

    MUTE = "mute"  # velocity -> 0
    REDUCE = "reduce"  # velocity -> max(0, velocity - reduction)
    PRESERVE = "preserve"  # unchanged


DEFAULT_REDUCTION = 30
DEFAULT_NAME_TEMPLATE = "{stem}_{track}{ext}"
ALL_TRACKS_LABEL = "All"


@dataclass
class SplitOptions:
    """
    Options for splitting one file.

    Attributes:
        policy: Velocity policy applied to non-selected tracks
        reduction: Amount subtracted by VelocityPolicy.REDUCE (0-127)
        include_all: Append an unmodified "All" output after the per-track files
        running_status: Force running status on write (None = follow source)
        name_template: Output name pattern with {stem}, {track}, {index}, {ext}
    """

    policy: VelocityPolicy = VelocityPolicy.MUTE
    reduction: int = DEFAULT_REDUCTION
    include_all: bool = False
    running_status: Optional[bool] = None
    name_template: str = DEFAULT_NAME_TEMPLATE

    def __post_init__(self):
        self.policy = VelocityPolicy(self.policy)
        validate_velocity_reduction(self.reduction)
