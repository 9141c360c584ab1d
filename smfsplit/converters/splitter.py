"""
Per-track splitter.

For a file with N tracks, builds N variants of the file. Variant ``i``
keeps track ``i`` as is and silences the notes of every other track, while
all tracks keep their meta events, controllers, program changes and
delta-times. Every variant therefore has the same length, tempo map and
track layout as the input.
"""

import logging
from dataclasses import replace
from typing import List

from smfsplit.config import DEFAULT_REDUCTION, VelocityPolicy
from smfsplit.errors import NotSplittable
from smfsplit.models.event import ChannelEvent, Event
from smfsplit.models.smf import Header, MidiFile
from smfsplit.models.track import Track
from smfsplit.utils.validation import validate_velocity_reduction

logger = logging.getLogger(__name__)


class TrackSplitter:
    """
    Builds one MidiFile per input track.

    The input MidiFile is never modified. Every variant owns its tracks and
    events, so editing one output leaves the input and the other outputs
    untouched.

    Example:
        splitter = TrackSplitter(VelocityPolicy.MUTE)
        for index, variant in enumerate(splitter.split(smf)):
            SMFWriter.write(variant, f"track_{index}.mid")
    """

    def __init__(
        self,
        policy: VelocityPolicy = VelocityPolicy.MUTE,
        reduction: int = DEFAULT_REDUCTION,
    ):
        validate_velocity_reduction(reduction)
        self.policy = VelocityPolicy(policy)
        self.reduction = reduction

    def split(self, smf: MidiFile) -> List[MidiFile]:
        """
        Split a file into one variant per track.

        Args:
            smf: Decoded input file

        Returns:
            List of MidiFile, index i soloing track i

        Raises:
            NotSplittable: For format 0 files
        """
        if smf.header.format == 0:
            raise NotSplittable("Format 0 files hold a single multi-channel track")

        variants = [self._build_variant(smf, target) for target in range(len(smf.tracks))]

        logger.info(
            "Split %d tracks (policy=%s)", len(variants), self.policy.value
        )
        return variants

    def split_track(self, smf: MidiFile, target: int) -> MidiFile:
        """Build the single variant that solos ``target``."""
        if smf.header.format == 0:
            raise NotSplittable("Format 0 files hold a single multi-channel track")
        if not 0 <= target < len(smf.tracks):
            raise IndexError(f"Track index {target} out of range (0-{len(smf.tracks) - 1})")

        return self._build_variant(smf, target)

    def quiet_track(self, track: Track) -> Track:
        """Return a copy of ``track`` with the velocity policy applied."""
        return Track([self._quiet_event(event) for event in track.events])

    def _quiet_event(self, event: Event) -> Event:
        # Note-offs and note-ons already at velocity 0 are copied unchanged
        if (
            self.policy == VelocityPolicy.PRESERVE
            or not isinstance(event, ChannelEvent)
            or not event.is_note_on
        ):
            return replace(event)

        if self.policy == VelocityPolicy.MUTE:
            return event.with_velocity(0)

        return event.with_velocity(max(0, event.velocity - self.reduction))

    def _build_variant(self, smf: MidiFile, target: int) -> MidiFile:
        tracks = [
            copy_track(track) if index == target else self.quiet_track(track)
            for index, track in enumerate(smf.tracks)
        ]
        header = Header(
            format=smf.header.format,
            track_count=len(tracks),
            division=smf.header.division,
        )
        return MidiFile(
            header=header,
            tracks=tracks,
            trailing_chunks=[replace(chunk) for chunk in smf.trailing_chunks],
            running_status=smf.running_status,
        )


def copy_track(track: Track) -> Track:
    """Copy a track and its events."""
    return Track([replace(event) for event in track.events])


def split_tracks(
    smf: MidiFile,
    policy: VelocityPolicy = VelocityPolicy.MUTE,
    reduction: int = DEFAULT_REDUCTION,
) -> List[MidiFile]:
    """
    Convenience function to split a decoded file.

    Args:
        smf: Decoded input file
        policy: Velocity policy for non-selected tracks
        reduction: Amount used by VelocityPolicy.REDUCE

    Returns:
        One MidiFile per input track
    """
    return TrackSplitter(policy, reduction).split(smf)
