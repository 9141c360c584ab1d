"""
Track data model.
"""

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Set

from smfsplit.models.event import ChannelEvent, Event, MetaEvent, MetaType, is_end_of_track


@dataclass
class Track:
    """
    An ordered sequence of timed events from one MTrk chunk.

    A well-formed track ends with exactly one End-of-Track meta event.
    """

    events: List[Event] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.events)

    def __iter__(self) -> Iterator[Event]:
        return iter(self.events)

    @property
    def name(self) -> Optional[str]:
        """Text of the first Track Name meta event, if any."""
        for event in self.events:
            if isinstance(event, MetaEvent) and event.meta_type == MetaType.TRACK_NAME:
                return event.text
        return None

    @property
    def duration_ticks(self) -> int:
        """Sum of all delta-times."""
        return sum(e.delta_time for e in self.events)

    @property
    def note_count(self) -> int:
        """Count note-on events with velocity > 0."""
        return sum(1 for e in self.events if isinstance(e, ChannelEvent) and e.is_note_on)

    @property
    def channels(self) -> Set[int]:
        return {e.channel for e in self.events if isinstance(e, ChannelEvent)}

    @property
    def has_end_of_track(self) -> bool:
        """True if the only End-of-Track is the last event."""
        markers = [i for i, e in enumerate(self.events) if is_end_of_track(e)]
        return markers == [len(self.events) - 1]

    def absolute_times(self) -> List[int]:
        """Absolute tick position of each event."""
        times = []
        now = 0
        for event in self.events:
            now += event.delta_time
            times.append(now)
        return times
