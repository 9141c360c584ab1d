"""
CLI display modules.
"""

from cli.display.tables import (
    display_events,
    display_smf_info,
    display_split_results,
    display_tracks_table,
)
from cli.display.hex_view import display_chunk_map, display_hex_dump

__all__ = [
    "display_events",
    "display_smf_info",
    "display_split_results",
    "display_tracks_table",
    "display_chunk_map",
    "display_hex_dump",
]
