"""
Bytes-in, bytes-out entry point for splitting a MIDI file.

Example:
    from smfsplit.converters import split_midi_bytes, build_zip

    with open("song.mid", "rb") as f:
        outputs = split_midi_bytes(f.read(), "song.mid")

    for output in outputs:
        print(output.name, len(output.data))

    archive = build_zip(outputs)
"""

import io
import logging
import re
import zipfile
from dataclasses import dataclass
from pathlib import PurePath
from typing import List, Optional, Sequence

from smfsplit.config import ALL_TRACKS_LABEL, SplitOptions
from smfsplit.converters.splitter import TrackSplitter
from smfsplit.formats.smf.reader import SMFReader
from smfsplit.formats.smf.writer import SMFWriter

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r'[\x00-\x1f<>:"/\\|?*]+')


@dataclass
class SplitOutput:
    """
    One encoded output file.

    Attributes:
        index: Soloed track index, or None for the unmodified "All" file
        name: Suggested file name
        track_name: Track Name meta text of the soloed track, if present
        data: Complete SMF bytes
    """

    index: Optional[int]
    name: str
    track_name: Optional[str]
    data: bytes


def split_midi_bytes(
    data: bytes,
    filename: str = "input.mid",
    options: Optional[SplitOptions] = None,
) -> List[SplitOutput]:
    """
    Split SMF bytes into one SMF per track.

    Pure function: no file system access. Either every output is returned or
    an SMFError is raised.

    Args:
        data: Raw input file contents
        filename: Input file name, used only to name the outputs
        options: Split options (defaults to muting other tracks)

    Returns:
        One SplitOutput per track in track order, plus the "All" output when
        ``options.include_all`` is set

    Raises:
        SMFError: If the input cannot be decoded or split
    """
    options = options or SplitOptions()

    smf = SMFReader.parse(data)
    splitter = TrackSplitter(options.policy, options.reduction)
    variants = splitter.split(smf)

    writer = SMFWriter(options.running_status)
    stem, ext = _split_filename(filename)
    namer = _OutputNamer(options.name_template, stem, ext)

    outputs = []
    for index, variant in enumerate(variants):
        track_name = smf.tracks[index].name
        outputs.append(
            SplitOutput(
                index=index,
                name=namer.name(track_name or f"track-{index}", index),
                track_name=track_name,
                data=writer.to_bytes(variant),
            )
        )

    if options.include_all:
        outputs.append(
            SplitOutput(
                index=None,
                name=namer.name(ALL_TRACKS_LABEL, len(variants)),
                track_name=None,
                data=writer.to_bytes(smf),
            )
        )

    logger.info("Split %s into %d file(s)", filename, len(outputs))
    return outputs


def build_zip(outputs: Sequence[SplitOutput]) -> bytes:
    """
    Bundle outputs into a zip archive.

    Args:
        outputs: Outputs to store, in order

    Returns:
        Zip file bytes
    """
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as archive:
        for output in outputs:
            archive.writestr(output.name, output.data)
    return buffer.getvalue()


def sanitize_name(name: str) -> str:
    """Make a track name safe to use inside a file name."""
    cleaned = _UNSAFE_CHARS.sub("_", name).strip().strip(".")
    return cleaned or "_"


def _split_filename(filename: str):
    path = PurePath(filename)
    return path.stem or "output", path.suffix or ".mid"


class _OutputNamer:
    """Formats output names and keeps them unique."""

    def __init__(self, template: str, stem: str, ext: str):
        self.template = template
        self.stem = stem
        self.ext = ext
        self._used = set()

    def name(self, label: str, index: int) -> str:
        name = self.template.format(
            stem=self.stem, track=sanitize_name(label), index=index, ext=self.ext
        )
        base = PurePath(name)
        suffix = index
        while name.lower() in self._used:
            name = f"{base.stem}-{suffix}{base.suffix}"
            suffix += 1
        self._used.add(name.lower())
        return name
