"""Rendering of audio and subtitle track lists into report blocks."""

import textwrap
from dataclasses import dataclass
from typing import Sequence

from releasenfo.core.classifier import classify
from releasenfo.models.track import TrackKind, TrackRecord

# Width of the label column shared by every report field
LABEL_WIDTH = 13

# Subtitle lists longer than this on one line get wrapped
SINGLE_LINE_LIMIT = 85
WRAP_WIDTH = 75


@dataclass
class TrackBlocks:
    """Pre-formatted audio and subtitle blocks ready for the report."""

    audio: str
    subs: str


def format_field(label: str, value: str, width: int = LABEL_WIDTH) -> str:
    """Format one report field with a fixed-width label column.

    Args:
        label: Field label (e.g., "Audio")
        value: Field value
        width: Label column width

    Returns:
        Formatted line, e.g. ``"Audio        : English ..."``
    """
    return f"{label:<{width}}: {value}"


def _field_indent(width: int = LABEL_WIDTH) -> str:
    return " " * (width + 2)


def describe_audio(track: TrackRecord) -> str:
    """Describe one audio track: label, format, bitrate and channels."""
    label = classify(track.language, track.title)
    fmt = track.audio
    if fmt is None:
        return label

    line = f"{label} {fmt.format} {fmt.bitrate} @ {fmt.channels} channels"
    if fmt.commercial:
        line += f" ({fmt.commercial})"
    return line


def render_audio(tracks: Sequence[TrackRecord]) -> str:
    """Render the audio block, one line per track in probe order.

    Continuation lines are indented to the value column so descriptions
    stay aligned under the first one.
    """
    if not tracks:
        return format_field("Audio", "None")

    lines = [format_field("Audio", describe_audio(tracks[0]))]
    indent = _field_indent()
    for track in tracks[1:]:
        lines.append(indent + describe_audio(track))
    return "\n".join(lines)


def render_subtitles(
    tracks: Sequence[TrackRecord],
    single_line_limit: int = SINGLE_LINE_LIMIT,
    wrap_width: int = WRAP_WIDTH,
) -> str:
    """Render the subtitle block as a counted, comma-joined list.

    Every track contributes one entry in probe order, duplicates included.
    When the single-line form is longer than ``single_line_limit``, the list
    is word-wrapped at ``wrap_width`` characters and continuation lines are
    indented to the width of the ``Subs ... : N: `` prefix.

    Args:
        tracks: Subtitle tracks in probe order
        single_line_limit: Longest single-line rendering left unwrapped
        wrap_width: Maximum width of the list text on each wrapped line

    Returns:
        Subtitle block (one or more lines)
    """
    if not tracks:
        return format_field("Subs", "None")

    labels = ", ".join(classify(t.language, t.title) for t in tracks)
    prefix = format_field("Subs", f"{len(tracks)}: ")
    line = prefix + labels
    if len(line) <= single_line_limit:
        return line

    wrapped = textwrap.wrap(
        labels,
        width=wrap_width,
        break_long_words=False,
        break_on_hyphens=False,
    )
    indent = " " * len(prefix)
    return "\n".join(
        (prefix if i == 0 else indent) + text for i, text in enumerate(wrapped)
    )


def render(tracks: Sequence[TrackRecord], kind: TrackKind) -> str:
    """Render a track list of the given kind."""
    if kind == TrackKind.AUDIO:
        return render_audio(tracks)
    return render_subtitles(tracks)


def render_track_blocks(
    audio_tracks: Sequence[TrackRecord],
    subtitle_tracks: Sequence[TrackRecord],
) -> TrackBlocks:
    """Render both track blocks for the report.

    Args:
        audio_tracks: Audio tracks in probe order
        subtitle_tracks: Subtitle tracks in probe order

    Returns:
        TrackBlocks with the audio and subtitle text
    """
    return TrackBlocks(
        audio=render(audio_tracks, TrackKind.AUDIO),
        subs=render(subtitle_tracks, TrackKind.SUBTITLE),
    )
