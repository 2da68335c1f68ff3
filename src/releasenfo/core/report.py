"""Assembly of the fixed-layout NFO report."""

from pathlib import Path

from releasenfo.core.renderer import TrackBlocks, format_field
from releasenfo.models.media import MediaInfo, VideoInfo
from releasenfo.models.release import ReleaseMetadata, ReportOptions
from releasenfo.utils.logger import get_logger

logger = get_logger(__name__)

GIB = 1024**3


def format_size(size_bytes: int) -> str:
    """Format a file size, e.g. ``"4.2 GiB (4,509,715,660 bytes)"``."""
    return f"{size_bytes / GIB:.1f} GiB ({size_bytes:,} bytes)"


def format_duration(duration_ms: int) -> str:
    """Format a duration.

    One hour or more renders as ``"1 h 32 min"``, anything shorter as
    ``"42 min 7 s"``. Sub-second remainders are dropped.
    """
    total_seconds = duration_ms // 1000
    minutes, seconds = divmod(total_seconds, 60)
    if minutes >= 60:
        hours, minutes = divmod(minutes, 60)
        return f"{hours} h {minutes} min"
    return f"{minutes} min {seconds} s"


def format_frame_rate(frame_rate: str, numerator: str = "", denominator: str = "") -> str:
    """Format a frame rate, adding the exact ratio for fractional rates."""
    if numerator and denominator and denominator != "1":
        return f"{frame_rate} ({numerator}/{denominator}) FPS"
    return f"{frame_rate} FPS"


def format_video(video: VideoInfo) -> str:
    return f"{video.format} ({video.profile})"


def format_resolution(video: VideoInfo) -> str:
    fps = format_frame_rate(video.frame_rate, video.frame_rate_num, video.frame_rate_den)
    return f"{video.width} x {video.height} ({fps})"


def release_name(video_path: Path, use_filename: bool = False) -> str:
    """Name of the release a video file belongs to.

    Releases are normally laid out as ``Release.Name/file.mkv``, so the parent
    directory name is used unless ``use_filename`` asks for the file stem.
    """
    if use_filename:
        return video_path.stem
    return video_path.parent.resolve().name


def nfo_path(video_path: Path, keep_case: bool = False) -> Path:
    """Path of the NFO written next to a video file (lowercased by default)."""
    stem = video_path.stem if keep_case else video_path.stem.lower()
    return video_path.parent / f"{stem}.nfo"


def assemble_report(
    name: str,
    media: MediaInfo,
    blocks: TrackBlocks,
    release: ReleaseMetadata,
    options: ReportOptions,
) -> str:
    """Combine all fields into the NFO text.

    Args:
        name: Release name (first line of the report)
        media: Probed media information
        blocks: Rendered audio and subtitle blocks
        release: Resolved title, URL and source
        options: Release date and notes

    Returns:
        Report text, newline-terminated
    """
    lines = [
        name,
        "",
        format_field("Release Date", options.release_date),
        format_field("Title", release.title),
        "",
        format_field("Size", format_size(media.file_size)),
        format_field("Duration", format_duration(media.duration_ms)),
        format_field("Video", format_video(media.video)),
        format_field("Bitrate", media.video.bitrate),
        format_field("Resolution", format_resolution(media.video)),
        blocks.audio,
        blocks.subs,
        "",
        format_field("Source", release.source),
        format_field("URL", release.url),
        format_field("Notes", options.notes),
    ]
    return "\n".join(lines) + "\n"


def write_report(path: Path, text: str) -> None:
    """Write the report text to disk as UTF-8."""
    path.write_text(text, encoding="utf-8")
    logger.info("NFO written", path=str(path), bytes=len(text.encode("utf-8")))
