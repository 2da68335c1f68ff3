"""Media information models."""

from dataclasses import dataclass, field

from releasenfo.models.track import TrackRecord


@dataclass
class VideoInfo:
    """Video stream fields used in the report."""

    format: str = ""
    profile: str = ""
    bitrate: str = ""  # Bitrate string (e.g., "5 000 kb/s")
    width: str = ""
    height: str = ""
    frame_rate: str = ""
    frame_rate_num: str = ""
    frame_rate_den: str = ""


@dataclass
class MediaInfo:
    """Everything the probe reports about one video file."""

    file_size: int  # Bytes
    duration_ms: int
    video: VideoInfo = field(default_factory=VideoInfo)
    audio_tracks: list[TrackRecord] = field(default_factory=list)
    subtitle_tracks: list[TrackRecord] = field(default_factory=list)

    def __str__(self) -> str:
        """Human-readable representation."""
        return (
            f"{self.file_size} bytes, {self.duration_ms} ms, "
            f"{len(self.audio_tracks)} audio, {len(self.subtitle_tracks)} subtitle tracks"
        )
