"""Media metadata extraction using mediainfo."""

import subprocess
from pathlib import Path

from releasenfo.errors import ProbeFailure
from releasenfo.models.media import MediaInfo, VideoInfo
from releasenfo.models.track import AudioFormat, TrackRecord
from releasenfo.utils.logger import get_logger

logger = get_logger(__name__)

FIELD_SEPARATOR = "|"

# Free-text titles always come last so they may contain the separator
GENERAL_TEMPLATE = "General;%FileSize%|%Duration%"
VIDEO_TEMPLATE = (
    "Video;%Format%|%Format_Profile%|%BitRate/String%|%Width%|%Height%"
    "|%FrameRate%|%FrameRate_Num%|%FrameRate_Den%\\n"
)
AUDIO_TEMPLATE = (
    "Audio;%Language/String%|%Format%|%BitRate/String%|%Channels%"
    "|%Format_Commercial_IfAny%|%Title%\\n"
)
TEXT_TEMPLATE = "Text;%Language/String%|%Title%\\n"


class MediaProbe:
    """Read technical and per-track metadata from a video file."""

    def __init__(self, binary: str = "mediainfo", timeout_seconds: int = 30):
        """Initialize the probe.

        Args:
            binary: mediainfo executable name or path
            timeout_seconds: Timeout for each mediainfo call
        """
        self.binary = binary
        self.timeout_seconds = timeout_seconds

    def probe(self, file_path: Path) -> MediaInfo:
        """Extract media information from a video file.

        Args:
            file_path: Path to video file

        Returns:
            MediaInfo with general, video, audio and subtitle fields

        Raises:
            ProbeFailure: If the file is missing, mediainfo fails, or its
                output cannot be parsed
        """
        if not file_path.is_file():
            raise ProbeFailure(f"File not found: {file_path}")

        logger.debug("Probing media file", file=str(file_path))

        general = self._records(file_path, GENERAL_TEMPLATE)
        file_size, duration_ms = self._parse_general(file_path, general)

        video_records = self._records(file_path, VIDEO_TEMPLATE)
        video = self._parse_video(video_records[0]) if video_records else VideoInfo()

        audio_tracks = [
            self._parse_audio(record)
            for record in self._records(file_path, AUDIO_TEMPLATE)
        ]
        subtitle_tracks = [
            self._parse_text(record)
            for record in self._records(file_path, TEXT_TEMPLATE)
        ]

        info = MediaInfo(
            file_size=file_size,
            duration_ms=duration_ms,
            video=video,
            audio_tracks=audio_tracks,
            subtitle_tracks=subtitle_tracks,
        )

        logger.info(
            "Media file probed",
            file=str(file_path),
            file_size=file_size,
            duration_ms=duration_ms,
            audio_languages=[t.language for t in audio_tracks],
            subtitle_count=len(subtitle_tracks),
        )

        return info

    def _run(self, file_path: Path, template: str) -> str:
        """Run mediainfo with an output template and return stdout."""
        cmd = [self.binary, f"--Output={template}", str(file_path)]

        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                check=True,
                timeout=self.timeout_seconds,
            )
        except FileNotFoundError as e:
            logger.error("mediainfo not found", binary=self.binary)
            raise ProbeFailure(f"mediainfo not found: {self.binary}") from e
        except subprocess.TimeoutExpired as e:
            logger.error(
                "mediainfo timeout", file=str(file_path), timeout=self.timeout_seconds
            )
            raise ProbeFailure(f"mediainfo timed out on {file_path}") from e
        except subprocess.CalledProcessError as e:
            logger.error(
                "mediainfo failed",
                file=str(file_path),
                returncode=e.returncode,
                stderr=e.stderr,
            )
            raise ProbeFailure(
                f"mediainfo failed on {file_path} (exit {e.returncode})"
            ) from e

        return result.stdout

    def _records(self, file_path: Path, template: str) -> list[str]:
        """Run a template and split its output into non-empty records."""
        output = self._run(file_path, template)
        return [line for line in output.splitlines() if line.strip()]

    @staticmethod
    def _split(record: str, count: int) -> list[str]:
        """Split a record into exactly ``count`` fields, the last one greedy."""
        fields = record.split(FIELD_SEPARATOR, count - 1)
        fields += [""] * (count - len(fields))
        return [f.strip() for f in fields]

    def _parse_general(self, file_path: Path, records: list[str]) -> tuple[int, int]:
        if not records:
            raise ProbeFailure(f"mediainfo returned no general section for {file_path}")

        size_str, duration_str = self._split(records[0], 2)
        try:
            file_size = int(size_str)
            # Duration may carry a fractional part
            duration_ms = int(float(duration_str)) if duration_str else 0
        except ValueError as e:
            logger.error(
                "Failed to parse mediainfo output",
                file=str(file_path),
                record=records[0],
                error=str(e),
            )
            raise ProbeFailure(
                f"Unparsable mediainfo general section for {file_path}: {records[0]!r}"
            ) from e

        return file_size, duration_ms

    def _parse_video(self, record: str) -> VideoInfo:
        fmt, profile, bitrate, width, height, fps, fps_num, fps_den = self._split(
            record, 8
        )
        return VideoInfo(
            format=fmt,
            profile=profile,
            bitrate=bitrate,
            width=width,
            height=height,
            frame_rate=fps,
            frame_rate_num=fps_num,
            frame_rate_den=fps_den,
        )

    def _parse_audio(self, record: str) -> TrackRecord:
        language, fmt, bitrate, channels, commercial, title = self._split(record, 6)
        return TrackRecord(
            language=language,
            title=title,
            audio=AudioFormat(
                format=fmt,
                bitrate=bitrate,
                channels=channels,
                commercial=commercial,
            ),
        )

    def _parse_text(self, record: str) -> TrackRecord:
        language, title = self._split(record, 2)
        return TrackRecord(language=language, title=title)
