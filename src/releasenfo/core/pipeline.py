"""NFO generation pipeline orchestrator."""

import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from releasenfo.core.probe import MediaProbe
from releasenfo.core.renderer import render_track_blocks
from releasenfo.core.report import (
    assemble_report,
    nfo_path,
    release_name,
    write_report,
)
from releasenfo.errors import InvalidInput
from releasenfo.models.release import ReleaseMetadata, ReportOptions
from releasenfo.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class NfoResult:
    """Result of generating the NFO for one video file."""

    nfo_path: Path
    release_name: str
    audio_count: int
    subtitle_count: int

    def __str__(self) -> str:
        """Human-readable representation."""
        return f"NFO created: {self.nfo_path}"


class NfoPipeline:
    """Probe a video file, render its tracks and write the NFO."""

    def __init__(self, probe: Optional[MediaProbe] = None):
        """Initialize the pipeline.

        Args:
            probe: Media probe (defaults to mediainfo on PATH)
        """
        self.probe = probe or MediaProbe()

    def run(
        self,
        video_path: Path,
        release: ReleaseMetadata,
        options: ReportOptions,
    ) -> NfoResult:
        """Generate the NFO for a single video file.

        Pipeline steps:
        1. Validation (file exists)
        2. Probe (general, video, audio and subtitle fields)
        3. Track rendering (audio and subtitle blocks)
        4. Report assembly
        5. Write

        Args:
            video_path: Path to the video file
            release: Resolved release metadata
            options: Release date, notes and output naming

        Returns:
            NfoResult describing the written file

        Raises:
            InvalidInput: If the video file does not exist
            ProbeFailure: If the probe cannot read the file
        """
        start_time = time.time()

        logger.info("Generating NFO", file=str(video_path))

        # Step 1: Validation
        if not video_path.is_file():
            logger.error("File not found", file=str(video_path))
            raise InvalidInput(f"File not found: {video_path}")

        # Step 2: Probe
        media = self.probe.probe(video_path)

        # Step 3: Track rendering
        blocks = render_track_blocks(media.audio_tracks, media.subtitle_tracks)

        # Step 4: Report assembly
        name = release_name(video_path, options.use_filename)
        text = assemble_report(name, media, blocks, release, options)

        # Step 5: Write
        output = nfo_path(video_path, options.keep_case)
        write_report(output, text)

        duration_ms = int((time.time() - start_time) * 1000)
        logger.info(
            "NFO generated",
            file=str(video_path),
            nfo=str(output),
            release_name=name,
            duration_ms=duration_ms,
        )

        return NfoResult(
            nfo_path=output,
            release_name=name,
            audio_count=len(media.audio_tracks),
            subtitle_count=len(media.subtitle_tracks),
        )
