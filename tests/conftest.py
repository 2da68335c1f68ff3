"""Shared pytest fixtures for releasenfo tests."""

import pytest

from releasenfo.config import Config
from releasenfo.models.media import MediaInfo, VideoInfo
from releasenfo.models.release import ReleaseMetadata, ReportOptions
from releasenfo.models.track import AudioFormat, TrackRecord


@pytest.fixture
def default_config():
    """Create a default configuration for testing."""
    return Config()


@pytest.fixture
def english_ac3_track():
    """Single English AC-3 audio track."""
    return TrackRecord(
        language="english",
        title="",
        audio=AudioFormat(
            format="AC-3",
            bitrate="640 kb/s",
            channels="6",
            commercial="Dolby Digital",
        ),
    )


@pytest.fixture
def sample_audio_tracks(english_ac3_track):
    """Create sample audio tracks for testing."""
    return [
        english_ac3_track,
        TrackRecord(
            language="Spanish",
            title="Latin America",
            audio=AudioFormat(format="E-AC-3", bitrate="256 kb/s", channels="6"),
        ),
        TrackRecord(
            language="Japanese",
            audio=AudioFormat(format="AAC", bitrate="128 kb/s", channels="2"),
        ),
    ]


@pytest.fixture
def sample_subtitle_tracks():
    """Create sample subtitle tracks for testing."""
    return [
        TrackRecord(language="English", title=""),
        TrackRecord(language="Spanish", title="Latin America (Latino)"),
        TrackRecord(language="English", title="[SDH]"),
    ]


@pytest.fixture
def sample_media(english_ac3_track, sample_subtitle_tracks):
    """Create sample probed media information."""
    return MediaInfo(
        file_size=4_509_715_660,
        duration_ms=5_523_000,
        video=VideoInfo(
            format="AVC",
            profile="High@L4",
            bitrate="5 000 kb/s",
            width="1920",
            height="1080",
            frame_rate="23.976",
            frame_rate_num="24000",
            frame_rate_den="1001",
        ),
        audio_tracks=[english_ac3_track],
        subtitle_tracks=sample_subtitle_tracks,
    )


@pytest.fixture
def sample_release():
    """Create sample resolved release metadata."""
    return ReleaseMetadata(
        title="Episode 1",
        url="https://www.tvmaze.com/episodes/1",
        source="NETFLIX",
    )


@pytest.fixture
def sample_report_options():
    """Create sample report options."""
    return ReportOptions(release_date="2024-05-01")
