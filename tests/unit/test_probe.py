"""Unit tests for the mediainfo probe."""

import subprocess
from unittest.mock import Mock, patch

import pytest

from releasenfo.core.probe import MediaProbe
from releasenfo.errors import ProbeFailure
from releasenfo.models.track import AudioFormat, TrackRecord

GENERAL_OUTPUT = "4509715660|5523000.000\n"
VIDEO_OUTPUT = "AVC|High@L4|5 000 kb/s|1920|1080|23.976|24000|1001\n"
AUDIO_OUTPUT = (
    "English|AC-3|640 kb/s|6|Dolby Digital|\n"
    "Spanish|E-AC-3|256 kb/s|6||Latin America | Castilian\n"
)
TEXT_OUTPUT = "English|\nSpanish|Latin America (Latino)\nEnglish|SDH\n"


def _mediainfo(outputs):
    """Fake subprocess.run returning output by template section."""

    def run(cmd, **kwargs):
        section = cmd[1].split("=", 1)[1].split(";", 1)[0]
        return Mock(returncode=0, stdout=outputs.get(section, ""), stderr="")

    return run


@pytest.fixture
def video_file(tmp_path):
    """Create an empty video file."""
    file_path = tmp_path / "Release.Name" / "video.mkv"
    file_path.parent.mkdir()
    file_path.touch()
    return file_path


@pytest.fixture
def outputs():
    return {
        "General": GENERAL_OUTPUT,
        "Video": VIDEO_OUTPUT,
        "Audio": AUDIO_OUTPUT,
        "Text": TEXT_OUTPUT,
    }


class TestMediaProbe:
    """Test MediaProbe class."""

    def test_probe_general_and_video(self, video_file, outputs):
        with patch("subprocess.run", side_effect=_mediainfo(outputs)):
            info = MediaProbe().probe(video_file)

        assert info.file_size == 4509715660
        assert info.duration_ms == 5523000
        assert info.video.format == "AVC"
        assert info.video.profile == "High@L4"
        assert info.video.bitrate == "5 000 kb/s"
        assert (info.video.width, info.video.height) == ("1920", "1080")
        assert info.video.frame_rate == "23.976"
        assert (info.video.frame_rate_num, info.video.frame_rate_den) == ("24000", "1001")

    def test_probe_audio_tracks_in_order(self, video_file, outputs):
        with patch("subprocess.run", side_effect=_mediainfo(outputs)):
            info = MediaProbe().probe(video_file)

        assert info.audio_tracks == [
            TrackRecord(
                language="English",
                title="",
                audio=AudioFormat("AC-3", "640 kb/s", "6", "Dolby Digital"),
            ),
            TrackRecord(
                language="Spanish",
                title="Latin America | Castilian",
                audio=AudioFormat("E-AC-3", "256 kb/s", "6", ""),
            ),
        ]

    def test_probe_subtitle_tracks_in_order(self, video_file, outputs):
        with patch("subprocess.run", side_effect=_mediainfo(outputs)):
            info = MediaProbe().probe(video_file)

        assert [(t.language, t.title) for t in info.subtitle_tracks] == [
            ("English", ""),
            ("Spanish", "Latin America (Latino)"),
            ("English", "SDH"),
        ]
        assert all(t.audio is None for t in info.subtitle_tracks)

    def test_probe_without_subtitles(self, video_file, outputs):
        outputs["Text"] = ""
        with patch("subprocess.run", side_effect=_mediainfo(outputs)):
            info = MediaProbe().probe(video_file)

        assert info.subtitle_tracks == []

    def test_subtitle_with_empty_fields_is_kept(self, video_file, outputs):
        """Should keep a track whose language and title are both empty."""
        outputs["Text"] = "English|\n|\n"
        with patch("subprocess.run", side_effect=_mediainfo(outputs)):
            info = MediaProbe().probe(video_file)

        assert len(info.subtitle_tracks) == 2

    def test_command_uses_binary_and_template(self, video_file, outputs):
        with patch("subprocess.run", side_effect=_mediainfo(outputs)) as mock_run:
            MediaProbe(binary="/opt/mediainfo", timeout_seconds=5).probe(video_file)

        cmd = mock_run.call_args_list[0].args[0]
        assert cmd[0] == "/opt/mediainfo"
        assert cmd[1].startswith("--Output=General;")
        assert cmd[2] == str(video_file)
        assert mock_run.call_args_list[0].kwargs["timeout"] == 5

    def test_missing_file(self, tmp_path):
        with pytest.raises(ProbeFailure, match="File not found"):
            MediaProbe().probe(tmp_path / "missing.mkv")

    def test_mediainfo_not_installed(self, video_file):
        with patch("subprocess.run", side_effect=FileNotFoundError("mediainfo")):
            with pytest.raises(ProbeFailure, match="mediainfo not found"):
                MediaProbe().probe(video_file)

    def test_mediainfo_fails(self, video_file):
        error = subprocess.CalledProcessError(1, "mediainfo", stderr="bad file")
        with patch("subprocess.run", side_effect=error):
            with pytest.raises(ProbeFailure, match="exit 1"):
                MediaProbe().probe(video_file)

    def test_mediainfo_timeout(self, video_file):
        with patch("subprocess.run", side_effect=subprocess.TimeoutExpired("mediainfo", 30)):
            with pytest.raises(ProbeFailure, match="timed out"):
                MediaProbe().probe(video_file)

    def test_unparsable_general_section(self, video_file, outputs):
        outputs["General"] = "not-a-number|1000\n"
        with patch("subprocess.run", side_effect=_mediainfo(outputs)):
            with pytest.raises(ProbeFailure, match="Unparsable"):
                MediaProbe().probe(video_file)

    def test_empty_general_section(self, video_file, outputs):
        outputs["General"] = ""
        with patch("subprocess.run", side_effect=_mediainfo(outputs)):
            with pytest.raises(ProbeFailure, match="no general section"):
                MediaProbe().probe(video_file)
