"""Unit tests for report assembly and formatting helpers."""

from pathlib import Path

import pytest

from releasenfo.core.renderer import render_track_blocks
from releasenfo.core.report import (
    assemble_report,
    format_duration,
    format_frame_rate,
    format_size,
    nfo_path,
    release_name,
    write_report,
)
from releasenfo.models.release import ReportOptions


class TestFormatting:
    """Field formatting helpers."""

    def test_format_size(self):
        assert format_size(4_509_715_660) == "4.2 GiB (4,509,715,660 bytes)"

    def test_format_small_size(self):
        assert format_size(999) == "0.0 GiB (999 bytes)"

    @pytest.mark.parametrize(
        "duration_ms,expected",
        [
            (5_523_000, "1 h 32 min"),
            (3_600_000, "1 h 0 min"),
            (2_527_400, "42 min 7 s"),
            (3_599_999, "59 min 59 s"),
            (0, "0 min 0 s"),
        ],
    )
    def test_format_duration(self, duration_ms, expected):
        assert format_duration(duration_ms) == expected

    def test_fractional_frame_rate(self):
        assert format_frame_rate("23.976", "24000", "1001") == "23.976 (24000/1001) FPS"

    def test_integer_frame_rate(self):
        assert format_frame_rate("25.000", "25", "1") == "25.000 FPS"
        assert format_frame_rate("25.000") == "25.000 FPS"


class TestNaming:
    """Release name and NFO path."""

    def test_release_name_from_directory(self):
        path = Path("/media/Release.Name.2024.1080p/video.mkv")
        assert release_name(path) == "Release.Name.2024.1080p"

    def test_release_name_from_filename(self):
        path = Path("/media/Release.Name.2024.1080p/Show.S01E01.1080p.mkv")
        assert release_name(path, use_filename=True) == "Show.S01E01.1080p"

    def test_nfo_path_lowercased(self):
        path = Path("/media/Release/Show.S01E01.1080p.WEB-DL.mkv")
        assert nfo_path(path) == Path("/media/Release/show.s01e01.1080p.web-dl.nfo")

    def test_nfo_path_keep_case(self):
        path = Path("/media/Release/Show.S01E01.mp4")
        assert nfo_path(path, keep_case=True) == Path("/media/Release/Show.S01E01.nfo")


class TestAssembleReport:
    """Full report layout."""

    def test_layout(self, sample_media, sample_release):
        blocks = render_track_blocks(sample_media.audio_tracks, sample_media.subtitle_tracks)
        options = ReportOptions(release_date="2024-05-01", notes="Proper")

        text = assemble_report("Release.Name", sample_media, blocks, sample_release, options)

        assert text == (
            "Release.Name\n"
            "\n"
            "Release Date : 2024-05-01\n"
            "Title        : Episode 1\n"
            "\n"
            "Size         : 4.2 GiB (4,509,715,660 bytes)\n"
            "Duration     : 1 h 32 min\n"
            "Video        : AVC (High@L4)\n"
            "Bitrate      : 5 000 kb/s\n"
            "Resolution   : 1920 x 1080 (23.976 (24000/1001) FPS)\n"
            "Audio        : English AC-3 640 kb/s @ 6 channels (Dolby Digital)\n"
            "Subs         : 3: English, Spanish (Latino), English (SDH)\n"
            "\n"
            "Source       : NETFLIX\n"
            "URL          : https://www.tvmaze.com/episodes/1\n"
            "Notes        : Proper\n"
        )

    def test_multiline_blocks_inserted_verbatim(
        self, sample_media, sample_release, sample_report_options, sample_audio_tracks
    ):
        sample_media.audio_tracks = sample_audio_tracks
        sample_media.subtitle_tracks = []
        blocks = render_track_blocks(sample_media.audio_tracks, sample_media.subtitle_tracks)

        text = assemble_report(
            "Release.Name", sample_media, blocks, sample_release, sample_report_options
        )

        assert blocks.audio in text
        assert "Subs         : None\n" in text
        assert "Notes        : none\n" in text


def test_write_report(tmp_path):
    path = tmp_path / "video.nfo"
    write_report(path, "Release.Name\n日本語\n")
    assert path.read_text(encoding="utf-8") == "Release.Name\n日本語\n"
