"""Track data models."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class TrackKind(Enum):
    """Kinds of tracks rendered into the report."""

    AUDIO = "audio"
    SUBTITLE = "subtitle"


@dataclass
class AudioFormat:
    """Technical fields of an audio track, as reported by the probe."""

    format: str  # Format name (e.g., "AC-3", "E-AC-3")
    bitrate: str  # Bitrate string (e.g., "640 kb/s")
    channels: str  # Channel count (e.g., "6")
    commercial: str = ""  # Commercial name (e.g., "Dolby Digital")


@dataclass
class TrackRecord:
    """Descriptive fields of one audio or subtitle track."""

    language: str = ""  # Language name (e.g., "English")
    title: str = ""  # Free-text track title
    audio: Optional[AudioFormat] = None  # Only set for audio tracks

    @property
    def raw_descriptor(self) -> str:
        """Language and title joined the way the probe reports them."""
        return f"{self.language} {self.title}".strip()

    def __str__(self) -> str:
        """Human-readable representation."""
        title_part = f" ({self.title})" if self.title else ""
        return f"{self.language or 'und'}{title_part}"
