"""Release provenance models."""

from dataclasses import dataclass
from typing import Optional


@dataclass
class ReleaseRequest:
    """Caller-supplied release inputs, before any lookup."""

    title: Optional[str] = None
    url: Optional[str] = None
    source: Optional[str] = None
    imdb_id: Optional[str] = None  # IMDb ID (e.g., "tt0133093")
    tvmaze_id: Optional[int] = None  # TVmaze show ID


@dataclass
class ReleaseMetadata:
    """Resolved title, reference URL and source platform of a release."""

    title: str
    url: str
    source: str
    origin: str = "manual"  # "manual", "tmdb" or "tvmaze"

    def __str__(self) -> str:
        """Human-readable representation."""
        return f"{self.title} [{self.source}] {self.url} (from: {self.origin})"


@dataclass
class ReportOptions:
    """Report fields and output naming that are not probed or looked up."""

    release_date: str  # YYYY-MM-DD
    notes: str = "none"
    use_filename: bool = False
    keep_case: bool = False
