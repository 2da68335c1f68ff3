"""Filename heuristics for release metadata."""

import re
from typing import Optional

import structlog

logger = structlog.get_logger(__name__)

# Source platforms accepted in the report
VALID_SOURCES = [
    "AMAZON",
    "APPLE",
    "BluRay",
    "DISNEYPLUS",
    "DVD",
    "HBOMAX",
    "HULU",
    "ITUNES",
    "MOVIESANYWHERE",
    "NETFLIX",
    "PEACOCKTV",
    "PRIMEVIDEO",
    "WEB",
    "WEB-DL",
]

# Release-name tags mapped to sources, checked in order.
# Streaming services come before the generic WEB tags they appear next to.
SOURCE_TAGS = [
    (r"AMZN", "AMAZON"),
    (r"ATVP", "APPLE"),
    (r"DSNP", "DISNEYPLUS"),
    (r"H?MAX", "HBOMAX"),
    (r"HULU", "HULU"),
    (r"iT", "ITUNES"),
    (r"MA", "MOVIESANYWHERE"),
    (r"NF", "NETFLIX"),
    (r"PCOK", "PEACOCKTV"),
    (r"(?i:Blu-?Ray)|BDRip|BDRemux", "BluRay"),
    (r"DVD(?:Rip)?", "DVD"),
    (r"WEB-?DL", "WEB-DL"),
    (r"WEB(?:Rip)?", "WEB"),
]

_SOURCE_PATTERNS = [
    (re.compile(rf"(?:^|[.\s_-])(?:{tag})(?=$|[.\s_-])"), source)
    for tag, source in SOURCE_TAGS
]


def parse_episode(filename: str) -> Optional[tuple[int, int]]:
    """Parse season and episode numbers from a filename.

    Patterns supported:
    - Show.Name.S01E02 / s01e02
    - Show.Name.1x02

    Args:
        filename: Filename to parse (can include extension)

    Returns:
        (season, episode) or None if no pattern matches
    """
    # Pattern 1: S01E01 format (most common)
    if match := re.search(r"S(\d+)E(\d+)", filename, re.IGNORECASE):
        return int(match.group(1)), int(match.group(2))

    # Pattern 2: 1x01 format
    pattern = r"(?:^|[.\s_-])(\d{1,2})x(\d{2,3})(?=$|[.\s_-])"
    if match := re.search(pattern, filename, re.IGNORECASE):
        return int(match.group(1)), int(match.group(2))

    logger.debug("No season/episode in filename", filename=filename)
    return None


def detect_source(*names: str) -> Optional[str]:
    """Detect the source platform from release tags in one or more names.

    Tags are matched case-sensitively between dots, spaces, dashes or
    underscores, the way scene release names write them.

    Args:
        names: Release or file names to inspect, most specific first

    Returns:
        Source name from VALID_SOURCES, or None
    """
    for name in names:
        for pattern, source in _SOURCE_PATTERNS:
            if pattern.search(name):
                logger.debug("Detected source from name", name=name, source=source)
                return source
    return None
