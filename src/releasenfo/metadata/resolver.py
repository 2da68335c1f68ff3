"""Release metadata resolver: manual values, TMDB or TVmaze lookups."""

import re
from pathlib import Path
from typing import Optional

import structlog

from releasenfo.errors import ExternalLookupFailure, InvalidInput
from releasenfo.metadata.heuristic import VALID_SOURCES, detect_source, parse_episode
from releasenfo.metadata.tmdb import TMDBClient
from releasenfo.metadata.tvmaze import TVMazeClient
from releasenfo.models.release import ReleaseMetadata, ReleaseRequest

logger = structlog.get_logger(__name__)

IMDB_ID_PATTERN = re.compile(r"^tt\d+$")
IMDB_TITLE_URL = "https://www.imdb.com/title/{imdb_id}/"


class ReleaseMetadataResolver:
    """Resolves title, reference URL and source of a release.

    Caller-supplied values always win. Missing title/URL are looked up
    either on TMDB (by IMDb ID) or on TVmaze (by show ID plus the season and
    episode parsed from the file name). The source is validated, or detected
    from release tags in the directory and file names.
    """

    def __init__(
        self,
        tmdb_client: Optional[TMDBClient] = None,
        tvmaze_client: Optional[TVMazeClient] = None,
    ):
        """Initialize release metadata resolver.

        Args:
            tmdb_client: TMDB API client (None if no API key is configured)
            tvmaze_client: TVmaze API client
        """
        self.tmdb_client = tmdb_client
        self.tvmaze_client = tvmaze_client

    async def resolve(self, video_path: Path, request: ReleaseRequest) -> ReleaseMetadata:
        """Resolve release metadata for a video file.

        Args:
            video_path: Path to the video file
            request: Caller-supplied values and lookup identifiers

        Returns:
            ReleaseMetadata with title, URL and source

        Raises:
            InvalidInput: If a parameter is missing or malformed
            ExternalLookupFailure: If a remote lookup fails
        """
        if request.imdb_id and request.tvmaze_id:
            raise InvalidInput("--imdb-id and --tvmaze-id are mutually exclusive")

        source = self.resolve_source(video_path, request.source)

        title, url = request.title, request.url
        origin = "manual"

        if not (title and url):
            if request.imdb_id:
                found_title, found_url = await self._lookup_tmdb(request.imdb_id)
                origin = "tmdb"
            elif request.tvmaze_id:
                found_title, found_url = await self._lookup_tvmaze(
                    video_path, request.tvmaze_id
                )
                origin = "tvmaze"
            else:
                missing = [
                    flag
                    for flag, value in (("--title", title), ("--url", url))
                    if not value
                ]
                raise InvalidInput(
                    f"{' and '.join(missing)} required unless --imdb-id or --tvmaze-id is given"
                )
            title = title or found_title
            url = url or found_url

        metadata = ReleaseMetadata(title=title, url=url, source=source, origin=origin)
        logger.info("Resolved release metadata", file=str(video_path), metadata=str(metadata))
        return metadata

    def resolve_source(self, video_path: Path, source: Optional[str]) -> str:
        """Validate an explicit source, or detect one from the release names.

        Raises:
            InvalidInput: If the source is unknown or cannot be detected
        """
        valid = ", ".join(VALID_SOURCES)

        if source:
            if source not in VALID_SOURCES:
                raise InvalidInput(f"Invalid source '{source}'. Valid sources are: {valid}")
            return source

        detected = detect_source(video_path.parent.resolve().name, video_path.name)
        if detected is None:
            raise InvalidInput(
                f"Could not detect source from '{video_path.name}', pass --source "
                f"(one of: {valid})"
            )

        logger.info("Detected source from release name", file=str(video_path), source=detected)
        return detected

    async def _lookup_tmdb(self, imdb_id: str) -> tuple[str, str]:
        """Look up a title on TMDB by IMDb ID and build its IMDb URL."""
        if not IMDB_ID_PATTERN.match(imdb_id):
            raise InvalidInput(f"Invalid IMDb ID '{imdb_id}' (expected e.g. tt0133093)")

        if not self.tmdb_client:
            raise ExternalLookupFailure(
                "TMDB API key required for --imdb-id lookups "
                "(set RELEASENFO_TMDB_API_KEY or tmdb.api_key)"
            )

        result = await self.tmdb_client.find_by_imdb_id(imdb_id)
        title = result.get("title") or result.get("name")
        if not title:
            raise ExternalLookupFailure(f"TMDB result for {imdb_id} has no title")

        return title, IMDB_TITLE_URL.format(imdb_id=imdb_id)

    async def _lookup_tvmaze(self, video_path: Path, show_id: int) -> tuple[str, str]:
        """Look up the episode named by the file on TVmaze."""
        parsed = parse_episode(video_path.name)
        if parsed is None:
            raise ExternalLookupFailure(
                f"No season/episode (e.g. S01E02) found in file name '{video_path.name}'"
            )
        season, episode = parsed

        if not self.tvmaze_client:
            raise ExternalLookupFailure("TVmaze client not configured")

        data = await self.tvmaze_client.get_episode(show_id, season, episode)
        title, url = data.get("name"), data.get("url")
        if not title or not url:
            raise ExternalLookupFailure(
                f"TVmaze episode S{season:02d}E{episode:02d} of show {show_id} "
                f"is missing a name or URL"
            )

        return title, url
