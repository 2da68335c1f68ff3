"""TVmaze API client for episode lookups."""

from typing import Optional

import httpx
import structlog

from releasenfo.errors import ExternalLookupFailure

logger = structlog.get_logger(__name__)


class TVMazeError(ExternalLookupFailure):
    """TVmaze API errors."""

    pass


class TVMazeClient:
    """TVmaze API client. Each lookup is a single request, never retried."""

    def __init__(
        self,
        base_url: str = "https://api.tvmaze.com",
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """Initialize TVmaze client.

        Args:
            base_url: API base URL
            timeout: Request timeout in seconds
            client: HTTP client to use (created if not given)
        """
        self.base_url = base_url.rstrip("/")
        self.client = client or httpx.AsyncClient(timeout=timeout)

    async def close(self):
        """Close HTTP client."""
        await self.client.aclose()

    async def get_episode(self, show_id: int, season: int, episode: int) -> dict:
        """Get one episode of a show by season and episode number.

        Args:
            show_id: TVmaze show ID
            season: Season number
            episode: Episode number within the season

        Returns:
            Episode details including ``name`` and ``url``

        Raises:
            TVMazeError: If the request fails or the episode doesn't exist
        """
        try:
            response = await self.client.get(
                f"{self.base_url}/shows/{show_id}/episodebynumber",
                params={"season": season, "number": episode},
            )
            response.raise_for_status()
            data = response.json()

        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            if status_code == 404:
                logger.warning(
                    "Episode not found on TVmaze",
                    show_id=show_id,
                    season=season,
                    episode=episode,
                )
                raise TVMazeError(
                    f"TVmaze show {show_id} has no episode S{season:02d}E{episode:02d}"
                ) from e
            logger.error("TVmaze API error", show_id=show_id, status_code=status_code)
            raise TVMazeError(
                f"TVmaze lookup for show {show_id} failed with status {status_code}"
            ) from e
        except httpx.HTTPError as e:
            logger.error("TVmaze request failed", show_id=show_id, error=str(e))
            raise TVMazeError(f"TVmaze lookup for show {show_id} failed: {e}") from e
        except ValueError as e:
            logger.error("Invalid TVmaze response", show_id=show_id, error=str(e))
            raise TVMazeError(f"TVmaze returned an invalid response for show {show_id}") from e

        logger.info(
            "Fetched episode from TVmaze",
            show_id=show_id,
            season=season,
            episode=episode,
            name=data.get("name"),
        )
        return data
