"""TMDB API client for title lookups by IMDb ID."""

from typing import Optional

import httpx
import structlog

from releasenfo.errors import ExternalLookupFailure

logger = structlog.get_logger(__name__)

# Result lists of the /find endpoint, most specific last
FIND_RESULT_KEYS = ("movie_results", "tv_results", "tv_episode_results")


class TMDBError(ExternalLookupFailure):
    """TMDB API errors."""

    pass


class TMDBClient:
    """TMDB API client. Each lookup is a single request, never retried."""

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.themoviedb.org/3",
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """Initialize TMDB client.

        Args:
            api_key: TMDB API key
            base_url: API base URL
            timeout: Request timeout in seconds
            client: HTTP client to use (created if not given)
        """
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.client = client or httpx.AsyncClient(timeout=timeout)
        logger.debug("Initialized TMDB client", base_url=self.base_url)

    async def close(self):
        """Close HTTP client."""
        await self.client.aclose()

    async def find_by_imdb_id(self, imdb_id: str) -> dict:
        """Find a movie, show or episode by its IMDb ID.

        Args:
            imdb_id: IMDb ID (e.g., "tt0133093")

        Returns:
            First matching result, with a ``media_type`` key added

        Raises:
            TMDBError: If the request fails or nothing matches
        """
        try:
            response = await self.client.get(
                f"{self.base_url}/find/{imdb_id}",
                params={
                    "api_key": self.api_key,
                    "external_source": "imdb_id",
                },
            )
            response.raise_for_status()
            data = response.json()

        except httpx.HTTPStatusError as e:
            logger.error(
                "TMDB API error",
                imdb_id=imdb_id,
                status_code=e.response.status_code,
                error=str(e),
            )
            raise TMDBError(
                f"TMDB lookup for {imdb_id} failed with status {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            logger.error("TMDB request failed", imdb_id=imdb_id, error=str(e))
            raise TMDBError(f"TMDB lookup for {imdb_id} failed: {e}") from e
        except ValueError as e:
            logger.error("Invalid TMDB response", imdb_id=imdb_id, error=str(e))
            raise TMDBError(f"TMDB returned an invalid response for {imdb_id}") from e

        for key in FIND_RESULT_KEYS:
            if results := data.get(key):
                result = dict(results[0])
                result.setdefault("media_type", key.removesuffix("_results"))
                logger.info(
                    "Found title on TMDB",
                    imdb_id=imdb_id,
                    tmdb_id=result.get("id"),
                    media_type=result["media_type"],
                    title=result.get("title") or result.get("name"),
                )
                return result

        logger.warning("No TMDB results for IMDb ID", imdb_id=imdb_id)
        raise TMDBError(f"No TMDB results for IMDb ID {imdb_id}")
