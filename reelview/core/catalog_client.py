# reelview/core/catalog_client.py
"""
Remote movie catalog lookups (TMDB v3).

Endpoints used:
    GET /movie/popular          popular titles, paged
    GET /search/movie           title search, paged
    GET /movie/{id}             movie details
    GET /movie/{id}/videos      trailers and teasers
"""

import logging
from typing import Any, Dict, Iterable, Optional

from .api_client import ApiClient
from .config import AppConfig
from .errors import CatalogError, RemoteError
from .models import Movie, MoviePage, Trailer

logger = logging.getLogger(__name__)

TRAILER_SITE = "YouTube"
TRAILER_TYPES = ("Trailer", "Teaser")


def select_trailer(videos: Iterable[Dict[str, Any]]) -> Optional[Trailer]:
    """
    Pick the first YouTube Trailer or Teaser in the order the catalog
    returned them. There is deliberately no ranking between matches.
    """
    for video in videos:
        if not isinstance(video, dict):
            continue
        if video.get("site") == TRAILER_SITE and video.get("type") in TRAILER_TYPES:
            return Trailer.from_api(video)
    return None


class CatalogClient:
    """
    Uniform access to the remote catalog. List and detail calls raise
    NetworkError/RemoteError; get_trailer never raises.
    """
    def __init__(self, api_client: ApiClient, config: AppConfig):
        self.api_client = api_client
        self.config = config

    # --- Helpers ---

    def _params(self, **extra) -> Dict[str, Any]:
        if not self.config.has_api_key:
            raise CatalogError("TMDB API key is not set in settings.")
        params = {"api_key": self.config.api_key, "language": self.config.language}
        params.update(extra)
        return params

    def _get(self, path: str, **params) -> Dict[str, Any]:
        data = self.api_client.get_json(f"{self.config.base_url}{path}", params=self._params(**params))
        if not isinstance(data, dict):
            raise RemoteError(200, f"Unexpected payload for {path}")
        return data

    @staticmethod
    def _to_page(data: Dict[str, Any], requested_page: int) -> MoviePage:
        movies = []
        for record in data.get("results") or []:
            try:
                movies.append(Movie.from_api(record))
            except (KeyError, TypeError, ValueError) as e:
                logger.warning(f"Skipping unreadable movie record: {e}")
        return MoviePage(
            movies=tuple(movies),
            page=int(data.get("page") or requested_page),
            total_pages=int(data.get("total_pages") or requested_page),
        )

    # --- Catalog operations ---

    def list_popular(self, page: int = 1) -> MoviePage:
        logger.info(f"Fetching popular movies, page {page}")
        return self._to_page(self._get("/movie/popular", page=page), page)

    def search(self, term: str, page: int = 1) -> MoviePage:
        logger.info(f"Searching for '{term}', page {page}")
        data = self._get("/search/movie", query=term, page=page, include_adult="false")
        return self._to_page(data, page)

    def get_detail(self, movie_id: int) -> Movie:
        logger.info(f"Fetching details for movie {movie_id}")
        data = self._get(f"/movie/{movie_id}")
        try:
            return Movie.from_api(data)
        except (KeyError, TypeError, ValueError) as e:
            raise RemoteError(200, f"Unreadable movie record for {movie_id}: {e}") from e

    def get_trailer(self, movie_id: int) -> Optional[Trailer]:
        """Returns None when the lookup fails or nothing qualifies."""
        try:
            data = self._get(f"/movie/{movie_id}/videos")
        except CatalogError as e:
            logger.error(f"Failed to fetch movie trailer for {movie_id}: {e}")
            return None

        videos = data.get("results")
        trailer = select_trailer(videos if isinstance(videos, list) else [])
        if trailer is None:
            logger.debug(f"No trailer found for movie {movie_id}")
        return trailer

    # --- Images ---

    def poster_url(self, poster_path: Optional[str]) -> Optional[str]:
        if not poster_path:
            return None
        return f"{self.config.image_base_url}/{poster_path.lstrip('/')}"

    def fetch_poster(self, poster_path: str) -> bytes:
        url = self.poster_url(poster_path)
        if url is None:
            raise CatalogError("Movie has no poster")
        return self.api_client.get_bytes(url)
