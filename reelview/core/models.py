"""
Shared data models for type-safe data transfer between components.
"""

import json
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

from .errors import MalformedDataError
from .utils import parse_release_date

YOUTUBE_WATCH_URL = "https://www.youtube.com/watch?v="


@dataclass(frozen=True)
class Movie:
    """A single catalog entry."""
    id: int
    title: str
    poster_path: Optional[str] = None
    overview: str = ""
    release_date: str = ""
    vote_average: float = 0.0

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "Movie":
        """
        Build a Movie from a catalog JSON record.

        Raises:
            KeyError: If the record has no 'id'
        """
        return cls(
            id=int(data["id"]),
            title=data.get("title") or data.get("original_title") or "Untitled",
            poster_path=data.get("poster_path") or None,
            overview=data.get("overview") or "",
            release_date=data.get("release_date") or "",
            vote_average=float(data.get("vote_average") or 0.0),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "poster_path": self.poster_path,
            "overview": self.overview,
            "release_date": self.release_date,
            "vote_average": self.vote_average,
        }

    @property
    def year(self) -> Optional[int]:
        parsed = parse_release_date(self.release_date)
        return parsed.year if parsed else None


@dataclass(frozen=True)
class Trailer:
    """An external video attached to a movie."""
    key: str
    site: str
    type: str
    name: str = ""

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "Trailer":
        return cls(
            key=data.get("key", ""),
            site=data.get("site", ""),
            type=data.get("type", ""),
            name=data.get("name", ""),
        )

    @property
    def url(self) -> str:
        return f"{YOUTUBE_WATCH_URL}{self.key}"


@dataclass(frozen=True)
class MoviePage:
    """One page of a popular or search listing, in remote order."""
    movies: Tuple[Movie, ...] = ()
    page: int = 1
    total_pages: int = 1

    def __len__(self) -> int:
        return len(self.movies)

    def __iter__(self) -> Iterator[Movie]:
        return iter(self.movies)

    def __getitem__(self, index):
        return self.movies[index]

    @property
    def has_more(self) -> bool:
        return self.page < self.total_pages


class ViewKind(Enum):
    HOME = "home"
    DETAILS = "details"
    FAVORITES = "favorites"


@dataclass(frozen=True)
class ViewState:
    """The active view. movie_id is only set for DETAILS."""
    kind: ViewKind = ViewKind.HOME
    movie_id: Optional[int] = None

    @classmethod
    def home(cls) -> "ViewState":
        return cls(ViewKind.HOME)

    @classmethod
    def favorites(cls) -> "ViewState":
        return cls(ViewKind.FAVORITES)

    @classmethod
    def details(cls, movie_id: int) -> "ViewState":
        return cls(ViewKind.DETAILS, movie_id)

    @property
    def is_list(self) -> bool:
        return self.kind is not ViewKind.DETAILS


@dataclass(frozen=True)
class SearchContext:
    """Current page and search term. An empty term means 'show popular'."""
    page: int = 1
    term: str = ""

    @property
    def is_search(self) -> bool:
        return bool(self.term)

    def next_page(self) -> "SearchContext":
        return replace(self, page=self.page + 1)

    def with_term(self, term: str) -> "SearchContext":
        return SearchContext(page=1, term=term)

    def first_page(self) -> "SearchContext":
        return replace(self, page=1)


@dataclass(frozen=True)
class FavoritesSet:
    """
    Saved movies keyed by id, in the order they were added.
    Instances are never mutated; every change returns a new set.
    """
    _items: Dict[int, Movie] = field(default_factory=dict)

    @classmethod
    def of(cls, movies) -> "FavoritesSet":
        items: Dict[int, Movie] = {}
        for movie in movies:
            items.setdefault(movie.id, movie)
        return cls(items)

    def __contains__(self, item: Union[Movie, int]) -> bool:
        movie_id = item.id if isinstance(item, Movie) else item
        return movie_id in self._items

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Movie]:
        return iter(self._items.values())

    def movies(self) -> List[Movie]:
        return list(self._items.values())

    def with_movie(self, movie: Movie) -> "FavoritesSet":
        if movie.id in self._items:
            return self
        items = dict(self._items)
        items[movie.id] = movie
        return FavoritesSet(items)

    def without(self, movie_id: int) -> "FavoritesSet":
        if movie_id not in self._items:
            return self
        items = {k: v for k, v in self._items.items() if k != movie_id}
        return FavoritesSet(items)

    def to_json(self) -> str:
        return json.dumps([movie.to_dict() for movie in self])

    @classmethod
    def from_json(cls, raw: str) -> "FavoritesSet":
        """
        Decode a persisted JSON array of movie records.

        Raises:
            MalformedDataError: If the payload is not a list of valid records
        """
        try:
            records = json.loads(raw)
        except (TypeError, ValueError) as e:
            raise MalformedDataError(f"Favorites payload is not valid JSON: {e}") from e

        if records is None:
            return cls()
        if not isinstance(records, list):
            raise MalformedDataError(f"Expected a JSON array, got {type(records).__name__}")

        try:
            return cls.of(Movie.from_api(record) for record in records)
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise MalformedDataError(f"Invalid movie record in favorites: {e}") from e
