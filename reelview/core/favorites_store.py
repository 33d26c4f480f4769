# reelview/core/favorites_store.py
"""
Persisted favorites list, stored as a JSON array of movie records
under a single key of a durable key-value store.
"""

import logging
from contextlib import contextmanager
from typing import Iterator, Optional, Protocol

from .errors import MalformedDataError
from .models import FavoritesSet, Movie

logger = logging.getLogger(__name__)

DEFAULT_FAVORITES_KEY = "favoriteMovies"


class KeyValueStore(Protocol):
    def load(self, key: str) -> Optional[str]: ...

    def save(self, key: str, value: str) -> None: ...


class _FavoritesEdit:
    """Mutable holder handed out by FavoritesStore.update()."""

    def __init__(self, favorites: FavoritesSet):
        self.favorites = favorites


class FavoritesStore:
    def __init__(self, storage: KeyValueStore, key: str = DEFAULT_FAVORITES_KEY):
        self.storage = storage
        self.key = key

    def load(self) -> FavoritesSet:
        """
        Returns the persisted favorites, or an empty set if nothing was saved
        yet or the stored value cannot be read.
        """
        try:
            raw = self.storage.load(self.key)
        except Exception as e:
            logger.error(f"Failed to read favorites from storage: {e}", exc_info=True)
            return FavoritesSet()

        if raw is None:
            return FavoritesSet()

        try:
            return FavoritesSet.from_json(raw)
        except MalformedDataError as e:
            logger.warning(f"Ignoring malformed favorites data: {e}")
            return FavoritesSet()

    def save(self, favorites: FavoritesSet):
        """Overwrite the stored favorites. Failures are logged, not raised."""
        try:
            self.storage.save(self.key, favorites.to_json())
            logger.debug(f"Saved {len(favorites)} favorites")
        except Exception as e:
            logger.error(f"Failed to save favorites: {e}", exc_info=True)

    @staticmethod
    def toggle(favorites: FavoritesSet, movie: Movie) -> FavoritesSet:
        if movie.id in favorites:
            return favorites.without(movie.id)
        return favorites.with_movie(movie)

    def is_favorite(self, movie_id: int) -> bool:
        return movie_id in self.load()

    @contextmanager
    def update(self) -> Iterator[_FavoritesEdit]:
        """
        Load, let the caller replace `edit.favorites`, then save.
        Nothing is written if the body raises.
        """
        edit = _FavoritesEdit(self.load())
        yield edit
        self.save(edit.favorites)

    def toggle_and_save(self, movie: Movie) -> FavoritesSet:
        with self.update() as edit:
            edit.favorites = self.toggle(edit.favorites, movie)
        if movie.id in edit.favorites:
            logger.info(f"Added '{movie.title}' to favorites")
        else:
            logger.info(f"Removed '{movie.title}' from favorites")
        return edit.favorites
