# reelview/core/view_controller.py
"""
The application state machine.

Owns the active view, the search/pagination context and the per-slot
generation counters. Every user action enters through one public method;
results come back through the task runner and are handed to the Renderer.
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional

from .api_client import TaskRunner
from .catalog_client import CatalogClient
from .config import AppConfig
from .event_bus import EventBus
from .favorites_store import FavoritesStore
from .models import Movie, MoviePage, SearchContext, Trailer, ViewKind, ViewState
from .renderer import Renderer
from .scheduler import DebounceTimer

logger = logging.getLogger(__name__)

POPULAR_HEADING = "Popular Movies"
FAVORITES_HEADING = "My Favorites"

LIST_ERROR_MESSAGE = "Failed to load movies. Please try again later."
DETAIL_ERROR_MESSAGE = "Could not load details."
NO_RESULTS_MESSAGE = "No movies found. Try a different search term."
NO_POPULAR_MESSAGE = "No movies available right now."
NO_FAVORITES_MESSAGE = "You have no favorite movies yet."


def search_heading(term: str) -> str:
    return f'Results for "{term}"'


@dataclass
class _DetailRequest:
    """Collects the concurrent detail and trailer results for one movie."""
    movie_id: int
    generation: int
    movie: Optional[Movie] = None
    error: Optional[Exception] = None
    trailer: Optional[Trailer] = None
    pending: int = 2


class ViewController:
    """
    Drives Home / Details / Favorites.

    runner must provide run(task, on_finished, *args) and scheduler must
    provide schedule(delay_ms, callback) and cancel(); the defaults are the
    QThread-backed TaskRunner and the QTimer-backed DebounceTimer.
    """
    def __init__(self,
                 catalog: CatalogClient,
                 favorites: FavoritesStore,
                 renderer: Renderer,
                 runner: Optional[TaskRunner] = None,
                 scheduler: Optional[DebounceTimer] = None,
                 event_bus: Optional[EventBus] = None,
                 config: Optional[AppConfig] = None):
        self.catalog = catalog
        self.favorites = favorites
        self.renderer = renderer
        self.runner = runner if runner is not None else TaskRunner()
        self.scheduler = scheduler if scheduler is not None else DebounceTimer()
        self.event_bus = event_bus
        self.config = config or AppConfig()

        # --- Internal State ---
        self.state = ViewState.home()
        self.search_context = SearchContext()
        self._last_list_view = ViewKind.HOME
        self._list_generation = 0
        self._detail_generation = 0
        self._detail_movie: Optional[Movie] = None

    # --- Navigation ---

    def start(self):
        logger.info("🎬 Loading popular movies")
        self.go_home()

    def go_home(self):
        """Reset the search context and show popular movies from page 1."""
        self.scheduler.cancel()
        self.renderer.clear_search_input()
        self._set_state(ViewState.home())
        self.search_context = SearchContext()
        self.renderer.set_heading(POPULAR_HEADING)
        self._fetch_list(self.search_context, append=False)

    def show_favorites(self):
        """Show every saved movie at once. Favorites are never paginated."""
        self.scheduler.cancel()
        self._set_state(ViewState.favorites())
        self._list_generation += 1
        self.search_context = self.search_context.first_page()

        self.renderer.set_loading(False)
        self.renderer.set_heading(FAVORITES_HEADING)
        favorites = self.favorites.load()
        if favorites:
            self.renderer.show_movies(favorites.movies(), append=False)
        else:
            self.renderer.show_message(NO_FAVORITES_MESSAGE)
        self.renderer.set_load_more_visible(False)
        logger.info(f"Showing {len(favorites)} favorites")

    def open_movie(self, movie_id: int):
        """Fetch detail and trailer concurrently and show the detail view."""
        self.scheduler.cancel()
        self._set_state(ViewState.details(movie_id))
        self._list_generation += 1
        self._detail_generation += 1
        request = _DetailRequest(movie_id=movie_id, generation=self._detail_generation)

        self.renderer.clear_detail()
        self.renderer.set_loading(True)
        logger.info(f"Opening details for movie {movie_id}")

        self.runner.run(
            self.catalog.get_detail,
            lambda result, error: self._on_detail_part(request, "detail", result, error),
            movie_id,
        )
        self.runner.run(
            self.catalog.get_trailer,
            lambda result, error: self._on_detail_part(request, "trailer", result, error),
            movie_id,
        )

    def go_back(self):
        """Leave the detail view for page 1 of the list it was opened from."""
        if self.state.kind is not ViewKind.DETAILS:
            logger.debug("Back requested outside of the detail view, ignoring")
            return

        if self._last_list_view is ViewKind.FAVORITES:
            self.show_favorites()
        elif self.search_context.is_search:
            self.scheduler.cancel()
            self._run_search(self.search_context.term)
        else:
            self.go_home()

    # --- Search & Pagination ---

    def submit_search(self, text: str):
        term = text.strip()
        if not term:
            return
        self.scheduler.cancel()
        self._run_search(term)

    def on_search_text_edited(self, text: str):
        """Each edit replaces any pending evaluation with a fresh one."""
        self.scheduler.schedule(self.config.debounce_ms, lambda: self._evaluate_typed_search(text))

    def _evaluate_typed_search(self, text: str):
        term = text.strip()
        if len(term) >= self.config.min_search_length:
            self._run_search(term)
        elif not term:
            self.go_home()
        else:
            logger.debug(f"Search term '{term}' too short, waiting for more input")

    def _run_search(self, term: str):
        if self.state.kind is not ViewKind.HOME:
            self._set_state(ViewState.home())
        self.search_context = self.search_context.with_term(term)
        self.renderer.set_heading(search_heading(term))
        self._fetch_list(self.search_context, append=False)

    def load_more(self):
        if self.state.kind is not ViewKind.HOME:
            logger.warning(f"Load more is not available in the {self.state.kind.value} view")
            return
        self.search_context = self.search_context.next_page()
        self._fetch_list(self.search_context, append=True)

    # --- Favorites ---

    def toggle_favorite(self) -> Optional[bool]:
        """
        Add or remove the movie shown in the detail view.

        Returns:
            The new membership, or None if no movie is displayed
        """
        if self.state.kind is not ViewKind.DETAILS or self._detail_movie is None:
            logger.warning("No movie is displayed, cannot toggle favorite")
            return None

        favorites = self.favorites.toggle_and_save(self._detail_movie)
        is_favorite = self._detail_movie.id in favorites
        self.renderer.set_favorite_state(is_favorite)
        self._publish("favorites_changed", len(favorites))
        return is_favorite

    # --- Internals ---

    def _set_state(self, state: ViewState):
        if self.state.kind is ViewKind.DETAILS:
            self._detail_generation += 1
            self._detail_movie = None
        self.state = state
        if state.is_list:
            self._last_list_view = state.kind
        self.renderer.show_view(state.kind)
        self._publish("view_changed", state.kind.value)

    def _fetch_list(self, context: SearchContext, append: bool):
        self._list_generation += 1
        generation = self._list_generation

        self.renderer.set_load_more_visible(False)
        self.renderer.set_loading(True)
        self._publish("search_started", context.term, context.page)

        def on_finished(result: Any, error: Optional[Exception]):
            self._on_list_finished(generation, context, append, result, error)

        if context.is_search:
            self.runner.run(self.catalog.search, on_finished, context.term, context.page)
        else:
            self.runner.run(self.catalog.list_popular, on_finished, context.page)

    def _on_list_finished(self, generation: int, context: SearchContext, append: bool,
                          result: Optional[MoviePage], error: Optional[Exception]):
        if generation != self._list_generation:
            logger.debug(f"Discarding stale list response (generation {generation}, current {self._list_generation})")
            return

        self.renderer.set_loading(False)

        if error is not None or result is None:
            logger.error(f"Failed to fetch movies (term='{context.term}', page={context.page}): {error}")
            self.renderer.show_error(LIST_ERROR_MESSAGE)
            self.renderer.set_load_more_visible(False)
            self._publish("catalog_error", LIST_ERROR_MESSAGE)
            return

        if not result and not append:
            self.renderer.show_message(NO_RESULTS_MESSAGE if context.is_search else NO_POPULAR_MESSAGE)
            self.renderer.set_load_more_visible(False)
            return

        self.renderer.show_movies(list(result), append=append)
        self.renderer.set_load_more_visible(len(result) > 0 and result.has_more)
        logger.debug(f"Displayed {len(result)} movies for page {context.page}")

    def _on_detail_part(self, request: _DetailRequest, part: str, result: Any, error: Optional[Exception]):
        if part == "detail":
            request.movie, request.error = result, error
        elif error is None:
            request.trailer = result
        else:
            logger.warning(f"Trailer lookup failed for movie {request.movie_id}: {error}")

        request.pending -= 1
        if request.pending:
            return

        if request.generation != self._detail_generation:
            logger.debug(f"Discarding stale detail response for movie {request.movie_id}")
            return

        self.renderer.set_loading(False)

        if request.error is not None or request.movie is None:
            logger.error(f"Failed to fetch movie details for {request.movie_id}: {request.error}")
            self.renderer.show_detail_error(DETAIL_ERROR_MESSAGE)
            self._publish("catalog_error", DETAIL_ERROR_MESSAGE)
            return

        self._detail_movie = request.movie
        is_favorite = self.favorites.is_favorite(request.movie.id)
        self.renderer.show_detail(request.movie, request.trailer, is_favorite)

    def _publish(self, event_name: str, *args):
        if self.event_bus is not None:
            self.event_bus.publish(event_name, *args)

    def shutdown(self):
        self.scheduler.cancel()
        self._list_generation += 1
        self._detail_generation += 1
