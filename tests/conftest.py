"""
Shared fixtures and fakes for the test suite.
Run: pytest
"""

import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from PyQt6.QtWidgets import QApplication

from reelview.core.config import AppConfig
from reelview.core.event_bus import EventBus
from reelview.core.favorites_store import FavoritesStore
from reelview.core.models import Movie, MoviePage
from reelview.core.renderer import Renderer
from reelview.core.view_controller import ViewController


def make_movie(movie_id, title=None, **fields):
    return Movie(id=movie_id, title=title or f"Movie {movie_id}", **fields)


def make_page(ids, page=1, total_pages=5):
    return MoviePage(movies=tuple(make_movie(i) for i in ids), page=page, total_pages=total_pages)


class RecordingRenderer(Renderer):
    """Keeps the last thing shown in each slot."""

    def __init__(self):
        self.view = None
        self.heading = ""
        self.movies = []
        self.message = None
        self.error = None
        self.load_more_visible = False
        self.loading = False
        self.detail = None
        self.detail_error = None
        self.favorite_state = None
        self.search_cleared = 0

    @property
    def movie_ids(self):
        return [movie.id for movie in self.movies]

    def show_view(self, kind):
        self.view = kind

    def set_heading(self, text):
        self.heading = text

    def show_movies(self, movies, append):
        if not append:
            self.movies = []
        self.movies.extend(movies)
        self.message = None
        self.error = None

    def show_message(self, text):
        self.movies = []
        self.message = text

    def show_error(self, text):
        self.movies = []
        self.error = text

    def set_load_more_visible(self, visible):
        self.load_more_visible = visible

    def set_loading(self, loading):
        self.loading = loading

    def show_detail(self, movie, trailer, is_favorite):
        self.detail = (movie, trailer, is_favorite)
        self.detail_error = None
        self.favorite_state = is_favorite

    def show_detail_error(self, text):
        self.detail = None
        self.detail_error = text

    def set_favorite_state(self, is_favorite):
        self.favorite_state = is_favorite

    def clear_detail(self):
        self.detail = None
        self.detail_error = None

    def clear_search_input(self):
        self.search_cleared += 1


class ManualScheduler:
    """Single-slot scheduler whose pending callback only runs on fire()."""

    def __init__(self):
        self.pending = None
        self.delay = None
        self.scheduled_count = 0

    def schedule(self, delay_ms, callback):
        self.pending = callback
        self.delay = delay_ms
        self.scheduled_count += 1

    def cancel(self):
        self.pending = None

    def fire(self):
        callback, self.pending = self.pending, None
        if callback is not None:
            callback()


class _Task:
    def __init__(self, fn, on_finished, args, kwargs):
        self.fn = fn
        self.on_finished = on_finished
        self.args = args
        self.kwargs = kwargs
        self.done = False

    @property
    def name(self):
        return self.fn.__name__

    def settle(self):
        try:
            result, error = self.fn(*self.args, **self.kwargs), None
        except Exception as e:
            result, error = None, e
        self.done = True
        self.on_finished(result, error)


class DeferredRunner:
    """Records tasks; each one settles only when the test says so."""

    def __init__(self):
        self.tasks = []

    def run(self, fn, on_finished, *args, **kwargs):
        self.tasks.append(_Task(fn, on_finished, args, kwargs))

    @property
    def pending(self):
        return [task for task in self.tasks if not task.done]

    def settle_all(self):
        while self.pending:
            self.pending[0].settle()


class FakeCatalog:
    """
    Answers from dictionaries. A value that is an exception is raised.
    Popular pages default to 20 movies with ids page*100..page*100+19.
    """

    def __init__(self):
        self.popular = {}
        self.searches = {}
        self.details = {}
        self.trailers = {}
        self.calls = []

    @staticmethod
    def _answer(value):
        if isinstance(value, Exception):
            raise value
        return value

    def list_popular(self, page=1):
        self.calls.append(("list_popular", page))
        default = make_page(range(page * 100, page * 100 + 20), page=page)
        return self._answer(self.popular.get(page, default))

    def search(self, term, page=1):
        self.calls.append(("search", term, page))
        return self._answer(self.searches.get((term, page), MoviePage(page=page, total_pages=0)))

    def get_detail(self, movie_id):
        self.calls.append(("get_detail", movie_id))
        return self._answer(self.details.get(movie_id, make_movie(movie_id)))

    def get_trailer(self, movie_id):
        self.calls.append(("get_trailer", movie_id))
        return self._answer(self.trailers.get(movie_id))


class MemoryStorage:
    def __init__(self, data=None):
        self.data = dict(data or {})
        self.saves = 0

    def load(self, key):
        return self.data.get(key)

    def save(self, key, value):
        self.saves += 1
        self.data[key] = value


@pytest.fixture(scope="session")
def qapp():
    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    return app


@pytest.fixture
def renderer():
    return RecordingRenderer()


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def runner():
    return DeferredRunner()


@pytest.fixture
def catalog():
    return FakeCatalog()


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def favorites_store(storage):
    return FavoritesStore(storage)


@pytest.fixture
def event_bus():
    return EventBus()


@pytest.fixture
def controller(catalog, favorites_store, renderer, runner, scheduler, event_bus):
    return ViewController(
        catalog=catalog,
        favorites=favorites_store,
        renderer=renderer,
        runner=runner,
        scheduler=scheduler,
        event_bus=event_bus,
        config=AppConfig(api_key="test-key"),
    )


@pytest.fixture
def started(controller, runner):
    """Controller showing popular page 1."""
    controller.start()
    runner.settle_all()
    return controller
