"""
ReelView core: catalog access, favorites persistence and the view controller.
"""

from .errors import CatalogError, NetworkError, RemoteError, MalformedDataError
from .models import Movie, Trailer, MoviePage, ViewKind, ViewState, SearchContext, FavoritesSet
from .logging_handler import setup_logging, QtLogHandler
from .settings_manager import SettingsManager
from .secure_storage import SecureStorage
from .config import AppConfig, load_config
from .api_client import ApiClient, ApiWorker, TaskRunner
from .catalog_client import CatalogClient, select_trailer
from .favorites_store import FavoritesStore
from .scheduler import DebounceTimer
from .event_bus import EventBus
from .renderer import Renderer
from .view_controller import ViewController
from .themes import apply_theme, Theme, DARK_STYLESHEET

__all__ = [
    'CatalogError',
    'NetworkError',
    'RemoteError',
    'MalformedDataError',
    'Movie',
    'Trailer',
    'MoviePage',
    'ViewKind',
    'ViewState',
    'SearchContext',
    'FavoritesSet',
    'setup_logging',
    'QtLogHandler',
    'SettingsManager',
    'SecureStorage',
    'AppConfig',
    'load_config',
    'ApiClient',
    'ApiWorker',
    'TaskRunner',
    'CatalogClient',
    'select_trailer',
    'FavoritesStore',
    'DebounceTimer',
    'EventBus',
    'Renderer',
    'ViewController',
    'apply_theme',
    'Theme',
    'DARK_STYLESHEET',
]
