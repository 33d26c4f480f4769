# reelview/core/renderer.py
"""
Display contract the ViewController drives.
Implementations own all widgets; the controller only calls these methods.
"""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from .models import Movie, Trailer, ViewKind


class Renderer(ABC):
    """
    Abstract base class for anything that can display controller output.
    """

    @abstractmethod
    def show_view(self, kind: ViewKind):
        """Bring the list pane (HOME, FAVORITES) or detail pane (DETAILS) forward."""
        pass

    @abstractmethod
    def set_heading(self, text: str):
        pass

    @abstractmethod
    def show_movies(self, movies: Sequence[Movie], append: bool):
        """
        Display movie cards.

        Args:
            movies: Movies in display order
            append: Add after the current cards instead of replacing them
        """
        pass

    @abstractmethod
    def show_message(self, text: str):
        """Replace the list contents with an informational message."""
        pass

    @abstractmethod
    def show_error(self, text: str):
        """Replace the list contents with an error message."""
        pass

    @abstractmethod
    def set_load_more_visible(self, visible: bool):
        pass

    @abstractmethod
    def set_loading(self, loading: bool):
        pass

    @abstractmethod
    def show_detail(self, movie: Movie, trailer: Optional[Trailer], is_favorite: bool):
        """Fill the detail pane. trailer is None when no trailer section should be shown."""
        pass

    @abstractmethod
    def show_detail_error(self, text: str):
        pass

    @abstractmethod
    def set_favorite_state(self, is_favorite: bool):
        """Update the detail pane's add/remove favorite action."""
        pass

    # --- Optional hooks ---

    def clear_detail(self):
        """Empty the detail pane before a new movie loads."""
        pass

    def clear_search_input(self):
        pass
