# reelview/ui/browser.py
"""
Browse tab: movie grid, search bar, navigation and the detail pane.
BrowserWidget only builds widgets and emits user intent; WidgetRenderer
adapts it to the Renderer contract the ViewController drives.
"""

import logging
from typing import Dict, List, Optional, Sequence

from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton, QLineEdit,
    QListWidget, QListWidgetItem, QListView, QStackedWidget, QProgressBar,
    QScrollArea, QFrame
)
from PyQt6.QtCore import Qt, QSize, QUrl, pyqtSignal
from PyQt6.QtGui import QDesktopServices, QIcon, QPixmap

from ..core.api_client import TaskRunner
from ..core.catalog_client import CatalogClient
from ..core.models import Movie, Trailer, ViewKind
from ..core.renderer import Renderer
from ..core.utils import format_rating, format_title_with_year, truncate_string

logger = logging.getLogger(__name__)

POSTER_SIZE = QSize(150, 225)
DETAIL_POSTER_SIZE = QSize(300, 450)

ADD_FAVORITE_TEXT = "Add to Favorites"
REMOVE_FAVORITE_TEXT = "Remove from Favorites"


class PosterLoader:
    """
    Downloads poster images in worker threads. Callbacks receive a QPixmap,
    which is null when the download failed.
    """
    def __init__(self, catalog: CatalogClient, runner: TaskRunner):
        self.catalog = catalog
        self.runner = runner

    def load(self, poster_path: Optional[str], callback):
        if not poster_path:
            return
        self.runner.run(
            self.catalog.fetch_poster,
            lambda data, error: callback(self._to_pixmap(poster_path, data, error)),
            poster_path,
        )

    @staticmethod
    def _to_pixmap(poster_path: str, data: Optional[bytes], error: Optional[Exception]) -> QPixmap:
        pixmap = QPixmap()
        if error is not None or not data:
            logger.debug(f"Poster unavailable for {poster_path}: {error}")
        elif not pixmap.loadFromData(data):
            logger.debug(f"Poster data for {poster_path} is not a readable image")
        return pixmap


class DetailPanel(QWidget):
    """Single-movie view: poster, facts, actions and optional trailer link."""
    favorite_toggled = pyqtSignal()
    back_requested = pyqtSignal()

    def __init__(self, parent=None):
        super().__init__(parent)
        self.trailer: Optional[Trailer] = None
        self._poster_movie_id: Optional[int] = None
        self._build_ui()

    def _build_ui(self):
        outer = QVBoxLayout(self)
        scroll = QScrollArea()
        scroll.setWidgetResizable(True)
        scroll.setFrameShape(QFrame.Shape.NoFrame)
        outer.addWidget(scroll)

        content = QWidget()
        scroll.setWidget(content)
        layout = QVBoxLayout(content)

        info_layout = QHBoxLayout()
        self.poster_label = QLabel()
        self.poster_label.setFixedSize(DETAIL_POSTER_SIZE)
        self.poster_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        info_layout.addWidget(self.poster_label, alignment=Qt.AlignmentFlag.AlignTop)

        facts_layout = QVBoxLayout()
        self.title_label = QLabel()
        self.title_label.setObjectName("detailTitle")
        self.title_label.setWordWrap(True)
        facts_layout.addWidget(self.title_label)

        self.rating_label = QLabel()
        facts_layout.addWidget(self.rating_label)

        self.overview_label = QLabel()
        self.overview_label.setWordWrap(True)
        self.overview_label.setAlignment(Qt.AlignmentFlag.AlignTop | Qt.AlignmentFlag.AlignLeft)
        facts_layout.addWidget(self.overview_label)

        buttons_layout = QHBoxLayout()
        self.btn_favorite = QPushButton(ADD_FAVORITE_TEXT)
        self.btn_favorite.clicked.connect(self.favorite_toggled.emit)
        buttons_layout.addWidget(self.btn_favorite)
        self.btn_back = QPushButton("Back to List")
        self.btn_back.clicked.connect(self.back_requested.emit)
        buttons_layout.addWidget(self.btn_back)
        buttons_layout.addStretch()
        facts_layout.addLayout(buttons_layout)
        facts_layout.addStretch()

        info_layout.addLayout(facts_layout, stretch=1)
        layout.addLayout(info_layout)

        # Trailer section, hidden when there is no trailer
        self.trailer_section = QWidget()
        trailer_layout = QHBoxLayout(self.trailer_section)
        trailer_layout.setContentsMargins(0, 12, 0, 0)
        trailer_layout.addWidget(QLabel("<b>Trailer</b>"))
        self.btn_trailer = QPushButton("▶ Watch Trailer")
        self.btn_trailer.clicked.connect(self.open_trailer)
        trailer_layout.addWidget(self.btn_trailer)
        trailer_layout.addStretch()
        layout.addWidget(self.trailer_section)

        self.error_label = QLabel()
        self.error_label.setObjectName("error")
        self.error_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self.error_label)
        layout.addStretch()

        self.clear()

    def clear(self):
        self.trailer = None
        self._poster_movie_id = None
        self.poster_label.clear()
        self.title_label.clear()
        self.rating_label.clear()
        self.overview_label.clear()
        self.error_label.clear()
        self.error_label.hide()
        self.btn_favorite.hide()
        self.btn_back.show()
        self.trailer_section.hide()

    def set_movie(self, movie: Movie, trailer: Optional[Trailer], is_favorite: bool):
        self.clear()
        self._poster_movie_id = movie.id
        self.poster_label.setText("No Image")
        self.title_label.setText(format_title_with_year(movie.title, movie.year))
        self.rating_label.setText(f"<b>Rating:</b> {format_rating(movie.vote_average)}")
        self.overview_label.setText(movie.overview or "No overview available.")
        self.set_favorite(is_favorite)
        self.btn_favorite.show()

        self.trailer = trailer
        self.trailer_section.setVisible(trailer is not None)

    def set_poster(self, movie_id: int, pixmap: QPixmap):
        if movie_id != self._poster_movie_id or pixmap.isNull():
            return
        self.poster_label.setPixmap(pixmap.scaled(
            DETAIL_POSTER_SIZE,
            Qt.AspectRatioMode.KeepAspectRatio,
            Qt.TransformationMode.SmoothTransformation,
        ))

    def set_favorite(self, is_favorite: bool):
        self.btn_favorite.setText(REMOVE_FAVORITE_TEXT if is_favorite else ADD_FAVORITE_TEXT)

    def set_error(self, text: str):
        self.clear()
        self.error_label.setText(text)
        self.error_label.show()

    def open_trailer(self):
        if self.trailer is None:
            return
        logger.info(f"Opening trailer: {self.trailer.url}")
        QDesktopServices.openUrl(QUrl(self.trailer.url))


class BrowserWidget(QWidget):
    """
    Browse tab. Emits one signal per user action; never decides what to show.
    """
    home_requested = pyqtSignal()
    favorites_requested = pyqtSignal()
    search_submitted = pyqtSignal(str)
    search_edited = pyqtSignal(str)
    movie_activated = pyqtSignal(int)
    load_more_requested = pyqtSignal()
    back_requested = pyqtSignal()
    favorite_toggled = pyqtSignal()

    LIST_PAGE = 0
    DETAIL_PAGE = 1

    def __init__(self, parent=None):
        super().__init__(parent)
        self._build_ui()

    # --- UI Setup ---

    def _build_ui(self):
        layout = QVBoxLayout(self)

        # Navigation & search
        nav_layout = QHBoxLayout()
        self.btn_home = QPushButton("Home")
        self.btn_home.setObjectName("navButton")
        self.btn_home.clicked.connect(self.home_requested.emit)
        nav_layout.addWidget(self.btn_home)

        self.btn_favorites = QPushButton("Favorites")
        self.btn_favorites.setObjectName("navButton")
        self.btn_favorites.clicked.connect(self.favorites_requested.emit)
        nav_layout.addWidget(self.btn_favorites)
        nav_layout.addStretch()

        self.search_input = QLineEdit()
        self.search_input.setPlaceholderText("Search for a movie...")
        self.search_input.setClearButtonEnabled(True)
        self.search_input.setMinimumWidth(280)
        # textEdited fires for user edits only, not for setText()/clear()
        self.search_input.textEdited.connect(self.search_edited.emit)
        self.search_input.returnPressed.connect(self._submit_search)
        nav_layout.addWidget(self.search_input)

        self.btn_search = QPushButton("Search")
        self.btn_search.clicked.connect(self._submit_search)
        nav_layout.addWidget(self.btn_search)
        layout.addLayout(nav_layout)

        # Spinner
        self.spinner = QProgressBar()
        self.spinner.setRange(0, 0)
        self.spinner.setTextVisible(False)
        self.spinner.hide()
        layout.addWidget(self.spinner)

        self.pages = QStackedWidget()
        layout.addWidget(self.pages, stretch=1)

        # List page
        list_page = QWidget()
        list_layout = QVBoxLayout(list_page)
        list_layout.setContentsMargins(0, 0, 0, 0)

        self.heading = QLabel()
        self.heading.setObjectName("heading")
        list_layout.addWidget(self.heading)

        self.message_label = QLabel()
        self.message_label.setObjectName("message")
        self.message_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.message_label.setWordWrap(True)
        self.message_label.hide()
        list_layout.addWidget(self.message_label)

        self.grid = QListWidget()
        self.grid.setObjectName("movieGrid")
        self.grid.setViewMode(QListView.ViewMode.IconMode)
        self.grid.setResizeMode(QListView.ResizeMode.Adjust)
        self.grid.setMovement(QListView.Movement.Static)
        self.grid.setIconSize(POSTER_SIZE)
        self.grid.setGridSize(QSize(POSTER_SIZE.width() + 24, POSTER_SIZE.height() + 56))
        self.grid.setWordWrap(True)
        self.grid.setSpacing(8)
        self.grid.itemClicked.connect(self._on_item_activated)
        list_layout.addWidget(self.grid, stretch=1)

        self.btn_load_more = QPushButton("Load More")
        self.btn_load_more.clicked.connect(self.load_more_requested.emit)
        self.btn_load_more.hide()
        list_layout.addWidget(self.btn_load_more, alignment=Qt.AlignmentFlag.AlignHCenter)

        self.pages.addWidget(list_page)

        # Detail page
        self.detail_panel = DetailPanel()
        self.detail_panel.back_requested.connect(self.back_requested.emit)
        self.detail_panel.favorite_toggled.connect(self.favorite_toggled.emit)
        self.pages.addWidget(self.detail_panel)

    # --- Signal helpers ---

    def _submit_search(self):
        self.search_submitted.emit(self.search_input.text())

    def _on_item_activated(self, item: QListWidgetItem):
        movie_id = item.data(Qt.ItemDataRole.UserRole)
        if movie_id is not None:
            self.movie_activated.emit(int(movie_id))

    # --- Grid ---

    def clear_grid(self):
        self.grid.clear()
        self.message_label.hide()
        self.grid.show()

    def add_movie_card(self, movie: Movie) -> QListWidgetItem:
        item = QListWidgetItem(truncate_string(format_title_with_year(movie.title, movie.year), 40))
        item.setData(Qt.ItemDataRole.UserRole, movie.id)
        item.setToolTip(truncate_string(movie.overview, 300) if movie.overview else movie.title)
        item.setTextAlignment(Qt.AlignmentFlag.AlignHCenter | Qt.AlignmentFlag.AlignTop)
        item.setSizeHint(self.grid.gridSize())
        self.grid.addItem(item)
        return item

    def show_list_message(self, text: str, is_error: bool = False):
        self.grid.clear()
        self.grid.hide()
        self.message_label.setObjectName("error" if is_error else "message")
        # Re-polish so the objectName-based style applies
        self.message_label.style().unpolish(self.message_label)
        self.message_label.style().polish(self.message_label)
        self.message_label.setText(text)
        self.message_label.show()


class WidgetRenderer(Renderer):
    """
    Renderer backed by a BrowserWidget. Poster downloads are optional.
    """
    def __init__(self, widget: BrowserWidget, poster_loader: Optional[PosterLoader] = None):
        self.widget = widget
        self.poster_loader = poster_loader
        self._cards: Dict[int, List[QListWidgetItem]] = {}

    def show_view(self, kind: ViewKind):
        page = BrowserWidget.DETAIL_PAGE if kind is ViewKind.DETAILS else BrowserWidget.LIST_PAGE
        self.widget.pages.setCurrentIndex(page)

    def set_heading(self, text: str):
        self.widget.heading.setText(text)

    def show_movies(self, movies: Sequence[Movie], append: bool):
        if not append:
            self.widget.clear_grid()
            self._cards.clear()
        for movie in movies:
            item = self.widget.add_movie_card(movie)
            self._cards.setdefault(movie.id, []).append(item)
            if self.poster_loader is not None:
                self.poster_loader.load(movie.poster_path, lambda pixmap, movie_id=movie.id: self._set_card_poster(movie_id, pixmap))

    def _set_card_poster(self, movie_id: int, pixmap: QPixmap):
        # The grid may have been replaced while the poster was downloading
        if pixmap.isNull():
            return
        for item in self._cards.get(movie_id, []):
            item.setIcon(QIcon(pixmap))

    def show_message(self, text: str):
        self._cards.clear()
        self.widget.show_list_message(text)

    def show_error(self, text: str):
        self._cards.clear()
        self.widget.show_list_message(text, is_error=True)

    def set_load_more_visible(self, visible: bool):
        self.widget.btn_load_more.setVisible(visible)

    def set_loading(self, loading: bool):
        self.widget.spinner.setVisible(loading)

    def show_detail(self, movie: Movie, trailer: Optional[Trailer], is_favorite: bool):
        panel = self.widget.detail_panel
        panel.set_movie(movie, trailer, is_favorite)
        if self.poster_loader is not None:
            self.poster_loader.load(movie.poster_path, lambda pixmap: panel.set_poster(movie.id, pixmap))

    def show_detail_error(self, text: str):
        self.widget.detail_panel.set_error(text)

    def set_favorite_state(self, is_favorite: bool):
        self.widget.detail_panel.set_favorite(is_favorite)

    def clear_detail(self):
        self.widget.detail_panel.clear()

    def clear_search_input(self):
        self.widget.search_input.clear()
