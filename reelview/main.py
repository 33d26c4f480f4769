#!/usr/bin/env python3
# reelview/main.py
"""
ReelView - browse, search and bookmark movies from TMDB.
Main application entry point: wires core services to the Browse tab.
"""

import sys
from dataclasses import fields
from PyQt6.QtWidgets import QApplication, QMainWindow, QTabWidget, QTextEdit
from PyQt6.QtCore import QTimer, QByteArray
from PyQt6.QtGui import QKeySequence, QAction

from . import __version__
from .core import (
    setup_logging,
    SettingsManager,
    SecureStorage,
    ApiClient,
    TaskRunner,
    CatalogClient,
    FavoritesStore,
    DebounceTimer,
    EventBus,
    ViewController,
    load_config,
    apply_theme,
    Theme
)
from .core.settings_manager import APP_NAME, APP_ORGANIZATION
from .ui import BrowserWidget, PosterLoader, SettingsDialog, WidgetRenderer


class MainWindow(QMainWindow):
    """
    The main application window: a Browse tab driven by the ViewController
    and a Log tab.
    """
    def __init__(self):
        super().__init__()
        self.setWindowTitle(f"{APP_NAME} {__version__}")

        # 1. Initialize Core Services
        self.log_widget = QTextEdit()
        self.log_widget.setReadOnly(True)

        self.logger = setup_logging(self.log_widget.append)
        self.settings = SettingsManager()
        self.secure_storage = SecureStorage()
        self.config = load_config(self.settings, self.secure_storage)
        self.api_client = ApiClient(timeout=self.config.timeout)
        self.event_bus = EventBus()
        self.runner = TaskRunner()

        geom = self.settings.get_global_setting("main_window_geometry", b'')
        if isinstance(geom, QByteArray):
            self.restoreGeometry(geom)
        elif isinstance(geom, bytes) and geom:
            self.restoreGeometry(QByteArray(geom))
        else:
            self.setGeometry(100, 100, 1100, 760)

        self.logger.info(f"🚀 Starting {APP_NAME} {__version__}...")

        # 2. Catalog, favorites and the controller
        self.catalog = CatalogClient(self.api_client, self.config)
        self.favorites = FavoritesStore(self.settings, self.config.favorites_key)

        self.browser = BrowserWidget()
        self.renderer = WidgetRenderer(self.browser, PosterLoader(self.catalog, self.runner))
        self.controller = ViewController(
            catalog=self.catalog,
            favorites=self.favorites,
            renderer=self.renderer,
            runner=self.runner,
            scheduler=DebounceTimer(self),
            event_bus=self.event_bus,
            config=self.config,
        )
        self._connect_browser()

        # 3. Setup UI
        self.tabs = QTabWidget()
        self.tabs.addTab(self.browser, "🎬 Browse")
        self.tabs.addTab(self.log_widget, "📋 Log")
        self.setCentralWidget(self.tabs)
        self._create_menus()
        self._setup_keyboard_shortcuts()

        self.event_bus.subscribe("view_changed", self._on_view_changed)
        self.event_bus.subscribe("favorites_changed", self._on_favorites_changed)
        self.event_bus.subscribe("catalog_error", self._on_catalog_error)
        self.event_bus.subscribe("settings_changed", self._on_settings_changed)

        # 4. Apply Theme
        apply_theme(QApplication.instance(), Theme.DARK)

        # 5. First run check, then load the home view
        self._check_first_run()
        self.controller.start()

    def _connect_browser(self):
        self.browser.home_requested.connect(self.controller.go_home)
        self.browser.favorites_requested.connect(self.controller.show_favorites)
        self.browser.search_submitted.connect(self.controller.submit_search)
        self.browser.search_edited.connect(self.controller.on_search_text_edited)
        self.browser.movie_activated.connect(self.controller.open_movie)
        self.browser.load_more_requested.connect(self.controller.load_more)
        self.browser.back_requested.connect(self.controller.go_back)
        self.browser.favorite_toggled.connect(self.controller.toggle_favorite)

    def _create_menus(self):
        """Create application menu bar."""
        menu_bar = self.menuBar()
        file_menu = menu_bar.addMenu("&File")

        settings_action = QAction("&Settings...", self)
        settings_action.setShortcut(QKeySequence("Ctrl+,"))
        settings_action.triggered.connect(self.open_settings)
        file_menu.addAction(settings_action)

        file_menu.addSeparator()

        quit_action = QAction("&Quit", self)
        quit_action.setShortcut(QKeySequence("Ctrl+Q"))
        quit_action.triggered.connect(self.close)
        file_menu.addAction(quit_action)

        view_menu = menu_bar.addMenu("&View")
        home_action = QAction("&Home", self)
        home_action.setShortcut(QKeySequence("Ctrl+H"))
        home_action.triggered.connect(self.controller.go_home)
        view_menu.addAction(home_action)

        favorites_action = QAction("&Favorites", self)
        favorites_action.setShortcut(QKeySequence("Ctrl+D"))
        favorites_action.triggered.connect(self.controller.show_favorites)
        view_menu.addAction(favorites_action)

    def _setup_keyboard_shortcuts(self):
        focus_search = QAction(self)
        focus_search.setShortcut(QKeySequence("Ctrl+F"))
        focus_search.triggered.connect(self._focus_search)
        self.addAction(focus_search)

        show_log = QAction(self)
        show_log.setShortcut(QKeySequence("Ctrl+L"))
        show_log.triggered.connect(lambda: self.tabs.setCurrentWidget(self.log_widget))
        self.addAction(show_log)

    def _focus_search(self):
        self.tabs.setCurrentWidget(self.browser)
        self.browser.search_input.setFocus()
        self.browser.search_input.selectAll()

    # --- Event Bus Handlers ---

    def _on_view_changed(self, view: str):
        self.statusBar().showMessage(f"View: {view}", 3000)

    def _on_favorites_changed(self, count: int):
        self.statusBar().showMessage(f"{count} favorite(s) saved", 3000)

    def _on_catalog_error(self, message: str):
        self.statusBar().showMessage(f"⚠️ {message}", 5000)

    def _on_settings_changed(self, section: str):
        """Rebuild the catalog configuration and reload the home view."""
        new_config = load_config(self.settings, self.secure_storage)
        for field in fields(new_config):
            setattr(self.config, field.name, getattr(new_config, field.name))
        self.api_client.timeout = self.config.timeout
        self.logger.info("Catalog configuration reloaded")
        self.controller.go_home()

    def open_settings(self):
        dialog = SettingsDialog(self.api_client, self.settings, self.secure_storage, self)
        if dialog.exec():
            self.logger.info("✅ Settings saved successfully")
            self.event_bus.publish("settings_changed", "all")
        else:
            self.logger.info("Settings dialog cancelled")

    def _check_first_run(self):
        """Open settings when no API key is configured."""
        if not self.config.has_api_key:
            self.logger.warning("⚠️  No API key found. Opening settings dialog...")
            QTimer.singleShot(100, self.open_settings)

    def closeEvent(self, event):
        self.logger.info("Application shutting down...")

        self.settings.set_global_setting("main_window_geometry", self.saveGeometry())

        self.controller.shutdown()
        self.api_client.close()
        self.runner.shutdown()
        event.accept()


def main():
    """
    Application entry point.
    """
    app = QApplication(sys.argv)
    app.setApplicationName(APP_NAME)
    app.setOrganizationName(APP_ORGANIZATION)

    window = MainWindow()
    window.show()

    exit_code = app.exec()
    # Requests still in flight are bounded by the HTTP timeout
    window.runner.shutdown(wait_ms=window.config.timeout * 1000)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
