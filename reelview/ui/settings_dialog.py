# reelview/ui/settings_dialog.py
"""
Settings dialog for the catalog connection.
The API key goes to SecureStorage (keyring); everything else to QSettings.
"""
import logging
from typing import Optional

from PyQt6.QtWidgets import (
    QDialog, QLineEdit, QFormLayout, QDialogButtonBox,
    QLabel, QWidget, QPushButton, QHBoxLayout, QMessageBox
)
from PyQt6.QtCore import QThread

from ..core.api_client import ApiClient, ApiWorker
from ..core.catalog_client import CatalogClient
from ..core.config import (
    AppConfig, API_KEY_CREDENTIAL, SETTINGS_SECTION, DEFAULT_BASE_URL, DEFAULT_IMAGE_BASE_URL
)
from ..core.models import MoviePage
from ..core.secure_storage import SecureStorage
from ..core.settings_manager import SettingsManager
from ..core.utils import validate_url

logger = logging.getLogger(__name__)

SAVED_KEY_PLACEHOLDER = "[Saved in secure storage]"


class SettingsDialog(QDialog):
    """
    Settings dialog for the TMDB connection.
    """
    def __init__(self, api_client: ApiClient, settings: SettingsManager, secure_storage: SecureStorage, parent=None):
        super().__init__(parent)
        self.setWindowTitle("Settings")
        self.setModal(True)
        self.resize(480, 260)

        self.api_client = api_client
        self.settings = settings
        self.secure_storage = secure_storage

        self.test_thread = None
        self.test_worker = None
        self._forget_saved_key = False

        layout = QFormLayout(self)

        layout.addRow(QLabel("<b>The Movie Database (TMDB)</b>"))
        self.base_url = QLineEdit(self.settings.get_section_setting(SETTINGS_SECTION, "base_url", DEFAULT_BASE_URL))
        layout.addRow("API URL:", self.base_url)
        self.image_base_url = QLineEdit(self.settings.get_section_setting(SETTINGS_SECTION, "image_base_url", DEFAULT_IMAGE_BASE_URL))
        layout.addRow("Image URL:", self.image_base_url)
        self.language = QLineEdit(self.settings.get_section_setting(SETTINGS_SECTION, "language", AppConfig.language))
        layout.addRow("Language:", self.language)
        self.api_key = self._create_api_key_input()
        layout.addRow("API Key:", self._create_api_key_row())
        layout.addRow(self._create_test_button())

        buttons = QDialogButtonBox(
            QDialogButtonBox.StandardButton.Ok | QDialogButtonBox.StandardButton.Cancel
        )
        buttons.accepted.connect(self.save_settings)
        buttons.rejected.connect(self.reject)
        layout.addRow(buttons)

    def _create_api_key_input(self) -> QLineEdit:
        """Checks keyring and returns a password line edit."""
        line_edit = QLineEdit()
        if self.secure_storage.get_credential(API_KEY_CREDENTIAL):
            line_edit.setPlaceholderText(SAVED_KEY_PLACEHOLDER)
        else:
            line_edit.setPlaceholderText("Enter TMDB API key...")
        line_edit.setEchoMode(QLineEdit.EchoMode.Password)
        return line_edit

    def _create_api_key_row(self) -> QWidget:
        widget = QWidget()
        layout = QHBoxLayout(widget)
        layout.setContentsMargins(0, 0, 0, 0)
        self.btn_forget_key = QPushButton("Forget Key")
        self.btn_forget_key.setEnabled(self.api_key.placeholderText() == SAVED_KEY_PLACEHOLDER)
        self.btn_forget_key.clicked.connect(self._forget_key)
        layout.addWidget(self.api_key)
        layout.addWidget(self.btn_forget_key)
        return widget

    def _forget_key(self):
        """Marks the saved key for removal; applied on save."""
        self._forget_saved_key = True
        self.api_key.clear()
        self.api_key.setPlaceholderText("Enter TMDB API key...")
        self.btn_forget_key.setEnabled(False)

    def _create_test_button(self) -> QWidget:
        widget = QWidget()
        layout = QHBoxLayout(widget)
        layout.setContentsMargins(0, 0, 0, 0)
        self.btn_test = QPushButton("Test Connection")
        self.btn_test.clicked.connect(self._test_connection)
        layout.addStretch()
        layout.addWidget(self.btn_test)
        return widget

    def _entered_api_key(self) -> Optional[str]:
        api_key = self.api_key.text().strip()
        if not api_key or api_key == SAVED_KEY_PLACEHOLDER:
            return None
        return api_key

    def _saved_api_key(self) -> Optional[str]:
        if self._forget_saved_key:
            return None
        return self.secure_storage.get_credential(API_KEY_CREDENTIAL)

    def _form_config(self) -> AppConfig:
        return AppConfig(
            api_key=self._entered_api_key() or self._saved_api_key() or "",
            base_url=self.base_url.text().strip().rstrip("/"),
            image_base_url=self.image_base_url.text().strip().rstrip("/"),
            language=self.language.text().strip() or AppConfig.language,
        )

    def _test_connection(self):
        """Runs a popular-list request in a worker thread."""
        if self.test_thread is not None:
            QMessageBox.warning(self, "Test in Progress", "A connection test is already running. Please wait.")
            return

        config = self._form_config()
        if not validate_url(config.base_url) or not config.has_api_key:
            QMessageBox.warning(self, "Missing Info", "Please enter a valid API URL and an API key to test.")
            return

        self.btn_test.setEnabled(False)
        self.btn_test.setText("Testing...")

        catalog = CatalogClient(self.api_client, config)
        self.test_thread = QThread()
        self.test_worker = ApiWorker(catalog.list_popular, 1)
        self.test_worker.moveToThread(self.test_thread)

        self.test_worker.finished.connect(self._on_test_finished)
        self.test_worker.finished.connect(self.test_thread.quit)
        self.test_worker.finished.connect(self.test_worker.deleteLater)
        self.test_thread.finished.connect(self.test_thread.deleteLater)
        self.test_thread.finished.connect(self._clear_test_thread)

        self.test_thread.started.connect(self.test_worker.run)
        self.test_thread.start()

    def _on_test_finished(self, result: Optional[MoviePage], error: Optional[Exception]):
        self.btn_test.setEnabled(True)
        self.btn_test.setText("Test Connection")

        if error is not None:
            logger.error(f"Test connection failed: {error}")
            QMessageBox.critical(self, "Test Failed", f"Connection failed:\n{error}")
        else:
            QMessageBox.information(self, "Test Successful",
                f"Successfully connected to TMDB!\n"
                f"Popular movies available: {result.total_pages} pages"
            )

    def _clear_test_thread(self):
        self.test_thread = None
        self.test_worker = None

    def save_settings(self):
        """
        Save settings to QSettings and the API key to SecureStorage.
        """
        urls = {
            "base_url": self.base_url.text().strip().rstrip("/"),
            "image_base_url": self.image_base_url.text().strip().rstrip("/"),
        }
        for url in urls.values():
            if url and not validate_url(url):
                QMessageBox.warning(self, "Invalid URL", f"'{url}' is not a valid http(s) URL.")
                return

        for field_name, url in urls.items():
            self.settings.set_section_setting(SETTINGS_SECTION, field_name, url)
        self.settings.set_section_setting(SETTINGS_SECTION, "language", self.language.text().strip())

        api_key = self._entered_api_key()
        if api_key:
            self.secure_storage.set_credential(API_KEY_CREDENTIAL, api_key)
        elif self._forget_saved_key:
            self.secure_storage.delete_credential(API_KEY_CREDENTIAL)

        self.accept()

    def closeEvent(self, event):
        if self.test_thread is not None:
            self.test_thread.quit()
            self.test_thread.wait(1000)
        event.accept()
