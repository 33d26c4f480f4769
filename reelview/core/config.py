# reelview/core/config.py
"""
Runtime configuration assembled from QSettings, keyring and the environment.
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional

from .settings_manager import SettingsManager
from .secure_storage import SecureStorage

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.themoviedb.org/3"
DEFAULT_IMAGE_BASE_URL = "https://image.tmdb.org/t/p/w500"

SETTINGS_SECTION = "catalog"
API_KEY_CREDENTIAL = "tmdb_api_key"
API_KEY_ENV_VAR = "TMDB_API_KEY"


@dataclass
class AppConfig:
    api_key: str = ""
    base_url: str = DEFAULT_BASE_URL
    image_base_url: str = DEFAULT_IMAGE_BASE_URL
    language: str = "en-US"
    timeout: int = 15
    debounce_ms: int = 500
    min_search_length: int = 3
    favorites_key: str = "favoriteMovies"

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key)


def load_config(settings: SettingsManager, secure_storage: Optional[SecureStorage] = None) -> AppConfig:
    """
    Build an AppConfig. The API key comes from keyring first and falls back
    to the TMDB_API_KEY environment variable.
    """
    defaults = AppConfig()

    api_key = secure_storage.get_credential(API_KEY_CREDENTIAL) if secure_storage else None
    if not api_key:
        api_key = os.environ.get(API_KEY_ENV_VAR, "")
        if api_key:
            logger.debug(f"Using API key from ${API_KEY_ENV_VAR}")

    config = AppConfig(
        api_key=api_key or "",
        base_url=(settings.get_section_setting(SETTINGS_SECTION, "base_url", defaults.base_url) or defaults.base_url).rstrip("/"),
        image_base_url=(settings.get_section_setting(SETTINGS_SECTION, "image_base_url", defaults.image_base_url) or defaults.image_base_url).rstrip("/"),
        language=settings.get_section_setting(SETTINGS_SECTION, "language", defaults.language) or defaults.language,
        timeout=settings.get_section_setting(SETTINGS_SECTION, "timeout", defaults.timeout),
        debounce_ms=settings.get_section_setting(SETTINGS_SECTION, "debounce_ms", defaults.debounce_ms),
        min_search_length=settings.get_section_setting(SETTINGS_SECTION, "min_search_length", defaults.min_search_length),
        favorites_key=defaults.favorites_key,
    )

    if not config.has_api_key:
        logger.warning("⚠️ No TMDB API key configured. Catalog requests will fail until one is set.")
    return config
