from reelview.core.config import API_KEY_ENV_VAR, DEFAULT_BASE_URL, SETTINGS_SECTION, load_config
from reelview.core.settings_manager import SettingsManager


class FakeSecureStorage:
    def __init__(self, secrets=None):
        self.secrets = dict(secrets or {})

    def get_credential(self, key):
        return self.secrets.get(key)


def test_defaults_when_nothing_configured(tmp_path, monkeypatch):
    monkeypatch.delenv(API_KEY_ENV_VAR, raising=False)
    config = load_config(SettingsManager(str(tmp_path / "s.ini")), FakeSecureStorage())

    assert config.api_key == ""
    assert not config.has_api_key
    assert config.base_url == DEFAULT_BASE_URL
    assert config.debounce_ms == 500
    assert config.min_search_length == 3


def test_keyring_key_wins_over_environment(tmp_path, monkeypatch):
    monkeypatch.setenv(API_KEY_ENV_VAR, "from-env")
    config = load_config(SettingsManager(str(tmp_path / "s.ini")), FakeSecureStorage({"tmdb_api_key": "from-keyring"}))
    assert config.api_key == "from-keyring"


def test_environment_key_is_fallback(tmp_path, monkeypatch):
    monkeypatch.setenv(API_KEY_ENV_VAR, "from-env")
    config = load_config(SettingsManager(str(tmp_path / "s.ini")), FakeSecureStorage())
    assert config.api_key == "from-env"


def test_saved_settings_override_defaults(tmp_path, monkeypatch):
    monkeypatch.delenv(API_KEY_ENV_VAR, raising=False)
    path = str(tmp_path / "s.ini")
    settings = SettingsManager(path)
    settings.set_section_setting(SETTINGS_SECTION, "base_url", "https://proxy.example.test/3/")
    settings.set_section_setting(SETTINGS_SECTION, "debounce_ms", 300)
    settings.qsettings.sync()

    config = load_config(SettingsManager(path), FakeSecureStorage())

    assert config.base_url == "https://proxy.example.test/3"
    assert config.debounce_ms == 300


def test_key_value_store_round_trip(tmp_path):
    settings = SettingsManager(str(tmp_path / "s.ini"))

    assert settings.load("favoriteMovies") is None
    settings.save("favoriteMovies", '[{"id": 1, "title": "A, B; C"}]')

    assert settings.load("favoriteMovies") == '[{"id": 1, "title": "A, B; C"}]'
    assert settings.has_any_settings()
