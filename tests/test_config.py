import pytest

from screener.utils.config import Settings, normalize_base_url, DEFAULT_API_BASE_URL
from screener.utils.exceptions import ConfigurationError


class TestBaseUrlNormalization:
    """Test cases for resolving the scoring service base URL"""

    def test_strips_fragment_whitespace_and_trailing_slash(self):
        assert normalize_base_url("http://host:5000/#comment ") == "http://host:5000"

    @pytest.mark.parametrize("raw, expected", [
        ("http://host:5000", "http://host:5000"),
        ("http://host:5000/", "http://host:5000"),
        ("  http://host:5000/api/  ", "http://host:5000/api"),
        ("http://host:5000//", "http://host:5000/"),
    ])
    def test_normalization_cases(self, raw, expected):
        assert normalize_base_url(raw) == expected

    @pytest.mark.parametrize("raw", [None, ""])
    def test_missing_value_uses_default(self, raw):
        assert normalize_base_url(raw) == DEFAULT_API_BASE_URL


class TestSettings:
    """Test cases for environment-driven settings"""

    def test_from_env(self, monkeypatch):
        monkeypatch.setattr("screener.utils.config.load_dotenv", lambda: None)
        monkeypatch.setenv("API_BASE_URL", "https://scoring.example.com/#prod")
        monkeypatch.setenv("REQUEST_TIMEOUT", "30")

        settings = Settings.from_env()

        assert settings.api_base_url == "https://scoring.example.com"
        assert settings.request_timeout == 30.0
        assert settings.endpoint("/api/roles") == "https://scoring.example.com/api/roles"

    def test_no_timeout_by_default(self, monkeypatch):
        monkeypatch.setattr("screener.utils.config.load_dotenv", lambda: None)
        monkeypatch.delenv("API_BASE_URL", raising=False)
        monkeypatch.delenv("REQUEST_TIMEOUT", raising=False)

        settings = Settings.from_env()

        assert settings.api_base_url == DEFAULT_API_BASE_URL
        assert settings.request_timeout is None

    @pytest.mark.parametrize("raw", ["soon", "-5", "0"])
    def test_invalid_timeout(self, monkeypatch, raw):
        monkeypatch.setattr("screener.utils.config.load_dotenv", lambda: None)
        monkeypatch.setenv("REQUEST_TIMEOUT", raw)

        with pytest.raises(ConfigurationError) as exc_info:
            Settings.from_env()
        assert exc_info.value.details["config_key"] == "REQUEST_TIMEOUT"

    def test_settings_are_immutable(self):
        settings = Settings(api_base_url="http://host:5000")
        with pytest.raises(Exception):
            settings.api_base_url = "http://other"

    def test_session_limits(self, monkeypatch):
        monkeypatch.setattr("screener.utils.config.load_dotenv", lambda: None)
        monkeypatch.setenv("SESSION_IDLE_TIMEOUT", "120")
        monkeypatch.setenv("MAX_SESSIONS", "5")

        settings = Settings.from_env()

        assert settings.session_idle_timeout == 120.0
        assert settings.max_sessions == 5

    def test_default_session_limits(self, monkeypatch):
        monkeypatch.setattr("screener.utils.config.load_dotenv", lambda: None)
        monkeypatch.delenv("SESSION_IDLE_TIMEOUT", raising=False)
        monkeypatch.delenv("MAX_SESSIONS", raising=False)

        settings = Settings.from_env()

        assert settings.session_idle_timeout == 3600
        assert settings.max_sessions == 1000

    @pytest.mark.parametrize("raw", ["many", "2.5", "0"])
    def test_invalid_max_sessions(self, monkeypatch, raw):
        monkeypatch.setattr("screener.utils.config.load_dotenv", lambda: None)
        monkeypatch.setenv("MAX_SESSIONS", raw)

        with pytest.raises(ConfigurationError) as exc_info:
            Settings.from_env()
        assert exc_info.value.details["config_key"] == "MAX_SESSIONS"
