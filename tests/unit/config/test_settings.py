"""Tests for data layer settings."""

from mockbank_config import Settings, get_config_dir, get_settings
from mockbank_config.settings import _resolve_env_file_path


class TestSettings:
    """Tests for loading settings from the environment."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("MOCKBANK_API_URL", raising=False)
        monkeypatch.delenv("MOCKBANK_ACCESS_TOKEN", raising=False)

        settings = Settings(_env_file=None)

        assert settings.mockbank_api_url == "http://localhost:3000"
        assert settings.mockbank_api_timeout == 10.0
        assert settings.access_token is None

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("MOCKBANK_API_URL", "https://api.mockbank.test/")
        monkeypatch.setenv("MOCKBANK_API_TIMEOUT", "2.5")
        monkeypatch.setenv("MOCKBANK_ACCESS_TOKEN", "secret-token")

        settings = Settings(_env_file=None)

        assert settings.mockbank_api_url == "https://api.mockbank.test"
        assert settings.mockbank_api_timeout == 2.5
        assert settings.access_token == "secret-token"

    def test_token_is_not_printed(self, monkeypatch):
        monkeypatch.setenv("MOCKBANK_ACCESS_TOKEN", "secret-token")

        settings = Settings(_env_file=None)

        assert "secret-token" not in repr(settings)

    def test_blank_token_is_none(self, monkeypatch):
        monkeypatch.setenv("MOCKBANK_ACCESS_TOKEN", "  ")

        assert Settings(_env_file=None).access_token is None

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()


class TestEnvFileDiscovery:
    """Tests for picking the dotenv file."""

    def test_explicit_env_file(self, monkeypatch, tmp_path):
        env_file = tmp_path / "mockbank.env"
        env_file.write_text("MOCKBANK_API_URL=http://from-file.test\n")
        monkeypatch.setenv("MOCKBANK_ENV_FILE", str(env_file))
        monkeypatch.delenv("MOCKBANK_API_URL", raising=False)

        path = _resolve_env_file_path()

        assert path == env_file
        assert Settings(_env_file=path).mockbank_api_url == "http://from-file.test"

    def test_missing_explicit_file_is_skipped(self, monkeypatch, tmp_path):
        monkeypatch.setenv("MOCKBANK_ENV_FILE", str(tmp_path / "absent.env"))

        assert _resolve_env_file_path() != tmp_path / "absent.env"

    def test_config_dir_sits_in_project_root(self):
        assert get_config_dir().name == "config"
