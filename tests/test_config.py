"""Tests for configuration loading."""

from pathlib import Path

import pytest

from pass_fxa.config import DEFAULT_ACCOUNT_HOST, DEFAULT_TIMEOUT, Config


@pytest.fixture
def clean_env(monkeypatch):
    """Remove pass-fxa variables from the environment."""
    for key in (
        "PASSWORD_STORE_DIR",
        "PASS_FXA_API_URL",
        "PASS_FXA_GPG",
        "PASS_FXA_ACCOUNT_HOST",
        "PASS_FXA_TIMEOUT",
    ):
        monkeypatch.delenv(key, raising=False)
    return monkeypatch


class TestConfig:
    """Tests for the Config class."""

    def test_defaults(self, clean_env, tmp_path):
        config = Config(config_path=tmp_path / "missing")

        assert config.store_dir == Path.home() / ".password-store"
        assert config.api_url is None
        assert config.gpg_binary == "gpg"
        assert config.account_host == DEFAULT_ACCOUNT_HOST
        assert config.timeout == DEFAULT_TIMEOUT

    def test_environment(self, clean_env, tmp_path):
        clean_env.setenv("PASSWORD_STORE_DIR", str(tmp_path / "store"))
        clean_env.setenv("PASS_FXA_API_URL", "https://sync.test")
        clean_env.setenv("PASS_FXA_TIMEOUT", "5")
        config = Config(config_path=tmp_path / "missing")

        assert config.store_dir == tmp_path / "store"
        assert config.api_url == "https://sync.test"
        assert config.timeout == 5.0

    def test_config_file(self, clean_env, tmp_path):
        config_file = tmp_path / "config"
        config_file.write_text(
            "# pass-fxa settings\n"
            "PASS_FXA_API_URL = \"https://file.test\"\n"
            "PASS_FXA_ACCOUNT_HOST=accounts.example.com\n"
            "garbage line\n"
        )
        config = Config(config_path=config_file)

        assert config.api_url == "https://file.test"
        assert config.account_host == "accounts.example.com"

    def test_environment_overrides_file(self, clean_env, tmp_path):
        config_file = tmp_path / "config"
        config_file.write_text("PASS_FXA_API_URL=https://file.test\n")
        clean_env.setenv("PASS_FXA_API_URL", "https://env.test")

        assert Config(config_path=config_file).api_url == "https://env.test"

    def test_invalid_timeout_falls_back(self, clean_env, tmp_path):
        clean_env.setenv("PASS_FXA_TIMEOUT", "soon")
        assert Config(config_path=tmp_path / "missing").timeout == DEFAULT_TIMEOUT
