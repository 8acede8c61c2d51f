"""Configuration management for pass-fxa."""

import logging
import os
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_STORE_DIR = Path.home() / ".password-store"
DEFAULT_ACCOUNT_HOST = "firefox.com"
DEFAULT_GPG_BINARY = "gpg"
DEFAULT_TIMEOUT = 30.0


class Config:
    """Configuration read from the environment and the config file.

    Environment variables take precedence over values stored in
    ``~/.config/pass-fxa/config``, which holds ``KEY=VALUE`` lines.
    """

    def __init__(self, config_path: Optional[Path] = None):
        self.config_path = config_path or (
            Path.home() / ".config" / "pass-fxa" / "config"
        )
        self._file_values: Optional[dict[str, str]] = None

    def get_config_path(self) -> Path:
        """Return the path of the config file."""
        return self.config_path

    def _load_file(self) -> dict[str, str]:
        if self._file_values is not None:
            return self._file_values

        values: dict[str, str] = {}
        if self.config_path.exists():
            try:
                text = self.config_path.read_text(encoding="utf-8")
            except OSError as e:
                logger.warning(f"Could not read {self.config_path}: {e}")
                text = ""
            for line in text.splitlines():
                line = line.strip()
                if not line or line.startswith("#") or "=" not in line:
                    continue
                key, value = line.split("=", 1)
                values[key.strip()] = value.strip().strip('"').strip("'")
        self._file_values = values
        return values

    def _get(self, key: str) -> Optional[str]:
        value = os.environ.get(key)
        if value:
            return value
        return self._load_file().get(key) or None

    @property
    def store_dir(self) -> Path:
        """Root directory of the password store."""
        value = self._get("PASSWORD_STORE_DIR")
        return Path(value).expanduser() if value else DEFAULT_STORE_DIR

    @property
    def api_url(self) -> Optional[str]:
        """Base URL of the login sync service."""
        return self._get("PASS_FXA_API_URL")

    @property
    def gpg_binary(self) -> str:
        return self._get("PASS_FXA_GPG") or DEFAULT_GPG_BINARY

    @property
    def account_host(self) -> str:
        """Host that marks a login as the sync account credentials."""
        return self._get("PASS_FXA_ACCOUNT_HOST") or DEFAULT_ACCOUNT_HOST

    @property
    def timeout(self) -> float:
        value = self._get("PASS_FXA_TIMEOUT")
        if value is None:
            return DEFAULT_TIMEOUT
        try:
            return float(value)
        except ValueError:
            logger.warning(f"Ignoring invalid PASS_FXA_TIMEOUT {value!r}")
            return DEFAULT_TIMEOUT


config = Config()
