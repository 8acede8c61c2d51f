"""Access to a ``pass`` compatible password store.

Secrets are ``*.gpg`` files below the store root. A secret's name is its
path relative to the root, with forward slashes and without the ``.gpg``
suffix, e.g. ``websites/github.com/alice``.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .exceptions import ConfigError, DecryptionError

logger = logging.getLogger(__name__)

SECRET_SUFFIX = ".gpg"


@dataclass(frozen=True)
class Secret:
    """Encrypted entry of the password store."""

    name: str
    """Path-like name relative to the store root"""

    path: Path
    """Encrypted file"""


class Plaintext:
    """Decrypted body of a secret.

    The first line holds the password. Following lines may declare
    properties as ``key: value``.
    """

    def __init__(self, text: str):
        self._text = text

    def __repr__(self) -> str:
        return "Plaintext(<hidden>)"

    def first_line(self) -> Optional[str]:
        """Return the first line, or None when the body is empty."""
        lines = self._text.splitlines()
        return lines[0] if lines else None

    def property(self, name: str) -> Optional[str]:
        """Return the value of the first ``name: value`` line.

        The lookup is case-sensitive and skips the password line. Key and
        value are stripped of surrounding whitespace.
        """
        for line in self._text.splitlines()[1:]:
            key, sep, value = line.partition(":")
            if sep and key.strip() == name:
                return value.strip()
        return None

    def property_any(self, names: tuple[str, ...]) -> Optional[str]:
        """Return the value of the first property present, in ``names`` order."""
        for name in names:
            value = self.property(name)
            if value is not None:
                return value
        return None


class PasswordStore:
    """Lists the secrets of a password store directory."""

    def __init__(self, root: Path):
        self.root = Path(root).expanduser()

    def list_secrets(self, query: Optional[str] = None) -> list[Secret]:
        """List all secrets sorted by name.

        Args:
            query: Only keep secrets whose name contains this text

        Returns:
            List of Secret objects
        """
        if not self.root.is_dir():
            raise ConfigError(f"Password store not found: {self.root}")

        secrets: list[Secret] = []
        for path in self.root.rglob(f"*{SECRET_SUFFIX}"):
            relative = path.relative_to(self.root)
            # Skip .git, .extensions and other hidden entries
            if any(part.startswith(".") for part in relative.parts):
                continue
            if not path.is_file():
                continue
            name = relative.as_posix()[: -len(SECRET_SUFFIX)]
            if query and query not in name:
                continue
            secrets.append(Secret(name=name, path=path))

        secrets.sort(key=lambda s: s.name)
        logger.debug(f"Found {len(secrets)} secret(s) in {self.root}")
        return secrets


class GpgContext:
    """Decrypts secrets with the system ``gpg`` binary.

    One context is shared by a whole run and used for one secret at a time;
    it is not safe to call :meth:`decrypt` concurrently.
    """

    def __init__(self, binary: str = "gpg"):
        self.binary = binary

    def decrypt(self, secret: Secret) -> Plaintext:
        """Decrypt a secret.

        Raises:
            DecryptionError: If gpg is missing or fails
        """
        if shutil.which(self.binary) is None:
            raise DecryptionError(secret.name, f"{self.binary} not found in PATH")

        cmd = [self.binary, "--batch", "--quiet", "--decrypt", str(secret.path)]
        try:
            result = subprocess.run(
                cmd, capture_output=True, text=True, check=False
            )
        except OSError as e:
            raise DecryptionError(secret.name, str(e)) from e

        if result.returncode != 0:
            raise DecryptionError(secret.name, result.stderr.strip())

        logger.debug(f"Decrypted {secret.name}")
        return Plaintext(result.stdout)
