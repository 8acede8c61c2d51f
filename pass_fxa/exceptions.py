"""Exceptions raised by pass-fxa."""

from __future__ import annotations


class PassFxaError(Exception):
    """Base exception for all pass-fxa errors."""


class ConfigError(PassFxaError):
    """Raised when required configuration is missing or invalid."""


class DecryptionError(PassFxaError):
    """Raised when a secret from the password store cannot be decrypted."""

    def __init__(self, secret_name: str, detail: str = ""):
        self.secret_name = secret_name
        self.detail = detail
        message = f"Failed to decrypt {secret_name}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class LoginExtractionError(PassFxaError):
    """Raised when a decrypted secret holds data that cannot be understood."""


class UnknownFilterError(LoginExtractionError):
    """Raised when the ``fxa`` property is neither ``include`` nor ``exclude``."""

    def __init__(self, value: str, secret_name: str | None = None):
        self.value = value
        self.secret_name = secret_name
        where = f" in {secret_name}" if secret_name else ""
        super().__init__(
            f"Unknown fxa setting {value!r}{where} "
            "(expected 'include' or 'exclude')"
        )


class InvalidURLError(LoginExtractionError):
    """Raised when a URL property is not an absolute URL."""

    def __init__(self, value: str, secret_name: str | None = None):
        self.value = value
        self.secret_name = secret_name
        where = f" in {secret_name}" if secret_name else ""
        super().__init__(f"Invalid URL {value!r}{where}")


class CredentialsNotFoundError(PassFxaError):
    """Raised when no local entry holds the sync account credentials."""

    def __init__(self, message: str = "Could not find Firefox Account credentials."):
        super().__init__(message)


class AmbiguousCredentialsError(PassFxaError):
    """Raised when several local entries could be the sync account credentials.

    Attributes:
        candidates: ``(secret_name, username)`` pair for every candidate
    """

    def __init__(self, candidates: list[tuple[str, str]]):
        self.candidates = candidates
        super().__init__(
            "Ambiguous Firefox Account credential locations, "
            "please specify the location of the credentials"
        )


class SyncAPIError(PassFxaError):
    """Base exception for errors talking to the sync service."""


class AuthenticationError(SyncAPIError):
    """Raised when the sync service rejects the account credentials."""


class SyncNetworkError(SyncAPIError):
    """Raised when the sync service cannot be reached."""


class InvalidResponseError(SyncAPIError):
    """Raised when the sync service returns something that is not valid JSON."""
