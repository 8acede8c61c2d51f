"""pass-fxa - sync a pass password store with a Firefox-style login sync service."""

from .api import LoginSyncClient
from .exceptions import (
    AmbiguousCredentialsError,
    AuthenticationError,
    ConfigError,
    CredentialsNotFoundError,
    DecryptionError,
    InvalidResponseError,
    InvalidURLError,
    LoginExtractionError,
    PassFxaError,
    SyncAPIError,
    SyncNetworkError,
    UnknownFilterError,
)
from .models import CreateJob, DeleteJob, Filter, LocalLogin, RemoteLogin, UpdateJob
from .store import GpgContext, PasswordStore, Plaintext, Secret

__all__ = [
    "LoginSyncClient",
    "PasswordStore",
    "GpgContext",
    "Plaintext",
    "Secret",
    "Filter",
    "LocalLogin",
    "RemoteLogin",
    "CreateJob",
    "UpdateJob",
    "DeleteJob",
    "PassFxaError",
    "ConfigError",
    "DecryptionError",
    "LoginExtractionError",
    "UnknownFilterError",
    "InvalidURLError",
    "CredentialsNotFoundError",
    "AmbiguousCredentialsError",
    "SyncAPIError",
    "AuthenticationError",
    "SyncNetworkError",
    "InvalidResponseError",
]
