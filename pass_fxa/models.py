"""Data models for local and remote logins and sync jobs."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Union

from .exceptions import UnknownFilterError


class Filter(str, Enum):
    """Per-entry marker stored in the ``fxa`` property of a secret."""

    INCLUDE = "include"
    """Entry opts in to syncing"""

    EXCLUDE = "exclude"
    """Entry opts out of syncing"""

    @classmethod
    def parse(cls, value: str, secret_name: Optional[str] = None) -> Filter:
        """Parse a marker value, accepting exactly ``include`` or ``exclude``.

        Raises:
            UnknownFilterError: For any other value
        """
        for member in cls:
            if member.value == value:
                return member
        raise UnknownFilterError(value, secret_name)


@dataclass(frozen=True)
class LocalLogin:
    """Login extracted from one decrypted secret."""

    secret_name: str
    """Name of the secret the login was read from"""

    username: str

    password: str = field(repr=False)

    hostname: str
    """Normalized absolute URL"""

    filter: Optional[Filter] = None


@dataclass(frozen=True)
class RemoteLogin:
    """Login record held by the sync service."""

    id: str
    username: str
    password: str = field(repr=False)
    hostname: str
    """Normalized absolute URL"""

    extra: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)
    """Other record fields, sent back unchanged when the record is updated"""

    raw_hostname: Optional[str] = field(default=None, repr=False, compare=False)
    """Hostname exactly as stored by the service"""

    @classmethod
    def from_record(cls, record: dict[str, Any], hostname: str) -> RemoteLogin:
        """Build a RemoteLogin from a service record.

        Args:
            record: Record as returned by the service
            hostname: Normalized form of the record's hostname
        """
        known = {"id", "username", "password", "hostname"}
        return cls(
            id=str(record["id"]),
            username=record.get("username") or "",
            password=record.get("password") or "",
            hostname=hostname,
            extra={k: v for k, v in record.items() if k not in known},
            raw_hostname=record.get("hostname"),
        )


@dataclass(frozen=True)
class CreateJob:
    """Create a new remote login."""

    username: str
    password: str = field(repr=False)
    hostname: str


@dataclass(frozen=True)
class UpdateJob:
    """Replace the password of an existing remote login."""

    remote_id: str
    password: str = field(repr=False)
    remote: Optional[RemoteLogin] = field(default=None, compare=False, repr=False)
    """Remote record being updated, used to resend its other fields"""


@dataclass(frozen=True)
class DeleteJob:
    """Delete a remote login."""

    remote_id: str


UpsertJob = Union[CreateJob, UpdateJob]
