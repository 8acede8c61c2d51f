"""Login comparison logic for upload and delete operations."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from ..models import CreateJob, DeleteJob, LocalLogin, RemoteLogin, UpdateJob

logger = logging.getLogger(__name__)


class SyncAction(str, Enum):
    """Actions that can be taken for a login."""

    CREATE = "create"
    """Create a new remote login"""

    UPDATE = "update"
    """Replace the password of a remote login"""

    DELETE = "delete"
    """Delete a remote login"""

    SKIP = "skip"
    """Skip login (no action needed)"""


@dataclass
class SyncDecision:
    """Represents a decision about how to sync a login."""

    action: SyncAction
    """Action to take"""

    reason: str
    """Human-readable reason for this decision"""

    local_login: Optional[LocalLogin]
    """Local login (if any)"""

    remote_login: Optional[RemoteLogin]
    """Remote login (if any)"""

    @property
    def job(self) -> Optional[Union[CreateJob, UpdateJob, DeleteJob]]:
        """Job to submit for this decision, None for SKIP."""
        if self.action == SyncAction.CREATE and self.local_login is not None:
            return CreateJob(
                username=self.local_login.username,
                password=self.local_login.password,
                hostname=self.local_login.hostname,
            )
        if (
            self.action == SyncAction.UPDATE
            and self.local_login is not None
            and self.remote_login is not None
        ):
            return UpdateJob(
                remote_id=self.remote_login.id,
                password=self.local_login.password,
                remote=self.remote_login,
            )
        if self.action == SyncAction.DELETE and self.remote_login is not None:
            return DeleteJob(remote_id=self.remote_login.id)
        return None


class LoginComparator:
    """Compares local and remote logins to determine sync actions."""

    def __init__(self, remote_logins: Iterable[RemoteLogin]):
        """Initialize login comparator.

        Args:
            remote_logins: Snapshot of the remote logins, in service order
        """
        self.remote_logins = list(remote_logins)
        self._by_key: dict[tuple[str, str], RemoteLogin] = {}
        for remote in self.remote_logins:
            key = (remote.username, remote.hostname)
            if key in self._by_key:
                # First record wins; later duplicates are never updated
                logger.warning(
                    f"Duplicate remote login for {remote.username} at "
                    f"{remote.hostname} (id {remote.id}); using id "
                    f"{self._by_key[key].id}"
                )
                continue
            self._by_key[key] = remote

    def find_remote(self, local_login: LocalLogin) -> Optional[RemoteLogin]:
        """Return the first remote login with the same username and hostname."""
        return self._by_key.get((local_login.username, local_login.hostname))

    def compare_uploads(self, local_logins: Iterable[LocalLogin]) -> list[SyncDecision]:
        """Decide what to upload for each eligible local login.

        Args:
            local_logins: Logins eligible for upload, in store order

        Returns:
            One SyncDecision per local login
        """
        return [self._compare_upload(login) for login in local_logins]

    def _compare_upload(self, local_login: LocalLogin) -> SyncDecision:
        remote_login = self.find_remote(local_login)

        if remote_login is None:
            return SyncDecision(
                action=SyncAction.CREATE,
                reason="New local login",
                local_login=local_login,
                remote_login=None,
            )

        if remote_login.password == local_login.password:
            return SyncDecision(
                action=SyncAction.SKIP,
                reason="Password unchanged",
                local_login=local_login,
                remote_login=remote_login,
            )

        return SyncDecision(
            action=SyncAction.UPDATE,
            reason="Password changed locally",
            local_login=local_login,
            remote_login=remote_login,
        )

    def compare_deletes(self, local_logins: Iterable[LocalLogin]) -> list[SyncDecision]:
        """Decide which remote logins to delete.

        A remote login is deleted only when a local login has the same
        username, password and hostname. Remote logins whose password
        differs from the local one are kept.

        Args:
            local_logins: Local logins, not restricted by the filter mode

        Returns:
            One DELETE decision per matching remote login, in remote order
        """
        local_keys: dict[tuple[str, str, str], LocalLogin] = {}
        for login in local_logins:
            key = (login.username, login.password, login.hostname)
            local_keys.setdefault(key, login)

        decisions: list[SyncDecision] = []
        for remote_login in self.remote_logins:
            key = (remote_login.username, remote_login.password, remote_login.hostname)
            local_login = local_keys.get(key)
            if local_login is None:
                continue
            decisions.append(
                SyncDecision(
                    action=SyncAction.DELETE,
                    reason="Remote login present locally",
                    local_login=local_login,
                    remote_login=remote_login,
                )
            )
        return decisions


def decisions_to_jobs(
    decisions: Iterable[SyncDecision],
) -> list[Union[CreateJob, UpdateJob, DeleteJob]]:
    """Collect the jobs of all non-SKIP decisions, keeping their order."""
    jobs = []
    for decision in decisions:
        job = decision.job
        if job is not None:
            jobs.append(job)
    return jobs
