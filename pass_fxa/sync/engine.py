"""Core sync engine for reconciling the password store with the sync service."""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from rich.progress import BarColumn, MofNCompleteColumn, Progress, TextColumn

from ..api import LoginSyncClient
from ..config import DEFAULT_ACCOUNT_HOST
from ..models import CreateJob, DeleteJob, LocalLogin, UpdateJob, UpsertJob
from ..output import OutputFormatter
from ..store import GpgContext, PasswordStore
from .comparator import LoginComparator, SyncAction, SyncDecision, decisions_to_jobs
from .credentials import CredentialSelector
from .extractor import LoginExtractor
from .filters import FilterMode, resolve_filter_mode
from .operations import SyncOperations

logger = logging.getLogger(__name__)


class Operation(str, Enum):
    """Operation performed by a run. Exactly one runs per invocation."""

    UPLOAD = "upload"
    """Create or update remote logins from the store"""

    DELETE = "delete"
    """Delete remote logins that are present in the store"""


@dataclass
class LocalState:
    """Result of reading the password store for one run."""

    logins: list[LocalLogin]
    """Every extracted login, in store order"""

    credentials: LocalLogin
    """Login used to authenticate to the sync service"""

    filter_mode: FilterMode

    secrets: int = 0
    """Number of secrets read"""

    skipped: list[str] = field(default_factory=list)
    """Secrets that did not yield a login"""

    excluded: Optional[LocalLogin] = None
    """Credential login left out of syncing, if any"""

    @property
    def tracked_logins(self) -> list[LocalLogin]:
        """Logins taking part in the run, without the excluded credentials."""
        return [login for login in self.logins if login is not self.excluded]

    @property
    def upload_logins(self) -> list[LocalLogin]:
        """Tracked logins allowed by the filter mode."""
        return [
            login
            for login in self.tracked_logins
            if self.filter_mode.is_eligible(login)
        ]


class SyncEngine:
    """Core sync engine that reconciles local and remote logins."""

    def __init__(
        self,
        store: PasswordStore,
        gpg: GpgContext,
        client: LoginSyncClient,
        output: Optional[OutputFormatter] = None,
        pass_name: Optional[str] = None,
        account_host: str = DEFAULT_ACCOUNT_HOST,
    ):
        """Initialize sync engine.

        Args:
            store: Password store to read
            gpg: Decryption context shared by all secrets of the run
            client: Sync service client
            output: Output formatter for displaying progress/status
            pass_name: Secret name holding the account credentials
            account_host: Host identifying the account credentials
        """
        self.store = store
        self.gpg = gpg
        self.client = client
        self.output = output or OutputFormatter()
        self.pass_name = pass_name
        self.account_host = account_host
        self.operations = SyncOperations(client)

    def read_local_state(self) -> LocalState:
        """Decrypt every secret and resolve credentials and filter mode.

        Secrets are decrypted one at a time through the shared gpg context.

        Raises:
            DecryptionError: If a secret cannot be decrypted
            LoginExtractionError: If a secret holds an invalid URL or marker
            CredentialsNotFoundError: If no credential login exists
            AmbiguousCredentialsError: If several credential logins exist
        """
        secrets = self.store.list_secrets()
        extractor = LoginExtractor()
        selector = CredentialSelector(self.pass_name, self.account_host)
        logins: list[LocalLogin] = []

        with Progress(
            TextColumn("{task.description}"),
            BarColumn(),
            MofNCompleteColumn(),
            console=self.output.err_console,
            disable=self.output.quiet,
        ) as progress:
            task = progress.add_task("Local passwords processed", total=len(secrets))
            for secret in secrets:
                plaintext = self.gpg.decrypt(secret)
                login = extractor.extract(secret.name, plaintext)
                if login is not None:
                    selector.observe(login)
                    logins.append(login)
                progress.advance(task)

        credentials = selector.select()
        filter_mode = resolve_filter_mode(logins)
        excluded = credentials if selector.is_excluded(credentials) else None

        logger.debug(
            f"Read {len(logins)} login(s) from {len(secrets)} secret(s), "
            f"filter mode {filter_mode.value}"
        )
        return LocalState(
            logins=logins,
            credentials=credentials,
            filter_mode=filter_mode,
            secrets=len(secrets),
            skipped=list(extractor.skipped),
            excluded=excluded,
        )

    async def run(
        self, operation: Operation = Operation.UPLOAD, dry_run: bool = False
    ) -> dict:
        """Run one reconciliation.

        Args:
            operation: Upload (default) or delete
            dry_run: If True, compute and show the jobs without submitting them

        Returns:
            Dictionary with sync statistics

        Examples:
            >>> engine = SyncEngine(store, GpgContext(), client)
            >>> stats = asyncio.run(engine.run(dry_run=True))
            >>> print(f"Would create {stats['creates']} logins")
        """
        state = self.read_local_state()
        stats = self._initial_stats(state, operation, dry_run)

        if state.filter_mode.is_conflicting:
            self.output.warning("Ambiguous settings, include & exclude both present.")
            stats["aborted"] = True
            return stats

        await self.client.authenticate(
            state.credentials.username, state.credentials.password
        )
        remote_logins = await self.client.fetch_logins()
        logger.debug(f"Remote logins: {remote_logins}")

        comparator = LoginComparator(remote_logins)
        if operation == Operation.DELETE:
            decisions = comparator.compare_deletes(state.tracked_logins)
        else:
            decisions = comparator.compare_uploads(state.upload_logins)

        stats.update(self._categorize_decisions(decisions))
        if dry_run:
            self._display_plan(decisions)

        jobs = decisions_to_jobs(decisions)
        if operation == Operation.DELETE:
            delete_jobs = [job for job in jobs if isinstance(job, DeleteJob)]
            self.output.info(f"Deleting {len(delete_jobs)} passwords.")
            if not dry_run:
                await self.operations.delete(delete_jobs)
        else:
            upsert_jobs: list[UpsertJob] = [
                job for job in jobs if isinstance(job, (CreateJob, UpdateJob))
            ]
            self.output.info(f"Uploading {len(upsert_jobs)} passwords.")
            if not dry_run:
                await self.operations.upload(upsert_jobs)

        return stats

    def _initial_stats(
        self, state: LocalState, operation: Operation, dry_run: bool
    ) -> dict:
        return {
            "operation": operation.value,
            "dry_run": dry_run,
            "aborted": False,
            "secrets": state.secrets,
            "logins": len(state.logins),
            "skipped": len(state.skipped),
            "filter_mode": state.filter_mode.value,
            "creates": 0,
            "updates": 0,
            "deletes": 0,
            "unchanged": 0,
        }

    def _categorize_decisions(self, decisions: list[SyncDecision]) -> dict:
        """Count decisions per action."""
        stats = {"creates": 0, "updates": 0, "deletes": 0, "unchanged": 0}
        for decision in decisions:
            if decision.action == SyncAction.CREATE:
                stats["creates"] += 1
            elif decision.action == SyncAction.UPDATE:
                stats["updates"] += 1
            elif decision.action == SyncAction.DELETE:
                stats["deletes"] += 1
            elif decision.action == SyncAction.SKIP:
                stats["unchanged"] += 1
        return stats

    def _display_plan(self, decisions: list[SyncDecision]) -> None:
        """Show every planned job without secrets."""
        if self.output.quiet:
            return

        self.output.info("Dry run: No changes will be made")
        for decision in decisions:
            if decision.action == SyncAction.SKIP:
                continue
            login = decision.local_login or decision.remote_login
            if login is None:
                continue
            self.output.info(
                f"  {decision.action.value}: {login.username} at {login.hostname} "
                f"({decision.reason})"
            )
