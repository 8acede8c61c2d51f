"""Batch submission of sync jobs."""

import logging

from ..api import LoginSyncClient
from ..models import CreateJob, DeleteJob, UpdateJob, UpsertJob

logger = logging.getLogger(__name__)


class SyncOperations:
    """Submits the jobs of one run to the sync service as a single batch."""

    def __init__(self, client: LoginSyncClient):
        """Initialize sync operations.

        Args:
            client: Authenticated sync client
        """
        self.client = client

    async def upload(self, jobs: list[UpsertJob]) -> list[str]:
        """Submit create and update jobs in one call.

        Returns:
            Ids written by the service
        """
        creates = sum(1 for job in jobs if isinstance(job, CreateJob))
        updates = sum(1 for job in jobs if isinstance(job, UpdateJob))
        logger.debug(f"Submitting {creates} create(s) and {updates} update(s)")
        return await self.client.submit_upserts(jobs)

    async def delete(self, jobs: list[DeleteJob]) -> None:
        """Submit delete jobs in one call."""
        ids = [job.remote_id for job in jobs]
        logger.debug(f"Submitting {len(ids)} delete(s)")
        await self.client.submit_deletes(ids)
