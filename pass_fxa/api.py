"""Async API client for the login sync service."""

from __future__ import annotations

import logging
import time
import uuid
from typing import Any

import httpx

from .config import config
from .exceptions import (
    AuthenticationError,
    ConfigError,
    InvalidResponseError,
    SyncAPIError,
    SyncNetworkError,
)
from .models import CreateJob, RemoteLogin, UpsertJob
from .utils import normalize_url, record_url

logger = logging.getLogger(__name__)

PASSWORDS_COLLECTION = "passwords"


class LoginSyncClient:
    """Client for the ``passwords`` collection of a login sync service.

    Requests are made one at a time; the client never pipelines or
    retries. Use it as an async context manager or call :meth:`close`.

    Examples:
        >>> async with LoginSyncClient(api_url="https://sync.example.com") as c:
        ...     await c.authenticate("me@example.com", "secret")
        ...     logins = await c.fetch_logins()
    """

    def __init__(
        self,
        api_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize sync client.

        Args:
            api_url: Base URL of the service (uses config if not provided)
            timeout: Request timeout in seconds (uses config if not provided)
            transport: Optional httpx transport, mainly for tests
        """
        self.api_url = (api_url or config.api_url or "").rstrip("/")
        self.timeout = timeout if timeout is not None else config.timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        self._token: str | None = None

    async def __aenter__(self) -> LoginSyncClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    def _require_api_url(self) -> str:
        """Return the base URL, checked when the first request is made."""
        if not self.api_url:
            raise ConfigError(
                "Sync service URL not configured. "
                "Please set PASS_FXA_API_URL environment variable."
            )
        return self.api_url

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create the httpx client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout),
                follow_redirects=True,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the client and release connections."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    @property
    def is_authenticated(self) -> bool:
        return self._token is not None

    def _handle_http_error(self, e: httpx.HTTPStatusError) -> SyncAPIError:
        """Map an HTTP error to a pass-fxa exception."""
        status_code = e.response.status_code

        if status_code in (401, 403):
            return AuthenticationError(
                "Invalid Firefox Account credentials or unauthorized access"
            )

        error_msg = f"Sync request failed with status {status_code}"
        try:
            if e.response.content:
                error_data = e.response.json()
                if isinstance(error_data, dict):
                    msg = error_data.get("message") or error_data.get("error")
                    if msg:
                        error_msg = f"{error_msg}: {msg}"
        except ValueError:
            # Body is not JSON, keep the status-based message
            pass
        return SyncAPIError(error_msg)

    async def _request(self, method: str, endpoint: str, **kwargs: Any) -> Any:
        """Make an API request.

        Args:
            method: HTTP method
            endpoint: API endpoint path
            **kwargs: Additional arguments passed to httpx

        Returns:
            Response JSON data

        Raises:
            ConfigError: If no base URL is configured
            SyncAPIError: If the request fails
        """
        url = f"{self._require_api_url()}/{endpoint.lstrip('/')}"
        headers = kwargs.pop("headers", {})
        if self._token is not None:
            headers["Authorization"] = f"Bearer {self._token}"

        logger.debug(f"{method} {url}")
        try:
            response = await self._get_client().request(
                method, url, headers=headers, **kwargs
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise self._handle_http_error(e) from e
        except httpx.RequestError as e:
            raise SyncNetworkError(f"Network error: {e}") from e

        content_type = response.headers.get("Content-Type", "")
        if response.content and "application/json" not in content_type:
            raise InvalidResponseError(f"Unexpected response type: {content_type}")

        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError as e:
            raise InvalidResponseError("Invalid JSON response from server") from e

    # =========================
    # Authentication
    # =========================

    async def authenticate(self, username: str, password: str) -> None:
        """Log in to the sync service.

        Args:
            username: Account email
            password: Account password

        Raises:
            AuthenticationError: If the service rejects the credentials
        """
        data = {"email": username, "password": password}
        result = await self._request("POST", "/auth/login", json=data)
        token = result.get("token") if isinstance(result, dict) else None
        if not token:
            raise AuthenticationError("Login response did not contain a token")
        self._token = token
        logger.debug(f"Authenticated as {username}")

    def _require_auth(self) -> None:
        if self._token is None:
            raise AuthenticationError("Not authenticated, call authenticate() first")

    # =========================
    # Logins
    # =========================

    async def fetch_logins(self) -> list[RemoteLogin]:
        """Fetch every login stored in the service.

        Returns:
            Remote logins in service order. Deleted tombstones and records
            without a usable hostname are left out.
        """
        self._require_auth()
        result = await self._request(
            "GET", f"/storage/{PASSWORDS_COLLECTION}", params={"full": "1"}
        )
        records = result.get("items", []) if isinstance(result, dict) else result
        if not isinstance(records, list):
            raise InvalidResponseError("Expected a list of login records")

        logins: list[RemoteLogin] = []
        for record in records:
            if not isinstance(record, dict) or record.get("deleted"):
                continue
            if "id" not in record:
                logger.warning("Ignoring remote login without id")
                continue
            try:
                hostname = normalize_url(record.get("hostname") or "")
            except ValueError:
                logger.warning(
                    f"Ignoring remote login {record['id']} with invalid hostname"
                )
                continue
            logins.append(RemoteLogin.from_record(record, hostname))

        logger.debug(f"Fetched {len(logins)} remote login(s)")
        return logins

    def _job_record(self, job: UpsertJob, now_ms: int) -> dict[str, Any]:
        """Build the record sent for a create or update job."""
        if isinstance(job, CreateJob):
            hostname = record_url(job.hostname)
            return {
                "id": f"{{{uuid.uuid4()}}}",
                "hostname": hostname,
                "formSubmitURL": hostname,
                "httpRealm": None,
                "username": job.username,
                "password": job.password,
                "usernameField": "",
                "passwordField": "",
                "timeCreated": now_ms,
                "timePasswordChanged": now_ms,
            }

        record: dict[str, Any] = {"id": job.remote_id}
        if job.remote is not None:
            record.update(job.remote.extra)
            record["hostname"] = job.remote.raw_hostname or job.remote.hostname
            record["username"] = job.remote.username
        record["password"] = job.password
        record["timePasswordChanged"] = now_ms
        return record

    async def submit_upserts(self, jobs: list[UpsertJob]) -> list[str]:
        """Create or update logins in one batch.

        Args:
            jobs: Create and update jobs

        Returns:
            Ids of the written records

        Raises:
            SyncAPIError: If the service rejects any record
        """
        self._require_auth()
        if not jobs:
            return []

        now_ms = int(time.time() * 1000)
        records = [self._job_record(job, now_ms) for job in jobs]
        result = await self._request(
            "POST", f"/storage/{PASSWORDS_COLLECTION}", json=records
        )
        return self._check_batch_result(result)

    async def submit_deletes(self, ids: list[str]) -> None:
        """Delete logins by id in one batch."""
        self._require_auth()
        if not ids:
            return
        await self._request(
            "DELETE",
            f"/storage/{PASSWORDS_COLLECTION}",
            params={"ids": ",".join(ids)},
        )

    def _check_batch_result(self, result: Any) -> list[str]:
        if not isinstance(result, dict):
            return []
        failed = result.get("failed") or {}
        if failed:
            details = ", ".join(f"{k}: {v}" for k, v in failed.items())
            raise SyncAPIError(
                f"Sync service rejected {len(failed)} login(s): {details}"
            )
        return [str(i) for i in result.get("success", [])]
