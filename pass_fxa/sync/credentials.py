"""Discovery of the sync account credentials among the local logins."""

import logging
from typing import Optional

from ..config import DEFAULT_ACCOUNT_HOST
from ..exceptions import AmbiguousCredentialsError, CredentialsNotFoundError
from ..models import Filter, LocalLogin
from ..utils import url_host

logger = logging.getLogger(__name__)


class CredentialSelector:
    """Finds the local login used to authenticate to the sync service.

    Without an override, every login hosted at the account host
    (``firefox.com``) is a candidate and exactly one must exist. With an
    override, the login read from the secret of that name is used and
    host-based candidates are ignored.

    Examples:
        >>> selector = CredentialSelector()
        >>> for login in logins:
        ...     selector.observe(login)
        >>> credentials = selector.select()
    """

    def __init__(
        self,
        pass_name: Optional[str] = None,
        account_host: str = DEFAULT_ACCOUNT_HOST,
    ):
        """Initialize credential selector.

        Args:
            pass_name: Secret name holding the credentials, if given explicitly
            account_host: Host identifying the account credentials
        """
        self.pass_name = pass_name
        self.account_host = account_host.lower()
        self.candidates: list[LocalLogin] = []
        self._selected: Optional[LocalLogin] = None

    def is_candidate(self, login: LocalLogin) -> bool:
        """Check whether a login may hold the account credentials."""
        if self.pass_name is not None:
            return login.secret_name == self.pass_name
        return url_host(login.hostname) == self.account_host

    def observe(self, login: LocalLogin) -> None:
        """Record a login if it is a candidate."""
        if self.is_candidate(login):
            logger.debug(f"Credential candidate: {login.secret_name}")
            self.candidates.append(login)

    def select(self) -> LocalLogin:
        """Return the single credential login.

        Raises:
            CredentialsNotFoundError: If there is no candidate
            AmbiguousCredentialsError: If there are several candidates and
                no override was given
        """
        if self._selected is not None:
            return self._selected

        if not self.candidates:
            if self.pass_name is not None:
                raise CredentialsNotFoundError(
                    f"Could not find Firefox Account credentials at {self.pass_name}."
                )
            raise CredentialsNotFoundError()

        if len(self.candidates) > 1:
            raise AmbiguousCredentialsError(
                [(login.secret_name, login.username) for login in self.candidates]
            )

        self._selected = self.candidates[0]
        logger.debug(f"Using credentials from {self._selected.secret_name}")
        return self._selected

    def is_excluded(self, login: LocalLogin) -> bool:
        """Check whether a login is the selected credential and must not sync.

        The credential still syncs when its own marker is ``include``.
        """
        selected = self.select()
        return login is selected and login.filter != Filter.INCLUDE
