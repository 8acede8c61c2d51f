"""Extraction of structured logins from decrypted secrets."""

import logging
from typing import Optional

from ..exceptions import InvalidURLError
from ..models import Filter, LocalLogin
from ..store import Plaintext
from ..utils import (
    PROPERTY_FILTER_NAME,
    PROPERTY_URL_NAMES,
    PROPERTY_USER_NAMES,
    normalize_url,
    secret_basename,
    secret_parent_name,
)

logger = logging.getLogger(__name__)


class LoginExtractor:
    """Turns a decrypted secret into a :class:`LocalLogin`.

    - password: first line of the secret
    - username: ``login``, ``username`` or ``user`` property, falling back
      to the last segment of the secret name
    - hostname: ``url``, ``uri``, ``website``, ``site``, ``link`` or
      ``launch`` property, falling back to ``https://<parent directory>``
    - filter: ``fxa`` property, ``include`` or ``exclude``

    Examples:
        >>> extractor = LoginExtractor()
        >>> login = extractor.extract("github.com/alice", Plaintext("hunter2"))
        >>> login.hostname
        'https://github.com/'
    """

    def __init__(self) -> None:
        self.skipped: list[str] = []
        """Names of secrets that did not yield a login"""

    def extract(self, secret_name: str, plaintext: Plaintext) -> Optional[LocalLogin]:
        """Extract a login from one decrypted secret.

        Args:
            secret_name: Hierarchical name of the secret
            plaintext: Decrypted body

        Returns:
            LocalLogin, or None if the secret cannot be used as a login

        Raises:
            InvalidURLError: If a URL property is not an absolute URL
            UnknownFilterError: If the fxa property has an unknown value
        """
        password = plaintext.first_line()
        if not password:
            self._skip(secret_name, "no password on the first line")
            return None

        hostname = self._extract_hostname(secret_name, plaintext)
        if hostname is None:
            self._skip(secret_name, "no URL property and no parent directory")
            return None

        username = plaintext.property_any(PROPERTY_USER_NAMES)
        if username is None:
            username = secret_basename(secret_name)

        filter_value = plaintext.property(PROPERTY_FILTER_NAME)
        login_filter = (
            Filter.parse(filter_value, secret_name)
            if filter_value is not None
            else None
        )

        return LocalLogin(
            secret_name=secret_name,
            username=username,
            password=password,
            hostname=hostname,
            filter=login_filter,
        )

    def _extract_hostname(
        self, secret_name: str, plaintext: Plaintext
    ) -> Optional[str]:
        url = plaintext.property_any(PROPERTY_URL_NAMES)
        if url is None:
            parent = secret_parent_name(secret_name)
            if parent is None:
                return None
            url = f"https://{parent}"

        try:
            return normalize_url(url)
        except ValueError as e:
            raise InvalidURLError(url, secret_name) from e

    def _skip(self, secret_name: str, reason: str) -> None:
        logger.warning(f"Skipping {secret_name}: {reason}")
        self.skipped.append(secret_name)
