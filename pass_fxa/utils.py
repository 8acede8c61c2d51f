"""Utility functions and constants for pass-fxa."""

from typing import Optional
from urllib.parse import urlsplit, urlunsplit

# =============================================================================
# Property names looked up in decrypted secrets
# =============================================================================

# Username properties, in lookup order
PROPERTY_USER_NAMES: tuple[str, ...] = ("login", "username", "user")

# URL properties, in lookup order
PROPERTY_URL_NAMES: tuple[str, ...] = (
    "url",
    "uri",
    "website",
    "site",
    "link",
    "launch",
)

# Property holding the include/exclude marker
PROPERTY_FILTER_NAME: str = "fxa"


# =============================================================================
# URL utilities
# =============================================================================

_DEFAULT_PORTS = {"http": 80, "https": 443}


def normalize_url(value: str) -> str:
    """Parse an absolute URL and return it in normalized form.

    Scheme and host are lower-cased, default ports are dropped and an
    empty path becomes ``/``, so ``https://GitHub.com`` and
    ``https://github.com:443/`` compare equal.

    Args:
        value: URL text

    Returns:
        Normalized URL string

    Raises:
        ValueError: If value is not an absolute URL with a host
    """
    text = value.strip()
    if not text or any(ch.isspace() for ch in text):
        raise ValueError(f"not an absolute URL: {value!r}")

    parts = urlsplit(text)
    host = parts.hostname
    if not parts.scheme or not parts.netloc or not host:
        raise ValueError(f"not an absolute URL: {value!r}")

    scheme = parts.scheme.lower()
    port = parts.port  # raises ValueError for an invalid port
    if ":" in host:
        host = f"[{host}]"

    netloc = host
    if port is not None and port != _DEFAULT_PORTS.get(scheme):
        netloc = f"{netloc}:{port}"
    if parts.username is not None:
        userinfo = parts.username
        if parts.password is not None:
            userinfo = f"{userinfo}:{parts.password}"
        netloc = f"{userinfo}@{netloc}"

    return urlunsplit((scheme, netloc, parts.path or "/", parts.query, parts.fragment))


def record_url(url: str) -> str:
    """Return a normalized URL in the form stored in login records.

    A bare origin loses its root ``/`` (``https://x.com/`` becomes
    ``https://x.com``). Other URLs are returned unchanged, and
    :func:`normalize_url` maps the result back to its input.
    """
    parts = urlsplit(url)
    if parts.path == "/" and not parts.query and not parts.fragment:
        return url[:-1]
    return url


def url_host(url: str) -> Optional[str]:
    """Return the lower-cased host of a URL, or None if it has none."""
    return urlsplit(url).hostname


# =============================================================================
# Secret name utilities
# =============================================================================


def secret_basename(name: str) -> str:
    """Return the last path segment of a secret name."""
    return name.rstrip("/").rsplit("/", 1)[-1]


def secret_parent_name(name: str) -> Optional[str]:
    """Return the name of the directory directly holding a secret.

    Returns None for secrets stored at the root of the store.
    """
    segments = [s for s in name.split("/") if s]
    if len(segments) < 2:
        return None
    return segments[-2]
