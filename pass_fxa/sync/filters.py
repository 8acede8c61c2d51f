"""Run-wide filter policy derived from the per-entry ``fxa`` markers."""

from collections.abc import Iterable
from enum import Enum

from ..models import Filter, LocalLogin


class FilterMode(str, Enum):
    """Filter policy for one run."""

    NO_FILTER = "no_filter"
    """No entry carries a marker; every login is eligible"""

    INCLUDE_ONLY = "include_only"
    """Some entries are marked include; only those are eligible"""

    EXCLUDE_ONLY = "exclude_only"
    """Some entries are marked exclude; all others are eligible"""

    CONFLICTING = "conflicting"
    """Both markers occur; nothing is synced"""

    def with_marker(self, marker: Filter) -> "FilterMode":
        """Return the mode after seeing one more marker."""
        if self == FilterMode.CONFLICTING:
            return self
        gained = (
            FilterMode.INCLUDE_ONLY
            if marker == Filter.INCLUDE
            else FilterMode.EXCLUDE_ONLY
        )
        if self == FilterMode.NO_FILTER or self == gained:
            return gained
        return FilterMode.CONFLICTING

    def is_eligible(self, login: LocalLogin) -> bool:
        """Check whether a login takes part in uploads under this mode."""
        if self == FilterMode.NO_FILTER:
            return True
        if self == FilterMode.INCLUDE_ONLY:
            return login.filter == Filter.INCLUDE
        if self == FilterMode.EXCLUDE_ONLY:
            return login.filter != Filter.EXCLUDE
        return False

    @property
    def is_conflicting(self) -> bool:
        return self == FilterMode.CONFLICTING


def resolve_filter_mode(logins: Iterable[LocalLogin]) -> FilterMode:
    """Fold the markers of all logins into a single filter mode.

    Args:
        logins: Every extracted login, including the account credentials

    Returns:
        Resulting FilterMode
    """
    mode = FilterMode.NO_FILTER
    for login in logins:
        if login.filter is not None:
            mode = mode.with_marker(login.filter)
    return mode
