"""Tests for the filter policy resolver."""

import pytest

from pass_fxa.models import Filter, LocalLogin
from pass_fxa.sync.filters import FilterMode, resolve_filter_mode


def _login(marker=None, name="x.com/a"):
    return LocalLogin(
        secret_name=name,
        username="a",
        password="pw",
        hostname="https://x.com/",
        filter=marker,
    )


class TestResolveFilterMode:
    """Tests for folding markers into a filter mode."""

    def test_no_markers(self):
        assert resolve_filter_mode([_login(), _login()]) == FilterMode.NO_FILTER

    def test_empty(self):
        assert resolve_filter_mode([]) == FilterMode.NO_FILTER

    def test_include_only(self):
        logins = [_login(), _login(Filter.INCLUDE), _login(Filter.INCLUDE)]
        assert resolve_filter_mode(logins) == FilterMode.INCLUDE_ONLY

    def test_exclude_only(self):
        logins = [_login(Filter.EXCLUDE), _login()]
        assert resolve_filter_mode(logins) == FilterMode.EXCLUDE_ONLY

    def test_conflicting(self):
        """Test that one include and one exclude marker conflict."""
        logins = [_login(Filter.INCLUDE), _login(), _login(Filter.EXCLUDE)]
        mode = resolve_filter_mode(logins)
        assert mode == FilterMode.CONFLICTING
        assert mode.is_conflicting

    def test_conflicting_is_terminal(self):
        mode = FilterMode.CONFLICTING
        assert mode.with_marker(Filter.INCLUDE) == FilterMode.CONFLICTING
        assert mode.with_marker(Filter.EXCLUDE) == FilterMode.CONFLICTING


class TestEligibility:
    """Tests for FilterMode.is_eligible."""

    @pytest.mark.parametrize("mode", [FilterMode.NO_FILTER, FilterMode.EXCLUDE_ONLY])
    def test_unmarked_eligible(self, mode):
        assert mode.is_eligible(_login())

    def test_unmarked_not_eligible_under_include_only(self):
        assert not FilterMode.INCLUDE_ONLY.is_eligible(_login())

    @pytest.mark.parametrize(
        "mode",
        [FilterMode.NO_FILTER, FilterMode.INCLUDE_ONLY, FilterMode.EXCLUDE_ONLY],
    )
    def test_include_eligible_unless_conflicting(self, mode):
        assert mode.is_eligible(_login(Filter.INCLUDE))

    def test_exclude_never_eligible_under_exclude_only(self):
        assert not FilterMode.EXCLUDE_ONLY.is_eligible(_login(Filter.EXCLUDE))

    def test_exclude_not_eligible_under_include_only(self):
        assert not FilterMode.INCLUDE_ONLY.is_eligible(_login(Filter.EXCLUDE))

    @pytest.mark.parametrize("marker", [None, Filter.INCLUDE, Filter.EXCLUDE])
    def test_nothing_eligible_when_conflicting(self, marker):
        assert not FilterMode.CONFLICTING.is_eligible(_login(marker))
