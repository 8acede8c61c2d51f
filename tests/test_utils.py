"""Unit tests for utility functions."""

import pytest

from pass_fxa.utils import (
    PROPERTY_URL_NAMES,
    PROPERTY_USER_NAMES,
    normalize_url,
    record_url,
    secret_basename,
    secret_parent_name,
    url_host,
)


class TestNormalizeUrl:
    """Tests for normalize_url function."""

    def test_adds_root_path(self):
        """Test that an empty path becomes '/'."""
        assert normalize_url("https://github.com") == "https://github.com/"

    def test_lowercases_scheme_and_host(self):
        """Test that scheme and host are case-insensitive."""
        assert normalize_url("HTTPS://GitHub.COM/Login") == "https://github.com/Login"

    def test_drops_default_port(self):
        """Test that default ports are removed."""
        assert normalize_url("https://x.com:443/") == "https://x.com/"
        assert normalize_url("http://x.com:80") == "http://x.com/"

    def test_keeps_other_port(self):
        """Test that non-default ports are kept."""
        assert normalize_url("https://x.com:8443") == "https://x.com:8443/"

    def test_keeps_query(self):
        """Test that query strings survive normalization."""
        assert normalize_url("https://x.com/a?b=c") == "https://x.com/a?b=c"

    def test_strips_surrounding_whitespace(self):
        """Test that leading and trailing whitespace is ignored."""
        assert normalize_url("  https://x.com  ") == "https://x.com/"

    def test_equal_forms_compare_equal(self):
        """Test that equivalent URLs normalize to the same string."""
        assert normalize_url("https://X.com") == normalize_url("https://x.com:443/")

    @pytest.mark.parametrize(
        "value",
        ["", "github.com", "/relative/path", "mailto:me@example.com", "https://my site"],
    )
    def test_rejects_non_absolute(self, value):
        """Test that relative or malformed URLs raise ValueError."""
        with pytest.raises(ValueError):
            normalize_url(value)

    def test_rejects_invalid_port(self):
        """Test that a non-numeric port raises ValueError."""
        with pytest.raises(ValueError):
            normalize_url("https://x.com:abc/")


class TestRecordUrl:
    """Tests for record_url function."""

    def test_bare_origin_loses_root_slash(self):
        assert record_url("https://github.com/") == "https://github.com"

    def test_path_is_kept(self):
        assert record_url("https://github.com/login") == "https://github.com/login"

    def test_query_is_kept(self):
        assert record_url("https://x.com/?a=b") == "https://x.com/?a=b"

    def test_normalizes_back_to_input(self):
        """Test that records written with it match on the next fetch."""
        for url in ("https://x.com:8443/", "https://x.com/a"):
            assert normalize_url(record_url(url)) == url


class TestUrlHost:
    """Tests for url_host function."""

    def test_returns_host(self):
        assert url_host("https://firefox.com/") == "firefox.com"

    def test_subdomain_is_not_stripped(self):
        assert url_host("https://accounts.firefox.com/") == "accounts.firefox.com"


class TestSecretNames:
    """Tests for secret name helpers."""

    def test_basename(self):
        assert secret_basename("web/github.com/alice") == "alice"

    def test_basename_top_level(self):
        assert secret_basename("alice") == "alice"

    def test_parent_name(self):
        assert secret_parent_name("web/github.com/alice") == "github.com"

    def test_parent_name_top_level(self):
        """Test that secrets at the store root have no parent name."""
        assert secret_parent_name("alice") is None


class TestPropertyNames:
    """Tests for the lookup order constants."""

    def test_user_names_order(self):
        assert PROPERTY_USER_NAMES == ("login", "username", "user")

    def test_url_names_order(self):
        assert PROPERTY_URL_NAMES == ("url", "uri", "website", "site", "link", "launch")
