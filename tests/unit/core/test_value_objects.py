"""
Unit tests for value objects.
"""

import pytest

from core.domain.value_objects import (
    UNKNOWN_DOMAIN,
    DomainName,
    Email,
    LicenseStatus,
    ModuleId,
    normalize_domain,
)


class TestNormalizeDomain:
    """Tests for domain normalization."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("https://App.Example.com:8443/login", "app.example.com"),
            ("http://shop.example.com/", "shop.example.com"),
            ("  Shop.Example.com  ", "shop.example.com"),
            ("localhost:3000", "localhost"),
            ("example.com/path/to/page?x=1", "example.com"),
        ],
    )
    def test_reduces_to_host(self, raw, expected):
        """Test that scheme, port and path are removed."""
        assert normalize_domain(raw) == expected

    @pytest.mark.parametrize("raw", [None, "", "https://", "http:///path"])
    def test_empty_input_is_unknown(self, raw):
        """Test that empty input yields the unknown marker."""
        assert normalize_domain(raw) == UNKNOWN_DOMAIN

    def test_is_idempotent(self):
        """Test that normalizing twice changes nothing."""
        once = normalize_domain("HTTPS://Fire.Example.org:443/app")
        assert normalize_domain(once) == once


class TestDomainName:
    """Tests for DomainName value object."""

    def test_prefers_origin_over_referer(self):
        """Test that the Origin header wins over the Referer."""
        domain = DomainName.from_origin("https://a.example.com", "https://b.example.com/page")
        assert domain.value == "a.example.com"

    def test_falls_back_to_referer(self):
        """Test that the Referer is used without an Origin."""
        domain = DomainName.from_origin(None, "https://b.example.com/page")
        assert domain.value == "b.example.com"

    def test_unknown_without_headers(self):
        """Test that a call without headers has no known domain."""
        domain = DomainName.from_origin(None)
        assert domain.is_known is False
        assert str(domain) == UNKNOWN_DOMAIN

    def test_matches_ignores_case_and_scheme(self):
        """Test domain comparison."""
        assert DomainName("shop.example.com").matches("HTTPS://SHOP.example.com/")
        assert not DomainName("shop.example.com").matches("other.example.com")

    def test_equality(self):
        """Test value equality after normalization."""
        assert DomainName("https://x.example.com") == DomainName("x.example.com")


class TestEmail:
    """Tests for Email value object."""

    def test_valid_email(self):
        assert str(Email("ops@example.com")) == "ops@example.com"

    @pytest.mark.parametrize("value", ["", "no-at-sign"])
    def test_invalid_email(self, value):
        """Test that malformed addresses are rejected."""
        with pytest.raises(ValueError):
            Email(value)


class TestModuleId:
    """Tests for ModuleId value object."""

    @pytest.mark.parametrize("value", ["inventory", "apiAccess", "fleet_v2", "x-ray"])
    def test_valid_ids(self, value):
        assert str(ModuleId(value)) == value

    @pytest.mark.parametrize("value", ["", "2fast", "with space", "a" * 65])
    def test_invalid_ids(self, value):
        """Test that malformed module ids are rejected."""
        with pytest.raises(ValueError):
            ModuleId(value)


class TestLicenseStatus:
    """Tests for LicenseStatus."""

    def test_str_is_value(self):
        assert str(LicenseStatus.SUSPENDED) == "suspended"

    def test_stored_accepts_active_and_suspended(self):
        assert LicenseStatus.stored("active") is LicenseStatus.ACTIVE
        assert LicenseStatus.stored("suspended") is LicenseStatus.SUSPENDED

    def test_stored_rejects_expired(self):
        """Test that the derived expired status cannot be persisted."""
        with pytest.raises(ValueError):
            LicenseStatus.stored("expired")

    def test_stored_rejects_unknown(self):
        with pytest.raises(ValueError):
            LicenseStatus.stored("banned")
