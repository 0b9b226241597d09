"""
Integration tests for the license verification API.
"""

from datetime import timedelta

import pytest
from asgiref.sync import async_to_sync
from django.urls import reverse
from rest_framework import status

from core.domain.clock import utc_today
from licenses.infrastructure.models import LicenseRequest as LicenseRequestModel
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository
from verification.infrastructure.models import ApiLogEntry as ApiLogEntryModel


@pytest.fixture
def stored_license(make_license):
    """License for shop.example.com stored in the database."""

    def build(**kwargs):
        return async_to_sync(DjangoLicenseRepository().save)(make_license(**kwargs))

    return build


@pytest.mark.django_db
@pytest.mark.integration
class TestVerifyLicenseAPI:
    """Integration tests for the verification endpoint."""

    @pytest.fixture
    def url(self):
        return reverse("license:verify-license")

    def test_url(self, url):
        assert url == "/api/v1/license/verify"

    def test_unknown_domain_gets_request(self, api_client, url):
        """Test that an unknown installation is registered automatically."""
        response = api_client.post(url, {}, format="json", HTTP_ORIGIN="https://new.example.com")

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data["status"] == "requested"
        request = LicenseRequestModel.objects.get(requested_domain="new.example.com")
        assert response.data["requestId"] == request.id

        again = api_client.post(url, {}, format="json", HTTP_ORIGIN="https://new.example.com")
        assert again.status_code == status.HTTP_200_OK
        assert again.data["status"] == "pending"
        assert LicenseRequestModel.objects.count() == 1

    def test_referer_fallback(self, api_client, url):
        response = api_client.post(
            url, {}, format="json", HTTP_REFERER="https://ref.example.com/settings"
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert LicenseRequestModel.objects.filter(requested_domain="ref.example.com").exists()

    def test_missing_origin(self, api_client, url):
        response = api_client.post(url, {}, format="json")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "Invalid domain" in response.data["error"]

    def test_key_recovery(self, api_client, url, stored_license):
        """Test that a licensed installation without a key learns it."""
        license = stored_license(domain="shop.example.com")

        response = api_client.post(url, {}, format="json", HTTP_ORIGIN="https://shop.example.com")

        assert response.status_code == status.HTTP_200_OK
        assert response.data["status"] == "active"
        assert response.data["key"] == license.key
        modules = {m["technicalName"]: m["active"] for m in response.data["modules"]}
        assert modules["inventory"] is True
        assert modules["hoses"] is False

    def test_valid_key(self, api_client, url, stored_license):
        license = stored_license(domain="shop.example.com")

        response = api_client.post(
            url, {"key": license.key}, format="json", HTTP_ORIGIN="https://shop.example.com"
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data["status"] == "valid"
        assert response.data["validUntil"] == license.valid_until.isoformat()
        assert response.data["daysRemaining"] == 30

    def test_domain_mismatch(self, api_client, url, stored_license):
        license = stored_license(domain="shop.example.com")

        response = api_client.post(
            url, {"key": license.key}, format="json", HTTP_ORIGIN="https://thief.example.com"
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data == {"error": "Domain Mismatch"}

    def test_invalid_key(self, api_client, url):
        response = api_client.post(
            url, {"key": "TST-0000"}, format="json", HTTP_ORIGIN="https://shop.example.com"
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data == {"error": "Invalid License Key"}

    def test_suspended_key(self, api_client, url, stored_license):
        license = async_to_sync(DjangoLicenseRepository().save)(
            stored_license(domain="shop.example.com").revoke()
        )

        response = api_client.post(
            url, {"key": license.key}, format="json", HTTP_ORIGIN="https://shop.example.com"
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data == {"error": "License Suspended"}

    def test_expired_key(self, api_client, url, stored_license):
        license = stored_license(
            domain="shop.example.com", valid_until=utc_today() - timedelta(days=1)
        )

        response = api_client.post(
            url, {"key": license.key}, format="json", HTTP_ORIGIN="https://shop.example.com"
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data["status"] == "expired"
        assert response.data["features"] == {}

    def test_calls_are_logged(self, api_client, url):
        """Test that each verification appends to the API log."""
        api_client.post(
            url, {"key": "TST-0000"}, format="json", HTTP_ORIGIN="https://a.example.com"
        )

        entry = ApiLogEntryModel.objects.get()
        assert entry.endpoint == "/api/v1/license/verify"
        assert entry.source_url == "a.example.com"
        assert entry.provided_key == "TST-0000"
        assert entry.response_status == 403

    def test_long_key_is_an_unknown_key(self, api_client, url):
        """Test that an oversized key is rejected and logged like any unknown key."""
        response = api_client.post(
            url, {"key": "K" * 101}, format="json", HTTP_ORIGIN="https://a.example.com"
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data == {"error": "Invalid License Key"}
        entry = ApiLogEntryModel.objects.get()
        assert entry.provided_key == "K" * 101
        assert entry.response_status == 403

    def test_unreadable_key_is_logged(self, api_client, url):
        response = api_client.post(
            url, {"key": {"nested": True}}, format="json", HTTP_ORIGIN="https://a.example.com"
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data == {"error": "Invalid License Key"}
        assert ApiLogEntryModel.objects.count() == 1

    def test_body_with_action_runs_admin_action(self, api_client, url):
        """Test that peers can use the verification URL for admin actions."""
        response = api_client.post(
            url, {"action": "get_modules", "secret": "test-secret"}, format="json"
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data["status"] == "ok"
        assert ApiLogEntryModel.objects.count() == 0
