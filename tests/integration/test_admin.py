"""
Integration tests for the Django admin dashboard.
"""

from unittest.mock import patch

import pytest
from asgiref.sync import async_to_sync
from django.urls import reverse

from licenses.infrastructure.models import License as LicenseModel
from licenses.infrastructure.models import LicenseRequest as LicenseRequestModel
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository
from licenses.infrastructure.repositories.django_license_request_repository import (
    DjangoLicenseRequestRepository,
)
from sync.infrastructure.models import Setting


@pytest.mark.django_db
@pytest.mark.integration
class TestAdminDashboard:
    """Tests for the admin views."""

    @pytest.mark.parametrize(
        "url_name",
        [
            "admin:licenses_license_changelist",
            "admin:licenses_licenserequest_changelist",
            "admin:catalog_moduledefinition_changelist",
            "admin:verification_apilogentry_changelist",
            "admin:sync_setting_changelist",
            "admin:licenses_license_add",
        ],
    )
    def test_pages_render(self, admin_client, url_name):
        assert admin_client.get(reverse(url_name)).status_code == 200

    def test_add_license(self, admin_client):
        """Test that the add form issues a key and stores the module switches."""
        response = admin_client.post(
            reverse("admin:licenses_license_add"),
            {
                "organization": "Admin Brigade",
                "contact_person": "Ada Admin",
                "email": "ada@example.com",
                "phone_number": "",
                "note": "",
                "domain": "https://Admin.Example.com/",
                "valid_until": "",
                "modules": ["inventory", "hoses"],
            },
        )

        assert response.status_code == 302
        license = LicenseModel.objects.get(domain="admin.example.com")
        assert license.key.startswith("TST-")
        assert license.features["hoses"] is True
        assert license.features["vehicles"] is False

    def test_add_license_taken_domain(self, admin_client, make_license):
        async_to_sync(DjangoLicenseRepository().save)(make_license(domain="taken.example.com"))

        response = admin_client.post(
            reverse("admin:licenses_license_add"),
            {
                "organization": "Late Brigade",
                "email": "late@example.com",
                "domain": "taken.example.com",
            },
        )

        assert response.status_code == 200
        assert "is already taken" in response.content.decode()
        assert LicenseModel.objects.count() == 1

    def test_revoke_action(self, admin_client, make_license):
        license = async_to_sync(DjangoLicenseRepository().save)(make_license())

        admin_client.post(
            reverse("admin:licenses_license_changelist"),
            {"action": "revoke_licenses", "_selected_action": [license.id]},
        )

        assert LicenseModel.objects.get(id=license.id).status == "suspended"

    def test_approve_request_action(self, admin_client, make_request):
        request = async_to_sync(DjangoLicenseRequestRepository().save)(
            make_request(domain="approve.example.com")
        )

        admin_client.post(
            reverse("admin:licenses_licenserequest_changelist"),
            {"action": "approve_requests", "_selected_action": [request.id]},
        )

        assert not LicenseRequestModel.objects.filter(id=request.id).exists()
        assert LicenseModel.objects.filter(domain="approve.example.com").exists()

    def test_secret_is_masked(self, admin_client):
        Setting.objects.create(key="admin_secret", value="supersecret42")

        content = admin_client.get(reverse("admin:sync_setting_changelist")).content.decode()

        assert "supersecret42" not in content
        assert "***********42" in content

    def test_push_is_queued_after_commit(self, admin_client, django_capture_on_commit_callbacks):
        """Test that the remote push waits until the admin's transaction commits."""
        with patch("sync.tasks.push_change_task.delay") as mock_delay:
            with django_capture_on_commit_callbacks(execute=False) as callbacks:
                admin_client.post(
                    reverse("admin:licenses_license_add"),
                    {
                        "organization": "Commit Brigade",
                        "email": "commit@example.com",
                        "domain": "commit.example.com",
                    },
                )
            mock_delay.assert_not_called()

            for callback in callbacks:
                callback()

        license = LicenseModel.objects.get(domain="commit.example.com")
        mock_delay.assert_any_call("push_license", license.id)

    def test_rejected_license_shows_form_error(self, admin_client):
        """Test that an entity rule failure re-renders the form instead of reporting success."""
        with patch(
            "licenses.domain.license.License.create",
            side_effect=ValueError("License key too long"),
        ):
            response = admin_client.post(
                reverse("admin:licenses_license_add"),
                {
                    "organization": "Broken Brigade",
                    "email": "broken@example.com",
                    "domain": "broken.example.com",
                },
            )

        content = response.content.decode()
        assert response.status_code == 200
        assert "License key too long" in content
        assert "was added successfully" not in content
        assert not LicenseModel.objects.filter(domain="broken.example.com").exists()

    def test_edit_request_through_form(self, admin_client, make_request):
        request = async_to_sync(DjangoLicenseRequestRepository().save)(
            make_request(domain="edit.example.com")
        )

        response = admin_client.post(
            reverse("admin:licenses_licenserequest_change", args=[request.id]),
            {
                "organization": "Renamed Brigade",
                "contact_person": request.contact_person,
                "email": request.email,
                "phone_number": "",
                "note": "",
                "custom_message": "Hang on",
            },
        )

        assert response.status_code == 302
        stored = LicenseRequestModel.objects.get(id=request.id)
        assert stored.organization == "Renamed Brigade"
        assert stored.custom_message == "Hang on"
