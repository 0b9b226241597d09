"""
URL configuration for license verification endpoints.
"""

from django.urls import path

from api.v1.license import views

app_name = "license"

urlpatterns = [
    path(
        "verify",
        views.VerifyLicenseView.as_view(),
        name="verify-license",
    ),
]
