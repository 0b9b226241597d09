"""
URL configuration for API v1.
"""

from django.urls import include, path

urlpatterns = [
    path("license/", include("api.v1.license.urls")),
    path("admin/", include("api.v1.admin.urls")),
]
