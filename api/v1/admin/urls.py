"""
URL configuration for admin-action endpoints.
"""

from django.urls import path

from api.v1.admin import views

app_name = "admin_actions"

urlpatterns = [
    path(
        "actions",
        views.AdminActionView.as_view(),
        name="admin-actions",
    ),
]
