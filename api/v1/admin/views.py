"""
Admin-action API view.

RPC-style endpoint used by dashboard clients and by peer instances
syncing with this one. Every call carries the shared secret.
"""

from typing import Any, Dict

from asgiref.sync import async_to_sync
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from api.exceptions import error_body
from api.v1.admin.serializers import AdminActionRequestSerializer, AdminActionResponseSerializer
from api.v1.license.serializers import ErrorSerializer
from catalog.infrastructure.repositories.django_module_repository import DjangoModuleRepository
from core.instrumentation import Status, StatusCode, get_tracer
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository
from licenses.infrastructure.repositories.django_license_request_repository import (
    DjangoLicenseRequestRepository,
)
from sync.application.commands.sync_commands import AdminActionCommand
from sync.application.handlers.admin_action_handler import AdminActionHandler
from sync.application.services.sync_settings_service import SyncSettingsService
from sync.infrastructure.repositories.django_setting_repository import DjangoSettingRepository
from verification.infrastructure.repositories.django_api_log_repository import (
    DjangoApiLogRepository,
)

_handler = AdminActionHandler(
    license_repository=DjangoLicenseRepository(),
    request_repository=DjangoLicenseRequestRepository(),
    module_repository=DjangoModuleRepository(),
    api_log_repository=DjangoApiLogRepository(),
    settings_service=SyncSettingsService(DjangoSettingRepository()),
)

tracer = get_tracer(__name__)


def request_body(request: Request) -> Dict[str, Any]:
    """JSON object body as a plain dict. Anything else counts as empty."""
    data = request.data
    if hasattr(data, "dict"):
        return data.dict()
    return dict(data) if isinstance(data, dict) else {}


async def run_admin_action(data: Dict[str, Any]) -> Response:
    """Validate the envelope and dispatch one admin action."""
    with tracer.start_as_current_span("admin_action") as span:
        serializer = AdminActionRequestSerializer(data=data)
        if not serializer.is_valid():
            span.set_status(Status(StatusCode.ERROR, "Validation failed"))
            return Response(
                error_body("Invalid request", "INVALID_REQUEST", details=serializer.errors),
                status=status.HTTP_400_BAD_REQUEST,
            )

        action = serializer.validated_data["action"]
        span.set_attribute("admin.action", action)
        payload = {k: v for k, v in data.items() if k not in ("action", "secret")}
        try:
            result = await _handler.handle(
                AdminActionCommand(
                    action=action,
                    secret=serializer.validated_data["secret"],
                    payload=payload,
                )
            )
        except Exception as e:
            span.set_status(Status(StatusCode.ERROR, str(e)))
            raise
        span.set_status(Status(StatusCode.OK))
        return Response(result, status=status.HTTP_200_OK)


class AdminActionView(APIView):
    """View for authenticated admin actions."""

    @extend_schema(
        operation_id="admin_action",
        summary="Run Admin Action",
        description=(
            "Run one admin action (`sync_admin`, `get_licenses`, `push_license`, ...). "
            "The body carries `action`, the shared `secret` and the action arguments."
        ),
        tags=["Admin Actions"],
        request=AdminActionRequestSerializer,
        responses={
            200: AdminActionResponseSerializer,
            400: ErrorSerializer,
            403: ErrorSerializer,
            404: ErrorSerializer,
            409: ErrorSerializer,
        },
    )
    def post(self, request: Request) -> Response:
        """Run an admin action."""
        return async_to_sync(run_admin_action)(request_body(request))
