"""
License verification API view.

Installations call this endpoint to verify their license. A body with
an ``action`` is treated as an admin action instead, so one URL serves
both the public protocol and peer sync.
"""

from asgiref.sync import async_to_sync
from drf_spectacular.utils import OpenApiExample, extend_schema
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from api.v1.admin.views import request_body, run_admin_action
from api.v1.license.serializers import (
    ErrorSerializer,
    VerifyLicenseRequestSerializer,
    VerifyLicenseResponseSerializer,
)
from catalog.infrastructure.repositories.django_module_repository import DjangoModuleRepository
from core.instrumentation import Status, StatusCode, get_tracer
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository
from licenses.infrastructure.repositories.django_license_request_repository import (
    DjangoLicenseRequestRepository,
)
from verification.application.commands.verify_license import VerifyLicenseCommand
from verification.application.handlers.verify_license_handler import VerifyLicenseHandler
from verification.infrastructure.repositories.django_api_log_repository import (
    DjangoApiLogRepository,
)

# Initialize repositories (in production, use DI container)
_license_repo = DjangoLicenseRepository()
_request_repo = DjangoLicenseRequestRepository()
_module_repo = DjangoModuleRepository()
_api_log_repo = DjangoApiLogRepository()

tracer = get_tracer(__name__)


class VerifyLicenseView(APIView):
    """View for license verification."""

    @extend_schema(
        operation_id="verify_license",
        summary="Verify License",
        description=(
            "Verify the license of the calling installation. The domain is taken from the "
            "Origin header, falling back to Referer. Without a key the license is looked up "
            "by domain and unknown domains get an automatic registration request. "
            "A body containing `action` is handled as an admin action."
        ),
        tags=["Verification"],
        request=VerifyLicenseRequestSerializer,
        responses={
            200: VerifyLicenseResponseSerializer,
            201: VerifyLicenseResponseSerializer,
            400: ErrorSerializer,
            403: ErrorSerializer,
        },
        examples=[
            OpenApiExample("Key recovery", value={}, request_only=True),
            OpenApiExample(
                "Key check", value={"key": "FFW-AB12-CD34-EF56-GH78"}, request_only=True
            ),
        ],
    )
    def post(self, request: Request) -> Response:
        """Verify a license, or run an admin action."""
        data = request_body(request)
        if "action" in data:
            return async_to_sync(run_admin_action)(data)
        origin = request.headers.get("Origin") or request.headers.get("Referer")
        return async_to_sync(self._handle_verify)(request, data, origin)

    async def _handle_verify(self, request: Request, data: dict, origin) -> Response:
        """Async handler for verification."""
        with tracer.start_as_current_span("verify_license") as span:
            serializer = VerifyLicenseRequestSerializer(data=data)
            if serializer.is_valid():
                key = serializer.validated_data.get("key")
            else:
                # Unreadable keys are looked up and logged like any unknown key
                span.add_event("unreadable_key", {"errors": str(serializer.errors)})
                key = str(data.get("key"))
            span.set_attribute("verification.origin", origin or "")
            span.set_attribute("verification.with_key", bool(key))

            handler = VerifyLicenseHandler(
                license_repository=_license_repo,
                request_repository=_request_repo,
                module_repository=_module_repo,
                api_log_repository=_api_log_repo,
            )
            result = await handler.handle(
                VerifyLicenseCommand(origin=origin, key=key, endpoint=request.path)
            )

            span.set_attribute("verification.outcome", result.outcome.value)
            span.set_attribute("http.status_code", result.http_status)
            if result.is_error:
                span.set_status(Status(StatusCode.ERROR, result.outcome.value))
            else:
                span.set_status(Status(StatusCode.OK))
            return Response(result.body, status=result.http_status)
