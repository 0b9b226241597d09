"""
Django implementation of LicenseRequestRepository port.
"""
from typing import List, Optional

from asgiref.sync import sync_to_async

from licenses.domain.license_request import LicenseRequest
from licenses.infrastructure.models import LicenseRequest as LicenseRequestModel
from licenses.ports.license_request_repository import LicenseRequestRepository


class DjangoLicenseRequestRepository(LicenseRequestRepository):
    """Django ORM implementation of LicenseRequestRepository."""

    def _to_domain(self, model: LicenseRequestModel) -> LicenseRequest:
        return LicenseRequest(
            id=model.id,
            organization=model.organization,
            contact_person=model.contact_person,
            email=model.email,
            requested_domain=model.requested_domain,
            request_date=model.request_date,
            updated_at=model.updated_at,
            phone_number=model.phone_number or "",
            note=model.note or "",
            custom_message=model.custom_message or "",
        )

    def _to_model(self, request: LicenseRequest) -> LicenseRequestModel:
        fields = {
            "organization": request.organization,
            "contact_person": request.contact_person,
            "email": request.email,
            "phone_number": request.phone_number,
            "requested_domain": request.requested_domain,
            "request_date": request.request_date,
            "note": request.note,
            "custom_message": request.custom_message,
            "updated_at": request.updated_at,
        }
        model, created = LicenseRequestModel.objects.get_or_create(id=request.id, defaults=fields)
        if not created:
            for name, value in fields.items():
                setattr(model, name, value)
        return model

    @sync_to_async
    def save(self, request: LicenseRequest) -> LicenseRequest:
        model = self._to_model(request)
        model.save()
        return self._to_domain(model)

    @sync_to_async
    def find_by_id(self, request_id: str) -> Optional[LicenseRequest]:
        try:
            return self._to_domain(LicenseRequestModel.objects.get(id=request_id))
        except LicenseRequestModel.DoesNotExist:
            return None

    @sync_to_async
    def find_by_domain(self, domain: str) -> Optional[LicenseRequest]:
        model = (
            LicenseRequestModel.objects.filter(requested_domain__iexact=domain)
            .order_by("request_date")
            .first()
        )
        return self._to_domain(model) if model else None

    @sync_to_async
    def find_all(self) -> List[LicenseRequest]:
        return [
            self._to_domain(model)
            for model in LicenseRequestModel.objects.all().order_by("-request_date")
        ]

    @sync_to_async
    def delete(self, request_id: str) -> bool:
        deleted, _ = LicenseRequestModel.objects.filter(id=request_id).delete()
        return deleted > 0
