"""
Django implementation of LicenseRepository port.

This adapter converts between domain entities and Django ORM models.
"""
from typing import List, Optional

from asgiref.sync import sync_to_async
from django.db.models import Q

from core.domain.value_objects import LicenseStatus
from licenses.domain.license import License
from licenses.infrastructure.models import License as LicenseModel
from licenses.ports.license_repository import LicenseRepository


class DjangoLicenseRepository(LicenseRepository):
    """
    Django ORM implementation of LicenseRepository.

    This adapter:
    1. Converts Django models to domain entities
    2. Converts domain entities to Django models
    3. Implements repository interface
    """

    def _to_domain(self, model: LicenseModel) -> License:
        return License(
            id=model.id,
            organization=model.organization,
            contact_person=model.contact_person,
            email=model.email,
            domain=model.domain,
            key=model.key,
            valid_until=model.valid_until,
            status=LicenseStatus.stored(model.status),
            features=dict(model.features or {}),
            created_at=model.created_at,
            updated_at=model.updated_at,
            phone_number=model.phone_number or "",
            note=model.note or "",
        )

    def _to_model(self, license: License) -> LicenseModel:
        fields = {
            "organization": license.organization,
            "contact_person": license.contact_person,
            "email": license.email,
            "phone_number": license.phone_number,
            "domain": license.domain,
            "key": license.key,
            "valid_until": license.valid_until,
            "status": license.status.value,
            "features": license.features,
            "note": license.note,
            "created_at": license.created_at,
            "updated_at": license.updated_at,
        }
        model, created = LicenseModel.objects.get_or_create(id=license.id, defaults=fields)
        if not created:
            for name, value in fields.items():
                setattr(model, name, value)
        return model

    @sync_to_async
    def save(self, license: License) -> License:
        model = self._to_model(license)
        model.save()
        return self._to_domain(model)

    @sync_to_async
    def find_by_id(self, license_id: str) -> Optional[License]:
        try:
            return self._to_domain(LicenseModel.objects.get(id=license_id))
        except LicenseModel.DoesNotExist:
            return None

    @sync_to_async
    def find_by_key(self, key: str) -> Optional[License]:
        try:
            return self._to_domain(LicenseModel.objects.get(key=key))
        except LicenseModel.DoesNotExist:
            return None

    @sync_to_async
    def find_by_domain(self, domain: str) -> Optional[License]:
        model = LicenseModel.objects.filter(domain__iexact=domain).order_by("created_at").first()
        return self._to_domain(model) if model else None

    @sync_to_async
    def find_all(self, status: Optional[str] = None, search: Optional[str] = None) -> List[License]:
        queryset = LicenseModel.objects.all().order_by("-created_at")
        if status:
            queryset = queryset.filter(status=status)
        if search:
            queryset = queryset.filter(
                Q(organization__icontains=search)
                | Q(domain__icontains=search)
                | Q(key__icontains=search)
            )
        return [self._to_domain(model) for model in queryset]

    @sync_to_async
    def delete(self, license_id: str) -> bool:
        deleted, _ = LicenseModel.objects.filter(id=license_id).delete()
        return deleted > 0

    @sync_to_async
    def exists(self, license_id: str) -> bool:
        return LicenseModel.objects.filter(id=license_id).exists()
