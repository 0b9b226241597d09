"""
Wire format shared by the admin actions and the sync client.

Rows travel as camelCase JSON objects. Serializers validate incoming
rows and the ``decode_*`` helpers turn them into domain entities.
"""
import json
from datetime import date, datetime
from typing import Any, Dict, NamedTuple, Optional

from rest_framework import serializers

from catalog.domain.module_definition import DEFAULT_ICON, ModuleDefinition
from core.domain.clock import utc_now
from core.domain.value_objects import LicenseStatus, normalize_domain
from licenses.domain.license import License
from licenses.domain.license_request import LicenseRequest
from verification.domain.api_log_entry import ApiLogEntry


class LicenseStatusField(serializers.ChoiceField):
    """Accepts ``expired`` from peers that store it and reads it back as active."""

    def __init__(self, **kwargs):
        super().__init__(choices=[status.value for status in LicenseStatus], **kwargs)

    def to_internal_value(self, data):
        value = super().to_internal_value(data)
        if value == LicenseStatus.EXPIRED.value:
            return LicenseStatus.ACTIVE
        return LicenseStatus.stored(value)


class JsonTextField(serializers.Field):
    """JSON document kept as text. Objects sent by a peer are dumped."""

    def to_internal_value(self, data):
        if isinstance(data, str):
            return data
        return json.dumps(data)

    def to_representation(self, value):
        return value


class LicenseWireSerializer(serializers.Serializer):
    id = serializers.CharField(max_length=64)
    organization = serializers.CharField(allow_blank=True, default="")
    contactPerson = serializers.CharField(source="contact_person", allow_blank=True, default="")
    email = serializers.CharField(allow_blank=True, default="")
    phoneNumber = serializers.CharField(
        source="phone_number", allow_blank=True, allow_null=True, default=""
    )
    domain = serializers.CharField(max_length=255)
    key = serializers.CharField(max_length=100)
    validUntil = serializers.DateField(source="valid_until")
    status = LicenseStatusField(default=LicenseStatus.ACTIVE)
    features = serializers.DictField(child=serializers.BooleanField(), default=dict)
    createdAt = serializers.DateTimeField(source="created_at", allow_null=True, required=False)
    updatedAt = serializers.DateTimeField(source="updated_at", allow_null=True, required=False)
    note = serializers.CharField(allow_blank=True, allow_null=True, default="")


class LicenseRequestWireSerializer(serializers.Serializer):
    id = serializers.CharField(max_length=64)
    organization = serializers.CharField(allow_blank=True, default="")
    contactPerson = serializers.CharField(source="contact_person", allow_blank=True, default="")
    email = serializers.CharField(allow_blank=True, default="")
    phoneNumber = serializers.CharField(
        source="phone_number", allow_blank=True, allow_null=True, default=""
    )
    requestedDomain = serializers.CharField(source="requested_domain", max_length=255)
    requestDate = serializers.DateTimeField(source="request_date", allow_null=True, required=False)
    updatedAt = serializers.DateTimeField(source="updated_at", allow_null=True, required=False)
    note = serializers.CharField(allow_blank=True, allow_null=True, default="")
    customMessage = serializers.CharField(
        source="custom_message", allow_blank=True, allow_null=True, default=""
    )


class ApiLogWireSerializer(serializers.Serializer):
    id = serializers.CharField(max_length=64)
    timestamp = serializers.DateTimeField()
    method = serializers.CharField(max_length=10, default="POST")
    endpoint = serializers.CharField(allow_blank=True, default="")
    sourceUrl = serializers.CharField(source="source_url", allow_blank=True, default="")
    providedKey = serializers.CharField(
        source="provided_key", allow_blank=True, allow_null=True, default=""
    )
    responseStatus = serializers.IntegerField(source="response_status", min_value=100, max_value=599)
    responseBody = JsonTextField(source="response_body", default="")


class ModuleWireSerializer(serializers.Serializer):
    id = serializers.CharField(max_length=64)
    label = serializers.CharField()
    description = serializers.CharField(allow_blank=True, allow_null=True, default="")
    iconName = serializers.CharField(source="icon_name", allow_blank=True, default=DEFAULT_ICON)


class Decoded(NamedTuple):
    """Entity built from a wire row plus the ``updatedAt`` stamp the row carried."""

    entity: Any
    updated_at: Optional[datetime]


def _validated(serializer_class, data: Any, what: str) -> Dict[str, Any]:
    if not isinstance(data, dict):
        raise ValueError(f"Invalid {what} payload: expected an object")
    serializer = serializer_class(data=data)
    if not serializer.is_valid():
        raise ValueError(f"Invalid {what} payload: {dict(serializer.errors)}")
    return dict(serializer.validated_data)


def encode_license(license: License) -> Dict[str, Any]:
    return dict(LicenseWireSerializer(license).data)


def encode_request(request: LicenseRequest) -> Dict[str, Any]:
    return dict(LicenseRequestWireSerializer(request).data)


def encode_log(entry: ApiLogEntry) -> Dict[str, Any]:
    return dict(ApiLogWireSerializer(entry).data)


def encode_module(module: ModuleDefinition) -> Dict[str, Any]:
    return dict(ModuleWireSerializer(module).data)


def decode_license(data: Any) -> Decoded:
    """
    Build a License from a wire row.

    Raises:
        ValueError: If the row is malformed
    """
    fields = _validated(LicenseWireSerializer, data, "license")
    stamp = fields.get("updated_at")
    created_at = fields.get("created_at") or utc_now()
    fields["created_at"] = created_at
    fields["updated_at"] = stamp or created_at
    fields["domain"] = normalize_domain(fields["domain"])
    fields["phone_number"] = fields.get("phone_number") or ""
    fields["note"] = fields.get("note") or ""
    fields["features"] = {k: v is True for k, v in fields["features"].items()}
    return Decoded(License(**fields), stamp)


def decode_request(data: Any) -> Decoded:
    """
    Build a LicenseRequest from a wire row.

    Raises:
        ValueError: If the row is malformed
    """
    fields = _validated(LicenseRequestWireSerializer, data, "request")
    stamp = fields.get("updated_at")
    request_date = fields.get("request_date") or utc_now()
    fields["request_date"] = request_date
    fields["updated_at"] = stamp or request_date
    fields["requested_domain"] = normalize_domain(fields["requested_domain"])
    for name in ("phone_number", "note", "custom_message"):
        fields[name] = fields.get(name) or ""
    return Decoded(LicenseRequest(**fields), stamp)


def decode_log(data: Any) -> ApiLogEntry:
    fields = _validated(ApiLogWireSerializer, data, "log")
    fields["provided_key"] = fields.get("provided_key") or ""
    return ApiLogEntry(**fields)


def decode_module(data: Any) -> ModuleDefinition:
    fields = _validated(ModuleWireSerializer, data, "module")
    return ModuleDefinition(
        id=fields["id"].strip(),
        label=fields["label"].strip(),
        description=fields.get("description") or "",
        icon_name=fields.get("icon_name") or DEFAULT_ICON,
    )


def decode_date(value: Any) -> date:
    """Parse a ``YYYY-MM-DD`` date sent by a client."""
    field = serializers.DateField()
    try:
        return field.to_internal_value(value)
    except serializers.ValidationError as e:
        raise ValueError(f"Invalid date: {value}") from e
