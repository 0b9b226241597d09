"""
Serializers for the verification endpoint.
"""

from rest_framework import serializers


class VerifyLicenseRequestSerializer(serializers.Serializer):
    """Body of a verification call. The calling domain comes from Origin or Referer."""

    key = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class ModuleEntrySerializer(serializers.Serializer):
    technicalName = serializers.CharField()
    title = serializers.CharField()
    description = serializers.CharField()
    iconName = serializers.CharField()
    active = serializers.BooleanField()


class VerifyLicenseResponseSerializer(serializers.Serializer):
    """Verification answer. Fields present depend on ``status``."""

    status = serializers.ChoiceField(
        choices=["valid", "active", "expired", "suspended", "pending", "requested"]
    )
    message = serializers.CharField(required=False)
    key = serializers.CharField(required=False)
    validUntil = serializers.DateField(required=False)
    daysRemaining = serializers.IntegerField(required=False)
    modules = ModuleEntrySerializer(many=True, required=False)
    features = serializers.DictField(child=serializers.BooleanField(), required=False)
    requestId = serializers.CharField(required=False)


class ErrorSerializer(serializers.Serializer):
    error = serializers.CharField()
    code = serializers.CharField(required=False)
