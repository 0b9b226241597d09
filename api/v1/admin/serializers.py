"""
Serializers for the admin-action endpoint.
"""

from rest_framework import serializers


class AdminActionRequestSerializer(serializers.Serializer):
    """
    Admin action envelope.

    Action arguments (``license``, ``request``, ``id``, ``features``,
    ``status``, ``search``, ``module``, ``key``, ``value``) travel next to
    these two fields.
    """

    action = serializers.CharField(max_length=64)
    secret = serializers.CharField(allow_blank=True, required=False, default="")


class AdminActionResponseSerializer(serializers.Serializer):
    status = serializers.CharField()
    data = serializers.ListField(child=serializers.DictField(), required=False)
    value = serializers.CharField(required=False, allow_null=True)
    licenses = serializers.ListField(child=serializers.DictField(), required=False)
    requests = serializers.ListField(child=serializers.DictField(), required=False)
    logs = serializers.ListField(child=serializers.DictField(), required=False)
