"""
Serializers for application endpoints.
"""

from rest_framework import serializers


class CreateApplicationRequestSerializer(serializers.Serializer):
    """Serializer for create application request."""

    name = serializers.CharField(required=True, allow_blank=True, max_length=255)


class UpdateApplicationRequestSerializer(serializers.Serializer):
    """
    Serializer for update application request.

    ``status`` (``active`` or ``paused``) takes precedence over ``name``.
    """

    name = serializers.CharField(required=False, allow_blank=True, max_length=255)
    status = serializers.CharField(required=False, max_length=20)


class ApplicationDTOSerializer(serializers.Serializer):
    """Serializer for ApplicationDTO."""

    id = serializers.UUIDField()
    name = serializers.CharField()
    status = serializers.CharField()
    secret = serializers.CharField()
    version = serializers.CharField()
    created_at = serializers.DateTimeField()
    updated_at = serializers.DateTimeField()
