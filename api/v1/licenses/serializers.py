"""
Serializers for license endpoints.

Request field names follow the dashboard's form payloads.
"""

from rest_framework import serializers


class CreateLicenseBatchRequestSerializer(serializers.Serializer):
    """Serializer for create license batch request."""

    amount = serializers.IntegerField(required=True)
    mask = serializers.CharField(required=True, allow_blank=True, max_length=255)
    duration = serializers.IntegerField(required=True)
    expiryUnit = serializers.IntegerField(required=True, source="expiry_unit")
    level = serializers.CharField(required=False, allow_null=True, allow_blank=True)
    note = serializers.CharField(required=False, allow_null=True, allow_blank=True)
    lowercaseLetters = serializers.BooleanField(
        required=False, default=True, source="lowercase_letters"
    )
    uppercaseLetters = serializers.BooleanField(
        required=False, default=True, source="uppercase_letters"
    )


class AddLicenseTimeRequestSerializer(serializers.Serializer):
    """Serializer for add license time request."""

    time = serializers.IntegerField(required=True)
    expiryUnit = serializers.IntegerField(required=True, source="expiry_unit")


class BanLicenseRequestSerializer(serializers.Serializer):
    """Serializer for ban license request."""

    reason = serializers.CharField(required=False, allow_null=True, allow_blank=True)


class DeleteLicensesRequestSerializer(serializers.Serializer):
    """
    Serializer for delete licenses request.

    ``mode`` is ``used``, ``unused`` or ``ids``; a ``licenseIds`` list
    without a mode implies ``ids``.
    """

    mode = serializers.CharField(required=False, allow_null=True, allow_blank=True)
    licenseIds = serializers.ListField(
        child=serializers.CharField(), required=False, default=list, source="license_ids"
    )

    def validate(self, attrs):
        """Infer ``ids`` mode from a bare id list."""
        if not attrs.get("mode") and attrs.get("license_ids"):
            attrs["mode"] = "ids"
        return attrs


class LicenseDTOSerializer(serializers.Serializer):
    """Serializer for LicenseDTO."""

    id = serializers.UUIDField()
    key = serializers.CharField()
    level = serializers.IntegerField()
    duration = serializers.IntegerField()
    duration_display = serializers.CharField()
    expiry = serializers.DateTimeField(allow_null=True)
    used = serializers.BooleanField()
    banned = serializers.BooleanField()
    ban_reason = serializers.CharField(allow_null=True)
    note = serializers.CharField(allow_null=True)
    created_at = serializers.DateTimeField()


class LicenseBatchResponseSerializer(serializers.Serializer):
    """Serializer for create license batch response."""

    count = serializers.IntegerField()
    licenses = LicenseDTOSerializer(many=True)


class CountResponseSerializer(serializers.Serializer):
    """Serializer for bulk operation responses."""

    count = serializers.IntegerField()
