"""
Serializers for application user endpoints.

Request field names follow the dashboard's form payloads.
"""

from rest_framework import serializers


class CreateAppUserRequestSerializer(serializers.Serializer):
    """Serializer for create app user request."""

    username = serializers.CharField(required=True, allow_blank=True, max_length=150)
    password = serializers.CharField(required=True, allow_blank=True, write_only=True)
    email = serializers.EmailField(required=False, allow_null=True, allow_blank=True)
    subscription = serializers.CharField(
        required=False, allow_null=True, allow_blank=True, max_length=100
    )
    expiry = serializers.DateTimeField(required=False, allow_null=True)


class UpdateAppUserRequestSerializer(serializers.Serializer):
    """
    Serializer for update app user request.

    Omitted fields are left unchanged; an empty email or hwid clears it.
    """

    username = serializers.CharField(required=False, max_length=150)
    password = serializers.CharField(required=False, allow_blank=True, write_only=True)
    email = serializers.EmailField(required=False, allow_blank=True)
    subscription = serializers.CharField(required=False, max_length=100)
    hwid = serializers.CharField(required=False, allow_blank=True, max_length=255)


class DeleteAppUsersRequestSerializer(serializers.Serializer):
    """
    Serializer for delete app users request.

    ``mode`` is ``expired`` or ``ids``; a ``userIds`` list without a
    mode implies ``ids``.
    """

    mode = serializers.CharField(required=False, allow_null=True, allow_blank=True)
    userIds = serializers.ListField(
        child=serializers.CharField(), required=False, default=list, source="user_ids"
    )

    def validate(self, attrs):
        """Infer ``ids`` mode from a bare id list."""
        if not attrs.get("mode") and attrs.get("user_ids"):
            attrs["mode"] = "ids"
        return attrs


class ChangeUserTimeRequestSerializer(serializers.Serializer):
    """
    Serializer for subtract time request.

    ``username`` ``all`` and ``subscription`` ``default`` select every user.
    """

    username = serializers.CharField(required=False, allow_null=True, allow_blank=True)
    subscription = serializers.CharField(required=False, allow_null=True, allow_blank=True)
    time = serializers.IntegerField(required=True)
    expiryUnit = serializers.IntegerField(required=True, source="expiry_unit")


class ExtendAppUsersRequestSerializer(ChangeUserTimeRequestSerializer):
    """Serializer for extend request; ``activeOnly`` skips expired users."""

    activeOnly = serializers.BooleanField(required=False, default=False, source="active_only")


class BanAppUserRequestSerializer(serializers.Serializer):
    """Serializer for ban app user request."""

    reason = serializers.CharField(required=False, allow_null=True, allow_blank=True)


class PauseAppUsersRequestSerializer(serializers.Serializer):
    """Serializer for pause / unpause request."""

    userIds = serializers.ListField(
        child=serializers.CharField(), required=False, default=list, source="user_ids"
    )
    action = serializers.CharField(required=False, allow_null=True, allow_blank=True)


class ResetHwidRequestSerializer(serializers.Serializer):
    """Serializer for reset hwid request; no ids resets every user."""

    userIds = serializers.ListField(
        child=serializers.CharField(), required=False, default=list, source="user_ids"
    )


class SetUserVarRequestSerializer(serializers.Serializer):
    """Serializer for set user variable request."""

    varName = serializers.CharField(required=True, allow_blank=True, source="name")
    varValue = serializers.CharField(
        required=False, allow_null=True, allow_blank=True, default=None, source="value"
    )
    readOnly = serializers.BooleanField(required=False, default=False, source="read_only")


class UserVarDTOSerializer(serializers.Serializer):
    """Serializer for UserVarDTO."""

    id = serializers.UUIDField()
    name = serializers.CharField()
    value = serializers.CharField()
    read_only = serializers.BooleanField()
    created_at = serializers.DateTimeField()


class AppUserDTOSerializer(serializers.Serializer):
    """Serializer for AppUserDTO."""

    id = serializers.UUIDField()
    username = serializers.CharField()
    email = serializers.CharField(allow_null=True)
    subscription = serializers.CharField()
    expiry = serializers.DateTimeField(allow_null=True)
    hwid = serializers.CharField(allow_null=True)
    banned = serializers.BooleanField()
    ban_reason = serializers.CharField(allow_null=True)
    paused = serializers.BooleanField()
    created_at = serializers.DateTimeField()
    vars = UserVarDTOSerializer(many=True)


class UserCountResponseSerializer(serializers.Serializer):
    """Serializer for bulk user operation responses."""

    count = serializers.IntegerField()
    matched = serializers.IntegerField(allow_null=True, required=False)
