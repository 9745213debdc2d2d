"""
Owner session model.
"""
import uuid

from django.conf import settings
from django.db import models
from django.utils import timezone


class OwnerSession(models.Model):
    """
    Session token of a dashboard owner.
    Only the SHA-256 hash of the token is stored.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="owner_sessions"
    )
    token_hash = models.CharField(max_length=64, unique=True, db_index=True)
    expires_at = models.DateTimeField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        app_label = "accounts"
        db_table = "owner_sessions"
        indexes = [
            models.Index(fields=["user", "expires_at"]),
        ]

    def __str__(self):
        return f"Session for {self.user_id}"

    def is_valid(self) -> bool:
        """Check if the session has not expired."""
        return timezone.now() < self.expires_at
