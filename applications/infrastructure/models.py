"""
Application and AuditLog models.
"""
import uuid

from django.conf import settings
from django.db import models


class Application(models.Model):
    """
    A tenant-scoped project owned by one dashboard account.
    Licenses and application users are isolated per application.
    """

    STATUS_CHOICES = [
        ("active", "Active"),
        ("paused", "Paused"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="applications"
    )
    name = models.CharField(max_length=255, help_text="Application display name")
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default="active")
    secret = models.CharField(max_length=64, editable=False, help_text="Runtime API secret")
    version = models.CharField(max_length=32, default="1.0")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        app_label = "applications"
        db_table = "applications"
        ordering = ["created_at"]
        indexes = [
            models.Index(fields=["owner", "created_at"]),
        ]

    def __str__(self):
        return self.name


class AuditLog(models.Model):
    """
    Immutable audit trail of license and user changes.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    application = models.ForeignKey(
        Application,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="audit_logs",
    )
    event_id = models.UUIDField(unique=True)
    event_type = models.CharField(max_length=64)
    aggregate_id = models.CharField(max_length=64)
    payload = models.JSONField(default=dict, help_text="Details of the change")
    occurred_at = models.DateTimeField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        app_label = "applications"
        db_table = "audit_logs"
        ordering = ["-occurred_at"]
        indexes = [
            models.Index(fields=["application", "event_type"]),
            models.Index(fields=["occurred_at"]),
        ]

    def __str__(self):
        return f"{self.event_type} - {self.aggregate_id}"
