"""
License model.
"""
import uuid

from django.db import models


class License(models.Model):
    """
    A redeemable license key issued for one application.
    Once redeemed (``used``) its time fields are no longer changed.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    application = models.ForeignKey(
        "applications.Application", on_delete=models.CASCADE, related_name="licenses"
    )
    key = models.CharField(max_length=255, db_index=True)
    level = models.PositiveIntegerField(default=1, help_text="Subscription level")
    duration = models.BigIntegerField(
        default=0, help_text="Accumulated entitlement length in seconds"
    )
    expiry = models.DateTimeField(null=True, blank=True, help_text="Empty means lifetime")
    used = models.BooleanField(default=False, db_index=True)
    banned = models.BooleanField(default=False)
    ban_reason = models.TextField(null=True, blank=True)
    note = models.TextField(null=True, blank=True)
    created_at = models.DateTimeField()

    class Meta:
        app_label = "licenses"
        db_table = "licenses"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["application", "used"]),
            models.Index(fields=["application", "created_at"]),
        ]

    def __str__(self):
        return self.key

    @property
    def is_lifetime(self) -> bool:
        """True when the license never expires."""
        return self.expiry is None
