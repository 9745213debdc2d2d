"""
AppUser and UserVar models.
"""
import uuid

from django.db import models


class AppUser(models.Model):
    """
    End-user account of one application.
    Username is unique within the application; empty expiry means unlimited.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    application = models.ForeignKey(
        "applications.Application", on_delete=models.CASCADE, related_name="app_users"
    )
    username = models.CharField(max_length=150)
    password = models.CharField(max_length=255, help_text="Password hash")
    email = models.EmailField(null=True, blank=True)
    subscription = models.CharField(max_length=100, default="default", db_index=True)
    expiry = models.DateTimeField(null=True, blank=True, help_text="Empty means unlimited")
    hwid = models.CharField(max_length=255, null=True, blank=True, help_text="Hardware id")
    banned = models.BooleanField(default=False)
    ban_reason = models.TextField(null=True, blank=True)
    paused = models.BooleanField(default=False)
    created_at = models.DateTimeField()

    class Meta:
        app_label = "users"
        db_table = "app_users"
        ordering = ["-created_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["application", "username"], name="unique_app_username"
            ),
        ]
        indexes = [
            models.Index(fields=["application", "expiry"]),
            models.Index(fields=["application", "created_at"]),
        ]

    def __str__(self):
        return self.username


class UserVar(models.Model):
    """
    Name/value pair attached to an application user.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(AppUser, on_delete=models.CASCADE, related_name="user_vars")
    name = models.CharField(max_length=255)
    value = models.TextField()
    read_only = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        app_label = "users"
        db_table = "user_vars"
        ordering = ["name"]
        constraints = [
            models.UniqueConstraint(fields=["user", "name"], name="unique_user_var_name"),
        ]

    def __str__(self):
        return f"{self.name}={self.value}"
