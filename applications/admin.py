"""
Django admin configuration for applications app.
"""
import json

from django.contrib import admin
from django.utils.html import format_html

from applications.infrastructure.models import Application, AuditLog


@admin.register(Application)
class ApplicationAdmin(admin.ModelAdmin):
    """Admin interface for Application model."""

    list_display = ["name", "owner", "status", "version", "license_count", "created_at"]
    list_filter = ["status", "created_at"]
    search_fields = ["name", "owner__username", "owner__email"]
    readonly_fields = ["id", "secret", "created_at", "updated_at"]
    fieldsets = (
        (
            "Basic Information",
            {
                "fields": ("id", "owner", "name", "status", "version"),
            },
        ),
        (
            "Credentials",
            {
                "fields": ("secret",),
                "classes": ("collapse",),
            },
        ),
        (
            "Timestamps",
            {
                "fields": ("created_at", "updated_at"),
                "classes": ("collapse",),
            },
        ),
    )

    def license_count(self, obj):
        """Display number of licenses in this application."""
        return obj.licenses.count()

    license_count.short_description = "Licenses"

    def get_queryset(self, request):
        """Optimize queryset."""
        return super().get_queryset(request).select_related("owner").prefetch_related("licenses")


@admin.register(AuditLog)
class AuditLogAdmin(admin.ModelAdmin):
    """Admin interface for AuditLog model."""

    list_display = ["event_type", "application", "aggregate_id", "occurred_at"]
    list_filter = ["event_type", "occurred_at", "application"]
    search_fields = ["aggregate_id", "application__name"]
    readonly_fields = ["id", "event_id", "occurred_at", "created_at", "payload_display"]
    fieldsets = (
        (
            "Basic Information",
            {
                "fields": ("id", "event_id", "application", "event_type", "aggregate_id"),
            },
        ),
        (
            "Details",
            {
                "fields": ("payload_display", "occurred_at", "created_at"),
            },
        ),
    )

    def payload_display(self, obj):
        """Display payload in a formatted way."""
        if obj.payload:
            return format_html(
                '<pre style="background: #f5f5f5; padding: 10px; '
                'border-radius: 4px; overflow-x: auto;">{}</pre>',
                json.dumps(obj.payload, indent=2),
            )
        return "-"

    payload_display.short_description = "Payload"

    def has_add_permission(self, request):
        """Audit logs are read-only."""
        return False

    def has_change_permission(self, request, obj=None):
        """Audit logs are read-only."""
        return False

    def has_delete_permission(self, request, obj=None):
        """Audit logs should not be deleted."""
        return False

    def get_queryset(self, request):
        """Optimize queryset."""
        return super().get_queryset(request).select_related("application")
