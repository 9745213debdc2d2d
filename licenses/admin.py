"""
Django admin configuration for licenses app.
"""
from django.contrib import admin
from django.utils.html import format_html

from core.domain.duration import humanize_duration
from licenses.infrastructure.models import License


@admin.register(License)
class LicenseAdmin(admin.ModelAdmin):
    """Admin interface for License model."""

    list_display = [
        "key",
        "application",
        "level",
        "duration_display",
        "expiry",
        "used",
        "banned_display",
        "created_at",
    ]
    list_filter = ["used", "banned", "level", "created_at", "application"]
    search_fields = ["key", "note", "application__name"]
    readonly_fields = ["id", "key", "created_at"]
    fieldsets = (
        (
            "Basic Information",
            {
                "fields": ("id", "application", "key", "level", "note"),
            },
        ),
        (
            "Time",
            {
                "fields": ("duration", "expiry", "used"),
            },
        ),
        (
            "Moderation",
            {
                "fields": ("banned", "ban_reason"),
            },
        ),
        (
            "Timestamps",
            {
                "fields": ("created_at",),
                "classes": ("collapse",),
            },
        ),
    )

    def duration_display(self, obj):
        """Display accumulated duration in dashboard units."""
        return humanize_duration(None if obj.is_lifetime else obj.duration)

    duration_display.short_description = "Duration"

    def banned_display(self, obj):
        """Display ban state with color coding."""
        if obj.banned:
            return format_html('<span style="color: red; font-weight: bold;">BANNED</span>')
        return format_html('<span style="color: green;">OK</span>')

    banned_display.short_description = "Status"

    def get_queryset(self, request):
        """Optimize queryset."""
        return super().get_queryset(request).select_related("application")
