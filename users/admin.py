"""
Django admin configuration for users app.
"""
from django.contrib import admin
from django.utils.html import format_html

from users.infrastructure.models import AppUser, UserVar


class UserVarInline(admin.TabularInline):
    """Inline editor for a user's variables."""

    model = UserVar
    extra = 0
    fields = ["name", "value", "read_only"]


@admin.register(AppUser)
class AppUserAdmin(admin.ModelAdmin):
    """Admin interface for AppUser model."""

    list_display = [
        "username",
        "application",
        "subscription",
        "expiry",
        "state_display",
        "created_at",
    ]
    list_filter = ["subscription", "banned", "paused", "application"]
    search_fields = ["username", "email", "hwid", "application__name"]
    readonly_fields = ["id", "password", "created_at"]
    inlines = [UserVarInline]
    fieldsets = (
        (
            "Basic Information",
            {
                "fields": ("id", "application", "username", "email", "password"),
            },
        ),
        (
            "Entitlement",
            {
                "fields": ("subscription", "expiry", "hwid"),
            },
        ),
        (
            "Moderation",
            {
                "fields": ("banned", "ban_reason", "paused"),
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

    def state_display(self, obj):
        """Display moderation state with color coding."""
        if obj.banned:
            return format_html('<span style="color: red; font-weight: bold;">BANNED</span>')
        if obj.paused:
            return format_html('<span style="color: orange;">PAUSED</span>')
        return format_html('<span style="color: green;">ACTIVE</span>')

    state_display.short_description = "State"

    def get_queryset(self, request):
        """Optimize queryset."""
        return super().get_queryset(request).select_related("application")
