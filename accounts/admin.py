"""
Django admin configuration for accounts app.
"""
from django.contrib import admin
from django.utils.html import format_html

from accounts.infrastructure.models import OwnerSession


@admin.register(OwnerSession)
class OwnerSessionAdmin(admin.ModelAdmin):
    """Admin interface for OwnerSession model."""

    list_display = ["user", "valid_display", "expires_at", "created_at"]
    list_filter = ["expires_at", "created_at"]
    search_fields = ["user__username", "user__email"]
    readonly_fields = ["id", "token_hash", "created_at"]

    def valid_display(self, obj):
        """Display session validity."""
        if obj.is_valid():
            return format_html('<span style="color: green;">Valid</span>')
        return format_html('<span style="color: red;">Expired</span>')

    valid_display.short_description = "Status"

    def get_queryset(self, request):
        """Optimize queryset."""
        return super().get_queryset(request).select_related("user")
