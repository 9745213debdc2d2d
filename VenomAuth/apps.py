"""
App configuration for VenomAuth.
"""

import logging
import os
import sys

from django.apps import AppConfig
from django.conf import settings

logger = logging.getLogger(__name__)

# Management commands that never serve requests
_SKIP_COMMANDS = [
    "migrate",
    "makemigrations",
    "collectstatic",
    "shell",
    "check",
    "createsuperuser",
]


class VenomAuthConfig(AppConfig):
    """App configuration for VenomAuth."""

    name = "VenomAuth"
    verbose_name = "VenomAuth"

    def ready(self):
        """Called when Django starts."""
        if len(sys.argv) > 1 and sys.argv[1] in _SKIP_COMMANDS:
            return

        # RUN_MAIN is "false" in the autoreloader's watcher process
        if os.environ.get("RUN_MAIN") == "false":
            return

        if getattr(self, "_initialized", False):
            return

        if getattr(settings, "VENOMAUTH_OPENTELEMETRY", True):
            self.setup_observability()
        if getattr(settings, "VENOMAUTH_AUDIT_EVENTS", True):
            self.register_event_handlers()
        self._initialized = True

    def setup_observability(self):
        """Setup tracing and metrics after apps are ready."""
        from core.instrumentation import setup_opentelemetry

        logger.info("Setting up observability...")
        setup_opentelemetry()
        logger.info("Observability setup complete")

    def register_event_handlers(self):
        """Register event handlers after apps are ready."""
        from core.infrastructure.event_handlers import register_event_handlers as register

        register()
