"""
Development settings for VenomAuth.
"""

import os

from .base import *  # noqa: F403, F401

DEBUG = True

ALLOWED_HOSTS = ["localhost", "127.0.0.1", "0.0.0.0"]

# DB_ENGINE=sqlite runs the dashboard API without a PostgreSQL server
if os.environ.get("DB_ENGINE") == "sqlite":
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.sqlite3",
            "NAME": BASE_DIR / "venomauth.sqlite3",  # noqa: F405
        }
    }

# Spans go to a local collector only when one is configured
VENOMAUTH_OPENTELEMETRY = "OTEL_EXPORTER_OTLP_ENDPOINT" in os.environ

# Browsable API for poking at endpoints by hand
REST_FRAMEWORK["DEFAULT_RENDERER_CLASSES"] = [  # noqa: F405
    "rest_framework.renderers.JSONRenderer",
    "rest_framework.renderers.BrowsableAPIRenderer",
]
