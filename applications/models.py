"""
Model registry for the applications app.

Models live in ``applications.infrastructure.models``.
"""
from applications.infrastructure.models import Application, AuditLog  # noqa: F401
