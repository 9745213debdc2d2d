"""
Model registry for the accounts app.

Models live in ``accounts.infrastructure.models``.
"""
from accounts.infrastructure.models import OwnerSession  # noqa: F401
