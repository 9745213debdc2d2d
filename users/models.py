"""
Model registry for the users app.

Models live in ``users.infrastructure.models``.
"""
from users.infrastructure.models import AppUser, UserVar  # noqa: F401
