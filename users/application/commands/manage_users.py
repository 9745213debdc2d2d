"""
Commands creating, editing and deleting application users.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional


@dataclass
class CreateAppUserCommand:
    """Command to create one user in an application."""

    owner_id: Optional[int]
    application_id: uuid.UUID
    username: str
    password: str
    email: Optional[str] = None
    subscription: Optional[str] = None
    expiry: Optional[datetime] = None


@dataclass
class UpdateAppUserCommand:
    """
    Command to edit one user.

    None leaves a field unchanged; an empty email or hwid clears it.
    """

    owner_id: Optional[int]
    application_id: uuid.UUID
    user_id: uuid.UUID
    username: Optional[str] = None
    password: Optional[str] = None
    email: Optional[str] = None
    subscription: Optional[str] = None
    hwid: Optional[str] = None


@dataclass
class DeleteAppUsersCommand:
    """
    Command to delete users.

    ``mode`` is ``expired`` or ``ids``; ``ids`` mode deletes exactly
    ``user_ids``.
    """

    owner_id: Optional[int]
    application_id: uuid.UUID
    mode: Optional[str]
    user_ids: List[uuid.UUID] = field(default_factory=list)
