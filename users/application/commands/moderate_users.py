"""
Moderation commands for application users.
"""

import uuid
from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class BanAppUserCommand:
    """Command to ban one user."""

    owner_id: Optional[int]
    application_id: uuid.UUID
    user_id: uuid.UUID
    reason: Optional[str] = None


@dataclass
class PauseAppUsersCommand:
    """Command to pause (``action="pause"``) or unpause the listed users."""

    owner_id: Optional[int]
    application_id: uuid.UUID
    user_ids: List[uuid.UUID]
    action: str


@dataclass
class ResetHwidCommand:
    """Command to clear hardware bindings; no ids means every user."""

    owner_id: Optional[int]
    application_id: uuid.UUID
    user_ids: List[uuid.UUID] = field(default_factory=list)


@dataclass
class DeleteSubscriptionCommand:
    """Command to put one user back on the default tier with no expiry."""

    owner_id: Optional[int]
    application_id: uuid.UUID
    user_id: uuid.UUID
