"""
AppUser DTOs for API responses.
"""
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from users.domain.app_user import AppUser
from users.domain.user_var import UserVar


@dataclass
class UserVarDTO:
    """DTO for a user variable."""

    id: uuid.UUID
    name: str
    value: str
    read_only: bool
    created_at: datetime

    @classmethod
    def from_entity(cls, user_var: UserVar) -> "UserVarDTO":
        """Build the DTO from a domain entity."""
        return cls(
            id=user_var.id,
            name=user_var.name,
            value=user_var.value,
            read_only=user_var.read_only,
            created_at=user_var.created_at,
        )


@dataclass
class AppUserDTO:
    """DTO for application user information. The password hash is never exposed."""

    id: uuid.UUID
    username: str
    email: Optional[str]
    subscription: str
    expiry: Optional[datetime]
    hwid: Optional[str]
    banned: bool
    ban_reason: Optional[str]
    paused: bool
    created_at: datetime
    vars: List[UserVarDTO] = field(default_factory=list)

    @classmethod
    def from_entity(cls, app_user: AppUser, user_vars=()) -> "AppUserDTO":
        """Build the DTO from a domain entity and its variables."""
        return cls(
            id=app_user.id,
            username=app_user.username,
            email=app_user.email,
            subscription=app_user.subscription,
            expiry=app_user.expiry,
            hwid=app_user.hwid,
            banned=app_user.banned,
            ban_reason=app_user.ban_reason,
            paused=app_user.paused,
            created_at=app_user.created_at,
            vars=[UserVarDTO.from_entity(user_var) for user_var in user_vars],
        )


@dataclass
class UserCountDTO:
    """
    DTO for bulk user operations.

    ``count`` is the number of users changed or deleted; ``matched`` is
    the cohort size for time operations, which can be larger when
    unlimited users are skipped.
    """

    count: int
    matched: Optional[int] = None
