"""
UserVar domain entity.
"""
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from core.domain.exceptions import InvalidInputError


@dataclass(frozen=True)
class UserVar:
    """
    Name/value pair attached to one AppUser, unique per name.

    ``read_only`` is stored and returned but does not block overwrites.
    """

    id: uuid.UUID
    user_id: uuid.UUID
    name: str
    value: str
    read_only: bool
    created_at: datetime

    def __post_init__(self):
        """Validate user variable."""
        if not self.user_id:
            raise InvalidInputError("User ID is required")
        if not self.name or not self.name.strip():
            raise InvalidInputError("Variable name is required")
        if len(self.name) > 255:
            raise InvalidInputError("Variable name too long")
        if self.value is None:
            raise InvalidInputError("Variable value is required")

    @classmethod
    def create(
        cls,
        user_id: uuid.UUID,
        name: str,
        value: str,
        read_only: bool = False,
        now: Optional[datetime] = None,
    ) -> "UserVar":
        """Create a new UserVar entity."""
        return cls(
            id=uuid.uuid4(),
            user_id=user_id,
            name=name,
            value=None if value is None else str(value),
            read_only=bool(read_only),
            created_at=now or datetime.now(timezone.utc),
        )
