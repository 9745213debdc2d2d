"""
Application domain entity.

An application is the tenant-scoped project under one owning account.
It is the unit of isolation for licenses and application users.
"""

import secrets
import uuid
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Optional

from core.domain.exceptions import InvalidInputError
from core.domain.value_objects import ApplicationStatus

DEFAULT_VERSION = "1.0"


def generate_application_secret() -> str:
    """Generate the opaque runtime secret for an application."""
    return secrets.token_hex(32)


@dataclass(frozen=True)
class Application:
    """
    Application domain entity.

    Immutable; state changes return a new instance.
    """

    id: uuid.UUID
    owner_id: int
    name: str
    status: ApplicationStatus
    secret: str
    version: str
    created_at: datetime
    updated_at: datetime

    def __post_init__(self):
        """Validate application entity."""
        if not self.name or len(self.name.strip()) == 0:
            raise InvalidInputError("App name is required")
        if len(self.name) > 255:
            raise InvalidInputError("App name too long")
        if self.owner_id is None:
            raise InvalidInputError("Owner is required")

    @classmethod
    def create(
        cls,
        owner_id: int,
        name: str,
        application_id: Optional[uuid.UUID] = None,
    ) -> "Application":
        """
        Create a new Application entity.

        Args:
            owner_id: Owning account id
            name: Display name
            application_id: Optional UUID (generated if not provided)

        Returns:
            Application entity instance
        """
        now = datetime.now(timezone.utc)
        return cls(
            id=application_id or uuid.uuid4(),
            owner_id=owner_id,
            name=(name or "").strip(),
            status=ApplicationStatus.ACTIVE,
            secret=generate_application_secret(),
            version=DEFAULT_VERSION,
            created_at=now,
            updated_at=now,
        )

    def is_owned_by(self, owner_id: int) -> bool:
        """Check whether the application belongs to an owner."""
        return self.owner_id == owner_id

    def rename(self, new_name: str) -> "Application":
        """Return a copy with a new display name."""
        return replace(
            self,
            name=(new_name or "").strip(),
            updated_at=datetime.now(timezone.utc),
        )

    def set_status(self, status: str) -> "Application":
        """Return a copy with a new lifecycle status."""
        try:
            new_status = ApplicationStatus(status)
        except ValueError:
            raise InvalidInputError("Invalid status") from None
        return replace(self, status=new_status, updated_at=datetime.now(timezone.utc))
