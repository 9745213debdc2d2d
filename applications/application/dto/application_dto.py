"""
Application DTOs for API responses.
"""
import uuid
from dataclasses import dataclass
from datetime import datetime

from applications.domain.application import Application


@dataclass
class ApplicationDTO:
    """DTO for application information."""

    id: uuid.UUID
    name: str
    status: str
    secret: str
    version: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, application: Application) -> "ApplicationDTO":
        """Build the DTO from a domain entity."""
        return cls(
            id=application.id,
            name=application.name,
            status=application.status.value,
            secret=application.secret,
            version=application.version,
            created_at=application.created_at,
            updated_at=application.updated_at,
        )
