"""
License DTOs for API responses.
"""
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from core.domain.duration import humanize_duration
from licenses.domain.license import License


@dataclass
class LicenseDTO:
    """DTO for license information."""

    id: uuid.UUID
    key: str
    level: int
    duration: int
    duration_display: str
    expiry: Optional[datetime]
    used: bool
    banned: bool
    ban_reason: Optional[str]
    note: Optional[str]
    created_at: datetime

    @classmethod
    def from_entity(cls, license: License) -> "LicenseDTO":
        """Build the DTO from a domain entity."""
        return cls(
            id=license.id,
            key=license.key,
            level=license.level,
            duration=license.duration,
            duration_display=humanize_duration(
                None if license.is_lifetime else license.duration
            ),
            expiry=license.expiry,
            used=license.used,
            banned=license.banned,
            ban_reason=license.ban_reason,
            note=license.note,
            created_at=license.created_at,
        )


@dataclass
class LicenseBatchDTO:
    """DTO for a created license batch."""

    count: int
    licenses: List[LicenseDTO]


@dataclass
class CountDTO:
    """DTO for bulk operations that report an affected row count."""

    count: int
