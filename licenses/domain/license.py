"""
License domain entity.

This is the core domain entity representing a redeemable license key.
It contains business logic and is independent of infrastructure.
"""
import uuid
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Optional

from core.domain.duration import LIFETIME_SENTINEL, ExpiryDelta
from core.domain.exceptions import InvalidInputError

DEFAULT_LEVEL = 1


def normalize_level(value) -> int:
    """
    Coerce a subscription level; absent or invalid values become 1.

    Args:
        value: Raw level from the caller

    Returns:
        Positive integer level
    """
    try:
        level = int(value)
    except (TypeError, ValueError):
        return DEFAULT_LEVEL
    return level if level > 0 else DEFAULT_LEVEL


@dataclass(frozen=True)
class License:
    """
    License domain entity.

    ``duration`` is the accumulated entitlement length in seconds,
    not the remaining time. ``expiry`` is None for lifetime licenses.
    Once ``used`` is set the record is historical and its time is frozen.
    """

    id: uuid.UUID
    application_id: uuid.UUID
    key: str
    level: int
    duration: int
    expiry: Optional[datetime]
    used: bool
    banned: bool
    ban_reason: Optional[str]
    note: Optional[str]
    created_at: datetime

    def __post_init__(self):
        """Validate license entity."""
        if not self.application_id:
            raise InvalidInputError("Application ID is required")
        if not self.key:
            raise InvalidInputError("License key cannot be empty")
        if len(self.key) > 255:
            raise InvalidInputError("License key too long")
        if self.duration < 0:
            raise InvalidInputError("Duration cannot be negative")

    @classmethod
    def create(
        cls,
        application_id: uuid.UUID,
        key: str,
        delta: ExpiryDelta,
        level=DEFAULT_LEVEL,
        note: Optional[str] = None,
        now: Optional[datetime] = None,
        license_id: Optional[uuid.UUID] = None,
    ) -> "License":
        """
        Create a new, unused License entity.

        Args:
            application_id: Owning application UUID
            key: Generated key string
            delta: Entitlement length
            level: Subscription level (defaults to 1)
            note: Optional free-text note
            now: Creation instant (defaults to current UTC time)
            license_id: Optional UUID (generated if not provided)

        Returns:
            License entity instance
        """
        now = now or datetime.now(timezone.utc)
        return cls(
            id=license_id or uuid.uuid4(),
            application_id=application_id,
            key=key,
            level=normalize_level(level),
            duration=delta.total_seconds(),
            expiry=delta.initial_expiry(now),
            used=False,
            banned=False,
            ban_reason=None,
            note=note or None,
            created_at=now,
        )

    @property
    def is_lifetime(self) -> bool:
        """True when the license never expires."""
        return self.expiry is None

    def add_time(self, delta: ExpiryDelta, now: datetime) -> Optional["License"]:
        """
        Return a copy with extra entitlement time, or None if unchanged.

        Expiry and duration always change together. Used licenses and
        lifetime licenses given a finite amount are left as they are.

        Args:
            delta: Time to add
            now: Current instant

        Returns:
            Updated License or None when nothing changes
        """
        if self.used:
            return None
        if delta.is_lifetime:
            return replace(self, expiry=None, duration=max(self.duration, LIFETIME_SENTINEL))
        if self.is_lifetime:
            return None
        return replace(
            self,
            expiry=delta.extend(self.expiry, now),
            duration=self.duration + delta.seconds,
        )

    def ban(self, reason: Optional[str] = None) -> "License":
        """Return a banned copy; re-banning just resets the reason."""
        return replace(self, banned=True, ban_reason=reason or None)
