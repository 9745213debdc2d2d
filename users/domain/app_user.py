"""
AppUser domain entity.

An end-user account scoped to one application. ``expiry`` is an
absolute instant, or None for unlimited entitlement.
"""
import uuid
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Optional

from core.domain.duration import ExpiryDelta
from core.domain.exceptions import InvalidInputError
from core.domain.value_objects import Username

DEFAULT_SUBSCRIPTION = "default"


def _blank_to_none(value: Optional[str]) -> Optional[str]:
    return value or None


@dataclass(frozen=True)
class AppUser:
    """
    AppUser domain entity.

    Time and moderation changes return new instances; the entity
    itself is never mutated.
    """

    id: uuid.UUID
    application_id: uuid.UUID
    username: str
    password_hash: str
    email: Optional[str]
    subscription: str
    expiry: Optional[datetime]
    hwid: Optional[str]
    banned: bool
    ban_reason: Optional[str]
    paused: bool
    created_at: datetime

    def __post_init__(self):
        """Validate app user entity."""
        if not self.application_id:
            raise InvalidInputError("Application ID is required")
        Username(self.username)
        if not self.password_hash:
            raise InvalidInputError("Password is required")
        if not self.subscription:
            raise InvalidInputError("Subscription cannot be empty")

    @classmethod
    def create(
        cls,
        application_id: uuid.UUID,
        username: str,
        password_hash: str,
        email: Optional[str] = None,
        subscription: Optional[str] = None,
        expiry: Optional[datetime] = None,
        now: Optional[datetime] = None,
        user_id: Optional[uuid.UUID] = None,
    ) -> "AppUser":
        """
        Create a new AppUser entity.

        Args:
            application_id: Owning application UUID
            username: Username, unique within the application
            password_hash: Already-hashed password
            email: Optional email address
            subscription: Subscription tier (defaults to ``default``)
            expiry: Absolute expiry, None for unlimited
            now: Creation instant
            user_id: Optional UUID (generated if not provided)

        Returns:
            AppUser entity instance
        """
        return cls(
            id=user_id or uuid.uuid4(),
            application_id=application_id,
            username=username,
            password_hash=password_hash,
            email=_blank_to_none(email),
            subscription=subscription or DEFAULT_SUBSCRIPTION,
            expiry=expiry,
            hwid=None,
            banned=False,
            ban_reason=None,
            paused=False,
            created_at=now or datetime.now(timezone.utc),
        )

    def is_active(self, now: datetime) -> bool:
        """True while the user is entitled: unlimited or not yet expired."""
        return self.expiry is None or self.expiry >= now

    def is_expired(self, now: datetime) -> bool:
        """True once a finite expiry lies strictly before ``now``."""
        return self.expiry is not None and self.expiry < now

    def extend(self, delta: ExpiryDelta, now: datetime) -> "AppUser":
        """Return a copy with expiry pushed forward by ``delta``."""
        return replace(self, expiry=delta.extend(self.expiry, now))

    def subtract(self, delta: ExpiryDelta, now: datetime) -> Optional["AppUser"]:
        """
        Return a copy with expiry pulled back by ``delta``.

        Unlimited users cannot lose time; None is returned for them.
        """
        if self.expiry is None:
            return None
        return replace(self, expiry=delta.subtract(self.expiry, now))

    def ban(self, reason: Optional[str] = None) -> "AppUser":
        """Return a banned copy; re-banning just resets the reason."""
        return replace(self, banned=True, ban_reason=_blank_to_none(reason))

    def set_paused(self, paused: bool) -> "AppUser":
        """Return a paused or unpaused copy."""
        return replace(self, paused=paused)

    def reset_hwid(self) -> "AppUser":
        """Return a copy with the hardware binding cleared."""
        return replace(self, hwid=None)

    def delete_subscription(self) -> "AppUser":
        """Return a copy on the default tier with unlimited expiry."""
        return replace(self, subscription=DEFAULT_SUBSCRIPTION, expiry=None)

    def update(
        self,
        username: Optional[str] = None,
        password_hash: Optional[str] = None,
        email: Optional[str] = None,
        subscription: Optional[str] = None,
        hwid: Optional[str] = None,
    ) -> "AppUser":
        """
        Return an edited copy.

        None leaves a field as it is. An empty ``email`` or ``hwid``
        clears it.
        """
        changes = {}
        if username:
            changes["username"] = username
        if password_hash:
            changes["password_hash"] = password_hash
        if email is not None:
            changes["email"] = _blank_to_none(email)
        if subscription:
            changes["subscription"] = subscription
        if hwid is not None:
            changes["hwid"] = _blank_to_none(hwid)
        return replace(self, **changes)
