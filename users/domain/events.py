"""
AppUser domain events.

Domain events represent something that happened to application users.
"""

import uuid
from datetime import datetime
from typing import Optional

from core.domain.events import DomainEvent


class AppUserCreated(DomainEvent):
    """Event raised when an application user is created."""

    def __init__(
        self,
        application_id: uuid.UUID,
        user_id: uuid.UUID,
        username: str,
        subscription: str,
        occurred_at: Optional[datetime] = None,
    ):
        """
        Initialize AppUserCreated event.

        Args:
            application_id: Application UUID
            user_id: AppUser UUID
            username: Username
            subscription: Subscription tier
            occurred_at: When the event occurred
        """
        super().__init__(**self._base(user_id, application_id, occurred_at))
        self.user_id = user_id
        self.username = username
        self.subscription = subscription


class AppUserUpdated(DomainEvent):
    """Event raised when an application user's profile is edited."""

    def __init__(
        self,
        application_id: uuid.UUID,
        user_id: uuid.UUID,
        fields: str,
        occurred_at: Optional[datetime] = None,
    ):
        super().__init__(**self._base(user_id, application_id, occurred_at))
        self.user_id = user_id
        self.fields = fields


class AppUsersTimeChanged(DomainEvent):
    """Event raised when a cohort's expiry is extended or subtracted."""

    def __init__(
        self,
        application_id: uuid.UUID,
        operation: str,
        cohort: str,
        delta: str,
        matched: int,
        updated: int,
        occurred_at: Optional[datetime] = None,
    ):
        """
        Initialize AppUsersTimeChanged event.

        Args:
            application_id: Application UUID
            operation: ``extend`` or ``subtract``
            cohort: Readable cohort filters
            delta: Readable time amount
            matched: Users selected by the cohort
            updated: Users actually written
            occurred_at: When the event occurred
        """
        super().__init__(**self._base(application_id, application_id, occurred_at))
        self.operation = operation
        self.cohort = cohort
        self.delta = delta
        self.matched = matched
        self.updated = updated


class AppUserBanned(DomainEvent):
    """Event raised when an application user is banned."""

    def __init__(
        self,
        application_id: uuid.UUID,
        user_id: uuid.UUID,
        reason: Optional[str],
        occurred_at: Optional[datetime] = None,
    ):
        super().__init__(**self._base(user_id, application_id, occurred_at))
        self.user_id = user_id
        self.reason = reason


class AppUsersPauseChanged(DomainEvent):
    """Event raised when users are paused or unpaused."""

    def __init__(
        self,
        application_id: uuid.UUID,
        paused: bool,
        updated: int,
        occurred_at: Optional[datetime] = None,
    ):
        super().__init__(**self._base(application_id, application_id, occurred_at))
        self.paused = paused
        self.updated = updated


class HwidReset(DomainEvent):
    """Event raised when hardware bindings are cleared."""

    def __init__(
        self,
        application_id: uuid.UUID,
        updated: int,
        all_users: bool,
        occurred_at: Optional[datetime] = None,
    ):
        super().__init__(**self._base(application_id, application_id, occurred_at))
        self.updated = updated
        self.all_users = all_users


class SubscriptionDeleted(DomainEvent):
    """Event raised when a user is put back on the default tier."""

    def __init__(
        self,
        application_id: uuid.UUID,
        user_id: uuid.UUID,
        occurred_at: Optional[datetime] = None,
    ):
        super().__init__(**self._base(user_id, application_id, occurred_at))
        self.user_id = user_id


class AppUsersDeleted(DomainEvent):
    """Event raised when application users are deleted."""

    def __init__(
        self,
        application_id: uuid.UUID,
        mode: str,
        deleted: int,
        occurred_at: Optional[datetime] = None,
    ):
        super().__init__(**self._base(application_id, application_id, occurred_at))
        self.mode = mode
        self.deleted = deleted


class UserVarSet(DomainEvent):
    """Event raised when a user variable is created or overwritten."""

    def __init__(
        self,
        application_id: uuid.UUID,
        user_id: uuid.UUID,
        name: str,
        read_only: bool,
        occurred_at: Optional[datetime] = None,
    ):
        super().__init__(**self._base(user_id, application_id, occurred_at))
        self.user_id = user_id
        self.name = name
        self.read_only = read_only


class UserVarDeleted(DomainEvent):
    """Event raised when a user variable is deleted."""

    def __init__(
        self,
        application_id: uuid.UUID,
        user_id: uuid.UUID,
        name: str,
        occurred_at: Optional[datetime] = None,
    ):
        super().__init__(**self._base(user_id, application_id, occurred_at))
        self.user_id = user_id
        self.name = name
