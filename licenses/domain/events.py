"""
License domain events.

Domain events represent something that happened in the license domain.
"""

import uuid
from datetime import datetime
from typing import Optional

from core.domain.events import DomainEvent


class LicensesCreated(DomainEvent):
    """Event raised when a batch of licenses is created."""

    def __init__(
        self,
        application_id: uuid.UUID,
        count: int,
        level: int,
        duration: int,
        expiry: Optional[datetime],
        occurred_at: Optional[datetime] = None,
    ):
        """
        Initialize LicensesCreated event.

        Args:
            application_id: Application UUID
            count: Number of licenses in the batch
            level: Subscription level of the batch
            duration: Duration in seconds shared by the batch
            expiry: Expiry shared by the batch (None for lifetime)
            occurred_at: When the event occurred
        """
        super().__init__(**self._base(application_id, application_id, occurred_at))
        self.count = count
        self.level = level
        self.duration = duration
        self.expiry = expiry


class LicenseTimeAdded(DomainEvent):
    """Event raised when time is added to the unused licenses of an application."""

    def __init__(
        self,
        application_id: uuid.UUID,
        updated: int,
        delta: str,
        occurred_at: Optional[datetime] = None,
    ):
        """
        Initialize LicenseTimeAdded event.

        Args:
            application_id: Application UUID
            updated: Number of licenses changed
            delta: Readable form of the added time
            occurred_at: When the event occurred
        """
        super().__init__(**self._base(application_id, application_id, occurred_at))
        self.updated = updated
        self.delta = delta


class LicenseBanned(DomainEvent):
    """Event raised when a license is banned."""

    def __init__(
        self,
        application_id: uuid.UUID,
        license_id: uuid.UUID,
        reason: Optional[str],
        occurred_at: Optional[datetime] = None,
    ):
        """
        Initialize LicenseBanned event.

        Args:
            application_id: Application UUID
            license_id: License UUID
            reason: Ban reason, if any
            occurred_at: When the event occurred
        """
        super().__init__(**self._base(license_id, application_id, occurred_at))
        self.license_id = license_id
        self.reason = reason


class LicensesDeleted(DomainEvent):
    """Event raised when licenses are deleted."""

    def __init__(
        self,
        application_id: uuid.UUID,
        mode: str,
        deleted: int,
        occurred_at: Optional[datetime] = None,
    ):
        """
        Initialize LicensesDeleted event.

        Args:
            application_id: Application UUID
            mode: Selection mode used
            deleted: Number of licenses deleted
            occurred_at: When the event occurred
        """
        super().__init__(**self._base(application_id, application_id, occurred_at))
        self.mode = mode
        self.deleted = deleted
