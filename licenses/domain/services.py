"""
License domain services.

Domain services contain business logic that doesn't naturally
fit within a single entity.
"""
import uuid
from datetime import datetime, timezone
from typing import List, Optional

from core.domain.duration import ExpiryDelta
from core.domain.exceptions import InvalidInputError
from licenses.domain.license import License
from licenses.domain.license_key import generate_license_key


class LicenseKeyGenerator:
    """Domain service for license key generation."""

    @staticmethod
    def generate(mask: str, lowercase: bool = True, uppercase: bool = True) -> str:
        """
        Generate a license key.

        Args:
            mask: Key template (``*`` = random character)
            lowercase: Allow lowercase letters
            uppercase: Allow uppercase letters

        Returns:
            Generated license key string
        """
        if not mask:
            raise InvalidInputError("Mask is required")
        return generate_license_key(mask, lowercase=lowercase, uppercase=uppercase)


class LicenseLifecycleManager:
    """Domain service for issuing licenses and changing their time."""

    @staticmethod
    def build_batch(
        application_id: uuid.UUID,
        amount: int,
        mask: str,
        delta: ExpiryDelta,
        level=1,
        note: Optional[str] = None,
        lowercase: bool = True,
        uppercase: bool = True,
        now: Optional[datetime] = None,
    ) -> List[License]:
        """
        Build a batch of new licenses sharing one expiry and duration.

        Every license gets an independently generated key. Expiry is
        computed once, so all licenses in the batch are identical apart
        from key and id.

        Args:
            application_id: Owning application UUID
            amount: Number of licenses to create
            mask: Key template
            delta: Entitlement length
            level: Subscription level
            note: Optional note
            lowercase: Allow lowercase letters in keys
            uppercase: Allow uppercase letters in keys
            now: Creation instant

        Returns:
            List of License entities, not yet persisted
        """
        if isinstance(amount, bool) or not isinstance(amount, int) or amount < 1:
            raise InvalidInputError("Amount must be at least 1")
        if delta.amount < 1:
            raise InvalidInputError("Duration must be at least 1")

        now = now or datetime.now(timezone.utc)
        return [
            License.create(
                application_id=application_id,
                key=LicenseKeyGenerator.generate(mask, lowercase=lowercase, uppercase=uppercase),
                delta=delta,
                level=level,
                note=note,
                now=now,
            )
            for _ in range(amount)
        ]

    @staticmethod
    async def create_batch(
        licenses: List[License],
        repository: "LicenseRepository",  # noqa: F821
    ) -> List[License]:
        """
        Persist a built batch atomically.

        Args:
            licenses: Licenses from ``build_batch``
            repository: License repository

        Returns:
            Saved license entities
        """
        return await repository.create_batch(licenses)

    @staticmethod
    async def add_time(
        application_id: uuid.UUID,
        delta: ExpiryDelta,
        repository: "LicenseRepository",  # noqa: F821
        now: Optional[datetime] = None,
    ) -> int:
        """
        Add time to every unused license of an application.

        Args:
            application_id: Application UUID
            delta: Time to add
            repository: License repository
            now: Current instant

        Returns:
            Number of licenses updated
        """
        now = now or datetime.now(timezone.utc)
        return await repository.update_unused(
            application_id, lambda license: license.add_time(delta, now)
        )

    @staticmethod
    async def ban_license(
        license: License,
        reason: Optional[str],
        repository: "LicenseRepository",  # noqa: F821
    ) -> License:
        """
        Ban a license.

        Args:
            license: License entity to ban
            reason: Optional ban reason
            repository: License repository

        Returns:
            Banned license entity
        """
        banned = license.ban(reason)
        return await repository.save(banned)
