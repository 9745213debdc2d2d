"""
AppUser domain services.

Entitlement time changes and moderation actions applied to one user
or to a cohort of users of an application.
"""
import logging
import uuid
from datetime import datetime, timezone
from typing import Optional, Sequence

from core.domain.duration import ExpiryDelta
from core.domain.exceptions import AppUserNotFoundError, InvalidInputError
from users.domain.app_user import AppUser
from users.domain.cohort import AppUserCohort

logger = logging.getLogger(__name__)


class EntitlementTimeManager:
    """Domain service for moving application user expiries."""

    @staticmethod
    async def extend(
        application_id: uuid.UUID,
        cohort: AppUserCohort,
        delta: ExpiryDelta,
        repository: "AppUserRepository",  # noqa: F821
        now: Optional[datetime] = None,
    ):
        """
        Push the expiry of every cohort member forward.

        Finite expiries grow by ``delta``; unlimited users restart from
        ``now`` unless ``delta`` is lifetime, which leaves everyone
        unlimited.

        Args:
            application_id: Application UUID
            cohort: Users to extend
            delta: Time to add
            repository: AppUser repository
            now: Current instant

        Returns:
            CohortUpdate with matched and updated counts
        """
        now = now or datetime.now(timezone.utc)
        return await repository.update_cohort(
            application_id, cohort, now, lambda user: user.extend(delta, now)
        )

    @staticmethod
    async def subtract(
        application_id: uuid.UUID,
        cohort: AppUserCohort,
        delta: ExpiryDelta,
        repository: "AppUserRepository",  # noqa: F821
        now: Optional[datetime] = None,
    ):
        """
        Pull the expiry of every finite cohort member back, never past ``now``.

        Unlimited users are selected but skipped.

        Args:
            application_id: Application UUID
            cohort: Users to subtract from
            delta: Time to remove
            repository: AppUser repository
            now: Current instant

        Returns:
            CohortUpdate with matched and updated counts
        """
        now = now or datetime.now(timezone.utc)
        return await repository.update_cohort(
            application_id, cohort, now, lambda user: user.subtract(delta, now)
        )


class AppUserModerator:
    """Domain service for ban, pause, hardware id and subscription resets."""

    @staticmethod
    async def ban(
        app_user: AppUser,
        reason: Optional[str],
        repository: "AppUserRepository",  # noqa: F821
    ) -> AppUser:
        """Ban one user and persist it."""
        return await repository.save(app_user.ban(reason))

    @staticmethod
    async def set_paused(
        application_id: uuid.UUID,
        user_ids: Sequence[uuid.UUID],
        paused: bool,
        repository: "AppUserRepository",  # noqa: F821
    ) -> int:
        """Pause or unpause exactly ``user_ids``."""
        if not user_ids:
            raise InvalidInputError("userIds must list at least one id")
        return await repository.set_paused(application_id, user_ids, paused)

    @staticmethod
    async def reset_hwid(
        application_id: uuid.UUID,
        user_ids: Optional[Sequence[uuid.UUID]],
        repository: "AppUserRepository",  # noqa: F821
    ) -> int:
        """Clear hardware bindings of ``user_ids``, or of every user when empty."""
        return await repository.reset_hwid(application_id, list(user_ids) if user_ids else None)

    @staticmethod
    async def delete_subscription(
        app_user: AppUser,
        repository: "AppUserRepository",  # noqa: F821
    ) -> AppUser:
        """Put a user back on the default tier with unlimited expiry."""
        updated = await repository.delete_subscription(app_user.application_id, app_user.id)
        if updated is None:
            logger.warning("User %s vanished before its subscription was reset", app_user.id)
            raise AppUserNotFoundError()
        return updated
