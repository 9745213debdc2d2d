"""
AppUser repository port (interface).

This defines the contract for application user persistence operations.
Implementations are in the infrastructure layer.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, List, Optional, Sequence
import uuid

from users.domain.app_user import AppUser
from users.domain.cohort import AppUserCohort

AppUserMutator = Callable[[AppUser], Optional[AppUser]]


@dataclass(frozen=True)
class CohortUpdate:
    """Outcome of a cohort rewrite: users selected and users written."""

    matched: int
    updated: int


class AppUserRepository(ABC):
    """
    Abstract repository for AppUser entities.

    Every method is scoped to one application.
    """

    @abstractmethod
    async def save(self, app_user: AppUser) -> AppUser:
        """
        Save an app user entity.

        Args:
            app_user: AppUser entity to save

        Returns:
            Saved AppUser entity

        Raises:
            UsernameTakenError: If the username is used in the application
        """
        pass

    @abstractmethod
    async def find_in_application(
        self, application_id: uuid.UUID, user_id: uuid.UUID
    ) -> Optional[AppUser]:
        """
        Find a user by ID within one application.

        Args:
            application_id: Application UUID
            user_id: AppUser UUID

        Returns:
            AppUser entity or None if not found in that application
        """
        pass

    @abstractmethod
    async def find_by_username(
        self, application_id: uuid.UUID, username: str
    ) -> Optional[AppUser]:
        """
        Find a user by username within one application.

        Args:
            application_id: Application UUID
            username: Username

        Returns:
            AppUser entity or None if not found
        """
        pass

    @abstractmethod
    async def list_by_application(self, application_id: uuid.UUID) -> List[AppUser]:
        """
        List an application's users, newest first.

        Args:
            application_id: Application UUID

        Returns:
            List of AppUser entities
        """
        pass

    @abstractmethod
    async def update_cohort(
        self,
        application_id: uuid.UUID,
        cohort: AppUserCohort,
        now: datetime,
        mutator: AppUserMutator,
    ) -> CohortUpdate:
        """
        Apply ``mutator`` to every user of the cohort.

        The cohort is locked and rewritten in one transaction. The
        mutator returns the new entity, or None to leave a user as is.

        Args:
            application_id: Application UUID
            cohort: Cohort filters
            now: Instant the cohort is evaluated at
            mutator: Pure function computing the new user state

        Returns:
            CohortUpdate with matched and written counts
        """
        pass

    @abstractmethod
    async def set_paused(
        self, application_id: uuid.UUID, user_ids: Sequence[uuid.UUID], paused: bool
    ) -> int:
        """
        Set the paused flag on exactly the listed users.

        Returns:
            Number of users updated
        """
        pass

    @abstractmethod
    async def reset_hwid(
        self, application_id: uuid.UUID, user_ids: Optional[Sequence[uuid.UUID]] = None
    ) -> int:
        """
        Clear the hardware binding of the listed users, or of all users.

        Returns:
            Number of users updated
        """
        pass

    @abstractmethod
    async def delete_subscription(
        self, application_id: uuid.UUID, user_id: uuid.UUID
    ) -> Optional[AppUser]:
        """
        Reset a user's subscription to ``default`` and expiry to None.

        Both fields are written in a single update.

        Returns:
            Updated AppUser, or None if the user is not in the application
        """
        pass

    @abstractmethod
    async def delete_expired(self, application_id: uuid.UUID, now: datetime) -> int:
        """
        Delete users whose expiry is strictly before ``now``.

        Unlimited (None expiry) users are never deleted.

        Returns:
            Number of users deleted
        """
        pass

    @abstractmethod
    async def delete_ids(self, application_id: uuid.UUID, user_ids: Sequence[uuid.UUID]) -> int:
        """
        Delete the listed users of an application.

        Returns:
            Number of users deleted
        """
        pass
