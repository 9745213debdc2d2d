"""
Application domain services.

The ownership guard runs before every mutation: the application must
belong to the requesting owner, and a named license or user must
belong to that application. Failures are always reported as
"not found" so that foreign ids are indistinguishable from absent ones.
"""

import logging
import uuid
from typing import List, Optional, Sequence

from applications.domain.application import Application
from applications.ports.application_repository import ApplicationRepository
from core.domain.exceptions import (
    AppUserNotFoundError,
    ApplicationNotFoundError,
    InvalidInputError,
    LicenseNotFoundError,
    UnauthorizedError,
)
from core.domain.value_objects import DeleteMode

logger = logging.getLogger(__name__)


def parse_uuid(value, field: str) -> uuid.UUID:
    """Coerce an identifier to UUID or fail as invalid input."""
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except (TypeError, ValueError, AttributeError):
        raise InvalidInputError(f"{field} must be a valid UUID") from None


def parse_id_list(values, field: str) -> List[uuid.UUID]:
    """Coerce a non-empty list of identifiers to UUIDs."""
    if not values:
        raise InvalidInputError(f"{field} must list at least one id")
    return [parse_uuid(value, field) for value in values]


def parse_delete_mode(value: Optional[str], allowed: Sequence[DeleteMode]) -> DeleteMode:
    """
    Resolve a bulk delete mode.

    An absent or unknown mode is rejected rather than treated as
    "delete everything".

    Raises:
        InvalidInputError: If the mode is absent or not in ``allowed``
    """
    try:
        mode = DeleteMode(value)
    except ValueError:
        mode = None
    if mode not in allowed:
        choices = ", ".join(str(choice) for choice in allowed)
        raise InvalidInputError(f"Delete mode must be one of: {choices}")
    return mode


class OwnershipGuard:
    """Domain service scoping every operation to the caller's application."""

    def __init__(self, application_repository: ApplicationRepository):
        """Initialize guard with the application repository."""
        self.application_repository = application_repository

    async def require_application(
        self, owner_id: Optional[int], application_id: uuid.UUID
    ) -> Application:
        """
        Resolve an application owned by the caller.

        Args:
            owner_id: Authenticated owner id (None when unauthenticated)
            application_id: Application UUID

        Returns:
            Application entity

        Raises:
            UnauthorizedError: If no owner is authenticated
            ApplicationNotFoundError: If absent or owned by someone else
        """
        if owner_id is None:
            raise UnauthorizedError()
        if application_id is None:
            raise InvalidInputError("App ID is required")

        application = await self.application_repository.find_owned(
            parse_uuid(application_id, "appId"), owner_id
        )
        if not application:
            logger.info(
                "Ownership check failed for application %s (owner %s)", application_id, owner_id
            )
            raise ApplicationNotFoundError()
        return application

    @staticmethod
    async def require_license(application: Application, license_id, license_repository):
        """
        Resolve a license inside an already-guarded application.

        Raises:
            LicenseNotFoundError: If the license is not in the application
        """
        license = await license_repository.find_in_application(
            application.id, parse_uuid(license_id, "licenseId")
        )
        if not license:
            raise LicenseNotFoundError()
        return license

    @staticmethod
    async def require_app_user(application: Application, user_id, app_user_repository):
        """
        Resolve an application user inside an already-guarded application.

        Raises:
            AppUserNotFoundError: If the user is not in the application
        """
        app_user = await app_user_repository.find_in_application(
            application.id, parse_uuid(user_id, "userId")
        )
        if not app_user:
            raise AppUserNotFoundError()
        return app_user
