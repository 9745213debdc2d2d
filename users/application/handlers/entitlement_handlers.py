"""
Entitlement time handlers.

Handlers for extending and subtracting the expiry of user cohorts.
"""
import logging

from applications.domain.services import OwnershipGuard
from applications.ports.application_repository import ApplicationRepository
from core.domain.duration import ExpiryDelta
from core.infrastructure.events import event_bus
from core.metrics import app_user_time_updates_total
from users.application.commands.change_user_time import (
    ExtendAppUsersCommand,
    SubtractAppUserTimeCommand,
)
from users.application.dto.app_user_dto import UserCountDTO
from users.domain.events import AppUsersTimeChanged
from users.domain.services import EntitlementTimeManager
from users.ports.app_user_repository import AppUserRepository

logger = logging.getLogger(__name__)


async def _record(application_id, operation, command, delta, result) -> UserCountDTO:
    app_user_time_updates_total.labels(
        application_id=str(application_id), operation=operation
    ).inc(result.updated)
    logger.info(
        "%s %s on %s: %d of %d user(s) written",
        operation,
        delta,
        application_id,
        result.updated,
        result.matched,
    )
    await event_bus.publish(
        AppUsersTimeChanged(
            application_id=application_id,
            operation=operation,
            cohort=str(command.cohort),
            delta=str(delta),
            matched=result.matched,
            updated=result.updated,
        )
    )
    return UserCountDTO(count=result.updated, matched=result.matched)


class ExtendAppUsersHandler:
    """Handler for ExtendAppUsersCommand."""

    def __init__(
        self,
        application_repository: ApplicationRepository,
        app_user_repository: AppUserRepository,
    ):
        """Initialize handler with repositories."""
        self.guard = OwnershipGuard(application_repository)
        self.app_user_repository = app_user_repository

    async def handle(self, command: ExtendAppUsersCommand) -> UserCountDTO:
        """
        Handle extend app users command.

        Args:
            command: ExtendAppUsersCommand

        Returns:
            UserCountDTO with the number of users updated

        Raises:
            ApplicationNotFoundError: If the application is not the caller's
            InvalidInputError: If time or unit is missing or invalid
        """
        application = await self.guard.require_application(
            command.owner_id, command.application_id
        )
        delta = ExpiryDelta(amount=command.time, unit=command.expiry_unit)

        result = await EntitlementTimeManager.extend(
            application.id, command.cohort, delta, self.app_user_repository
        )
        return await _record(application.id, "extend", command, delta, result)


class SubtractAppUserTimeHandler:
    """Handler for SubtractAppUserTimeCommand."""

    def __init__(
        self,
        application_repository: ApplicationRepository,
        app_user_repository: AppUserRepository,
    ):
        """Initialize handler with repositories."""
        self.guard = OwnershipGuard(application_repository)
        self.app_user_repository = app_user_repository

    async def handle(self, command: SubtractAppUserTimeCommand) -> UserCountDTO:
        """
        Handle subtract app user time command.

        ``count`` reports only users whose expiry was written; unlimited
        users in the cohort are counted in ``matched`` alone.

        Args:
            command: SubtractAppUserTimeCommand

        Returns:
            UserCountDTO with updated and matched counts

        Raises:
            ApplicationNotFoundError: If the application is not the caller's
            InvalidInputError: If time or unit is missing or invalid
        """
        application = await self.guard.require_application(
            command.owner_id, command.application_id
        )
        delta = ExpiryDelta(amount=command.time, unit=command.expiry_unit)

        result = await EntitlementTimeManager.subtract(
            application.id, command.cohort, delta, self.app_user_repository
        )
        return await _record(application.id, "subtract", command, delta, result)
