"""
Moderation handlers for application users.

Handlers for ban, pause/unpause, hardware id reset and subscription reset.
"""
import logging

from applications.domain.services import OwnershipGuard, parse_id_list, parse_uuid
from applications.ports.application_repository import ApplicationRepository
from core.domain.exceptions import InvalidInputError
from core.infrastructure.events import event_bus
from core.metrics import app_user_state_changes_total
from users.application.commands.moderate_users import (
    BanAppUserCommand,
    DeleteSubscriptionCommand,
    PauseAppUsersCommand,
    ResetHwidCommand,
)
from users.application.dto.app_user_dto import AppUserDTO, UserCountDTO
from users.domain.events import AppUserBanned, AppUsersPauseChanged, HwidReset, SubscriptionDeleted
from users.domain.services import AppUserModerator
from users.ports.app_user_repository import AppUserRepository

logger = logging.getLogger(__name__)

PAUSE_ACTIONS = {"pause": True, "unpause": False}


class BanAppUserHandler:
    """Handler for BanAppUserCommand."""

    def __init__(
        self,
        application_repository: ApplicationRepository,
        app_user_repository: AppUserRepository,
    ):
        """Initialize handler with repositories."""
        self.guard = OwnershipGuard(application_repository)
        self.app_user_repository = app_user_repository

    async def handle(self, command: BanAppUserCommand) -> AppUserDTO:
        """
        Handle ban app user command.

        Raises:
            ApplicationNotFoundError: If the application is not the caller's
            AppUserNotFoundError: If the user is not in that application
        """
        application = await self.guard.require_application(
            command.owner_id, command.application_id
        )
        app_user = await OwnershipGuard.require_app_user(
            application, command.user_id, self.app_user_repository
        )

        banned = await AppUserModerator.ban(app_user, command.reason, self.app_user_repository)

        app_user_state_changes_total.labels(
            application_id=str(application.id), operation="ban"
        ).inc()
        await event_bus.publish(
            AppUserBanned(
                application_id=application.id, user_id=banned.id, reason=banned.ban_reason
            )
        )
        return AppUserDTO.from_entity(banned)


class PauseAppUsersHandler:
    """Handler for PauseAppUsersCommand."""

    def __init__(
        self,
        application_repository: ApplicationRepository,
        app_user_repository: AppUserRepository,
    ):
        """Initialize handler with repositories."""
        self.guard = OwnershipGuard(application_repository)
        self.app_user_repository = app_user_repository

    async def handle(self, command: PauseAppUsersCommand) -> UserCountDTO:
        """
        Handle pause app users command.

        Raises:
            ApplicationNotFoundError: If the application is not the caller's
            InvalidInputError: If the action is unknown or no ids are given
        """
        application = await self.guard.require_application(
            command.owner_id, command.application_id
        )
        if command.action not in PAUSE_ACTIONS:
            raise InvalidInputError("Action must be pause or unpause")
        paused = PAUSE_ACTIONS[command.action]
        user_ids = parse_id_list(command.user_ids, "userIds")

        updated = await AppUserModerator.set_paused(
            application.id, user_ids, paused, self.app_user_repository
        )

        app_user_state_changes_total.labels(
            application_id=str(application.id), operation=command.action
        ).inc(updated)
        await event_bus.publish(
            AppUsersPauseChanged(application_id=application.id, paused=paused, updated=updated)
        )
        return UserCountDTO(count=updated)


class ResetHwidHandler:
    """Handler for ResetHwidCommand."""

    def __init__(
        self,
        application_repository: ApplicationRepository,
        app_user_repository: AppUserRepository,
    ):
        """Initialize handler with repositories."""
        self.guard = OwnershipGuard(application_repository)
        self.app_user_repository = app_user_repository

    async def handle(self, command: ResetHwidCommand) -> UserCountDTO:
        """
        Handle reset hwid command. No ids resets every user of the application.

        Raises:
            ApplicationNotFoundError: If the application is not the caller's
        """
        application = await self.guard.require_application(
            command.owner_id, command.application_id
        )
        user_ids = [parse_uuid(user_id, "userIds") for user_id in command.user_ids or []]

        updated = await AppUserModerator.reset_hwid(
            application.id, user_ids, self.app_user_repository
        )

        app_user_state_changes_total.labels(
            application_id=str(application.id), operation="reset_hwid"
        ).inc(updated)
        await event_bus.publish(
            HwidReset(application_id=application.id, updated=updated, all_users=not user_ids)
        )
        return UserCountDTO(count=updated)


class DeleteSubscriptionHandler:
    """Handler for DeleteSubscriptionCommand."""

    def __init__(
        self,
        application_repository: ApplicationRepository,
        app_user_repository: AppUserRepository,
    ):
        """Initialize handler with repositories."""
        self.guard = OwnershipGuard(application_repository)
        self.app_user_repository = app_user_repository

    async def handle(self, command: DeleteSubscriptionCommand) -> AppUserDTO:
        """
        Handle delete subscription command.

        Raises:
            ApplicationNotFoundError: If the application is not the caller's
            AppUserNotFoundError: If the user is not in that application
        """
        application = await self.guard.require_application(
            command.owner_id, command.application_id
        )
        app_user = await OwnershipGuard.require_app_user(
            application, command.user_id, self.app_user_repository
        )

        updated = await AppUserModerator.delete_subscription(app_user, self.app_user_repository)

        app_user_state_changes_total.labels(
            application_id=str(application.id), operation="delete_subscription"
        ).inc()
        await event_bus.publish(
            SubscriptionDeleted(application_id=application.id, user_id=updated.id)
        )
        return AppUserDTO.from_entity(updated)
