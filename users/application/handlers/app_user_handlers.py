"""
AppUser handlers.

Handlers for creating, editing, listing and deleting application users.
"""
import logging
from datetime import datetime, timezone
from typing import List, Optional

from django.contrib.auth.hashers import make_password

from applications.domain.services import OwnershipGuard, parse_delete_mode, parse_id_list
from applications.ports.application_repository import ApplicationRepository
from core.domain.exceptions import InvalidInputError, UsernameTakenError
from core.domain.value_objects import DeleteMode
from core.infrastructure.events import event_bus
from core.metrics import app_users_created_total, app_users_deleted_total
from users.application.commands.manage_users import (
    CreateAppUserCommand,
    DeleteAppUsersCommand,
    UpdateAppUserCommand,
)
from users.application.dto.app_user_dto import AppUserDTO, UserCountDTO
from users.domain.app_user import AppUser
from users.domain.events import AppUserCreated, AppUsersDeleted, AppUserUpdated
from users.ports.app_user_repository import AppUserRepository
from users.ports.user_var_repository import UserVarRepository

logger = logging.getLogger(__name__)

_USER_DELETE_MODES = (DeleteMode.EXPIRED, DeleteMode.IDS)


class CreateAppUserHandler:
    """Handler for CreateAppUserCommand."""

    def __init__(
        self,
        application_repository: ApplicationRepository,
        app_user_repository: AppUserRepository,
    ):
        """Initialize handler with repositories."""
        self.guard = OwnershipGuard(application_repository)
        self.app_user_repository = app_user_repository

    async def handle(self, command: CreateAppUserCommand) -> AppUserDTO:
        """
        Handle create app user command.

        Args:
            command: CreateAppUserCommand

        Returns:
            Created AppUserDTO

        Raises:
            ApplicationNotFoundError: If the application is not the caller's
            InvalidInputError: If username or password is missing
            UsernameTakenError: If the username exists in the application
        """
        application = await self.guard.require_application(
            command.owner_id, command.application_id
        )
        if not command.username or not command.password:
            raise InvalidInputError("Username and password are required")

        existing = await self.app_user_repository.find_by_username(
            application.id, command.username
        )
        if existing:
            raise UsernameTakenError()

        app_user = AppUser.create(
            application_id=application.id,
            username=command.username,
            password_hash=make_password(command.password),
            email=command.email,
            subscription=command.subscription,
            expiry=command.expiry,
        )
        saved = await self.app_user_repository.save(app_user)

        app_users_created_total.labels(application_id=str(application.id)).inc()
        await event_bus.publish(
            AppUserCreated(
                application_id=application.id,
                user_id=saved.id,
                username=saved.username,
                subscription=saved.subscription,
            )
        )
        return AppUserDTO.from_entity(saved)


class UpdateAppUserHandler:
    """Handler for UpdateAppUserCommand."""

    def __init__(
        self,
        application_repository: ApplicationRepository,
        app_user_repository: AppUserRepository,
        user_var_repository: UserVarRepository,
    ):
        """Initialize handler with repositories."""
        self.guard = OwnershipGuard(application_repository)
        self.app_user_repository = app_user_repository
        self.user_var_repository = user_var_repository

    async def handle(self, command: UpdateAppUserCommand) -> AppUserDTO:
        """
        Handle update app user command.

        Raises:
            ApplicationNotFoundError: If the application is not the caller's
            AppUserNotFoundError: If the user is not in that application
            UsernameTakenError: If the new username is already used
        """
        application = await self.guard.require_application(
            command.owner_id, command.application_id
        )
        app_user = await OwnershipGuard.require_app_user(
            application, command.user_id, self.app_user_repository
        )

        if command.username and command.username != app_user.username:
            existing = await self.app_user_repository.find_by_username(
                application.id, command.username
            )
            if existing:
                raise UsernameTakenError()

        updated = app_user.update(
            username=command.username,
            password_hash=make_password(command.password) if command.password else None,
            email=command.email,
            subscription=command.subscription,
            hwid=command.hwid,
        )
        saved = await self.app_user_repository.save(updated)
        user_vars = await self.user_var_repository.list_by_user(saved.id)

        changed = [
            name
            for name in ("username", "password", "email", "subscription", "hwid")
            if getattr(command, name) is not None
        ]
        await event_bus.publish(
            AppUserUpdated(
                application_id=application.id, user_id=saved.id, fields=",".join(changed)
            )
        )
        return AppUserDTO.from_entity(saved, user_vars)


class ListAppUsersHandler:
    """Handler listing an application's users with their variables."""

    def __init__(
        self,
        application_repository: ApplicationRepository,
        app_user_repository: AppUserRepository,
        user_var_repository: UserVarRepository,
    ):
        """Initialize handler with repositories."""
        self.guard = OwnershipGuard(application_repository)
        self.app_user_repository = app_user_repository
        self.user_var_repository = user_var_repository

    async def handle(self, owner_id: Optional[int], application_id) -> List[AppUserDTO]:
        """List users of an owned application, newest first."""
        application = await self.guard.require_application(owner_id, application_id)
        app_users = await self.app_user_repository.list_by_application(application.id)
        user_vars = await self.user_var_repository.list_by_users([user.id for user in app_users])
        return [AppUserDTO.from_entity(user, user_vars.get(user.id, [])) for user in app_users]


class DeleteAppUsersHandler:
    """Handler for DeleteAppUsersCommand."""

    def __init__(
        self,
        application_repository: ApplicationRepository,
        app_user_repository: AppUserRepository,
    ):
        """Initialize handler with repositories."""
        self.guard = OwnershipGuard(application_repository)
        self.app_user_repository = app_user_repository

    async def handle(
        self, command: DeleteAppUsersCommand, now: Optional[datetime] = None
    ) -> UserCountDTO:
        """
        Handle delete app users command.

        ``expired`` removes users whose expiry is strictly before now and
        never touches unlimited users.

        Raises:
            ApplicationNotFoundError: If the application is not the caller's
            InvalidInputError: If no recognised mode is given
        """
        application = await self.guard.require_application(
            command.owner_id, command.application_id
        )
        mode = parse_delete_mode(command.mode, _USER_DELETE_MODES)

        if mode is DeleteMode.EXPIRED:
            deleted = await self.app_user_repository.delete_expired(
                application.id, now or datetime.now(timezone.utc)
            )
        else:
            deleted = await self.app_user_repository.delete_ids(
                application.id, parse_id_list(command.user_ids, "userIds")
            )

        app_users_deleted_total.labels(application_id=str(application.id), mode=str(mode)).inc(
            deleted
        )
        logger.info("Deleted %d %s user(s) of %s", deleted, mode, application.id)
        await event_bus.publish(
            AppUsersDeleted(application_id=application.id, mode=str(mode), deleted=deleted)
        )
        return UserCountDTO(count=deleted)
