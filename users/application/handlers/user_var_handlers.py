"""
User variable handlers.
"""
from typing import List, Optional

from applications.domain.services import OwnershipGuard
from applications.ports.application_repository import ApplicationRepository
from core.domain.exceptions import UserVarNotFoundError
from core.infrastructure.events import event_bus
from users.application.commands.user_vars import DeleteUserVarCommand, SetUserVarCommand
from users.application.dto.app_user_dto import UserVarDTO
from users.domain.events import UserVarDeleted, UserVarSet
from users.domain.user_var import UserVar
from users.ports.app_user_repository import AppUserRepository
from users.ports.user_var_repository import UserVarRepository


class _UserVarHandler:
    """Shared wiring for handlers that act on one user's variables."""

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

    async def _resolve(self, owner_id, application_id, user_id):
        application = await self.guard.require_application(owner_id, application_id)
        app_user = await OwnershipGuard.require_app_user(
            application, user_id, self.app_user_repository
        )
        return application, app_user


class SetUserVarHandler(_UserVarHandler):
    """Handler for SetUserVarCommand."""

    async def handle(self, command: SetUserVarCommand) -> UserVarDTO:
        """
        Create or overwrite a variable.

        ``read_only`` is recorded on the variable; an existing read-only
        variable is still overwritten.

        Raises:
            ApplicationNotFoundError: If the application is not the caller's
            AppUserNotFoundError: If the user is not in that application
            InvalidInputError: If the name or value is missing
        """
        application, app_user = await self._resolve(
            command.owner_id, command.application_id, command.user_id
        )
        user_var = UserVar.create(
            user_id=app_user.id,
            name=command.name,
            value=command.value,
            read_only=command.read_only,
        )
        saved = await self.user_var_repository.upsert(user_var)

        await event_bus.publish(
            UserVarSet(
                application_id=application.id,
                user_id=app_user.id,
                name=saved.name,
                read_only=saved.read_only,
            )
        )
        return UserVarDTO.from_entity(saved)


class DeleteUserVarHandler(_UserVarHandler):
    """Handler for DeleteUserVarCommand."""

    async def handle(self, command: DeleteUserVarCommand) -> None:
        """
        Delete a variable by name.

        Raises:
            UserVarNotFoundError: If the user has no variable with that name
        """
        application, app_user = await self._resolve(
            command.owner_id, command.application_id, command.user_id
        )
        deleted = await self.user_var_repository.delete(app_user.id, command.name)
        if not deleted:
            raise UserVarNotFoundError()

        await event_bus.publish(
            UserVarDeleted(application_id=application.id, user_id=app_user.id, name=command.name)
        )


class ListUserVarsHandler(_UserVarHandler):
    """Handler listing one user's variables."""

    async def handle(self, owner_id: Optional[int], application_id, user_id) -> List[UserVarDTO]:
        """List variables of a user in an owned application."""
        _, app_user = await self._resolve(owner_id, application_id, user_id)
        user_vars = await self.user_var_repository.list_by_user(app_user.id)
        return [UserVarDTO.from_entity(user_var) for user_var in user_vars]
