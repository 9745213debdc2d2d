"""
Application handlers.

Handlers for creating, listing, updating and deleting applications.
"""
import logging
from typing import List, Optional

from applications.application.commands.create_application import CreateApplicationCommand
from applications.application.commands.update_application import (
    DeleteApplicationCommand,
    UpdateApplicationCommand,
)
from applications.application.dto.application_dto import ApplicationDTO
from applications.domain.application import Application
from applications.domain.services import OwnershipGuard
from applications.ports.application_repository import ApplicationRepository
from core.domain.exceptions import InvalidInputError, UnauthorizedError

logger = logging.getLogger(__name__)


class CreateApplicationHandler:
    """Handler for CreateApplicationCommand."""

    def __init__(self, application_repository: ApplicationRepository):
        """Initialize handler with repositories."""
        self.application_repository = application_repository

    async def handle(self, command: CreateApplicationCommand) -> ApplicationDTO:
        """
        Handle create application command.

        Raises:
            UnauthorizedError: If no owner is authenticated
            InvalidInputError: If the name is blank
        """
        if command.owner_id is None:
            raise UnauthorizedError()

        application = Application.create(owner_id=command.owner_id, name=command.name)
        saved = await self.application_repository.save(application)
        logger.info("Created application %s for owner %s", saved.id, command.owner_id)
        return ApplicationDTO.from_entity(saved)


class ListApplicationsHandler:
    """Handler listing the caller's applications."""

    def __init__(self, application_repository: ApplicationRepository):
        """Initialize handler with repositories."""
        self.application_repository = application_repository

    async def handle(self, owner_id: Optional[int]) -> List[ApplicationDTO]:
        """List applications owned by ``owner_id``."""
        if owner_id is None:
            raise UnauthorizedError()
        applications = await self.application_repository.list_by_owner(owner_id)
        return [ApplicationDTO.from_entity(application) for application in applications]


class UpdateApplicationHandler:
    """Handler for UpdateApplicationCommand."""

    def __init__(self, application_repository: ApplicationRepository):
        """Initialize handler with repositories."""
        self.application_repository = application_repository
        self.guard = OwnershipGuard(application_repository)

    async def handle(self, command: UpdateApplicationCommand) -> ApplicationDTO:
        """
        Handle update application command.

        Raises:
            ApplicationNotFoundError: If not owned by the caller
            InvalidInputError: If the status or name is invalid
        """
        application = await self.guard.require_application(
            command.owner_id, command.application_id
        )

        if command.status is not None:
            updated = application.set_status(command.status)
        elif command.name and command.name.strip():
            updated = application.rename(command.name)
        else:
            raise InvalidInputError("Name is required")

        saved = await self.application_repository.save(updated)
        return ApplicationDTO.from_entity(saved)


class DeleteApplicationHandler:
    """Handler for DeleteApplicationCommand."""

    def __init__(self, application_repository: ApplicationRepository):
        """Initialize handler with repositories."""
        self.application_repository = application_repository
        self.guard = OwnershipGuard(application_repository)

    async def handle(self, command: DeleteApplicationCommand) -> None:
        """
        Handle delete application command.

        Raises:
            ApplicationNotFoundError: If not owned by the caller
        """
        application = await self.guard.require_application(
            command.owner_id, command.application_id
        )
        await self.application_repository.delete(application.id)
        logger.info("Deleted application %s", application.id)
