"""
License lifecycle handlers.

Handlers for add-time, ban, delete and list license operations.
"""
import logging
from typing import List, Optional

from applications.domain.services import OwnershipGuard, parse_delete_mode, parse_id_list
from applications.ports.application_repository import ApplicationRepository
from core.domain.duration import ExpiryDelta
from core.domain.value_objects import DeleteMode
from core.infrastructure.events import event_bus
from core.metrics import (
    license_time_updates_total,
    licenses_banned_total,
    licenses_deleted_total,
)
from licenses.application.commands.add_license_time import AddLicenseTimeCommand
from licenses.application.commands.ban_license import BanLicenseCommand
from licenses.application.commands.delete_licenses import DeleteLicensesCommand
from licenses.application.dto.license_dto import CountDTO, LicenseDTO
from licenses.domain.events import LicenseBanned, LicensesDeleted, LicenseTimeAdded
from licenses.domain.services import LicenseLifecycleManager
from licenses.ports.license_repository import LicenseRepository

logger = logging.getLogger(__name__)

_LICENSE_DELETE_MODES = (DeleteMode.USED, DeleteMode.UNUSED, DeleteMode.IDS)


class AddLicenseTimeHandler:
    """Handler for AddLicenseTimeCommand."""

    def __init__(
        self,
        application_repository: ApplicationRepository,
        license_repository: LicenseRepository,
    ):
        """Initialize handler with repositories."""
        self.guard = OwnershipGuard(application_repository)
        self.license_repository = license_repository

    async def handle(self, command: AddLicenseTimeCommand) -> CountDTO:
        """
        Handle add license time command.

        Args:
            command: AddLicenseTimeCommand

        Returns:
            CountDTO with the number of licenses updated

        Raises:
            ApplicationNotFoundError: If the application is not the caller's
            InvalidInputError: If time or unit is missing or invalid
        """
        application = await self.guard.require_application(
            command.owner_id, command.application_id
        )
        delta = ExpiryDelta(amount=command.time, unit=command.expiry_unit)

        updated = await LicenseLifecycleManager.add_time(
            application.id, delta, self.license_repository
        )

        license_time_updates_total.labels(application_id=str(application.id)).inc(updated)
        await event_bus.publish(
            LicenseTimeAdded(application_id=application.id, updated=updated, delta=str(delta))
        )
        return CountDTO(count=updated)


class BanLicenseHandler:
    """Handler for BanLicenseCommand."""

    def __init__(
        self,
        application_repository: ApplicationRepository,
        license_repository: LicenseRepository,
    ):
        """Initialize handler with repositories."""
        self.guard = OwnershipGuard(application_repository)
        self.license_repository = license_repository

    async def handle(self, command: BanLicenseCommand) -> LicenseDTO:
        """
        Handle ban license command.

        Args:
            command: BanLicenseCommand

        Returns:
            Banned LicenseDTO

        Raises:
            ApplicationNotFoundError: If the application is not the caller's
            LicenseNotFoundError: If the license is not in that application
        """
        application = await self.guard.require_application(
            command.owner_id, command.application_id
        )
        license = await OwnershipGuard.require_license(
            application, command.license_id, self.license_repository
        )

        banned = await LicenseLifecycleManager.ban_license(
            license, command.reason, self.license_repository
        )

        licenses_banned_total.labels(application_id=str(application.id)).inc()
        await event_bus.publish(
            LicenseBanned(
                application_id=application.id,
                license_id=banned.id,
                reason=banned.ban_reason,
            )
        )
        return LicenseDTO.from_entity(banned)


class DeleteLicensesHandler:
    """Handler for DeleteLicensesCommand."""

    def __init__(
        self,
        application_repository: ApplicationRepository,
        license_repository: LicenseRepository,
    ):
        """Initialize handler with repositories."""
        self.guard = OwnershipGuard(application_repository)
        self.license_repository = license_repository

    async def handle(self, command: DeleteLicensesCommand) -> CountDTO:
        """
        Handle delete licenses command.

        Args:
            command: DeleteLicensesCommand

        Returns:
            CountDTO with the number of licenses deleted

        Raises:
            ApplicationNotFoundError: If the application is not the caller's
            InvalidInputError: If no recognised mode is given
        """
        application = await self.guard.require_application(
            command.owner_id, command.application_id
        )
        mode = parse_delete_mode(command.mode, _LICENSE_DELETE_MODES)

        if mode is DeleteMode.IDS:
            deleted = await self.license_repository.delete_where(
                application.id, license_ids=parse_id_list(command.license_ids, "licenseIds")
            )
        else:
            deleted = await self.license_repository.delete_where(
                application.id, used=mode is DeleteMode.USED
            )

        licenses_deleted_total.labels(application_id=str(application.id), mode=str(mode)).inc(
            deleted
        )
        logger.info("Deleted %d %s license(s) of %s", deleted, mode, application.id)
        await event_bus.publish(
            LicensesDeleted(application_id=application.id, mode=str(mode), deleted=deleted)
        )
        return CountDTO(count=deleted)


class ListLicensesHandler:
    """Handler listing an application's licenses."""

    def __init__(
        self,
        application_repository: ApplicationRepository,
        license_repository: LicenseRepository,
    ):
        """Initialize handler with repositories."""
        self.guard = OwnershipGuard(application_repository)
        self.license_repository = license_repository

    async def handle(self, owner_id: Optional[int], application_id) -> List[LicenseDTO]:
        """List licenses of an owned application, newest first."""
        application = await self.guard.require_application(owner_id, application_id)
        licenses = await self.license_repository.list_by_application(application.id)
        return [LicenseDTO.from_entity(license) for license in licenses]
