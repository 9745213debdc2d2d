"""
CreateLicenseBatchHandler.

Handles the create license batch command.
"""

import logging

from applications.domain.services import OwnershipGuard
from applications.ports.application_repository import ApplicationRepository
from core.domain.duration import ExpiryDelta
from core.infrastructure.events import event_bus
from core.metrics import licenses_created_total
from licenses.application.commands.create_license_batch import CreateLicenseBatchCommand
from licenses.application.dto.license_dto import LicenseBatchDTO, LicenseDTO
from licenses.domain.events import LicensesCreated
from licenses.domain.services import LicenseLifecycleManager
from licenses.ports.license_repository import LicenseRepository

logger = logging.getLogger(__name__)


class CreateLicenseBatchHandler:
    """Handler for CreateLicenseBatchCommand."""

    def __init__(
        self,
        application_repository: ApplicationRepository,
        license_repository: LicenseRepository,
    ):
        """Initialize handler with repositories."""
        self.guard = OwnershipGuard(application_repository)
        self.license_repository = license_repository

    async def handle(self, command: CreateLicenseBatchCommand) -> LicenseBatchDTO:
        """
        Handle create license batch command.

        The whole batch is validated and built before anything is
        written, then stored in a single transaction.

        Args:
            command: CreateLicenseBatchCommand

        Returns:
            LicenseBatchDTO with the created licenses

        Raises:
            UnauthorizedError: If no owner is authenticated
            ApplicationNotFoundError: If the application is not the caller's
            InvalidInputError: If amount, mask, duration or unit is missing or invalid
        """
        application = await self.guard.require_application(
            command.owner_id, command.application_id
        )

        delta = ExpiryDelta(amount=command.duration, unit=command.expiry_unit)
        licenses = LicenseLifecycleManager.build_batch(
            application_id=application.id,
            amount=command.amount,
            mask=command.mask,
            delta=delta,
            level=command.level,
            note=command.note,
            lowercase=command.lowercase_letters,
            uppercase=command.uppercase_letters,
        )

        saved = await LicenseLifecycleManager.create_batch(licenses, self.license_repository)

        licenses_created_total.labels(application_id=str(application.id)).inc(len(saved))
        logger.info(
            "Created %d license(s) for application %s (%s)", len(saved), application.id, delta
        )

        await event_bus.publish(
            LicensesCreated(
                application_id=application.id,
                count=len(saved),
                level=saved[0].level,
                duration=saved[0].duration,
                expiry=saved[0].expiry,
            )
        )

        return LicenseBatchDTO(
            count=len(saved),
            licenses=[LicenseDTO.from_entity(license) for license in saved],
        )
