"""
Django implementation of LicenseRepository port.

This adapter converts between domain entities and Django ORM models.
"""
import logging
import uuid
from typing import List, Optional, Sequence

from asgiref.sync import sync_to_async

from core.infrastructure.database import scoped_transaction
from licenses.domain.license import License
from licenses.infrastructure.models import License as LicenseModel
from licenses.ports.license_repository import LicenseMutator, LicenseRepository

logger = logging.getLogger(__name__)

_TIME_FIELDS = ["expiry", "duration"]


class DjangoLicenseRepository(LicenseRepository):
    """
    Django ORM implementation of LicenseRepository.

    This adapter:
    1. Converts Django models to domain entities
    2. Converts domain entities to Django models
    3. Implements repository interface
    """

    def _to_domain(self, model: LicenseModel) -> License:
        """
        Convert Django model to domain entity.

        Args:
            model: Django License model

        Returns:
            License domain entity
        """
        return License(
            id=model.id,
            application_id=model.application_id,
            key=model.key,
            level=model.level,
            duration=model.duration,
            expiry=model.expiry,
            used=model.used,
            banned=model.banned,
            ban_reason=model.ban_reason,
            note=model.note,
            created_at=model.created_at,
        )

    def _to_model(self, license: License) -> LicenseModel:
        """
        Convert domain entity to an unsaved Django model.

        Args:
            license: License domain entity

        Returns:
            Django License model
        """
        return LicenseModel(
            id=license.id,
            application_id=license.application_id,
            key=license.key,
            level=license.level,
            duration=license.duration,
            expiry=license.expiry,
            used=license.used,
            banned=license.banned,
            ban_reason=license.ban_reason,
            note=license.note,
            created_at=license.created_at,
        )

    @sync_to_async
    def save(self, license: License) -> License:
        """
        Save a license entity.

        Args:
            license: License entity to save

        Returns:
            Saved license entity
        """
        model = self._to_model(license)
        # pylint: disable=no-member
        model, _ = LicenseModel.objects.update_or_create(
            id=license.id,
            defaults={
                field.attname: getattr(model, field.attname)
                for field in LicenseModel._meta.concrete_fields
                if not field.primary_key
            },
        )
        return self._to_domain(model)

    @sync_to_async
    def create_batch(self, licenses: Sequence[License]) -> List[License]:
        """
        Persist a batch of new licenses in one transaction.

        Args:
            licenses: New License entities

        Returns:
            Saved license entities
        """
        with scoped_transaction():
            # pylint: disable=no-member
            models = LicenseModel.objects.bulk_create(
                [self._to_model(license) for license in licenses]
            )
        return [self._to_domain(model) for model in models]

    @sync_to_async
    def find_in_application(
        self, application_id: uuid.UUID, license_id: uuid.UUID
    ) -> Optional[License]:
        """
        Find a license by ID within one application.

        Args:
            application_id: Application UUID
            license_id: License UUID

        Returns:
            License entity or None if not found
        """
        # pylint: disable=no-member
        model = LicenseModel.objects.filter(
            id=license_id, application_id=application_id
        ).first()
        return self._to_domain(model) if model else None

    @sync_to_async
    def list_by_application(self, application_id: uuid.UUID) -> List[License]:
        """
        List an application's licenses, newest first.

        Args:
            application_id: Application UUID

        Returns:
            List of License entities
        """
        # pylint: disable=no-member
        models = LicenseModel.objects.filter(application_id=application_id).order_by(
            "-created_at"
        )
        return [self._to_domain(model) for model in models]

    @sync_to_async
    def update_unused(self, application_id: uuid.UUID, mutator: LicenseMutator) -> int:
        """
        Apply ``mutator`` to every unused license of an application.

        Rows are locked for the duration of the transaction so a
        concurrent add-time waits instead of overwriting this one.

        Args:
            application_id: Application UUID
            mutator: Pure function computing the new license state

        Returns:
            Number of licenses written
        """
        with scoped_transaction():
            # pylint: disable=no-member
            cohort = LicenseModel.objects.select_for_update().filter(
                application_id=application_id, used=False
            )
            changed = []
            for model in cohort:
                updated = mutator(self._to_domain(model))
                if updated is None:
                    continue
                model.expiry = updated.expiry
                model.duration = updated.duration
                changed.append(model)
            if changed:
                LicenseModel.objects.bulk_update(changed, _TIME_FIELDS)

        logger.debug("Rewrote time on %d unused license(s) of %s", len(changed), application_id)
        return len(changed)

    @sync_to_async
    def delete_where(
        self,
        application_id: uuid.UUID,
        used: Optional[bool] = None,
        license_ids: Optional[Sequence[uuid.UUID]] = None,
    ) -> int:
        """
        Delete licenses of an application by used flag or by ids.

        Args:
            application_id: Application UUID
            used: Select by used flag when not None
            license_ids: Select by ids when not None

        Returns:
            Number of licenses deleted
        """
        # pylint: disable=no-member
        queryset = LicenseModel.objects.filter(application_id=application_id)
        if used is not None:
            queryset = queryset.filter(used=used)
        if license_ids is not None:
            queryset = queryset.filter(id__in=list(license_ids))
        with scoped_transaction():
            deleted, _ = queryset.delete()
        return deleted
