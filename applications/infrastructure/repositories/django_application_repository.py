"""
Django implementation of ApplicationRepository port.

This adapter converts between domain entities and Django ORM models.
"""

import uuid
from typing import List, Optional

from asgiref.sync import sync_to_async

from applications.domain.application import Application
from applications.infrastructure.models import Application as ApplicationModel
from applications.ports.application_repository import ApplicationRepository
from core.domain.value_objects import ApplicationStatus


class DjangoApplicationRepository(ApplicationRepository):
    """
    Django ORM implementation of ApplicationRepository.

    This adapter:
    1. Converts Django models to domain entities
    2. Converts domain entities to Django models
    3. Implements repository interface
    """

    def _to_domain(self, model: ApplicationModel) -> Application:
        """
        Convert Django model to domain entity.

        Args:
            model: Django Application model

        Returns:
            Application domain entity
        """
        return Application(
            id=model.id,
            owner_id=model.owner_id,
            name=model.name,
            status=ApplicationStatus(model.status),
            secret=model.secret,
            version=model.version,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, application: Application) -> ApplicationModel:
        """
        Convert domain entity to Django model.

        Args:
            application: Application domain entity

        Returns:
            Django Application model
        """
        # pylint: disable=no-member
        model, created = ApplicationModel.objects.get_or_create(
            id=application.id,
            defaults={
                "owner_id": application.owner_id,
                "name": application.name,
                "status": application.status.value,
                "secret": application.secret,
                "version": application.version,
            },
        )
        if not created:
            model.name = application.name
            model.status = application.status.value
            model.version = application.version
        return model

    @sync_to_async
    def save(self, application: Application) -> Application:
        """
        Save an application entity.

        Args:
            application: Application entity to save

        Returns:
            Saved application entity
        """
        model = self._to_model(application)
        model.save()
        return self._to_domain(model)

    @sync_to_async
    def find_owned(self, application_id: uuid.UUID, owner_id: int) -> Optional[Application]:
        """
        Find an application by ID, scoped to its owner.

        Args:
            application_id: Application UUID
            owner_id: Owning account id

        Returns:
            Application entity or None if not found
        """
        # pylint: disable=no-member
        model = ApplicationModel.objects.filter(id=application_id, owner_id=owner_id).first()
        return self._to_domain(model) if model else None

    @sync_to_async
    def list_by_owner(self, owner_id: int) -> List[Application]:
        """
        List an owner's applications, oldest first.

        Args:
            owner_id: Owning account id

        Returns:
            List of Application entities
        """
        # pylint: disable=no-member
        models = ApplicationModel.objects.filter(owner_id=owner_id).order_by("created_at")
        return [self._to_domain(model) for model in models]

    @sync_to_async
    def delete(self, application_id: uuid.UUID) -> None:
        """
        Delete an application; licenses and users cascade.

        Args:
            application_id: Application UUID
        """
        # pylint: disable=no-member
        ApplicationModel.objects.filter(id=application_id).delete()
