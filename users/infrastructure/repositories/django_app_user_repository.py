"""
Django implementation of AppUserRepository port.

This adapter converts between domain entities and Django ORM models.
"""
import logging
import uuid
from datetime import datetime
from typing import List, Optional, Sequence

from asgiref.sync import sync_to_async
from django.db import IntegrityError
from django.db.models import Q

from core.domain.exceptions import UsernameTakenError
from core.infrastructure.database import scoped_transaction
from users.domain.app_user import DEFAULT_SUBSCRIPTION, AppUser
from users.domain.cohort import AppUserCohort
from users.infrastructure.models import AppUser as AppUserModel
from users.ports.app_user_repository import AppUserMutator, AppUserRepository, CohortUpdate

logger = logging.getLogger(__name__)


class DjangoAppUserRepository(AppUserRepository):
    """
    Django ORM implementation of AppUserRepository.

    This adapter:
    1. Converts Django models to domain entities
    2. Converts domain entities to Django models
    3. Implements repository interface
    """

    def _to_domain(self, model: AppUserModel) -> AppUser:
        """
        Convert Django model to domain entity.

        Args:
            model: Django AppUser model

        Returns:
            AppUser domain entity
        """
        return AppUser(
            id=model.id,
            application_id=model.application_id,
            username=model.username,
            password_hash=model.password,
            email=model.email,
            subscription=model.subscription,
            expiry=model.expiry,
            hwid=model.hwid,
            banned=model.banned,
            ban_reason=model.ban_reason,
            paused=model.paused,
            created_at=model.created_at,
        )

    def _model_fields(self, app_user: AppUser) -> dict:
        """Column values for an AppUser entity, without the primary key."""
        return {
            "application_id": app_user.application_id,
            "username": app_user.username,
            "password": app_user.password_hash,
            "email": app_user.email,
            "subscription": app_user.subscription,
            "expiry": app_user.expiry,
            "hwid": app_user.hwid,
            "banned": app_user.banned,
            "ban_reason": app_user.ban_reason,
            "paused": app_user.paused,
            "created_at": app_user.created_at,
        }

    def _scoped(self, application_id: uuid.UUID):
        # pylint: disable=no-member
        return AppUserModel.objects.filter(application_id=application_id)

    def _cohort_queryset(self, application_id: uuid.UUID, cohort: AppUserCohort, now: datetime):
        """Translate cohort filters into a queryset."""
        queryset = self._scoped(application_id)
        if not cohort.username.is_any:
            queryset = queryset.filter(username=cohort.username.value)
        if not cohort.subscription.is_any:
            queryset = queryset.filter(subscription=cohort.subscription.value)
        if cohort.active_only:
            queryset = queryset.filter(Q(expiry__gte=now) | Q(expiry__isnull=True))
        return queryset

    @sync_to_async
    def save(self, app_user: AppUser) -> AppUser:
        """
        Save an app user entity.

        Args:
            app_user: AppUser entity to save

        Returns:
            Saved AppUser entity

        Raises:
            UsernameTakenError: If the username is used in the application
        """
        try:
            with scoped_transaction():
                # pylint: disable=no-member
                model, _ = AppUserModel.objects.update_or_create(
                    id=app_user.id, defaults=self._model_fields(app_user)
                )
        except IntegrityError as e:
            logger.info(
                "Username %s already taken in application %s",
                app_user.username,
                app_user.application_id,
            )
            raise UsernameTakenError() from e
        return self._to_domain(model)

    @sync_to_async
    def find_in_application(
        self, application_id: uuid.UUID, user_id: uuid.UUID
    ) -> Optional[AppUser]:
        """
        Find a user by ID within one application.

        Args:
            application_id: Application UUID
            user_id: AppUser UUID

        Returns:
            AppUser entity or None if not found
        """
        model = self._scoped(application_id).filter(id=user_id).first()
        return self._to_domain(model) if model else None

    @sync_to_async
    def find_by_username(self, application_id: uuid.UUID, username: str) -> Optional[AppUser]:
        """
        Find a user by username within one application.

        Args:
            application_id: Application UUID
            username: Username

        Returns:
            AppUser entity or None if not found
        """
        model = self._scoped(application_id).filter(username=username).first()
        return self._to_domain(model) if model else None

    @sync_to_async
    def list_by_application(self, application_id: uuid.UUID) -> List[AppUser]:
        """
        List an application's users, newest first.

        Args:
            application_id: Application UUID

        Returns:
            List of AppUser entities
        """
        models = self._scoped(application_id).order_by("-created_at")
        return [self._to_domain(model) for model in models]

    @sync_to_async
    def update_cohort(
        self,
        application_id: uuid.UUID,
        cohort: AppUserCohort,
        now: datetime,
        mutator: AppUserMutator,
    ) -> CohortUpdate:
        """
        Apply ``mutator`` to every user of the cohort.

        Rows stay locked until the transaction commits, so concurrent
        extend and subtract calls on the same users are serialized.

        Args:
            application_id: Application UUID
            cohort: Cohort filters
            now: Instant the cohort is evaluated at
            mutator: Pure function computing the new user state

        Returns:
            CohortUpdate with matched and written counts
        """
        with scoped_transaction():
            models = list(
                self._cohort_queryset(application_id, cohort, now).select_for_update()
            )
            changed = []
            for model in models:
                updated = mutator(self._to_domain(model))
                if updated is None:
                    continue
                model.expiry = updated.expiry
                changed.append(model)
            if changed:
                # pylint: disable=no-member
                AppUserModel.objects.bulk_update(changed, ["expiry"])

        logger.debug(
            "Cohort %s of %s: %d matched, %d written",
            cohort,
            application_id,
            len(models),
            len(changed),
        )
        return CohortUpdate(matched=len(models), updated=len(changed))

    @sync_to_async
    def set_paused(
        self, application_id: uuid.UUID, user_ids: Sequence[uuid.UUID], paused: bool
    ) -> int:
        """
        Set the paused flag on exactly the listed users.

        Returns:
            Number of users updated
        """
        with scoped_transaction():
            return (
                self._scoped(application_id)
                .filter(id__in=list(user_ids))
                .update(paused=paused)
            )

    @sync_to_async
    def reset_hwid(
        self, application_id: uuid.UUID, user_ids: Optional[Sequence[uuid.UUID]] = None
    ) -> int:
        """
        Clear the hardware binding of the listed users, or of all users.

        Returns:
            Number of users updated
        """
        queryset = self._scoped(application_id)
        if user_ids:
            queryset = queryset.filter(id__in=list(user_ids))
        with scoped_transaction():
            return queryset.update(hwid=None)

    @sync_to_async
    def delete_subscription(
        self, application_id: uuid.UUID, user_id: uuid.UUID
    ) -> Optional[AppUser]:
        """
        Reset a user's subscription to ``default`` and expiry to None.

        Returns:
            Updated AppUser, or None if the user is not in the application
        """
        queryset = self._scoped(application_id).filter(id=user_id)
        with scoped_transaction():
            if not queryset.update(subscription=DEFAULT_SUBSCRIPTION, expiry=None):
                return None
            model = queryset.get()
        return self._to_domain(model)

    @sync_to_async
    def delete_expired(self, application_id: uuid.UUID, now: datetime) -> int:
        """
        Delete users whose expiry is strictly before ``now``.

        Returns:
            Number of users deleted
        """
        queryset = self._scoped(application_id).filter(expiry__isnull=False, expiry__lt=now)
        with scoped_transaction():
            _, by_model = queryset.delete()
        return by_model.get(AppUserModel._meta.label, 0)

    @sync_to_async
    def delete_ids(self, application_id: uuid.UUID, user_ids: Sequence[uuid.UUID]) -> int:
        """
        Delete the listed users of an application.

        Returns:
            Number of users deleted
        """
        queryset = self._scoped(application_id).filter(id__in=list(user_ids))
        with scoped_transaction():
            _, by_model = queryset.delete()
        return by_model.get(AppUserModel._meta.label, 0)
