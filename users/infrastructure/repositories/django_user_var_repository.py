"""
Django implementation of UserVarRepository port.
"""
import uuid
from collections import defaultdict
from typing import Dict, List, Sequence

from asgiref.sync import sync_to_async

from users.domain.user_var import UserVar
from users.infrastructure.models import UserVar as UserVarModel
from users.ports.user_var_repository import UserVarRepository


class DjangoUserVarRepository(UserVarRepository):
    """Django ORM implementation of UserVarRepository."""

    def _to_domain(self, model: UserVarModel) -> UserVar:
        """Convert Django model to domain entity."""
        return UserVar(
            id=model.id,
            user_id=model.user_id,
            name=model.name,
            value=model.value,
            read_only=model.read_only,
            created_at=model.created_at,
        )

    @sync_to_async
    def upsert(self, user_var: UserVar) -> UserVar:
        """
        Create a variable or overwrite the one with the same name.

        Args:
            user_var: UserVar entity

        Returns:
            Stored UserVar entity
        """
        # pylint: disable=no-member
        model, _ = UserVarModel.objects.update_or_create(
            user_id=user_var.user_id,
            name=user_var.name,
            defaults={"value": user_var.value, "read_only": user_var.read_only},
        )
        return self._to_domain(model)

    @sync_to_async
    def list_by_user(self, user_id: uuid.UUID) -> List[UserVar]:
        """List a user's variables ordered by name."""
        # pylint: disable=no-member
        models = UserVarModel.objects.filter(user_id=user_id).order_by("name")
        return [self._to_domain(model) for model in models]

    @sync_to_async
    def list_by_users(self, user_ids: Sequence[uuid.UUID]) -> Dict[uuid.UUID, List[UserVar]]:
        """List variables of several users, keyed by user id."""
        grouped: Dict[uuid.UUID, List[UserVar]] = defaultdict(list)
        # pylint: disable=no-member
        models = UserVarModel.objects.filter(user_id__in=list(user_ids)).order_by("name")
        for model in models:
            grouped[model.user_id].append(self._to_domain(model))
        return dict(grouped)

    @sync_to_async
    def delete(self, user_id: uuid.UUID, name: str) -> bool:
        """
        Delete a user's variable by name.

        Returns:
            True if a variable was deleted
        """
        # pylint: disable=no-member
        deleted, _ = UserVarModel.objects.filter(user_id=user_id, name=name).delete()
        return deleted > 0
