"""
UserVar repository port (interface).
"""
from abc import ABC, abstractmethod
from typing import Dict, List, Sequence
import uuid

from users.domain.user_var import UserVar


class UserVarRepository(ABC):
    """Abstract repository for UserVar entities."""

    @abstractmethod
    async def upsert(self, user_var: UserVar) -> UserVar:
        """
        Create a variable or overwrite the one with the same name.

        Args:
            user_var: UserVar entity

        Returns:
            Stored UserVar entity
        """
        pass

    @abstractmethod
    async def list_by_user(self, user_id: uuid.UUID) -> List[UserVar]:
        """List a user's variables ordered by name."""
        pass

    @abstractmethod
    async def list_by_users(self, user_ids: Sequence[uuid.UUID]) -> Dict[uuid.UUID, List[UserVar]]:
        """List variables of several users, keyed by user id."""
        pass

    @abstractmethod
    async def delete(self, user_id: uuid.UUID, name: str) -> bool:
        """
        Delete a user's variable by name.

        Returns:
            True if a variable was deleted
        """
        pass
