"""
Application repository port (interface).

This defines the contract for application persistence operations.
Implementations are in the infrastructure layer.
"""

import uuid
from abc import ABC, abstractmethod
from typing import List, Optional

from applications.domain.application import Application


class ApplicationRepository(ABC):
    """
    Abstract repository for Application entities.

    This is a port in hexagonal architecture - it defines
    what operations are available, not how they're implemented.
    """

    @abstractmethod
    async def save(self, application: Application) -> Application:
        """
        Save an application entity.

        Args:
            application: Application entity to save

        Returns:
            Saved application entity
        """
        pass

    @abstractmethod
    async def find_owned(
        self, application_id: uuid.UUID, owner_id: int
    ) -> Optional[Application]:
        """
        Find an application by ID, scoped to its owner.

        Args:
            application_id: Application UUID
            owner_id: Owning account id

        Returns:
            Application entity or None if absent or owned by someone else
        """
        pass

    @abstractmethod
    async def list_by_owner(self, owner_id: int) -> List[Application]:
        """
        List an owner's applications, oldest first.

        Args:
            owner_id: Owning account id

        Returns:
            List of Application entities
        """
        pass

    @abstractmethod
    async def delete(self, application_id: uuid.UUID) -> None:
        """
        Delete an application and everything scoped to it.

        Args:
            application_id: Application UUID
        """
        pass
