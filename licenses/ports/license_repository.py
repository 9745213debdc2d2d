"""
License repository port (interface).

This defines the contract for license persistence operations.
Implementations are in the infrastructure layer.
"""
from abc import ABC, abstractmethod
from typing import Callable, List, Optional, Sequence
import uuid

from licenses.domain.license import License

LicenseMutator = Callable[[License], Optional[License]]


class LicenseRepository(ABC):
    """
    Abstract repository for License entities.

    This is a port in hexagonal architecture - it defines
    what operations are available, not how they're implemented.
    """

    @abstractmethod
    async def save(self, license: License) -> License:
        """
        Save a license entity.

        Args:
            license: License entity to save

        Returns:
            Saved license entity
        """
        pass

    @abstractmethod
    async def create_batch(self, licenses: Sequence[License]) -> List[License]:
        """
        Persist a batch of new licenses in one transaction.

        Args:
            licenses: New License entities

        Returns:
            Saved license entities, in input order
        """
        pass

    @abstractmethod
    async def find_in_application(
        self, application_id: uuid.UUID, license_id: uuid.UUID
    ) -> Optional[License]:
        """
        Find a license by ID within one application.

        Args:
            application_id: Application UUID
            license_id: License UUID

        Returns:
            License entity or None if not found in that application
        """
        pass

    @abstractmethod
    async def list_by_application(self, application_id: uuid.UUID) -> List[License]:
        """
        List an application's licenses, newest first.

        Args:
            application_id: Application UUID

        Returns:
            List of License entities
        """
        pass

    @abstractmethod
    async def update_unused(self, application_id: uuid.UUID, mutator: LicenseMutator) -> int:
        """
        Apply ``mutator`` to every unused license of an application.

        The cohort is locked and rewritten in one transaction. The
        mutator returns the new entity, or None to leave a row as is.

        Args:
            application_id: Application UUID
            mutator: Pure function computing the new license state

        Returns:
            Number of licenses written
        """
        pass

    @abstractmethod
    async def delete_where(
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
        pass
