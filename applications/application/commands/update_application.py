"""
UpdateApplicationCommand and DeleteApplicationCommand.

Commands to rename, change the status of, or delete an application.
"""
import uuid
from dataclasses import dataclass
from typing import Optional


@dataclass
class UpdateApplicationCommand:
    """
    Command to update an application.

    When ``status`` is given the status is changed; otherwise
    the application is renamed to ``name``.
    """

    owner_id: Optional[int]
    application_id: uuid.UUID
    name: Optional[str] = None
    status: Optional[str] = None


@dataclass
class DeleteApplicationCommand:
    """Command to delete an application and everything scoped to it."""

    owner_id: Optional[int]
    application_id: uuid.UUID
