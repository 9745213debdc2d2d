"""
Commands for user variables.
"""

import uuid
from dataclasses import dataclass
from typing import Optional


@dataclass
class SetUserVarCommand:
    """Command to create or overwrite a user variable."""

    owner_id: Optional[int]
    application_id: uuid.UUID
    user_id: uuid.UUID
    name: str
    value: str
    read_only: bool = False


@dataclass
class DeleteUserVarCommand:
    """Command to delete a user variable."""

    owner_id: Optional[int]
    application_id: uuid.UUID
    user_id: uuid.UUID
    name: str
