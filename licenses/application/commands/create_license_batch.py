"""
CreateLicenseBatchCommand.

Command to issue a batch of license keys for an application.
"""

import uuid
from dataclasses import dataclass
from typing import Optional


@dataclass
class CreateLicenseBatchCommand:
    """
    Command to create ``amount`` licenses from one key mask.

    Every license in the batch shares level, duration and expiry.
    """

    owner_id: Optional[int]
    application_id: uuid.UUID
    amount: int
    mask: str
    duration: int
    expiry_unit: int
    level: Optional[int] = None
    note: Optional[str] = None
    lowercase_letters: bool = True
    uppercase_letters: bool = True
