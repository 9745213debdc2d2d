"""
AddLicenseTimeCommand.

Command to add time to every unused license of an application.
"""

import uuid
from dataclasses import dataclass
from typing import Optional


@dataclass
class AddLicenseTimeCommand:
    """Command to add ``time`` units to unused licenses."""

    owner_id: Optional[int]
    application_id: uuid.UUID
    time: int
    expiry_unit: int
