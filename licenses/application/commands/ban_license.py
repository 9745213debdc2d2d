"""
BanLicenseCommand.
"""

import uuid
from dataclasses import dataclass
from typing import Optional


@dataclass
class BanLicenseCommand:
    """Command to ban one license."""

    owner_id: Optional[int]
    application_id: uuid.UUID
    license_id: uuid.UUID
    reason: Optional[str] = None
