"""
DeleteLicensesCommand.

Command to delete the used, unused or listed licenses of an application.
"""

import uuid
from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class DeleteLicensesCommand:
    """
    Command to delete licenses.

    ``mode`` is one of ``used``, ``unused`` or ``ids``; ``ids`` mode
    deletes exactly ``license_ids``.
    """

    owner_id: Optional[int]
    application_id: uuid.UUID
    mode: Optional[str]
    license_ids: List[uuid.UUID] = field(default_factory=list)
