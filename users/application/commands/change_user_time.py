"""
Commands moving the expiry of a cohort of application users.
"""

import uuid
from dataclasses import dataclass, field
from typing import Optional

from users.domain.cohort import AppUserCohort


@dataclass
class ExtendAppUsersCommand:
    """
    Command to add ``time`` units to every user of a cohort.

    ``cohort.active_only`` restricts the cohort to entitled users.
    """

    owner_id: Optional[int]
    application_id: uuid.UUID
    time: int
    expiry_unit: int
    cohort: AppUserCohort = field(default_factory=AppUserCohort.everyone)


@dataclass
class SubtractAppUserTimeCommand:
    """Command to remove ``time`` units from every user of a cohort."""

    owner_id: Optional[int]
    application_id: uuid.UUID
    time: int
    expiry_unit: int
    cohort: AppUserCohort = field(default_factory=AppUserCohort.everyone)
