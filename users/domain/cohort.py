"""
Application user cohorts.

A cohort selects the users of one application that a bulk time
operation applies to.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from core.domain.value_objects import FieldFilter

ALL_USERNAMES = "all"
DEFAULT_SUBSCRIPTION_FILTER = "default"


def _dashboard_filter(value: Optional[str], match_all: str) -> FieldFilter:
    if value is None or value == "" or value == match_all:
        return FieldFilter.any()
    return FieldFilter.exact(value)


@dataclass(frozen=True)
class AppUserCohort:
    """
    Username, subscription and activity filters combined with AND.

    ``active_only`` keeps users whose expiry is unlimited or not
    before ``now``.
    """

    username: FieldFilter = field(default_factory=FieldFilter.any)
    subscription: FieldFilter = field(default_factory=FieldFilter.any)
    active_only: bool = False

    @classmethod
    def everyone(cls) -> "AppUserCohort":
        """Cohort containing every user of the application."""
        return cls()

    @classmethod
    def from_dashboard(
        cls,
        username: Optional[str] = None,
        subscription: Optional[str] = None,
        active_only: bool = False,
    ) -> "AppUserCohort":
        """
        Build a cohort from dashboard form values.

        The dashboard sends ``all`` for every username and ``default``
        for every subscription; absent values mean the same.
        """
        return cls(
            username=_dashboard_filter(username, ALL_USERNAMES),
            subscription=_dashboard_filter(subscription, DEFAULT_SUBSCRIPTION_FILTER),
            active_only=bool(active_only),
        )

    def includes(self, user, now: datetime) -> bool:
        """Check whether ``user`` belongs to the cohort at ``now``."""
        if not self.username.matches(user.username):
            return False
        if not self.subscription.matches(user.subscription):
            return False
        if self.active_only and not user.is_active(now):
            return False
        return True

    def __str__(self) -> str:
        """Return a readable form of the cohort."""
        suffix = " active" if self.active_only else ""
        return f"username={self.username} subscription={self.subscription}{suffix}"
