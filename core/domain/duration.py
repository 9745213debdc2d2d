"""
Duration unit model.

Expiry units are seconds-multipliers supplied by the caller. One value,
``LIFETIME_SENTINEL``, is reserved and means "never expires": it always
resolves to a ``None`` expiry and is never multiplied into a duration.

All expiry arithmetic used by licenses and application users goes
through ``ExpiryDelta`` so the lifetime rule is applied in one place.
"""
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import IntEnum
from typing import Optional

from core.domain.exceptions import InvalidInputError

LIFETIME_SENTINEL = 315569260

# Longest finite delta a timedelta can hold
MAX_DELTA_SECONDS = int(timedelta.max.total_seconds())


class ExpiryUnit(IntEnum):
    """Named expiry units offered by the dashboard."""

    SECONDS = 1
    MINUTES = 60
    HOURS = 3600
    DAYS = 86400
    WEEKS = 604800
    MONTHS = 2629743
    YEARS = 31556926
    LIFETIME = LIFETIME_SENTINEL


def is_lifetime_unit(unit: int) -> bool:
    """Check whether a unit is the lifetime sentinel."""
    return int(unit) == LIFETIME_SENTINEL


def _shift(base: datetime, delta: timedelta) -> datetime:
    """Add ``delta`` to ``base``, rejecting results past the last representable date."""
    try:
        return base + delta
    except OverflowError:
        raise InvalidInputError("Expiry out of range") from None


@dataclass(frozen=True)
class ExpiryDelta:
    """
    An ``amount`` of ``unit``-second steps.

    A delta whose unit is the lifetime sentinel has no numeric length;
    ``seconds`` is ``None`` for it.
    """

    amount: int
    unit: int

    def __post_init__(self):
        """Validate amount and unit."""
        if isinstance(self.amount, bool) or not isinstance(self.amount, int):
            raise InvalidInputError("Time amount must be an integer")
        if isinstance(self.unit, bool) or not isinstance(self.unit, int):
            raise InvalidInputError("Expiry unit must be an integer")
        if self.amount < 0:
            raise InvalidInputError("Time amount cannot be negative")
        if self.unit < 1:
            raise InvalidInputError("Expiry unit must be a positive number of seconds")
        if not self.is_lifetime and self.amount * self.unit > MAX_DELTA_SECONDS:
            raise InvalidInputError("Expiry out of range")

    @property
    def is_lifetime(self) -> bool:
        """True when the unit is the lifetime sentinel."""
        return is_lifetime_unit(self.unit)

    @property
    def seconds(self) -> Optional[int]:
        """Length in seconds, or None for lifetime."""
        if self.is_lifetime:
            return None
        return self.amount * self.unit

    @property
    def as_timedelta(self) -> Optional[timedelta]:
        """Length as a timedelta, or None for lifetime."""
        seconds = self.seconds
        if seconds is None:
            return None
        return timedelta(seconds=seconds)

    def total_seconds(self) -> int:
        """
        Seconds to record as an accumulated license duration.

        Lifetime records exactly one sentinel rather than
        ``amount * LIFETIME_SENTINEL``.
        """
        if self.is_lifetime:
            return LIFETIME_SENTINEL
        return self.seconds

    def initial_expiry(self, now: datetime) -> Optional[datetime]:
        """Expiry of something starting now."""
        if self.is_lifetime:
            return None
        return _shift(now, self.as_timedelta)

    def extend(self, existing: Optional[datetime], now: datetime) -> Optional[datetime]:
        """
        Push an expiry forward.

        Lifetime always collapses to None, even for a finite expiry.
        A None expiry restarts from ``now``.
        """
        if self.is_lifetime:
            return None
        return _shift(now if existing is None else existing, self.as_timedelta)

    def subtract(self, existing: Optional[datetime], now: datetime) -> Optional[datetime]:
        """
        Pull an expiry backward, never before ``now``.

        A None (unlimited) expiry is returned untouched.
        """
        if existing is None:
            return None
        if self.is_lifetime:
            return now
        try:
            return max(now, existing - self.as_timedelta)
        except OverflowError:
            return now

    def __str__(self) -> str:
        """Return a readable form of the delta."""
        if self.is_lifetime:
            return "lifetime"
        return f"{self.amount}x{self.unit}s"


_DISPLAY_STEPS = (
    (ExpiryUnit.YEARS, "year"),
    (ExpiryUnit.MONTHS, "month"),
    (ExpiryUnit.WEEKS, "week"),
    (ExpiryUnit.DAYS, "day"),
    (ExpiryUnit.HOURS, "hour"),
    (ExpiryUnit.MINUTES, "minute"),
)


def humanize_duration(seconds: Optional[int]) -> str:
    """
    Render a stored duration the way the dashboard lists it.

    Args:
        seconds: Accumulated duration in seconds

    Returns:
        Label such as ``Lifetime`` or ``3 day(s)``
    """
    if seconds is None or seconds >= LIFETIME_SENTINEL:
        return "Lifetime"
    for unit, label in _DISPLAY_STEPS:
        if seconds >= unit:
            return f"{seconds // unit} {label}(s)"
    return f"{seconds} second(s)"
