"""
Value objects for the domain.

Value objects are immutable objects that are defined by their attributes
rather than their identity. They have no identity and are compared by value.
"""
from abc import ABC
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from core.domain.exceptions import InvalidInputError


@dataclass(frozen=True)
class ValueObject(ABC):
    """
    Base class for value objects.

    Value objects are immutable and compared by value.
    """

    def __eq__(self, other):
        """Compare value objects by their attributes."""
        if not isinstance(other, self.__class__):
            return False
        return self.__dict__ == other.__dict__

    def __hash__(self):
        """Make value objects hashable."""
        return hash(tuple(sorted(self.__dict__.items())))


@dataclass(frozen=True, eq=False)
class Username(ValueObject):
    """Application user name value object."""

    value: str

    def __post_init__(self):
        """Validate username."""
        if not self.value or len(self.value.strip()) == 0:
            raise InvalidInputError("Username cannot be empty")
        if len(self.value) > 150:
            raise InvalidInputError("Username too long")

    def __str__(self) -> str:
        """Return username as string."""
        return self.value


@dataclass(frozen=True, eq=False)
class FieldFilter(ValueObject):
    """
    Filter on a single field of a cohort.

    Either matches everything (``value is None``) or exactly one value.
    Use ``FieldFilter.any()`` / ``FieldFilter.exact(value)`` to build it.
    """

    value: Optional[str] = None

    @classmethod
    def any(cls) -> "FieldFilter":
        """Filter that matches every candidate."""
        return cls(value=None)

    @classmethod
    def exact(cls, value: str) -> "FieldFilter":
        """Filter that matches only ``value``."""
        if value is None:
            raise InvalidInputError("Exact filter requires a value")
        return cls(value=value)

    @property
    def is_any(self) -> bool:
        """True when the filter does not narrow the cohort."""
        return self.value is None

    def matches(self, candidate: Optional[str]) -> bool:
        """Check a candidate value against the filter."""
        return self.is_any or candidate == self.value

    def __str__(self) -> str:
        """Return a readable form of the filter."""
        return "*" if self.is_any else self.value


class ApplicationStatus(Enum):
    """Application lifecycle status value object."""

    ACTIVE = "active"
    PAUSED = "paused"

    def __str__(self) -> str:
        """Return status as string."""
        return self.value


class DeleteMode(Enum):
    """Selector for bulk delete operations."""

    USED = "used"
    UNUSED = "unused"
    EXPIRED = "expired"
    IDS = "ids"

    def __str__(self) -> str:
        """Return mode as string."""
        return self.value
