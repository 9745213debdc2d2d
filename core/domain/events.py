"""
Domain events base classes and infrastructure.

Domain events represent something that happened in the domain.
Handlers subscribe to them for side effects such as audit logging.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from uuid import UUID, uuid4

_BASE_FIELDS = ("event_id", "occurred_at", "aggregate_id", "event_type", "application_id")


@dataclass(frozen=True)
class DomainEvent(ABC):
    """
    Base class for all domain events.

    Domain events are immutable value objects that represent
    something that happened inside one application.
    """

    event_id: UUID
    occurred_at: datetime
    aggregate_id: str
    event_type: str
    application_id: Optional[UUID] = None

    def __init_subclass__(cls, **kwargs):
        """Automatically set event_type for subclasses."""
        super().__init_subclass__(**kwargs)
        cls.event_type = cls.__name__

    @classmethod
    def _base(cls, aggregate_id, application_id: Optional[UUID], occurred_at: Optional[datetime]):
        """Keyword arguments shared by every concrete event."""
        return {
            "event_id": uuid4(),
            "occurred_at": occurred_at or datetime.now(timezone.utc),
            "aggregate_id": str(aggregate_id),
            "event_type": cls.__name__,
            "application_id": application_id,
        }

    def payload(self) -> Dict[str, Any]:
        """Event-specific attributes, stringified for storage."""
        return {
            key: value if isinstance(value, (int, bool, type(None))) else str(value)
            for key, value in vars(self).items()
            if key not in _BASE_FIELDS
        }

    def to_dict(self) -> Dict[str, Any]:
        """Convert event to dictionary for serialization."""
        return {
            "event_id": str(self.event_id),
            "occurred_at": self.occurred_at.isoformat(),
            "aggregate_id": self.aggregate_id,
            "event_type": self.event_type,
            "application_id": str(self.application_id) if self.application_id else None,
            "payload": self.payload(),
        }


class EventHandler(ABC):
    """
    Base class for event handlers.

    Event handlers process domain events asynchronously.
    """

    @abstractmethod
    async def handle(self, event: DomainEvent) -> None:
        """
        Handle a domain event.

        Args:
            event: The domain event to handle
        """
        pass


class EventBus(ABC):
    """
    Abstract event bus for publishing and subscribing to domain events.
    """

    @abstractmethod
    async def publish(self, event: DomainEvent) -> None:
        """
        Publish a domain event.

        Args:
            event: The domain event to publish
        """
        pass

    @abstractmethod
    def subscribe(self, event_type: type, handler: EventHandler) -> None:
        """
        Subscribe to a domain event type.

        Args:
            event_type: The type of event to subscribe to
            handler: The handler to call when event is published
        """
        pass
