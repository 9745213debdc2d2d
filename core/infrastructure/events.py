"""
In-memory event bus implementation.

Handlers are kept in process memory and run concurrently for every
published event. Handler failures are logged and never propagate to
the publisher, so a broken side effect cannot undo a committed change.
"""

import asyncio
import logging
from typing import Dict, List, Type

from core.domain.events import DomainEvent, EventBus, EventHandler

logger = logging.getLogger(__name__)


class InMemoryEventBus(EventBus):
    """
    In-memory event bus implementation.

    Subscriptions are per concrete event type; ``DomainEvent`` itself
    can be subscribed to receive every event.
    """

    def __init__(self):
        """Initialize the event bus."""
        self._handlers: Dict[Type[DomainEvent], List[EventHandler]] = {}

    def subscribe(self, event_type: Type[DomainEvent], handler: EventHandler) -> None:
        """
        Subscribe to a domain event type.

        Args:
            event_type: The type of event to subscribe to
            handler: The handler to call when event is published
        """
        handlers = self._handlers.setdefault(event_type, [])
        if any(type(existing) is type(handler) for existing in handlers):
            logger.debug(
                "%s already subscribed to %s", handler.__class__.__name__, event_type.__name__
            )
            return
        handlers.append(handler)
        logger.debug("Subscribed %s to %s", handler.__class__.__name__, event_type.__name__)

    def clear(self) -> None:
        """Remove every subscription."""
        self._handlers.clear()

    def handlers_for(self, event: DomainEvent) -> List[EventHandler]:
        """Handlers registered for the event's type or for all events."""
        return self._handlers.get(type(event), []) + self._handlers.get(DomainEvent, [])

    async def publish(self, event: DomainEvent) -> None:
        """
        Publish a domain event.

        Args:
            event: The domain event to publish
        """
        handlers = self.handlers_for(event)

        if not handlers:
            logger.debug("No handlers registered for %s", event.event_type)
            return

        logger.info("Publishing %s to %d handler(s)", event.event_type, len(handlers))

        tasks = [self._handle_event(handler, event) for handler in handlers]
        await asyncio.gather(*tasks, return_exceptions=True)

    async def _handle_event(self, handler: EventHandler, event: DomainEvent) -> None:
        """
        Handle an event with a specific handler.

        Args:
            handler: The handler to use
            event: The event to handle
        """
        try:
            await handler.handle(event)
            logger.debug(
                "Successfully handled %s with %s", event.event_type, handler.__class__.__name__
            )
        except Exception as e:
            logger.error(
                "Error handling %s with %s: %s",
                event.event_type,
                handler.__class__.__name__,
                e,
                exc_info=True,
            )
            raise


# Global event bus instance
event_bus = InMemoryEventBus()
