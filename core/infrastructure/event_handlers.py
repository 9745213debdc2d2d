"""
Event handlers for domain events.

These handlers process domain events for side effects such as
audit logging.
"""

import logging

from asgiref.sync import sync_to_async

from core.domain.events import DomainEvent, EventHandler

logger = logging.getLogger(__name__)


class AuditLogEventHandler(EventHandler):
    """
    Event handler for audit logging.

    Writes every domain event to the AuditLog table and the log stream.
    """

    async def handle(self, event: DomainEvent) -> None:
        """
        Handle domain event for audit logging.

        Args:
            event: Domain event to log
        """
        logger.info(
            "Audit log: %s - %s",
            event.event_type,
            event.aggregate_id,
            extra={
                "event_id": str(event.event_id),
                "event_type": event.event_type,
                "aggregate_id": event.aggregate_id,
                "application_id": str(event.application_id) if event.application_id else None,
                "occurred_at": event.occurred_at.isoformat(),
            },
        )
        await self._write(event)

    @sync_to_async
    def _write(self, event: DomainEvent) -> None:
        from applications.infrastructure.models import Application, AuditLog

        # pylint: disable=no-member
        application_id = event.application_id
        if application_id and not Application.objects.filter(id=application_id).exists():
            # Application deleted in the same request
            application_id = None

        AuditLog.objects.create(
            application_id=application_id,
            event_id=event.event_id,
            event_type=event.event_type,
            aggregate_id=event.aggregate_id,
            payload=event.payload(),
            occurred_at=event.occurred_at,
        )


def register_event_handlers():
    """Register all event handlers with the event bus."""
    from core.infrastructure.events import event_bus

    event_bus.subscribe(DomainEvent, AuditLogEventHandler())

    logger.info("Event handlers registered")
