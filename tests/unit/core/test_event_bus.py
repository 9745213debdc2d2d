"""
Unit tests for the in-memory event bus.
"""
import uuid

import pytest

from core.domain.events import DomainEvent, EventHandler
from core.infrastructure.events import InMemoryEventBus
from licenses.domain.events import LicenseBanned, LicensesDeleted


class _Collector(EventHandler):
    def __init__(self):
        self.events = []

    async def handle(self, event: DomainEvent) -> None:
        self.events.append(event)


class _Broken(EventHandler):
    async def handle(self, event: DomainEvent) -> None:
        raise RuntimeError("boom")


@pytest.mark.asyncio
class TestInMemoryEventBus:
    """Tests for InMemoryEventBus."""

    async def test_publish_to_type_subscribers(self):
        """Test handlers subscribed to a concrete type receive only that type."""
        bus = InMemoryEventBus()
        collector = _Collector()
        bus.subscribe(LicensesDeleted, collector)
        application_id = uuid.uuid4()

        await bus.publish(LicensesDeleted(application_id=application_id, mode="used", deleted=3))
        await bus.publish(
            LicenseBanned(application_id=application_id, license_id=uuid.uuid4(), reason=None)
        )

        assert len(collector.events) == 1
        assert collector.events[0].deleted == 3
        assert collector.events[0].event_type == "LicensesDeleted"

    async def test_domain_event_subscription_receives_everything(self):
        """Test subscribing to DomainEvent catches every event."""
        bus = InMemoryEventBus()
        collector = _Collector()
        bus.subscribe(DomainEvent, collector)

        await bus.publish(LicensesDeleted(application_id=uuid.uuid4(), mode="unused", deleted=0))

        assert [event.event_type for event in collector.events] == ["LicensesDeleted"]

    async def test_handler_failure_does_not_reach_publisher(self):
        """Test a failing handler neither raises nor blocks other handlers."""
        bus = InMemoryEventBus()
        collector = _Collector()
        bus.subscribe(DomainEvent, _Broken())
        bus.subscribe(LicensesDeleted, collector)

        await bus.publish(LicensesDeleted(application_id=uuid.uuid4(), mode="used", deleted=1))

        assert len(collector.events) == 1

    async def test_duplicate_subscription_ignored(self):
        """Test the same handler type is registered once per event type."""
        bus = InMemoryEventBus()
        bus.subscribe(DomainEvent, _Collector())
        bus.subscribe(DomainEvent, _Collector())

        event = LicensesDeleted(application_id=uuid.uuid4(), mode="used", deleted=1)
        assert len(bus.handlers_for(event)) == 1

    async def test_event_payload(self):
        """Test event serialization for storage."""
        application_id = uuid.uuid4()
        event = LicensesDeleted(application_id=application_id, mode="used", deleted=2)

        data = event.to_dict()

        assert data["application_id"] == str(application_id)
        assert data["payload"] == {"mode": "used", "deleted": 2}
