"""
Tests for the EventPublisher service.
"""
import json

import pytest

from conftest import StubAdapter
from overlay_event_service.adapters import MemoryAdapter, MercureAdapter, NatsAdapter
from overlay_event_service.core.config import settings
from overlay_event_service.models.events import DonationEvent, FollowEvent
from overlay_event_service.services.event_publisher import EventPublisher


class TestAdapterFactory:
    """Tests for adapter selection from settings."""

    @pytest.mark.parametrize(
        "name, adapter_cls",
        [("mercure", MercureAdapter), ("nats", NatsAdapter), ("memory", MemoryAdapter)],
    )
    def test_get_adapter(self, monkeypatch, name, adapter_cls):
        monkeypatch.setattr(settings, "event_adapter", name)
        assert isinstance(EventPublisher()._get_adapter(), adapter_cls)

    def test_unknown_adapter(self, monkeypatch):
        monkeypatch.setattr(settings, "event_adapter", "kafka")
        with pytest.raises(ValueError):
            EventPublisher()._get_adapter()


class TestLifecycle:
    """Tests for initialize/shutdown."""

    async def test_initialize_and_shutdown(self):
        publisher = EventPublisher()
        adapter = StubAdapter()

        await publisher.initialize(adapter)
        assert publisher.adapter is adapter
        assert adapter.is_connected

        await publisher.shutdown()
        assert not adapter.is_connected

    async def test_connect_failure_tolerated_in_debug(self, monkeypatch):
        """In debug mode the service starts degraded."""
        monkeypatch.setattr(settings, "debug", True)
        adapter = StubAdapter()
        adapter.connect = _refuse

        publisher = EventPublisher()
        await publisher.initialize(adapter)
        assert not publisher.adapter.is_connected

    async def test_connect_failure_raises(self, monkeypatch):
        monkeypatch.setattr(settings, "debug", False)
        adapter = StubAdapter()
        adapter.connect = _refuse

        with pytest.raises(ConnectionError):
            await EventPublisher().initialize(adapter)


class TestPublish:
    """Tests for EventPublisher.publish."""

    async def test_publish_serializes_to_topic(self):
        publisher = EventPublisher(topic="http://example.com/overlay")
        adapter = StubAdapter(message_id="urn:uuid:42")
        await publisher.initialize(adapter)

        message_id = await publisher.publish(DonationEvent(username="amy", amount="5"))

        assert message_id == "urn:uuid:42"
        topic, payload = adapter.calls[0]
        assert topic == "http://example.com/overlay"
        assert json.loads(payload) == {"type": "donation", "username": "amy", "amount": "5"}

    async def test_default_topic(self):
        publisher = EventPublisher()
        adapter = StubAdapter()
        await publisher.initialize(adapter)

        await publisher.publish(FollowEvent(username="bob"))

        assert adapter.calls[0][0] == settings.event_topic

    async def test_publish_without_adapter(self):
        with pytest.raises(RuntimeError, match="not initialized"):
            await EventPublisher().publish(FollowEvent(username="bob"))

    async def test_publish_when_disconnected(self):
        publisher = EventPublisher()
        publisher.adapter = StubAdapter()
        with pytest.raises(RuntimeError, match="not connected"):
            await publisher.publish(FollowEvent(username="bob"))


async def _refuse() -> None:
    raise ConnectionError("hub down")
