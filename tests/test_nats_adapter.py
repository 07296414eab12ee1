"""
Tests for the NATS Adapter with a mocked NATS client.
"""
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from overlay_event_service.adapters.base import PublishError
from overlay_event_service.adapters.nats_adapter import NatsAdapter


@pytest.fixture
def nats_client():
    """A connected NATS client double."""
    client = MagicMock()
    client.is_connected = True
    client.connected_url = "nats://localhost:4222"
    client.publish = AsyncMock()
    client.drain = AsyncMock()
    return client


@pytest.fixture
async def adapter(nats_client):
    adapter = NatsAdapter(subject_prefix="overlay.events")
    with patch("overlay_event_service.adapters.nats_adapter.nats.connect", AsyncMock(return_value=nats_client)):
        await adapter.connect()
    yield adapter
    await adapter.disconnect()


class TestNatsAdapter:
    """Tests for NatsAdapter."""

    async def test_connect(self, adapter, nats_client):
        assert adapter.is_connected

    async def test_connect_failure(self):
        """Connection errors surface as ConnectionError."""
        adapter = NatsAdapter()
        with patch(
            "overlay_event_service.adapters.nats_adapter.nats.connect",
            AsyncMock(side_effect=OSError("refused")),
        ):
            with pytest.raises(ConnectionError):
                await adapter.connect()
        assert not adapter.is_connected

    async def test_publish(self, adapter, nats_client):
        """The payload goes to the derived subject with a generated id header."""
        message_id = await adapter.publish("http://example.com/events", '{"type":"raid"}')

        nats_client.publish.assert_awaited_once()
        args, kwargs = nats_client.publish.call_args
        assert args == ("overlay.events.http-example-com-events", b'{"type":"raid"}')
        assert kwargs["headers"] == {"Nats-Msg-Id": message_id}

    async def test_publish_failure(self, adapter, nats_client):
        nats_client.publish.side_effect = RuntimeError("slow consumer")
        with pytest.raises(PublishError):
            await adapter.publish("alerts", "{}")

    async def test_publish_when_disconnected(self):
        adapter = NatsAdapter()
        with pytest.raises(ConnectionError):
            await adapter.publish("alerts", "{}")

    async def test_disconnect_drains(self, nats_client):
        adapter = NatsAdapter()
        with patch("overlay_event_service.adapters.nats_adapter.nats.connect", AsyncMock(return_value=nats_client)):
            await adapter.connect()

        await adapter.disconnect()

        nats_client.drain.assert_awaited_once()
        assert not adapter.is_connected

    @pytest.mark.parametrize(
        "topic, subject",
        [
            ("alerts", "overlay.events.alerts"),
            ("http://example.com/events", "overlay.events.http-example-com-events"),
            ("stream.alerts", "overlay.events.stream-alerts"),
        ],
    )
    def test_topic_to_subject(self, topic, subject):
        assert NatsAdapter().topic_to_subject(topic) == subject
