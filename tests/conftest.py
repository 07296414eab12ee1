"""
Pytest configuration for Overlay Event Service tests.
"""
import os
from typing import List, Tuple

import pytest
from fastapi.testclient import TestClient

# Set test environment variables before the app reads its settings
os.environ["EVENT_ADAPTER"] = "memory"
os.environ["DEBUG"] = "true"
os.environ.pop("API_TOKEN", None)

from overlay_event_service.adapters.base import EventAdapter
from overlay_event_service.main import app
from overlay_event_service.services.event_publisher import (
    EventPublisher,
    event_publisher,
    get_event_publisher,
)


class StubAdapter(EventAdapter):
    """Sink double returning a fixed id and recording every publish."""

    def __init__(self, message_id: str = "123-abc", error: Exception | None = None):
        self.message_id = message_id
        self.error = error
        self.calls: List[Tuple[str, str]] = []
        self._connected = False

    async def connect(self) -> None:
        self._connected = True

    async def disconnect(self) -> None:
        self._connected = False

    async def publish(self, topic: str, payload: str) -> str:
        self.calls.append((topic, payload))
        if self.error:
            raise self.error
        return self.message_id

    @property
    def is_connected(self) -> bool:
        return self._connected


@pytest.fixture
def client():
    """Test client running the app lifespan with the memory adapter."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def published(client):
    """Updates stored by the memory adapter during the test."""
    return event_publisher.adapter.updates


@pytest.fixture
def stub_adapter():
    """A connected stub adapter."""
    adapter = StubAdapter()
    adapter._connected = True
    return adapter


@pytest.fixture
def stub_client(stub_adapter):
    """Test client whose endpoints publish through the stub adapter."""
    publisher = EventPublisher()
    publisher.adapter = stub_adapter
    app.dependency_overrides[get_event_publisher] = lambda: publisher
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.pop(get_event_publisher, None)
