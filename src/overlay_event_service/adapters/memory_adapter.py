"""
In-memory adapter for the Overlay Event Service.

This adapter is primarily used for:
- Local development without a running hub
- Unit testing

Only the most recent updates are kept (``max_updates``), nothing is forwarded.
"""
import logging
from collections import deque
from dataclasses import dataclass
from typing import Deque
from uuid import uuid4

from .base import EventAdapter

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PublishedUpdate:
    """An update accepted by the memory adapter."""
    id: str
    topic: str
    payload: str


class MemoryAdapter(EventAdapter):
    """
    In-memory publish sink for development and testing.

    Ids follow the Mercure hub format (``urn:uuid:<uuid4>``).
    """

    def __init__(self, max_updates: int = 1000):
        """Initialize the memory adapter."""
        self._connected = False
        # Oldest updates are dropped once max_updates is reached
        self.updates: Deque[PublishedUpdate] = deque(maxlen=max_updates)

    async def connect(self) -> None:
        """Mark adapter as connected."""
        if self._connected:
            logger.warning("Memory adapter already connected")
            return

        self._connected = True
        logger.info("Memory adapter connected (in-memory mode)")

    async def disconnect(self) -> None:
        """Disconnect and drop recorded updates."""
        self.updates.clear()
        self._connected = False
        logger.info("Memory adapter disconnected")

    async def publish(self, topic: str, payload: str) -> str:
        """Record the update and return its generated id."""
        if not self._connected:
            raise ConnectionError("Memory adapter not connected")

        update = PublishedUpdate(id=f"urn:uuid:{uuid4()}", topic=topic, payload=payload)
        self.updates.append(update)
        logger.debug(f"Stored update {update.id} for topic: {topic}")
        return update.id

    @property
    def is_connected(self) -> bool:
        """Check if adapter is connected."""
        return self._connected
