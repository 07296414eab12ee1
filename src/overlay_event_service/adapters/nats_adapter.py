"""
NATS adapter for the Overlay Event Service.

Publishes updates to NATS Core subjects for deployments where overlay
clients are fed from a NATS bridge instead of a Mercure hub.
"""
import logging
import re
from uuid import uuid4

import nats
from nats.aio.client import Client as NatsClient

from .base import EventAdapter, PublishError

logger = logging.getLogger(__name__)

_UNSAFE_SUBJECT_CHARS = re.compile(r"[^A-Za-z0-9_-]+")


class NatsAdapter(EventAdapter):
    """
    NATS adapter for the Overlay Event Service.

    NATS Core does not assign message ids, so one is generated per publish
    and sent in the ``Nats-Msg-Id`` header (the JetStream dedup header).
    """

    def __init__(
        self,
        url: str = "nats://localhost:4222",
        reconnect_time_wait: int = 2,
        max_reconnect_attempts: int = -1,
        subject_prefix: str = "overlay.events",
    ):
        """
        Initialize the NATS adapter.

        Args:
            url: NATS server URL
            reconnect_time_wait: Time to wait between reconnection attempts (seconds)
            max_reconnect_attempts: Max reconnection attempts (-1 for infinite)
            subject_prefix: Subject namespace the topic is appended to
        """
        self._url = url
        self._reconnect_time_wait = reconnect_time_wait
        self._max_reconnect_attempts = max_reconnect_attempts
        self._subject_prefix = subject_prefix
        self._client: NatsClient | None = None

    async def connect(self) -> None:
        """Connect to NATS server with auto-reconnection."""
        if self._client is not None and self._client.is_connected:
            logger.warning("Already connected to NATS")
            return

        logger.info(f"Connecting to NATS at {self._url}")

        try:
            self._client = await nats.connect(
                servers=[self._url],
                reconnect_time_wait=self._reconnect_time_wait,
                max_reconnect_attempts=self._max_reconnect_attempts,
                error_cb=self._error_callback,
                disconnected_cb=self._disconnected_callback,
                reconnected_cb=self._reconnected_callback,
                closed_cb=self._closed_callback,
            )
            logger.info(f"Connected to NATS server: {self._client.connected_url}")
        except Exception as e:
            logger.error(f"Failed to connect to NATS: {e}")
            raise ConnectionError(f"Failed to connect to NATS at {self._url}: {e}") from e

    async def disconnect(self) -> None:
        """Gracefully disconnect from NATS."""
        if self._client is None:
            return

        logger.info("Disconnecting from NATS")

        try:
            await self._client.drain()
        except Exception as e:
            logger.warning(f"Error draining NATS connection: {e}")

        self._client = None
        logger.info("Disconnected from NATS")

    async def publish(self, topic: str, payload: str) -> str:
        """
        Publish a payload to the NATS subject derived from the topic.

        Args:
            topic: Topic name (e.g., "http://example.com/events")
            payload: Serialized message body

        Returns:
            The generated message id
        """
        if not self.is_connected:
            raise ConnectionError("Not connected to NATS")

        subject = self.topic_to_subject(topic)
        message_id = str(uuid4())

        try:
            await self._client.publish(
                subject,
                payload.encode("utf-8"),
                headers={"Nats-Msg-Id": message_id},
            )
            logger.debug(f"Published message {message_id} to {subject}")
        except Exception as e:
            logger.error(f"Failed to publish to {subject}: {e}")
            raise PublishError(f"Failed to publish to {subject}: {e}") from e

        return message_id

    @property
    def is_connected(self) -> bool:
        """Check if connected to NATS."""
        return self._client is not None and self._client.is_connected

    def topic_to_subject(self, topic: str) -> str:
        """
        Convert a topic name to a NATS subject.

        Examples:
            "http://example.com/events" -> "overlay.events.http-example-com-events"
            "alerts" -> "overlay.events.alerts"
        """
        token = _UNSAFE_SUBJECT_CHARS.sub("-", topic).strip("-")
        return f"{self._subject_prefix}.{token}"

    # NATS callbacks for connection lifecycle

    async def _error_callback(self, e: Exception) -> None:
        """Called on NATS errors."""
        logger.error(f"NATS error: {e}")

    async def _disconnected_callback(self) -> None:
        """Called when disconnected from NATS."""
        logger.warning("Disconnected from NATS server")

    async def _reconnected_callback(self) -> None:
        """Called when reconnected to NATS."""
        logger.info(f"Reconnected to NATS server: {self._client.connected_url}")

    async def _closed_callback(self) -> None:
        """Called when NATS connection is closed."""
        logger.info("NATS connection closed")
