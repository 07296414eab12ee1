import logging
from typing import Optional

from ..core.config import settings
from ..adapters.base import EventAdapter
from ..adapters.mercure_adapter import MercureAdapter
from ..adapters.nats_adapter import NatsAdapter
from ..adapters.memory_adapter import MemoryAdapter
from ..models.events import EventEnvelope

logger = logging.getLogger(__name__)


class EventPublisher:
    """
    Owns the publish adapter and forwards envelopes to the shared topic.
    Singleton-like service that handles the lifecycle of the hub connection.
    """

    def __init__(self, topic: Optional[str] = None):
        self.adapter: Optional[EventAdapter] = None
        self._topic = topic

    @property
    def topic(self) -> str:
        """The single topic every event type is published to."""
        return self._topic or settings.event_topic

    def _get_adapter(self) -> EventAdapter:
        """Factory function to create the appropriate adapter based on configuration."""
        adapter_type = settings.event_adapter.lower()

        if adapter_type == "mercure":
            return MercureAdapter(
                hub_url=settings.mercure_hub_url,
                publisher_jwt=settings.mercure_publisher_jwt,
                jwt_secret=settings.mercure_jwt_secret,
                jwt_algorithm=settings.mercure_jwt_algorithm,
                private=settings.mercure_private,
                timeout=settings.mercure_timeout,
            )
        elif adapter_type == "nats":
            return NatsAdapter(
                url=settings.nats_url,
                reconnect_time_wait=settings.nats_reconnect_time_wait,
                max_reconnect_attempts=settings.nats_max_reconnect_attempts,
                subject_prefix=settings.nats_subject_prefix,
            )
        elif adapter_type == "memory":
            return MemoryAdapter(max_updates=settings.memory_max_updates)
        else:
            raise ValueError(f"Unknown adapter type: {adapter_type}")

    async def initialize(self, adapter: Optional[EventAdapter] = None):
        """Initialize and connect the adapter."""
        self.adapter = adapter or self._get_adapter()
        logger.info(f"Starting Overlay Event Service with {self.adapter.name}")

        try:
            await self.adapter.connect()
            logger.info(f"Publishing overlay events to topic {self.topic}")
        except Exception as e:
            logger.error(f"Failed to connect adapter: {e}")
            # Continue anyway for graceful degradation in dev mode
            if not settings.debug:
                raise

    async def shutdown(self):
        """Disconnect the adapter."""
        logger.info("Shutting down Overlay Event Service")

        if self.adapter:
            await self.adapter.disconnect()

        logger.info("Overlay Event Service shutdown complete")

    async def publish(self, envelope: EventEnvelope) -> str:
        """Publish an envelope to the shared topic and return the hub's message id."""
        if not self.adapter:
            raise RuntimeError("Event adapter not initialized")

        if not self.adapter.is_connected:
            raise RuntimeError("Event adapter not connected")

        return await self.adapter.publish(self.topic, envelope.to_json())


# Global instance
event_publisher = EventPublisher()


def get_event_publisher() -> EventPublisher:
    """FastAPI dependency returning the shared publisher."""
    return event_publisher
