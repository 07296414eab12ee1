"""
Base adapter interface for publish hub backends.

All adapters must implement this interface so the service behaves the same
whichever hub the updates are forwarded to (Mercure, NATS, in-memory).
"""
from abc import ABC, abstractmethod


class EventAdapter(ABC):
    """
    Abstract base class for publish sink adapters.

    A sink only needs to accept a serialized payload for a topic and hand
    back an identifier for the published message.
    """

    @abstractmethod
    async def connect(self) -> None:
        """
        Prepare the connection to the hub.

        Raises:
            ConnectionError: If unable to reach the hub
        """
        pass

    @abstractmethod
    async def disconnect(self) -> None:
        """Release the connection and any pooled resources."""
        pass

    @abstractmethod
    async def publish(self, topic: str, payload: str) -> str:
        """
        Publish a payload to a topic.

        Args:
            topic: The topic to publish to (e.g., "http://example.com/events")
            payload: The already serialized message body

        Returns:
            The message identifier assigned to the published update

        Raises:
            PublishError: If the message could not be published
            ConnectionError: If not connected to the hub
        """
        pass

    @property
    @abstractmethod
    def is_connected(self) -> bool:
        """
        Check if the adapter is connected to the hub.

        Returns:
            True if connected, False otherwise
        """
        pass

    @property
    def name(self) -> str:
        """Return the adapter name for logging."""
        return self.__class__.__name__


class AdapterError(Exception):
    """Base exception for adapter errors."""
    pass


class PublishError(AdapterError):
    """Raised when a message could not be published."""
    pass
