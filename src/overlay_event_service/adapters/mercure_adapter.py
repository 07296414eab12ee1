"""
Mercure adapter for the Overlay Event Service.

Publishes updates to a Mercure hub over HTTP. The hub fans updates out to
overlay clients subscribed with Server-Sent Events and answers each publish
with the id it assigned to the update.
"""
import logging
from typing import Optional

import httpx
import jwt

from .base import EventAdapter, PublishError

logger = logging.getLogger(__name__)


class MercureAdapter(EventAdapter):
    """
    Mercure hub adapter.

    A single ``httpx.AsyncClient`` is shared by all requests; its connection
    pool is safe for concurrent publishes.

    Authorization uses a publisher JWT, either given verbatim or signed here
    from a shared secret with a ``mercure.publish`` claim for the topic.
    """

    def __init__(
        self,
        hub_url: str = "http://localhost:3000/.well-known/mercure",
        publisher_jwt: Optional[str] = None,
        jwt_secret: Optional[str] = None,
        jwt_algorithm: str = "HS256",
        private: bool = False,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the Mercure adapter.

        Args:
            hub_url: Publish URL of the Mercure hub
            publisher_jwt: Ready-made publisher JWT (takes precedence over jwt_secret)
            jwt_secret: Secret used to sign a publisher JWT per topic
            jwt_algorithm: Algorithm for signing with jwt_secret
            private: Publish updates as private (authorized subscribers only)
            timeout: HTTP timeout in seconds (None waits forever)
            transport: Optional httpx transport, mostly for tests
        """
        self._hub_url = hub_url
        self._publisher_jwt = publisher_jwt
        self._jwt_secret = jwt_secret
        self._jwt_algorithm = jwt_algorithm
        self._private = private
        self._timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def connect(self) -> None:
        """Open the HTTP client used to reach the hub."""
        if self._client is not None:
            logger.warning("Mercure adapter already connected")
            return

        if not self._publisher_jwt and not self._jwt_secret:
            logger.warning("No Mercure publisher JWT or secret configured, the hub will likely reject publishes")

        self._client = httpx.AsyncClient(timeout=self._timeout, transport=self._transport)
        logger.info(f"Mercure adapter ready for hub {self._hub_url}")

    async def disconnect(self) -> None:
        """Close the HTTP client."""
        if self._client is None:
            return

        await self._client.aclose()
        self._client = None
        logger.info("Mercure adapter disconnected")

    async def publish(self, topic: str, payload: str) -> str:
        """
        POST an update to the hub.

        Args:
            topic: Mercure topic IRI
            payload: Update data

        Returns:
            The update id returned by the hub
        """
        if not self.is_connected:
            raise ConnectionError("Mercure adapter not connected")

        form = {"topic": topic, "data": payload}
        if self._private:
            form["private"] = "on"

        headers = {}
        token = self._token_for(topic)
        if token:
            headers["Authorization"] = f"Bearer {token}"

        try:
            response = await self._client.post(self._hub_url, data=form, headers=headers)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(f"Mercure hub rejected update for {topic}: {e.response.status_code} {e.response.text}")
            raise PublishError(
                f"Mercure hub returned {e.response.status_code} for topic {topic}"
            ) from e
        except httpx.HTTPError as e:
            logger.error(f"Failed to reach Mercure hub at {self._hub_url}: {e}")
            raise PublishError(f"Failed to reach Mercure hub: {e}") from e

        update_id = response.text.strip()
        logger.debug(f"Published update {update_id} to {topic}")
        return update_id

    @property
    def is_connected(self) -> bool:
        """Check if the HTTP client is open."""
        return self._client is not None and not self._client.is_closed

    def _token_for(self, topic: str) -> Optional[str]:
        """Return the publisher JWT for a topic."""
        if self._publisher_jwt:
            return self._publisher_jwt
        if self._jwt_secret:
            return jwt.encode(
                {"mercure": {"publish": [topic]}},
                self._jwt_secret,
                algorithm=self._jwt_algorithm,
            )
        return None
