"""
Event envelopes published to overlay clients.

Every overlay notification is wrapped in one of five envelope variants,
discriminated by the ``type`` key. All variants go out on the same topic and
clients filter on ``type``.

Field values are carried as received: query/form values stay strings, music
body values keep their JSON type and absent fields serialize as ``null``.
"""
from enum import Enum
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic.alias_generators import to_camel


class EventType(str, Enum):
    """Overlay event types, as found in the envelope ``type`` key."""
    FOLLOW = "follow"
    SUBSCRIBE = "subscribe"
    DONATION = "donation"
    RAID = "raid"
    MUSIC = "music"


class BaseEvent(BaseModel):
    """
    Base configuration for all envelopes.

    - Keys are serialized in camelCase (``isPrime``, ``albumImg``).
    - Fields can be populated by their snake_case names in Python code.
    - Envelopes are immutable once built.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    def to_json(self) -> str:
        """Serialize to the compact JSON published on the topic."""
        return self.model_dump_json(by_alias=True)


class FollowEvent(BaseEvent):
    """A new follower."""
    type: Literal["follow"] = "follow"
    username: Optional[str] = Field(default=None, description="Username of the follower.")


class SubscribeEvent(BaseEvent):
    """A new subscription, possibly Prime or gifted."""
    type: Literal["subscribe"] = "subscribe"
    username: Optional[str] = Field(default=None, description="Username of the subscriber.")
    is_prime: Optional[str] = Field(default=None, description="Subscription type is 'Prime'.")
    is_gift: Optional[str] = Field(default=None, description="Subscription type is a gift.")
    recipient: Optional[str] = Field(default=None, description="Recipient of a gifted subscription.")


class DonationEvent(BaseEvent):
    """A donation."""
    type: Literal["donation"] = "donation"
    username: Optional[str] = Field(default=None, description="Username of the donator.")
    amount: Optional[str] = Field(default=None, description="Amount of the donation.")


class RaidEvent(BaseEvent):
    """An incoming raid."""
    type: Literal["raid"] = "raid"
    username: Optional[str] = Field(default=None, description="Username of the raid initiator.")
    viewers: Optional[str] = Field(default=None, description="Count of viewers in the raid.")


class MusicEvent(BaseEvent):
    """The song currently playing on stream."""
    type: Literal["music"] = "music"
    album_img: Any = Field(default=None, description="Album image, base64 data or URL.")
    author: Any = Field(default=None, description="Author of the current music.")
    song: Any = Field(default=None, description="Title of the current music.")
    no_sound: Any = Field(default=None, description="Hide/Show sound bars.")


EventEnvelope = Annotated[
    Union[FollowEvent, SubscribeEvent, DonationEvent, RaidEvent, MusicEvent],
    Field(discriminator="type"),
]

_envelope_adapter = TypeAdapter(EventEnvelope)


def parse_envelope(payload: Union[str, bytes]) -> EventEnvelope:
    """Parse a published payload back into its envelope variant."""
    return _envelope_adapter.validate_json(payload)
