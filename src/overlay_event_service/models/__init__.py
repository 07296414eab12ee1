from .events import (
    BaseEvent,
    DonationEvent,
    EventEnvelope,
    EventType,
    FollowEvent,
    MusicEvent,
    RaidEvent,
    SubscribeEvent,
    parse_envelope,
)
from .schemas import HealthResponse, MusicRequest, PublishResponse

__all__ = [
    "BaseEvent",
    "DonationEvent",
    "EventEnvelope",
    "EventType",
    "FollowEvent",
    "MusicEvent",
    "RaidEvent",
    "SubscribeEvent",
    "parse_envelope",
    "HealthResponse",
    "MusicRequest",
    "PublishResponse",
]
