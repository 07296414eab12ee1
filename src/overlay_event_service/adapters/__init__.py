"""
Overlay Event Service Adapters

This package provides the adapter pattern implementation for the publish
hubs events are forwarded to (Mercure, NATS, In-Memory).
"""
from .base import AdapterError, EventAdapter, PublishError
from .mercure_adapter import MercureAdapter
from .nats_adapter import NatsAdapter
from .memory_adapter import MemoryAdapter, PublishedUpdate

__all__ = [
    "AdapterError",
    "EventAdapter",
    "PublishError",
    "MercureAdapter",
    "NatsAdapter",
    "MemoryAdapter",
    "PublishedUpdate",
]
