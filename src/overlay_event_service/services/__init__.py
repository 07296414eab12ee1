"""
Service layer for the Overlay Event Service.
"""
from .event_publisher import EventPublisher, event_publisher, get_event_publisher

__all__ = ["EventPublisher", "event_publisher", "get_event_publisher"]
