"""
Overlay Event Service - publish hub proxy for stream overlay notifications.

Incoming follow, subscribe, donation, raid and music notifications are
tagged with their type and forwarded to one shared topic using the Adapter
Pattern (Mercure, NATS or in-memory).
"""

__version__ = "0.1.0"


def get_app():
    """Get the FastAPI application instance (lazy import to avoid initialization issues)."""
    from .main import app
    return app


__all__ = ["get_app", "__version__"]
