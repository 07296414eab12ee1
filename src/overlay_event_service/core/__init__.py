"""
Core configuration and request security for the overlay event service.
"""

from .config import settings, Settings
from .security import bearer_scheme, verify_bearer_token

__all__ = [
    "settings",
    "Settings",
    "bearer_scheme",
    "verify_bearer_token",
]
