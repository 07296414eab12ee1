"""
Configuration settings for the Overlay Event Service.
"""
import os
from typing import List, Literal, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_version() -> str:
    """
    Get the service version.
    Falls back to the installed package metadata when SERVICE_VERSION is not set.
    """
    env_version = os.getenv("SERVICE_VERSION")
    if env_version:
        return env_version

    from importlib.metadata import PackageNotFoundError, version

    try:
        return version("overlay-event-service")
    except PackageNotFoundError:
        return "0.0.0"


class Settings(BaseSettings):
    """
    Overlay Event Service configuration loaded from environment variables.

    Defaults are for local development against a Mercure hub on localhost.
    """
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Service settings
    service_name: str = "overlay-event-service"
    service_version: str = get_version()
    service_port: int = 8000
    debug: bool = False
    # Disables the OpenAPI docs
    is_prod: bool = False
    cors_origins: List[str] = ["*"]

    # Every event type is published to this single topic
    event_topic: str = "http://example.com/events"

    # Adapter configuration
    event_adapter: Literal["mercure", "nats", "memory"] = "mercure"

    # Mercure settings
    mercure_hub_url: str = "http://localhost:3000/.well-known/mercure"
    mercure_publisher_jwt: Optional[str] = None
    mercure_jwt_secret: Optional[str] = None
    mercure_jwt_algorithm: str = "HS256"
    mercure_private: bool = False
    mercure_timeout: Optional[float] = None  # None = wait forever

    # NATS settings
    nats_url: str = "nats://localhost:4222"
    nats_reconnect_time_wait: int = 2  # seconds
    nats_max_reconnect_attempts: int = -1  # -1 = infinite
    nats_subject_prefix: str = "overlay.events"

    # Memory adapter settings
    memory_max_updates: int = 1000

    # Bearer token expected on /api routes; unset = not enforced
    api_token: Optional[str] = None


# Global settings instance
settings = Settings()
