from typing import Any
from pydantic import BaseModel, ConfigDict, Field


class MusicRequest(BaseModel):
    """Body of a now-playing music notification."""
    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "author": "Sylvain D",
                "song": "The silence",
                "base64": "https://example.com/covers/the-silence.jpg",
                "noSound": False,
            }
        },
    )

    author: Any = Field(default=None, description="Author of the current music")
    song: Any = Field(default=None, description="Title of the current music")
    album_img: Any = Field(
        default=None,
        alias="base64",
        description="Album image of the current music (base64 data or URL)",
    )
    no_sound: Any = Field(default=None, alias="noSound", description="Hide/Show sound bars")


class PublishResponse(BaseModel):
    """Response after publishing an event."""
    uuid: str = Field(..., description="Id assigned to the update by the hub", examples=["123-abc"])


class HealthResponse(BaseModel):
    """Health check response."""
    status: str = Field(..., description="Service status")
    adapter: str = Field(..., description="Active adapter type")
    connected: bool = Field(..., description="Whether adapter is connected")
    topic: str = Field(..., description="Topic events are published to")
