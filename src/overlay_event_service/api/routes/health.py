from fastapi import APIRouter, Depends
from ...models.schemas import HealthResponse
from ...services.event_publisher import EventPublisher, get_event_publisher

router = APIRouter(tags=["Health"])

@router.get("/health", response_model=HealthResponse)
async def health_check(
    publisher: EventPublisher = Depends(get_event_publisher),
) -> HealthResponse:
    """
    Health check endpoint.

    Returns service status, adapter connection state and the publish topic.
    """
    adapter = publisher.adapter
    return HealthResponse(
        status="healthy" if adapter and adapter.is_connected else "degraded",
        adapter=adapter.name if adapter else "none",
        connected=adapter.is_connected if adapter else False,
        topic=publisher.topic,
    )
