import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from ...core.security import verify_bearer_token
from ...models.events import (
    DonationEvent,
    EventEnvelope,
    FollowEvent,
    MusicEvent,
    RaidEvent,
    SubscribeEvent,
)
from ...models.schemas import MusicRequest, PublishResponse
from ...services.event_publisher import EventPublisher, get_event_publisher

router = APIRouter(
    prefix="/api",
    tags=["Events"],
    dependencies=[Depends(verify_bearer_token)],
)
logger = logging.getLogger(__name__)

_FORM_CONTENT_TYPES = {"application/x-www-form-urlencoded", "multipart/form-data"}


def _form_body(**fields: str) -> Dict[str, Any]:
    """OpenAPI request body listing the form alternative to the query parameters."""
    schema = {
        "type": "object",
        "properties": {
            name: {"type": "string", "description": description}
            for name, description in fields.items()
        },
    }
    return {
        "requestBody": {
            "required": False,
            "content": {
                "application/x-www-form-urlencoded": {"schema": schema},
                "multipart/form-data": {"schema": schema},
            },
        }
    }


async def form_params(request: Request) -> Dict[str, str]:
    """Text fields of a form-encoded body, empty for any other body."""
    media_type = request.headers.get("content-type", "").split(";")[0].strip().lower()
    if media_type not in _FORM_CONTENT_TYPES:
        return {}
    form = await request.form()
    return {key: value for key, value in form.items() if isinstance(value, str)}


def _param(name: str, query_value: Optional[str], form: Dict[str, str]) -> Optional[str]:
    # Query string wins over the form body
    if query_value is not None:
        return query_value
    return form.get(name)


async def _publish(publisher: EventPublisher, envelope: EventEnvelope) -> PublishResponse:
    """Publish an envelope and wrap the hub's id in the response."""
    try:
        message_id = await publisher.publish(envelope)
    except RuntimeError as e:
        # Adapter not initialized/connected
        raise HTTPException(status_code=503, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to publish {envelope.type} event: {e}")
        raise HTTPException(
            status_code=500,
            detail=f"Failed to publish event: {str(e)}",
        )

    logger.info(f"Published {envelope.type} event {message_id} to topic {publisher.topic}")
    return PublishResponse(uuid=message_id)


@router.post(
    "/follow",
    response_model=PublishResponse,
    name="api_follow",
    openapi_extra=_form_body(username="Username of the follower."),
)
async def follow(
    username: Optional[str] = Query(None, description="Username of the follower."),
    form: Dict[str, str] = Depends(form_params),
    publisher: EventPublisher = Depends(get_event_publisher),
) -> PublishResponse:
    """
    Announce a new follower.

    Returns the id the hub assigned to the update.
    """
    envelope = FollowEvent(username=_param("username", username, form))
    return await _publish(publisher, envelope)


@router.post(
    "/subscribe",
    response_model=PublishResponse,
    name="api_subscribe",
    openapi_extra=_form_body(
        username="Username of the subscriber.",
        isPrime="Subscription type is 'Prime'.",
        isGift="Subscription type is a gift.",
        recipient="Recipient of a gifted subscription.",
    ),
)
async def subscribe(
    username: Optional[str] = Query(None, description="Username of the subscriber."),
    is_prime: Optional[str] = Query(None, alias="isPrime", description="Subscription type is 'Prime'."),
    is_gift: Optional[str] = Query(None, alias="isGift", description="Subscription type is a gift."),
    recipient: Optional[str] = Query(None, description="Recipient of a gifted subscription."),
    form: Dict[str, str] = Depends(form_params),
    publisher: EventPublisher = Depends(get_event_publisher),
) -> PublishResponse:
    """
    Announce a new subscription.

    `isPrime` and `isGift` are forwarded as given, no boolean coercion.
    """
    envelope = SubscribeEvent(
        username=_param("username", username, form),
        is_prime=_param("isPrime", is_prime, form),
        is_gift=_param("isGift", is_gift, form),
        recipient=_param("recipient", recipient, form),
    )
    return await _publish(publisher, envelope)


@router.post(
    "/donation",
    response_model=PublishResponse,
    name="api_donation",
    openapi_extra=_form_body(username="Username of the donator.", amount="Amount of the donation."),
)
async def donation(
    username: Optional[str] = Query(None, description="Username of the donator."),
    amount: Optional[str] = Query(None, description="Amount of the donation."),
    form: Dict[str, str] = Depends(form_params),
    publisher: EventPublisher = Depends(get_event_publisher),
) -> PublishResponse:
    """Announce a donation."""
    envelope = DonationEvent(
        username=_param("username", username, form),
        amount=_param("amount", amount, form),
    )
    return await _publish(publisher, envelope)


@router.post(
    "/raid",
    response_model=PublishResponse,
    name="api_raid",
    openapi_extra=_form_body(username="Username of the raid initiator.", viewers="Count of viewers in the raid."),
)
async def raid(
    username: Optional[str] = Query(None, description="Username of the raid initiator."),
    viewers: Optional[str] = Query(None, description="Count of viewers in the raid."),
    form: Dict[str, str] = Depends(form_params),
    publisher: EventPublisher = Depends(get_event_publisher),
) -> PublishResponse:
    """Announce an incoming raid."""
    envelope = RaidEvent(
        username=_param("username", username, form),
        viewers=_param("viewers", viewers, form),
    )
    return await _publish(publisher, envelope)


@router.post("/music", response_model=PublishResponse, name="api_music")
async def music(
    body: MusicRequest,
    publisher: EventPublisher = Depends(get_event_publisher),
) -> PublishResponse:
    """
    Announce the song currently playing.

    The body key `base64` is published as `albumImg`.
    A body that is not a JSON object is rejected with 422.
    """
    envelope = MusicEvent(
        album_img=body.album_img,
        author=body.author,
        song=body.song,
        no_sound=body.no_sound,
    )
    return await _publish(publisher, envelope)
