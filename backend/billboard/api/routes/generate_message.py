"""Greeting endpoint: location (named key or coordinates) + weather + neighborhood -> billboard message."""
import logging
from typing import Any

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel

from billboard.api.deps import get_composer
from billboard.core.errors import error_to_http
from billboard.data.locations import get_coordinates
from billboard.services.message_composer import MessageComposer

router = APIRouter()
logger = logging.getLogger(__name__)


class GenerateMessageResponse(BaseModel):
    message: str
    location: str


async def _read_body(request: Request) -> dict[str, Any]:
    """Raw JSON body as a dict; a missing, non-JSON or non-object body reads as {}."""
    try:
        payload = await request.json()
    except ValueError:
        return {}
    return payload if isinstance(payload, dict) else {}


@router.post("/generate-message", response_model=GenerateMessageResponse)
async def generate_message(
    request: Request,
    location: str | None = None,
    composer: MessageComposer = Depends(get_composer),
) -> GenerateMessageResponse:
    """
    ?location=nyc|sf|baltimore wins over body coordinates; unknown keys fall back to the body.
    The body is only read when the key does not resolve, so it is never validated otherwise.
    400 when neither resolves, 500 when weather or the completion call fails.
    """
    payload = {} if get_coordinates(location) else await _read_body(request)
    try:
        greeting = await composer.compose_greeting(
            location_key=location,
            latitude=payload.get("latitude"),
            longitude=payload.get("longitude"),
        )
    except Exception as e:  # noqa: BLE001
        logger.warning("Generate message failed: %s", e, exc_info=True)
        raise error_to_http(e) from e
    return GenerateMessageResponse(message=greeting.text, location=greeting.location)
