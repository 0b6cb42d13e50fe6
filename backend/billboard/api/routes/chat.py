"""
Chat endpoint: one turn against the energy assistant. History is sent by the client on every call.
"""
import logging
from datetime import datetime, timezone
from typing import Any, NoReturn

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from billboard.api.deps import get_engine
from billboard.core.errors import InvalidInput, error_to_http
from billboard.services.conversation import MSG_MESSAGE_REQUIRED, ConversationEngine

router = APIRouter()
logger = logging.getLogger(__name__)


class HistoryItem(BaseModel):
    role: str | None = None
    content: str | None = None


class ChatRequest(BaseModel):
    message: Any = None  # validated in the route so a missing message is a 400, not a 422
    messages: list[HistoryItem] | None = None


class ChatResponse(BaseModel):
    message: str
    isFoodResponse: bool
    foodItem: str | None = None
    timestamp: str


def _handle_error(exc: Exception, log_message: str) -> NoReturn:
    logger.exception(log_message)
    raise error_to_http(exc) from exc


@router.post("", response_model=ChatResponse)
async def chat(body: ChatRequest, engine: ConversationEngine = Depends(get_engine)) -> ChatResponse:
    """
    Send a message plus prior { role, content } turns; returns the reply and, for food turns,
    the detected food item (the client stores it via POST /store-food).
    """
    if not body.message or not isinstance(body.message, str):
        raise error_to_http(InvalidInput(MSG_MESSAGE_REQUIRED))
    history = [m.model_dump() for m in body.messages or []]
    try:
        turn = await engine.respond(body.message, history)
    except Exception as e:  # noqa: BLE001
        _handle_error(e, "Chat failed")
    return ChatResponse(
        message=turn.reply,
        isFoodResponse=turn.is_food_response,
        foodItem=turn.food_item,
        timestamp=datetime.now(timezone.utc).isoformat(),
    )
