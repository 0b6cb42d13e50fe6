"""
Conversation engine: one chat turn against the energy-assistant agent, plus food detection.

Food detection looks only at the user's text and is decided before the completion call.
"""
import logging
from typing import Any, Iterable

from pydantic_ai import Agent
from pydantic_ai.messages import ModelMessage, ModelRequest, ModelResponse, TextPart, UserPromptPart

from billboard.agents import chat_agent
from billboard.config import settings
from billboard.core.constants import CHAT_APOLOGY
from billboard.core.errors import MSG_AI_NOT_CONFIGURED, BillboardError, InvalidInput, UpstreamFailure
from billboard.data.food_keywords import FOOD_KEYWORD_SET, FOOD_KEYWORDS

logger = logging.getLogger(__name__)

MSG_MESSAGE_REQUIRED = "Message is required"


def is_food_message(text: str) -> bool:
    """True if any food keyword occurs anywhere in the text (case-insensitive substring)."""
    lower = text.lower()
    return any(k in lower for k in FOOD_KEYWORDS)


def _capitalize(s: str) -> str:
    return s[:1].upper() + s[1:]


def extract_food_item(text: str) -> str:
    """
    First whitespace token that is itself a keyword, capitalized. Otherwise the first two tokens,
    capitalized, e.g. "hot dogs please" -> "Hot dogs" (best-effort).
    """
    words = text.lower().split()
    for word in words:
        if word in FOOD_KEYWORD_SET:
            return _capitalize(word)
    return _capitalize(" ".join(words[:2]))


def build_message_history(prior: Iterable[dict[str, Any]] | None) -> list[ModelMessage]:
    """
    Replay prior { role, content } turns in order. role 'user' stays user; anything else
    (assistant, bot) is an assistant turn. Entries missing role or content are skipped.
    """
    history: list[ModelMessage] = []
    for msg in prior or []:
        role = msg.get("role")
        content = msg.get("content")
        if not role or not content:
            continue
        if role == "user":
            history.append(ModelRequest(parts=[UserPromptPart(content=content)]))
        else:
            history.append(ModelResponse(parts=[TextPart(content=content)]))
    return history


class ChatTurn:
    __slots__ = ("reply", "food_item")

    def __init__(self, reply: str, food_item: str | None = None):
        self.reply = reply
        self.food_item = food_item

    @property
    def is_food_response(self) -> bool:
        return self.food_item is not None


class ConversationEngine:
    def __init__(self, agent: Agent | None = None):
        self._agent = agent or chat_agent.agent
        # only the default agent talks to OpenAI; injected agents carry their own model
        self._requires_key = agent is None

    async def respond(self, user_text: str, prior_history: Iterable[dict[str, Any]] | None = None) -> ChatTurn:
        if not isinstance(user_text, str) or not user_text:
            raise InvalidInput(MSG_MESSAGE_REQUIRED)
        if self._requires_key and not settings.openai_api_key:
            raise BillboardError(MSG_AI_NOT_CONFIGURED)

        food_item = extract_food_item(user_text) if is_food_message(user_text) else None

        try:
            result = await self._agent.run(user_text, message_history=build_message_history(prior_history))
        except Exception as e:
            logger.exception("Chat completion failed")
            raise UpstreamFailure("Failed to generate response") from e
        reply = (result.output if isinstance(result.output, str) else str(result.output or "")).strip()
        if food_item:
            logger.info("Food mention detected: %s", food_item)
        return ChatTurn(reply=reply or CHAT_APOLOGY, food_item=food_item)
