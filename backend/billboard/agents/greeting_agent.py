"""Greeting agent: one short billboard greeting per call. Prompt template in greeting_prompt.md."""
from pathlib import Path

from pydantic_ai import Agent
from pydantic_ai.settings import ModelSettings

from billboard.config import settings
from billboard.core.constants import GREETING_MAX_TOKENS

_PROMPT_PATH = Path(__file__).resolve().parent / "greeting_prompt.md"
PROMPT_TEMPLATE = _PROMPT_PATH.read_text().strip()

agent = Agent(
    model=settings.ai_model,
    model_settings=ModelSettings(max_tokens=GREETING_MAX_TOKENS),
    defer_model_check=True,
)


def build_prompt(location: str, neighborhood_info: str = "") -> str:
    return PROMPT_TEMPLATE.replace("{{location}}", location).replace("{{neighborhood_info}}", neighborhood_info)
