"""Chat agent: energy-assistant persona. Instructions loaded from chat_agent_instructions.md."""
from pathlib import Path

from pydantic_ai import Agent
from pydantic_ai.settings import ModelSettings

from billboard.config import settings
from billboard.core.constants import CHAT_MAX_TOKENS, CHAT_TEMPERATURE

_INSTRUCTIONS_PATH = Path(__file__).resolve().parent / "chat_agent_instructions.md"
SYSTEM_PROMPT = _INSTRUCTIONS_PATH.read_text().strip()

# defer_model_check: the provider key is only required on the first real run
agent = Agent(
    model=settings.ai_model,
    instructions=SYSTEM_PROMPT,
    model_settings=ModelSettings(max_tokens=CHAT_MAX_TOKENS, temperature=CHAT_TEMPERATURE),
    defer_model_check=True,
)
