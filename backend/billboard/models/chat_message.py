"""
Chat message: one turn in a browser/CLI session. Never persisted; history lives with the session.
"""
import itertools
import time
from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

_seq = itertools.count()


class Role(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"


def new_message_id() -> str:
    """Creation-time-ordered id: epoch millis plus a process-wide sequence (sorts as a string)."""
    return f"{int(time.time() * 1000):013d}-{next(_seq) % 1_000_000:06d}"


class ChatMessage(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_message_id)
    role: Role
    content: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    def to_wire(self) -> dict[str, str]:
        """Shape sent to POST /chat as prior history: { role, content }."""
        return {"role": self.role.value, "content": self.content}
