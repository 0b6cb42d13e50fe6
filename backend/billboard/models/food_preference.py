"""
Food preference record: created once per detected food mention, never mutated or deleted.

Wire/table attribute names are the short ones the admin page reads (name, food, timestamp).
"""
import time
import uuid
from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, field_validator

from billboard.core.constants import UNKNOWN_LOCATION


def new_record_id() -> str:
    """Epoch millis plus a short random suffix so same-millisecond writes stay unique."""
    return f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:6]}"


class FoodPreferenceRecord(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(default_factory=new_record_id)
    display_name: str = Field(alias="name")
    food_item: str = Field(alias="food")
    location: str = UNKNOWN_LOCATION
    created_at: str = Field(alias="timestamp")

    @field_validator("food_item", mode="after")
    @classmethod
    def food_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("food item must not be empty")
        return v

    @classmethod
    def create(cls, food_item: str, location: str | None = None, timestamp: str | None = None) -> "FoodPreferenceRecord":
        """New record for a detected food; display name is derived from the location label."""
        location = location or UNKNOWN_LOCATION
        return cls(
            name=f"User from {location}",
            food=food_item,
            location=location,
            timestamp=timestamp or datetime.now(timezone.utc).isoformat(),
        )

    def to_item(self) -> dict[str, str]:
        """Wire/table shape: { id, name, food, location, timestamp }."""
        return self.model_dump(by_alias=True)
