"""Food preference storage: POST one detected food, GET everything for the admin page."""
import logging
from typing import Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from billboard.api.deps import get_preference_store
from billboard.core.errors import InvalidInput, error_to_http
from billboard.models.food_preference import FoodPreferenceRecord
from billboard.services.preference_store import BACKEND_DYNAMODB, PreferenceStoreAdapter

router = APIRouter()
logger = logging.getLogger(__name__)

MSG_FOOD_REQUIRED = "Food item is required"


class StoreFoodRequest(BaseModel):
    foodItem: Any = None  # validated in the route so a missing item is a 400, not a 422
    location: str | None = None
    timestamp: str | None = None


@router.post("/store-food")
def store_food(body: StoreFoodRequest, store: PreferenceStoreAdapter = Depends(get_preference_store)):
    """Append one record. Provenance: storedInDynamoDB or storedInMemory (+ totalRecords)."""
    if not isinstance(body.foodItem, str) or not body.foodItem.strip():
        raise error_to_http(InvalidInput(MSG_FOOD_REQUIRED))
    record = FoodPreferenceRecord.create(body.foodItem, body.location, body.timestamp)
    result = store.append(record)
    if result.backend == BACKEND_DYNAMODB:
        return {
            "success": True,
            "message": "Food preference stored in DynamoDB",
            "storedInDynamoDB": True,
            "record": record.to_item(),
        }
    return {
        "success": True,
        "message": "Food preference stored in memory (DynamoDB not configured)",
        "storedInMemory": True,
        "record": record.to_item(),
        "totalRecords": result.total_records,
    }


@router.get("/store-food")
def list_food_preferences(store: PreferenceStoreAdapter = Depends(get_preference_store)) -> dict[str, Any]:
    """All records (unordered for DynamoDB, insertion order for memory)."""
    result = store.list_all()
    out: dict[str, Any] = {
        "success": True,
        "foodPreferences": [r.to_item() for r in result.records],
        "totalCount": len(result.records),
    }
    if result.backend == BACKEND_DYNAMODB:
        out["fromDynamoDB"] = True
    else:
        out["fromMemory"] = True
    return out
