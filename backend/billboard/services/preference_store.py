"""
Food preference store: DynamoDB table when AWS credentials are configured, otherwise (or when a
DynamoDB call fails) an in-memory list owned by this adapter instance.

Every result says which backend served it so the admin page can show provenance.
Writes are a single unconditional put; duplicate submissions create duplicate records.
"""
import logging
from typing import Any

import boto3
from pydantic import ValidationError

from billboard.config import Settings, settings as default_settings
from billboard.models.food_preference import FoodPreferenceRecord

logger = logging.getLogger(__name__)

BACKEND_DYNAMODB = "dynamodb"
BACKEND_MEMORY = "memory"


class InMemoryPreferenceBackend:
    """Process-local, insertion-ordered. Not shared across processes; lost on restart."""

    name = BACKEND_MEMORY

    def __init__(self) -> None:
        self._records: list[FoodPreferenceRecord] = []

    def put(self, record: FoodPreferenceRecord) -> None:
        self._records.append(record)

    def scan(self) -> list[FoodPreferenceRecord]:
        return list(self._records)

    def __len__(self) -> int:
        return len(self._records)


class DynamoDBPreferenceBackend:
    """Key-value table with `id` as the hash key. Scan order is whatever DynamoDB returns."""

    name = BACKEND_DYNAMODB

    def __init__(self, table: Any):
        self._table = table

    def put(self, record: FoodPreferenceRecord) -> None:
        self._table.put_item(Item=record.to_item())

    def scan(self) -> list[FoodPreferenceRecord]:
        items: list[dict[str, Any]] = []
        kwargs: dict[str, Any] = {}
        while True:
            page = self._table.scan(**kwargs)
            items.extend(page.get("Items") or [])
            last_key = page.get("LastEvaluatedKey")
            if not last_key:
                break
            kwargs["ExclusiveStartKey"] = last_key
        records = []
        for item in items:
            try:
                records.append(FoodPreferenceRecord(**item))
            except ValidationError as e:
                logger.warning("Skipping malformed food preference item %s: %s", item.get("id"), e)
        return records


def build_dynamodb_backend(cfg: Settings | None = None) -> DynamoDBPreferenceBackend | None:
    """DynamoDB backend from settings, or None when credentials are absent (memory only)."""
    cfg = cfg or default_settings
    if not cfg.dynamodb_configured():
        logger.info("AWS credentials not set; food preferences will be kept in memory")
        return None
    resource = boto3.resource(
        "dynamodb",
        region_name=cfg.aws_region,
        aws_access_key_id=cfg.aws_access_key_id,
        aws_secret_access_key=cfg.aws_secret_access_key,
    )
    return DynamoDBPreferenceBackend(resource.Table(cfg.dynamodb_table_name))


class StoreResult:
    __slots__ = ("record", "backend", "total_records")

    def __init__(self, record: FoodPreferenceRecord, backend: str, total_records: int | None = None):
        self.record = record
        self.backend = backend
        self.total_records = total_records


class ListResult:
    __slots__ = ("records", "backend")

    def __init__(self, records: list[FoodPreferenceRecord], backend: str):
        self.records = records
        self.backend = backend


class PreferenceStoreAdapter:
    """append/list_all over a primary (optional) and a fallback backend, both injected."""

    def __init__(
        self,
        primary: DynamoDBPreferenceBackend | None = None,
        fallback: InMemoryPreferenceBackend | None = None,
    ):
        self._primary = primary
        self._fallback = fallback if fallback is not None else InMemoryPreferenceBackend()

    @property
    def primary_configured(self) -> bool:
        return self._primary is not None

    def append(self, record: FoodPreferenceRecord) -> StoreResult:
        if self._primary is not None:
            try:
                self._primary.put(record)
                logger.info("Food preference stored in DynamoDB: %s (%s)", record.food_item, record.id)
                return StoreResult(record, BACKEND_DYNAMODB)
            except Exception as e:
                logger.error("DynamoDB put failed, falling back to memory: %s", e, exc_info=True)
        self._fallback.put(record)
        logger.info("Food preference stored in memory: %s (%s)", record.food_item, record.id)
        return StoreResult(record, BACKEND_MEMORY, total_records=len(self._fallback))

    def list_all(self) -> ListResult:
        if self._primary is not None:
            try:
                return ListResult(self._primary.scan(), BACKEND_DYNAMODB)
            except Exception as e:
                logger.error("DynamoDB scan failed, falling back to memory: %s", e, exc_info=True)
        return ListResult(self._fallback.scan(), BACKEND_MEMORY)
