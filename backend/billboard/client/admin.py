"""Admin viewer: polls GET /store-food on a fixed interval and keeps the latest list + provenance."""
import asyncio
import logging
from datetime import datetime
from typing import Any, Callable

from billboard.client.api import BillboardApiClient
from billboard.core.constants import ADMIN_REFRESH_INTERVAL_SECONDS

logger = logging.getLogger(__name__)

SOURCE_DYNAMODB = "DynamoDB"
SOURCE_MEMORY = "Memory"
SOURCE_UNKNOWN = "Unknown"


class AdminViewer:
    def __init__(
        self,
        api: BillboardApiClient,
        *,
        interval: float = ADMIN_REFRESH_INTERVAL_SECONDS,
        on_refresh: Callable[["AdminViewer"], None] | None = None,
    ):
        self._api = api
        self._interval = interval
        self._on_refresh = on_refresh
        self.records: list[dict[str, Any]] = []
        self.total = 0
        self.source = SOURCE_UNKNOWN
        self.last_updated: datetime | None = None
        self.error = ""

    async def refresh(self) -> None:
        self.error = ""
        try:
            resp = await self._api.list_food_preferences()
        except Exception as e:
            logger.error("Fetch error: %s", e)
            self.error = "Error connecting to server"
            return
        if not resp.ok or not resp.data.get("success"):
            self.error = "Failed to fetch data"
            return
        self.records = list(resp.data.get("foodPreferences") or [])
        self.total = resp.data.get("totalCount") or 0
        if resp.data.get("fromDynamoDB"):
            self.source = SOURCE_DYNAMODB
        elif resp.data.get("fromMemory"):
            self.source = SOURCE_MEMORY
        else:
            self.source = SOURCE_UNKNOWN
        self.last_updated = datetime.now()

    async def poll(self) -> None:
        """Refresh now, then every `interval` seconds until cancelled."""
        while True:
            await self.refresh()
            if self._on_refresh:
                self._on_refresh(self)
            await asyncio.sleep(self._interval)


def format_timestamp(value: str) -> str:
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).strftime("%Y-%m-%d %H:%M:%S")
    except (AttributeError, ValueError):
        return value
