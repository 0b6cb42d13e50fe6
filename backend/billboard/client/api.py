"""HTTP client for the billboard endpoints. Transport errors propagate as httpx.HTTPError."""
from datetime import datetime, timezone
from typing import Any

import httpx

DEFAULT_BASE_URL = "http://127.0.0.1:8000"


class ApiResponse:
    __slots__ = ("status_code", "data")

    def __init__(self, status_code: int, data: dict[str, Any]):
        self.status_code = status_code
        self.data = data

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    def error_detail(self, default: str) -> str:
        detail = self.data.get("detail") or self.data.get("error")
        return detail if isinstance(detail, str) and detail else default


class BillboardApiClient:
    def __init__(self, base_url: str = DEFAULT_BASE_URL, *, transport: httpx.AsyncBaseTransport | None = None):
        self._client = httpx.AsyncClient(base_url=base_url.rstrip("/"), transport=transport)

    async def _send(self, method: str, path: str, **kwargs: Any) -> ApiResponse:
        r = await self._client.request(method, path, **kwargs)
        try:
            data = r.json() if r.content else {}
        except ValueError:
            data = {}
        return ApiResponse(r.status_code, data if isinstance(data, dict) else {})

    async def generate_message(
        self,
        location_key: str | None = None,
        latitude: float | None = None,
        longitude: float | None = None,
    ) -> ApiResponse:
        params = {"location": location_key} if location_key else None
        body = {} if location_key else {"latitude": latitude, "longitude": longitude}
        return await self._send(
            "POST", "/generate-message", params=params, json=body, headers={"Cache-Control": "no-store"}
        )

    async def chat(self, message: str, messages: list[dict[str, str]]) -> ApiResponse:
        return await self._send("POST", "/chat", json={"message": message, "messages": messages})

    async def store_food(self, food_item: str, location: str, timestamp: str | None = None) -> ApiResponse:
        return await self._send(
            "POST",
            "/store-food",
            json={
                "foodItem": food_item,
                "location": location,
                "timestamp": timestamp or datetime.now(timezone.utc).isoformat(),
            },
        )

    async def list_food_preferences(self) -> ApiResponse:
        return await self._send("GET", "/store-food")

    async def aclose(self) -> None:
        await self._client.aclose()
