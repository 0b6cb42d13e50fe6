"""Weather and reverse-geocoding client: lowest level, sends request only. No validation."""
from typing import Any

import httpx

from billboard.services.lookup.config import LookupConfig


class LookupClient:
    """OpenWeatherMap current weather and Nominatim reverse geocoding."""

    def __init__(
        self,
        config: LookupConfig | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config or LookupConfig()
        # Tests pass an httpx.MockTransport here
        self._transport = transport

    async def _get(self, url: str, params: dict[str, Any], headers: dict[str, str] | None = None) -> dict[str, Any]:
        try:
            async with httpx.AsyncClient(transport=self._transport) as c:
                r = await c.get(url, params=params, headers=headers)
        except Exception as e:
            return {"error": str(e)}
        if not r.is_success:
            return {"error": f"HTTP {r.status_code}", "detail": (r.text[:500] if r.text else None)}
        try:
            return r.json() if r.content else {}
        except Exception:
            return {"_raw_body": (r.text[:2000] if r.text else "")}

    async def reverse_geocode(self, latitude: float, longitude: float) -> dict[str, Any]:
        """GET /reverse (Nominatim). Response has address.postcode when the point resolves."""
        return await self._get(
            f"{self._config.geocode_base_url}/reverse",
            {"lat": latitude, "lon": longitude, "format": "json", "addressdetails": 1},
            headers={"User-Agent": self._config.user_agent},
        )

    async def current_weather(self, latitude: float, longitude: float) -> dict[str, Any]:
        """GET /weather (OpenWeatherMap) in imperial units: name, weather[0].description, main.temp."""
        if not self._config.weather_configured():
            return {"error": "Weather API key not configured. Add WEATHER_API_KEY to .env."}
        return await self._get(
            f"{self._config.weather_base_url}/weather",
            {"lat": latitude, "lon": longitude, "appid": self._config.weather_api_key, "units": "imperial"},
        )
