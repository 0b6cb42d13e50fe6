"""Lookup gateway: reverse geocode, weather, neighborhood metadata. Validation here; client below just sends the request."""
import logging
import random
from typing import Any

from billboard.core.errors import GenerationFailed
from billboard.data.neighborhoods import get_neighborhood_entry
from billboard.models.weather import WeatherReport
from billboard.services.lookup.client import LookupClient
from billboard.services.lookup.config import LookupConfig

logger = logging.getLogger(__name__)

WEATHER_FAILED = "Failed to fetch weather"


class NeighborhoodInfo:
    """One neighborhood picked from a zip entry, plus all of that zip's highlight tags."""

    __slots__ = ("name", "highlights")

    def __init__(self, name: str, highlights: list[str]):
        self.name = name
        self.highlights = highlights

    def prompt_text(self) -> str:
        return f"Neighborhood: {self.name}. Highlights: {', '.join(self.highlights)}."


class LookupGateway:
    """Wraps the three lookups the greeting needs. Geocoding/neighborhood misses degrade to None."""

    def __init__(self, client: LookupClient | None = None, *, rng: random.Random | None = None):
        self._client = client or LookupClient()
        self._rng = rng or random.Random()

    async def reverse_geocode_zip(self, latitude: float, longitude: float) -> str | None:
        raw = await self._client.reverse_geocode(latitude, longitude)
        if raw.get("error"):
            logger.warning("Reverse geocode failed for %s,%s: %s", latitude, longitude, raw.get("error"))
            return None
        postcode = (raw.get("address") or {}).get("postcode")
        return str(postcode).strip() if postcode else None

    async def weather(self, latitude: float, longitude: float) -> WeatherReport:
        """Current weather. Any provider failure raises GenerationFailed (fatal for the greeting)."""
        raw = await self._client.current_weather(latitude, longitude)
        if raw.get("error") or "_raw_body" in raw:
            logger.error("Weather lookup failed: %s %s", raw.get("error"), raw.get("detail") or "")
            raise GenerationFailed(WEATHER_FAILED)
        return WeatherReport(
            place_name=raw.get("name") or "",
            condition=_first_description(raw),
            temp_f=_rounded_temp(raw),
        )

    def neighborhood(self, zip_code: str | None) -> NeighborhoodInfo | None:
        entry = get_neighborhood_entry(zip_code)
        if not entry:
            return None
        return NeighborhoodInfo(self._rng.choice(entry["neighborhoods"]), list(entry["highlights"]))


def _first_description(raw: dict[str, Any]) -> str:
    weather = raw.get("weather") or []
    if weather and isinstance(weather[0], dict) and weather[0].get("description"):
        return weather[0]["description"]
    return "unknown weather"


def _rounded_temp(raw: dict[str, Any]) -> int:
    try:
        return round(float((raw.get("main") or {}).get("temp")))
    except (TypeError, ValueError):
        return 0


__all__ = ["LookupClient", "LookupConfig", "LookupGateway", "NeighborhoodInfo"]
