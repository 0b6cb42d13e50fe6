"""Lookup services config: weather key and base URLs from settings, or LookupClient args."""
from billboard.config import settings


class LookupConfig:
    """Credentials and base URLs for the weather and reverse-geocoding providers."""

    __slots__ = ("weather_api_key", "weather_base_url", "geocode_base_url", "user_agent")

    def __init__(
        self,
        *,
        weather_api_key: str | None = None,
        weather_base_url: str | None = None,
        geocode_base_url: str | None = None,
        user_agent: str | None = None,
    ) -> None:
        self.weather_api_key = (weather_api_key or settings.weather_api_key).strip()
        self.weather_base_url = (weather_base_url or settings.weather_base_url).rstrip("/")
        self.geocode_base_url = (geocode_base_url or settings.geocode_base_url).rstrip("/")
        self.user_agent = user_agent or settings.geocode_user_agent

    def weather_configured(self) -> bool:
        return bool(self.weather_api_key)
