"""
Application settings (Pydantic Settings).
"""
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings

# .env next to backend/ (parent of billboard/)
_env_path = Path(__file__).resolve().parent.parent / ".env"


class Settings(BaseSettings):
    openai_api_key: str = ""  # OPENAI_API_KEY in .env
    ai_model: str = "openai:gpt-3.5-turbo"
    # OpenWeatherMap current weather; WEATHER_API_KEY in .env
    weather_api_key: str = ""
    weather_base_url: str = "https://api.openweathermap.org/data/2.5"
    # Nominatim reverse geocoding (requires an identifying User-Agent)
    geocode_base_url: str = "https://nominatim.openstreetmap.org"
    geocode_user_agent: str = "smart-billboard-v2/1.0"
    # DynamoDB: both keys must be set, otherwise food preferences stay in memory
    aws_region: str = "us-east-2"
    aws_access_key_id: str = ""
    aws_secret_access_key: str = ""
    dynamodb_table_name: str = "billboard-answer"
    cors_origins: str = ""  # comma-separated, added to the dev origins
    log_level: str = "INFO"

    class Config:
        env_file = _env_path
        extra = "ignore"

    @field_validator(
        "openai_api_key",
        "weather_api_key",
        "aws_access_key_id",
        "aws_secret_access_key",
        mode="after",
    )
    @classmethod
    def strip_secret(cls, v: str) -> str:
        return (v or "").strip()

    def dynamodb_configured(self) -> bool:
        return bool(self.aws_access_key_id and self.aws_secret_access_key)


settings = Settings()
