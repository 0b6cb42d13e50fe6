"""Weather report from the lookup gateway and the category derived from it (never stored)."""
from enum import Enum

from pydantic import BaseModel


class WeatherCategory(str, Enum):
    HOT = "hot"
    RAIN = "rain"
    NORMAL = "normal"


class WeatherReport(BaseModel):
    place_name: str
    condition: str
    temp_f: int
