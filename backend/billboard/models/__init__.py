from billboard.models.chat_message import ChatMessage, Role
from billboard.models.food_preference import FoodPreferenceRecord
from billboard.models.weather import WeatherCategory, WeatherReport

__all__ = [
    "ChatMessage",
    "FoodPreferenceRecord",
    "Role",
    "WeatherCategory",
    "WeatherReport",
]
