"""
Message composer: the opening billboard greeting.

Resolve coordinates -> zip (best-effort) -> neighborhood (best-effort) -> weather (required)
-> weather category -> talking point -> one completion call -> post-process.
"""
import logging
import random
import re
from typing import Any

from pydantic_ai import Agent

from billboard.agents import greeting_agent
from billboard.core.constants import GREETING_FALLBACK
from billboard.core.errors import GenerationFailed, InvalidLocation
from billboard.data.locations import get_coordinates
from billboard.data.talking_points import TALKING_POINTS
from billboard.models.weather import WeatherCategory
from billboard.services.lookup import LookupGateway

logger = logging.getLogger(__name__)

HOT_THRESHOLD_F = 80
_RAIN_WORDS = ("rain", "drizzle", "shower")
_EDGE_QUOTES_RE = re.compile(r"^['\"]+|['\"]+$")
_TERMINAL_PUNCTUATION = (".", "!", "?")


class Greeting:
    __slots__ = ("text", "location")

    def __init__(self, text: str, location: str):
        self.text = text
        self.location = location


def classify_weather(condition: str, temp_f: float) -> WeatherCategory:
    """Rain words win over heat; 'hot' in the condition or temp above 80F is hot; everything else normal."""
    lower = (condition or "").lower()
    if any(w in lower for w in _RAIN_WORDS):
        return WeatherCategory.RAIN
    if "hot" in lower or temp_f > HOT_THRESHOLD_F:
        return WeatherCategory.HOT
    return WeatherCategory.NORMAL


def pick_talking_point(category: WeatherCategory, rng: random.Random) -> str:
    pool = TALKING_POINTS.get(category.value) or []
    return rng.choice(pool) if pool else ""


def postprocess_greeting(raw: str, talking_point: str = "") -> str:
    """
    Strip edge quotes, curl straight apostrophes, then append the talking point as its own sentence
    (adding a period first if the greeting has no terminal punctuation).
    """
    message = _EDGE_QUOTES_RE.sub("", raw.strip())
    message = message.replace("'", "’")
    if talking_point:
        message = message.strip()
        if not message.endswith(_TERMINAL_PUNCTUATION):
            message += "."
        message += " " + talking_point
    return message


def resolve_coordinates(
    location_key: str | None,
    latitude: Any = None,
    longitude: Any = None,
) -> tuple[float, float]:
    """
    Named location first (case-insensitive); otherwise both coordinates must be present, non-zero
    and numeric. Raw body values are accepted, so strings like "39.28" still resolve.
    """
    coords = get_coordinates(location_key)
    if coords:
        return coords["latitude"], coords["longitude"]
    if not latitude or not longitude or isinstance(latitude, bool) or isinstance(longitude, bool):
        raise InvalidLocation()
    try:
        return float(latitude), float(longitude)
    except (TypeError, ValueError) as e:
        raise InvalidLocation() from e


class MessageComposer:
    def __init__(
        self,
        lookups: LookupGateway | None = None,
        *,
        agent: Agent | None = None,
        rng: random.Random | None = None,
    ):
        self._rng = rng or random.Random()
        self._lookups = lookups or LookupGateway(rng=self._rng)
        self._agent = agent or greeting_agent.agent

    async def compose_greeting(
        self,
        location_key: str | None = None,
        latitude: Any = None,
        longitude: Any = None,
    ) -> Greeting:
        lat, lon = resolve_coordinates(location_key, latitude, longitude)

        zip_code = await self._lookups.reverse_geocode_zip(lat, lon)
        neighborhood = self._lookups.neighborhood(zip_code)
        neighborhood_info = neighborhood.prompt_text() if neighborhood else ""

        weather = await self._lookups.weather(lat, lon)
        category = classify_weather(weather.condition, weather.temp_f)
        talking_point = pick_talking_point(category, self._rng)
        logger.info(
            "Greeting for %s (zip=%s, weather=%r %sF -> %s)",
            weather.place_name, zip_code, weather.condition, weather.temp_f, category.value,
        )

        prompt = greeting_agent.build_prompt(weather.place_name, neighborhood_info)
        try:
            result = await self._agent.run(prompt)
        except Exception as e:
            logger.exception("Greeting completion failed")
            raise GenerationFailed() from e
        raw = (result.output if isinstance(result.output, str) else str(result.output)).strip()
        text = postprocess_greeting(raw or GREETING_FALLBACK, talking_point)
        return Greeting(text=text, location=weather.place_name)
