"""
Tests for the greeting: weather classification, post-processing, location resolution, full compose.
"""
import asyncio
import random

import httpx
import pytest

from billboard.core.errors import GenerationFailed, InvalidLocation
from billboard.data.talking_points import TALKING_POINTS
from billboard.models.weather import WeatherCategory
from billboard.services.lookup import LookupClient, LookupConfig, LookupGateway
from billboard.services.message_composer import (
    MessageComposer,
    classify_weather,
    postprocess_greeting,
    resolve_coordinates,
)
from tests.conftest import fake_agent


def _transport(*, postcode="21224", weather_status=200, geocode_status=200, condition="clear sky", temp=70.4):
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        if request.url.path.endswith("/reverse"):
            if geocode_status != 200:
                return httpx.Response(geocode_status, text="geocoder down")
            address = {"postcode": postcode} if postcode else {}
            return httpx.Response(200, json={"address": address})
        if weather_status != 200:
            return httpx.Response(weather_status, json={"message": "Invalid API key"})
        return httpx.Response(
            200,
            json={"name": "Baltimore", "weather": [{"description": condition}], "main": {"temp": temp}},
        )

    return httpx.MockTransport(handler), calls


def _gateway(transport, rng):
    config = LookupConfig(
        weather_api_key="test-key",
        weather_base_url="https://weather.test/data/2.5",
        geocode_base_url="https://geo.test",
        user_agent="test-agent",
    )
    return LookupGateway(LookupClient(config, transport=transport), rng=rng)


class TestClassifyWeather:
    def test_rain_wins_over_temperature(self):
        assert classify_weather("light rain", 99) is WeatherCategory.RAIN
        assert classify_weather("Shower Rain", 40) is WeatherCategory.RAIN
        assert classify_weather("drizzle", 70) is WeatherCategory.RAIN

    def test_hot_by_temperature_or_word(self):
        assert classify_weather("clear", 95) is WeatherCategory.HOT
        assert classify_weather("hot and hazy", 60) is WeatherCategory.HOT

    def test_normal_otherwise(self):
        assert classify_weather("clear", 70) is WeatherCategory.NORMAL
        assert classify_weather("clear", 80) is WeatherCategory.NORMAL


class TestPostprocess:
    def test_clean_greeting_only_gets_talking_point(self):
        assert postprocess_greeting("Good morning, Canton!", "Stay cool.") == "Good morning, Canton! Stay cool."

    def test_strips_edge_quotes_and_curls_apostrophes(self):
        assert postprocess_greeting("\"It's a fine day\"", "Point.") == "It’s a fine day. Point."

    def test_no_talking_point_leaves_punctuation_alone(self):
        assert postprocess_greeting("'Hello Hampden'") == "Hello Hampden"


class TestResolveCoordinates:
    def test_named_location_case_insensitive(self):
        assert resolve_coordinates("NYC", None, None) == (40.7128, -74.0060)

    def test_unknown_key_falls_back_to_body(self):
        assert resolve_coordinates("atlantis", 39.28, -76.57) == (39.28, -76.57)

    def test_missing_coordinates(self):
        with pytest.raises(InvalidLocation):
            resolve_coordinates(None, 39.28, None)
        with pytest.raises(InvalidLocation):
            resolve_coordinates("atlantis", None, None)

    def test_numeric_strings_are_accepted(self):
        assert resolve_coordinates(None, "39.28", "-76.57") == (39.28, -76.57)

    def test_key_wins_over_malformed_coordinates(self):
        assert resolve_coordinates("sf", "abc", [1]) == (37.7749, -122.4194)

    def test_malformed_coordinates(self):
        for lat, lon in (("abc", "x"), ([39.28], -76.57), (39.28, {"v": 1}), (True, -76.57)):
            with pytest.raises(InvalidLocation) as exc_info:
                resolve_coordinates(None, lat, lon)
            assert exc_info.value.detail == "Missing latitude or longitude"


class TestComposeGreeting:
    def test_full_pipeline_is_deterministic_with_seeded_rng(self):
        transport, _ = _transport(postcode="21224", condition="clear sky", temp=70.4)
        agent = fake_agent("'Canton's corners hum today'")

        def compose(seed):
            rng = random.Random(seed)
            composer = MessageComposer(_gateway(transport, rng), agent=agent, rng=rng)
            return asyncio.run(composer.compose_greeting(latitude=39.28, longitude=-76.57))

        first, second = compose(7), compose(7)
        assert first.text == second.text
        assert first.location == "Baltimore"
        greeting, _, point = first.text.partition(". ")
        assert greeting == "Canton’s corners hum today"
        assert point in TALKING_POINTS["normal"]

        prompt = agent.run.call_args.args[0]
        assert "location: Baltimore" in prompt
        assert "Highlights: arts, dining, Polish-American community, revitalization." in prompt
        assert any(n in prompt for n in ("Highlandtown", "Canton", "Brewers Hill"))

    def test_geocode_failure_degrades_to_no_neighborhood(self):
        transport, _ = _transport(geocode_status=503, condition="moderate rain")
        agent = fake_agent("Wet streets, warm hearts!")
        rng = random.Random(1)
        composer = MessageComposer(_gateway(transport, rng), agent=agent, rng=rng)
        greeting = asyncio.run(composer.compose_greeting(location_key="baltimore"))

        assert "Neighborhood:" not in agent.run.call_args.args[0]
        assert greeting.text.split("! ", 1)[1] in TALKING_POINTS["rain"]

    def test_unknown_zip_is_not_an_error(self):
        transport, _ = _transport(postcode="10001")
        agent = fake_agent("Hi there.")
        composer = MessageComposer(_gateway(transport, random.Random(2)), agent=agent)
        greeting = asyncio.run(composer.compose_greeting(location_key="nyc"))
        assert greeting.text.startswith("Hi there. ")

    def test_weather_failure_is_fatal(self):
        transport, _ = _transport(weather_status=401)
        agent = fake_agent()
        composer = MessageComposer(_gateway(transport, random.Random(3)), agent=agent)
        with pytest.raises(GenerationFailed) as exc:
            asyncio.run(composer.compose_greeting(location_key="sf"))
        assert exc.value.detail == "Failed to fetch weather"
        agent.run.assert_not_called()

    def test_completion_failure_is_fatal(self):
        transport, _ = _transport()
        composer = MessageComposer(
            _gateway(transport, random.Random(4)), agent=fake_agent(error=RuntimeError("boom"))
        )
        with pytest.raises(GenerationFailed):
            asyncio.run(composer.compose_greeting(location_key="sf"))

    def test_invalid_location_makes_no_calls(self):
        transport, calls = _transport()
        composer = MessageComposer(_gateway(transport, random.Random(5)), agent=fake_agent())
        with pytest.raises(InvalidLocation):
            asyncio.run(composer.compose_greeting())
        assert calls == []
