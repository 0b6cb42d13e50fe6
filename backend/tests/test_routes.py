"""
Tests for the HTTP surface: status codes, wire shapes, provenance flags.
"""
from unittest.mock import Mock, patch

from billboard.core.errors import GenerationFailed, InvalidLocation
from billboard.models.food_preference import FoodPreferenceRecord
from billboard.services.conversation import ConversationEngine
from billboard.services.message_composer import Greeting, MessageComposer
from billboard.services.preference_store import DynamoDBPreferenceBackend, PreferenceStoreAdapter
from tests.conftest import FakeTable, fake_agent


class FakeComposer:
    def __init__(self, error=None):
        self.error = error
        self.calls = []

    async def compose_greeting(self, location_key=None, latitude=None, longitude=None):
        self.calls.append((location_key, latitude, longitude))
        if self.error:
            raise self.error
        return Greeting("Hello, Fells Point! Perfect day for transformation.", "Baltimore")


class TestChatRoute:
    def test_food_turn(self, api_client, override):
        agent = fake_agent("Great choice!")
        override.engine(ConversationEngine(agent=agent))
        r = api_client.post("/chat", json={
            "message": "I love PIZZA tonight",
            "messages": [{"role": "bot", "content": "What's your favorite food?"}],
        })
        assert r.status_code == 200
        data = r.json()
        assert data["message"] == "Great choice!"
        assert data["isFoodResponse"] is True
        assert data["foodItem"] == "Pizza"
        assert data["timestamp"]

    def test_non_food_turn(self, api_client, override):
        override.engine(ConversationEngine(agent=fake_agent("Try a smart thermostat.")))
        data = api_client.post("/chat", json={"message": "tips?", "messages": []}).json()
        assert data["isFoodResponse"] is False
        assert data["foodItem"] is None

    def test_missing_message_is_400(self, api_client, override):
        agent = fake_agent()
        override.engine(ConversationEngine(agent=agent))
        r = api_client.post("/chat", json={"messages": []})
        assert r.status_code == 400
        assert r.json()["detail"] == "Message is required"
        agent.run.assert_not_called()

    def test_upstream_failure_is_500_without_detail(self, api_client, override):
        override.engine(ConversationEngine(agent=fake_agent(error=RuntimeError("secret upstream body"))))
        r = api_client.post("/chat", json={"message": "hi"})
        assert r.status_code == 500
        assert "secret" not in r.text

    def test_rate_limit_error_is_static_500(self, api_client, override):
        override.engine(ConversationEngine(agent=fake_agent(error=RuntimeError("Error code: 429 - insufficient_quota"))))
        r = api_client.post("/chat", json={"message": "hi"})
        assert r.status_code == 500
        assert r.json()["detail"] == "Failed to generate response"
        assert "billing" not in r.text
        assert "quota" not in r.text

    def test_missing_api_key_is_500(self, api_client, override):
        override.engine(ConversationEngine())
        with patch("billboard.services.conversation.settings.openai_api_key", ""):
            r = api_client.post("/chat", json={"message": "hi"})
        assert r.status_code == 500
        assert r.json()["detail"] == "OpenAI API key not configured"

    def test_missing_message_is_400_even_without_api_key(self, api_client, override):
        override.engine(ConversationEngine())
        with patch("billboard.services.conversation.settings.openai_api_key", ""):
            r = api_client.post("/chat", json={"messages": []})
        assert r.status_code == 400
        assert r.json()["detail"] == "Message is required"


class TestGenerateMessageRoute:
    def test_location_key(self, api_client, override):
        composer = FakeComposer()
        override.composer(composer)
        r = api_client.post("/generate-message?location=Baltimore", json={})
        assert r.status_code == 200
        assert r.json() == {"message": "Hello, Fells Point! Perfect day for transformation.", "location": "Baltimore"}
        assert composer.calls == [("Baltimore", None, None)]

    def test_coordinates_in_body(self, api_client, override):
        composer = FakeComposer()
        override.composer(composer)
        api_client.post("/generate-message", json={"latitude": 39.28, "longitude": -76.6})
        assert composer.calls == [(None, 39.28, -76.6)]

    def test_location_key_ignores_malformed_body(self, api_client, override):
        composer = FakeComposer()
        override.composer(composer)
        r = api_client.post("/generate-message?location=nyc", json={"latitude": "abc", "longitude": [1]})
        assert r.status_code == 200
        r = api_client.post("/generate-message?location=sf", content=b"not json",
                            headers={"Content-Type": "application/json"})
        assert r.status_code == 200
        assert composer.calls == [("nyc", None, None), ("sf", None, None)]

    def test_unknown_key_falls_back_to_body(self, api_client, override):
        composer = FakeComposer()
        override.composer(composer)
        api_client.post("/generate-message?location=atlantis", json={"latitude": "39.28", "longitude": "-76.6"})
        assert composer.calls == [("atlantis", "39.28", "-76.6")]

    def test_bad_coordinates_are_static_400(self, api_client, override):
        override.composer(MessageComposer(lookups=Mock(), agent=fake_agent()))
        bodies = (
            {"json": {"latitude": "abc", "longitude": "x"}},
            {"json": {"latitude": [39.28], "longitude": {"v": 1}}},
            {"json": ["not", "an", "object"]},
            {"content": b"not json", "headers": {"Content-Type": "application/json"}},
        )
        for kwargs in bodies:
            r = api_client.post("/generate-message", **kwargs)
            assert r.status_code == 400
            assert r.json() == {"detail": "Missing latitude or longitude"}

    def test_invalid_location_is_400(self, api_client, override):
        override.composer(FakeComposer(error=InvalidLocation()))
        r = api_client.post("/generate-message", json={})
        assert r.status_code == 400
        assert r.json()["detail"] == "Missing latitude or longitude"

    def test_generation_failure_is_500(self, api_client, override):
        override.composer(FakeComposer(error=GenerationFailed("Failed to fetch weather")))
        r = api_client.post("/generate-message?location=sf")
        assert r.status_code == 500
        assert r.json()["detail"] == "Failed to fetch weather"


class TestStoreFoodRoute:
    def test_store_then_list_memory(self, api_client):
        r = api_client.post("/store-food", json={
            "foodItem": "Pizza", "location": "Baltimore", "timestamp": "2026-10-19T12:00:00Z",
        })
        assert r.status_code == 200
        data = r.json()
        assert data["success"] is True
        assert data["storedInMemory"] is True
        assert "storedInDynamoDB" not in data
        assert data["totalRecords"] == 1
        assert data["record"]["name"] == "User from Baltimore"
        assert data["record"]["timestamp"] == "2026-10-19T12:00:00Z"

        listed = api_client.get("/store-food").json()
        assert listed["success"] is True
        assert listed["fromMemory"] is True
        assert listed["totalCount"] == 1
        assert listed["foodPreferences"] == [data["record"]]

    def test_missing_food_item_is_400_and_stores_nothing(self, api_client, memory_store):
        for body in ({"location": "Baltimore"}, {"foodItem": ""}, {"foodItem": 42}):
            r = api_client.post("/store-food", json=body)
            assert r.status_code == 400
            assert r.json()["detail"] == "Food item is required"
        assert memory_store.list_all().records == []

    def test_missing_food_item_writes_nothing_to_dynamodb(self, api_client, override):
        table = FakeTable()
        existing = FoodPreferenceRecord.create("Crab cakes", "Canton")
        table.put_item(Item=existing.to_item())
        override.store(PreferenceStoreAdapter(primary=DynamoDBPreferenceBackend(table)))
        for body in ({"location": "Baltimore"}, {"foodItem": ""}, {"foodItem": "   "}, {"foodItem": None}):
            r = api_client.post("/store-food", json=body)
            assert r.status_code == 400
            assert r.json()["detail"] == "Food item is required"
        assert list(table.items) == [existing.id]

        listed = api_client.get("/store-food").json()
        assert listed["fromDynamoDB"] is True
        assert [p["id"] for p in listed["foodPreferences"]] == [existing.id]


class TestPages:
    def test_health(self, api_client):
        assert api_client.get("/health").json() == {"status": "ok"}

    def test_chat_and_admin_pages(self, api_client):
        assert "ICF Digital Assistant" in api_client.get("/").text
        assert "Data Analytics" in api_client.get("/admin").text
