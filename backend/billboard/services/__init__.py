from billboard.services.conversation import ConversationEngine, extract_food_item, is_food_message
from billboard.services.message_composer import MessageComposer, classify_weather, postprocess_greeting
from billboard.services.preference_store import PreferenceStoreAdapter, build_dynamodb_backend

__all__ = [
    "ConversationEngine",
    "MessageComposer",
    "PreferenceStoreAdapter",
    "build_dynamodb_backend",
    "classify_weather",
    "extract_food_item",
    "is_food_message",
    "postprocess_greeting",
]
