"""
Request dependencies: services live on app.state (built once in main.lifespan) so tests can
swap them with app.dependency_overrides.
"""
from fastapi import Request

from billboard.services.conversation import ConversationEngine
from billboard.services.message_composer import MessageComposer
from billboard.services.preference_store import PreferenceStoreAdapter


def get_composer(request: Request) -> MessageComposer:
    return request.app.state.composer


def get_engine(request: Request) -> ConversationEngine:
    return request.app.state.engine


def get_preference_store(request: Request) -> PreferenceStoreAdapter:
    return request.app.state.preference_store
