"""
Session controller: the chat page as an explicit state machine.

IDLE -> RESOLVING_LOCATION -> AWAITING_GREETING -> CONVERSING, or LOCATION_ERROR (terminal).
Every callback (geolocation, greeting, timer, chat reply, store write) comes back as an event on one
asyncio.Queue; effects run as tasks and never touch state directly. User turns are serialized:
a submission while a turn is in flight (busy) or with empty text is dropped.
"""
import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable

from billboard.client.api import BillboardApiClient
from billboard.core.constants import (
    CLIENT_CONNECT_FAILED,
    CLIENT_REPLY_FAILED,
    FOLLOW_UP_DELAY_SECONDS,
    FOOD_QUESTION,
    UNKNOWN_LOCATION,
)
from billboard.models.chat_message import ChatMessage, Role

logger = logging.getLogger(__name__)

Geolocate = Callable[[], Awaitable[tuple[float, float] | None]]

MSG_GEOLOCATION_UNSUPPORTED = "Geolocation is not supported by your browser."
MSG_LOCATION_UNAVAILABLE = "Unable to retrieve your location."
MSG_GREETING_FAILED = "Failed to generate message."
MSG_SERVER_UNREACHABLE = "Failed to connect to server."


class SessionState(str, Enum):
    IDLE = "idle"
    RESOLVING_LOCATION = "resolving_location"
    AWAITING_GREETING = "awaiting_greeting"
    CONVERSING = "conversing"
    LOCATION_ERROR = "location_error"


# Events ---------------------------------------------------------------------

@dataclass(frozen=True)
class Mounted:
    pass


@dataclass(frozen=True)
class LocationResolved:
    latitude: float
    longitude: float


@dataclass(frozen=True)
class LocationUnavailable:
    reason: str


@dataclass(frozen=True)
class GreetingReady:
    text: str
    location: str


@dataclass(frozen=True)
class GreetingFailed:
    reason: str


@dataclass(frozen=True)
class FollowUpDue:
    pass


@dataclass(frozen=True)
class UserSubmitted:
    text: str


@dataclass(frozen=True)
class ReplyReady:
    text: str
    food_item: str | None = None


@dataclass(frozen=True)
class ReplyFailed:
    text: str


Event = (
    Mounted | LocationResolved | LocationUnavailable | GreetingReady | GreetingFailed
    | FollowUpDue | UserSubmitted | ReplyReady | ReplyFailed
)


class SessionController:
    def __init__(
        self,
        api: BillboardApiClient,
        *,
        location_key: str | None = None,
        geolocate: Geolocate | None = None,
        follow_up_delay: float = FOLLOW_UP_DELAY_SECONDS,
        on_message: Callable[[ChatMessage], None] | None = None,
    ):
        self._api = api
        self._location_key = location_key
        self._geolocate = geolocate
        self._follow_up_delay = follow_up_delay
        self._on_message = on_message
        self._queue: asyncio.Queue[Event] = asyncio.Queue()
        self._tasks: set[asyncio.Task] = set()

        self.state = SessionState.IDLE
        self.busy = False
        self.error: str | None = None
        self.location_label = ""
        self.history: list[ChatMessage] = []

    # Public -----------------------------------------------------------------

    def mount(self) -> None:
        self.post(Mounted())

    def submit(self, text: str) -> None:
        self.post(UserSubmitted(text))

    def post(self, event: Event) -> None:
        self._queue.put_nowait(event)

    async def run_until_idle(self) -> None:
        """Process events until the queue is empty and no effect task is still running."""
        while True:
            if not self._queue.empty():
                self._handle(self._queue.get_nowait())
                continue
            if not self._tasks:
                return
            await asyncio.wait(set(self._tasks), return_when=asyncio.FIRST_COMPLETED)

    async def run_forever(self) -> None:
        while True:
            self._handle(await self._queue.get())

    # Transitions ------------------------------------------------------------

    def _handle(self, event: Event) -> None:
        if isinstance(event, Mounted):
            self._on_mounted()
        elif isinstance(event, LocationResolved):
            self._request_greeting(event.latitude, event.longitude)
        elif isinstance(event, LocationUnavailable):
            self._fail_location(event.reason)
        elif isinstance(event, GreetingReady):
            self._on_greeting(event)
        elif isinstance(event, GreetingFailed):
            self._fail_location(event.reason)
        elif isinstance(event, FollowUpDue):
            self._append(Role.ASSISTANT, FOOD_QUESTION)
        elif isinstance(event, UserSubmitted):
            self._on_submitted(event.text)
        elif isinstance(event, (ReplyReady, ReplyFailed)):
            self._on_reply(event)

    def _on_mounted(self) -> None:
        if self.state is not SessionState.IDLE:
            return
        self.state = SessionState.RESOLVING_LOCATION
        if self._location_key:
            self._request_greeting()
        elif self._geolocate is None:
            self._fail_location(MSG_GEOLOCATION_UNSUPPORTED)
        else:
            self._spawn(self._resolve_location())

    def _request_greeting(self, latitude: float | None = None, longitude: float | None = None) -> None:
        if self.state is not SessionState.RESOLVING_LOCATION:
            return
        self.state = SessionState.AWAITING_GREETING
        self._spawn(self._fetch_greeting(latitude, longitude))

    def _fail_location(self, reason: str) -> None:
        self.state = SessionState.LOCATION_ERROR
        self.error = reason
        logger.warning("Session stopped: %s", reason)

    def _on_greeting(self, event: GreetingReady) -> None:
        if self.state is not SessionState.AWAITING_GREETING:
            return
        self.location_label = event.location or UNKNOWN_LOCATION
        self._append(Role.ASSISTANT, event.text)
        self.state = SessionState.CONVERSING
        self._spawn(self._follow_up())

    def _on_submitted(self, text: str) -> None:
        text = text.strip()
        if not text or self.busy:
            return
        if self.state not in (SessionState.AWAITING_GREETING, SessionState.CONVERSING):
            return
        prior = [m.to_wire() for m in self.history]
        self._append(Role.USER, text)
        self.busy = True
        self._spawn(self._send_chat(text, prior))

    def _on_reply(self, event: ReplyReady | ReplyFailed) -> None:
        self.busy = False
        if self.state is SessionState.LOCATION_ERROR:
            return
        self._append(Role.ASSISTANT, event.text)
        if isinstance(event, ReplyReady) and event.food_item:
            self._spawn(self._store_food(event.food_item, self.location_label or UNKNOWN_LOCATION))

    def _append(self, role: Role, content: str) -> None:
        message = ChatMessage(role=role, content=content)
        self.history.append(message)
        if self._on_message:
            self._on_message(message)

    # Effects ----------------------------------------------------------------

    def _spawn(self, coro: Awaitable[None]) -> None:
        task = asyncio.ensure_future(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _resolve_location(self) -> None:
        try:
            coords = await self._geolocate()
        except Exception as e:
            logger.warning("Geolocation failed: %s", e)
            coords = None
        if coords is None:
            self.post(LocationUnavailable(MSG_LOCATION_UNAVAILABLE))
        else:
            self.post(LocationResolved(*coords))

    async def _fetch_greeting(self, latitude: float | None, longitude: float | None) -> None:
        try:
            resp = await self._api.generate_message(self._location_key, latitude, longitude)
        except Exception as e:
            logger.error("Failed to connect to server: %s", e)
            self.post(GreetingFailed(MSG_SERVER_UNREACHABLE))
            return
        if resp.ok:
            self.post(GreetingReady(resp.data.get("message") or "", resp.data.get("location") or ""))
        else:
            self.post(GreetingFailed(resp.error_detail(MSG_GREETING_FAILED)))

    async def _follow_up(self) -> None:
        await asyncio.sleep(self._follow_up_delay)
        self.post(FollowUpDue())

    async def _send_chat(self, text: str, prior: list[dict[str, str]]) -> None:
        try:
            resp = await self._api.chat(text, prior)
        except Exception as e:
            logger.error("Error sending message: %s", e)
            self.post(ReplyFailed(CLIENT_CONNECT_FAILED))
            return
        if not resp.ok:
            self.post(ReplyFailed(CLIENT_REPLY_FAILED))
            return
        food_item = resp.data.get("foodItem") if resp.data.get("isFoodResponse") else None
        self.post(ReplyReady(resp.data.get("message") or "", food_item))

    async def _store_food(self, food_item: str, location: str) -> None:
        # Fire-and-forget: outcome is only logged, never shown and never retried
        try:
            resp = await self._api.store_food(food_item, location)
        except Exception as e:
            logger.error("Error storing food preference: %s", e)
            return
        if resp.ok:
            logger.info("Food preference stored: %s", resp.data.get("message"))
        else:
            logger.error("Failed to store food preference: %s", resp.error_detail("unknown error"))
