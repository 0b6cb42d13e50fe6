"""
FastAPI app entrypoint.

Smart billboard: location/weather greeting, energy-assistant chat, food preference capture + admin list.
"""
import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse

# Load .env from backend/ before any app code
load_dotenv(Path(__file__).resolve().parent.parent / ".env")

from billboard.api.routes import chat, generate_message, store_food
from billboard.config import settings
from billboard.services.conversation import ConversationEngine
from billboard.services.message_composer import MessageComposer
from billboard.services.preference_store import (
    InMemoryPreferenceBackend,
    PreferenceStoreAdapter,
    build_dynamodb_backend,
)

if settings.openai_api_key:
    os.environ["OPENAI_API_KEY"] = settings.openai_api_key

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.composer = MessageComposer()
    app.state.engine = ConversationEngine()
    # Fallback list is owned by this app instance, not module state
    app.state.preference_store = PreferenceStoreAdapter(
        primary=build_dynamodb_backend(settings),
        fallback=InMemoryPreferenceBackend(),
    )
    logger.info(
        "Billboard ready (model=%s, store=%s)",
        settings.ai_model,
        "dynamodb:" + settings.dynamodb_table_name if app.state.preference_store.primary_configured else "memory",
    )
    yield


app = FastAPI(title="Smart Billboard", version="0.1.0", lifespan=lifespan)

# CORS: dev origins + optional CORS_ORIGINS env (comma-separated) for a separately hosted frontend
_cors_origins = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
    "http://localhost:8000",
    "http://127.0.0.1:8000",
]
if settings.cors_origins:
    _cors_origins.extend(o.strip() for o in settings.cors_origins.split(",") if o.strip())
app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(chat.router, prefix="/chat", tags=["chat"])
app.include_router(generate_message.router, tags=["greeting"])
app.include_router(store_food.router, tags=["food"])


_STATIC_DIR = Path(__file__).resolve().parent / "static"


@app.get("/", include_in_schema=False)
def chat_ui():
    """Billboard chat page."""
    return FileResponse(_STATIC_DIR / "index.html", media_type="text/html")


@app.get("/admin", include_in_schema=False)
def admin_ui():
    """Food preference list, refreshed every 30 seconds."""
    return FileResponse(_STATIC_DIR / "admin.html", media_type="text/html")


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
