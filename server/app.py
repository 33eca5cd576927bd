"""FastAPI server for spellbound application."""

import logging
import os
from typing import Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

logger = logging.getLogger(__name__)

from core.campaign import CampaignStore
from core.config import DEFAULT_MODEL_NAME
from core.errors import ContentUnavailableError
from core.generator import OfflineGenerator
from core.interfaces import Storage, WordGenerator
from core.mastery import MasteryStore
from core.models import GAME_TITLES, Difficulty, GameVariant, HomophoneChallenge
from core.orchestrator import ContentOrchestrator, ContentResult
from core.settings import SettingsStore

from server.file_storage import FileStorage


# Pydantic models for API
class ContentRequest(BaseModel):
    variant: GameVariant
    difficulty: Difficulty = Difficulty.MEDIUM
    is_offline_mode: Optional[bool] = None
    theme: Optional[str] = None


class RemedialRequest(BaseModel):
    variant: GameVariant
    difficulty: Difficulty = Difficulty.MEDIUM
    missed_words: list[str]
    is_offline_mode: Optional[bool] = None


class ContentResponse(BaseModel):
    kind: str  # 'words' or 'homophones'
    items: list[dict]
    source: str
    offline_enabled: bool
    is_offline_mode: bool


class ProgressRequest(BaseModel):
    word: str
    was_correct: bool


class SettingsUpdate(BaseModel):
    theme: Optional[str] = None
    tts_volume: Optional[float] = None
    sfx_volume: Optional[float] = None
    vibration: Optional[str] = None
    voice_accent: Optional[str] = None
    is_offline_mode: Optional[bool] = None


class CampaignRequest(BaseModel):
    theme: Optional[str] = None


class LevelResultRequest(BaseModel):
    difficulty: Difficulty
    correct: int
    total: int


# Global state (in production, use proper DI)
storage: Storage = None
settings_store: SettingsStore = None
mastery_store: MasteryStore = None
campaign_store: CampaignStore = None
orchestrator: ContentOrchestrator = None


def init_services(new_storage: Storage, remote: WordGenerator | None) -> None:
    """Wire stores, generator and orchestrator around a storage backend."""
    global storage, settings_store, mastery_store, campaign_store, orchestrator
    storage = new_storage
    settings_store = SettingsStore(storage)
    mastery_store = MasteryStore(storage)
    campaign_store = CampaignStore(storage)
    orchestrator = ContentOrchestrator(remote, OfflineGenerator(mastery_store), settings_store)
    orchestrator.on_offline_enabled(
        lambda: logger.warning("AI unavailable. Switched to offline mode")
    )


app = FastAPI(title="Spellbound API", description="Spelling practice content API")


@app.on_event("startup")
async def startup():
    """Initialize storage and the remote generator on startup."""
    if orchestrator is not None:
        return

    # File storage by default, set SPELLBOUND_STORAGE=postgres to use PostgreSQL
    storage_type = os.environ.get('SPELLBOUND_STORAGE', 'file')
    if storage_type == 'postgres':
        from server.postgres_storage import PostgresStorage
        new_storage = PostgresStorage()
        logger.info("Using PostgreSQL storage")
    else:
        new_storage = FileStorage()
        logger.info("Using file storage")

    # Get API key from environment variable first, then fall back to config file
    api_key = os.environ.get('GEMINI_API_KEY')
    if not api_key and isinstance(new_storage, FileStorage):
        try:
            api_key = new_storage.load_config().get('gemini_api_key')
        except FileNotFoundError:
            pass

    remote = None
    if api_key:
        from server.gemini_provider import GeminiProvider
        remote = GeminiProvider(api_key, model_name=DEFAULT_MODEL_NAME)
        logger.info(f"Remote generator initialized: {DEFAULT_MODEL_NAME}")
    else:
        logger.warning("GEMINI_API_KEY not set; content will come from the offline corpus")

    init_services(new_storage, remote)


def _content_response(result: ContentResult) -> ContentResponse:
    homophones = bool(result.items) and isinstance(result.items[0], HomophoneChallenge)
    return ContentResponse(
        kind='homophones' if homophones else 'words',
        items=[item.to_dict() for item in result.items],
        source=result.source,
        offline_enabled=result.offline_enabled,
        is_offline_mode=settings_store.is_offline_mode
    )


@app.get("/")
async def root():
    return {"name": "spellbound", "offline_mode": settings_store.is_offline_mode}


@app.get("/api/variants")
async def list_variants():
    """List game variants with display titles."""
    return {"variants": [{"id": v.value, "title": GAME_TITLES[v]} for v in GameVariant]}


@app.post("/api/content", response_model=ContentResponse)
async def request_content(request: ContentRequest):
    """Get the challenge set for a new game."""
    try:
        result = await orchestrator.request_content(
            request.variant, request.difficulty,
            is_offline_mode=request.is_offline_mode, theme=request.theme
        )
    except ContentUnavailableError as e:
        raise HTTPException(status_code=503, detail=str(e))
    return _content_response(result)


@app.post("/api/remedial", response_model=ContentResponse)
async def request_remedial(request: RemedialRequest):
    """Get a practice set for missed words."""
    if not request.missed_words:
        raise HTTPException(status_code=400, detail="No missed words")
    try:
        result = await orchestrator.request_remedial(
            request.variant, request.difficulty, request.missed_words,
            is_offline_mode=request.is_offline_mode
        )
    except ContentUnavailableError as e:
        raise HTTPException(status_code=503, detail=str(e))
    return _content_response(result)


@app.post("/api/progress")
async def track_progress(request: ProgressRequest):
    """Record one answer for mastery tracking."""
    mastery_store.track_progress(request.word, request.was_correct)
    return {"word": request.word, "mastery_score": mastery_store.get_mastery_score(request.word)}


@app.get("/api/mastery/weak")
async def weak_words(limit: int = 10):
    """Least-mastered words first."""
    return {"words": mastery_store.get_weak_words(limit)}


@app.get("/api/mastery/{word}")
async def word_mastery(word: str):
    record = mastery_store.get_record(word)
    if record is None:
        raise HTTPException(status_code=404, detail="Word not seen yet")
    return {**record.to_dict(), "mastery_score": record.mastery_score}


@app.get("/api/settings")
async def get_settings():
    return settings_store.load().to_dict()


@app.put("/api/settings")
async def update_settings(request: SettingsUpdate):
    """Partially update settings. Turning offline mode off re-enables the remote generator."""
    changes = {k: v for k, v in request.model_dump().items() if v is not None}
    return settings_store.update(**changes).to_dict()


@app.get("/api/campaign")
async def get_campaign():
    campaign = campaign_store.load()
    if campaign is None:
        raise HTTPException(status_code=404, detail="No active campaign")
    return campaign.to_dict()


@app.post("/api/campaign")
async def start_campaign(request: CampaignRequest):
    """Start a new four-level campaign. Offline mode always uses the default theme."""
    theme = None if settings_store.is_offline_mode else request.theme
    return campaign_store.start(theme).to_dict()


@app.post("/api/campaign/complete")
async def complete_level(request: LevelResultRequest):
    if campaign_store.load() is None:
        raise HTTPException(status_code=404, detail="No active campaign")
    unlocked = campaign_store.complete_level(request.difficulty, request.correct, request.total)
    return {"unlocked": unlocked, "campaign": campaign_store.load().to_dict()}


@app.delete("/api/campaign")
async def reset_campaign():
    campaign_store.reset()
    return {"success": True}
