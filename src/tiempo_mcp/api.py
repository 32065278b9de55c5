"""FastAPI HTTP layer wrapping VerbDB, the preference store and the quiz engine."""

from __future__ import annotations

import hmac
import logging
import os
import random

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from tiempo_mcp.common_verbs import verb_rank
from tiempo_mcp.models import MOODS, TENSES, Verb
from tiempo_mcp.preferences import AppSettings, PreferenceStore
from tiempo_mcp.quiz_engine import start_session, summarize
from tiempo_mcp.quiz_models import (
    QUESTION_COUNTS,
    QuizConfig,
    QuizResult,
    QuizSession,
    SessionError,
)
from tiempo_mcp.verb_db import VerbDB

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Tiempo API",
    description="Spanish verb conjugation reference and quizzes",
    version="0.1.0",
)

API_KEY = os.getenv("API_KEY")
if not API_KEY:
    logger.warning("API_KEY not set. All requests will be allowed.")


@app.middleware("http")
async def verify_api_key(request: Request, call_next):
    if API_KEY and request.url.path != "/health":
        key = request.headers.get("x-api-key", "")
        if not hmac.compare_digest(key, API_KEY):
            return JSONResponse(status_code=401, content={"detail": "Invalid API key"})
    return await call_next(request)


@app.exception_handler(FileNotFoundError)
async def database_missing(request: Request, exc: FileNotFoundError):
    logger.error("Data unavailable: %s", exc)
    return JSONResponse(status_code=503, content={"detail": str(exc)})


@app.exception_handler(SessionError)
async def session_misuse(request: Request, exc: SessionError):
    return JSONResponse(status_code=409, content={"detail": str(exc)})


@app.get("/health")
def health():
    """Unauthenticated health check."""
    return {"status": "ok"}


class SessionSlot:
    """The single active quiz; starting a new quiz discards the old one."""

    def __init__(self) -> None:
        self.session: QuizSession | None = None

    def require(self) -> QuizSession:
        if self.session is None:
            raise HTTPException(status_code=404, detail="No active quiz")
        return self.session


db = VerbDB()
prefs = PreferenceStore()
active = SessionSlot()
rng = random.Random()


# --- Request / response models ---


class QuizSetupRequest(BaseModel):
    verb: str | None = None
    moods: list[str] = Field(default_factory=lambda: ["Indicativo"])
    tenses: list[str] = Field(default_factory=lambda: ["Presente"])
    question_count: int | None = Field(default=10, ge=1)
    favorites_only: bool = False


class AnswerRequest(BaseModel):
    answer: str


class QuestionPrompt(BaseModel):
    """A question as shown before it is answered (no correct answer)."""

    infinitive: str
    translation: str
    mood: str
    tense: str
    performer: str
    performer_en: str


class QuizState(BaseModel):
    config: QuizConfig
    total_questions: int
    current_question_index: int
    score: int
    is_completed: bool
    answered_current: bool
    current_question: QuestionPrompt | None
    results: list[QuizResult]


def _state(session: QuizSession) -> dict:
    question = session.current_question
    state = QuizState(
        config=session.config,
        total_questions=len(session.questions),
        current_question_index=session.current_question_index,
        score=session.score,
        is_completed=session.is_completed,
        answered_current=session.answered_current,
        current_question=(
            QuestionPrompt(**question.model_dump(exclude={"correct_answer"}))
            if question
            else None
        ),
        results=session.results,
    )
    return state.model_dump()


def _require_verb(infinitive: str) -> Verb:
    verb = db.get_verb(infinitive)
    if verb is None:
        raise HTTPException(status_code=404, detail=f"Verb not found: {infinitive}")
    return verb


# --- Verb endpoints ---


@app.get("/api/stats")
def get_stats():
    """Verb and conjugation counts."""
    return db.stats().model_dump()


@app.get("/api/verbs")
def list_verbs(q: str | None = None, limit: int = 50):
    """Search verbs by infinitive prefix, or list all verbs without a query."""
    if q is not None:
        verbs = db.search_verbs(q, limit)
    else:
        verbs = db.list_verbs()
    return [v.model_dump() for v in verbs]


@app.get("/api/verbs/random")
def random_verbs(count: int = 10):
    """Random verbs for practice."""
    return [v.model_dump() for v in db.random_verbs(count, rng)]


@app.get("/api/verbs/{infinitive}")
def get_verb(infinitive: str):
    """Look up a verb with its favorite status and frequency rank."""
    verb = _require_verb(infinitive)
    return {
        **verb.model_dump(),
        "is_favorite": prefs.is_favorite(infinitive),
        "rank": verb_rank(infinitive),
    }


@app.get("/api/verbs/{infinitive}/conjugations")
def get_conjugations(infinitive: str, include_vosotros: bool | None = None):
    """Full conjugation table grouped by mood and tense.

    ``include_vosotros`` defaults to the stored setting.
    """
    if include_vosotros is None:
        include_vosotros = prefs.settings.use_vosotros
    table = db.get_conjugation_table(infinitive, include_vosotros)
    if table is None:
        raise HTTPException(status_code=404, detail=f"Verb not found: {infinitive}")
    return table.model_dump()


@app.get("/api/common-verbs")
def common_verbs():
    """The most frequent Spanish verbs present in the database, by rank."""
    return [v.model_dump() for v in db.common_verbs()]


# --- Settings / favorites ---


@app.get("/api/settings")
def get_settings():
    return prefs.settings.model_dump()


@app.put("/api/settings")
def update_settings(settings: AppSettings):
    return prefs.update_settings(**settings.model_dump()).model_dump()


@app.get("/api/favorites")
def list_favorites():
    """Favorite verbs with their translations."""
    favorites = []
    for infinitive in prefs.favorites():
        verb = db.get_verb(infinitive)
        if verb is None:
            logger.warning("Favorite %s is not in the database", infinitive)
            continue
        favorites.append(verb.model_dump())
    return favorites


@app.put("/api/favorites/{infinitive}")
def add_favorite(infinitive: str):
    _require_verb(infinitive)
    prefs.add_favorite(infinitive)
    return {"infinitive": infinitive, "is_favorite": True}


@app.delete("/api/favorites/{infinitive}")
def remove_favorite(infinitive: str):
    prefs.remove_favorite(infinitive)
    return {"infinitive": infinitive, "is_favorite": False}


@app.post("/api/favorites/{infinitive}/toggle")
def toggle_favorite(infinitive: str):
    if not prefs.is_favorite(infinitive):
        _require_verb(infinitive)
    return {"infinitive": infinitive, "is_favorite": prefs.toggle_favorite(infinitive)}


# --- Quiz endpoints ---


@app.get("/api/quiz/options")
def quiz_options():
    """Choices offered when setting up a quiz."""
    return {"moods": MOODS, "tenses": TENSES, "question_counts": QUESTION_COUNTS}


@app.post("/api/quiz")
async def start_quiz(req: QuizSetupRequest):
    """Generate questions and make them the active quiz."""
    favorites = prefs.favorites()
    config = QuizConfig(
        **req.model_dump(),
        favorite_infinitives=favorites if req.favorites_only else [],
    )
    session = await start_session(
        config,
        db,
        include_vosotros=prefs.settings.use_vosotros,
        favorites=favorites,
        rng=rng,
    )
    if not session.questions:
        raise HTTPException(
            status_code=422,
            detail="No questions available for this configuration",
        )
    active.session = session
    logger.info("New quiz: %d questions", len(session.questions))
    return _state(session)


@app.get("/api/quiz")
def get_quiz():
    return _state(active.require())


@app.post("/api/quiz/answer")
def submit_answer(req: AnswerRequest):
    """Check an answer for the current question. Does not move on."""
    return active.require().submit_answer(req.answer).model_dump()


@app.post("/api/quiz/advance")
def advance_quiz():
    session = active.require()
    session.advance()
    return _state(session)


@app.post("/api/quiz/reset")
def reset_quiz():
    """Try the same questions again."""
    session = active.require()
    session.reset()
    return _state(session)


@app.get("/api/quiz/summary")
def quiz_summary():
    session = active.require()
    if not session.is_completed:
        raise HTTPException(status_code=409, detail="Quiz is not completed yet")
    return summarize(session).model_dump()


@app.delete("/api/quiz")
def discard_quiz():
    active.session = None
    return {"status": "discarded"}


def main():
    """Run the API server."""
    import uvicorn

    port = int(os.environ.get("PORT", 8000))
    uvicorn.run(app, host="0.0.0.0", port=port)


if __name__ == "__main__":
    main()
