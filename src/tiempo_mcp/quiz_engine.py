"""Quiz engine — question generation from a quiz config + score summaries."""

from __future__ import annotations

import asyncio
import logging
import random
from typing import Protocol

from tiempo_mcp.models import FormVariant, Verb
from tiempo_mcp.quiz_models import (
    QuizConfig,
    QuizQuestion,
    QuizSession,
    QuizSummary,
    ScoreTier,
)
from tiempo_mcp.verb_db import ConjugationQuery

logger = logging.getLogger(__name__)

# (lower bound, message), checked top-down
SCORE_MESSAGES = [
    (90, "Excellent"),
    (80, "Very good"),
    (70, "Well done"),
    (60, "Good attempt"),
    (50, "Keep practicing"),
    (0, "Don't give up"),
]


class ConjugationSource(Protocol):
    """Read-only data source the generator queries (see :class:`VerbDB`)."""

    def query_conjugations(self, query: ConjugationQuery) -> list[QuizQuestion]: ...

    def get_verb(self, infinitive: str) -> Verb | None: ...


def build_query(
    config: QuizConfig,
    *,
    include_vosotros: bool,
    favorites: list[str] | None = None,
) -> ConjugationQuery:
    """Translate a quiz config into data-source filters.

    Verb scope takes the first that applies: favorite verbs (when
    ``favorites_only`` is set), the single configured verb, or every verb.
    ``favorites_only`` without any favorites matches nothing.
    """
    if favorites is None:
        favorites = config.favorite_infinitives

    if config.favorites_only:
        infinitives = sorted(set(favorites))
    elif config.verb:
        infinitives = [config.verb]
    else:
        infinitives = None

    return ConjugationQuery(
        infinitives=infinitives,
        moods=config.moods,
        tenses=config.tenses,
        exclude_variants=set() if include_vosotros else {FormVariant.vosotros},
    )


async def generate_questions(
    config: QuizConfig,
    source: ConjugationSource,
    *,
    include_vosotros: bool,
    favorites: list[str] | None = None,
    rng: random.Random | None = None,
) -> list[QuizQuestion]:
    """Generate quiz questions in random order.

    Runs one query against ``source`` in a worker thread, shuffles the
    matches and keeps the first ``config.question_count``. An empty list
    means no conjugation matches the configuration.
    """
    query = build_query(config, include_vosotros=include_vosotros, favorites=favorites)
    logger.info("Quiz query: %s", query.model_dump())

    questions = list(await asyncio.to_thread(source.query_conjugations, query))

    rng = rng or random.Random()
    rng.shuffle(questions)

    if config.question_count is not None:
        questions = questions[: config.question_count]

    if not questions:
        logger.warning("No questions available for config %s", config.model_dump())
    return questions


async def start_session(
    config: QuizConfig,
    source: ConjugationSource,
    *,
    include_vosotros: bool,
    favorites: list[str] | None = None,
    rng: random.Random | None = None,
) -> QuizSession:
    questions = await generate_questions(
        config,
        source,
        include_vosotros=include_vosotros,
        favorites=favorites,
        rng=rng,
    )
    return QuizSession(config=config, questions=questions)


def score_percentage(score: int, total: int) -> int:
    if total == 0:
        return 0
    # Halves round up
    return (200 * score + total) // (2 * total)


def score_message(percentage: int) -> str:
    for lower, message in SCORE_MESSAGES:
        if percentage >= lower:
            return message
    return SCORE_MESSAGES[-1][1]


def score_tier(percentage: int) -> ScoreTier:
    if percentage >= 70:
        return ScoreTier.good
    if percentage >= 50:
        return ScoreTier.warn
    return ScoreTier.bad


def summarize(session: QuizSession) -> QuizSummary:
    total = len(session.questions)
    percentage = score_percentage(session.score, total)
    return QuizSummary(
        score=session.score,
        total=total,
        percentage=percentage,
        message=score_message(percentage),
        color_tier=score_tier(percentage),
    )
