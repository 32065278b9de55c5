"""MCP tools for building conjugation quizzes and checking answers."""

from __future__ import annotations

from mcp.server.fastmcp import FastMCP

from tiempo_mcp.answers import is_correct
from tiempo_mcp.preferences import PreferenceStore
from tiempo_mcp.quiz_engine import generate_questions
from tiempo_mcp.quiz_models import QuizConfig
from tiempo_mcp.verb_db import VerbDB


def register(mcp: FastMCP, db: VerbDB, prefs: PreferenceStore) -> None:
    @mcp.tool()
    async def build_quiz(
        verb: str | None = None,
        moods: list[str] | None = None,
        tenses: list[str] | None = None,
        question_count: int | None = 10,
        favorites_only: bool = False,
    ) -> dict:
        """Build a conjugation quiz and return its questions.

        Each question asks for the form of a verb in a given mood, tense and
        performer. Questions come in random order. Vosotros/vosotras forms are
        included only if the user's settings allow them.

        Available moods: Indicativo, Subjuntivo, Imperativo Afirmativo,
        Imperativo Negativo.
        Available tenses: Presente, Pretérito, Imperfecto, Futuro, Condicional,
        Pretérito perfecto, Pluscuamperfecto, Pretérito anterior,
        Futuro perfecto, Condicional perfecto.

        Args:
            verb: Quiz a single verb (None = any verb)
            moods: Moods to include (None = all)
            tenses: Tenses to include (None = all)
            question_count: Max questions (None = every matching form)
            favorites_only: Only use the user's favorite verbs
        """
        favorites = prefs.favorites()
        config = QuizConfig(
            verb=verb,
            moods=moods or [],
            tenses=tenses or [],
            question_count=question_count,
            favorites_only=favorites_only,
            favorite_infinitives=favorites if favorites_only else [],
        )
        questions = await generate_questions(
            config,
            db,
            include_vosotros=prefs.settings.use_vosotros,
            favorites=favorites,
        )
        return {
            "quiz_config": config.model_dump(),
            "total_questions_generated": len(questions),
            "questions": [q.model_dump() for q in questions],
        }

    @mcp.tool()
    def check_answer(user_answer: str, correct_answer: str) -> dict:
        """Check a conjugation answer, ignoring accents, case and outer spaces.

        Args:
            user_answer: What the student typed (e.g. "hable")
            correct_answer: The expected form (e.g. "hablé")
        """
        return {"is_correct": is_correct(user_answer, correct_answer)}
