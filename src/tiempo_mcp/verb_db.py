"""SQLite data access layer for the bundled Spanish verb database."""

from __future__ import annotations

import logging
import os
import random
import sqlite3
from collections.abc import Iterable, Mapping
from contextlib import closing
from pathlib import Path

from pydantic import BaseModel, Field

from tiempo_mcp.common_verbs import COMMON_VERBS, verb_rank
from tiempo_mcp.models import (
    MOODS,
    PERFORMERS,
    TENSES,
    CommonVerb,
    Conjugation,
    ConjugationTable,
    DatabaseStats,
    FormVariant,
    MoodTable,
    TenseTable,
    Verb,
    performers_for,
)
from tiempo_mcp.quiz_models import QuizQuestion

logger = logging.getLogger(__name__)

# Default database location (override with TIEMPO_DB env var)
DB_PATH = Path(
    os.environ.get("TIEMPO_DB", Path(__file__).parent.parent.parent / "data" / "tiempo.db")
)

SEARCH_LIMIT = 50

SCHEMA = """
CREATE TABLE IF NOT EXISTS verbs (
    infinitive TEXT PRIMARY KEY,
    translation TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS conjugations (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    infinitive TEXT NOT NULL,
    mood TEXT NOT NULL,
    tense TEXT NOT NULL,
    performer TEXT NOT NULL,
    performer_en TEXT NOT NULL,
    conjugated_form TEXT NOT NULL,
    FOREIGN KEY (infinitive) REFERENCES verbs(infinitive)
);

CREATE INDEX IF NOT EXISTS idx_infinitive ON conjugations(infinitive);
CREATE INDEX IF NOT EXISTS idx_mood_tense ON conjugations(mood, tense);
"""

_MOOD_ORDER = {m: i for i, m in enumerate(MOODS)}
_TENSE_ORDER = {t: i for i, t in enumerate(TENSES)}
_PERFORMER_ORDER = {p: i for i, p in enumerate(PERFORMERS)}


class ConjugationQuery(BaseModel):
    """Filters for :meth:`VerbDB.query_conjugations`, combined with AND."""

    infinitives: list[str] | None = None  # None = any verb, [] = no verb
    moods: list[str] = Field(default_factory=list)  # Empty = any mood
    tenses: list[str] = Field(default_factory=list)  # Empty = any tense
    exclude_variants: set[FormVariant] = Field(default_factory=set)


def _placeholders(values: list) -> str:
    return ", ".join("?" for _ in values)


def _escape_like(text: str) -> str:
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _table_key(conj: Conjugation) -> tuple[int, int, int, int]:
    return (
        _MOOD_ORDER.get(conj.mood, len(_MOOD_ORDER)),
        _TENSE_ORDER.get(conj.tense, len(_TENSE_ORDER)),
        _PERFORMER_ORDER.get(conj.performer, len(_PERFORMER_ORDER)),
        conj.id,
    )


class VerbDB:
    """Read-only queries against the verb/conjugation database.

    Every call opens its own connection, so an instance can be shared between
    the event loop and worker threads.
    """

    def __init__(self, path: Path | str = DB_PATH) -> None:
        self.path = Path(path)

    def _connect(self) -> sqlite3.Connection:
        if not self.path.exists():
            raise FileNotFoundError(f"Verb database not found: {self.path}")
        conn = sqlite3.connect(f"{self.path.resolve().as_uri()}?mode=ro", uri=True)
        conn.row_factory = sqlite3.Row
        return conn

    def _fetch_all(self, sql: str, params: Iterable = ()) -> list[dict]:
        params = tuple(params)
        logger.debug("SQL: %s %s", " ".join(sql.split()), params)
        with closing(self._connect()) as conn:
            return [dict(r) for r in conn.execute(sql, params).fetchall()]

    # --- Verbs ---

    def get_verb(self, infinitive: str) -> Verb | None:
        rows = self._fetch_all(
            "SELECT infinitive, translation FROM verbs WHERE infinitive = ?",
            [infinitive],
        )
        return Verb(**rows[0]) if rows else None

    def list_verbs(self) -> list[Verb]:
        rows = self._fetch_all(
            "SELECT infinitive, translation FROM verbs ORDER BY infinitive"
        )
        return [Verb(**r) for r in rows]

    def search_verbs(self, query: str, limit: int = SEARCH_LIMIT) -> list[Verb]:
        """Prefix search on the infinitive (autocomplete)."""
        query = query.strip()
        if not query:
            return []
        rows = self._fetch_all(
            "SELECT infinitive, translation FROM verbs "
            "WHERE infinitive LIKE ? ESCAPE '\\' ORDER BY infinitive LIMIT ?",
            [f"{_escape_like(query)}%", limit],
        )
        return [Verb(**r) for r in rows]

    def random_verbs(self, count: int, rng: random.Random | None = None) -> list[Verb]:
        verbs = self.list_verbs()
        rng = rng or random.Random()
        return rng.sample(verbs, min(count, len(verbs)))

    def common_verbs(self) -> list[CommonVerb]:
        """The most frequent verbs that exist in this database, by rank."""
        found = {
            r["infinitive"]: r["translation"]
            for r in self._fetch_all(
                "SELECT infinitive, translation FROM verbs "
                f"WHERE infinitive IN ({_placeholders(COMMON_VERBS)})",
                COMMON_VERBS,
            )
        }
        return [
            CommonVerb(rank=verb_rank(inf), infinitive=inf, translation=found[inf])
            for inf in COMMON_VERBS
            if inf in found
        ]

    # --- Conjugations ---

    def get_conjugations(
        self, infinitive: str, include_vosotros: bool = True
    ) -> list[Conjugation]:
        """All conjugations of a verb in table order."""
        sql = (
            "SELECT id, infinitive, mood, tense, performer, performer_en, "
            "conjugated_form FROM conjugations WHERE infinitive = ?"
        )
        params: list = [infinitive]
        if not include_vosotros:
            excluded = performers_for({FormVariant.vosotros})
            sql += f" AND performer NOT IN ({_placeholders(excluded)})"
            params.extend(excluded)
        conjugations = [Conjugation(**r) for r in self._fetch_all(sql, params)]
        return sorted(conjugations, key=_table_key)

    def get_conjugation_table(
        self, infinitive: str, include_vosotros: bool = True
    ) -> ConjugationTable | None:
        """Conjugations of a verb grouped by mood, then tense."""
        verb = self.get_verb(infinitive)
        if verb is None:
            return None

        moods: list[MoodTable] = []
        for conj in self.get_conjugations(infinitive, include_vosotros):
            if not moods or moods[-1].mood != conj.mood:
                moods.append(MoodTable(mood=conj.mood, tenses=[]))
            tenses = moods[-1].tenses
            if not tenses or tenses[-1].tense != conj.tense:
                tenses.append(TenseTable(tense=conj.tense, conjugations=[]))
            tenses[-1].conjugations.append(conj)

        return ConjugationTable(verb=verb, moods=moods)

    def query_conjugations(self, query: ConjugationQuery) -> list[QuizQuestion]:
        """Conjugations joined with their verb, as quiz questions.

        Rows come back in id order; callers that need a random order shuffle
        the result themselves.
        """
        conditions: list[str] = []
        params: list = []

        if query.infinitives is not None:
            if not query.infinitives:
                return []
            conditions.append(f"c.infinitive IN ({_placeholders(query.infinitives)})")
            params.extend(query.infinitives)

        if query.moods:
            conditions.append(f"c.mood IN ({_placeholders(query.moods)})")
            params.extend(query.moods)

        if query.tenses:
            conditions.append(f"c.tense IN ({_placeholders(query.tenses)})")
            params.extend(query.tenses)

        excluded = performers_for(query.exclude_variants)
        if excluded:
            conditions.append(f"c.performer NOT IN ({_placeholders(excluded)})")
            params.extend(excluded)

        where = f"WHERE {' AND '.join(conditions)}" if conditions else ""
        sql = f"""
            SELECT
              c.infinitive,
              v.translation,
              c.mood,
              c.tense,
              c.performer,
              c.performer_en,
              c.conjugated_form AS correct_answer
            FROM conjugations c
            INNER JOIN verbs v ON c.infinitive = v.infinitive
            {where}
            ORDER BY c.id
        """
        rows = self._fetch_all(sql, params)
        logger.info("Conjugation query matched %d rows", len(rows))
        return [QuizQuestion(**r) for r in rows]

    # --- Metadata ---

    def list_moods(self) -> list[str]:
        rows = self._fetch_all("SELECT DISTINCT mood FROM conjugations")
        return sorted(
            (r["mood"] for r in rows),
            key=lambda m: (_MOOD_ORDER.get(m, len(_MOOD_ORDER)), m),
        )

    def list_tenses(self) -> list[str]:
        rows = self._fetch_all("SELECT DISTINCT tense FROM conjugations")
        return sorted(
            (r["tense"] for r in rows),
            key=lambda t: (_TENSE_ORDER.get(t, len(_TENSE_ORDER)), t),
        )

    def stats(self) -> DatabaseStats:
        with closing(self._connect()) as conn:
            verb_count = conn.execute("SELECT COUNT(*) FROM verbs").fetchone()[0]
            conj_count = conn.execute("SELECT COUNT(*) FROM conjugations").fetchone()[0]
        return DatabaseStats(verb_count=verb_count, conjugation_count=conj_count)


def create_database(
    path: Path | str,
    verbs: Iterable[Verb],
    conjugations: Iterable[Mapping[str, str]],
) -> VerbDB:
    """Build a verb database from Python records.

    Each conjugation mapping needs ``infinitive``, ``mood``, ``tense``,
    ``performer`` and ``conjugated_form``; ``performer_en`` defaults to the
    English label of a known performer.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with closing(sqlite3.connect(path)) as conn:
        with conn:
            conn.executescript(SCHEMA)
            conn.executemany(
                "INSERT INTO verbs (infinitive, translation) VALUES (?, ?)",
                [(v.infinitive, v.translation) for v in verbs],
            )
            rows = []
            for c in conjugations:
                performer_en = c.get("performer_en") or PERFORMERS.get(
                    c["performer"], ("",)
                )[0]
                rows.append(
                    (
                        c["infinitive"],
                        c["mood"],
                        c["tense"],
                        c["performer"],
                        performer_en,
                        c["conjugated_form"],
                    )
                )
            conn.executemany(
                "INSERT INTO conjugations "
                "(infinitive, mood, tense, performer, performer_en, conjugated_form) "
                "VALUES (?, ?, ?, ?, ?, ?)",
                rows,
            )
    logger.info("Created %s with %d conjugations", path, len(rows))
    return VerbDB(path)
