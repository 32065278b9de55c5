"""MCP tools for verb lookup and conjugation tables."""

from __future__ import annotations

from mcp.server.fastmcp import FastMCP

from tiempo_mcp.preferences import PreferenceStore
from tiempo_mcp.verb_db import VerbDB


def register(mcp: FastMCP, db: VerbDB, prefs: PreferenceStore) -> None:
    @mcp.tool()
    def search_verbs(query: str, limit: int = 50) -> list[dict]:
        """Find Spanish verbs whose infinitive starts with the given text.

        Matching is a prefix match on the infinitive (e.g. "habl" finds
        "hablar"). Returns infinitive and English translation.

        Args:
            query: Start of the infinitive (e.g. "habl", "ten")
            limit: Max verbs to return (default 50)
        """
        return [v.model_dump() for v in db.search_verbs(query, limit)]

    @mcp.tool()
    def get_verb(infinitive: str) -> dict | None:
        """Look up a single verb by its exact infinitive.

        Returns None when the verb is not in the dataset.

        Args:
            infinitive: Infinitive, accents included (e.g. "oír")
        """
        verb = db.get_verb(infinitive)
        return verb.model_dump() if verb else None

    @mcp.tool()
    def get_conjugations(
        infinitive: str,
        include_vosotros: bool | None = None,
    ) -> dict | None:
        """Get the full conjugation table of a verb.

        Forms are grouped by mood (Indicativo, Subjuntivo, Imperativo
        Afirmativo, Imperativo Negativo) and then by tense, each listing one
        form per performer (yo, tú, él/ella/usted, nosotros/nosotras,
        vosotros/vosotras, ellos/ellas/ustedes).

        Args:
            infinitive: Infinitive (e.g. "hablar")
            include_vosotros: Include vosotros/vosotras forms
                (default: the user's stored setting)
        """
        if include_vosotros is None:
            include_vosotros = prefs.settings.use_vosotros
        table = db.get_conjugation_table(infinitive, include_vosotros)
        return table.model_dump() if table else None

    @mcp.tool()
    def list_common_verbs() -> list[dict]:
        """List the most frequent Spanish verbs available, with frequency rank."""
        return [v.model_dump() for v in db.common_verbs()]
