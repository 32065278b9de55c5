"""MCP Server — Spanish verb lookup and conjugation quizzes.

Registers the tool modules on a FastMCP server:
- search_verbs / get_verb / get_conjugations / list_common_verbs  (reference)
- build_quiz / check_answer                                      (practice)
"""

from __future__ import annotations

import argparse
import logging

from mcp.server.fastmcp import FastMCP

from tiempo_mcp.preferences import PreferenceStore
from tiempo_mcp.tools import quiz, verbs
from tiempo_mcp.verb_db import VerbDB

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

mcp = FastMCP("tiempo")

# Shared instances used by the tools
db = VerbDB()
prefs = PreferenceStore()

verbs.register(mcp, db, prefs)
quiz.register(mcp, db, prefs)


def main():
    """Run the MCP server."""
    parser = argparse.ArgumentParser(
        description="Tiempo MCP Server (Spanish verb conjugations)",
    )
    parser.add_argument(
        "--sse",
        type=int,
        metavar="PORT",
        help="Run with SSE transport on specified port",
    )
    parser.add_argument(
        "--http",
        type=int,
        metavar="PORT",
        help="Run with Streamable HTTP transport on specified port",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )
    args = parser.parse_args()

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    # First network transport given wins; neither means stdio
    network = [("sse", args.sse), ("streamable-http", args.http)]
    transport, port = next(((t, p) for t, p in network if p), ("stdio", None))

    logger.info("Starting Tiempo MCP server (transport: %s)...", transport)
    log_database()

    if port is not None:
        mcp.settings.host = "0.0.0.0"
        mcp.settings.port = port
    mcp.run(transport=transport)


def log_database() -> None:
    """Log dataset size at startup."""
    try:
        stats = db.stats()
    except FileNotFoundError:
        logger.warning("Verb database %s not found; tools will fail", db.path)
        return
    logger.info(
        "Loaded %s: %d verbs, %d conjugations",
        db.path,
        stats.verb_count,
        stats.conjugation_count,
    )


if __name__ == "__main__":
    main()
