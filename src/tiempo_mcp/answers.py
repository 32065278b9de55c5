"""Accent- and case-insensitive answer checking."""

from __future__ import annotations

import re
import unicodedata

_COMBINING_MARKS = re.compile("[\u0300-\u036f]")


def normalize(text: str) -> str:
    """Canonical comparable form: trimmed, case-folded, diacritics removed.

    >>> normalize("  Hablé ")
    'hable'
    """
    text = unicodedata.normalize("NFD", text.strip().casefold())
    # A stripped mark can expose outer whitespace; strip again so the
    # result is a fixed point.
    return _COMBINING_MARKS.sub("", text).strip()


def is_correct(user_answer: str, correct_answer: str) -> bool:
    # Internal whitespace is compared as-is.
    return normalize(user_answer) == normalize(correct_answer)
