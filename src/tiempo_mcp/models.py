from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, computed_field


class FormVariant(str, Enum):
    """Regional usage of a conjugated form."""

    common = "common"  # Used everywhere
    vosotros = "vosotros"  # European Spanish informal plural only


# Canonical performer labels -> (English label, variant), in table order
PERFORMERS: dict[str, tuple[str, FormVariant]] = {
    "yo": ("I", FormVariant.common),
    "tú": ("you (informal)", FormVariant.common),
    "él/ella/usted": ("he/she/you (formal)", FormVariant.common),
    "nosotros/nosotras": ("we", FormVariant.common),
    "vosotros/vosotras": ("you all (informal)", FormVariant.vosotros),
    "ellos/ellas/ustedes": ("they/you all (formal)", FormVariant.common),
}

MOODS = [
    "Indicativo",
    "Subjuntivo",
    "Imperativo Afirmativo",
    "Imperativo Negativo",
]

TENSES = [
    "Presente",
    "Pretérito",
    "Imperfecto",
    "Futuro",
    "Condicional",
    "Pretérito perfecto",
    "Pluscuamperfecto",
    "Pretérito anterior",
    "Futuro perfecto",
    "Condicional perfecto",
]


def performer_variant(performer: str) -> FormVariant:
    entry = PERFORMERS.get(performer)
    return entry[1] if entry else FormVariant.common


def performers_for(variants: set[FormVariant]) -> list[str]:
    """Performer labels whose variant is one of ``variants``."""
    return [p for p, (_, v) in PERFORMERS.items() if v in variants]


class Verb(BaseModel):
    model_config = ConfigDict(frozen=True)

    infinitive: str
    translation: str


class Conjugation(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    infinitive: str
    mood: str
    tense: str
    performer: str
    performer_en: str
    conjugated_form: str

    @computed_field
    @property
    def variant(self) -> FormVariant:
        return performer_variant(self.performer)


class TenseTable(BaseModel):
    tense: str
    conjugations: list[Conjugation]


class MoodTable(BaseModel):
    mood: str
    tenses: list[TenseTable]


class ConjugationTable(BaseModel):
    verb: Verb
    moods: list[MoodTable]


class CommonVerb(BaseModel):
    rank: int
    infinitive: str
    translation: str


class DatabaseStats(BaseModel):
    verb_count: int
    conjugation_count: int
