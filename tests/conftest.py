"""Shared fixtures: a small verb database built in a temp directory."""

import pytest

from tiempo_mcp.models import PERFORMERS, Verb
from tiempo_mcp.quiz_models import QuizQuestion
from tiempo_mcp.verb_db import VerbDB, create_database

VERBS = [
    Verb(infinitive="hablar", translation="to speak"),
    Verb(infinitive="comer", translation="to eat"),
    Verb(infinitive="vivir", translation="to live"),
    Verb(infinitive="ser", translation="to be"),
    Verb(infinitive="nadar", translation="to swim"),  # no conjugations
]

# (infinitive, mood, tense) -> forms in performer order
FORMS = {
    ("hablar", "Subjuntivo", "Presente"): ["hable", "hables", "hable", "hablemos", "habléis", "hablen"],
    ("comer", "Subjuntivo", "Presente"): ["coma", "comas", "coma", "comamos", "comáis", "coman"],
    ("vivir", "Subjuntivo", "Presente"): ["viva", "vivas", "viva", "vivamos", "viváis", "vivan"],
    ("ser", "Subjuntivo", "Presente"): ["sea", "seas", "sea", "seamos", "seáis", "sean"],
    ("hablar", "Indicativo", "Pretérito"): ["hablé", "hablaste", "habló", "hablamos", "hablasteis", "hablaron"],
    ("comer", "Indicativo", "Pretérito"): ["comí", "comiste", "comió", "comimos", "comisteis", "comieron"],
    ("vivir", "Indicativo", "Pretérito"): ["viví", "viviste", "vivió", "vivimos", "vivisteis", "vivieron"],
    ("ser", "Indicativo", "Pretérito"): ["fui", "fuiste", "fue", "fuimos", "fuisteis", "fueron"],
    ("hablar", "Indicativo", "Presente"): ["hablo", "hablas", "habla", "hablamos", "habláis", "hablan"],
    ("comer", "Indicativo", "Presente"): ["como", "comes", "come", "comemos", "coméis", "comen"],
    ("vivir", "Indicativo", "Presente"): ["vivo", "vives", "vive", "vivimos", "vivís", "viven"],
    ("ser", "Indicativo", "Presente"): ["soy", "eres", "es", "somos", "sois", "son"],
}

TOTAL_CONJUGATIONS = sum(len(forms) for forms in FORMS.values())  # 72


def conjugation_rows():
    performers = list(PERFORMERS)
    for (infinitive, mood, tense), forms in FORMS.items():
        for performer, form in zip(performers, forms):
            yield {
                "infinitive": infinitive,
                "mood": mood,
                "tense": tense,
                "performer": performer,
                "conjugated_form": form,
            }


@pytest.fixture(scope="session")
def db_path(tmp_path_factory):
    path = tmp_path_factory.mktemp("data") / "tiempo.db"
    create_database(path, VERBS, conjugation_rows())
    return path


@pytest.fixture
def verb_db(db_path) -> VerbDB:
    return VerbDB(db_path)


def make_questions(n: int) -> list[QuizQuestion]:
    """``n`` distinct questions whose answers are ``form0`` .. ``form{n-1}``."""
    return [
        QuizQuestion(
            infinitive="hablar",
            translation="to speak",
            mood="Indicativo",
            tense="Presente",
            performer="yo",
            performer_en="I",
            correct_answer=f"form{i}",
        )
        for i in range(n)
    ]
