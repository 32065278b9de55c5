"""The 100 most frequent Spanish verbs, most frequent first."""

from __future__ import annotations

COMMON_VERBS = [
    "ser", "haber", "estar", "tener", "hacer",
    "poder", "decir", "ir", "ver", "dar",
    "saber", "querer", "llegar", "pasar", "deber",
    "poner", "parecer", "quedar", "creer", "hablar",
    "llevar", "dejar", "seguir", "encontrar", "llamar",
    "venir", "pensar", "salir", "volver", "tomar",
    "conocer", "vivir", "sentir", "tratar", "mirar",
    "contar", "empezar", "esperar", "buscar", "existir",
    "entrar", "trabajar", "escribir", "perder", "producir",
    "ocurrir", "entender", "pedir", "recibir", "recordar",
    "terminar", "permitir", "aparecer", "conseguir", "comenzar",
    "servir", "sacar", "necesitar", "mantener", "resultar",
    "leer", "caer", "cambiar", "presentar", "crear",
    "abrir", "considerar", "oír", "acabar", "cumplir",
    "realizar", "suponer", "comprender", "lograr", "explicar",
    "reconocer", "estudiar", "intentar", "ganar", "formar",
    "traer", "ofrecer", "descubrir", "levantar", "acercar",
    "nacer", "dirigir", "correr", "utilizar", "pagar",
    "ayudar", "gustar", "jugar", "escuchar", "mover",
    "preguntar", "tocar", "mostrar", "amar", "partir",
]

_RANKS = {infinitive: rank for rank, infinitive in enumerate(COMMON_VERBS, start=1)}


def is_common_verb(infinitive: str) -> bool:
    return infinitive in _RANKS


def verb_rank(infinitive: str) -> int | None:
    """1-based frequency rank, or None for verbs outside the list."""
    return _RANKS.get(infinitive)
