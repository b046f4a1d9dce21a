"""
UserState + category → search query plan.

Rules fire in order of decreasing specificity. The first three (stress,
anxiety, energy) form a cascade where only the first match contributes; the
remaining rules are independent. The plan is deduplicated in first-seen order
and capped at MAX_QUERIES to bound catalog calls per request.
"""
from typing import Callable, Dict, List, Optional, Tuple

from equilibrium_video.models import UserState

MAX_QUERIES = 5

LANGUAGE_WORDS = {"pt": "português", "en": "english", "es": "español"}
DEFAULT_LANGUAGE_WORD = "português"

# {lang} is replaced by the request language word.
STRESS_QUERIES = [
    "meditação guiada stress ansiedade reduzir {lang}",
    "música relaxante dormir profundo ondas cerebrais",
    "sons da natureza chuva floresta relaxamento 4K",
    "yoga nidra relaxamento profundo guiado",
]
ANXIETY_QUERIES = [
    "exercícios respiração ansiedade guiado",
    "meditação mindfulness presente momento",
    "sons calmantes ansiedade relaxar mente",
]
LOW_ENERGY_QUERIES = [
    "yoga energizante manhã despertar",
    "música motivacional energia positiva",
    "meditação energia vital chakra",
    "exercícios respiração energizantes pranayama",
]
HEALTH_GOAL_QUERIES = {
    "wellness": [
        "bem-estar holístico meditação saúde mental",
        "estilo vida saudável relaxamento equilíbrio",
    ],
    "lose": [
        "meditação perda peso visualização",
        "relaxamento após exercício recuperação",
    ],
}
SLEEP_QUERIES = [
    "música dormir insônia sono profundo",
    "meditação guiada dormir rápido",
    "sons relaxantes dormir bebê 432hz",
]
CATEGORY_QUERIES = {
    "nature": [
        "sons da natureza relaxamento 4K ultra HD",
        "floresta tropical chuva meditação 10 horas",
        "oceano ondas praia relaxar dormir",
        "pássaros cantando manhã natureza",
    ],
    "meditation": [
        "meditação guiada {lang} atenção plena",
        "mindfulness meditação iniciantes",
        "body scan relaxamento progressivo",
        "meditação chakras equilíbrio energia",
    ],
    "music": [
        "música relaxante instrumental piano",
        "música ambiente meditação spa",
        "música clássica relaxar estudar",
        "lofi relaxante jazz suave",
    ],
    "breathing": [
        "exercícios respiração guiada pranayama",
        "respiração 4-7-8 técnica dormir",
        "respiração profunda relaxamento stress",
        "wim hof método respiração energia",
    ],
}
ADVANCED_QUERIES = [
    "meditação avançada mindfulness profundo",
    "yoga intermediário relaxamento força",
]
BEGINNER_QUERIES = [
    "meditação iniciantes guiada simples",
    "relaxamento básico começar agora",
]
DEFAULT_QUERIES = [
    "meditação relaxamento {lang} guiada",
    "música calma instrumental sono",
    "natureza sons relaxantes 4K",
]

Predicate = Callable[[UserState], bool]


def _above(value: Optional[float], threshold: float) -> bool:
    return value is not None and value > threshold


def _below(value: Optional[float], threshold: float) -> bool:
    return value is not None and value < threshold


# Only the first matching entry contributes.
EMOTIONAL_CASCADE: List[Tuple[str, Predicate, List[str]]] = [
    ("stress", lambda s: _above(s.stress_level, 7), STRESS_QUERIES),
    ("anxiety", lambda s: _above(s.anxiety_level, 6), ANXIETY_QUERIES),
    ("low_energy", lambda s: _below(s.energy_level, 4), LOW_ENERGY_QUERIES),
]


def needs_sleep_help(state: UserState) -> bool:
    return state.sleep_quality == "poor" or _below(state.average_sleep_hours, 6)


def _fill(templates: List[str], lang: str) -> List[str]:
    return [t.format(lang=lang) for t in templates]


def build_search_queries(
    state: UserState,
    category: Optional[str] = None,
    language: str = "pt",
) -> List[str]:
    """1..MAX_QUERIES distinct catalog queries for this user state."""
    lang = LANGUAGE_WORDS.get(language, DEFAULT_LANGUAGE_WORD)
    queries: List[str] = []

    for _, predicate, templates in EMOTIONAL_CASCADE:
        if predicate(state):
            queries.extend(_fill(templates, lang))
            break

    queries.extend(HEALTH_GOAL_QUERIES.get(state.health_goal or "", []))

    if needs_sleep_help(state):
        queries.extend(SLEEP_QUERIES)

    if category:
        queries.extend(_fill(CATEGORY_QUERIES.get(category, []), lang))

    if _above(state.current_streak, 7):
        queries.extend(ADVANCED_QUERIES)
    else:
        queries.extend(BEGINNER_QUERIES)

    if not queries:
        queries.extend(_fill(DEFAULT_QUERIES, lang))

    return list(dict.fromkeys(queries))[:MAX_QUERIES]


def plan_summary(state: UserState) -> Dict[str, bool]:
    """Which planner rules fire for a state (used in call logs)."""
    fired = {name: False for name, _, _ in EMOTIONAL_CASCADE}
    for name, predicate, _ in EMOTIONAL_CASCADE:
        if predicate(state):
            fired[name] = True
            break
    fired["sleep"] = needs_sleep_help(state)
    fired["advanced"] = _above(state.current_streak, 7)
    return fired
