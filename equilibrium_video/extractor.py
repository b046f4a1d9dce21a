"""Heuristic prompt → UserState / RequestOptions extraction.

Free-form text (Portuguese, English or Spanish) goes in, a fully populated
UserState and RequestOptions come out. There is no NLP here: numbers are found
with `label[:\\s]*number` patterns and categorical fields with ordered keyword
containment rules, first match wins. Every field has a default, so extraction
never fails once the prompt is non-blank.
"""
import logging
import re
from typing import Callable, Dict, List, Optional, Tuple, Union

from equilibrium_video.exceptions import InvalidPromptError
from equilibrium_video.models import (
    DEFAULT_MAX_RESULTS,
    MAX_RESULTS_LIMIT,
    RequestOptions,
    UserState,
)

logger = logging.getLogger(__name__)

Number = Union[int, float]

# field -> (label alternatives, default, cast)
NUMERIC_FIELDS: Dict[str, Tuple[str, Optional[Number], Callable[[str], Number]]] = {
    "age": ("idade|age|edad", 30, int),
    "weight_kg": ("peso|weight", 70.0, float),
    "height_cm": ("altura|height|estatura", 170.0, float),
    "stress_level": ("stress|estresse|estrés", 5, int),
    "anxiety_level": ("ansiedade|anxiety|ansiedad", 5, int),
    "energy_level": ("energia|energy|energía", 5, int),
    "current_level": ("nivel|level|nível", 1, int),
    "current_streak": ("streak|sequencia|sequência|racha", 0, int),
    "total_xp": ("xp|experiencia|experiência", 0, int),
    "average_calories": ("calorias|calories|calorías", None, int),
    "water_intake_ml": ("agua|water|água|hidratação|hidratación", None, int),
    "meals_per_day": ("refeições|meals|refei|comidas", 3, int),
    "physical_activity_minutes": ("atividade física|exercise|exercicio|exercício|ejercicio", 0, int),
    "average_sleep_hours": ("sono|sleep|dormir|sueño", 7.0, float),
}

MAX_RESULTS_LABELS = "máximo|maximo|max|limite|límite"

MACRONUTRIENT_LABELS: Dict[str, str] = {
    "proteins": "proteínas|proteinas|proteína|proteina|protein",
    "carbs": "carboidratos|carbohidratos|carbohydrates|carbs",
    "fats": "gorduras|gordura|grasas|fats|fat",
}

# field -> ordered (keywords, value) rules; order matters where keywords overlap
# ("female" contains "male", "muito ativo" contains "ativo").
CHOICE_RULES: Dict[str, List[Tuple[Tuple[str, ...], str]]] = {
    "gender": [
        (("feminino", "female", "mulher", "femenino", "mujer"), "female"),
        (("masculino", "male", "homem", "hombre"), "male"),
    ],
    "activity_level": [
        (("sedentário", "sedentary", "sedentario"), "sedentary"),
        (("levemente ativo", "light", "ligeramente activo"), "light"),
        (("muito ativo", "very active", "very_active", "muy activo"), "very_active"),
        (("ativo", "active", "activo"), "active"),
        (("moderado", "moderate"), "moderate"),
    ],
    "health_goal": [
        (("perder peso", "lose weight", "emagrecer", "bajar de peso"), "lose"),
        (("ganhar peso", "gain weight", "ganhar massa", "ganar peso"), "gain"),
        (("bem-estar", "wellness", "saúde", "bienestar", "salud"), "wellness"),
        (("manter", "maintain", "mantener"), "maintain"),
    ],
    "current_mood": [
        (("ótimo", "excelente", "great", "genial"), "great"),
        (("bom", "good", "bem", "bueno"), "good"),
        (("péssimo", "terrível", "terrible", "pésimo"), "terrible"),
        (("ruim", "bad", "mal"), "bad"),
    ],
    "mood_trend": [
        (("melhorando", "improving", "melhor", "mejorando"), "improving"),
        (("piorando", "declining", "pior", "empeorando"), "declining"),
    ],
    "sleep_quality": [
        (("excelente", "excellent"), "excellent"),
        (("bom", "good", "bueno"), "good"),
        (("ruim", "poor", "malo"), "poor"),
        (("razoável", "fair", "razonable"), "fair"),
    ],
    "category": [
        (("natureza", "nature", "floresta", "oceano", "naturaleza"), "nature"),
        (("meditação", "meditation", "mindfulness", "meditación"), "meditation"),
        (("música", "music", "musica"), "music"),
        (("respiração", "breathing", "pranayama", "respiración"), "breathing"),
    ],
    "preferred_duration": [
        (("curto", "short", "rápido", "quick", "corto"), "short"),
        (("longo", "long", "extenso", "profundo", "largo"), "long"),
        (("médio", "medium", "medio"), "medium"),
    ],
    "language": [
        (("português", "portugues", "pt-br", "brasil"), "pt"),
        (("english", "inglês", "ingles", "inglés"), "en"),
        (("español", "espanhol", "spanish"), "es"),
    ],
}

CHOICE_DEFAULTS: Dict[str, Optional[str]] = {
    "gender": "other",
    "activity_level": "moderate",
    "health_goal": "wellness",
    "current_mood": "ok",
    "mood_trend": "stable",
    "sleep_quality": "good",
    "category": None,
    "preferred_duration": "medium",
    "language": "pt",
}


def extract_number(
    text: str,
    labels: str,
    default: Optional[Number],
    cast: Callable[[str], Number] = int,
) -> Optional[Number]:
    """First `label[:\\s]*number` match in text, case-insensitive. Falls back to default."""
    number = r"(\d+\.?\d*)" if cast is float else r"(\d+)"
    m = re.search(rf"({labels})[:\s]*{number}", text, re.IGNORECASE)
    if not m:
        return default
    try:
        return cast(m.group(2))
    except ValueError:
        logger.debug("Could not parse number for labels %r: %r", labels, m.group(2))
        return default


def match_choice(lowered: str, field: str) -> Optional[str]:
    """Value of the first rule whose keyword occurs in the (lowercased) text."""
    for keywords, value in CHOICE_RULES[field]:
        if any(k in lowered for k in keywords):
            return value
    return CHOICE_DEFAULTS[field]


def _extract_macronutrients(text: str) -> Optional[Dict[str, float]]:
    macros = {}
    for name, labels in MACRONUTRIENT_LABELS.items():
        grams = extract_number(text, labels, None, float)
        if grams is not None:
            macros[name] = grams
    return macros or None


def extract_user_state(text: str) -> UserState:
    lowered = text.lower()
    values = {
        field: extract_number(text, labels, default, cast)
        for field, (labels, default, cast) in NUMERIC_FIELDS.items()
    }
    for field in ("gender", "activity_level", "health_goal", "current_mood", "mood_trend", "sleep_quality"):
        values[field] = match_choice(lowered, field)
    values["macronutrients"] = _extract_macronutrients(text)
    return UserState(**values)


def extract_max_results(text: str) -> int:
    """Requested result cap; absent or outside 1..50 means 10."""
    value = extract_number(text, MAX_RESULTS_LABELS, None, int)
    if value is None or value < 1 or value > MAX_RESULTS_LIMIT:
        return DEFAULT_MAX_RESULTS
    return value


def extract_options(text: str) -> RequestOptions:
    lowered = text.lower()
    return RequestOptions(
        category=match_choice(lowered, "category"),
        preferred_duration=match_choice(lowered, "preferred_duration"),
        language=match_choice(lowered, "language"),
        max_results=extract_max_results(text),
    )


def extract(prompt: Optional[str]) -> Tuple[UserState, RequestOptions]:
    """Prompt → (UserState, RequestOptions). Blank prompts are rejected."""
    if prompt is None or not prompt.strip():
        raise InvalidPromptError("Prompt ausente ou inválido")
    state = extract_user_state(prompt)
    options = extract_options(prompt)
    logger.debug("Extracted user state: %s", state)
    return state, options
