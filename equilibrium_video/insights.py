"""Narrative insights and wellbeing suggestions derived from a UserState."""
from typing import List

from equilibrium_video.models import UserState

FALLBACK_INSIGHT = "Continue sua jornada de bem-estar com conteúdo personalizado para você."

CLOSING_SUGGESTIONS = [
    "🙏 Pratique gratidão e reflexão pessoal diariamente",
    "🌱 Mantenha consistência em sua rotina de bem-estar",
]

WATER_GOAL_ML = 2000
ACTIVITY_GOAL_MINUTES = 30
SLEEP_GOAL_HOURS = 7


def generate_insights(state: UserState) -> str:
    """Every applicable sentence, in a fixed order; a generic one if none apply."""
    sentences = []
    if state.stress_level is not None and state.stress_level > 7:
        sentences.append(f"Detectamos níveis elevados de stress ({state.stress_level}/10).")
    if state.current_streak is not None and state.current_streak > 7:
        sentences.append(f"Parabéns por manter sua rotina de bem-estar há {state.current_streak} dias!")
    if state.energy_level is not None and state.energy_level < 4:
        sentences.append(
            f"Sua energia está baixa ({state.energy_level}/10). Vídeos energizantes podem ajudar."
        )
    if state.sleep_quality == "poor":
        sentences.append("Qualidade do sono pode melhorar com relaxamento antes de dormir.")

    if not sentences:
        return FALLBACK_INSIGHT
    return " ".join(sentences)


def generate_suggestions(state: UserState) -> List[str]:
    suggestions = []
    if state.water_intake_ml is not None and state.water_intake_ml < WATER_GOAL_ML:
        suggestions.append("💧 Lembre-se de se hidratar adequadamente (meta: 2L/dia)")
    if state.physical_activity_minutes is not None and state.physical_activity_minutes < ACTIVITY_GOAL_MINUTES:
        suggestions.append("🏃 Considere adicionar atividade física leve à sua rotina")
    if state.average_sleep_hours is not None and state.average_sleep_hours < SLEEP_GOAL_HOURS:
        suggestions.append("😴 Priorize uma boa noite de sono (7-9 horas) para melhor recuperação")
    if state.stress_level is not None and state.stress_level > 7:
        suggestions.append("🧘 Reserve 10-15 minutos diários para meditação guiada")

    suggestions.extend(CLOSING_SUGGESTIONS)
    return suggestions
