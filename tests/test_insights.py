"""
Tests for insights and suggestions.
"""
from equilibrium_video.insights import (
    CLOSING_SUGGESTIONS,
    FALLBACK_INSIGHT,
    generate_insights,
    generate_suggestions,
)
from equilibrium_video.models import UserState


def test_fallback_insight_when_nothing_applies():
    assert generate_insights(UserState()) == FALLBACK_INSIGHT


def test_every_applicable_insight_is_included():
    state = UserState(stress_level=9, current_streak=12, energy_level=2, sleep_quality="poor")
    insights = generate_insights(state)

    assert "Detectamos níveis elevados de stress (9/10)." in insights
    assert "Parabéns por manter sua rotina de bem-estar há 12 dias!" in insights
    assert "Sua energia está baixa (2/10)." in insights
    assert "Qualidade do sono pode melhorar com relaxamento antes de dormir." in insights
    assert FALLBACK_INSIGHT not in insights


def test_insight_thresholds_are_strict():
    state = UserState(stress_level=7, current_streak=7, energy_level=4, sleep_quality="fair")
    assert generate_insights(state) == FALLBACK_INSIGHT


def test_closing_suggestions_always_present():
    assert generate_suggestions(UserState()) == CLOSING_SUGGESTIONS


def test_suggestions_for_unmet_goals():
    state = UserState(
        water_intake_ml=1500,
        physical_activity_minutes=10,
        average_sleep_hours=6.5,
        stress_level=8,
    )
    suggestions = generate_suggestions(state)

    assert len(suggestions) == 6
    assert suggestions[0].startswith("💧")
    assert suggestions[1].startswith("🏃")
    assert suggestions[2].startswith("😴")
    assert suggestions[3].startswith("🧘")
    assert suggestions[4:] == CLOSING_SUGGESTIONS


def test_met_goals_add_nothing():
    state = UserState(
        water_intake_ml=2000,
        physical_activity_minutes=30,
        average_sleep_hours=7,
        stress_level=7,
    )
    assert generate_suggestions(state) == CLOSING_SUGGESTIONS
