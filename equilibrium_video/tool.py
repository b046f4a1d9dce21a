"""
recommend_youtube_videos tool: one free-form prompt in, one JSON string out.

The prompt carries the whole user profile (physical data, mood, stress /
anxiety / energy 1-10, gamification, nutrition, exercise, sleep) plus
preferences (category nature/meditation/music/breathing, duration
short/medium/long, language, max results). Nothing raised inside the pipeline
crosses this boundary: failures come back as a JSON error payload.
"""
import json
import logging
from typing import Any, Dict, NamedTuple, Optional

from equilibrium_video.catalog import YouTubeCatalogClient
from equilibrium_video.exceptions import InvalidPromptError
from equilibrium_video.extractor import extract
from equilibrium_video.models import ErrorResponse, RequestOptions, UserState
from equilibrium_video.pipeline import recommend_videos

logger = logging.getLogger(__name__)

TOOL_NAME = "recommend_youtube_videos"


def invalid_prompt_payload() -> Dict[str, Any]:
    return ErrorResponse(
        message="Prompt ausente ou inválido",
        insights="Prompt inválido - verifique a requisição",
        suggestions=["Forneça um prompt textual com o perfil do usuário"],
    ).model_dump(mode="json", by_alias=True)


def failure_payload(exc: Exception) -> Dict[str, Any]:
    return ErrorResponse(
        message=f"Erro ao gerar recomendações: {exc}",
        insights="Não foi possível processar sua solicitação no momento.",
        suggestions=["Tente novamente em alguns instantes"],
    ).model_dump(mode="json", by_alias=True)


class ToolCall(NamedTuple):
    """Payload plus whatever extraction produced (None when the prompt was rejected)."""
    payload: Dict[str, Any]
    state: Optional[UserState] = None
    options: Optional[RequestOptions] = None


def run_tool(
    prompt: Optional[str],
    catalog: Optional[YouTubeCatalogClient] = None,
) -> ToolCall:
    logger.info("[tool] %s invoked", TOOL_NAME)
    logger.debug("Prompt: %s", prompt)
    state = options = None
    try:
        state, options = extract(prompt)
        logger.info(
            "UserState - stress: %s, energy: %s, mood: %s",
            state.stress_level,
            state.energy_level,
            state.current_mood,
        )
        logger.info(
            "Options - category: %s, duration: %s, language: %s, max: %s",
            options.category,
            options.preferred_duration,
            options.language,
            options.max_results,
        )
        response = recommend_videos(state, options, catalog)
        return ToolCall(response.model_dump(mode="json", by_alias=True), state, options)
    except InvalidPromptError:
        logger.warning("Blank or missing prompt for %s", TOOL_NAME)
        return ToolCall(invalid_prompt_payload())
    except Exception as exc:
        logger.exception("[tool] %s failed: %s", TOOL_NAME, exc)
        return ToolCall(failure_payload(exc), state, options)


def build_payload(
    prompt: Optional[str],
    catalog: Optional[YouTubeCatalogClient] = None,
) -> Dict[str, Any]:
    """Same contract as `recommend`, before JSON encoding."""
    return run_tool(prompt, catalog).payload


def recommend(prompt: Optional[str], catalog: Optional[YouTubeCatalogClient] = None) -> str:
    """Recommend YouTube videos for the user described in `prompt`, as a JSON string."""
    return json.dumps(build_payload(prompt, catalog), ensure_ascii=False)
