"""Logging: stdlib setup + per-call summary (extracted state + output) to file."""
import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

from equilibrium_video.models import RequestOptions, UserState
from equilibrium_video.planner import build_search_queries, plan_summary

LOG_DIR = Path(__file__).resolve().parent.parent / "logs"
CALL_LOG_NAME = "recommend_calls.jsonl"


def setup_logging() -> None:
    LOG_DIR.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def log_recommend_call(
    state: Optional[UserState],
    options: Optional[RequestOptions],
    payload: Dict[str, Any],
    log_dir: Optional[Path] = None,
) -> None:
    """Append one line (state, planned queries, output summary) to logs/recommend_calls.jsonl."""
    log_dir = log_dir or LOG_DIR
    log_dir.mkdir(parents=True, exist_ok=True)
    state_summary = None
    if state is not None:
        state_summary = {
            "stress_level": state.stress_level,
            "anxiety_level": state.anxiety_level,
            "energy_level": state.energy_level,
            "current_mood": state.current_mood,
            "current_streak": state.current_streak,
            "sleep_quality": state.sleep_quality,
            "rules": plan_summary(state),
        }
    recommendations = payload.get("recommendations") or []
    summary = {
        "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        "state_summary": state_summary,
        "options": options.model_dump() if options is not None else None,
        "queries": (
            build_search_queries(state, options.category, options.language)
            if state is not None and options is not None
            else []
        ),
        "output": {
            "error": bool(payload.get("error")),
            "categories": [r["category"] for r in recommendations],
            "video_count": sum(len(r["videos"]) for r in recommendations),
            "processing_time_ms": payload.get("processingTimeMs"),
        },
    }
    path = log_dir / CALL_LOG_NAME
    with open(path, "a", encoding="utf-8") as f:
        f.write(json.dumps(summary, ensure_ascii=False) + "\n")
