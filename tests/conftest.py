"""
Pytest configuration and shared fixtures.
"""
from typing import Dict, List, Optional

import pytest

from equilibrium_video.models import CandidateVideo, RequestOptions, UserState


def make_video(
    video_id: str,
    title: str,
    duration_seconds: int = 20 * 60,
    description: Optional[str] = None,
    tags=(),
) -> CandidateVideo:
    return CandidateVideo(
        video_id=video_id,
        title=title,
        description=description,
        thumbnail_url=f"https://i.ytimg.com/vi/{video_id}/hqdefault.jpg",
        content_url=f"https://www.youtube.com/watch?v={video_id}",
        duration_seconds=duration_seconds,
        channel_title="Canal Zen",
        tags=tuple(tags),
    )


class FakeCatalog:
    """Stands in for YouTubeCatalogClient; records the queries it receives."""

    def __init__(self, results: Optional[Dict[str, List[CandidateVideo]]] = None, default=None):
        self.results = results or {}
        self.default = default or []
        self.queries: List[str] = []

    def search_videos(self, query: str, options: RequestOptions) -> List[CandidateVideo]:
        self.queries.append(query)
        return list(self.results.get(query, self.default))


class ExplodingCatalog:
    def search_videos(self, query: str, options: RequestOptions) -> List[CandidateVideo]:
        raise RuntimeError("catalog exploded")


@pytest.fixture
def neutral_state() -> UserState:
    """Defaults the extractor produces for a prompt with no recognised data."""
    return UserState(
        age=30,
        gender="other",
        weight_kg=70.0,
        height_cm=170.0,
        activity_level="moderate",
        health_goal="wellness",
        current_mood="ok",
        mood_trend="stable",
        stress_level=5,
        anxiety_level=5,
        energy_level=5,
        current_level=1,
        current_streak=0,
        total_xp=0,
        meals_per_day=3,
        physical_activity_minutes=0,
        average_sleep_hours=7.0,
        sleep_quality="good",
    )


@pytest.fixture
def stressed_state(neutral_state) -> UserState:
    return neutral_state.model_copy(update={"stress_level": 9, "sleep_quality": "poor"})


@pytest.fixture
def default_options() -> RequestOptions:
    return RequestOptions()


@pytest.fixture
def sample_videos() -> List[CandidateVideo]:
    return [
        make_video("nat1", "Sons da Natureza Floresta 4K", 60 * 60),
        make_video("med1", "Meditação Guiada para Ansiedade", 20 * 60),
        make_video("br1", "Respiração 4-7-8 para dormir", 5 * 60),
        make_video("mus1", "Piano instrumental suave", 30 * 60),
    ]
