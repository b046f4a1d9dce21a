"""Request/Response models for the video recommendation tool."""
from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

Gender = Literal["male", "female", "other"]
ActivityLevel = Literal["sedentary", "light", "moderate", "active", "very_active"]
HealthGoal = Literal["maintain", "lose", "gain", "wellness"]
Mood = Literal["great", "good", "ok", "bad", "terrible"]
MoodTrend = Literal["improving", "stable", "declining"]
SleepQuality = Literal["poor", "fair", "good", "excellent"]
Category = Literal["nature", "meditation", "music", "breathing"]
DurationBucket = Literal["short", "medium", "long"]

DEFAULT_MAX_RESULTS = 10
MAX_RESULTS_LIMIT = 50


class CamelModel(BaseModel):
    """Serialized with camelCase keys, accepts both spellings on input."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class UserState(CamelModel):
    """Snapshot of one person for one recommendation call. None means "not given"."""
    # physical profile
    age: Optional[int] = None
    gender: Optional[Gender] = None
    weight_kg: Optional[float] = None
    height_cm: Optional[float] = None
    activity_level: Optional[ActivityLevel] = None
    health_goal: Optional[HealthGoal] = None

    # emotional profile, 1-10 by convention but not clamped
    current_mood: Optional[Mood] = None
    mood_trend: Optional[MoodTrend] = None
    stress_level: Optional[int] = None
    anxiety_level: Optional[int] = None
    energy_level: Optional[int] = None

    # gamification
    current_level: Optional[int] = Field(default=None, ge=0)
    current_streak: Optional[int] = Field(default=None, ge=0)
    total_xp: Optional[int] = Field(default=None, ge=0)

    # nutrition
    average_calories: Optional[int] = None
    macronutrients: Optional[dict[str, float]] = None  # e.g. proteins, carbs, fats
    water_intake_ml: Optional[int] = None
    meals_per_day: Optional[int] = None

    # activity
    physical_activity_minutes: Optional[int] = None

    # sleep
    average_sleep_hours: Optional[float] = None
    sleep_quality: Optional[SleepQuality] = None


class RequestOptions(CamelModel):
    category: Optional[Category] = None
    preferred_duration: Optional[DurationBucket] = "medium"
    language: str = "pt"
    max_results: int = Field(default=DEFAULT_MAX_RESULTS, ge=1, le=MAX_RESULTS_LIMIT)


class CandidateVideo(CamelModel):
    """Video metadata as returned by the catalog. Immutable once retrieved."""
    model_config = ConfigDict(frozen=True)

    video_id: str
    title: str
    description: Optional[str] = None
    thumbnail_url: Optional[str] = None
    content_url: str
    duration_seconds: int = 0
    channel_title: Optional[str] = None
    tags: tuple[str, ...] = ()


class RankedVideo(CandidateVideo):
    match_score: int = Field(ge=0, le=100)
    reason: str


class VideoRecommendation(CamelModel):
    category: Category
    videos: list[RankedVideo]


class RecommendationResponse(CamelModel):
    recommendations: list[VideoRecommendation]
    insights: str
    suggestions: list[str]
    processing_time_ms: int


class ErrorResponse(CamelModel):
    error: bool = True
    message: str
    recommendations: list[VideoRecommendation] = Field(default_factory=list)
    insights: str
    suggestions: list[str]
    processing_time_ms: int = 0


class RecommendRequest(BaseModel):
    prompt: str


class ExtractResponse(CamelModel):
    user_state: UserState
    options: RequestOptions
    queries: list[str]
