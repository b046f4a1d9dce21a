"""
Rule-based ranker for catalog candidates.

candidates + UserState + RequestOptions → heuristic match score → sorted,
deduplicated, truncated list. Works on metadata only (title and duration).

Score = BASE_SCORE + every bonus in SCORING_RULES whose predicate holds,
clamped to MAX_SCORE. Bonuses are non-negative so scores never drop below
the base. The rule table is plain data so tests can walk it directly.
"""
from typing import Callable, List, NamedTuple, Optional

from equilibrium_video.models import CandidateVideo, RankedVideo, RequestOptions, UserState

BASE_SCORE = 50
MAX_SCORE = 100

# duration buckets, in whole minutes
DURATION_BUCKETS = {
    "short": lambda minutes: minutes < 15,
    "medium": lambda minutes: 15 <= minutes <= 45,
    "long": lambda minutes: minutes > 45,
}

RELAX_KEYWORDS = ("relaxa", "calma")
STRESS_KEYWORDS = ("stress", "ansiedade")
DEEP_KEYWORDS = ("profundo", "deep")
ENERGY_KEYWORDS = ("energia", "motiv")
AWAKEN_KEYWORDS = ("despertar", "energi")
ANXIETY_KEYWORDS = ("ansiedade", "anxiety")
BREATHING_KEYWORDS = ("respira", "breath")
QUALITY_KEYWORDS = ("4k", "hd", "ultra")
GUIDED_KEYWORDS = ("guiada", "guided")

FALLBACK_REASON = "Recomendado para seu bem-estar e equilíbrio"


class ScoringRule(NamedTuple):
    name: str
    bonus: int
    applies: Callable[[CandidateVideo, UserState, RequestOptions], bool]


def _minutes(video: CandidateVideo) -> int:
    return video.duration_seconds // 60


def _title_has(video: CandidateVideo, keywords) -> bool:
    title = video.title.lower()
    return any(k in title for k in keywords)


def _high_stress(state: UserState) -> bool:
    return state.stress_level is not None and state.stress_level > 7


def _high_anxiety(state: UserState) -> bool:
    return state.anxiety_level is not None and state.anxiety_level > 6


def _low_energy(state: UserState) -> bool:
    return state.energy_level is not None and state.energy_level < 4


def _duration_matches(video: CandidateVideo, options: RequestOptions) -> bool:
    in_bucket = DURATION_BUCKETS.get(options.preferred_duration or "")
    return in_bucket is not None and in_bucket(_minutes(video))


SCORING_RULES: List[ScoringRule] = [
    ScoringRule("duration_match", 20, lambda v, s, o: _duration_matches(v, o)),
    ScoringRule("stress_relax", 15, lambda v, s, o: _high_stress(s) and _title_has(v, RELAX_KEYWORDS)),
    ScoringRule("stress_keyword", 10, lambda v, s, o: _high_stress(s) and _title_has(v, STRESS_KEYWORDS)),
    ScoringRule("stress_deep", 8, lambda v, s, o: _high_stress(s) and _title_has(v, DEEP_KEYWORDS)),
    ScoringRule("energy_keyword", 15, lambda v, s, o: _low_energy(s) and _title_has(v, ENERGY_KEYWORDS)),
    ScoringRule("energy_awaken", 10, lambda v, s, o: _low_energy(s) and _title_has(v, AWAKEN_KEYWORDS)),
    ScoringRule("anxiety_keyword", 15, lambda v, s, o: _high_anxiety(s) and _title_has(v, ANXIETY_KEYWORDS)),
    ScoringRule("anxiety_breathing", 10, lambda v, s, o: _high_anxiety(s) and _title_has(v, BREATHING_KEYWORDS)),
    ScoringRule("quality", 5, lambda v, s, o: _title_has(v, QUALITY_KEYWORDS)),
    ScoringRule("guided", 8, lambda v, s, o: _title_has(v, GUIDED_KEYWORDS)),
]


def matched_rules(video: CandidateVideo, state: UserState, options: RequestOptions) -> List[str]:
    return [rule.name for rule in SCORING_RULES if rule.applies(video, state, options)]


def score_video(video: CandidateVideo, state: UserState, options: RequestOptions) -> int:
    """Total score for one candidate, 0..100."""
    score = BASE_SCORE + sum(
        rule.bonus for rule in SCORING_RULES if rule.applies(video, state, options)
    )
    return min(MAX_SCORE, score)


def generate_reason(video: CandidateVideo, state: UserState) -> str:
    reasons = []
    if _high_stress(state):
        reasons.append("ajuda a reduzir o stress elevado")
    if _high_anxiety(state):
        reasons.append("promove calma e tranquilidade para ansiedade")
    if _low_energy(state):
        reasons.append("ajuda a aumentar a energia e vitalidade")

    minutes = _minutes(video)
    if minutes < 15:
        reasons.append("duração perfeita para uma pausa rápida")
    elif minutes > 30:
        reasons.append("ideal para relaxamento profundo e imersivo")

    if state.sleep_quality == "poor":
        reasons.append("pode melhorar a qualidade do sono")

    if not reasons:
        return FALLBACK_REASON
    return "Recomendado porque " + ", ".join(reasons)


def rank_video(video: CandidateVideo, state: UserState, options: RequestOptions) -> RankedVideo:
    return RankedVideo(
        **video.model_dump(),
        match_score=score_video(video, state, options),
        reason=generate_reason(video, state),
    )


def rank_videos(
    videos: List[CandidateVideo],
    state: UserState,
    options: RequestOptions,
    limit: Optional[int] = None,
) -> List[RankedVideo]:
    """
    Score every candidate, sort by score (stable, so ties keep input order),
    drop exact duplicates and keep the top `limit` (default options.max_results).
    """
    limit = options.max_results if limit is None else limit
    ranked = [rank_video(v, state, options) for v in videos]
    ranked.sort(key=lambda r: r.match_score, reverse=True)

    unique: List[RankedVideo] = []
    seen = set()
    for r in ranked:
        if r in seen:
            continue
        seen.add(r)
        unique.append(r)
    return unique[:limit]
