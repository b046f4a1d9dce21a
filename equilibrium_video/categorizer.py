"""Assign ranked videos to category buckets and build the per-category groups."""
from typing import Dict, List

from equilibrium_video.models import RankedVideo, VideoRecommendation

VIDEOS_PER_CATEGORY = 3

# Checked in order; anything unmatched is "music". Only nature also looks at
# the description.
NATURE_TITLE_KEYWORDS = ("natureza", "nature", "floresta", "oceano", "chuva", "pássaro")
NATURE_DESCRIPTION_KEYWORDS = ("sons da natureza",)
MEDITATION_TITLE_KEYWORDS = ("meditação", "meditation", "mindfulness", "guiada")
BREATHING_TITLE_KEYWORDS = ("respiração", "breathing", "pranayama", "respira")
DEFAULT_CATEGORY = "music"


def _contains_any(text: str, keywords) -> bool:
    return any(k in text for k in keywords)


def categorize_video(video: RankedVideo) -> str:
    """Exactly one of nature / meditation / breathing / music."""
    title = video.title.lower()
    description = (video.description or "").lower()

    if _contains_any(title, NATURE_TITLE_KEYWORDS) or _contains_any(description, NATURE_DESCRIPTION_KEYWORDS):
        return "nature"
    if _contains_any(title, MEDITATION_TITLE_KEYWORDS):
        return "meditation"
    if _contains_any(title, BREATHING_TITLE_KEYWORDS):
        return "breathing"
    return DEFAULT_CATEGORY


def group_by_category(
    videos: List[RankedVideo],
    per_category: int = VIDEOS_PER_CATEGORY,
) -> List[VideoRecommendation]:
    """
    Bucket already-ranked videos by category, keeping the first `per_category`
    of each. Buckets appear in the order their first video was seen, so the
    bucket holding the best-scored video comes first.
    """
    grouped: Dict[str, List[RankedVideo]] = {}
    for video in videos:
        grouped.setdefault(categorize_video(video), []).append(video)
    return [
        VideoRecommendation(category=category, videos=bucket[:per_category])
        for category, bucket in grouped.items()
    ]
