"""
Tests for category assignment and grouping.
"""
import pytest

from equilibrium_video.categorizer import categorize_video, group_by_category
from equilibrium_video.models import RankedVideo


def ranked(video_id: str, title: str, score: int = 60, description=None) -> RankedVideo:
    return RankedVideo(
        video_id=video_id,
        title=title,
        description=description,
        content_url=f"https://www.youtube.com/watch?v={video_id}",
        match_score=score,
        reason="Recomendado para seu bem-estar e equilíbrio",
    )


@pytest.mark.parametrize(
    "title, expected",
    [
        ("Chuva na Floresta", "nature"),
        ("Ocean Waves Nature Sounds", "nature"),
        ("Meditação para dormir", "meditation"),
        ("Mindfulness in 10 minutes", "meditation"),
        ("Respiração guiada", "meditation"),
        ("Pranayama for beginners", "breathing"),
        ("Breathing exercise", "breathing"),
        ("Lofi jazz", "music"),
        ("", "music"),
    ],
)
def test_categorize_by_title(title, expected):
    assert categorize_video(ranked("a", title)) == expected


def test_nature_before_meditation():
    assert categorize_video(ranked("a", "Meditação na natureza")) == "nature"


def test_description_only_counts_for_nature():
    assert categorize_video(ranked("a", "Relax", description="Sons da natureza ao vivo")) == "nature"
    assert categorize_video(ranked("b", "Relax", description="meditação guiada")) == "music"


def test_grouping_caps_each_bucket_at_three():
    videos = [ranked(f"m{i}", f"Piano {i}", score=90 - i) for i in range(5)]
    videos += [ranked(f"n{i}", f"Floresta {i}", score=70 - i) for i in range(4)]

    groups = group_by_category(videos)

    assert [g.category for g in groups] == ["music", "nature"]
    assert [v.video_id for v in groups[0].videos] == ["m0", "m1", "m2"]
    assert [v.video_id for v in groups[1].videos] == ["n0", "n1", "n2"]


def test_grouping_empty():
    assert group_by_category([]) == []
