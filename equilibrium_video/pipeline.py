"""UserState + RequestOptions → catalog → ranker → categories → RecommendationResponse."""
import logging
import time
from typing import List, Optional

from equilibrium_video.catalog import YouTubeCatalogClient, get_catalog_client
from equilibrium_video.categorizer import group_by_category
from equilibrium_video.insights import generate_insights, generate_suggestions
from equilibrium_video.models import CandidateVideo, RecommendationResponse, RequestOptions, UserState
from equilibrium_video.planner import build_search_queries
from equilibrium_video.ranker import rank_videos

logger = logging.getLogger(__name__)


def retrieve_candidates(
    queries: List[str],
    options: RequestOptions,
    catalog: YouTubeCatalogClient,
) -> List[CandidateVideo]:
    """Run queries one after another, in plan order, and concatenate the hits."""
    candidates: List[CandidateVideo] = []
    for query in queries:
        videos = catalog.search_videos(query, options)
        logger.info("Query %r → %d videos", query, len(videos))
        candidates.extend(videos)
    return candidates


def recommend_videos(
    state: UserState,
    options: RequestOptions,
    catalog: Optional[YouTubeCatalogClient] = None,
) -> RecommendationResponse:
    start = time.perf_counter()
    catalog = catalog or get_catalog_client()

    queries = build_search_queries(state, options.category, options.language)
    logger.info("Search queries: %s", queries)

    candidates = retrieve_candidates(queries, options, catalog)
    ranked = rank_videos(candidates, state, options)
    recommendations = group_by_category(ranked)

    processing_time_ms = int((time.perf_counter() - start) * 1000)
    logger.info(
        "Recommended %d videos in %d categories in %dms",
        sum(len(r.videos) for r in recommendations),
        len(recommendations),
        processing_time_ms,
    )
    return RecommendationResponse(
        recommendations=recommendations,
        insights=generate_insights(state),
        suggestions=generate_suggestions(state),
        processing_time_ms=processing_time_ms,
    )
