"""YouTube Data API v3 catalog client: search → video details → CandidateVideo."""
import logging
import os
import re
import threading
from typing import Any, Dict, List, Optional

import httpx

from equilibrium_video.exceptions import CatalogError
from equilibrium_video.models import CandidateVideo, RequestOptions

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 10.0

_DURATION_RE = re.compile(
    r"^P(?:(\d+)D)?(?:T(?:(\d+)H)?(?:(\d+)M)?(?:(\d+)(?:\.\d+)?S)?)?$",
    re.IGNORECASE,
)


def parse_iso8601_duration(duration: Optional[str]) -> int:
    """'PT1H2M3S' → 3723. Anything unparsable is 0."""
    if not duration:
        return 0
    m = _DURATION_RE.match(duration.strip())
    if not m or not any(m.groups()):
        logger.warning("Could not parse duration: %s", duration)
        return 0
    days, hours, minutes, seconds = (int(g) if g else 0 for g in m.groups())
    return days * 86400 + hours * 3600 + minutes * 60 + seconds


def duration_filter(preferred_duration: Optional[str]) -> str:
    """Request duration bucket → YouTube `videoDuration` filter."""
    if preferred_duration in ("short", "medium", "long"):
        return preferred_duration
    return "any"


class YouTubeCatalogClient:
    """Search the YouTube catalog. Every failure degrades to an empty result."""

    SEARCH_URL = "https://www.googleapis.com/youtube/v3/search"
    VIDEOS_URL = "https://www.googleapis.com/youtube/v3/videos"
    WATCH_URL = "https://www.youtube.com/watch?v={video_id}"

    def __init__(
        self,
        api_key: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.api_key = (api_key or "").strip() or None
        self._client = httpx.Client(timeout=timeout, transport=transport)

    def close(self) -> None:
        self._client.close()

    def _get(self, url: str, params: Dict[str, Any]) -> Dict[str, Any]:
        try:
            response = self._client.get(url, params={**params, "key": self.api_key})
            response.raise_for_status()
            return response.json()
        except (httpx.HTTPError, ValueError) as exc:
            raise CatalogError(f"{url}: {exc}") from exc

    def search(self, query: str, options: RequestOptions) -> List[Dict[str, Any]]:
        """Raw search hits for one query."""
        data = self._get(
            self.SEARCH_URL,
            {
                "part": "id,snippet",
                "q": query,
                "type": "video",
                "maxResults": options.max_results,
                "order": "relevance",
                "videoDuration": duration_filter(options.preferred_duration),
                "relevanceLanguage": options.language,
                "safeSearch": "moderate",
                "videoDefinition": "any",
                "videoEmbeddable": "true",
            },
        )
        return data.get("items") or []

    def fetch_details(self, video_ids: List[str]) -> List[CandidateVideo]:
        if not video_ids:
            return []
        data = self._get(
            self.VIDEOS_URL,
            {"part": "snippet,contentDetails,statistics", "id": ",".join(video_ids)},
        )
        return [self._to_candidate(item) for item in data.get("items") or []]

    def search_videos(self, query: str, options: RequestOptions) -> List[CandidateVideo]:
        """search + fetch_details for one query; never raises."""
        if not self.api_key:
            logger.warning("YOUTUBE_API_KEY not set, returning no videos for query: %s", query)
            return []
        try:
            hits = self.search(query, options)
            video_ids = [
                (hit.get("id") or {}).get("videoId")
                for hit in hits
                if (hit.get("id") or {}).get("videoId")
            ]
            if not video_ids:
                logger.warning("No videos found for query: %s", query)
                return []
            return self.fetch_details(video_ids)
        except Exception as exc:
            logger.error("Catalog search failed for query %r: %s", query, exc)
            return []

    def _to_candidate(self, item: Dict[str, Any]) -> CandidateVideo:
        video_id = item["id"]
        snippet = item.get("snippet") or {}
        details = item.get("contentDetails") or {}
        thumbnails = snippet.get("thumbnails") or {}
        return CandidateVideo(
            video_id=video_id,
            title=snippet.get("title") or "",
            description=snippet.get("description"),
            thumbnail_url=(thumbnails.get("high") or {}).get("url"),
            content_url=self.WATCH_URL.format(video_id=video_id),
            duration_seconds=parse_iso8601_duration(details.get("duration")),
            channel_title=snippet.get("channelTitle"),
            tags=tuple(snippet.get("tags") or ()),
        )


_CLIENT: Optional[YouTubeCatalogClient] = None
_CLIENT_LOCK = threading.Lock()


def get_catalog_client() -> YouTubeCatalogClient:
    """Process-wide client, built from the environment on first use."""
    global _CLIENT
    if _CLIENT is None:
        with _CLIENT_LOCK:
            if _CLIENT is None:
                _CLIENT = YouTubeCatalogClient(
                    api_key=os.getenv("YOUTUBE_API_KEY"),
                    timeout=float(os.getenv("YOUTUBE_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS)),
                )
    return _CLIENT


def reset_catalog_client() -> None:
    global _CLIENT
    with _CLIENT_LOCK:
        if _CLIENT is not None:
            _CLIENT.close()
        _CLIENT = None
