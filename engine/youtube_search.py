import logging

import httplib2
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from engine.search_scoring import SearchItem

logger = logging.getLogger(__name__)

PLACEHOLDER_API_KEY = "your_youtube_api_key_here"
DEFAULT_MAX_RESULTS = 25


class YouTubeSearchError(RuntimeError):
    """Raised when a YouTube search fails for reasons other than exhausted quota."""


def is_placeholder_api_key(api_key):
    value = str(api_key or "").strip()
    return not value or value == PLACEHOLDER_API_KEY


def youtube_service(api_key):
    return build("youtube", "v3", developerKey=api_key, cache_discovery=False)


def _error_reasons(exc):
    details = getattr(exc, "error_details", None)
    if not isinstance(details, list):
        return set()
    return {str(entry.get("reason") or "") for entry in details if isinstance(entry, dict)}


class YouTubeSearchClient:
    def __init__(self, api_key, *, max_results=DEFAULT_MAX_RESULTS, referer=None, service=None):
        self.max_results = max_results
        self.referer = referer
        self._service = service if service is not None else youtube_service(api_key)

    def search(self, query):
        """Run a relevance-ordered video search; returns ``[]`` when quota is exhausted."""
        if not query:
            return []
        request = self._service.search().list(
            part="snippet",
            q=query,
            type="video",
            maxResults=self.max_results,
            order="relevance",
        )
        if self.referer:
            request.headers["Referer"] = self.referer
        try:
            response = request.execute()
        except HttpError as exc:
            if "quotaExceeded" in _error_reasons(exc):
                logger.warning("YouTube search quota exceeded query=%s", query)
                return []
            status = getattr(getattr(exc, "resp", None), "status", None)
            raise YouTubeSearchError(f"YouTube search failed status={status} query={query}") from exc
        except (OSError, httplib2.HttpLib2Error) as exc:
            raise YouTubeSearchError(f"YouTube search transport failed query={query}: {exc}") from exc

        results = []
        for entry in (response or {}).get("items") or []:
            item = SearchItem.from_api(entry)
            if item is None:
                logger.debug("Skipping search result without videoId: %r", entry)
                continue
            results.append(item)
        logger.info("YouTube search query=%s results=%s", query, len(results))
        return results
