"""Chart-view video lookup: cache first, then provider search and ranking."""

from __future__ import annotations

import logging
import sqlite3
from dataclasses import dataclass
from typing import Any

from engine.search_query import build_search_query
from engine.search_scoring import rank_search_results

logger = logging.getLogger(__name__)

WATCH_URL_TEMPLATE = "https://www.youtube.com/watch?v={video_id}"


def watch_url(video_id: str) -> str:
    return WATCH_URL_TEMPLATE.format(video_id=video_id)


@dataclass(frozen=True)
class VideoResult:
    id: str
    title: str
    channel_title: str
    video_url: str

    @classmethod
    def from_search_item(cls, item: Any) -> "VideoResult":
        return cls(
            id=item.video_id,
            title=item.title,
            channel_title=item.channel_title,
            video_url=watch_url(item.video_id),
        )

    def as_dict(self) -> dict[str, str]:
        return {
            "id": self.id,
            "title": self.title,
            "channelTitle": self.channel_title,
            "videoUrl": self.video_url,
        }


class VideoLookupService:
    """Find ranked chart videos for a song, backed by an optional cache store.

    ``search_client`` may be None when no usable API key is configured; lookups
    then answer from the cache only.
    """

    def __init__(self, search_client: Any = None, store: Any = None) -> None:
        self.search_client = search_client
        self.store = store

    def _cached(self, song_title: str, difficulty: str) -> VideoResult | None:
        if self.store is None:
            return None
        try:
            cached = self.store.get(song_title, difficulty)
        except (sqlite3.Error, OSError):
            logger.exception("Chart video cache read failed song=%s difficulty=%s", song_title, difficulty)
            return None
        if cached is None:
            return None
        return VideoResult(
            id=cached.video_id,
            title=cached.video_title,
            channel_title=cached.channel_title,
            video_url=watch_url(cached.video_id),
        )

    def _remember(self, song_title: str, difficulty: str, video: VideoResult) -> None:
        if self.store is None:
            return
        try:
            self.store.put(
                song_title,
                difficulty,
                video_id=video.id,
                video_title=video.title,
                channel_title=video.channel_title,
            )
        except (sqlite3.Error, OSError, ValueError):
            logger.exception("Chart video cache write failed song=%s difficulty=%s", song_title, difficulty)

    def find_chart_videos(self, song_title: str, difficulty: str = "") -> list[VideoResult]:
        difficulty = difficulty or ""
        cached = self._cached(song_title, difficulty)
        if cached is not None:
            logger.info("Chart video cache hit song=%s difficulty=%s", song_title, difficulty)
            return [cached]

        if self.search_client is None:
            logger.info("YouTube search disabled; no API key configured")
            return []

        query = build_search_query(song_title, difficulty)
        items = self.search_client.search(query)
        ranked = rank_search_results(items, song_title, difficulty)
        if not ranked:
            logger.info("No chart video matched song=%s difficulty=%s candidates=%s", song_title, difficulty, len(items))
            return []

        videos = [VideoResult.from_search_item(item) for item in ranked]
        self._remember(song_title, difficulty, videos[0])
        return videos
