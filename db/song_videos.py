"""Persistence helpers for the top chart video found per song and difficulty."""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

from db.migrations import ensure_song_videos_table


@dataclass(frozen=True)
class CachedVideo:
    """A cached video row, keyed by ``(song_title, difficulty)``."""

    song_title: str
    difficulty: str | None
    video_id: str
    video_title: str
    channel_title: str


def _difficulty_key(difficulty: str | None) -> str | None:
    value = (difficulty or "").strip()
    return value or None


class SongVideoStore:
    """SQLite-backed cache of the top-ranked video per song/difficulty."""

    def __init__(self, db_path: str | Path) -> None:
        self.db_path = str(db_path)

    def _connect(self) -> sqlite3.Connection:
        Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(self.db_path, check_same_thread=False, timeout=30)
        conn.row_factory = sqlite3.Row
        ensure_song_videos_table(conn)
        return conn

    def ensure_schema(self) -> None:
        conn = self._connect()
        conn.close()

    def get(self, song_title: str, difficulty: str | None = None) -> CachedVideo | None:
        """Return the cached video for ``song_title``/``difficulty`` or None."""
        title = (song_title or "").strip()
        if not title:
            return None
        diff = _difficulty_key(difficulty)
        conn = self._connect()
        try:
            cur = conn.cursor()
            if diff is None:
                cur.execute(
                    """
                    SELECT song_title, difficulty, video_id, video_title, channel_title
                    FROM song_videos
                    WHERE song_title=? AND difficulty IS NULL
                    LIMIT 1
                    """,
                    (title,),
                )
            else:
                cur.execute(
                    """
                    SELECT song_title, difficulty, video_id, video_title, channel_title
                    FROM song_videos
                    WHERE song_title=? AND difficulty=?
                    LIMIT 1
                    """,
                    (title, diff),
                )
            row = cur.fetchone()
            if row is None:
                return None
            return CachedVideo(**dict(row))
        finally:
            conn.close()

    def put(
        self,
        song_title: str,
        difficulty: str | None,
        *,
        video_id: str,
        video_title: str,
        channel_title: str = "",
    ) -> bool:
        """Cache a video; returns False when the slot was already filled."""
        title = (song_title or "").strip()
        vid = (video_id or "").strip()
        if not title:
            raise ValueError("song_title is required")
        if not vid:
            raise ValueError("video_id is required")

        conn = self._connect()
        try:
            cur = conn.cursor()
            cur.execute(
                """
                INSERT OR IGNORE INTO song_videos
                    (song_title, difficulty, video_id, video_title, channel_title, created_at)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (
                    title,
                    _difficulty_key(difficulty),
                    vid,
                    video_title or "",
                    channel_title or "",
                    datetime.now(timezone.utc).isoformat(),
                ),
            )
            conn.commit()
            return cur.rowcount > 0
        finally:
            conn.close()
