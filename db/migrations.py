"""SQLite migrations for the chart-video cache."""

from __future__ import annotations

import sqlite3


def ensure_song_videos_table(conn: sqlite3.Connection) -> None:
    """Ensure the ``song_videos`` cache table and its lookup index exist."""
    cur = conn.cursor()
    cur.execute(
        """
        CREATE TABLE IF NOT EXISTS song_videos (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            song_title TEXT NOT NULL,
            difficulty TEXT,
            video_id TEXT NOT NULL,
            video_title TEXT NOT NULL,
            channel_title TEXT NOT NULL DEFAULT '',
            created_at TEXT NOT NULL
        )
        """
    )
    # A NULL difficulty is its own cache slot.
    cur.execute(
        "CREATE UNIQUE INDEX IF NOT EXISTS idx_song_videos_lookup "
        "ON song_videos (song_title, IFNULL(difficulty, ''))"
    )
    conn.commit()
