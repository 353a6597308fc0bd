"""Database helpers for the chart video cache."""

from db.song_videos import CachedVideo, SongVideoStore

__all__ = ["CachedVideo", "SongVideoStore"]
