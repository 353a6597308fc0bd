from __future__ import annotations

from engine.title_normalization import normalize_song_title

SEARCH_PREFIX = "Arcaea"

CHART_VIEW_DIFFICULTIES = ("Future", "Beyond", "Eternal")
# Fewer dedicated chart-view uploads exist for these; the bare title searches better.
PLAIN_DIFFICULTIES = ("Past", "Present")


def build_search_query(song_title: str | None, difficulty: str | None = None) -> str:
    """Build the provider search string for a song and difficulty.

    Difficulty labels compare case-sensitively: ``"future"`` takes the default
    branch while ``"Future"`` does not.
    """
    title = normalize_song_title(song_title)
    if difficulty in CHART_VIEW_DIFFICULTIES:
        return f"{SEARCH_PREFIX} {title} {difficulty} chart view"
    if difficulty in PLAIN_DIFFICULTIES:
        return f"{SEARCH_PREFIX} {title} {difficulty}"
    return f"{SEARCH_PREFIX} {title} chart view"
