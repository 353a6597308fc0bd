import logging
from dataclasses import dataclass

from engine.difficulty import difficulty_aliases
from engine.fuzzy_match import fuzzy_title_match
from engine.title_normalization import (
    normalize_characters,
    normalize_song_title,
    replace_stylized_numeral,
)

logger = logging.getLogger(__name__)

SONG_TITLE_POINTS = 10
DIFFICULTY_POINTS = 5
CHART_VIEW_POINTS = 2

# Only the song-title match clears this; bonuses alone never qualify an item.
MATCH_THRESHOLD = SONG_TITLE_POINTS

_CHART_VIEW_MARKERS = ("chart view", "chart_view")


@dataclass(frozen=True)
class SearchItem:
    video_id: str
    title: str
    channel_title: str = ""

    @classmethod
    def from_api(cls, item):
        """Build from a YouTube ``search.list`` item; None when it carries no video id."""
        if not isinstance(item, dict):
            return None
        video_id = (item.get("id") or {}).get("videoId")
        if not video_id:
            return None
        snippet = item.get("snippet") or {}
        return cls(
            video_id=str(video_id),
            title=str(snippet.get("title") or ""),
            channel_title=str(snippet.get("channelTitle") or ""),
        )


def _item_title(item):
    if isinstance(item, dict):
        if "title" in item:
            return str(item.get("title") or "")
        return str((item.get("snippet") or {}).get("title") or "")
    return str(getattr(item, "title", "") or "")


def normalize_candidate_title(title):
    normalized = normalize_characters(title).lower()
    return replace_stylized_numeral(normalized, lowercase=True)


def _score_normalized(title, target, difficulty):
    score = 0
    reasons = []

    if fuzzy_title_match(title, target):
        score += SONG_TITLE_POINTS
        reasons.append("song_title")
    else:
        reasons.append("no_song_title")

    aliases = difficulty_aliases(difficulty)
    if aliases:
        # No penalty on a miss; the absent bonus is signal enough.
        if any(alias in title for alias in aliases):
            score += DIFFICULTY_POINTS
            reasons.append("difficulty")
        else:
            reasons.append("no_difficulty")

    if any(marker in title for marker in _CHART_VIEW_MARKERS):
        score += CHART_VIEW_POINTS
        reasons.append("chart_view")

    return {"score": score, "reasons": reasons}


def score_item(title, song_title, difficulty=None):
    """Score one raw video title against a song title and difficulty."""
    target = normalize_song_title(song_title).lower()
    return _score_normalized(normalize_candidate_title(title), target, difficulty)


def rank_search_results(items, song_title, difficulty=None):
    """Return the items that match ``song_title``, best first.

    Items keep their input order when scores tie. Scores are not exposed.
    """
    if not items:
        return []

    target = normalize_song_title(song_title).lower()
    scored = []
    for item in items:
        raw_title = _item_title(item)
        result = _score_normalized(normalize_candidate_title(raw_title), target, difficulty)
        logger.debug(
            "search item scored title=%r score=%s reasons=%s",
            raw_title,
            result["score"],
            ",".join(result["reasons"]),
        )
        if result["score"] >= MATCH_THRESHOLD:
            scored.append((result["score"], item))

    # sorted() is stable, so equal scores keep their input order
    ranked = sorted(scored, key=lambda entry: -entry[0])
    return [item for _, item in ranked]
