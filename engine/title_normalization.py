"""Character and song-title normalization for chart-view matching."""

from __future__ import annotations

import re
import unicodedata

_SINGLE_QUOTE_RE = re.compile("[\u2018\u2019\u201b\u2032\u2035]")
_DOUBLE_QUOTE_RE = re.compile("[\u201c\u201d\u201f\u2033\u2036]")

# One catalog title carries a roman numeral two decorated with combining marks.
# Inputs are decomposed before substitution, so match the decomposed cluster.
_STYLIZED_NUMERAL = unicodedata.normalize("NFKD", " \u035f\u035d\u035e\u2161\u0301\u0315")
_STYLIZED_NUMERAL_LOWER = f"{_STYLIZED_NUMERAL.lower()} "

_SUBTITLE_SEPARATOR = " -"


def normalize_characters(text: str | None) -> str:
    """Return ``text`` decomposed (NFKD) with smart quotes straightened and trimmed."""
    if not text:
        return ""
    normalized = unicodedata.normalize("NFKD", str(text))
    normalized = _SINGLE_QUOTE_RE.sub("'", normalized)
    normalized = _DOUBLE_QUOTE_RE.sub('"', normalized)
    return normalized.strip()


def replace_stylized_numeral(text: str, *, lowercase: bool = False) -> str:
    """Rewrite the decorated roman numeral cluster to plain ``II``.

    In ``lowercase`` mode the lowercased cluster must be followed by a space and
    collapses to ``ii`` together with its surrounding spaces.
    """
    if lowercase:
        if _STYLIZED_NUMERAL_LOWER in text:
            return text.replace(_STYLIZED_NUMERAL_LOWER, "ii")
        return text
    if _STYLIZED_NUMERAL in text:
        return text.replace(_STYLIZED_NUMERAL, "II")
    return text


def normalize_song_title(raw_title: str | None) -> str:
    """Return the comparable form of a catalog song title.

    Dash-delimited subtitles are dropped, so
    ``"Misdeed -la bonté de Dieu et l'origine du mal-"`` becomes ``"Misdeed"``.
    """
    title = normalize_characters(raw_title)
    title = replace_stylized_numeral(title)
    if _SUBTITLE_SEPARATOR in title:
        title = title.split(_SUBTITLE_SEPARATOR, 1)[0]
    return title.strip()
