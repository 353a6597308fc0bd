from __future__ import annotations

import math
import re

_TOKEN_SPLIT_RE = re.compile(r"[\s\-_:;,.()\[\]{}'\"]+")

MIN_TOKEN_COVERAGE = 0.80
MAX_LENGTH_DELTA = 2


def tokenize(text: str | None) -> list[str]:
    if not text:
        return []
    return [token for token in _TOKEN_SPLIT_RE.split(text) if token]


def edit_distance(a: str, b: str) -> int:
    """Levenshtein distance between ``a`` and ``b``."""
    # rows follow ``b``, columns follow ``a``
    distance = [[0] * (len(a) + 1) for _ in range(len(b) + 1)]
    for i in range(len(b) + 1):
        distance[i][0] = i
    for j in range(len(a) + 1):
        distance[0][j] = j

    for i in range(1, len(b) + 1):
        for j in range(1, len(a) + 1):
            if b[i - 1] == a[j - 1]:
                distance[i][j] = distance[i - 1][j - 1]
            else:
                distance[i][j] = 1 + min(
                    distance[i - 1][j - 1],
                    distance[i][j - 1],
                    distance[i - 1][j],
                )
    return distance[len(b)][len(a)]


def allowed_edits(token: str) -> int:
    if len(token) > 6:
        return 2
    if len(token) > 3:
        return 1
    return 0


def best_token_distance(target_token: str, candidate_tokens: list[str]) -> float:
    best = math.inf
    for candidate_token in candidate_tokens:
        if candidate_token == target_token:
            return 0
        if abs(len(candidate_token) - len(target_token)) <= MAX_LENGTH_DELTA:
            dist = edit_distance(candidate_token, target_token)
            if dist < best:
                best = dist
    return best


def fuzzy_title_match(candidate_title: str, target_title: str) -> bool:
    """Return True when ``candidate_title`` plausibly contains ``target_title``.

    A verbatim substring always matches. Otherwise at least 80% of the target's
    tokens must find a candidate token within their edit allowance: two edits
    for tokens longer than six characters, one for tokens longer than three,
    none for shorter ones.
    """
    if target_title in candidate_title:
        return True

    candidate_tokens = tokenize(candidate_title)
    target_tokens = tokenize(target_title)
    if not target_tokens:
        return False

    matched = 0
    for target_token in target_tokens:
        if best_token_distance(target_token, candidate_tokens) <= allowed_edits(target_token):
            matched += 1

    return matched / len(target_tokens) >= MIN_TOKEN_COVERAGE
