"""Chart difficulty levels and their search aliases."""

from __future__ import annotations

from enum import Enum


class Difficulty(Enum):
    PAST = ("Past", ("past", "pst"), "PST", "#4caed1")
    PRESENT = ("Present", ("present", "prs"), "PRS", "#8fad4c")
    FUTURE = ("Future", ("future", "ftr"), "FTR", "#822c68")
    ETERNAL = ("Eternal", ("eternal", "etr"), "ETR", "#8571a3")
    BEYOND = ("Beyond", ("beyond", "byd"), "BYD", "#b5112e")

    def __init__(self, label: str, aliases: tuple[str, ...], abbreviation: str, color: str) -> None:
        self.label = label
        self.aliases = aliases
        self.abbreviation = abbreviation
        self.color = color

    def __str__(self) -> str:
        return self.label


_BY_LABEL = {member.label.lower(): member for member in Difficulty}


def parse_difficulty(value: str | None) -> Difficulty | None:
    """Map a free-text difficulty to ``Difficulty``; unknown or empty values give None."""
    key = str(value or "").strip().lower()
    if not key:
        return None
    return _BY_LABEL.get(key)


def difficulty_aliases(value: str | None) -> tuple[str, ...]:
    """Return the lowercase title aliases for ``value``.

    Unrecognized difficulty strings act as their own single alias.
    """
    known = parse_difficulty(value)
    if known is not None:
        return known.aliases
    key = str(value or "").lower()
    if not key:
        return ()
    return (key,)
