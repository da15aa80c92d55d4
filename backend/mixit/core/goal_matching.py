"""Arcade Goal Matching — parse goal word lists and check discovered elements.

Invariants:
    - Goal list is "<Target>, <Variant1>, ..." with at least one variant
    - Target is always goal_words[0]; duplicates (case-insensitive) dropped
    - Matching is case-insensitive and whitespace-insensitive
"""

import re

from mixit.core.errors import OracleValidationError

# Letters (incl. umlauts/accents), digits, spaces and hyphens per word; no underscores
_GOAL_WORD = r"(?:[^\W_]|[ \-])+"
_GOAL_LIST_PATTERN = re.compile(rf"^({_GOAL_WORD}, )+{_GOAL_WORD}$")


def _fold(word: str) -> str:
    return " ".join(word.split()).casefold()


def parse_goal_words(text: str | None) -> list[str]:
    """Parse the oracle's comma-separated goal list or raise OracleValidationError."""
    cleaned = (text or "").strip().rstrip(".")
    if not cleaned or not _GOAL_LIST_PATTERN.match(cleaned):
        raise OracleValidationError("invalid goal word list format", raw=text)
    words: list[str] = []
    seen: set[str] = set()
    for word in cleaned.split(", "):
        word = " ".join(word.split())
        if word and _fold(word) not in seen:
            seen.add(_fold(word))
            words.append(word)
    if len(words) < 2:
        raise OracleValidationError("goal list needs a target and a variant", raw=text)
    return words


def matches_goal(goal_words: list[str], word: str) -> bool:
    """True if `word` equals the target or any of its variants."""
    folded = _fold(word)
    return any(_fold(w) == folded for w in goal_words)
