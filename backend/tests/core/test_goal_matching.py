"""Tests for arcade goal parsing and matching — pure, no IO."""

import pytest

from mixit.core.errors import OracleValidationError
from mixit.core.goal_matching import matches_goal, parse_goal_words


def test_parse_goal_list():
    assert parse_goal_words("Candle, Candles, Wax candle") == [
        "Candle", "Candles", "Wax candle",
    ]


def test_parse_drops_trailing_period_and_duplicates():
    assert parse_goal_words("Kerze, Kerzen, kerze.") == ["Kerze", "Kerzen"]


def test_parse_accepts_umlauts():
    assert parse_goal_words("Gemüse, Gemüsesorte")[0] == "Gemüse"


@pytest.mark.parametrize("text", [
    "", None, "Candle", "Candle,Candles", "🕯️ Candle, Candles", "Candle, candle",
])
def test_parse_rejects_malformed(text):
    with pytest.raises(OracleValidationError):
        parse_goal_words(text)


def test_matches_target_and_variants_case_insensitive():
    words = ["Candle", "Candles", "Wax candle"]
    assert matches_goal(words, "candle")
    assert matches_goal(words, "WAX  CANDLE")
    assert not matches_goal(words, "Lamp")


def test_parse_rejects_underscores():
    with pytest.raises(OracleValidationError):
        parse_goal_words("Foo_bar, Foo bar")


def test_parse_accepts_hyphens_and_digits():
    assert parse_goal_words("T-Rex, Dinosaur 2") == ["T-Rex", "Dinosaur 2"]
