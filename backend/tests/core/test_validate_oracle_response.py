"""Tests for oracle response validation — structured payloads and text fallback."""

from mixit.core.oracle_outcome import OracleSuccess, OracleValidationFailure
from mixit.core.validate_oracle_response import (
    parse_text_answer, validate_oracle_payload,
)


def test_valid_payload():
    result = validate_oracle_payload({"name": " Steam ", "icon": "💨"})
    assert result == OracleSuccess(name="Steam", icon="💨")


def test_inner_whitespace_collapsed():
    result = validate_oracle_payload({"name": "Hot   Spring", "icon": "♨️"})
    assert result.name == "Hot Spring"


def test_missing_field_rejected():
    result = validate_oracle_payload({"name": "Steam"})
    assert isinstance(result, OracleValidationFailure)
    assert "icon" in result.reason


def test_empty_name_rejected():
    result = validate_oracle_payload({"name": "   ", "icon": "💨"})
    assert isinstance(result, OracleValidationFailure)


def test_non_string_name_rejected():
    result = validate_oracle_payload({"name": 42, "icon": "💨"})
    assert isinstance(result, OracleValidationFailure)


def test_name_too_long_rejected():
    result = validate_oracle_payload(
        {"name": "x" * 11, "icon": "💨"}, max_name_length=10,
    )
    assert isinstance(result, OracleValidationFailure)
    assert "10" in result.reason


def test_icon_too_long_rejected():
    result = validate_oracle_payload(
        {"name": "Steam", "icon": "💨" * 5}, max_icon_length=4,
    )
    assert isinstance(result, OracleValidationFailure)


def test_non_object_rejected():
    result = validate_oracle_payload(["Steam", "💨"])
    assert isinstance(result, OracleValidationFailure)
    assert "list" in result.reason


def test_text_answer_parsed():
    assert parse_text_answer("🌋 Lava") == OracleSuccess(name="Lava", icon="🌋")


def test_text_answer_multiword_name():
    assert parse_text_answer("🏔️ Snowy Mountain").name == "Snowy Mountain"


def test_text_answer_without_icon_rejected():
    assert isinstance(parse_text_answer("Lava flow"), OracleValidationFailure)


def test_text_answer_single_token_rejected():
    assert isinstance(parse_text_answer("🌋"), OracleValidationFailure)


def test_empty_text_rejected():
    assert isinstance(parse_text_answer(""), OracleValidationFailure)
    assert isinstance(parse_text_answer(None), OracleValidationFailure)
