"""Tests for normalize — commutative canonical pair keys, no IO."""

from uuid import uuid4

from mixit.core.canonical_key import KEY_SEPARATOR, normalize, split_key


def test_order_independent():
    a, b = uuid4(), uuid4()
    assert normalize(a, b) == normalize(b, a)


def test_self_combination_is_valid():
    a = uuid4()
    assert normalize(a, a) == f"{a}{KEY_SEPARATOR}{a}"


def test_distinct_pairs_get_distinct_keys():
    a, b, c = uuid4(), uuid4(), uuid4()
    assert normalize(a, b) != normalize(a, c)


def test_uuid_and_string_forms_agree():
    a, b = uuid4(), uuid4()
    assert normalize(a, b) == normalize(str(b), str(a))


def test_split_key_returns_sorted_ids():
    assert split_key(normalize("b", "a")) == ("a", "b")
