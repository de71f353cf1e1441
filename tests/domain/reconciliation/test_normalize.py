from __future__ import annotations

import pytest

from ukzoos.domain.reconciliation import normalize_name


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("Chester Zoo", "chester"),
        ("ZSL London Zoo", "london"),
        ("London Zoo", "london"),
        ("  Twycross   Zoo ", "twycross"),
        ("Blackpool Zoo", "blackpool"),
        ("Longleat Safari Park", "longleat"),
        ("Cotswold Wildlife Park", "cotswold"),
        ("The Deep Aquarium", "deep"),
        ("SEA LIFE Centre Birmingham", "sea life centre birmingham"),
        ("Brighton Sea Life Centre", "brighton"),
        ("Manor House Wildlife Park", "manor"),
        ("Manor Wildlife Park", "manor"),
        ("RZSS - Edinburgh Zoo", "edinburgh"),
        ("WWT Slimbridge", "slimbridge"),
        ("Noah’s Ark Zoo Farm", "noah's ark zoo farm"),
    ],
)
def test_normalize_name_produces_lookup_keys(raw: str, expected: str) -> None:
    assert normalize_name(raw) == expected


def test_operator_prefixes_are_stripped_in_any_case() -> None:
    assert normalize_name("BZS Bristol Zoo") == "bristol"
    assert normalize_name("Zsl London Zoo") == "london"
    assert normalize_name("ABCD London Zoo") == "abcd london"


def test_normalize_name_ignores_case() -> None:
    assert normalize_name("ABC Wildlife Park") == "abc"
    assert normalize_name("Abc Wildlife Park") == "abc"
    assert normalize_name("CHESTER ZOO") == normalize_name("Chester Zoo")


def test_normalize_name_never_empties_a_key() -> None:
    assert normalize_name("Zoo") == "zoo"
    assert normalize_name("Zoo Zoo") == "zoo"
    assert normalize_name("Wild") == "wild"
    assert normalize_name("Aquarium") == "aquarium"


def test_normalize_name_of_blank_input_is_empty() -> None:
    assert normalize_name("") == ""
    assert normalize_name("   \t ") == ""


def test_normalize_name_strips_stacked_suffixes_until_stable() -> None:
    assert normalize_name("The Blue Reef Aquarium Zoo") == "blue reef"
    assert normalize_name("Knowsley Safari Park Zoo") == "knowsley"


@pytest.mark.parametrize(
    "raw",
    [
        "ZSL London Zoo",
        "The Zoo Zoo",
        "SEA LIFE Centre Birmingham",
        "the wild house zoo",
        "BZS The Zoo",
        "Noah’s Ark Zoo Farm",
        "RZSS – Highland Wildlife Park",
        "Wild Wild Wild",
        "-  zoo  -",
        "",
        "Zoo",
        "Dudley Zoo and Castle",
        "WWT London Wetland Centre",
        "Blair Drummond Safari and Adventure Park",
    ],
)
def test_normalize_name_is_idempotent(raw: str) -> None:
    once = normalize_name(raw)

    assert normalize_name(once) == once
