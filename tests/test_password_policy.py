"""Unit tests for auth/passwords.py -- validate_password().

Covers:
- length floor (8) and ceiling (72), with exact boundaries
- leading/trailing spaces rejected even when otherwise compliant
- each missing character class triggers the diversity reason
- rule precedence: first failing rule wins
"""

import pytest

from auth.passwords import EDGE_SPACES, NOT_DIVERSE, TOO_LONG, TOO_SHORT, validate_password


@pytest.mark.parametrize("password", ["", "a", "aA1!", "aaAA11!"])
def test_shorter_than_eight_rejected(password):
    assert validate_password(password) == TOO_SHORT


def test_longer_than_seventy_two_rejected():
    assert validate_password("aA1!" * 18 + "x") == TOO_LONG


def test_length_boundaries_accepted():
    assert validate_password("aaAA11!!") is None
    assert validate_password("aA1!" * 18) is None


@pytest.mark.parametrize("password", [" aaAA11!!", "aaAA11!! ", " aaAA11!! "])
def test_edge_spaces_rejected_even_if_compliant(password):
    assert validate_password(password) == EDGE_SPACES


def test_inner_space_allowed():
    assert validate_password("te5t p@ssWord") is None


@pytest.mark.parametrize(
    "password",
    [
        "AAAA11!!",  # no lowercase
        "aaaa11!!",  # no uppercase
        "aaAAbb!!",  # no digit
        "11AAaabb",  # no special character
        "aaAA11**",  # '*' is not in the special set
    ],
)
def test_missing_character_class_rejected(password):
    assert validate_password(password) == NOT_DIVERSE


def test_diversity_reason_wording():
    assert validate_password("aaaa11!!") == "Password must contain 1 upper case letter, 1 number, and 1 special character"


def test_first_failing_rule_wins():
    # Too short AND not diverse -> length reported.
    assert validate_password("aaaa") == TOO_SHORT
    # Too long AND edge space -> length reported.
    assert validate_password(" " + "a" * 80) == TOO_LONG
    # Edge space AND not diverse -> spaces reported.
    assert validate_password(" aaaaaaaa") == EDGE_SPACES


@pytest.mark.parametrize("special", list("!@#$%^&"))
def test_each_special_character_satisfies_policy(special):
    assert validate_password(f"aaAA11{special}x") is None
