import string

import pytest

from simplebank.random_utils import (
    random_currency,
    random_int,
    random_money,
    random_owner,
    random_string,
)


@pytest.mark.parametrize("low,high", [(0, 10), (-5, 5), (100, 200)])
def test_random_int_stays_in_range(low, high):
    for _ in range(200):
        value = random_int(low, high)
        assert low <= value <= high


def test_random_int_single_value_range():
    assert random_int(7, 7) == 7


def test_random_int_reaches_both_ends():
    seen = {random_int(0, 1) for _ in range(500)}
    assert seen == {0, 1}


def test_random_int_rejects_inverted_range():
    with pytest.raises(ValueError):
        random_int(10, 1)


@pytest.mark.parametrize("n", [0, 1, 6, 50])
def test_random_string_length_and_alphabet(n):
    value = random_string(n)
    assert len(value) == n
    assert set(value) <= set(string.ascii_lowercase)


def test_random_string_negative_length_is_empty():
    assert random_string(-3) == ""


def test_random_owner_has_six_letters():
    owner = random_owner()
    assert len(owner) == 6
    assert owner.isalpha() and owner.islower()


def test_random_money_range():
    for _ in range(200):
        assert 0 <= random_money() <= 1000


def test_random_currency_is_supported():
    seen = {random_currency() for _ in range(300)}
    assert seen <= {"EUR", "USD", "CAD"}
    assert len(seen) > 1