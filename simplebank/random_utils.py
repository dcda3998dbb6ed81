"""Random values for tests and fixtures: owners, amounts and currencies."""

import random
import string

_LETTERS = string.ascii_lowercase
_CURRENCIES = ("EUR", "USD", "CAD")


def random_int(min_value: int, max_value: int) -> int:
    """Return a random integer in the closed range [min_value, max_value]."""
    if max_value < min_value:
        raise ValueError(
            f"empty range: max_value {max_value} is below min_value {min_value}"
        )
    return random.randint(min_value, max_value)


def random_string(n: int) -> str:
    """Return a string of ``n`` random lowercase ASCII letters."""
    return "".join(random.choice(_LETTERS) for _ in range(n))


def random_owner() -> str:
    """Return a random account owner name of six letters."""
    return random_string(6)


def random_money() -> int:
    """Return a random amount of money between 0 and 1000."""
    return random_int(0, 1000)


def random_currency() -> str:
    """Return one of the supported currency codes at random."""
    return random.choice(_CURRENCIES)