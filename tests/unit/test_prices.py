import pytest

from cartsuite.core.prices import normalize_price, price_digits, same_price, sum_prices


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("$ 129.000", 129000),
        ("$129.000", 129000),
        ("$\xa045.500", 45500),
        ("$0", 0),
        ("", 0),
        (None, 0),
        ("Agotado", 0),
    ],
)
def test_normalize_price(raw, expected):
    assert normalize_price(raw) == expected


def test_price_digits_keeps_order():
    assert price_digits("1a2b3") == "123"
    assert price_digits("") == ""


def test_sum_prices_normalizes_each_value():
    assert sum_prices(["$129.000", "$45.500"]) == 174500
    assert sum_prices([]) == 0


def test_same_price_ignores_formatting():
    assert same_price("$ 129.000", "129000")
    assert not same_price("$129.000", "$129.001")
