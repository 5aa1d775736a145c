# tests/shared/test_number_utils.py
import pytest

from carimport.shared.utils.number import digits_to_int, grouped_to_int, kw_to_ps, to_int_or_none


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("15.900 €", 15900),
        ("€ 24,990", 24990),
        ("Preis: 7 500,- EUR", 7500),
        ("ohne Preis", None),
        (None, None),
    ],
)
def test_digits_to_int_keeps_only_digits(raw, expected):
    assert digits_to_int(raw) == expected


def test_grouped_to_int_handles_german_thousands():
    assert grouped_to_int("123.456") == 123456
    assert grouped_to_int("1.234.567") == 1234567
    assert grouped_to_int("12,3 km") is None


@pytest.mark.parametrize("kw, ps", [(147, 200), (110, 150), (100, 136), (1, 1)])
def test_kw_to_ps_rounds_half_up(kw, ps):
    assert kw_to_ps(kw) == ps


def test_to_int_or_none_json_values():
    assert to_int_or_none(15000) == 15000
    assert to_int_or_none(15000.9) == 15000
    assert to_int_or_none("15.000") == 15000          # тисячі, не дріб
    assert to_int_or_none("15000.00") == 15000
    assert to_int_or_none("") is None
    assert to_int_or_none(True) is None
    assert to_int_or_none(float("nan")) is None
    assert to_int_or_none("NaN") is None
    assert to_int_or_none("1.234.567,89") == 1234567
    assert to_int_or_none("1,234,567.89") == 1234567
    assert to_int_or_none("19,5") == 19
