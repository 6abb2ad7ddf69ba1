import math

import pytest

from voucher_ledger.balancer import balance_lines
from voucher_ledger.models import VoucherLine
from voucher_ledger.money import format_amount, format_balance, is_zero, round2, to_number


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, 0.0),
        ("", 0.0),
        ("abc", 0.0),
        ("12.5kg", 12.5),
        ("  42", 42.0),
        ("-3.25", -3.25),
        (".5", 0.5),
        ("1e3", 1000.0),
        (7, 7.0),
        (float("nan"), 0.0),
        (math.inf, 0.0),
        (True, 0.0),
        ([1, 2], 0.0),
    ],
)
def test_to_number(value, expected):
    assert to_number(value) == expected


@pytest.mark.parametrize(
    "value, expected",
    [
        (1.005, 1.0),
        (1.015, 1.01),
        (-1.005, -1.0),
        (0.125, 0.13),
        (-0.125, -0.13),
        (0.1 + 0.2, 0.3),
        (126.0000001, 126.0),
        (None, 0.0),
        ("NaN", 0.0),
    ],
)
def test_round2(value, expected):
    assert round2(value) == expected


def test_round2_normalizes_negative_zero():
    result = round2(-0.001)
    assert result == 0.0
    assert math.copysign(1, result) == 1


@pytest.mark.parametrize("value", [0.0, 1.005, -2.345, 1234.5678, 1e9 + 0.125, 0.3333333])
def test_round2_is_idempotent(value):
    assert round2(round2(value)) == round2(value)


def test_is_zero_uses_cent_tolerance():
    assert is_zero(0.009)
    assert is_zero(-0.004)
    assert not is_zero(0.01)


def test_format_amount_and_balance():
    assert format_amount(1234.5) == "1,234.50"
    assert format_balance(1500) == "1,500.00 Dr"
    assert format_balance(-20.456) == "20.46 Cr"
    assert format_balance(0) == "0.00 Dr"


@pytest.mark.parametrize("value", [1e26, -3.5e30, 1e300])
def test_round2_keeps_huge_amounts(value):
    assert round2(value) == value


def test_huge_debit_stays_in_totals():
    totals = balance_lines([VoucherLine(account_id=1, debit=1e26), VoucherLine(account_id=2, credit=1)])
    assert totals.total_debit == 1e26
    assert totals.total_credit == 1
    assert not totals.is_balanced
