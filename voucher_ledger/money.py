#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Money coercion and rounding helpers."""

from __future__ import annotations

import math
import re
from decimal import Decimal
from typing import Any

BALANCE_TOLERANCE = 0.01

# past this magnitude a float carries no fraction of a cent
_MAX_CENTS = 2.0 ** 52
_NUMERIC_PREFIX = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")


def to_number(value: Any) -> float:
    """Coerce user input to a float; anything unparsable becomes 0.

    Text is read like a form field: leading whitespace is ignored and a
    numeric prefix is honored, so "12.5kg" gives 12.5 and "abc" gives 0.
    """
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float, Decimal)):
        number = float(value)
    elif isinstance(value, str):
        match = _NUMERIC_PREFIX.match(value.strip())
        if not match:
            return 0.0
        number = float(match.group(0))
    else:
        return 0.0
    if math.isnan(number) or math.isinf(number):
        return 0.0
    return number


def round2(value: Any) -> float:
    """Round to 2 places, halves away from zero.

    The value is scaled by 100 as a float before rounding, so 1.005 (stored
    as 1.00499...) gives 1.0, the same as rounding ``x * 100`` to an integer.
    """
    number = to_number(value)
    cents = abs(number) * 100
    if cents >= _MAX_CENTS:
        return number
    rounded = math.copysign(math.floor(cents + 0.5), number) / 100
    # -0.0 is falsy
    return rounded or 0.0


def is_zero(value: Any) -> bool:
    return abs(to_number(value)) < BALANCE_TOLERANCE


def format_amount(value: Any) -> str:
    return f"{round2(value):,.2f}"


def format_balance(value: Any) -> str:
    """Render a signed balance the way ledgers show it, e.g. ``1,500.00 Dr``."""
    amount = round2(value)
    side = "Dr" if amount >= 0 else "Cr"
    return f"{abs(amount):,.2f} {side}"
