#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Debit/credit totals and the opening-balance adjustment line."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Iterable, List, Optional

from voucher_ledger.models import BalanceTotals, VoucherLine
from voucher_ledger.money import round2, to_number

logger = logging.getLogger(__name__)

DEFAULT_ADJUSTMENT_NAME = "Opening Balance Adjustment"
ADJUSTMENT_NARRATION = "Auto-generated balancing entry"


def balance_lines(
    lines: Iterable[VoucherLine], signed_difference: bool = False
) -> BalanceTotals:
    """Sum both columns of ``lines``.

    ``difference`` is ``|debit - credit|`` unless ``signed_difference`` is
    set, in which case it keeps the sign of ``debit - credit``.
    """
    total_debit = 0.0
    total_credit = 0.0
    for line in lines:
        total_debit += to_number(line.debit)
        total_credit += to_number(line.credit)

    total_debit = round2(total_debit)
    total_credit = round2(total_credit)
    difference = round2(total_debit - total_credit)
    if not signed_difference:
        difference = abs(difference)
    return BalanceTotals(
        total_debit=total_debit,
        total_credit=total_credit,
        difference=difference,
    )


def strip_system_lines(lines: Iterable[VoucherLine]) -> List[VoucherLine]:
    return [line for line in lines if not line.is_system]


def adjustment_line(
    totals: BalanceTotals,
    adjustment_account_id: int,
    adjustment_account_name: str = DEFAULT_ADJUSTMENT_NAME,
) -> Optional[VoucherLine]:
    """Build the line that closes the gap in ``totals``, or None if balanced."""
    residual = round2(totals.total_debit - totals.total_credit)
    if abs(residual) < 0.01:
        return None
    line = VoucherLine(
        account_id=adjustment_account_id,
        account_name=adjustment_account_name,
        narration=ADJUSTMENT_NARRATION,
        is_system=True,
    )
    if residual > 0:
        line.credit = residual
    else:
        line.debit = -residual
    return line


def auto_balance(
    lines: Iterable[VoucherLine],
    adjustment_account_id: Optional[int],
    adjustment_account_name: str = DEFAULT_ADJUSTMENT_NAME,
) -> List[VoucherLine]:
    """Return the user lines plus a freshly built adjustment line if needed.

    Previously generated system lines are always dropped first, so an edit
    never leaves a stale residual behind.
    """
    user_lines = [replace(line) for line in strip_system_lines(lines)]
    if adjustment_account_id is None:
        return user_lines

    totals = balance_lines(user_lines)
    line = adjustment_line(totals, adjustment_account_id, adjustment_account_name)
    if line is not None:
        logger.debug(
            "adjustment line: debit=%s credit=%s against account %s",
            line.debit,
            line.credit,
            adjustment_account_id,
        )
        user_lines.append(line)
    return user_lines
