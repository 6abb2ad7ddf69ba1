#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Bill allocation: settling pending invoices from a payment or receipt."""

from __future__ import annotations

from typing import Any, List, Sequence

from voucher_ledger.models import PaymentReceiptItem
from voucher_ledger.money import BALANCE_TOLERANCE, round2, to_number
from voucher_ledger.validation import ValidationIssue

PAID = "paid"
PARTIALLY_PAID = "partially_paid"
UNPAID = "unpaid"


def pending_amount(invoice_total: Any, allocated: Any) -> float:
    return round2(to_number(invoice_total) - to_number(allocated))


def allocation_status(invoice_total: Any, allocated: Any) -> str:
    total = to_number(invoice_total)
    allocated = to_number(allocated)
    if abs(allocated - total) < BALANCE_TOLERANCE:
        return PAID
    if allocated > 0:
        return PARTIALLY_PAID
    return UNPAID


def clamp_allocation(amount: Any, pending: Any) -> float:
    return max(0.0, min(to_number(amount), to_number(pending)))


def auto_fill(pending: Any, voucher_amount: Any, already_allocated: Any) -> float:
    """Amount to pre-fill when an invoice is ticked for allocation.

    Limited by what is left on the voucher; once nothing is left the full
    pending amount is offered and the user trims it by hand.
    """
    remaining = max(0.0, to_number(voucher_amount) - to_number(already_allocated))
    if remaining > 0:
        return min(to_number(pending), remaining)
    return to_number(pending)


def allocation_issues(items: Sequence[PaymentReceiptItem]) -> List[ValidationIssue]:
    issues = []
    for index, item in enumerate(items):
        allocated = round2(item.allocated_total)
        if allocated - round2(item.amount) >= BALANCE_TOLERANCE:
            issues.append(
                ValidationIssue(
                    "OVER_ALLOCATED",
                    "Allocated amount exceeds the item amount",
                    index,
                    {"amount": round2(item.amount), "allocated": allocated},
                )
            )
    return issues
