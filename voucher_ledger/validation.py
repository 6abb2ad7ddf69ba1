#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Submit-time checks.

Every check returns a list of ``ValidationIssue``; nothing here raises.
Callers that need a hard stop (the CLI, posting) use ``ensure_valid``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Sequence

from voucher_ledger.line_items import final_quantity
from voucher_ledger.models import (
    BalanceTotals,
    InvoiceLineItem,
    PaymentReceiptItem,
    VoucherLine,
)
from voucher_ledger.money import BALANCE_TOLERANCE, format_amount
from voucher_ledger.utils import LedgerError


@dataclass
class ValidationIssue:
    code: str
    message: str
    line_index: Optional[int] = None
    details: Optional[Dict[str, Any]] = None

    def __str__(self):
        if self.line_index is None:
            return self.message
        return f"Line {self.line_index + 1}: {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"code": self.code, "message": self.message}
        if self.line_index is not None:
            data["line_index"] = self.line_index
        if self.details:
            data["details"] = self.details
        return data


def _empty(collection: Sequence[Any], noun: str) -> List[ValidationIssue]:
    if collection:
        return []
    return [ValidationIssue("EMPTY_VOUCHER", f"Add at least one {noun}")]


def validate_lines(
    lines: Sequence[VoucherLine],
    totals: BalanceTotals,
    require_balanced: bool = True,
) -> List[ValidationIssue]:
    """Checks for journal and opening-balance vouchers."""
    issues = _empty(lines, "line")
    if issues:
        return issues

    for index, line in enumerate(lines):
        if not line.is_system and not line.account_id:
            issues.append(
                ValidationIssue("MISSING_ACCOUNT", "Select an account", index)
            )
        if line.debit < 0 or line.credit < 0:
            issues.append(
                ValidationIssue("NEGATIVE_AMOUNT", "Amounts cannot be negative", index)
            )
        elif line.debit == 0 and line.credit == 0:
            issues.append(
                ValidationIssue(
                    "ZERO_VALUE_LINE",
                    "Enter either a debit or a credit amount",
                    index,
                )
            )
        elif line.debit > 0 and line.credit > 0:
            issues.append(
                ValidationIssue(
                    "BOTH_SIDES",
                    "A line cannot have both debit and credit amounts",
                    index,
                )
            )

    if require_balanced and abs(totals.difference) >= BALANCE_TOLERANCE:
        issues.append(
            ValidationIssue(
                "NOT_BALANCED",
                f"Debit and credit are not equal: difference {format_amount(abs(totals.difference))}",
                details=totals.to_dict(),
            )
        )
    return issues


def validate_invoice_items(items: Sequence[InvoiceLineItem]) -> List[ValidationIssue]:
    issues = _empty(items, "item")
    for index, item in enumerate(items):
        if not item.product_id:
            issues.append(ValidationIssue("MISSING_PRODUCT", "Select a product", index))
        qty = final_quantity(item)
        if qty <= 0 or item.rate <= 0:
            issues.append(
                ValidationIssue(
                    "INVALID_ITEM",
                    "Final quantity and rate must both be greater than zero",
                    index,
                    {"final_quantity": qty, "rate": item.rate},
                )
            )
    return issues


def validate_payment_items(items: Sequence[PaymentReceiptItem]) -> List[ValidationIssue]:
    issues = _empty(items, "item")
    for index, item in enumerate(items):
        if not item.account_id:
            issues.append(ValidationIssue("MISSING_ACCOUNT", "Select a ledger", index))
        if item.amount <= 0:
            issues.append(
                ValidationIssue("ZERO_VALUE_LINE", "Amount must be greater than zero", index)
            )
    return issues


def validate_party(party_id: Any, label: str = "party") -> List[ValidationIssue]:
    if party_id:
        return []
    return [ValidationIssue("MISSING_PARTY", f"Select a {label}")]


def ensure_valid(issues: Iterable[ValidationIssue]) -> None:
    """Raise ``LedgerError`` carrying every issue if there are any."""
    issues = list(issues)
    if not issues:
        return
    raise LedgerError(
        "VALIDATION_FAILED",
        str(issues[0]),
        {"issues": [issue.to_dict() for issue in issues]},
    )
