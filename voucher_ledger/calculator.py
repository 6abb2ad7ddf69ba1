#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""One calculator for every voucher kind, parameterized by policy."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Union

from voucher_ledger.aggregator import DiscountRequest, aggregate_invoice, aggregate_payment
from voucher_ledger.allocation import allocation_issues
from voucher_ledger.balancer import DEFAULT_ADJUSTMENT_NAME, auto_balance, balance_lines
from voucher_ledger.line_items import calc_line_amounts
from voucher_ledger.models import (
    BalanceTotals,
    InvoiceLineItem,
    InvoiceTotals,
    LineAmounts,
    PaymentReceiptItem,
    PaymentTotals,
    TaxBase,
    VoucherKind,
    VoucherLine,
)
from voucher_ledger.validation import (
    ValidationIssue,
    validate_invoice_items,
    validate_lines,
    validate_party,
    validate_payment_items,
)

logger = logging.getLogger(__name__)

Entries = Sequence[Union[VoucherLine, InvoiceLineItem, PaymentReceiptItem]]
Totals = Union[BalanceTotals, InvoiceTotals, PaymentTotals]

PARTY_LABELS = {
    VoucherKind.PURCHASE_INVOICE: "supplier",
    VoucherKind.PURCHASE_RETURN: "supplier",
    VoucherKind.SALES_INVOICE: "party",
    VoucherKind.SALES_RETURN: "party",
    VoucherKind.PAYMENT: '"Pay From" account',
    VoucherKind.RECEIPT: '"Deposit To" account',
}


@dataclass(frozen=True)
class VoucherPolicy:
    kind: VoucherKind
    signed_difference: bool = False
    auto_balance: bool = False
    tax_base: TaxBase = TaxBase.PRE_DISCOUNT


DEFAULT_POLICIES: Dict[VoucherKind, VoucherPolicy] = {
    VoucherKind.JOURNAL: VoucherPolicy(VoucherKind.JOURNAL),
    VoucherKind.OPENING_BALANCE: VoucherPolicy(
        VoucherKind.OPENING_BALANCE, signed_difference=True, auto_balance=True
    ),
    VoucherKind.PURCHASE_INVOICE: VoucherPolicy(VoucherKind.PURCHASE_INVOICE),
    VoucherKind.SALES_INVOICE: VoucherPolicy(VoucherKind.SALES_INVOICE),
    VoucherKind.PURCHASE_RETURN: VoucherPolicy(
        VoucherKind.PURCHASE_RETURN, tax_base=TaxBase.POST_DISCOUNT
    ),
    VoucherKind.SALES_RETURN: VoucherPolicy(
        VoucherKind.SALES_RETURN, tax_base=TaxBase.POST_DISCOUNT
    ),
    VoucherKind.PAYMENT: VoucherPolicy(VoucherKind.PAYMENT),
    VoucherKind.RECEIPT: VoucherPolicy(VoucherKind.RECEIPT),
}


@dataclass
class VoucherComputation:
    kind: VoucherKind
    entries: List[Any]
    totals: Totals
    is_balanced: bool
    line_amounts: List[LineAmounts] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "kind": self.kind.value,
            "entries": [entry.to_dict() for entry in self.entries],
            "totals": self.totals.to_dict(),
            "is_balanced": self.is_balanced,
        }
        if self.line_amounts:
            data["line_amounts"] = [amounts.to_dict() for amounts in self.line_amounts]
        return data


class VoucherLedgerCalculator:
    """Stateless calculator; every call takes the full current collection."""

    def __init__(
        self,
        kind: Union[VoucherKind, str],
        policy: Optional[VoucherPolicy] = None,
        adjustment_account_id: Optional[int] = None,
        adjustment_account_name: str = DEFAULT_ADJUSTMENT_NAME,
    ):
        self.kind = VoucherKind(kind)
        self.policy = policy or DEFAULT_POLICIES[self.kind]
        self.adjustment_account_id = adjustment_account_id
        self.adjustment_account_name = adjustment_account_name

    def line_amounts(self, item: InvoiceLineItem) -> LineAmounts:
        return calc_line_amounts(item, self.policy.tax_base)

    def balance(self, lines: Sequence[VoucherLine]) -> BalanceTotals:
        return balance_lines(lines, signed_difference=self.policy.signed_difference)

    def prepare_lines(self, lines: Sequence[VoucherLine]) -> List[VoucherLine]:
        """Lines as they should be shown and saved, adjustment line included."""
        if self.policy.auto_balance:
            return auto_balance(lines, self.adjustment_account_id, self.adjustment_account_name)
        return list(lines)

    def invoice_totals(
        self, items: Sequence[InvoiceLineItem], discount: Optional[DiscountRequest] = None
    ) -> InvoiceTotals:
        return aggregate_invoice(items, discount, self.policy.tax_base)

    def payment_totals(self, items: Sequence[PaymentReceiptItem]) -> PaymentTotals:
        return aggregate_payment(items)

    def compute(
        self, entries: Entries, discount: Optional[DiscountRequest] = None
    ) -> VoucherComputation:
        if self.kind.uses_lines:
            lines = self.prepare_lines(entries)
            totals = self.balance(lines)
            computation = VoucherComputation(self.kind, lines, totals, totals.is_balanced)
        elif self.kind.uses_items:
            items = list(entries)
            computation = VoucherComputation(
                self.kind,
                items,
                self.invoice_totals(items, discount),
                True,
                [self.line_amounts(item) for item in items],
            )
        else:
            items = list(entries)
            computation = VoucherComputation(self.kind, items, self.payment_totals(items), True)
        logger.debug("computed %s: %s", self.kind.value, computation.totals)
        return computation

    def validate(
        self,
        entries: Entries,
        party_id: Any = None,
        require_party: bool = False,
    ) -> List[ValidationIssue]:
        if self.kind.uses_lines:
            lines = self.prepare_lines(entries)
            return validate_lines(lines, self.balance(lines))

        issues: List[ValidationIssue] = []
        if require_party:
            issues.extend(validate_party(party_id, PARTY_LABELS[self.kind]))
        if self.kind.uses_items:
            issues.extend(validate_invoice_items(entries))
        else:
            issues.extend(validate_payment_items(entries))
            issues.extend(allocation_issues(entries))
        return issues
