#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Per-form voucher state.

A ``VoucherForm`` owns one voucher's header fields and lines while it is
being edited. Every mutation recomputes the totals from scratch through the
calculator; nothing is patched incrementally.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

from voucher_ledger.aggregator import DiscountRequest
from voucher_ledger.calculator import VoucherComputation, VoucherLedgerCalculator
from voucher_ledger.discount import reconcile_line_discount
from voucher_ledger.models import (
    Account,
    DiscountState,
    InvoiceLineItem,
    PaymentReceiptItem,
    Product,
    TaxBase,
    VoucherLine,
)
from voucher_ledger.money import to_number
from voucher_ledger.utils import LedgerError
from voucher_ledger.validation import ValidationIssue

logger = logging.getLogger(__name__)

HEADER_FIELDS = ("voucher_date", "reference", "narration", "party_id")
ITEM_NUMBER_FIELDS = (
    "initial_quantity",
    "count",
    "deduction_per_unit",
    "rate",
    "tax_rate",
    "discount_percent",
    "discount_amount",
)


def _as_id(value: Any) -> Optional[int]:
    number = to_number(value)
    return int(number) if number else None


@dataclass
class SubmitResult:
    ok: bool
    issues: List[ValidationIssue] = field(default_factory=list)
    error: Optional[LedgerError] = None
    result: Any = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"ok": self.ok}
        if self.issues:
            data["issues"] = [issue.to_dict() for issue in self.issues]
        if self.error is not None:
            data["error"] = self.error.to_dict()
        return data


class VoucherForm:
    def __init__(
        self,
        calculator: VoucherLedgerCalculator,
        accounts: Optional[Mapping[int, Account]] = None,
        products: Optional[Mapping[int, Product]] = None,
        require_party: bool = False,
    ):
        self.calculator = calculator
        self.accounts = dict(accounts or {})
        self.products = dict(products or {})
        self.require_party = require_party
        self.reset()

    @property
    def kind(self):
        return self.calculator.kind

    def reset(self) -> None:
        self.header: Dict[str, Any] = {name: None for name in HEADER_FIELDS}
        self.entries: List[Any] = []
        self.discount = DiscountState()
        self.computation: VoucherComputation = self.calculator.compute([])

    def load(
        self,
        header: Mapping[str, Any],
        entries: Sequence[Any],
        discount: Optional[DiscountState] = None,
    ) -> None:
        """Replace the form contents with a saved voucher."""
        self.reset()
        self.set_header(**{k: v for k, v in header.items() if k in HEADER_FIELDS})
        self.entries = [entry for entry in entries if not getattr(entry, "is_system", False)]
        self.discount = discount or DiscountState()
        self.recompute()

    def set_header(self, **fields: Any) -> None:
        unknown = set(fields) - set(HEADER_FIELDS)
        if unknown:
            raise KeyError(f"Unknown header fields: {', '.join(sorted(unknown))}")
        self.header.update(fields)

    def new_entry(self):
        if self.kind.uses_lines:
            return VoucherLine()
        if self.kind.uses_items:
            return InvoiceLineItem()
        return PaymentReceiptItem()

    def add_line(self, entry: Any = None) -> int:
        self.entries.append(entry if entry is not None else self.new_entry())
        self.recompute()
        return len(self.entries) - 1

    def remove_line(self, index: int) -> None:
        del self.entries[index]
        self.recompute()

    def update_line(self, index: int, field_name: str, value: Any) -> None:
        entry = self.entries[index]
        if self.kind.uses_lines:
            self._update_voucher_line(entry, field_name, value)
        elif self.kind.uses_items:
            self.entries[index] = self._update_item(entry, field_name, value)
        else:
            self._update_payment_item(entry, field_name, value)
        self.recompute()

    def _update_voucher_line(self, line: VoucherLine, field_name: str, value: Any) -> None:
        if field_name == "account_id":
            account = self.accounts.get(_as_id(value))
            if account is not None:
                line.account_id = account.id
                line.account_name = account.name
        elif field_name == "debit":
            line.set_debit(value)
        elif field_name == "credit":
            line.set_credit(value)
        elif field_name == "narration":
            line.narration = value or ""
        else:
            raise KeyError(f"Unknown line field: {field_name}")

    def _update_item(self, item: InvoiceLineItem, field_name: str, value: Any) -> InvoiceLineItem:
        if field_name == "product_id":
            product = self.products.get(_as_id(value))
            if product is not None:
                item.product_id = product.id
                item.product_name = product.name
                item.rate = product.purchase_rate if self.kind.is_purchase_side else product.sales_rate
                item.tax_rate = product.tax_rate
        elif field_name in ITEM_NUMBER_FIELDS:
            setattr(item, field_name, to_number(value))
        elif field_name in ("product_name", "description", "remarks"):
            setattr(item, field_name, value or "")
        else:
            raise KeyError(f"Unknown item field: {field_name}")

        if self.calculator.policy.tax_base == TaxBase.POST_DISCOUNT:
            return reconcile_line_discount(item, field_name)
        return item

    def _update_payment_item(self, item: PaymentReceiptItem, field_name: str, value: Any) -> None:
        if field_name == "account_id":
            account = self.accounts.get(_as_id(value))
            if account is not None:
                item.account_id = account.id
                item.description = account.name
        elif field_name in ("amount", "tax_rate"):
            setattr(item, field_name, to_number(value))
        elif field_name in ("description", "remarks"):
            setattr(item, field_name, value or "")
        else:
            raise KeyError(f"Unknown item field: {field_name}")

    def set_discount_rate(self, value: Any) -> None:
        """A rate of 0 or less clears the whole discount, amount included."""
        rate = to_number(value)
        if rate <= 0:
            self.discount = DiscountState()
            self.recompute()
        else:
            self.recompute(DiscountRequest(rate_input=rate, previous=self.discount))

    def set_discount_amount(self, value: Any) -> None:
        """An amount of 0 or less clears the whole discount, rate included."""
        amount = to_number(value)
        if amount <= 0:
            self.discount = DiscountState()
            self.recompute()
        else:
            self.recompute(DiscountRequest(amount_input=amount, previous=self.discount))

    def recompute(self, discount: Optional[DiscountRequest] = None) -> VoucherComputation:
        discount = discount or DiscountRequest(previous=self.discount)
        self.computation = self.calculator.compute(self.entries, discount)
        if self.kind.uses_items:
            totals = self.computation.totals
            self.discount = DiscountState(rate=totals.discount_rate, amount=totals.discount)
        return self.computation

    def validate(self) -> List[ValidationIssue]:
        return self.calculator.validate(
            self.entries,
            party_id=self.header.get("party_id"),
            require_party=self.require_party,
        )

    def snapshot(self) -> Dict[str, Any]:
        data = {"header": dict(self.header), **self.computation.to_dict()}
        if self.kind.uses_items:
            data["discount"] = self.discount.to_dict()
        return data

    def to_payload(self) -> Dict[str, Any]:
        """The finalized voucher handed to the persistence layer."""
        return self.snapshot()

    def submit(self, save: Callable[[Dict[str, Any]], Any]) -> SubmitResult:
        """Validate, then hand the payload to ``save``.

        On success the form is reset. If ``save`` raises ``LedgerError`` the
        lines are kept as they are so the user can fix and resubmit.
        """
        issues = self.validate()
        if issues:
            logger.info("%s voucher rejected: %s", self.kind.value, issues[0])
            return SubmitResult(ok=False, issues=issues)

        try:
            result = save(self.to_payload())
        except LedgerError as exc:
            logger.warning("saving %s voucher failed: %s", self.kind.value, exc)
            return SubmitResult(ok=False, error=exc)

        logger.info("%s voucher saved", self.kind.value)
        self.reset()
        return SubmitResult(ok=True, result=result)
