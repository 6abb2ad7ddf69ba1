#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Voucher-level totals for invoices, returns, payments and receipts."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Optional

from voucher_ledger.discount import reconcile_discount
from voucher_ledger.line_items import calc_line_amounts
from voucher_ledger.models import (
    DiscountState,
    InvoiceLineItem,
    InvoiceTotals,
    PaymentReceiptItem,
    PaymentTotals,
    TaxBase,
)
from voucher_ledger.money import round2, to_number


@dataclass(frozen=True)
class DiscountRequest:
    """What the user just typed into the discount fields, if anything."""

    rate_input: Optional[Any] = None
    amount_input: Optional[Any] = None
    previous: DiscountState = field(default_factory=DiscountState)


def aggregate_invoice(
    items: Iterable[InvoiceLineItem],
    discount: Optional[DiscountRequest] = None,
    tax_base: TaxBase = TaxBase.PRE_DISCOUNT,
) -> InvoiceTotals:
    discount = discount or DiscountRequest()
    subtotal = 0.0
    tax = 0.0
    for item in items:
        amounts = calc_line_amounts(item, tax_base)
        subtotal += amounts.taxable_amount
        tax += amounts.tax_amount

    subtotal = round2(subtotal)
    tax = round2(tax)
    resolved = reconcile_discount(
        subtotal,
        rate_input=discount.rate_input,
        amount_input=discount.amount_input,
        previous=discount.previous,
    )
    return InvoiceTotals(
        subtotal=subtotal,
        discount=resolved.amount,
        discount_rate=resolved.rate,
        tax=tax,
        grand_total=round2(subtotal - resolved.amount + tax),
    )


def item_tax(item: PaymentReceiptItem) -> float:
    return to_number(item.amount) * to_number(item.tax_rate) / 100


def aggregate_payment(items: Iterable[PaymentReceiptItem]) -> PaymentTotals:
    """Amounts are rounded to the cent one by one, so the subtotal equals the
    sum of the posted item lines."""
    subtotal = 0.0
    tax = 0.0
    for item in items:
        subtotal += round2(item.amount)
        tax += item_tax(item)
    subtotal = round2(subtotal)
    tax = round2(tax)
    return PaymentTotals(subtotal=subtotal, tax=tax, grand_total=round2(subtotal + tax))
