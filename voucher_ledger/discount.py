#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Keep discount rate and discount amount in step with each other."""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Optional

from voucher_ledger.line_items import gross_amount
from voucher_ledger.models import DiscountState, InvoiceLineItem
from voucher_ledger.money import round2, to_number

QUANTITY_FIELDS = ("initial_quantity", "count", "deduction_per_unit", "rate")


def reconcile_discount(
    subtotal: Any,
    rate_input: Optional[Any] = None,
    amount_input: Optional[Any] = None,
    previous: Optional[DiscountState] = None,
) -> DiscountState:
    """Resolve the voucher-level discount against ``subtotal``.

    A positive rate wins over a positive amount. When neither is supplied
    the previous values are kept (rounded) so a half-typed small value is
    not overwritten.
    """
    previous = previous or DiscountState()
    subtotal = to_number(subtotal)
    rate = to_number(rate_input) if rate_input is not None else 0.0
    amount = to_number(amount_input) if amount_input is not None else 0.0

    if rate > 0:
        return DiscountState(rate=rate, amount=round2(subtotal * rate / 100))
    if amount > 0:
        amount = round2(amount)
        new_rate = round2(amount / subtotal * 100) if subtotal > 0 else 0.0
        return DiscountState(rate=new_rate, amount=amount)
    return DiscountState(rate=round2(previous.rate), amount=round2(previous.amount))


def reconcile_line_discount(item: InvoiceLineItem, edited_field: str) -> InvoiceLineItem:
    """Sync an item's own discount percent/amount after ``edited_field`` changed."""
    gross = gross_amount(item)
    if edited_field == "discount_percent":
        return replace(item, discount_amount=round2(gross * item.discount_percent / 100))
    if edited_field == "discount_amount":
        percent = round2(item.discount_amount / gross * 100) if gross > 0 else 0.0
        return replace(item, discount_percent=percent)
    if edited_field in QUANTITY_FIELDS and item.discount_percent > 0:
        return replace(item, discount_amount=round2(gross * item.discount_percent / 100))
    return item
