#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Per-line amounts for invoice and return items."""

from __future__ import annotations

from voucher_ledger.models import InvoiceLineItem, LineAmounts, TaxBase
from voucher_ledger.money import to_number


def final_quantity(item: InvoiceLineItem) -> float:
    """Quantity after deductions. May go negative while the user is typing."""
    return (
        to_number(item.initial_quantity)
        - to_number(item.count) * to_number(item.deduction_per_unit)
    )


def gross_amount(item: InvoiceLineItem) -> float:
    return final_quantity(item) * to_number(item.rate)


def calc_line_amounts(
    item: InvoiceLineItem, tax_base: TaxBase = TaxBase.PRE_DISCOUNT
) -> LineAmounts:
    """Return the derived amounts for one item, unrounded.

    Under the pre-discount base the line discount is ignored and tax is
    charged on the full amount; any discount is applied at voucher level.
    Under the post-discount base tax is charged on ``amount - discount_amount``.
    """
    qty = final_quantity(item)
    amount = qty * to_number(item.rate)
    discount = to_number(item.discount_amount) if tax_base == TaxBase.POST_DISCOUNT else 0.0
    taxable = amount - discount
    tax_amount = taxable * to_number(item.tax_rate) / 100
    return LineAmounts(
        final_quantity=qty,
        amount=amount,
        discount=discount,
        taxable_amount=taxable,
        tax_amount=tax_amount,
        total=taxable + tax_amount,
    )
