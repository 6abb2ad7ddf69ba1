#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Computed totals. Always rebuilt from the full line collection."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict

from voucher_ledger.money import BALANCE_TOLERANCE


@dataclass(frozen=True)
class LineAmounts:
    final_quantity: float
    amount: float
    discount: float
    taxable_amount: float
    tax_amount: float
    total: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class DiscountState:
    rate: float = 0.0
    amount: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class InvoiceTotals:
    subtotal: float = 0.0
    discount: float = 0.0
    discount_rate: float = 0.0
    tax: float = 0.0
    grand_total: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class PaymentTotals:
    subtotal: float = 0.0
    tax: float = 0.0
    grand_total: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class BalanceTotals:
    total_debit: float = 0.0
    total_credit: float = 0.0
    difference: float = 0.0

    @property
    def is_balanced(self) -> bool:
        return abs(self.difference) < BALANCE_TOLERANCE

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["is_balanced"] = self.is_balanced
        return data
