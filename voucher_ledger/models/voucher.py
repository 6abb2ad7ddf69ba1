#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Voucher models."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from voucher_ledger.money import to_number


class VoucherKind(str, Enum):
    JOURNAL = "journal"
    OPENING_BALANCE = "opening_balance"
    PURCHASE_INVOICE = "purchase_invoice"
    SALES_INVOICE = "sales_invoice"
    PURCHASE_RETURN = "purchase_return"
    SALES_RETURN = "sales_return"
    PAYMENT = "payment"
    RECEIPT = "receipt"

    @property
    def uses_lines(self) -> bool:
        return self in (VoucherKind.JOURNAL, VoucherKind.OPENING_BALANCE)

    @property
    def uses_items(self) -> bool:
        return self in (
            VoucherKind.PURCHASE_INVOICE,
            VoucherKind.SALES_INVOICE,
            VoucherKind.PURCHASE_RETURN,
            VoucherKind.SALES_RETURN,
        )

    @property
    def uses_payment_items(self) -> bool:
        return self in (VoucherKind.PAYMENT, VoucherKind.RECEIPT)

    @property
    def is_purchase_side(self) -> bool:
        return self in (VoucherKind.PURCHASE_INVOICE, VoucherKind.PURCHASE_RETURN)


class TaxBase(str, Enum):
    """Which amount a line's tax rate applies to."""

    PRE_DISCOUNT = "pre_discount"
    POST_DISCOUNT = "post_discount"


def _optional_id(value: Any) -> Optional[int]:
    if value in (None, "", 0, "0"):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


@dataclass
class VoucherLine:
    """One debit/credit line of a journal or opening-balance voucher."""

    account_id: Optional[int] = None
    account_name: str = ""
    debit: float = 0.0
    credit: float = 0.0
    narration: str = ""
    is_system: bool = False

    def __post_init__(self):
        self.account_id = _optional_id(self.account_id)
        self.debit = to_number(self.debit)
        self.credit = to_number(self.credit)

    def set_debit(self, value: Any) -> None:
        self.debit = to_number(value)
        self.credit = 0.0

    def set_credit(self, value: Any) -> None:
        self.credit = to_number(value)
        self.debit = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "VoucherLine":
        return cls(
            account_id=data.get("account_id"),
            account_name=data.get("account_name") or "",
            debit=data.get("debit", 0.0),
            credit=data.get("credit", 0.0),
            narration=data.get("narration") or "",
            is_system=bool(data.get("is_system", False)),
        )


@dataclass
class InvoiceLineItem:
    """A product line on an invoice or return voucher.

    Derived figures (final quantity, amount, tax) are never stored here;
    see ``voucher_ledger.line_items.calc_line_amounts``.
    """

    product_id: Optional[int] = None
    product_name: str = ""
    description: str = ""
    initial_quantity: float = 0.0
    count: float = 1.0
    deduction_per_unit: float = 0.0
    rate: float = 0.0
    tax_rate: float = 0.0
    discount_percent: float = 0.0
    discount_amount: float = 0.0
    remarks: str = ""

    def __post_init__(self):
        self.product_id = _optional_id(self.product_id)
        for name in (
            "initial_quantity",
            "count",
            "deduction_per_unit",
            "rate",
            "tax_rate",
            "discount_percent",
            "discount_amount",
        ):
            setattr(self, name, to_number(getattr(self, name)))

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "InvoiceLineItem":
        return cls(
            product_id=data.get("product_id"),
            product_name=data.get("product_name") or "",
            description=data.get("description") or "",
            initial_quantity=data.get("initial_quantity", 0.0),
            count=data.get("count", 1.0),
            deduction_per_unit=data.get("deduction_per_unit", 0.0),
            rate=data.get("rate", 0.0),
            tax_rate=data.get("tax_rate", 0.0),
            discount_percent=data.get("discount_percent", 0.0),
            discount_amount=data.get("discount_amount", 0.0),
            remarks=data.get("remarks") or "",
        )


@dataclass
class Allocation:
    invoice_id: int
    amount: float = 0.0

    def __post_init__(self):
        self.amount = to_number(self.amount)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class PaymentReceiptItem:
    """A ledger line on a payment or receipt voucher."""

    description: str = ""
    account_id: Optional[int] = None
    amount: float = 0.0
    tax_rate: float = 0.0
    remarks: str = ""
    allocations: List[Allocation] = field(default_factory=list)

    def __post_init__(self):
        self.account_id = _optional_id(self.account_id)
        self.amount = to_number(self.amount)
        self.tax_rate = to_number(self.tax_rate)
        self.allocations = [
            a if isinstance(a, Allocation) else Allocation(**a)
            for a in self.allocations or []
        ]

    @property
    def allocated_total(self) -> float:
        return sum(a.amount for a in self.allocations)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PaymentReceiptItem":
        return cls(
            description=data.get("description") or data.get("ledger_name") or "",
            account_id=data.get("account_id"),
            amount=data.get("amount", 0.0),
            tax_rate=data.get("tax_rate", 0.0),
            remarks=data.get("remarks") or "",
            allocations=[
                {"invoice_id": a.get("invoice_id"), "amount": a.get("amount", 0.0)}
                for a in data.get("allocations") or []
            ],
        )
