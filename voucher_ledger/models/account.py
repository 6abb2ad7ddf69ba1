#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Chart-of-accounts and product catalog rows."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

from voucher_ledger.money import to_number


@dataclass
class Account:
    id: int
    code: str
    name: str
    account_type: str = ""
    opening_balance: float = 0.0
    opening_balance_type: str = "Dr"

    @property
    def signed_opening_balance(self) -> float:
        amount = to_number(self.opening_balance)
        return amount if self.opening_balance_type == "Dr" else -amount

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Account":
        return cls(
            id=int(data["id"]),
            code=str(data.get("code") or data.get("account_code") or ""),
            name=data.get("name") or data.get("account_name") or "",
            account_type=data.get("account_type") or data.get("type") or "",
            opening_balance=to_number(data.get("opening_balance")),
            opening_balance_type=data.get("opening_balance_type") or "Dr",
        )


@dataclass
class Product:
    id: int
    code: str
    name: str
    purchase_rate: float = 0.0
    sales_rate: float = 0.0
    tax_rate: float = 0.0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Product":
        return cls(
            id=int(data["id"]),
            code=str(data.get("code") or ""),
            name=data.get("name") or "",
            purchase_rate=to_number(data.get("purchase_rate")),
            sales_rate=to_number(data.get("sales_rate")),
            tax_rate=to_number(data.get("tax_rate")),
        )
