#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Account ledger with running balance, and the trial balance."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, replace
from typing import Any, Dict, Iterable, List, Optional, Sequence

from voucher_ledger.models import Account
from voucher_ledger.money import BALANCE_TOLERANCE, format_balance, round2, to_number
from voucher_ledger.utils import LedgerError


@dataclass
class LedgerEntry:
    date: str
    voucher_no: str = ""
    voucher_type: str = ""
    narration: str = ""
    debit: float = 0.0
    credit: float = 0.0
    balance: float = 0.0

    def __post_init__(self):
        self.debit = to_number(self.debit)
        self.credit = to_number(self.credit)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LedgerEntry":
        return cls(
            date=str(data.get("date") or data.get("voucher_date") or ""),
            voucher_no=data.get("voucher_no") or "",
            voucher_type=data.get("voucher_type") or "",
            narration=data.get("narration") or "",
            debit=data.get("debit", 0.0),
            credit=data.get("credit", 0.0),
        )

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["balance_display"] = format_balance(self.balance)
        return data


@dataclass
class LedgerReport:
    account: Account
    opening_balance: float
    closing_balance: float
    entries: List[LedgerEntry] = field(default_factory=list)

    @property
    def total_debit(self) -> float:
        return round2(sum(e.debit for e in self.entries))

    @property
    def total_credit(self) -> float:
        return round2(sum(e.credit for e in self.entries))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "account": asdict(self.account),
            "opening_balance": self.opening_balance,
            "opening_balance_display": format_balance(self.opening_balance),
            "closing_balance": self.closing_balance,
            "closing_balance_display": format_balance(self.closing_balance),
            "total_debit": self.total_debit,
            "total_credit": self.total_credit,
            "entries": [entry.to_dict() for entry in self.entries],
        }


def ledger_report(
    account: Account,
    entries: Iterable[LedgerEntry],
    to_date: str,
    from_date: Optional[str] = None,
) -> LedgerReport:
    """Build the ledger for ``account`` up to ``to_date`` (ISO dates).

    The opening balance is the account's own opening balance plus, when
    ``from_date`` is given, the net movement of everything dated before it.
    Entries keep their input order within a day.
    """
    running = account.signed_opening_balance
    dated = sorted(
        enumerate(entries), key=lambda pair: (pair[1].date, pair[0])
    )

    in_range: List[LedgerEntry] = []
    for _, entry in dated:
        if entry.date > to_date:
            continue
        if from_date and entry.date < from_date:
            running += entry.debit - entry.credit
            continue
        in_range.append(replace(entry))

    opening = round2(running)
    for entry in in_range:
        running += entry.debit - entry.credit
        entry.balance = round2(running)

    return LedgerReport(
        account=account,
        opening_balance=opening,
        closing_balance=round2(running),
        entries=in_range,
    )


@dataclass
class PostedLine:
    """One posted journal line with the date of its voucher."""

    date: str
    account_id: int
    debit: float = 0.0
    credit: float = 0.0

    def __post_init__(self):
        self.debit = to_number(self.debit)
        self.credit = to_number(self.credit)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PostedLine":
        return cls(
            date=str(data.get("date") or data.get("voucher_date") or ""),
            account_id=int(data["account_id"]),
            debit=data.get("debit", 0.0),
            credit=data.get("credit", 0.0),
        )


@dataclass
class TrialBalanceRow:
    account_code: str
    account_name: str
    debit: float
    credit: float


@dataclass
class TrialBalance:
    rows: List[TrialBalanceRow] = field(default_factory=list)

    @property
    def total_debit(self) -> float:
        return round2(sum(row.debit for row in self.rows))

    @property
    def total_credit(self) -> float:
        return round2(sum(row.credit for row in self.rows))

    @property
    def is_balanced(self) -> bool:
        return abs(self.total_debit - self.total_credit) < BALANCE_TOLERANCE

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rows": [asdict(row) for row in self.rows],
            "total_debit": self.total_debit,
            "total_credit": self.total_credit,
            "is_balanced": self.is_balanced,
        }


def trial_balance(
    chart: Sequence[Account],
    lines: Iterable[PostedLine],
    to_date: str,
    from_date: Optional[str] = None,
) -> TrialBalance:
    """Debit and credit totals per account for lines dated in the period.

    Accounts with no movement in the period are left out; rows are ordered
    by account code.
    """
    by_id = {account.id: account for account in chart}
    sums: Dict[int, List[float]] = {}
    for line in lines:
        if line.account_id not in by_id:
            raise LedgerError(
                "ACCOUNT_NOT_FOUND",
                f"Account {line.account_id} is not in the chart",
                {"account_id": line.account_id},
            )
        if line.date > to_date or (from_date and line.date < from_date):
            continue
        totals = sums.setdefault(line.account_id, [0.0, 0.0])
        totals[0] += line.debit
        totals[1] += line.credit

    rows = []
    for account_id, (debit, credit) in sums.items():
        debit, credit = round2(debit), round2(credit)
        if debit == 0 and credit == 0:
            continue
        account = by_id[account_id]
        rows.append(TrialBalanceRow(account.code, account.name, debit, credit))
    rows.sort(key=lambda row: row.account_code)
    return TrialBalance(rows=rows)
