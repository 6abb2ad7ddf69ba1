#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Voucher document services shared by the CLI commands."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from voucher_ledger.aggregator import DiscountRequest
from voucher_ledger.calculator import VoucherComputation, VoucherLedgerCalculator
from voucher_ledger.config import build_policies
from voucher_ledger.models import (
    Account,
    DiscountState,
    InvoiceLineItem,
    PaymentReceiptItem,
    VoucherKind,
    VoucherLine,
)
from voucher_ledger.posting import find_account_by_code
from voucher_ledger.reporting import (
    LedgerEntry,
    LedgerReport,
    PostedLine,
    TrialBalance,
    ledger_report,
    trial_balance,
)
from voucher_ledger.utils import LedgerError


def parse_kind(data: Dict[str, Any]) -> VoucherKind:
    kind = data.get("kind")
    if not kind:
        raise LedgerError("INVALID_VOUCHER", "Missing voucher kind")
    try:
        return VoucherKind(kind)
    except ValueError as exc:
        raise LedgerError(
            "INVALID_VOUCHER",
            f"Unknown voucher kind: {kind}",
            {"allowed": [k.value for k in VoucherKind]},
        ) from exc


def _object_list(data: Dict[str, Any], key: str) -> List[Dict[str, Any]]:
    rows = data.get(key) or []
    if not isinstance(rows, list) or not all(isinstance(row, dict) for row in rows):
        raise LedgerError("INVALID_VOUCHER", f"{key} must be a list of objects")
    return rows


def parse_entries(kind: VoucherKind, data: Dict[str, Any]) -> List[Any]:
    rows = _object_list(data, "entries")
    if kind.uses_lines:
        return [VoucherLine.from_dict(row) for row in rows]
    if kind.uses_items:
        return [InvoiceLineItem.from_dict(row) for row in rows]
    for index, row in enumerate(rows):
        allocations = row.get("allocations") or []
        if not isinstance(allocations, list) or not all(
            isinstance(a, dict) and a.get("invoice_id") for a in allocations
        ):
            raise LedgerError(
                "INVALID_VOUCHER",
                f"Line {index + 1}: every allocation needs an invoice_id",
                {"line_index": index},
            )
    return [PaymentReceiptItem.from_dict(row) for row in rows]


def parse_discount(data: Dict[str, Any]) -> DiscountRequest:
    """``discount`` carries the edited field, ``previous_discount`` the last state."""
    discount = data.get("discount") or {}
    previous = data.get("previous_discount") or {}
    if not isinstance(discount, dict) or not isinstance(previous, dict):
        raise LedgerError("INVALID_VOUCHER", "discount must be an object")
    return DiscountRequest(
        rate_input=discount.get("rate"),
        amount_input=discount.get("amount"),
        previous=DiscountState(
            rate=previous.get("rate", 0.0), amount=previous.get("amount", 0.0)
        ),
    )


def parse_chart(data: Dict[str, Any]) -> List[Account]:
    try:
        return [Account.from_dict(row) for row in _object_list(data, "accounts")]
    except (KeyError, TypeError, ValueError) as exc:
        raise LedgerError("INVALID_VOUCHER", f"Invalid account in chart: {exc}") from exc


def build_calculator(
    kind: VoucherKind, config: Dict[str, Any], data: Optional[Dict[str, Any]] = None
) -> VoucherLedgerCalculator:
    """Calculator for ``kind`` with the adjustment account resolved.

    An explicit ``adjustment_account_id`` in the document wins; otherwise the
    configured code is looked up in the document's chart, when one is given.
    """
    data = data or {}
    policy = build_policies(config)[kind]
    adjustment_id = data.get("adjustment_account_id")
    adjustment_name = config["adjustment_account_name"]
    if not adjustment_id and policy.auto_balance:
        chart = parse_chart(data)
        if chart:
            account = find_account_by_code(chart, config["adjustment_account_code"])
            adjustment_id, adjustment_name = account.id, account.name
    return VoucherLedgerCalculator(
        kind,
        policy=policy,
        adjustment_account_id=adjustment_id,
        adjustment_account_name=adjustment_name,
    )


def compute_document(data: Dict[str, Any], config: Dict[str, Any]) -> VoucherComputation:
    kind = parse_kind(data)
    calculator = build_calculator(kind, config, data)
    return calculator.compute(parse_entries(kind, data), parse_discount(data))


def build_ledger_report(data: Dict[str, Any]) -> LedgerReport:
    account = data.get("account")
    if not isinstance(account, dict):
        raise LedgerError("INVALID_VOUCHER", "Missing account")
    to_date = data.get("to_date")
    if not to_date:
        raise LedgerError("INVALID_VOUCHER", "Missing to_date")
    try:
        account = Account.from_dict(account)
    except (KeyError, TypeError, ValueError) as exc:
        raise LedgerError("INVALID_VOUCHER", f"Invalid account: {exc}") from exc
    entries = [LedgerEntry.from_dict(row) for row in _object_list(data, "entries")]
    return ledger_report(account, entries, str(to_date), data.get("from_date"))


def build_trial_balance(data: Dict[str, Any]) -> TrialBalance:
    to_date = data.get("to_date")
    if not to_date:
        raise LedgerError("INVALID_VOUCHER", "Missing to_date")
    chart = parse_chart(data)
    try:
        lines = [PostedLine.from_dict(row) for row in _object_list(data, "entries")]
    except (KeyError, TypeError, ValueError) as exc:
        raise LedgerError("INVALID_VOUCHER", f"Invalid posted line: {exc}") from exc
    return trial_balance(chart, lines, str(to_date), data.get("from_date"))
