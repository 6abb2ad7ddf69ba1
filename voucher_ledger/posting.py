#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Turn computed vouchers into balanced journal lines."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Sequence

from voucher_ledger.balancer import (
    ADJUSTMENT_NARRATION,
    DEFAULT_ADJUSTMENT_NAME,
    balance_lines,
    strip_system_lines,
)
from voucher_ledger.calculator import VoucherComputation
from voucher_ledger.models import (
    Account,
    InvoiceTotals,
    PaymentReceiptItem,
    PaymentTotals,
    VoucherKind,
    VoucherLine,
)
from voucher_ledger.money import round2
from voucher_ledger.utils import LedgerError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PostingAccounts:
    purchases: int
    sales: int
    input_tax: int
    output_tax: int
    discount_received: int
    discount_allowed: int
    adjustment: Optional[int] = None
    adjustment_name: str = DEFAULT_ADJUSTMENT_NAME


def find_account_by_code(chart: Iterable[Account], code: str) -> Account:
    for account in chart:
        if account.code == code:
            return account
    raise LedgerError("ACCOUNT_NOT_FOUND", f"Account not found: {code}", {"code": code})


def resolve_posting_accounts(
    chart: Iterable[Account],
    config: Dict[str, Any],
    include_adjustment: bool = False,
) -> PostingAccounts:
    """Resolve configured account codes to chart ids once, up front.

    The opening-balance adjustment account is only looked up when
    ``include_adjustment`` is set; other vouchers never post to it.
    """
    chart = list(chart)
    codes = config["posting_accounts"]
    resolved = {name: find_account_by_code(chart, code).id for name, code in codes.items()}
    adjustment_id = None
    adjustment_name = config.get("adjustment_account_name", DEFAULT_ADJUSTMENT_NAME)
    if include_adjustment:
        adjustment = find_account_by_code(chart, config["adjustment_account_code"])
        adjustment_id, adjustment_name = adjustment.id, adjustment.name
    return PostingAccounts(
        purchases=resolved["purchases"],
        sales=resolved["sales"],
        input_tax=resolved["input_tax"],
        output_tax=resolved["output_tax"],
        discount_received=resolved["discount_received"],
        discount_allowed=resolved["discount_allowed"],
        adjustment=adjustment_id,
        adjustment_name=adjustment_name,
    )


def _dr(account_id: int, amount: float, narration: str) -> VoucherLine:
    return VoucherLine(account_id=account_id, debit=round2(amount), narration=narration)


def _cr(account_id: int, amount: float, narration: str) -> VoucherLine:
    return VoucherLine(account_id=account_id, credit=round2(amount), narration=narration)


def reverse_lines(lines: Sequence[VoucherLine]) -> List[VoucherLine]:
    return [
        VoucherLine(
            account_id=line.account_id,
            account_name=line.account_name,
            debit=line.credit,
            credit=line.debit,
            narration=line.narration,
            is_system=line.is_system,
        )
        for line in lines
    ]


def _checked(kind: VoucherKind, lines: List[VoucherLine]) -> List[VoucherLine]:
    totals = balance_lines(lines)
    if not totals.is_balanced:
        logger.warning("posting for %s is not balanced: %s", kind.value, totals)
        raise LedgerError(
            "NOT_BALANCED",
            f"Posting is not balanced: debit {totals.total_debit}, credit {totals.total_credit}",
            totals.to_dict(),
        )
    return lines


def post_purchase_invoice(
    totals: InvoiceTotals, supplier_account_id: int, accounts: PostingAccounts
) -> List[VoucherLine]:
    lines = [_dr(accounts.purchases, totals.subtotal, "Purchase of goods")]
    if totals.tax > 0:
        lines.append(_dr(accounts.input_tax, totals.tax, "Input tax on purchases"))
    lines.append(
        _cr(
            supplier_account_id,
            totals.subtotal - totals.discount + totals.tax,
            "Amount payable to supplier",
        )
    )
    if totals.discount > 0:
        lines.append(
            _cr(accounts.discount_received, totals.discount, "Discount received from supplier")
        )
    return _checked(VoucherKind.PURCHASE_INVOICE, lines)


def post_sales_invoice(
    totals: InvoiceTotals, customer_account_id: int, accounts: PostingAccounts
) -> List[VoucherLine]:
    lines = [
        _dr(
            customer_account_id,
            totals.subtotal - totals.discount + totals.tax,
            "Amount receivable from party",
        ),
        _cr(accounts.sales, totals.subtotal, "Sales of goods"),
    ]
    if totals.tax > 0:
        lines.append(_cr(accounts.output_tax, totals.tax, "Output tax on sales"))
    if totals.discount > 0:
        lines.append(
            _dr(accounts.discount_allowed, totals.discount, "Discount allowed to customer")
        )
    return _checked(VoucherKind.SALES_INVOICE, lines)


def post_purchase_return(
    totals: InvoiceTotals, supplier_account_id: int, accounts: PostingAccounts
) -> List[VoucherLine]:
    return reverse_lines(post_purchase_invoice(totals, supplier_account_id, accounts))


def post_sales_return(
    totals: InvoiceTotals, customer_account_id: int, accounts: PostingAccounts
) -> List[VoucherLine]:
    return reverse_lines(post_sales_invoice(totals, customer_account_id, accounts))


def _item_account(item: PaymentReceiptItem) -> int:
    if not item.account_id:
        raise LedgerError(
            "ACCOUNT_NOT_FOUND",
            f"No ledger selected for item '{item.description}'",
        )
    return item.account_id


def post_payment(
    items: Sequence[PaymentReceiptItem],
    totals: PaymentTotals,
    pay_from_account_id: int,
    accounts: PostingAccounts,
) -> List[VoucherLine]:
    lines = [_cr(pay_from_account_id, totals.grand_total, "Payment made")]
    for item in items:
        lines.append(_dr(_item_account(item), item.amount, f"Payment to {item.description}"))
    if totals.tax > 0:
        lines.append(_dr(accounts.input_tax, totals.tax, "Tax on payment"))
    return _checked(VoucherKind.PAYMENT, lines)


def post_receipt(
    items: Sequence[PaymentReceiptItem],
    totals: PaymentTotals,
    deposit_to_account_id: int,
    accounts: PostingAccounts,
) -> List[VoucherLine]:
    lines = [_dr(deposit_to_account_id, totals.grand_total, "Receipt received")]
    for item in items:
        lines.append(_cr(_item_account(item), item.amount, f"Receipt from {item.description}"))
    if totals.tax > 0:
        lines.append(_cr(accounts.output_tax, totals.tax, "Tax on receipt"))
    return _checked(VoucherKind.RECEIPT, lines)


def post_opening_balance(
    lines: Sequence[VoucherLine],
    adjustment_account_id: int,
    adjustment_account_name: str = "Opening Balance Adjustment",
) -> List[VoucherLine]:
    """Dual entry: each user line is mirrored against the adjustment account."""
    posted: List[VoucherLine] = []
    for line in strip_system_lines(lines):
        posted.append(
            VoucherLine(
                account_id=line.account_id,
                account_name=line.account_name,
                debit=round2(line.debit),
                credit=round2(line.credit),
                narration=line.narration,
            )
        )
        posted.append(
            VoucherLine(
                account_id=adjustment_account_id,
                account_name=adjustment_account_name,
                debit=round2(line.credit),
                credit=round2(line.debit),
                narration=ADJUSTMENT_NARRATION,
                is_system=True,
            )
        )
    return _checked(VoucherKind.OPENING_BALANCE, posted)


def post_voucher(
    computation: VoucherComputation,
    accounts: Optional[PostingAccounts],
    party_account_id: Optional[int] = None,
) -> List[VoucherLine]:
    """Post any computed voucher; ``party_account_id`` is the supplier,
    customer, pay-from or deposit-to account as the kind requires."""
    kind = computation.kind
    logger.info("posting %s voucher", kind.value)
    if kind == VoucherKind.JOURNAL:
        return _checked(kind, list(computation.entries))
    if kind == VoucherKind.OPENING_BALANCE:
        if accounts is None or accounts.adjustment is None:
            raise LedgerError("ACCOUNT_NOT_FOUND", "Opening Balance Adjustment account not found")
        return post_opening_balance(
            computation.entries, accounts.adjustment, accounts.adjustment_name
        )

    if not party_account_id:
        raise LedgerError("ACCOUNT_NOT_FOUND", f"A party account is required to post {kind.value}")

    posters = {
        VoucherKind.PURCHASE_INVOICE: post_purchase_invoice,
        VoucherKind.SALES_INVOICE: post_sales_invoice,
        VoucherKind.PURCHASE_RETURN: post_purchase_return,
        VoucherKind.SALES_RETURN: post_sales_return,
    }
    if kind in posters:
        return posters[kind](computation.totals, party_account_id, accounts)
    if kind == VoucherKind.PAYMENT:
        return post_payment(computation.entries, computation.totals, party_account_id, accounts)
    return post_receipt(computation.entries, computation.totals, party_account_id, accounts)
