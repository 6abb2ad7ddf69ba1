"""Voucher computation, balancing and posting."""

from voucher_ledger.aggregator import DiscountRequest, aggregate_invoice, aggregate_payment
from voucher_ledger.balancer import auto_balance, balance_lines
from voucher_ledger.calculator import (
    DEFAULT_POLICIES,
    VoucherComputation,
    VoucherLedgerCalculator,
    VoucherPolicy,
)
from voucher_ledger.discount import reconcile_discount, reconcile_line_discount
from voucher_ledger.form import SubmitResult, VoucherForm
from voucher_ledger.line_items import calc_line_amounts
from voucher_ledger.models import (
    Account,
    InvoiceLineItem,
    PaymentReceiptItem,
    Product,
    TaxBase,
    VoucherKind,
    VoucherLine,
)
from voucher_ledger.money import round2, to_number
from voucher_ledger.utils import LedgerError
from voucher_ledger.validation import ValidationIssue, ensure_valid

__version__ = "0.1.0"

__all__ = [
    "Account",
    "DEFAULT_POLICIES",
    "DiscountRequest",
    "InvoiceLineItem",
    "LedgerError",
    "PaymentReceiptItem",
    "Product",
    "SubmitResult",
    "TaxBase",
    "ValidationIssue",
    "VoucherComputation",
    "VoucherForm",
    "VoucherKind",
    "VoucherLedgerCalculator",
    "VoucherLine",
    "VoucherPolicy",
    "aggregate_invoice",
    "aggregate_payment",
    "auto_balance",
    "balance_lines",
    "calc_line_amounts",
    "ensure_valid",
    "reconcile_discount",
    "reconcile_line_discount",
    "round2",
    "to_number",
]
