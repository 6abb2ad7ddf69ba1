from .account import Account, Product
from .totals import BalanceTotals, DiscountState, InvoiceTotals, LineAmounts, PaymentTotals
from .voucher import (
    Allocation,
    InvoiceLineItem,
    PaymentReceiptItem,
    TaxBase,
    VoucherKind,
    VoucherLine,
)

__all__ = [
    "Account",
    "Allocation",
    "BalanceTotals",
    "DiscountState",
    "InvoiceLineItem",
    "InvoiceTotals",
    "LineAmounts",
    "PaymentReceiptItem",
    "PaymentTotals",
    "Product",
    "TaxBase",
    "VoucherKind",
    "VoucherLine",
]
