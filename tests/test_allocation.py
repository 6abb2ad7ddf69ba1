from voucher_ledger.allocation import (
    PAID,
    PARTIALLY_PAID,
    UNPAID,
    allocation_issues,
    allocation_status,
    auto_fill,
    clamp_allocation,
    pending_amount,
)
from voucher_ledger.models import PaymentReceiptItem


def test_pending_amount():
    assert pending_amount(1026, 500.5) == 525.5
    assert pending_amount("1000", None) == 1000


def test_allocation_status():
    assert allocation_status(1000, 1000) == PAID
    assert allocation_status(1000, 999.995) == PAID
    assert allocation_status(1000, 400) == PARTIALLY_PAID
    assert allocation_status(1000, 0) == UNPAID


def test_clamp_allocation():
    assert clamp_allocation(1500, 1000) == 1000
    assert clamp_allocation(-5, 1000) == 0
    assert clamp_allocation(250, 1000) == 250


def test_auto_fill_limited_by_remaining_amount():
    assert auto_fill(pending=800, voucher_amount=1000, already_allocated=600) == 400
    assert auto_fill(pending=300, voucher_amount=1000, already_allocated=600) == 300


def test_auto_fill_offers_full_pending_when_nothing_left():
    assert auto_fill(pending=800, voucher_amount=1000, already_allocated=1000) == 800


def test_allocation_within_amount_is_fine():
    item = PaymentReceiptItem(
        account_id=1, amount=100, allocations=[{"invoice_id": 1, "amount": 100.004}]
    )
    assert allocation_issues([item]) == []
