import pytest

from voucher_ledger.models import Account
from voucher_ledger.reporting import (
    LedgerEntry,
    PostedLine,
    ledger_report,
    trial_balance,
)
from voucher_ledger.utils import LedgerError


@pytest.fixture
def bank():
    return Account(id=40, code="1002", name="Bank", opening_balance=1000, opening_balance_type="Dr")


@pytest.fixture
def entries():
    return [
        LedgerEntry(date="2025-01-10", voucher_no="RV-2", debit=500),
        LedgerEntry(date="2025-01-05", voucher_no="PV-1", credit=200),
        LedgerEntry(date="2025-02-01", voucher_no="RV-3", debit=50),
        LedgerEntry(date="2025-01-10", voucher_no="JV-4", credit=25.5),
    ]


def test_running_balance(bank, entries):
    report = ledger_report(bank, entries, to_date="2025-01-31")
    assert report.opening_balance == 1000
    assert [e.voucher_no for e in report.entries] == ["PV-1", "RV-2", "JV-4"]
    assert [e.balance for e in report.entries] == [800, 1300, 1274.5]
    assert report.closing_balance == 1274.5
    assert report.total_debit == 500
    assert report.total_credit == 225.5


def test_closing_equals_opening_plus_movement(bank, entries):
    report = ledger_report(bank, entries, to_date="2025-12-31")
    movement = sum(e.debit - e.credit for e in entries)
    assert report.closing_balance == pytest.approx(report.opening_balance + movement)


def test_from_date_folds_earlier_entries_into_opening(bank, entries):
    report = ledger_report(bank, entries, to_date="2025-01-31", from_date="2025-01-06")
    assert report.opening_balance == 800
    assert [e.voucher_no for e in report.entries] == ["RV-2", "JV-4"]


def test_credit_opening_balance():
    account = Account(id=20, code="2001", name="Acme", opening_balance=300, opening_balance_type="Cr")
    report = ledger_report(account, [LedgerEntry(date="2025-01-02", debit=100)], "2025-01-31")
    assert report.opening_balance == -300
    data = report.to_dict()
    assert data["closing_balance_display"] == "200.00 Cr"
    assert data["entries"][0]["balance_display"] == "200.00 Cr"


def test_input_entries_are_not_modified(bank, entries):
    ledger_report(bank, entries, to_date="2025-01-31")
    assert all(e.balance == 0 for e in entries)


def test_entry_from_dict():
    entry = LedgerEntry.from_dict({"voucher_date": "2025-03-01", "debit": "12.5", "credit": None})
    assert entry.date == "2025-03-01"
    assert entry.debit == 12.5
    assert entry.credit == 0


@pytest.fixture
def posted_lines():
    return [
        PostedLine(date="2025-01-05", account_id=40, debit=500),
        PostedLine(date="2025-01-05", account_id=2, credit=500),
        PostedLine(date="2025-01-12", account_id=1, debit=200.1),
        PostedLine(date="2025-01-12", account_id=20, credit=200.1),
        PostedLine(date="2025-01-20", account_id=40, debit=99.99),
        PostedLine(date="2025-01-20", account_id=30, credit=99.99),
        PostedLine(date="2025-02-02", account_id=40, credit=50),
        PostedLine(date="2025-02-02", account_id=20, debit=50),
    ]


def test_trial_balance_groups_by_account(chart, posted_lines):
    report = trial_balance(chart, posted_lines, to_date="2025-01-31")
    assert [row.account_code for row in report.rows] == ["1002", "1122", "2001", "4001", "5001"]
    bank = report.rows[0]
    assert (bank.debit, bank.credit) == (599.99, 0)
    assert report.total_debit == report.total_credit == 800.09
    assert report.is_balanced


def test_trial_balance_date_range(chart, posted_lines):
    report = trial_balance(chart, posted_lines, to_date="2025-02-28", from_date="2025-01-10")
    codes = [row.account_code for row in report.rows]
    assert "4001" not in codes
    bank = report.rows[codes.index("1002")]
    assert (bank.debit, bank.credit) == (99.99, 50)
    assert report.total_debit == 350.09


def test_trial_balance_skips_accounts_without_movement(chart):
    lines = [
        PostedLine(date="2025-01-05", account_id=40, debit=0),
        PostedLine(date="2025-01-05", account_id=2, credit=0),
    ]
    report = trial_balance(chart, lines, to_date="2025-01-31")
    assert report.rows == []
    assert report.is_balanced


def test_trial_balance_flags_difference(chart):
    lines = [
        PostedLine(date="2025-01-05", account_id=40, debit=100),
        PostedLine(date="2025-01-05", account_id=2, credit=90),
    ]
    data = trial_balance(chart, lines, to_date="2025-01-31").to_dict()
    assert data["is_balanced"] is False
    assert data["total_debit"] == 100
    assert data["total_credit"] == 90
    assert data["rows"][0] == {"account_code": "1002", "account_name": "Bank", "debit": 100, "credit": 0}


def test_trial_balance_unknown_account(chart):
    with pytest.raises(LedgerError) as exc_info:
        trial_balance(chart, [PostedLine(date="2025-01-05", account_id=999, debit=1)], "2025-01-31")
    assert exc_info.value.code == "ACCOUNT_NOT_FOUND"


def test_posted_line_from_dict():
    line = PostedLine.from_dict({"voucher_date": "2025-03-01", "account_id": "40", "credit": "7.5"})
    assert line.date == "2025-03-01"
    assert line.account_id == 40
    assert (line.debit, line.credit) == (0, 7.5)
