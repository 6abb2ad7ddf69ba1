import pytest

from voucher_ledger.calculator import VoucherLedgerCalculator
from voucher_ledger.form import VoucherForm
from voucher_ledger.models import VoucherKind, VoucherLine
from voucher_ledger.utils import LedgerError


@pytest.fixture
def journal_form(accounts_by_id):
    return VoucherForm(VoucherLedgerCalculator(VoucherKind.JOURNAL), accounts=accounts_by_id)


def _fill_journal(form, debit=500, credit=500):
    first = form.add_line()
    form.update_line(first, "account_id", 40)
    form.update_line(first, "debit", debit)
    second = form.add_line()
    form.update_line(second, "account_id", "30")
    form.update_line(second, "credit", credit)


class TestJournalForm:
    def test_selecting_account_fills_name(self, journal_form):
        index = journal_form.add_line()
        journal_form.update_line(index, "account_id", 40)
        assert journal_form.entries[index].account_name == "Bank"

    def test_unknown_account_is_ignored(self, journal_form):
        index = journal_form.add_line()
        journal_form.update_line(index, "account_id", 999)
        assert journal_form.entries[index].account_id is None

    def test_debit_clears_credit(self, journal_form):
        index = journal_form.add_line()
        journal_form.update_line(index, "credit", 200)
        journal_form.update_line(index, "debit", "150")
        line = journal_form.entries[index]
        assert (line.debit, line.credit) == (150, 0)

    def test_totals_follow_every_edit(self, journal_form):
        _fill_journal(journal_form, debit=500, credit=300)
        assert journal_form.computation.totals.difference == 200
        journal_form.update_line(1, "credit", 500)
        assert journal_form.computation.is_balanced
        journal_form.remove_line(1)
        assert journal_form.computation.totals.total_credit == 0

    def test_unknown_field(self, journal_form):
        index = journal_form.add_line()
        with pytest.raises(KeyError):
            journal_form.update_line(index, "colour", "red")

    def test_submit_blocked_when_unbalanced(self, journal_form):
        _fill_journal(journal_form, debit=500, credit=300)
        calls = []
        result = journal_form.submit(calls.append)
        assert not result.ok
        assert calls == []
        assert "200.00" in str(result.issues[0])

    def test_submit_blocked_when_empty(self, journal_form):
        result = journal_form.submit(lambda payload: None)
        assert [issue.code for issue in result.issues] == ["EMPTY_VOUCHER"]

    def test_submit_saves_and_resets(self, journal_form):
        journal_form.set_header(voucher_date="2025-01-15", narration="Cash sale")
        _fill_journal(journal_form)
        saved = []

        def save(payload):
            saved.append(payload)
            return {"voucher_no": "JV-1"}

        result = journal_form.submit(save)
        assert result.ok
        assert result.result == {"voucher_no": "JV-1"}
        assert saved[0]["header"]["narration"] == "Cash sale"
        assert saved[0]["totals"]["total_debit"] == 500
        assert journal_form.entries == []
        assert journal_form.header["narration"] is None

    def test_failed_save_keeps_lines(self, journal_form):
        _fill_journal(journal_form)

        def save(payload):
            raise LedgerError("SAVE_FAILED", "database unavailable")

        result = journal_form.submit(save)
        assert not result.ok
        assert result.error.code == "SAVE_FAILED"
        assert len(journal_form.entries) == 2
        assert result.to_dict()["error"]["code"] == "SAVE_FAILED"

    def test_unknown_header_field(self, journal_form):
        with pytest.raises(KeyError):
            journal_form.set_header(colour="red")


def test_opening_balance_form_keeps_adjustment_out_of_user_lines(accounts_by_id):
    calc = VoucherLedgerCalculator(VoucherKind.OPENING_BALANCE, adjustment_account_id=7)
    form = VoucherForm(calc, accounts=accounts_by_id)
    index = form.add_line()
    form.update_line(index, "account_id", 40)
    form.update_line(index, "debit", 5000)
    assert len(form.entries) == 1
    assert form.computation.entries[-1].credit == 5000
    assert form.computation.totals.difference == 0
    form.update_line(index, "debit", 6000)
    assert [line.credit for line in form.computation.entries if line.is_system] == [6000]


def test_load_drops_system_lines(accounts_by_id):
    form = VoucherForm(VoucherLedgerCalculator(VoucherKind.OPENING_BALANCE, adjustment_account_id=7))
    form.load(
        {"voucher_date": "2025-01-01", "voucher_no": "OB-1"},
        [VoucherLine(account_id=40, debit=10), VoucherLine(account_id=7, credit=10, is_system=True)],
    )
    assert len(form.entries) == 1
    assert form.header["voucher_date"] == "2025-01-01"
    assert len(form.computation.entries) == 2


class TestInvoiceForm:
    def test_product_fills_side_specific_rate(self, products_by_id):
        purchase = VoucherForm(VoucherLedgerCalculator(VoucherKind.PURCHASE_INVOICE), products=products_by_id)
        purchase.update_line(purchase.add_line(), "product_id", 100)
        assert purchase.entries[0].rate == 80
        assert purchase.entries[0].tax_rate == 18
        assert purchase.entries[0].product_name == "Steel Rod"

        sales = VoucherForm(VoucherLedgerCalculator(VoucherKind.SALES_INVOICE), products=products_by_id)
        sales.update_line(sales.add_line(), "product_id", 100)
        assert sales.entries[0].rate == 100

    def test_discount_rate_and_amount(self, products_by_id):
        form = VoucherForm(VoucherLedgerCalculator(VoucherKind.SALES_INVOICE), products=products_by_id)
        index = form.add_line()
        form.update_line(index, "product_id", 100)
        form.update_line(index, "initial_quantity", 10)
        form.update_line(index, "count", 0)
        assert form.computation.totals.subtotal == 1000

        form.set_discount_rate(10)
        assert form.computation.totals.discount == 100
        assert form.snapshot()["discount"] == {"rate": 10, "amount": 100}

        form.set_discount_amount(250)
        assert form.discount.rate == 25

        form.set_discount_rate(0)
        assert form.computation.totals.discount == 0
        assert form.discount.amount == 0

    def test_clearing_discount_amount_clears_rate(self, products_by_id):
        form = VoucherForm(VoucherLedgerCalculator(VoucherKind.SALES_INVOICE), products=products_by_id)
        index = form.add_line()
        form.update_line(index, "product_id", 100)
        form.update_line(index, "initial_quantity", 10)
        form.update_line(index, "count", 0)
        form.set_discount_rate(10)

        form.set_discount_amount(0)
        assert form.snapshot()["discount"] == {"rate": 0, "amount": 0}
        assert form.computation.totals.grand_total == 1180

    def test_discount_kept_while_items_change(self, products_by_id):
        form = VoucherForm(VoucherLedgerCalculator(VoucherKind.SALES_INVOICE), products=products_by_id)
        index = form.add_line()
        form.update_line(index, "product_id", 100)
        form.update_line(index, "initial_quantity", 10)
        form.update_line(index, "count", 0)
        form.set_discount_amount(50)
        form.update_line(index, "initial_quantity", 20)
        assert form.computation.totals.discount == 50

    def test_return_item_discount_percent(self, products_by_id):
        form = VoucherForm(VoucherLedgerCalculator(VoucherKind.SALES_RETURN), products=products_by_id)
        index = form.add_line()
        form.update_line(index, "product_id", 101)
        form.update_line(index, "initial_quantity", 4)
        form.update_line(index, "count", 0)
        form.update_line(index, "discount_percent", 10)
        assert form.entries[index].discount_amount == 22
        assert form.computation.totals.subtotal == 198

    def test_party_required(self, products_by_id):
        form = VoucherForm(
            VoucherLedgerCalculator(VoucherKind.PURCHASE_INVOICE),
            products=products_by_id,
            require_party=True,
        )
        index = form.add_line()
        form.update_line(index, "product_id", 100)
        form.update_line(index, "initial_quantity", 1)
        form.update_line(index, "count", 0)
        assert [issue.code for issue in form.validate()] == ["MISSING_PARTY"]
        form.set_header(party_id=20)
        assert form.validate() == []


def test_payment_form_fills_description(accounts_by_id):
    form = VoucherForm(VoucherLedgerCalculator(VoucherKind.PAYMENT), accounts=accounts_by_id)
    index = form.add_line()
    form.update_line(index, "account_id", 20)
    form.update_line(index, "amount", "1000")
    form.update_line(index, "tax_rate", 5)
    assert form.entries[index].description == "Acme Supplies"
    assert form.computation.totals.grand_total == 1050
