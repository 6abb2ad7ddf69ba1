import pytest

from voucher_ledger.models import Account, Product


CHART = [
    {"id": 1, "code": "5001", "name": "Purchases", "account_type": "expense"},
    {"id": 2, "code": "4001", "name": "Sales", "account_type": "income"},
    {"id": 3, "code": "1005", "name": "Input Tax", "account_type": "asset"},
    {"id": 4, "code": "2002", "name": "Output Tax", "account_type": "liability"},
    {"id": 5, "code": "4004", "name": "Discount Received", "account_type": "income"},
    {"id": 6, "code": "5007", "name": "Discount Allowed", "account_type": "expense"},
    {"id": 7, "code": "3004", "name": "Opening Balance Adjustment", "account_type": "equity"},
    {"id": 20, "code": "2001", "name": "Acme Supplies", "account_type": "liability"},
    {"id": 30, "code": "1122", "name": "Northwind Traders", "account_type": "asset"},
    {"id": 40, "code": "1002", "name": "Bank", "account_type": "asset"},
]


@pytest.fixture
def chart_rows():
    return [dict(row) for row in CHART]


@pytest.fixture
def chart():
    return [Account.from_dict(row) for row in CHART]


@pytest.fixture
def accounts_by_id(chart):
    return {account.id: account for account in chart}


@pytest.fixture
def products_by_id():
    products = [
        Product(id=100, code="P-100", name="Steel Rod", purchase_rate=80, sales_rate=100, tax_rate=18),
        Product(id=101, code="P-101", name="Copper Wire", purchase_rate=40, sales_rate=55, tax_rate=5),
    ]
    return {product.id: product for product in products}
