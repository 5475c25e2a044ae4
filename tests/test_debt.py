from decimal import Decimal
from types import SimpleNamespace

import pytest

from utils.ledger import compute_debt, debt_status, to_decimal, PAID_UP, OUTSTANDING


def test_no_rows_means_no_debt():
    assert compute_debt([], []) == 0


def test_sales_minus_payments():
    debt = compute_debt([{"total": 30}, {"total": 20}], [{"amount": 10}])
    assert debt == Decimal("40")


def test_accepts_orm_like_rows():
    transactions = [SimpleNamespace(total=Decimal("12.50")), SimpleNamespace(total=Decimal("7.25"))]
    payments = [SimpleNamespace(amount=Decimal("4.75"))]
    assert compute_debt(transactions, payments) == Decimal("15.00")


def test_order_does_not_matter():
    transactions = [{"total": "0.10"}, {"total": "0.20"}, {"total": "99.99"}]
    payments = [{"amount": "0.30"}, {"amount": "50"}]
    forward = compute_debt(transactions, payments)
    backward = compute_debt(list(reversed(transactions)), list(reversed(payments)))
    assert forward == backward == Decimal("49.99")


def test_float_inputs_do_not_drift():
    # 0.1 + 0.2 != 0.3 in binary floating point
    assert compute_debt([{"total": 0.1}, {"total": 0.2}], [{"amount": 0.3}]) == 0


def test_payment_reduces_debt():
    transactions = [{"total": 30}, {"total": 20}]
    before = compute_debt(transactions, [{"amount": 10}])
    after = compute_debt(transactions, [{"amount": 10}, {"amount": 15.50}])
    assert before == Decimal("40")
    assert after == Decimal("24.50")


def test_repeatable():
    transactions = [{"total": "19.99"}]
    payments = [{"amount": "5"}]
    assert compute_debt(transactions, payments) == compute_debt(transactions, payments)


def test_overpayment_is_negative_debt():
    debt = compute_debt([{"total": 10}], [{"amount": 25}])
    assert debt == Decimal("-15")
    assert debt_status(debt) == PAID_UP


@pytest.mark.parametrize("debt,status", [
    (Decimal("0.01"), OUTSTANDING),
    (Decimal("0"), PAID_UP),
    (Decimal("-3"), PAID_UP),
])
def test_debt_status(debt, status):
    assert debt_status(debt) == status


def test_none_counts_as_zero():
    assert to_decimal(None) == 0
