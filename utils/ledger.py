"""
Customer debt calculation.

Debt is never stored. It is derived from the full set of a customer's sales
and payments every time it is read:

    debt = sum(transaction.total) - sum(payment.amount)
"""
from decimal import Decimal
from typing import Any, Iterable

PAID_UP = "Paid Up"
OUTSTANDING = "Outstanding"


def to_decimal(value) -> Decimal:
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    # str() keeps 15.5 as Decimal("15.5") instead of the binary float expansion
    return Decimal(str(value))


def _field(row: Any, name: str):
    if isinstance(row, dict):
        return row.get(name)
    return getattr(row, name)


def sum_field(rows: Iterable[Any], name: str) -> Decimal:
    return sum((to_decimal(_field(row, name)) for row in rows), Decimal("0"))


def compute_debt(transactions: Iterable[Any], payments: Iterable[Any]) -> Decimal:
    """
    Outstanding debt for one customer.

    Rows can be ORM objects or plain mappings; only ``total`` is read from
    transactions and ``amount`` from payments. The result may be negative
    when a customer has overpaid.
    """
    return sum_field(transactions, "total") - sum_field(payments, "amount")


def debt_status(debt) -> str:
    return OUTSTANDING if to_decimal(debt) > 0 else PAID_UP
