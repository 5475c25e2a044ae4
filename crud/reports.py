import logging
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

import pandas as pd
from sqlalchemy import func
from sqlalchemy.orm import Session, selectinload

from config import settings
from models.customer import Customer
from models.inventory import InventoryItem
from models.ledger import Transaction, Payment
from utils.ledger import compute_debt, sum_field, to_decimal

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


def get_debtors(db: Session, limit: Optional[int] = None) -> List[dict]:
    customers = db.query(Customer).options(
        selectinload(Customer.transactions),
        selectinload(Customer.payments)
    ).all()

    debtors = []
    for customer in customers:
        debt = compute_debt(customer.transactions, customer.payments)
        if debt > 0:
            debtors.append({"id": customer.id, "name": customer.name, "debt": debt})

    debtors.sort(key=lambda d: d["debt"], reverse=True)
    return debtors[:limit] if limit else debtors

def get_recent_transactions(db: Session, limit: int) -> List[dict]:
    transactions = db.query(Transaction).options(
        selectinload(Transaction.customer),
        selectinload(Transaction.item)
    ).order_by(Transaction.created_at.desc(), Transaction.id.desc()).limit(limit).all()

    return [{
        "id": t.id,
        "customer_name": t.customer_name or "Unknown",
        "item_name": t.item_name or "Unknown Item",
        "quantity": t.quantity,
        "total": t.total,
        "created_at": t.created_at
    } for t in transactions]

def get_summary(db: Session) -> dict:
    total_customers = db.query(func.count(Customer.id)).scalar() or 0
    total_inventory = db.query(func.count(InventoryItem.id)).scalar() or 0
    low_stock_items = db.query(func.count(InventoryItem.id)).filter(
        InventoryItem.quantity <= settings.LOW_STOCK_THRESHOLD
    ).scalar() or 0

    transactions = db.query(Transaction.total).all()
    payments = db.query(Payment.amount).all()

    summary = {
        "total_customers": total_customers,
        "total_debt": compute_debt(transactions, payments),
        "total_inventory": total_inventory,
        "low_stock_items": low_stock_items,
        "total_transactions": sum_field(transactions, "total"),
        "total_payments": sum_field(payments, "amount"),
        "top_debtors": get_debtors(db, settings.TOP_DEBTORS_LIMIT),
        "recent_transactions": get_recent_transactions(db, settings.RECENT_TRANSACTIONS_LIMIT)
    }
    logger.debug("summary built for %s customers and %s items", total_customers, total_inventory)
    return summary


def _monthly_series(rows, column: str) -> pd.Series:
    if not rows:
        return pd.Series(dtype=object, index=pd.PeriodIndex([], freq='M'))

    df = pd.DataFrame([(r.created_at, to_decimal(r[1])) for r in rows], columns=['created_at', column])
    df['created_at'] = pd.to_datetime(df['created_at'], utc=True)
    months = df['created_at'].dt.tz_localize(None).dt.to_period('M')
    return df.groupby(months)[column].agg(lambda s: sum(s, ZERO))

def get_monthly_breakdown(db: Session, start_date: Optional[datetime] = None, end_date: Optional[datetime] = None) -> List[dict]:
    transactions = db.query(Transaction.created_at, Transaction.total)
    payments = db.query(Payment.created_at, Payment.amount)

    if start_date:
        transactions = transactions.filter(Transaction.created_at >= start_date)
        payments = payments.filter(Payment.created_at >= start_date)
    if end_date:
        transactions = transactions.filter(Transaction.created_at <= end_date)
        payments = payments.filter(Payment.created_at <= end_date)

    sales = _monthly_series(transactions.all(), 'sales')
    paid = _monthly_series(payments.all(), 'payments')

    breakdown = []
    for period in sales.index.union(paid.index).sort_values():
        month_sales = sales.get(period, ZERO)
        month_payments = paid.get(period, ZERO)
        breakdown.append({
            "month": period.strftime("%b %Y"),
            "sales": month_sales,
            "payments": month_payments,
            "net": month_sales - month_payments
        })
    return breakdown
