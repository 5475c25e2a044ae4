"""
Sales and payments against a customer's account.

Both are append-only. A sale decrements stock with one conditional UPDATE
(``quantity = quantity - n WHERE quantity >= n``) inside the same unit of work
as the transaction insert, so concurrent sales can never drive stock below
zero and a failed decrement leaves no transaction behind.
"""
import logging
from decimal import Decimal, ROUND_HALF_UP
from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload
from typing import List
from crud import customer as customer_crud
from crud import inventory
from crud.errors import InsufficientStockError, NotFoundError
from models.customer import Customer
from models.inventory import InventoryItem
from models.ledger import Transaction, Payment
from schemas.ledger import TransactionCreate, PaymentCreate
from utils.ledger import compute_debt, debt_status, sum_field, to_decimal

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")


def _require_customer(db: Session, customer_id: int) -> Customer:
    db_customer = customer_crud.get_customer(db, customer_id)
    if db_customer is None:
        raise NotFoundError(f"Customer with ID {customer_id} not found")
    return db_customer

def line_total(price, quantity: int) -> Decimal:
    return (to_decimal(price) * quantity).quantize(CENTS, rounding=ROUND_HALF_UP)

def record_sale(db: Session, customer_id: int, sale: TransactionCreate) -> Transaction:
    _require_customer(db, customer_id)

    item = inventory.get_inventory_item(db, sale.item_id)
    if item is None:
        raise NotFoundError(f"Inventory item with ID {sale.item_id} not found")

    if sale.quantity > item.quantity:
        logger.info("sale rejected: %s of item %s requested, %s in stock", sale.quantity, item.id, item.quantity)
        raise InsufficientStockError(item.name, item.quantity, sale.quantity)

    item_id, item_name, price = item.id, item.name, to_decimal(item.price)
    try:
        result = db.execute(
            update(InventoryItem)
            .where(InventoryItem.id == item_id, InventoryItem.quantity >= sale.quantity)
            .values(quantity=InventoryItem.quantity - sale.quantity)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            # stock moved between the read above and this update
            db.rollback()
            available = db.query(InventoryItem.quantity).filter(InventoryItem.id == item_id).scalar() or 0
            logger.warning("sale rejected: stock of item %s changed to %s", item_id, available)
            raise InsufficientStockError(item_name, available, sale.quantity)

        db_transaction = Transaction(
            customer_id=customer_id,
            item_id=item_id,
            quantity=sale.quantity,
            price=price,
            total=line_total(price, sale.quantity)
        )
        db.add(db_transaction)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("failed to record sale of item %s for customer %s", item_id, customer_id)
        raise

    db.refresh(db_transaction)
    logger.info(
        "sale %s: customer %s took %s x item %s for %s",
        db_transaction.id, customer_id, sale.quantity, item_id, db_transaction.total
    )
    return db_transaction

def record_payment(db: Session, customer_id: int, payment: PaymentCreate) -> Payment:
    _require_customer(db, customer_id)

    db_payment = Payment(customer_id=customer_id, amount=to_decimal(payment.amount))
    try:
        db.add(db_payment)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("failed to record payment for customer %s", customer_id)
        raise

    db.refresh(db_payment)
    logger.info("payment %s: customer %s paid %s", db_payment.id, customer_id, db_payment.amount)
    return db_payment

def get_customer_transactions(db: Session, customer_id: int) -> List[Transaction]:
    _require_customer(db, customer_id)
    return db.query(Transaction).options(
        selectinload(Transaction.item)
    ).filter(
        Transaction.customer_id == customer_id
    ).order_by(Transaction.created_at.desc(), Transaction.id.desc()).all()

def get_customer_payments(db: Session, customer_id: int) -> List[Payment]:
    _require_customer(db, customer_id)
    return db.query(Payment).filter(
        Payment.customer_id == customer_id
    ).order_by(Payment.created_at.desc(), Payment.id.desc()).all()

def get_customer_debt(db: Session, customer_id: int) -> dict:
    _require_customer(db, customer_id)

    transactions = db.query(Transaction.total).filter(Transaction.customer_id == customer_id).all()
    payments = db.query(Payment.amount).filter(Payment.customer_id == customer_id).all()
    debt = compute_debt(transactions, payments)

    return {
        "customer_id": customer_id,
        "transactions_total": sum_field(transactions, "total"),
        "payments_total": sum_field(payments, "amount"),
        "debt": debt,
        "status": debt_status(debt),
    }
