import logging
import re
from decimal import Decimal
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload
from typing import List, Optional
from models.customer import Customer
from models.ledger import Transaction, Payment
from schemas.customer import CustomerCreate
from utils.ledger import compute_debt, debt_status, sum_field

logger = logging.getLogger(__name__)

SORT_OPTIONS = ("name", "debt_desc", "debt_asc", "recent")
SLUG_ATTEMPTS = 3


def slugify(name: str) -> str:
    slug = re.sub(r'[^a-z0-9]+', '-', name.strip().lower()).strip('-')
    return slug or "customer"

def _unique_slug(db: Session, name: str) -> str:
    base = slugify(name)
    slug = base
    suffix = 2
    while db.query(Customer.id).filter(Customer.slug == slug).first():
        slug = f"{base}-{suffix}"
        suffix += 1
    return slug

def create_customer(db: Session, customer: CustomerCreate) -> Customer:
    for attempt in range(SLUG_ATTEMPTS):
        slug = _unique_slug(db, customer.name)
        db_customer = Customer(name=customer.name, phone=customer.phone, slug=slug)
        db.add(db_customer)
        try:
            db.commit()
        except IntegrityError:
            # a concurrent create took the slug between the check and the insert
            db.rollback()
            if attempt == SLUG_ATTEMPTS - 1:
                logger.exception("could not find a free slug for customer %r", customer.name)
                raise
            logger.warning("slug %s was taken concurrently, retrying", slug)
            continue

        db.refresh(db_customer)
        logger.info("customer %s created as %s", db_customer.id, db_customer.slug)
        return db_customer

def get_customer(db: Session, customer_id: int) -> Optional[Customer]:
    return db.query(Customer).filter(Customer.id == customer_id).first()

def get_customer_by_slug(db: Session, slug: str) -> Optional[Customer]:
    customer = db.query(Customer).filter(Customer.slug == slug).first()
    if customer:
        return customer

    # customers created before slugs existed are matched on their name
    fallback_name = slug.replace('-', ' ')
    return db.query(Customer).filter(
        Customer.name.ilike(fallback_name)
    ).order_by(Customer.id).first()


def summarize(customer: Customer) -> dict:
    """Customer fields plus the ledger totals derived from its rows."""
    transactions_total = sum_field(customer.transactions, "total")
    payments_total = sum_field(customer.payments, "amount")
    debt = compute_debt(customer.transactions, customer.payments)
    return {
        "id": customer.id,
        "name": customer.name,
        "slug": customer.slug,
        "phone": customer.phone,
        "created_at": customer.created_at,
        "transactions_total": transactions_total,
        "payments_total": payments_total,
        "debt": debt,
        "status": debt_status(debt),
    }

def sort_summaries(summaries: List[dict], sort: str) -> List[dict]:
    if sort == "name":
        return sorted(summaries, key=lambda c: c["name"].lower())
    if sort == "debt_asc":
        return sorted(summaries, key=lambda c: c["debt"])
    if sort == "recent":
        return sorted(summaries, key=lambda c: (c["created_at"] is not None, c["created_at"], c["id"]), reverse=True)
    return sorted(summaries, key=lambda c: c["debt"], reverse=True)

def list_customers(db: Session, search: Optional[str] = None, sort: str = "debt_desc") -> dict:
    query = db.query(Customer).options(
        selectinload(Customer.transactions),
        selectinload(Customer.payments)
    )

    if search and search.strip():
        pattern = f'%{search.strip()}%'
        query = query.filter(or_(Customer.name.ilike(pattern), Customer.phone.ilike(pattern)))

    summaries = sort_summaries([summarize(c) for c in query.all()], sort)

    return {
        "customers": summaries,
        "total_customers": len(summaries),
        "total_outstanding": sum((c["debt"] for c in summaries), Decimal("0")),
    }

def get_customer_profile(db: Session, customer: Customer) -> dict:
    transactions = db.query(Transaction).options(
        selectinload(Transaction.item)
    ).filter(
        Transaction.customer_id == customer.id
    ).order_by(Transaction.created_at.desc(), Transaction.id.desc()).all()

    profile = summarize(customer)
    profile["transactions"] = transactions
    profile["payments"] = db.query(Payment).filter(
        Payment.customer_id == customer.id
    ).order_by(Payment.created_at.desc(), Payment.id.desc()).all()
    return profile
