from pydantic import BaseModel, Field, field_validator
from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from schemas.ledger import Transaction, Payment


class CustomerCreate(BaseModel):
    name: str = Field(min_length=1)
    phone: Optional[str] = None

    @field_validator('name')
    @classmethod
    def strip_name(cls, v):
        v = v.strip()
        if not v:
            raise ValueError('Name is required')
        return v

    @field_validator('phone')
    @classmethod
    def blank_phone_is_none(cls, v):
        if v is None:
            return None
        return v.strip() or None

class Customer(BaseModel):
    id: int
    name: str
    slug: str
    phone: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class CustomerSummary(Customer):
    transactions_total: Decimal
    payments_total: Decimal
    debt: Decimal
    status: str

class CustomerList(BaseModel):
    customers: List[CustomerSummary]
    total_customers: int
    total_outstanding: Decimal

class CustomerProfile(CustomerSummary):
    transactions: List[Transaction]
    payments: List[Payment]
