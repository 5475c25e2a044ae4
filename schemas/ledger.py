from pydantic import BaseModel, Field, condecimal
from datetime import datetime
from typing import Optional
from decimal import Decimal


class TransactionCreate(BaseModel):
    item_id: int
    quantity: int = Field(gt=0)

class Transaction(BaseModel):
    id: int
    customer_id: int
    item_id: int
    item_name: Optional[str] = None
    quantity: int
    price: Decimal
    total: Decimal
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class PaymentCreate(BaseModel):
    amount: condecimal(max_digits=15, decimal_places=2, gt=0)

class Payment(BaseModel):
    id: int
    customer_id: int
    amount: Decimal
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class DebtSummary(BaseModel):
    customer_id: int
    transactions_total: Decimal
    payments_total: Decimal
    debt: Decimal
    status: str
