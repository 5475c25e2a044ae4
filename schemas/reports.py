from pydantic import BaseModel
from datetime import datetime
from decimal import Decimal
from typing import Optional, List

class Debtor(BaseModel):
    id: int
    name: str
    debt: Decimal

class RecentTransaction(BaseModel):
    id: int
    customer_name: str
    item_name: str
    quantity: int
    total: Decimal
    created_at: Optional[datetime] = None

class ReportSummary(BaseModel):
    total_customers: int
    total_debt: Decimal
    total_inventory: int
    low_stock_items: int
    total_transactions: Decimal
    total_payments: Decimal
    top_debtors: List[Debtor]
    recent_transactions: List[RecentTransaction]

class MonthlyBreakdown(BaseModel):
    month: str
    sales: Decimal
    payments: Decimal
    net: Decimal
