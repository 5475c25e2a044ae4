from .inventory import InventoryItem, InventoryItemCreate, InventoryItemUpdate
from .ledger import Transaction, TransactionCreate, Payment, PaymentCreate, DebtSummary
from .customer import Customer, CustomerCreate, CustomerSummary, CustomerList, CustomerProfile
from .reports import ReportSummary, Debtor, RecentTransaction, MonthlyBreakdown
