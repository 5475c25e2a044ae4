from .customer import create_customer, get_customer, get_customer_by_slug, list_customers, get_customer_profile
from .inventory import create_inventory_item, get_inventory_item, get_inventory_items, update_inventory_item, delete_inventory_item, get_low_stock_items
from .ledger import record_sale, record_payment, get_customer_transactions, get_customer_payments, get_customer_debt
from .reports import get_summary, get_debtors, get_monthly_breakdown
