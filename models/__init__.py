from .customer import Customer
from .inventory import InventoryItem
from .ledger import Transaction, Payment
