class LedgerError(ValueError):
    """Base class for rejected ledger operations. Nothing is written when raised."""


class NotFoundError(LedgerError):
    pass


class InsufficientStockError(LedgerError):
    def __init__(self, item_name: str, available: int, requested: int):
        self.item_name = item_name
        self.available = available
        self.requested = requested
        super().__init__(f"Only {available} of {item_name} available in stock, {requested} requested")


class ItemInUseError(LedgerError):
    pass
