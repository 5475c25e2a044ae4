import logging
from sqlalchemy.orm import Session
from typing import List, Optional
from config import settings
from crud.errors import ItemInUseError
from models.inventory import InventoryItem
from models.ledger import Transaction
from schemas.inventory import InventoryItemCreate, InventoryItemUpdate

logger = logging.getLogger(__name__)

def create_inventory_item(db: Session, item: InventoryItemCreate) -> InventoryItem:
    db_item = InventoryItem(**item.model_dump())
    db.add(db_item)
    db.commit()
    db.refresh(db_item)
    logger.info("inventory item %s created with %s in stock", db_item.id, db_item.quantity)
    return db_item

def get_inventory_item(db: Session, item_id: int) -> Optional[InventoryItem]:
    return db.query(InventoryItem).filter(InventoryItem.id == item_id).first()

def get_inventory_items(db: Session, skip: int = 0, limit: int = 100, search: Optional[str]=None) -> List[InventoryItem]:
    query = db.query(InventoryItem)

    if search:
        query = query.filter(InventoryItem.name.ilike(f'%{search.strip()}%'))

    return query.order_by(InventoryItem.name, InventoryItem.id).offset(skip).limit(limit).all()

def get_low_stock_items(db: Session, threshold: Optional[int] = None) -> List[InventoryItem]:
    if threshold is None:
        threshold = settings.LOW_STOCK_THRESHOLD

    return db.query(InventoryItem).filter(
        InventoryItem.quantity <= threshold
    ).order_by(InventoryItem.quantity, InventoryItem.name).all()

def update_inventory_item(db: Session, item_id: int, item_update: InventoryItemUpdate) -> Optional[InventoryItem]:
    db_item = get_inventory_item(db, item_id)

    if db_item:
        update_data = item_update.model_dump(exclude_unset=True)
        for key, value in update_data.items():
            setattr(db_item, key, value)
        db.commit()
        db.refresh(db_item)
    return db_item

def delete_inventory_item(db: Session, item_id: int) -> bool:
    db_item = get_inventory_item(db, item_id)

    if not db_item:
        return False

    sales = db.query(Transaction).filter(Transaction.item_id == item_id).count()
    if sales > 0:
        raise ItemInUseError(f"Cannot delete {db_item.name}: it has {sales} recorded sales")

    db.delete(db_item)
    db.commit()
    logger.info("inventory item %s deleted", item_id)
    return True
