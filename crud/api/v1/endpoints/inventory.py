from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from typing import List, Optional
from database import get_db
from schemas.inventory import InventoryItem, InventoryItemCreate, InventoryItemUpdate
from crud import inventory
from crud.errors import ItemInUseError

router = APIRouter()

@router.post("/", response_model=InventoryItem, status_code=201)
def create_inventory_item(item: InventoryItemCreate, db: Session = Depends(get_db)):
    return inventory.create_inventory_item(db, item)

@router.get("/", response_model=List[InventoryItem])
def list_inventory_items(skip: int = 0, limit: int = Query(100, ge=1, le=500), search: Optional[str] = None, db: Session = Depends(get_db)):
    return inventory.get_inventory_items(db, skip, limit, search)

@router.get("/low-stock", response_model=List[InventoryItem])
def list_low_stock_items(threshold: Optional[int] = Query(None, ge=0), db: Session = Depends(get_db)):
    return inventory.get_low_stock_items(db, threshold)

@router.get("/{item_id}", response_model=InventoryItem)
def get_inventory_item(item_id: int, db: Session = Depends(get_db)):
    db_item = inventory.get_inventory_item(db, item_id)
    if db_item is None:
        raise HTTPException(status_code=404, detail="Inventory item is not found")
    return db_item

@router.put("/{item_id}", response_model=InventoryItem)
def update_inventory_item(item_id: int, item_update: InventoryItemUpdate, db: Session = Depends(get_db)):
    db_item = inventory.update_inventory_item(db, item_id, item_update)
    if db_item is None:
        raise HTTPException(status_code=404, detail="Inventory item is not found")
    return db_item

@router.delete("/{item_id}")
def delete_inventory_item(item_id: int, db: Session = Depends(get_db)):
    try:
        success = inventory.delete_inventory_item(db, item_id)
    except ItemInUseError as e:
        raise HTTPException(status_code=409, detail=str(e))
    if not success:
        raise HTTPException(status_code=404, detail="Inventory item is not found")
    return {"status": "success"}
