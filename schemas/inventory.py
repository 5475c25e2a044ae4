from pydantic import BaseModel, Field, condecimal, field_validator
from typing import Optional
from datetime import datetime

class InventoryItemBase(BaseModel):
    name: str = Field(min_length=1)
    price: condecimal(max_digits=15, decimal_places=2, ge=0)
    cost: Optional[condecimal(max_digits=15, decimal_places=2, ge=0)] = None
    quantity: int = Field(0, ge=0)

    @field_validator('name')
    @classmethod
    def strip_name(cls, v):
        v = v.strip()
        if not v:
            raise ValueError('Name is required')
        return v

class InventoryItemCreate(InventoryItemBase):
    pass

class InventoryItemUpdate(BaseModel):
    name: Optional[str] = None
    price: Optional[condecimal(max_digits=15, decimal_places=2, ge=0)] = None
    cost: Optional[condecimal(max_digits=15, decimal_places=2, ge=0)] = None
    quantity: Optional[int] = Field(None, ge=0)

    # only cost may be cleared; the other fields are either sent or left out
    @field_validator('name', 'price', 'quantity')
    @classmethod
    def reject_null(cls, v, info):
        if v is None:
            raise ValueError(f'{info.field_name} cannot be null')
        return v

    @field_validator('name')
    @classmethod
    def strip_name(cls, v):
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError('Name is required')
        return v

class InventoryItem(InventoryItemBase):
    id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
