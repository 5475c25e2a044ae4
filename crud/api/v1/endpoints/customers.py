from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from typing import Optional
from database import get_db
from schemas.customer import Customer, CustomerCreate, CustomerList, CustomerProfile
from crud import customer

router = APIRouter()

@router.post("/", response_model=Customer, status_code=201)
def create_customer(data: CustomerCreate, db: Session = Depends(get_db)):
    return customer.create_customer(db, data)

@router.get("/", response_model=CustomerList)
def list_customers(
    search: Optional[str] = None,
    sort: str = Query("debt_desc", pattern="^(name|debt_desc|debt_asc|recent)$"),
    db: Session = Depends(get_db)
):
    """
    List customers with their current debt, filtered by name or phone
    """
    return customer.list_customers(db, search=search, sort=sort)

@router.get("/by-slug/{slug}", response_model=CustomerProfile)
def get_customer_by_slug(slug: str, db: Session = Depends(get_db)):
    db_customer = customer.get_customer_by_slug(db, slug)
    if db_customer is None:
        raise HTTPException(status_code=404, detail="Customer not found")
    return customer.get_customer_profile(db, db_customer)

@router.get("/{customer_id}", response_model=CustomerProfile)
def get_customer(customer_id: int, db: Session = Depends(get_db)):
    """
    Customer profile with sales and payment history and the debt derived from them
    """
    db_customer = customer.get_customer(db, customer_id)
    if db_customer is None:
        raise HTTPException(status_code=404, detail="Customer not found")
    return customer.get_customer_profile(db, db_customer)
