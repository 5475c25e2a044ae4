from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List
from database import get_db
from schemas.ledger import Transaction, TransactionCreate, Payment, PaymentCreate, DebtSummary
from crud import ledger
from crud.errors import InsufficientStockError, NotFoundError

router = APIRouter()

@router.post("/{customer_id}/transactions", response_model=Transaction, status_code=201)
def record_sale(customer_id: int, sale: TransactionCreate, db: Session = Depends(get_db)):
    try:
        return ledger.record_sale(db, customer_id, sale)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InsufficientStockError as e:
        raise HTTPException(status_code=400, detail=str(e))

@router.get("/{customer_id}/transactions", response_model=List[Transaction])
def list_customer_transactions(customer_id: int, db: Session = Depends(get_db)):
    try:
        return ledger.get_customer_transactions(db, customer_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

@router.post("/{customer_id}/payments", response_model=Payment, status_code=201)
def record_payment(customer_id: int, payment: PaymentCreate, db: Session = Depends(get_db)):
    try:
        return ledger.record_payment(db, customer_id, payment)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

@router.get("/{customer_id}/payments", response_model=List[Payment])
def list_customer_payments(customer_id: int, db: Session = Depends(get_db)):
    try:
        return ledger.get_customer_payments(db, customer_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

@router.get("/{customer_id}/debt", response_model=DebtSummary)
def get_customer_debt(customer_id: int, db: Session = Depends(get_db)):
    try:
        return ledger.get_customer_debt(db, customer_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
