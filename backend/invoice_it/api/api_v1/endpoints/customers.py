"""
Customer management endpoints
"""

from fastapi import APIRouter, HTTPException, Depends, Query, status
from sqlalchemy.orm import Session
import logging

from invoice_it.api.deps import get_current_user
from invoice_it.core.database import get_db
from invoice_it.models.customer import Customer
from invoice_it.models.user import User
from invoice_it.schemas.customer import (
    CustomerCreate, CustomerList, CustomerResponse, CustomerUpdate
)

logger = logging.getLogger(__name__)

router = APIRouter()

def _get_owned_customer(db: Session, user: User, customer_id: int) -> Customer:
    customer = (
        db.query(Customer)
        .filter(Customer.id == customer_id, Customer.user_id == user.id)
        .first()
    )
    if not customer:
        raise HTTPException(status_code=404, detail="Customer not found")
    return customer

@router.get("/", response_model=CustomerList)
async def list_customers(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    One page of the logged-in account's customers
    """
    query = db.query(Customer).filter(Customer.user_id == current_user.id)
    total = query.count()
    customers = (
        query.order_by(Customer.id)
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )

    return {"customers": customers, "total": total, "page": page, "limit": limit}

@router.post("/", response_model=CustomerResponse, status_code=status.HTTP_201_CREATED)
async def create_customer(
    customer_in: CustomerCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        customer = Customer(user_id=current_user.id, **customer_in.model_dump())
        db.add(customer)
        db.commit()
        db.refresh(customer)
        return customer

    except Exception as e:
        db.rollback()
        logger.error(f"Customer creation error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Something went wrong")

@router.get("/{customer_id}", response_model=CustomerResponse)
async def get_customer(
    customer_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return _get_owned_customer(db, current_user, customer_id)

@router.put("/{customer_id}", response_model=CustomerResponse)
async def update_customer(
    customer_id: int,
    customer_in: CustomerUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Update the supplied fields of a customer
    """
    customer = _get_owned_customer(db, current_user, customer_id)

    try:
        customer.update_from_dict(customer_in.model_dump(exclude_unset=True))
        db.commit()
        db.refresh(customer)
        return customer

    except Exception as e:
        db.rollback()
        logger.error(f"Customer update error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Something went wrong")
