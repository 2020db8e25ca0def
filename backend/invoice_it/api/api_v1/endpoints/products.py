"""
Product management endpoints
"""

from fastapi import APIRouter, HTTPException, Depends, status
from sqlalchemy.orm import Session
from typing import List
import logging

from invoice_it.api.deps import get_current_user
from invoice_it.core.database import get_db
from invoice_it.models.product import Product
from invoice_it.models.user import User
from invoice_it.schemas.product import ProductCreate, ProductResponse, ProductUpdate

logger = logging.getLogger(__name__)

router = APIRouter()

def _get_owned_product(db: Session, user: User, product_id: int) -> Product:
    product = (
        db.query(Product)
        .filter(Product.id == product_id, Product.user_id == user.id)
        .first()
    )
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product

@router.get("/", response_model=List[ProductResponse])
async def list_products(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    All products of the logged-in account
    """
    return (
        db.query(Product)
        .filter(Product.user_id == current_user.id)
        .order_by(Product.id)
        .all()
    )

@router.post("/", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
async def create_product(
    product_in: ProductCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Add a product to the logged-in account's catalogue
    """
    try:
        product = Product(user_id=current_user.id, **product_in.model_dump())
        db.add(product)
        db.commit()
        db.refresh(product)
        return product

    except Exception as e:
        db.rollback()
        logger.error(f"Product creation error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Something went wrong")

@router.get("/{product_id}", response_model=ProductResponse)
async def get_product(
    product_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return _get_owned_product(db, current_user, product_id)

@router.put("/{product_id}", response_model=ProductResponse)
async def update_product(
    product_id: int,
    product_in: ProductUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Update the supplied fields of a product
    """
    product = _get_owned_product(db, current_user, product_id)

    try:
        product.update_from_dict(product_in.model_dump(exclude_unset=True))
        db.commit()
        db.refresh(product)
        return product

    except Exception as e:
        db.rollback()
        logger.error(f"Product update error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Something went wrong")
