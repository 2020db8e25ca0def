"""
Quotation endpoints: create, edit, list, detail and invoice delivery
"""

from fastapi import APIRouter, HTTPException, Depends, status
from sqlalchemy.orm import Session
from typing import List
import logging

from invoice_it.api.deps import get_current_user
from invoice_it.core.database import get_db
from invoice_it.models.user import User
from invoice_it.schemas.quotation import (
    QuotationCreate, QuotationDetail, QuotationResponse, QuotationSummary,
    QuotationUpdate, QuotationWithCustomer
)
from invoice_it.services import quotation_service
from invoice_it.services.invoice_mailer import InvoiceDeliveryError, send_invoice_email
from invoice_it.services.quotation_service import AmountLimitError, OwnershipError

logger = logging.getLogger(__name__)

router = APIRouter()

@router.post("/", response_model=QuotationResponse, status_code=status.HTTP_201_CREATED)
async def create_quotation(
    quotation_in: QuotationCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Create a quotation for one of the caller's customers

    Every product on the quotation must belong to the caller.
    """
    try:
        quotation = quotation_service.create_quotation(
            db, current_user.id, quotation_in.customer_id, quotation_in.items
        )
        db.commit()
        db.refresh(quotation)
        return quotation

    except OwnershipError as e:
        db.rollback()
        raise HTTPException(status_code=404, detail=str(e))
    except AmountLimitError as e:
        db.rollback()
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        db.rollback()
        logger.error(f"Quotation creation error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Something went wrong")

@router.put("/{quotation_id}", response_model=QuotationResponse)
async def update_quotation(
    quotation_id: int,
    quotation_in: QuotationUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Replace the item set of a quotation and recompute its total
    """
    try:
        quotation = quotation_service.replace_items(
            db,
            current_user.id,
            quotation_id,
            quotation_in.items,
            customer_id=quotation_in.customer_id,
        )
        db.commit()
        db.refresh(quotation)
        return quotation

    except OwnershipError as e:
        db.rollback()
        raise HTTPException(status_code=404, detail=str(e))
    except AmountLimitError as e:
        db.rollback()
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        db.rollback()
        logger.error(f"Quotation update error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Something went wrong")

@router.get("/", response_model=List[QuotationWithCustomer])
async def list_quotations(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    All quotations of the caller with items and customer
    """
    return quotation_service.list_quotations(db, current_user.id)

@router.get("/dashboard", response_model=List[QuotationSummary])
async def quotations_dashboard(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Compact rows for the dashboard table
    """
    return [
        QuotationSummary(
            id=q.id,
            created_at=q.created_at,
            grand_total=q.grand_total,
            customer=q.customer.name,
        )
        for q in quotation_service.list_quotations(db, current_user.id)
    ]

@router.get("/{quotation_id}", response_model=QuotationDetail)
async def get_quotation(
    quotation_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Quotation with both parties' contact details flattened in
    """
    try:
        q = quotation_service.get_owned_quotation(db, current_user.id, quotation_id)
    except OwnershipError as e:
        raise HTTPException(status_code=404, detail=str(e))

    return QuotationDetail(
        id=q.id,
        created_at=q.created_at,
        grand_total=q.grand_total,
        business_name=q.owner.business_name,
        user_address=q.owner.address,
        user_phone=q.owner.phone,
        user_email=q.owner.email,
        user_gstin=q.owner.gstin,
        customer_name=q.customer.name,
        customer_phone=q.customer.phone,
        customer_email=q.customer.email,
        customer_address=q.customer.address,
        items=q.items,
    )

@router.post("/{quotation_id}/send-invoice")
async def send_invoice(
    quotation_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Email the invoice for a quotation to its customer
    """
    try:
        quotation = quotation_service.get_owned_quotation(db, current_user.id, quotation_id)
    except OwnershipError:
        raise HTTPException(status_code=404, detail="No such quotation exists")

    try:
        result = await send_invoice_email(quotation)
    except InvoiceDeliveryError as e:
        logger.error(f"Invoice delivery failed for quotation {quotation_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to send invoice")

    return {"message": "Invoice sent successfully", "recipient": result.recipient}
