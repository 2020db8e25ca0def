"""
Quotation bookkeeping: tenant ownership checks, line snapshots and totals
"""

import logging
from typing import Dict, List, Optional, Sequence

from sqlalchemy.orm import Session, selectinload

from invoice_it.models.customer import Customer
from invoice_it.models.product import Product
from invoice_it.models.quotation import MAX_AMOUNT, Quotation, QuotationItem
from invoice_it.schemas.quotation import QuotationItemIn

logger = logging.getLogger(__name__)


class OwnershipError(Exception):
    """A referenced record is missing or belongs to another account"""
    pass


class AmountLimitError(Exception):
    """A quotation total does not fit the stored money columns"""
    pass


def get_owned_customer(db: Session, user_id: int, customer_id: int) -> Customer:
    customer = (
        db.query(Customer)
        .filter(Customer.id == customer_id, Customer.user_id == user_id)
        .first()
    )
    if not customer:
        raise OwnershipError("Customer not found or does not belong to you")
    return customer


def get_owned_quotation(db: Session, user_id: int, quotation_id: int) -> Quotation:
    quotation = (
        db.query(Quotation)
        .options(
            selectinload(Quotation.items),
            selectinload(Quotation.customer),
            selectinload(Quotation.owner),
        )
        .filter(Quotation.id == quotation_id, Quotation.user_id == user_id)
        .first()
    )
    if not quotation:
        raise OwnershipError("Quotation not found or does not belong to you")
    return quotation


def list_quotations(db: Session, user_id: int) -> List[Quotation]:
    return (
        db.query(Quotation)
        .options(selectinload(Quotation.items), selectinload(Quotation.customer))
        .filter(Quotation.user_id == user_id)
        .order_by(Quotation.id)
        .all()
    )


def _owned_products(db: Session, user_id: int, product_ids: Sequence[int]) -> Dict[int, Product]:
    """
    Load the requested products, all of which must belong to user_id.
    The same product may appear on several lines.
    """
    wanted = set(product_ids)
    products = (
        db.query(Product)
        .filter(Product.id.in_(wanted), Product.user_id == user_id)
        .all()
    )
    if len(products) != len(wanted):
        raise OwnershipError("Some products not found or do not belong to you")
    return {product.id: product for product in products}


def build_items(db: Session, user_id: int, lines: Sequence[QuotationItemIn]) -> List[QuotationItem]:
    """
    Turn requested lines into QuotationItem snapshots.

    Raises:
        OwnershipError: a product is missing or owned by another account
    """
    products = _owned_products(db, user_id, [line.product_id for line in lines])

    items = []
    for line in lines:
        product = products[line.product_id]
        items.append(QuotationItem.snapshot(
            product_id=product.id,
            product_name=line.product_name or product.title,
            quantity=line.quantity,
            price=line.price if line.price is not None else product.price,
        ))
    return items


def _check_total(quotation: Quotation) -> None:
    # amounts are non-negative, so the grand total bounds every line
    if quotation.grand_total > MAX_AMOUNT:
        raise AmountLimitError(f"Quotation total exceeds {MAX_AMOUNT}")


def create_quotation(
    db: Session,
    user_id: int,
    customer_id: int,
    lines: Sequence[QuotationItemIn],
) -> Quotation:
    """
    Create a quotation for one of the user's customers.
    The caller commits.
    """
    customer = get_owned_customer(db, user_id, customer_id)
    items = build_items(db, user_id, lines)

    quotation = Quotation(user_id=user_id, customer=customer, items=items)
    quotation.recalculate_total()
    _check_total(quotation)
    db.add(quotation)
    db.flush()

    logger.info(
        f"Quotation {quotation.id} created for customer {customer.id} "
        f"({len(items)} lines, total {quotation.grand_total})"
    )
    return quotation


def replace_items(
    db: Session,
    user_id: int,
    quotation_id: int,
    lines: Sequence[QuotationItemIn],
    customer_id: Optional[int] = None,
) -> Quotation:
    """
    Replace the whole item set of an existing quotation and recompute its total.
    The caller commits.
    """
    quotation = get_owned_quotation(db, user_id, quotation_id)
    if customer_id is not None and customer_id != quotation.customer_id:
        quotation.customer = get_owned_customer(db, user_id, customer_id)

    items = build_items(db, user_id, lines)

    # delete-orphan cascade removes the previous lines on flush
    quotation.items = items
    quotation.recalculate_total()
    _check_total(quotation)
    db.flush()

    logger.info(
        f"Quotation {quotation.id} items replaced "
        f"({len(items)} lines, total {quotation.grand_total})"
    )
    return quotation
