"""Stock adjustments on the products table.

Every function here runs inside the caller's session and never commits.
"""

import logging

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from pos_api.core.exceptions import InsufficientStockError, NotFoundError, ValidationError
from pos_api.models.products import Product

logger = logging.getLogger(__name__)


def read_stock(db: Session, product_id: int) -> int:
    stock = db.execute(
        select(Product.quantity).where(Product.id == product_id)
    ).scalar_one_or_none()

    if stock is None:
        raise NotFoundError("product", product_id)

    return stock


def decrement_stock(db: Session, product_id: int, quantity: int) -> None:
    """Take ``quantity`` units off a product in one conditional statement.

    The ``quantity >= :q`` guard makes the check and the write a single
    step, so two sessions racing on the same row cannot both succeed.
    """
    result = db.execute(
        update(Product)
        .where(Product.id == product_id, Product.quantity >= quantity)
        .values(quantity=Product.quantity - quantity)
        .execution_options(synchronize_session=False)
    )

    if result.rowcount == 1:
        return

    available = read_stock(db, product_id)
    logger.warning(
        f"Stock decrement refused for product {product_id}: "
        f"requested {quantity}, available {available}"
    )
    raise InsufficientStockError(product_id, quantity, available)


def restock(db: Session, product_id: int, quantity: int) -> int:
    if quantity <= 0:
        raise ValidationError("Restock quantity must be greater than zero")

    result = db.execute(
        update(Product)
        .where(Product.id == product_id)
        .values(quantity=Product.quantity + quantity)
        .execution_options(synchronize_session=False)
    )

    if result.rowcount != 1:
        raise NotFoundError("product", product_id)

    return read_stock(db, product_id)
