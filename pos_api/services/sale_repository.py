# pos_api/services/sale_repository.py
#
# Writes run against the caller's session. Commit and rollback belong
# to the checkout coordinator.

from decimal import Decimal

from sqlalchemy import insert
from sqlalchemy.orm import Session, selectinload

from pos_api.models.sales import Sale
from pos_api.models.sale_items import SaleItem


def insert_sale_header(
    db: Session,
    total: Decimal,
    payment: Decimal,
    balance: Decimal,
    cashier_id: int | None = None,
) -> int:
    sale = Sale(
        total=total,
        payment=payment,
        balance=balance,
        cashier_id=cashier_id,
    )
    db.add(sale)
    db.flush()

    return sale.id


def insert_sale_items(db: Session, sale_id: int, lines) -> None:
    rows = [
        {
            "sale_id": sale_id,
            "product_id": line.product_id,
            "quantity": line.quantity,
            "price": line.unit_price,
            "line_total": line.line_total,
        }
        for line in lines
    ]

    # one executemany, cart order preserved
    db.execute(insert(SaleItem), rows)


def fetch_sale(db: Session, sale_id: int) -> Sale | None:
    return (
        db.query(Sale)
        .options(selectinload(Sale.items))
        .filter(Sale.id == sale_id)
        .populate_existing()
        .first()
    )


def list_sales(db: Session, limit: int = 20, offset: int = 0):
    return (
        db.query(Sale)
        .options(selectinload(Sale.items))
        .order_by(Sale.id.desc())
        .limit(limit)
        .offset(offset)
        .all()
    )
