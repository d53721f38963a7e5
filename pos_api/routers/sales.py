# =========================================================
# SALES ROUTER
#
# Cashiers and managers record sales. A sale either lands
# completely (header, items, stock decrements) or not at all.
# =========================================================

from fastapi import APIRouter, Depends, Query, status, Request
from sqlalchemy.orm import Session

from pos_api.database import get_db
from pos_api.core.auth import get_operator
from pos_api.core.config import settings
from pos_api.core.rate_limiter import limiter
from pos_api.models.accounts import Account
from pos_api.schemas.sale import SaleCreate, SaleResponse
from pos_api.services import catalog, checkout, sale_repository

router = APIRouter(prefix="/sales", tags=["Sales"])


# =========================================================
# CREATE SALE
# =========================================================
@router.post("", response_model=SaleResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(settings.SALES_RATE_LIMIT)
def create_sale(
    request: Request,
    sale_data: SaleCreate,
    db: Session = Depends(get_db),
    current_account: Account = Depends(get_operator),
):
    lines = []
    for item in sale_data.items:
        unit_price = item.unit_price
        if unit_price is None:
            unit_price = catalog.get_product(db, item.product_id).price

        lines.append(
            checkout.CartLine(
                product_id=item.product_id,
                quantity=item.quantity,
                unit_price=unit_price,
            )
        )

    sale_id = checkout.commit_sale(
        db,
        lines,
        payment_tendered=sale_data.payment,
        expected_total=sale_data.total,
        cashier_id=current_account.id,
    )

    return checkout.get_sale(db, sale_id)


# =========================================================
# LIST SALES
# =========================================================
@router.get("", response_model=list[SaleResponse])
def list_sales(
    db: Session = Depends(get_db),
    current_account=Depends(get_operator),
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
):
    return sale_repository.list_sales(db, limit=limit, offset=offset)


# =========================================================
# GET SINGLE SALE
# =========================================================
@router.get("/{sale_id}", response_model=SaleResponse)
def get_sale(
    sale_id: int,
    db: Session = Depends(get_db),
    current_account=Depends(get_operator),
):
    return checkout.get_sale(db, sale_id)
