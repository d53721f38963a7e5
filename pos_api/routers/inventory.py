# pos_api/routers/inventory.py

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from pos_api.database import get_db
from pos_api.core.auth import get_manager
from pos_api.core.exceptions import SaleError
from pos_api.services import inventory
from pos_api.schemas.inventory import RestockRequest, StockResponse

router = APIRouter(
    prefix="/inventory",
    tags=["Inventory"],
)


@router.post("/{product_id}/restock", response_model=StockResponse)
def restock_product(
    product_id: int,
    restock_data: RestockRequest,
    db: Session = Depends(get_db),
    manager=Depends(get_manager),
):
    try:
        quantity = inventory.restock(db, product_id, restock_data.quantity)
        db.commit()
    except SaleError:
        db.rollback()
        raise

    except SQLAlchemyError:
        db.rollback()
        raise HTTPException(status_code=500, detail="Unable to restock product")

    return {"product_id": product_id, "quantity": quantity}
