# schemas/sale.py

from pydantic import BaseModel, Field
from datetime import datetime
from typing import List
from decimal import Decimal

class SaleItemCreate(BaseModel):
    product_id: int
    quantity: int
    # Falls back to the current catalog price when omitted
    unit_price: Decimal | None = Field(None, ge=0, lt=100_000_000, max_digits=10, decimal_places=2)

class SaleCreate(BaseModel):
    items: List[SaleItemCreate]
    payment: Decimal = Field(..., ge=0, lt=100_000_000, max_digits=10, decimal_places=2)
    total: Decimal | None = Field(
        None,
        ge=0,
        lt=100_000_000,
        max_digits=10,
        decimal_places=2,
        description="Optional client-side total; rejected if it differs from the line sum",
    )

class SaleItemResponse(BaseModel):
    product_id: int
    quantity: int
    price: Decimal
    line_total: Decimal

    class Config:
        from_attributes = True

class SaleResponse(BaseModel):
    id: int
    total: Decimal
    payment: Decimal
    balance: Decimal
    cashier_id: int | None
    created_at: datetime
    items: List[SaleItemResponse]

    class Config:
        from_attributes = True
