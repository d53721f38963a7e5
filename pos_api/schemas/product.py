from decimal import Decimal
from typing import Annotated
from pydantic import BaseModel, Field, StringConstraints
from datetime import datetime


# Surrounding whitespace is dropped before the length check
ProductName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class ProductCreate(BaseModel):
    id: int = Field(..., gt=0, description="Store-assigned item id")
    name: ProductName
    category: str = ""
    quantity: int = Field(0, ge=0)

    price: Decimal = Field(
        ...,
        ge=0,
        lt=100_000_000,
        max_digits=10,
        decimal_places=2,
        description="Unit price must be below 100 million"
    )


class ProductUpdate(BaseModel):
    name: ProductName | None = None
    category: str | None = None
    quantity: int | None = Field(None, ge=0)
    price: Decimal | None = Field(None, ge=0, lt=100_000_000, max_digits=10, decimal_places=2)

class ProductResponse(BaseModel):
    id: int
    name: str
    category: str
    quantity: int
    price: Decimal
    created_at: datetime

    class Config:
        from_attributes = True
