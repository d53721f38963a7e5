from pydantic import BaseModel, Field


class RestockRequest(BaseModel):
    quantity: int = Field(..., gt=0)

class StockResponse(BaseModel):
    product_id: int
    quantity: int
