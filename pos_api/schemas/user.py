from pydantic import BaseModel, Field
from datetime import datetime

from pos_api.models.accounts import AccountRole

class AccountCreate(BaseModel):
    username: str = Field(..., min_length=1, description="Login name, unique per store")
    password: str = Field(..., min_length=1, max_length=128, description="Plain password (will be hashed)")
    role: AccountRole = AccountRole.CASHIER

class AccountResponse(BaseModel):
    id: int
    username: str
    role: AccountRole
    created_at: datetime

    class Config:
        from_attributes = True

class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
