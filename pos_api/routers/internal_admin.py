from fastapi import APIRouter, HTTPException, Depends, status
from sqlalchemy.orm import Session

from pos_api.database import get_db
from pos_api.models.accounts import Account, AccountRole
from pos_api.schemas.user import AccountCreate, AccountResponse
from pos_api.core.config import settings
from pos_api.routers.auth import _create_account

router = APIRouter(prefix="/internal", tags=["Internal"])

@router.post(
    "/bootstrap-manager",
    response_model=AccountResponse,
    status_code=status.HTTP_201_CREATED,
)
def bootstrap_manager(
    account_data: AccountCreate,
    secret: str,
    db: Session = Depends(get_db),
):
    # Protect this route with a secret key
    if not settings.INTERNAL_ADMIN_SECRET or secret != settings.INTERNAL_ADMIN_SECRET:
        raise HTTPException(status_code=403, detail="Unauthorized")

    # Only the very first manager is created this way
    if db.query(Account).filter(Account.role == AccountRole.MANAGER).first():
        raise HTTPException(status_code=409, detail="A manager account already exists")

    return _create_account(db, account_data.model_copy(update={"role": AccountRole.MANAGER}))
